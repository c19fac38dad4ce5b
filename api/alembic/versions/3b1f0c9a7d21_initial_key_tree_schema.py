"""initial key tree schema: languages, translation_keys, translations

Revision ID: 3b1f0c9a7d21
Revises:
Create Date: 2026-09-28 10:14:02.318554

"""
from alembic import op  # noqa: F401
import sqlalchemy as sa  # noqa: F401
import sqlmodel # noqa: F401


# revision identifiers, used by Alembic.
revision = '3b1f0c9a7d21'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'languages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_languages_code'), 'languages', ['code'], unique=True)

    op.create_table(
        'translation_keys',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('parent_id', sa.Integer(), nullable=True),
        sa.Column('key', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['parent_id'], ['translation_keys.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('parent_id', 'key', name='uq_translation_keys_parent_key'),
    )
    op.create_index(op.f('ix_translation_keys_parent_id'), 'translation_keys', ['parent_id'], unique=False)
    op.create_index(op.f('ix_translation_keys_key'), 'translation_keys', ['key'], unique=False)
    # NULL parent_id never collides in the unique constraint above
    op.create_index(
        'uq_translation_keys_root_key',
        'translation_keys',
        ['key'],
        unique=True,
        postgresql_where=sa.text('parent_id IS NULL'),
    )

    op.create_table(
        'translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key_id', sa.Integer(), nullable=False),
        sa.Column('language_code', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['key_id'], ['translation_keys.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['language_code'], ['languages.code']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key_id', 'language_code', name='uq_translation_key_lang'),
    )
    op.create_index(op.f('ix_translations_key_id'), 'translations', ['key_id'], unique=False)
    op.create_index(op.f('ix_translations_language_code'), 'translations', ['language_code'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_translations_language_code'), table_name='translations')
    op.drop_index(op.f('ix_translations_key_id'), table_name='translations')
    op.drop_table('translations')
    op.drop_index('uq_translation_keys_root_key', table_name='translation_keys')
    op.drop_index(op.f('ix_translation_keys_key'), table_name='translation_keys')
    op.drop_index(op.f('ix_translation_keys_parent_id'), table_name='translation_keys')
    op.drop_table('translation_keys')
    op.drop_index(op.f('ix_languages_code'), table_name='languages')
    op.drop_table('languages')
