"""materialized path variant: materialized_keys, materialized_translations

Revision ID: a7c24e58f0b3
Revises: 3b1f0c9a7d21
Create Date: 2026-10-02 16:41:37.902115

"""
from alembic import op  # noqa: F401
import sqlalchemy as sa  # noqa: F401
import sqlmodel # noqa: F401


# revision identifiers, used by Alembic.
revision = 'a7c24e58f0b3'
down_revision = '3b1f0c9a7d21'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'materialized_keys',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key_path', sqlmodel.sql.sqltypes.AutoString(length=1024), nullable=False),
        sa.Column('namespace_id', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_materialized_keys_key_path'), 'materialized_keys', ['key_path'], unique=True)
    op.create_index(op.f('ix_materialized_keys_namespace_id'), 'materialized_keys', ['namespace_id'], unique=False)
    # Prefix scans for subtree lookups (LIKE 'a.b.%')
    op.execute(
        "CREATE INDEX IF NOT EXISTS ix_materialized_keys_key_path_pattern "
        "ON materialized_keys (key_path varchar_pattern_ops)"
    )

    op.create_table(
        'materialized_translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key_id', sa.Integer(), nullable=False),
        sa.Column('language_code', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['key_id'], ['materialized_keys.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['language_code'], ['languages.code']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key_id', 'language_code', name='uq_materialized_translation_lang'),
    )
    op.create_index(op.f('ix_materialized_translations_key_id'), 'materialized_translations', ['key_id'], unique=False)
    op.create_index(
        op.f('ix_materialized_translations_language_code'),
        'materialized_translations',
        ['language_code'],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f('ix_materialized_translations_language_code'), table_name='materialized_translations')
    op.drop_index(op.f('ix_materialized_translations_key_id'), table_name='materialized_translations')
    op.drop_table('materialized_translations')
    op.execute("DROP INDEX IF EXISTS ix_materialized_keys_key_path_pattern")
    op.drop_index(op.f('ix_materialized_keys_namespace_id'), table_name='materialized_keys')
    op.drop_index(op.f('ix_materialized_keys_key_path'), table_name='materialized_keys')
    op.drop_table('materialized_keys')
