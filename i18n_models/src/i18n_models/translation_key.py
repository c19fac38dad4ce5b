from typing import Optional

from sqlalchemy import Index, Text, UniqueConstraint, text
from sqlmodel import Field

from .base import BaseModel


class TranslationKey(BaseModel, table=True):
    """One segment of a dotted key path, linked to its parent segment.

    Siblings are unique per (parent_id, key). Root segments have no parent,
    and since NULLs never collide in a unique constraint, a partial unique
    index covers them separately.
    """

    __tablename__ = "translation_keys"
    __table_args__ = (
        UniqueConstraint("parent_id", "key", name="uq_translation_keys_parent_key"),
        Index(
            "uq_translation_keys_root_key",
            "key",
            unique=True,
            postgresql_where=text("parent_id IS NULL"),
            sqlite_where=text("parent_id IS NULL"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    parent_id: Optional[int] = Field(
        default=None,
        foreign_key="translation_keys.id",
        ondelete="CASCADE",
        index=True,
    )
    key: str = Field(index=True, max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
