from typing import Optional

from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Field

from .base import BaseModel


class MaterializedKey(BaseModel, table=True):
    """Key node storing its full dotted path directly."""

    __tablename__ = "materialized_keys"

    id: Optional[int] = Field(default=None, primary_key=True)
    key_path: str = Field(unique=True, index=True, max_length=1024)
    namespace_id: Optional[int] = Field(default=None, index=True)
    description: Optional[str] = Field(default=None, sa_type=Text)


class MaterializedTranslation(BaseModel, table=True):
    """Translation value attached to a materialized key."""

    __tablename__ = "materialized_translations"
    __table_args__ = (
        UniqueConstraint("key_id", "language_code", name="uq_materialized_translation_lang"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    key_id: int = Field(foreign_key="materialized_keys.id", ondelete="CASCADE", index=True)
    language_code: str = Field(foreign_key="languages.code", index=True, max_length=32)
    value: str = Field(sa_type=Text)
