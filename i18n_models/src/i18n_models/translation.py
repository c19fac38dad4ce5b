from typing import Optional

from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Field

from .base import BaseModel


class Translation(BaseModel, table=True):
    """Localized value for a key node.

    Uniqueness is enforced per (key_id, language_code).
    """

    __tablename__ = "translations"
    __table_args__ = (
        UniqueConstraint("key_id", "language_code", name="uq_translation_key_lang"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    key_id: int = Field(foreign_key="translation_keys.id", ondelete="CASCADE", index=True)
    language_code: str = Field(foreign_key="languages.code", index=True, max_length=32)
    value: str = Field(sa_type=Text)
