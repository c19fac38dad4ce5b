from typing import Optional

from sqlmodel import Field

from .base import BaseModel


class Language(BaseModel, table=True):
    """Target language; `code` is stored lower-case."""

    __tablename__ = "languages"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(unique=True, index=True, max_length=32)
    name: str = Field(max_length=255)
