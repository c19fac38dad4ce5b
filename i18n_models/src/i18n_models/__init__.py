"""Shared SQLModel models package.

Tables for languages, key nodes (adjacency-list and materialized-path
variants) and translation values.
"""

from .base import BaseModel
from .language import Language
from .materialized_key import MaterializedKey, MaterializedTranslation
from .translation import Translation
from .translation_key import TranslationKey

__all__ = [
    "BaseModel",
    "Language",
    "TranslationKey",
    "Translation",
    "MaterializedKey",
    "MaterializedTranslation",
]
