import os
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SOURCE_LOCALE = os.getenv("DEFAULT_SOURCE_LOCALE", "en")


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    locale: str
    message: str


class MessageCreate(BaseModel):
    key: str
    locale: str
    message: str = Field(min_length=1)


class MessageUpdate(BaseModel):
    message: str = Field(min_length=1)


class BulkEntry(BaseModel):
    key: str
    message: str = Field(min_length=1)


class BulkImportRequest(BaseModel):
    locale: str
    messages: List[BulkEntry]
    overwrite_existing: bool = True


class BulkImportResult(BaseModel):
    success_count: int
    inserted: int
    updated: int
    skipped: int


class DeleteByKeyResult(BaseModel):
    success: bool
    deleted_key_count: int
    deleted_translation_count: int
    message: Optional[str] = None


class LanguageIn(BaseModel):
    code: str
    name: str


class LanguageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str


class KeyCoverageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    locales: List[str]
    locale_count: int


class MissingKeysReport(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    locale: str
    missing_keys: List[str]
    missing_count: int
    total_keys: int
    complete_keys: int
    completeness: str
    all_locales: List[str]
    key_completeness: List[KeyCoverageOut]


class LocaleStatsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    locale: str
    count: int
    total: int
    missing: int
    percentage: float


class AutoTranslateRequest(BaseModel):
    key: str
    text: str = Field(min_length=1)
    source_locale: str = DEFAULT_SOURCE_LOCALE
    target_locales: Optional[List[str]] = None


class LocaleFailureOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    locale: str
    error: str


class AutoTranslateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    source_locale: str
    translated: List[str]
    failed: List[LocaleFailureOut]
    summary: str


class TranslateRequest(BaseModel):
    text: str = Field(min_length=1)
    target: str
    source: str = DEFAULT_SOURCE_LOCALE


class TranslateOut(BaseModel):
    translated_text: str

