import logging
from typing import Any, Dict, List, Optional

from i18n_models import Language

from i18n_manager_api.errors import DuplicateTranslation, MessageNotFound, ValidationError
from i18n_manager_api.store import MessageRecord, TranslationStore
from .completeness import CompletenessCalculator, CompletenessReport, LocaleStats, Triple
from .key_paths import (
    check_leaf_prefix_conflict,
    normalize_locale,
    resolve_existing,
    resolve_or_create,
    split_path,
)
from .tree import unflatten

logger = logging.getLogger(__name__)


def _sorted(records: List[MessageRecord]) -> List[MessageRecord]:
    return sorted(records, key=lambda r: (r.key, r.locale))


def list_messages(
    store: TranslationStore,
    key: Optional[str] = None,
    locale: Optional[str] = None,
) -> List[MessageRecord]:
    if locale is not None:
        locale = normalize_locale(locale)
    if key is None:
        return _sorted(store.message_records(locale=locale))

    key_id = resolve_existing(store, key)
    if key_id is None:
        return []
    rows = store.translations_for_keys([key_id], locale=locale)
    return _sorted(
        [MessageRecord(id=r.id, key_id=r.key_id, key=key, locale=r.language_code, message=r.value) for r in rows]
    )


def get_message(store: TranslationStore, message_id: int) -> MessageRecord:
    records = store.message_records(translation_ids=[message_id])
    if not records:
        raise MessageNotFound(message_id)
    return records[0]


def create_message(store: TranslationStore, key: str, locale: str, message: str) -> MessageRecord:
    """Create one value; an existing (key, locale) pair is a conflict."""
    split_path(key)
    locale = normalize_locale(locale)
    if not message:
        raise ValidationError("Message must not be empty")

    with store.transaction():
        check_leaf_prefix_conflict(store, key)
        key_id = resolve_or_create(store, key)
        store.ensure_language(locale)
        if store.find_translation(key_id, locale) is not None:
            raise DuplicateTranslation(key, locale)
        row = store.insert_translation(key_id, locale, message)
        record = MessageRecord(id=row.id, key_id=key_id, key=key, locale=locale, message=message)

    logger.info("Message created", extra={"message_id": record.id, "key": key, "locale": locale})
    return record


def update_message(store: TranslationStore, message_id: int, message: str) -> MessageRecord:
    if not message:
        raise ValidationError("Message must not be empty")
    with store.transaction():
        row = store.get_translation(message_id)
        if row is None:
            logger.warning("Message not found for update", extra={"message_id": message_id})
            raise MessageNotFound(message_id)
        store.update_translation(row, message)
        record = MessageRecord(
            id=row.id,
            key_id=row.key_id,
            key=store.full_path(row.key_id),
            locale=row.language_code,
            message=row.value,
        )
    logger.info("Message updated", extra={"message_id": message_id})
    return record


def delete_message(store: TranslationStore, message_id: int) -> None:
    with store.transaction():
        row = store.get_translation(message_id)
        if row is None:
            logger.warning("Message not found for delete", extra={"message_id": message_id})
            raise MessageNotFound(message_id)
        store.delete_translation(row)
    logger.info("Message deleted", extra={"message_id": message_id})


def export_locale(store: TranslationStore, locale: str) -> Dict[str, Any]:
    """Nested JSON tree of every value in one locale."""
    locale = normalize_locale(locale)
    records = store.message_records(locale=locale)
    return unflatten((r.key, r.message) for r in records)


def export_all(store: TranslationStore) -> Dict[str, Dict[str, Any]]:
    """Nested JSON trees grouped by locale."""
    grouped: Dict[str, List[MessageRecord]] = {}
    for record in store.message_records():
        grouped.setdefault(record.locale, []).append(record)
    return {
        locale: unflatten((r.key, r.message) for r in records)
        for locale, records in sorted(grouped.items())
    }


def _calculator(store: TranslationStore) -> CompletenessCalculator:
    return CompletenessCalculator(Triple(r.key, r.locale, r.message) for r in store.message_records())


def missing_keys_report(store: TranslationStore, locale: str) -> CompletenessReport:
    locale = normalize_locale(locale)
    known = [language.code for language in store.list_languages()]
    report = _calculator(store).report(locale, known_locales=known)
    logger.info(
        "Completeness computed",
        extra={"locale": locale, "missing": report.missing_count, "total": report.total_keys},
    )
    return report


def locale_stats(store: TranslationStore) -> List[LocaleStats]:
    known = [language.code for language in store.list_languages()]
    return _calculator(store).locale_stats(known_locales=known)


def list_languages(store: TranslationStore) -> List[Language]:
    return store.list_languages()


def add_language(store: TranslationStore, code: str, name: str) -> Language:
    code = normalize_locale(code)
    name = (name or "").strip()
    if not name:
        raise ValidationError("Language name must not be empty")
    with store.transaction():
        language = store.add_language(code, name)
        created = Language(id=language.id, code=language.code, name=language.name)
    logger.info("Language created", extra={"language_code": code})
    return created


def all_keys(store: TranslationStore) -> List[str]:
    return store.all_key_paths()
