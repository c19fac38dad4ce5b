import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from i18n_manager_api.errors import DuplicateTranslation, InvalidImportPayload, KeyConflictError
from i18n_manager_api.store import TranslationStore
from .key_paths import check_leaf_prefix_conflict, normalize_locale, resolve_or_create, split_path
from .tree import find_prefix_conflict, flatten

logger = logging.getLogger(__name__)


@dataclass
class BulkResult:
    inserted: int = 0
    updated: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.inserted + self.updated + self.skipped


def _latest_values(entries: Iterable[Tuple[str, Any]]) -> Dict[str, str]:
    latest: Dict[str, str] = {}
    for path, value in entries:
        split_path(path)
        if not isinstance(value, str):
            raise InvalidImportPayload(f"Value for {path!r} must be a string")
        if not value:
            raise InvalidImportPayload(f"Value for {path!r} must not be empty")
        # Repeated paths: last one wins
        latest[path] = value
    return latest


def _reload(store: TranslationStore, key_id: int, locale: str):
    rows = store.translations_for_keys([key_id], locale=locale)
    if not rows:
        raise DuplicateTranslation(store.full_path(key_id), locale)
    return rows[0]


def bulk_upsert(
    store: TranslationStore,
    locale: str,
    entries: Iterable[Tuple[str, Any]],
    overwrite_existing: bool,
) -> BulkResult:
    """Write many values for one locale in a single transaction.

    Existing (key, locale) values are replaced only when
    ``overwrite_existing`` is set; otherwise they are counted as skipped.
    Validation of the whole batch happens before anything is written.
    """
    locale = normalize_locale(locale)
    latest = _latest_values(entries)
    result = BulkResult()
    if not latest:
        return result

    conflict = find_prefix_conflict(latest)
    if conflict is not None:
        raise KeyConflictError(*conflict)

    with store.transaction():
        store.ensure_language(locale)
        for path, value in latest.items():
            check_leaf_prefix_conflict(store, path)
            key_id = resolve_or_create(store, path)
            existing = store.find_translation(key_id, locale)
            if existing is None:
                try:
                    store.insert_translation(key_id, locale, value)
                except DuplicateTranslation:
                    # Written by another session since the lookup
                    existing = _reload(store, key_id, locale)
                    logger.info("Bulk import insert lost a race", extra={"key": path, "locale": locale})
                else:
                    result.inserted += 1
                    continue
            if overwrite_existing and existing.value != value:
                store.update_translation(existing, value)
                result.updated += 1
            else:
                result.skipped += 1

    logger.info(
        "Bulk import finished",
        extra={
            "locale": locale,
            "inserted": result.inserted,
            "updated": result.updated,
            "skipped": result.skipped,
            "overwrite_existing": overwrite_existing,
        },
    )
    return result


def import_tree(
    store: TranslationStore,
    locale: str,
    tree: Dict[str, Any],
    overwrite_existing: bool,
) -> BulkResult:
    """Flatten a nested JSON document and bulk-upsert it."""
    return bulk_upsert(store, locale, flatten(tree), overwrite_existing)
