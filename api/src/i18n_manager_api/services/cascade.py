import logging
from dataclasses import dataclass
from typing import Optional

from i18n_manager_api.store import TranslationStore
from .key_paths import split_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteResult:
    success: bool
    deleted_key_count: int = 0
    deleted_translation_count: int = 0
    message: Optional[str] = None


def delete_key_and_descendants(store: TranslationStore, path: str) -> DeleteResult:
    """Delete a key path, its whole subtree and every value under it.

    Ancestors and their other children are left alone. An absent path is
    reported with ``success=False`` rather than raised.
    """
    with store.transaction():
        key_ids = store.subtree_ids(split_path(path))
        if not key_ids:
            logger.info("Key not found for delete", extra={"key": path})
            return DeleteResult(success=False, message="Key not found")

        # Values first so no translation ever points at a deleted key
        deleted_translations = store.delete_translations_for_keys(key_ids)
        deleted_keys = store.delete_keys(key_ids)

    logger.info(
        "Key deleted",
        extra={"key": path, "deleted_keys": deleted_keys, "deleted_translations": deleted_translations},
    )
    return DeleteResult(
        success=True,
        deleted_key_count=deleted_keys,
        deleted_translation_count=deleted_translations,
    )
