"""Key path resolver.

Converts between dotted key paths and key node ids on top of whichever
store schema is active. Also owns path/locale validation and the
leaf-versus-prefix write policy.
"""

import logging
import re
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt

from i18n_manager_api.errors import InvalidLanguageCode, KeyConflictError, PathResolutionError
from i18n_manager_api.store import TranslationStore

logger = logging.getLogger(__name__)

_LOCALE_RE = re.compile(r"^[a-z]{2,3}(-[a-z0-9]{2,8})*$")


def split_path(path: str) -> List[str]:
    """Split a dotted path, rejecting empty segments."""
    if not isinstance(path, str):
        raise PathResolutionError(str(path))
    segments = path.split(".")
    if any(not segment.strip() for segment in segments):
        raise PathResolutionError(path)
    return segments


def normalize_locale(code: str) -> str:
    """Canonical form: trimmed, lower-case, ``_`` replaced by ``-``."""
    if not isinstance(code, str):
        raise InvalidLanguageCode(str(code))
    value = code.strip().lower().replace("_", "-")
    if not _LOCALE_RE.match(value):
        raise InvalidLanguageCode(code)
    return value


@retry(
    retry=retry_if_exception_type(IntegrityError),
    stop=stop_after_attempt(2),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
def _resolve_or_create(store: TranslationStore, segments: List[str]) -> int:
    # A concurrent writer may insert the same segment between our lookup and
    # insert; the second attempt re-resolves and finds the winner's node.
    return store.resolve_or_create(segments)


def resolve_or_create(store: TranslationStore, path: str) -> int:
    return _resolve_or_create(store, split_path(path))


def resolve_existing(store: TranslationStore, path: str) -> Optional[int]:
    return store.resolve_existing(split_path(path))


def full_path(store: TranslationStore, key_id: int) -> str:
    return store.full_path(key_id)


def check_leaf_prefix_conflict(store: TranslationStore, path: str) -> None:
    """Reject writing a value at ``path`` when it would collide with the tree.

    A key holding values may not be an ancestor of another key holding
    values, in either direction.
    """
    segments = split_path(path)
    for depth in range(1, len(segments)):
        prefix = ".".join(segments[:depth])
        prefix_id = store.resolve_existing(segments[:depth])
        if prefix_id is not None and store.keys_with_translations([prefix_id]):
            raise KeyConflictError(prefix, path)

    key_id = store.resolve_existing(segments)
    nested_ids = [i for i in store.subtree_ids(segments) if i != key_id]
    holders = store.keys_with_translations(nested_ids)
    if holders:
        nested = min(store.full_paths(holders).values())
        raise KeyConflictError(path, nested)
