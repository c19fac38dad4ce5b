"""Fan a source message out to other locales through the translation provider."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from fastapi.concurrency import run_in_threadpool

from i18n_manager_api.errors import DuplicateTranslation, I18nError, ValidationError
from i18n_manager_api.providers import TranslationProvider
from i18n_manager_api.store import TranslationStore
from .key_paths import check_leaf_prefix_conflict, normalize_locale, resolve_or_create, split_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocaleFailure:
    locale: str
    error: str


@dataclass
class AutoTranslateResult:
    key: str
    source_locale: str
    translated: List[str] = field(default_factory=list)
    failed: List[LocaleFailure] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.translated) + len(self.failed)

    @property
    def summary(self) -> str:
        return f"translated to {len(self.translated)} of {self.attempted} locales"


def _targets(store: TranslationStore, source: str, requested: Optional[Iterable[str]]) -> List[str]:
    if requested is None:
        candidates = [language.code for language in store.list_languages()]
    else:
        candidates = [normalize_locale(code) for code in requested]
    targets: List[str] = []
    for code in candidates:
        if code != source and code not in targets:
            targets.append(code)
    return targets


def _store_source(store: TranslationStore, key: str, source: str, text: str) -> Tuple[int, str]:
    """Return the key id and the source value actually stored."""
    with store.transaction():
        check_leaf_prefix_conflict(store, key)
        key_id = resolve_or_create(store, key)
        store.ensure_language(source)
        existing = store.find_translation(key_id, source)
        if existing is None:
            store.insert_translation(key_id, source, text)
            return key_id, text
        return key_id, existing.value


def _store_target(store: TranslationStore, key: str, key_id: int, locale: str, text: str) -> None:
    with store.transaction():
        store.ensure_language(locale)
        if store.find_translation(key_id, locale) is not None:
            raise DuplicateTranslation(key, locale)
        store.insert_translation(key_id, locale, text)


async def auto_translate(
    store: TranslationStore,
    provider: TranslationProvider,
    key: str,
    text: str,
    source_locale: str = "en",
    target_locales: Optional[Iterable[str]] = None,
) -> AutoTranslateResult:
    """Store ``text`` under ``source_locale`` and machine-translate it.

    One provider call per target locale. A failure for one locale (provider
    error or an existing value) is recorded and the others carry on. An
    existing source value is kept, and it is what gets translated.

    Store work runs in the threadpool so the event loop stays free while
    the session talks to the database.
    """
    split_path(key)
    if not text:
        raise ValidationError("Text to translate must not be empty")
    source = normalize_locale(source_locale)
    targets = await run_in_threadpool(_targets, store, source, target_locales)
    key_id, source_text = await run_in_threadpool(_store_source, store, key, source, text)
    if source_text != text:
        logger.info(
            "Auto-translate uses the stored source value",
            extra={"key": key, "source_locale": source},
        )

    result = AutoTranslateResult(key=key, source_locale=source)
    outcomes = await asyncio.gather(
        *(provider.translate(source_text, source, target) for target in targets),
        return_exceptions=True,
    )
    for target, outcome in zip(targets, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.warning(
                "Auto-translate failed for locale",
                extra={"key": key, "locale": target, "error": str(outcome)},
            )
            result.failed.append(LocaleFailure(locale=target, error=str(outcome)))
            continue
        try:
            await run_in_threadpool(_store_target, store, key, key_id, target, outcome)
        except I18nError as exc:
            logger.warning(
                "Auto-translate result not stored",
                extra={"key": key, "locale": target, "error": exc.message},
            )
            result.failed.append(LocaleFailure(locale=target, error=exc.message))
            continue
        result.translated.append(target)

    logger.info(
        "Auto-translate finished",
        extra={"key": key, "source_locale": source, "summary": result.summary},
    )
    return result
