from fastapi import Depends
from sqlmodel import Session

from i18n_manager_api.db import get_session
from i18n_manager_api.providers import LibreTranslateClient, TranslationProvider
from i18n_manager_api.store import TranslationStore, build_store


def get_store(session: Session = Depends(get_session)) -> TranslationStore:  # noqa: B008
    return build_store(session)


def get_translation_provider() -> TranslationProvider:
    return LibreTranslateClient()
