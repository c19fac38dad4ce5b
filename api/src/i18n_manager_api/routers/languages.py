import logging
from typing import List

from fastapi import APIRouter, Depends, status

from i18n_manager_api.deps import get_store
from i18n_manager_api.schemas import LanguageIn, LanguageOut
from i18n_manager_api.services import messages as svc
from i18n_manager_api.store import TranslationStore

router = APIRouter(prefix="/languages", tags=["languages"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[LanguageOut])
def list_languages(store: TranslationStore = Depends(get_store)) -> List[LanguageOut]:  # noqa: B008
    languages = svc.list_languages(store)
    logger.info("Languages listed", extra={"count": len(languages)})
    return [LanguageOut(code=lang.code, name=lang.name) for lang in languages]


@router.post("", response_model=LanguageOut, status_code=status.HTTP_201_CREATED)
def add_language(body: LanguageIn, store: TranslationStore = Depends(get_store)) -> LanguageOut:  # noqa: B008
    language = svc.add_language(store, body.code, body.name)
    return LanguageOut(code=language.code, name=language.name)
