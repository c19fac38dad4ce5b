import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from i18n_manager_api.deps import get_store
from i18n_manager_api.schemas import LocaleStatsOut, MissingKeysReport
from i18n_manager_api.services import messages as svc
from i18n_manager_api.store import TranslationStore

router = APIRouter(prefix="/validation", tags=["validation"])
logger = logging.getLogger(__name__)


@router.get("/missing-keys", response_model=MissingKeysReport)
def missing_keys(
    locale: str = Query(..., min_length=1),  # noqa: B008
    store: TranslationStore = Depends(get_store),  # noqa: B008
) -> MissingKeysReport:
    return MissingKeysReport.model_validate(svc.missing_keys_report(store, locale))


@router.get("/stats", response_model=List[LocaleStatsOut])
def locale_stats(store: TranslationStore = Depends(get_store)) -> List[LocaleStatsOut]:  # noqa: B008
    return [LocaleStatsOut.model_validate(s) for s in svc.locale_stats(store)]
