import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from i18n_manager_api.deps import get_store
from i18n_manager_api.schemas import DeleteByKeyResult
from i18n_manager_api.services import messages as svc
from i18n_manager_api.services.cascade import delete_key_and_descendants
from i18n_manager_api.store import TranslationStore

router = APIRouter(prefix="/keys", tags=["keys"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[str])
def list_keys(store: TranslationStore = Depends(get_store)) -> List[str]:  # noqa: B008
    return svc.all_keys(store)


@router.delete("", response_model=DeleteByKeyResult)
def delete_by_key(
    key: str = Query(...),  # noqa: B008
    store: TranslationStore = Depends(get_store),  # noqa: B008
) -> DeleteByKeyResult:
    """Delete a key, everything nested under it and all their values."""
    result = delete_key_and_descendants(store, key)
    return DeleteByKeyResult(
        success=result.success,
        deleted_key_count=result.deleted_key_count,
        deleted_translation_count=result.deleted_translation_count,
        message=result.message,
    )
