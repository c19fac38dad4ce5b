import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from i18n_manager_api.deps import get_store, get_translation_provider
from i18n_manager_api.providers import TranslationProvider
from i18n_manager_api.schemas import (
    AutoTranslateOut,
    AutoTranslateRequest,
    BulkImportRequest,
    BulkImportResult,
    MessageCreate,
    MessageOut,
    MessageUpdate,
)
from i18n_manager_api.services import bulk_sync
from i18n_manager_api.services import messages as svc
from i18n_manager_api.services.auto_translate import auto_translate
from i18n_manager_api.services.key_paths import normalize_locale
from i18n_manager_api.store import MessageRecord, TranslationStore

router = APIRouter(prefix="/messages", tags=["messages"])
logger = logging.getLogger(__name__)


def _out(record: MessageRecord) -> MessageOut:
    return MessageOut(id=record.id, key=record.key, locale=record.locale, message=record.message)


def _bulk_out(result: bulk_sync.BulkResult) -> BulkImportResult:
    return BulkImportResult(
        success_count=result.total,
        inserted=result.inserted,
        updated=result.updated,
        skipped=result.skipped,
    )


@router.get("/list", response_model=List[MessageOut])
def list_messages(
    key: Optional[str] = None,
    locale: Optional[str] = None,
    store: TranslationStore = Depends(get_store),  # noqa: B008
) -> List[MessageOut]:
    records = svc.list_messages(store, key=key, locale=locale)
    logger.info("Messages listed", extra={"count": len(records), "key": key, "locale": locale})
    return [_out(r) for r in records]


@router.get("/item/{message_id}", response_model=MessageOut)
def get_message(message_id: int, store: TranslationStore = Depends(get_store)) -> MessageOut:  # noqa: B008
    return _out(svc.get_message(store, message_id))


@router.post("/item", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def create_message(body: MessageCreate, store: TranslationStore = Depends(get_store)) -> MessageOut:  # noqa: B008
    return _out(svc.create_message(store, body.key, body.locale, body.message))


@router.put("/item/{message_id}", response_model=MessageOut)
def update_message(
    message_id: int,
    body: MessageUpdate,
    store: TranslationStore = Depends(get_store),  # noqa: B008
) -> MessageOut:
    return _out(svc.update_message(store, message_id, body.message))


@router.delete("/item/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(message_id: int, store: TranslationStore = Depends(get_store)) -> None:  # noqa: B008
    svc.delete_message(store, message_id)
    return None


@router.post("/bulk", response_model=BulkImportResult)
def bulk_import(body: BulkImportRequest, store: TranslationStore = Depends(get_store)) -> BulkImportResult:  # noqa: B008
    result = bulk_sync.bulk_upsert(
        store,
        body.locale,
        [(entry.key, entry.message) for entry in body.messages],
        overwrite_existing=body.overwrite_existing,
    )
    return _bulk_out(result)


@router.post("/import/{locale}", response_model=BulkImportResult)
def import_json(
    locale: str,
    tree: Dict[str, Any] = Body(...),  # noqa: B008
    overwrite_existing: bool = Query(True),  # noqa: B008
    store: TranslationStore = Depends(get_store),  # noqa: B008
) -> BulkImportResult:
    """Import a nested JSON document (the same shape the export produces)."""
    return _bulk_out(bulk_sync.import_tree(store, locale, tree, overwrite_existing))


@router.post("/auto-translate", response_model=AutoTranslateOut)
async def auto_translate_message(
    body: AutoTranslateRequest,
    store: TranslationStore = Depends(get_store),  # noqa: B008
    provider: TranslationProvider = Depends(get_translation_provider),  # noqa: B008
) -> AutoTranslateOut:
    result = await auto_translate(
        store,
        provider,
        key=body.key,
        text=body.text,
        source_locale=body.source_locale,
        target_locales=body.target_locales,
    )
    return AutoTranslateOut(
        key=result.key,
        source_locale=result.source_locale,
        translated=result.translated,
        failed=[{"locale": f.locale, "error": f.error} for f in result.failed],
        summary=result.summary,
    )


@router.get("")
def export_all(store: TranslationStore = Depends(get_store)) -> JSONResponse:  # noqa: B008
    """All messages as nested trees grouped by locale."""
    return JSONResponse(svc.export_all(store), media_type="application/json; charset=utf-8")


@router.get("/{locale}.json")
def export_locale(locale: str, store: TranslationStore = Depends(get_store)) -> JSONResponse:  # noqa: B008
    code = normalize_locale(locale)
    tree = svc.export_locale(store, code)
    return JSONResponse(
        tree,
        media_type="application/json; charset=utf-8",
        headers={
            "Content-Disposition": f"attachment; filename=\"{code}.json\"; filename*=UTF-8''{code}.json",
        },
    )
