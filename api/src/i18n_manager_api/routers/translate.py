import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from i18n_manager_api.deps import get_translation_provider
from i18n_manager_api.providers import TranslationProvider
from i18n_manager_api.schemas import TranslateOut, TranslateRequest
from i18n_manager_api.services.key_paths import normalize_locale

router = APIRouter(prefix="/translate", tags=["translate"])
logger = logging.getLogger(__name__)


@router.post("", response_model=TranslateOut)
async def translate_text(
    body: TranslateRequest,
    provider: TranslationProvider = Depends(get_translation_provider),  # noqa: B008
) -> TranslateOut:
    source = normalize_locale(body.source)
    target = normalize_locale(body.target)
    translated = await provider.translate(body.text, source, target)
    logger.info("Text translated", extra={"source_locale": source, "target_locale": target})
    return TranslateOut(translated_text=translated)


@router.get("/languages")
async def provider_languages(
    provider: TranslationProvider = Depends(get_translation_provider),  # noqa: B008
) -> List[Dict[str, Any]]:
    """Languages the machine-translation provider supports."""
    return await provider.languages()
