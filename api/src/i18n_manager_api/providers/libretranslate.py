import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from i18n_manager_api.errors import ProviderError

LIBRETRANSLATE_URL = os.getenv("LIBRETRANSLATE_URL", "https://libre-translate-production.up.railway.app")
LIBRETRANSLATE_API_KEY = os.getenv("LIBRETRANSLATE_API_KEY")
LIBRETRANSLATE_TIMEOUT = float(os.getenv("LIBRETRANSLATE_TIMEOUT", "10"))

logger = logging.getLogger(__name__)


class LibreTranslateClient:
    """Thin async client for the LibreTranslate REST API."""

    def __init__(
        self,
        base_url: str = LIBRETRANSLATE_URL,
        api_key: Optional[str] = LIBRETRANSLATE_API_KEY,
        timeout: float = LIBRETRANSLATE_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        if self.api_key:
            payload = {**payload, "api_key": self.api_key}
        logger.info("Provider POST", extra={"url": f"{self.base_url}{path}"})
        try:
            async with self._client() as client:
                resp = await client.post(path, json=payload)
                logger.info("Provider POST response", extra={"url": f"{self.base_url}{path}", "status_code": resp.status_code})
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as exc:
            body_text = exc.response.text if exc.response is not None else "<unavailable>"
            logger.error(
                "Provider POST error",
                extra={"url": f"{self.base_url}{path}", "status_code": exc.response.status_code, "response_body": body_text},
            )
            raise ProviderError(f"Translation provider returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Provider request failed", extra={"url": f"{self.base_url}{path}", "error": str(exc)})
            raise ProviderError(f"Translation provider unavailable: {exc}") from exc
        except ValueError as exc:
            raise ProviderError("Translation provider returned invalid JSON") from exc

    async def translate(self, text: str, source: str, target: str, format: str = "text") -> str:
        data = await self._post("/translate", {"q": text, "source": source, "target": target, "format": format})
        translated = data.get("translatedText") if isinstance(data, dict) else None
        # Single-string requests normally get a string back; some servers wrap it in a list
        if isinstance(translated, str):
            return translated
        if isinstance(translated, list) and translated:
            return str(translated[0])
        raise ProviderError("Invalid translation response")

    async def languages(self) -> List[Dict[str, Any]]:
        logger.info("Provider GET", extra={"url": f"{self.base_url}/languages"})
        try:
            async with self._client() as client:
                resp = await client.get("/languages")
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPError as exc:
            raise ProviderError(f"Translation provider unavailable: {exc}") from exc
