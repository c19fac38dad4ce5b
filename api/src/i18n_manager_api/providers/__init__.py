from typing import Any, Dict, List, Protocol

from .libretranslate import LibreTranslateClient


class TranslationProvider(Protocol):
    async def translate(self, text: str, source: str, target: str) -> str: ...

    async def languages(self) -> List[Dict[str, Any]]: ...


__all__ = ["LibreTranslateClient", "TranslationProvider"]
