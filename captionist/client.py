"""Async HTTP helper for calling ``POST /api/generate``.

Front-ends and scripts use this instead of building request bodies by hand.
Required fields are checked locally so a blank topic never reaches the
network.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from captionist.schemas.generation import (
    CaptionAndHashtags,
    CaptionRequest,
    HookIdeas,
    HookRequest,
    InlineImage,
)

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate"


class GenerationRequestFailed(RuntimeError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Request failed with status {status_code}")
        self.status_code = status_code
        self.body = body


class CaptionistClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "CaptionistClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def generate_caption_and_hashtags(
        self,
        topic: str,
        description_text: str | None = None,
        product_image: InlineImage | None = None,
        description_image: InlineImage | None = None,
        custom_request: str | None = None,
    ) -> CaptionAndHashtags:
        _require_topic(topic, "Harap masukkan topik.")
        request = CaptionRequest(
            topic=topic,
            description_text=description_text,
            product_image=product_image,
            description_image=description_image,
            custom_request=custom_request,
        )
        payload = await self._post(request.model_dump(by_alias=True, exclude_none=True))
        return CaptionAndHashtags.model_validate(payload)

    async def generate_hook_ideas(
        self,
        audience: str | None,
        topic: str,
        hook_details: str | None = None,
    ) -> HookIdeas:
        _require_topic(topic, "Harap isi kolom produk / topik.")
        request = HookRequest(audience=audience, topic=topic, hook_details=hook_details)
        payload = await self._post(request.model_dump(by_alias=True, exclude_none=True))
        return HookIdeas.model_validate(payload)

    async def _post(self, body: Dict[str, Any]) -> Any:
        response = await self._http.post(GENERATE_PATH, json=body)
        if response.is_error:
            logger.error(
                "API error response",
                extra={"status_code": response.status_code, "body": response.text},
            )
            raise GenerationRequestFailed(response.status_code, response.text)
        return response.json()


def _require_topic(topic: str, message: str) -> None:
    if not topic or not topic.strip():
        raise ValueError(message)


__all__ = ["CaptionistClient", "GenerationRequestFailed", "GENERATE_PATH"]
