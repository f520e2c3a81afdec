"""Generation client backed by the Volcengine Ark runtime."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from volcenginesdkarkruntime import AsyncArk

from captionist.core.config import Settings
from captionist.services.generation import (
    GenerationConfigurationError,
    GenerationServiceError,
)
from captionist.services.prompts import ComposedPrompt

logger = logging.getLogger(__name__)


class ArkGenerationClient:
    """Send composed prompts to an Ark chat model and return its JSON text.

    The client is built once per process with an explicit credential; the
    underlying ``AsyncArk`` connection pool is shared by concurrent requests.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        settings: Settings,
        sdk_client: Any | None = None,
    ) -> None:
        if not api_key:
            raise GenerationConfigurationError(
                "Missing Ark credentials. Configure ARK_API_KEY."
            )
        self._settings = settings
        self._client = sdk_client or AsyncArk(
            api_key=api_key,
            base_url=settings.ark_base_url,
            timeout=settings.ark_request_timeout,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArkGenerationClient":
        return cls(api_key=settings.ark_api_key, settings=settings)

    async def generate_json(
        self,
        *,
        system_instruction: str,
        prompt: ComposedPrompt,
        schema_name: str,
        schema: Dict[str, Any],
    ) -> str:
        logger.debug(
            "Submitting generation request to Ark",
            extra={
                "model": self._settings.ark_text_model,
                "schema_name": schema_name,
                "image_count": len(prompt.images),
            },
        )
        try:
            response = await self._client.chat.completions.create(
                model=self._settings.ark_text_model,
                messages=[
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": build_user_content(prompt)},
                ],
                temperature=self._settings.ark_temperature,
                max_tokens=self._settings.ark_max_tokens,
                response_format=self._response_format(schema_name, schema),
            )
        except Exception as exc:
            status_code = getattr(exc, "status_code", None)
            message = f"Ark chat completion failed: {exc}"
            if status_code is not None:
                message = f"{message} (status={status_code})"
            raise GenerationServiceError(message, status_code=status_code) from exc

        if not response.choices:
            raise GenerationServiceError("Ark returned no choices")

        content = response.choices[0].message.content
        if not content:
            raise GenerationServiceError("Ark returned empty content")
        return content

    async def close(self) -> None:
        await self._client.close()

    def _response_format(
        self, schema_name: str, schema: Dict[str, Any]
    ) -> Dict[str, Any]:
        if self._settings.ark_response_format == "json_object":
            return {"type": "json_object"}
        return {
            "type": "json_schema",
            "json_schema": {"name": schema_name, "schema": schema, "strict": True},
        }


def build_user_content(prompt: ComposedPrompt) -> str | List[Dict[str, Any]]:
    """Map prompt parts onto chat content: images first, text segment last."""

    if not prompt.images:
        return prompt.text
    content: List[Dict[str, Any]] = [
        {"type": "image_url", "image_url": {"url": image.to_data_uri()}}
        for image in prompt.images
    ]
    content.append({"type": "text", "text": prompt.text})
    return content


__all__ = ["ArkGenerationClient", "build_user_content"]
