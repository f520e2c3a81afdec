"""Business workflow for generating captions and hooks."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Protocol, Type, TypeVar, Union, overload

from pydantic import BaseModel, ValidationError

from captionist.core.config import Settings
from captionist.schemas.generation import (
    CaptionAndHashtags,
    CaptionRequest,
    HookIdeas,
    HookRequest,
)
from captionist.services.prompts import (
    CAPTION_RESPONSE_SCHEMA,
    HOOK_RESPONSE_SCHEMA,
    ComposedPrompt,
    compose_caption_prompt,
    compose_hook_prompt,
)

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

EXPECTED_ITEM_COUNT = 10


class GenerationConfigurationError(RuntimeError):
    """Raised when the model provider credentials are not configured."""


class GenerationServiceError(RuntimeError):
    """Raised when the model provider fails or returns an unusable result."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GenerationClient(Protocol):
    """Any provider that turns (prompt, system role, JSON schema) into JSON text."""

    async def generate_json(
        self,
        *,
        system_instruction: str,
        prompt: ComposedPrompt,
        schema_name: str,
        schema: Dict[str, Any],
    ) -> str:
        ...

    async def close(self) -> None:
        ...


class GenerationService:
    """Pair each request type with its composer, persona and result schema."""

    def __init__(self, client: GenerationClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    @overload
    async def generate(
        self, request: CaptionRequest, *, request_id: str = "-"
    ) -> CaptionAndHashtags:
        ...

    @overload
    async def generate(self, request: HookRequest, *, request_id: str = "-") -> HookIdeas:
        ...

    async def generate(
        self, request: Union[CaptionRequest, HookRequest], *, request_id: str = "-"
    ) -> Union[CaptionAndHashtags, HookIdeas]:
        if isinstance(request, CaptionRequest):
            return await self.generate_caption(request, request_id=request_id)
        return await self.generate_hooks(request, request_id=request_id)

    async def generate_caption(
        self, request: CaptionRequest, *, request_id: str = "-"
    ) -> CaptionAndHashtags:
        prompt = compose_caption_prompt(request)
        result = await self._run(
            prompt,
            system_instruction=self._settings.caption_system_instruction,
            schema_name="caption_and_hashtags",
            schema=CAPTION_RESPONSE_SCHEMA,
            result_model=CaptionAndHashtags,
            request_type="caption",
            request_id=request_id,
        )
        _warn_on_count_mismatch(
            "hashtags", len(result.hashtags), request_id=request_id
        )
        return result

    async def generate_hooks(
        self, request: HookRequest, *, request_id: str = "-"
    ) -> HookIdeas:
        prompt = compose_hook_prompt(request)
        result = await self._run(
            prompt,
            system_instruction=self._settings.hook_system_instruction,
            schema_name="hook_ideas",
            schema=HOOK_RESPONSE_SCHEMA,
            result_model=HookIdeas,
            request_type="hook",
            request_id=request_id,
        )
        _warn_on_count_mismatch("hooks", len(result.hooks), request_id=request_id)
        return result

    async def _run(
        self,
        prompt: ComposedPrompt,
        *,
        system_instruction: str,
        schema_name: str,
        schema: Dict[str, Any],
        result_model: Type[ResultT],
        request_type: str,
        request_id: str,
    ) -> ResultT:
        logger.info(
            "Starting content generation",
            extra={
                "request_id": request_id,
                "request_type": request_type,
                "image_count": len(prompt.images),
            },
        )
        started = time.perf_counter()
        raw = await self._client.generate_json(
            system_instruction=system_instruction,
            prompt=prompt,
            schema_name=schema_name,
            schema=schema,
        )
        result = parse_result(raw, result_model)
        logger.info(
            "Content generation completed",
            extra={
                "request_id": request_id,
                "request_type": request_type,
                "duration_ms": (time.perf_counter() - started) * 1000,
            },
        )
        return result


def parse_result(raw: str, result_model: Type[ResultT]) -> ResultT:
    """Parse the model's JSON text into ``result_model``; no partial recovery."""

    content = (raw or "").strip()
    try:
        return result_model.model_validate_json(content)
    except ValidationError as exc:
        logger.warning("Failed to parse model payload: %s", content[:500])
        raise GenerationServiceError(
            f"Model response could not be parsed as {result_model.__name__}"
        ) from exc


def _warn_on_count_mismatch(field: str, actual: int, *, request_id: str) -> None:
    if actual != EXPECTED_ITEM_COUNT:
        logger.warning(
            "Unexpected %s count",
            field,
            extra={
                "request_id": request_id,
                "expected": EXPECTED_ITEM_COUNT,
                "actual": actual,
            },
        )


__all__ = [
    "GenerationClient",
    "GenerationConfigurationError",
    "GenerationService",
    "GenerationServiceError",
    "parse_result",
]
