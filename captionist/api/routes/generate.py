"""Caption and hook generation endpoint."""
from __future__ import annotations

import logging
from typing import Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from captionist.deps import get_generation_service
from captionist.schemas.generation import (
    REQUEST_TYPES,
    CaptionAndHashtags,
    ErrorResponse,
    HookIdeas,
    generation_request_adapter,
)
from captionist.services.generation import GenerationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generate"])

GENERATION_FAILED = "Failed to generate content"
INVALID_REQUEST_TYPE = "Invalid request type"
METHOD_NOT_ALLOWED = "Method not allowed"


@router.post(
    "/generate",
    response_model=Union[CaptionAndHashtags, HookIdeas],
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Generate a caption with hashtags or a list of hooks",
)
async def generate_content(
    request: Request,
    service: GenerationService = Depends(get_generation_service),
) -> JSONResponse:
    """Dispatch on the ``type`` discriminator and return the model's result."""

    request_id = getattr(request.state, "request_id", "-")

    try:
        body = await request.json()
    except Exception as exc:
        logger.exception("Unreadable request body", extra={"request_id": request_id})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERATION_FAILED, str(exc))

    request_type = body.get("type") if isinstance(body, dict) else None
    if request_type not in REQUEST_TYPES:
        logger.info(
            "Rejected unknown request type",
            extra={"request_id": request_id, "request_type": repr(request_type)},
        )
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_TYPE)

    try:
        payload = generation_request_adapter.validate_python(body)
        result = await service.generate(payload, request_id=request_id)
    except Exception as exc:
        logger.exception(
            "Content generation failed",
            extra={"request_id": request_id, "request_type": request_type},
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERATION_FAILED, str(exc))

    return JSONResponse(status_code=status.HTTP_200_OK, content=result.model_dump())


def method_not_allowed_response() -> JSONResponse:
    """Envelope for any non-POST method on the generate path."""

    return _error(status.HTTP_405_METHOD_NOT_ALLOWED, METHOD_NOT_ALLOWED)


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers={"Allow": "POST"} if status_code == 405 else None,
    )
