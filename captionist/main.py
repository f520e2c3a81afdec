"""FastAPI application entrypoint for the Captionist backend."""
from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from captionist import __version__
from captionist.api.routes import api_router
from captionist.api.routes.generate import method_not_allowed_response
from captionist.core.config import Settings, get_settings
from captionist.core.logging import configure_logging
from captionist.services.ark_client import ArkGenerationClient
from captionist.services.generation import GenerationClient

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
GENERATE_PATH = f"{API_PREFIX}/generate"


class HealthResponse(BaseModel):
    status: str = "ok"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the generation client once; a missing credential aborts startup."""

    owns_client = app.state.generation_client is None
    if owns_client:
        app.state.generation_client = ArkGenerationClient.from_settings(app.state.settings)
        logger.info(
            "Ark generation client ready",
            extra={"model": app.state.settings.ark_text_model},
        )
    try:
        yield
    finally:
        if owns_client:
            await app.state.generation_client.close()
            app.state.generation_client = None


def create_app(
    settings: Settings | None = None, *, client: GenerationClient | None = None
) -> FastAPI:
    """Create the API application.

    ``client`` may be supplied to use a different provider (or a stub in
    tests); otherwise an Ark client is created from ``settings`` at startup.
    """

    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="Captionist API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.generation_client = client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=API_PREFIX)

    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed_envelope(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405 and request.url.path == GENERATE_PATH:
            return method_not_allowed_response()
        return await http_exception_handler(request, exc)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check() -> HealthResponse:
        """Return service health information for monitoring and load-balancers."""
        return HealthResponse()

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "request_id": request_id,
                "duration_ms": (time.perf_counter() - started) * 1000,
            },
        )
        response.headers["X-Request-Id"] = request_id
        return response

    return app


app = create_app()
