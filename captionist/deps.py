"""FastAPI dependency helpers."""
from __future__ import annotations

from fastapi import Depends, Request

from captionist.core.config import Settings
from captionist.services.generation import GenerationClient, GenerationService


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was created with."""

    return request.app.state.settings


def get_generation_client(request: Request) -> GenerationClient:
    """Return the shared generation client built during startup."""

    return request.app.state.generation_client


def get_generation_service(
    client: GenerationClient = Depends(get_generation_client),
    settings: Settings = Depends(get_app_settings),
) -> GenerationService:
    """Provide a generation service instance per request."""

    return GenerationService(client, settings=settings)
