"""API route registrations."""
from fastapi import APIRouter

from captionist.api.routes import generate


api_router = APIRouter()
api_router.include_router(generate.router)

__all__ = ["api_router"]
