"""Application-wide settings and Ark client configuration helpers."""
from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CAPTION_SYSTEM_INSTRUCTION = (
    "Anda adalah seorang ahli pemasaran media sosial yang kreatif dan profesional "
    "berbahasa Indonesia. Respons Anda harus dalam format JSON."
)

DEFAULT_HOOK_SYSTEM_INSTRUCTION = (
    "Anda adalah seorang ahli strategi pemasaran viral berbahasa Indonesia. "
    "Respons Anda harus dalam format JSON."
)


class Settings(BaseSettings):
    """Global application configuration.

    Every field can be overridden through the environment variable of the
    same name (case-insensitive) or a local ``.env`` file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ark_api_key: Optional[str] = Field(default=None)
    ark_base_url: str = Field(default="https://ark.cn-beijing.volces.com/api/v3")
    # Must be a vision-capable model when product images are attached.
    ark_text_model: str = Field(default="doubao-1-5-vision-pro-32k-250115")
    ark_temperature: float = Field(default=0.8)
    ark_max_tokens: int = Field(default=1024)
    ark_request_timeout: float = Field(default=120.0)
    ark_response_format: Literal["json_schema", "json_object"] = Field(
        default="json_schema"
    )
    caption_system_instruction: str = Field(default=DEFAULT_CAPTION_SYSTEM_INSTRUCTION)
    hook_system_instruction: str = Field(default=DEFAULT_HOOK_SYSTEM_INSTRUCTION)
    log_level: str = Field(default="INFO")
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
