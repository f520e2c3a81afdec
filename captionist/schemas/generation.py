"""Schemas for the caption and hook generation workflow."""
from __future__ import annotations

import base64
import binascii
import mimetypes
from pathlib import Path
from typing import Annotated, List, Literal, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)


class _WireModel(BaseModel):
    """Base for request bodies that use camelCase names on the wire."""

    model_config = ConfigDict(populate_by_name=True)


class InlineImage(_WireModel):
    mime_type: str = Field(..., alias="mimeType", description="MIME type, e.g. image/png")
    data: str = Field(..., description="Base64 payload without the data: prefix")

    @field_validator("data")
    @classmethod
    def _ensure_base64(cls, value: str) -> str:
        # Line-wrapped payloads (base64.encodebytes, MIME) are stored unwrapped.
        value = "".join(value.split())
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("image data must be base64 encoded") from exc
        return value

    def to_data_uri(self) -> str:
        """Render the payload as a data URI accepted by vision chat models."""

        media_type = (self.mime_type or "image/png").split(";")[0]
        return f"data:{media_type};base64,{self.data}"

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> "InlineImage":
        return cls(mime_type=mime_type, data=base64.b64encode(data).decode("ascii"))

    @classmethod
    def from_file(cls, path: str | Path) -> "InlineImage":
        """Read an image from disk, guessing its MIME type from the filename."""

        path = Path(path)
        guessed_type, _ = mimetypes.guess_type(path.name)
        if not guessed_type or not guessed_type.startswith("image/"):
            raise ValueError(f"{path.name} is not a supported image file")
        return cls.from_bytes(path.read_bytes(), guessed_type)


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("topic must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_require_text)]


class CaptionRequest(_WireModel):
    type: Literal["caption"] = "caption"
    topic: NonBlankStr = Field(..., description="Post topic or product name")
    description_text: str | None = Field(default=None, alias="descriptionText")
    product_image: InlineImage | None = Field(default=None, alias="productImage")
    description_image: InlineImage | None = Field(default=None, alias="descriptionImage")
    custom_request: str | None = Field(default=None, alias="customRequest")


class HookRequest(_WireModel):
    type: Literal["hook"] = "hook"
    audience: str | None = None
    topic: NonBlankStr = Field(..., description="Product or topic")
    hook_details: str | None = Field(default=None, alias="hookDetails")


GenerationRequest = Annotated[
    Union[CaptionRequest, HookRequest], Field(discriminator="type")
]

generation_request_adapter: TypeAdapter[CaptionRequest | HookRequest] = TypeAdapter(
    GenerationRequest
)

REQUEST_TYPES = ("caption", "hook")


class CaptionAndHashtags(BaseModel):
    model_config = ConfigDict(json_schema_extra={"additionalProperties": False})

    caption: str = Field(..., description="Caption media sosial yang dihasilkan.")
    hashtags: List[str] = Field(
        ..., description="Sebuah array berisi 10 tagar yang relevan."
    )


class HookIdeas(BaseModel):
    model_config = ConfigDict(json_schema_extra={"additionalProperties": False})

    hooks: List[str] = Field(..., description="Sebuah array berisi 10 ide hook.")


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
