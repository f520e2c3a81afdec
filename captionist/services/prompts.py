"""Prompt composition for caption and hook generation.

Both composers are pure functions: they only read the validated request and
return a :class:`ComposedPrompt`. Clause order is significant and fixed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from captionist.schemas.generation import (
    CaptionAndHashtags,
    CaptionRequest,
    HookIdeas,
    HookRequest,
    InlineImage,
)

CAPTION_BASE_TEMPLATE = (
    'Buatkan sebuah caption media sosial yang menarik dan 10 tagar yang relevan untuk '
    'postingan tentang "{topic}". Caption harus menggunakan Bahasa Indonesia yang natural '
    "dan menyertakan emoji yang relevan (seperti ✅, ✨, 🚀, dll) untuk membuatnya lebih "
    "menarik secara visual.\n"
    "  \n"
    "PENTING:\n"
    "- JANGAN sebutkan kata-kata seperti 'TikTok', 'Shopee', atau platform "
    "e-commerce/media sosial spesifik lainnya.\n"
    "- JANGAN sebutkan 'harga' atau informasi sensitif terkait biaya.\n"
    "- JANGAN membuat klaim yang berlebihan atau tidak terbukti (hindari over-claim). "
    "Fokus pada manfaat dan keunikan produk.\n"
    "  "
)
CAPTION_DESCRIPTION_CLAUSE = ' Deskripsi produknya adalah: "{description}".'
CAPTION_CUSTOM_REQUEST_CLAUSE = (
    "\n\nBerikut adalah permintaan khusus dari pengguna yang harus kamu ikuti: "
    '"{custom_request}".'
)
CAPTION_PRODUCT_IMAGE_CLAUSE = " Sebuah gambar produk juga disediakan sebagai konteks."
CAPTION_DESCRIPTION_IMAGE_CLAUSE = (
    " Sebuah screenshot deskripsi produk juga disediakan sebagai konteks."
)
CAPTION_CLOSING_CLAUSE = (
    " Pastikan caption berhubungan langsung dengan gambar dan informasi yang diberikan."
)

HOOK_BASE_TEMPLATE = (
    "Buatkan 10 ide hook pendek yang menarik perhatian untuk postingan media sosial "
    'dalam Bahasa Indonesia. Topiknya adalah "{topic}".'
)
HOOK_AUDIENCE_CLAUSE = ' Target audiensnya adalah "{audience}".'
HOOK_CURIOSITY_CLAUSE = (
    " Hook harus membuat penasaran dan mendorong orang untuk ingin tahu lebih lanjut. "
    "Hindari kata-kata seperti 'TikTok', 'Shopee', 'harga', dan jangan membuat klaim "
    "yang berlebihan."
)
HOOK_DETAILS_CLAUSE = (
    "\n\nBerikut adalah detail tambahan dari pengguna untuk gaya hook yang diinginkan: "
    '"{hook_details}".'
)

PromptPart = Union[InlineImage, str]


@dataclass(slots=True)
class ComposedPrompt:
    """Instruction text plus the inline images attached alongside it."""

    text: str
    images: List[InlineImage] = field(default_factory=list)

    @property
    def parts(self) -> List[PromptPart]:
        """Attachments in attachment order, followed by the text segment."""

        return [*self.images, self.text]


def compose_caption_prompt(request: CaptionRequest) -> ComposedPrompt:
    text = CAPTION_BASE_TEMPLATE.format(topic=request.topic)
    images: List[InlineImage] = []

    if request.description_text:
        text += CAPTION_DESCRIPTION_CLAUSE.format(description=request.description_text)

    if request.custom_request:
        text += CAPTION_CUSTOM_REQUEST_CLAUSE.format(
            custom_request=request.custom_request
        )

    if request.product_image:
        text += CAPTION_PRODUCT_IMAGE_CLAUSE
        images.append(request.product_image)

    if request.description_image:
        text += CAPTION_DESCRIPTION_IMAGE_CLAUSE
        images.append(request.description_image)

    text += CAPTION_CLOSING_CLAUSE
    return ComposedPrompt(text=text, images=images)


def compose_hook_prompt(request: HookRequest) -> ComposedPrompt:
    text = HOOK_BASE_TEMPLATE.format(topic=request.topic)

    if request.audience and request.audience.strip():
        text += HOOK_AUDIENCE_CLAUSE.format(audience=request.audience)

    text += HOOK_CURIOSITY_CLAUSE

    if request.hook_details:
        text += HOOK_DETAILS_CLAUSE.format(hook_details=request.hook_details)

    return ComposedPrompt(text=text)


def _response_schema(model: type) -> Dict[str, Any]:
    schema = model.model_json_schema()
    # Drop the generated titles; providers only need types and descriptions.
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema


CAPTION_RESPONSE_SCHEMA = _response_schema(CaptionAndHashtags)
HOOK_RESPONSE_SCHEMA = _response_schema(HookIdeas)


__all__ = [
    "CAPTION_RESPONSE_SCHEMA",
    "ComposedPrompt",
    "HOOK_RESPONSE_SCHEMA",
    "PromptPart",
    "compose_caption_prompt",
    "compose_hook_prompt",
]
