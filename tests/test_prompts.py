"""Tests for caption and hook prompt composition."""
from __future__ import annotations

from captionist.schemas.generation import CaptionRequest, HookRequest, InlineImage
from captionist.services.prompts import (
    CAPTION_CLOSING_CLAUSE,
    CAPTION_RESPONSE_SCHEMA,
    HOOK_AUDIENCE_CLAUSE,
    HOOK_RESPONSE_SCHEMA,
    compose_caption_prompt,
    compose_hook_prompt,
)

PRODUCT = InlineImage(mime_type="image/png", data="cHJvZHVjdA==")
SCREENSHOT = InlineImage(mime_type="image/jpeg", data="c2NyZWVuc2hvdA==")

DESCRIPTION_MARKER = "Deskripsi produknya adalah"
CUSTOM_MARKER = "permintaan khusus dari pengguna"
PRODUCT_IMAGE_MARKER = "Sebuah gambar produk juga disediakan"
SCREENSHOT_MARKER = "Sebuah screenshot deskripsi produk"


def test_caption_prompt_embeds_topic_and_ends_with_closing_clause() -> None:
    prompt = compose_caption_prompt(CaptionRequest(topic="Promo skincare"))

    assert '"Promo skincare"' in prompt.text
    assert prompt.text.endswith(CAPTION_CLOSING_CLAUSE)
    assert "10 tagar" in prompt.text
    assert "'TikTok', 'Shopee'" in prompt.text
    assert "'harga'" in prompt.text
    assert "over-claim" in prompt.text
    assert prompt.images == []
    assert prompt.parts == [prompt.text]


def test_caption_base_instruction_keeps_its_exact_layout() -> None:
    prompt = compose_caption_prompt(CaptionRequest(topic="Promo skincare"))

    assert "menarik secara visual.\n  \nPENTING:\n- JANGAN" in prompt.text
    assert prompt.text.endswith(
        "Fokus pada manfaat dan keunikan produk.\n  " + CAPTION_CLOSING_CLAUSE
    )


def test_description_text_adds_single_clause_without_attachments() -> None:
    prompt = compose_caption_prompt(
        CaptionRequest(topic="Serum", description_text="Mengandung niacinamide 5%")
    )

    assert prompt.text.count(DESCRIPTION_MARKER) == 1
    assert '"Mengandung niacinamide 5%"' in prompt.text
    assert SCREENSHOT_MARKER not in prompt.text
    assert prompt.images == []


def test_description_image_adds_clause_and_one_attachment() -> None:
    prompt = compose_caption_prompt(
        CaptionRequest(topic="Serum", description_image=SCREENSHOT)
    )

    assert prompt.text.count(SCREENSHOT_MARKER) == 1
    assert PRODUCT_IMAGE_MARKER not in prompt.text
    assert DESCRIPTION_MARKER not in prompt.text
    assert prompt.images == [SCREENSHOT]
    assert prompt.parts == [SCREENSHOT, prompt.text]


def test_both_images_attach_product_before_screenshot() -> None:
    prompt = compose_caption_prompt(
        CaptionRequest(topic="Serum", product_image=PRODUCT, description_image=SCREENSHOT)
    )

    assert prompt.images == [PRODUCT, SCREENSHOT]
    assert prompt.parts == [PRODUCT, SCREENSHOT, prompt.text]
    assert prompt.text.index(PRODUCT_IMAGE_MARKER) < prompt.text.index(SCREENSHOT_MARKER)
    assert prompt.text.endswith(CAPTION_CLOSING_CLAUSE)


def test_caption_clauses_follow_fixed_order() -> None:
    prompt = compose_caption_prompt(
        CaptionRequest(
            topic="Serum",
            description_text="Ringan dan cepat meresap",
            custom_request="Gunakan gaya santai",
            product_image=PRODUCT,
        )
    )
    text = prompt.text

    positions = [
        text.index('"Serum"'),
        text.index(DESCRIPTION_MARKER),
        text.index(CUSTOM_MARKER),
        text.index(PRODUCT_IMAGE_MARKER),
        text.index(CAPTION_CLOSING_CLAUSE),
    ]
    assert positions == sorted(positions)
    assert '"Gunakan gaya santai"' in text


def test_empty_optional_caption_fields_add_nothing() -> None:
    prompt = compose_caption_prompt(
        CaptionRequest(topic="Serum", description_text="", custom_request="")
    )

    assert DESCRIPTION_MARKER not in prompt.text
    assert CUSTOM_MARKER not in prompt.text


def test_hook_prompt_embeds_topic_without_audience() -> None:
    prompt = compose_hook_prompt(HookRequest(topic="Sepatu lari"))

    assert '"Sepatu lari"' in prompt.text
    assert "10 ide hook" in prompt.text
    assert "Target audiensnya" not in prompt.text
    assert "membuat penasaran" in prompt.text
    assert prompt.images == []


def test_non_blank_audience_adds_exactly_one_clause() -> None:
    prompt = compose_hook_prompt(HookRequest(topic="Sepatu lari", audience="Pelari pemula"))

    assert prompt.text.count("Target audiensnya") == 1
    assert HOOK_AUDIENCE_CLAUSE.format(audience="Pelari pemula") in prompt.text
    assert prompt.text.index("Target audiensnya") < prompt.text.index("membuat penasaran")


def test_blank_audience_adds_no_clause() -> None:
    prompt = compose_hook_prompt(HookRequest(topic="Sepatu lari", audience="   "))

    assert "Target audiensnya" not in prompt.text


def test_hook_details_come_last() -> None:
    prompt = compose_hook_prompt(
        HookRequest(topic="Sepatu lari", audience="Mahasiswa", hook_details="Pakai pertanyaan")
    )

    assert prompt.text.rstrip().endswith('"Pakai pertanyaan".')
    assert prompt.text.index("membuat penasaran") < prompt.text.index("detail tambahan")


def test_response_schemas_require_result_fields() -> None:
    assert CAPTION_RESPONSE_SCHEMA["type"] == "object"
    assert set(CAPTION_RESPONSE_SCHEMA["required"]) == {"caption", "hashtags"}
    assert CAPTION_RESPONSE_SCHEMA["properties"]["caption"]["type"] == "string"
    assert CAPTION_RESPONSE_SCHEMA["properties"]["hashtags"]["items"] == {"type": "string"}
    assert CAPTION_RESPONSE_SCHEMA["additionalProperties"] is False

    assert HOOK_RESPONSE_SCHEMA["required"] == ["hooks"]
    assert HOOK_RESPONSE_SCHEMA["properties"]["hooks"]["type"] == "array"
