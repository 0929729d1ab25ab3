"""
Tests for the AI gateway: reply parsing, upstream errors and the
two-prompt pricing/listing calls.
"""

import json

import httpx
import pytest

from closet_worthy.core.exceptions import (
    AIResponseParseError,
    AIServiceNotConfiguredError,
    AIUpstreamError,
)
from closet_worthy.services.ai import AIGateway, parse_json_reply, strip_code_fences


def test_strip_code_fences_removes_json_fence():
    assert strip_code_fences('```json\n{"title": "x"}\n```') == '{"title": "x"}'


def test_strip_code_fences_leaves_plain_json():
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_parse_json_reply_rejects_prose():
    with pytest.raises(AIResponseParseError) as exc_info:
        parse_json_reply("Sure! The retail price is about $325.")
    assert "325" in exc_info.value.raw_text


def test_parse_json_reply_rejects_arrays():
    with pytest.raises(AIResponseParseError):
        parse_json_reply("[1, 2]")


async def test_complete_without_key_raises_not_configured():
    gateway = AIGateway(api_key=None)
    assert gateway.enabled is False
    with pytest.raises(AIServiceNotConfiguredError):
        await gateway.complete("hello")


async def test_complete_sends_headers_and_model(fake_claude):
    fake_claude.reply("hello", "hi")
    gateway = AIGateway(
        api_key="test-key",
        model="claude-test",
        max_tokens=123,
        transport=httpx.MockTransport(fake_claude.handler),
    )

    assert await gateway.complete("hello") == "hi"

    request = fake_claude.requests[0]
    assert request.headers["x-api-key"] == "test-key"
    assert request.headers["anthropic-version"] == "2023-06-01"
    body = json.loads(request.content)
    assert body["model"] == "claude-test"
    assert body["max_tokens"] == 123
    assert body["messages"] == [{"role": "user", "content": "hello"}]


async def test_complete_non_2xx_raises_upstream_error(fake_claude):
    fake_claude.reply("hello", httpx.Response(529, json={"error": {"type": "overloaded_error"}}))
    gateway = AIGateway(api_key="test-key", transport=httpx.MockTransport(fake_claude.handler))

    with pytest.raises(AIUpstreamError) as exc_info:
        await gateway.complete("hello")
    assert exc_info.value.status_code == 529


async def test_complete_transport_error_raises_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = AIGateway(api_key="test-key", transport=httpx.MockTransport(handler))
    with pytest.raises(AIUpstreamError):
        await gateway.complete("hello")


async def test_complete_unexpected_envelope_raises_parse_error():
    gateway = AIGateway(
        api_key="test-key",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"content": []})),
    )
    with pytest.raises(AIResponseParseError):
        await gateway.complete("hello")


async def test_estimate_pricing_sends_both_prompts(ai_gateway, fake_claude):
    fake_claude.reply("original retail price", '```json\n{"retailPrice": 325}\n```')
    fake_claude.reply("current resale price", '{"resalePrice": "$140"}')

    result = await ai_gateway.estimate_pricing(
        brand_name="Agolde",
        item_name="90s Pinch Waist Jeans",
        model_style=None,
        category_name="Jeans",
        subcategory_name="Straight",
        condition_label="Excellent",
    )

    assert result.retail_price == 325
    assert result.resale_price == 140
    assert len(fake_claude.requests) == 2
    resale_prompt = next(p for p in fake_claude.prompts if "resale price" in p)
    assert "- Condition: Excellent" in resale_prompt
    assert "- Item: 90s Pinch Waist Jeans\n" in resale_prompt


async def test_estimate_pricing_fails_when_one_prompt_fails(ai_gateway, fake_claude):
    fake_claude.reply("original retail price", '{"retailPrice": 325}')
    # No canned resale reply: FakeClaude answers 500

    with pytest.raises(AIUpstreamError):
        await ai_gateway.estimate_pricing(
            brand_name="Agolde",
            item_name="90s Pinch Waist Jeans",
            model_style=None,
            category_name="Jeans",
            subcategory_name=None,
            condition_label="Excellent",
        )


async def test_estimate_pricing_rejects_missing_number(ai_gateway, fake_claude):
    fake_claude.reply("original retail price", '{"retailPrice": "unknown"}')
    fake_claude.reply("current resale price", '{"resalePrice": 140}')

    with pytest.raises(AIResponseParseError):
        await ai_gateway.estimate_pricing(
            brand_name="Agolde",
            item_name="90s Pinch Waist Jeans",
            model_style=None,
            category_name="Jeans",
            subcategory_name=None,
            condition_label="Excellent",
        )


@pytest.mark.parametrize(
    "retail_reply",
    [
        '{"retailPrice": NaN}',
        '{"retailPrice": Infinity}',
        '{"retailPrice": "Infinity"}',
        '{"retailPrice": "nan"}',
        '{"retailPrice": -325}',
    ],
)
async def test_estimate_pricing_rejects_non_finite_or_negative_price(ai_gateway, fake_claude, retail_reply):
    fake_claude.reply("original retail price", retail_reply)
    fake_claude.reply("current resale price", '{"resalePrice": 140}')

    with pytest.raises(AIResponseParseError):
        await ai_gateway.estimate_pricing(
            brand_name="Agolde",
            item_name="90s Pinch Waist Jeans",
            model_style=None,
            category_name="Jeans",
            subcategory_name=None,
            condition_label="Excellent",
        )


async def test_generate_listing_returns_title_and_description(ai_gateway, fake_claude):
    fake_claude.reply("resale-ready title", '{"title": "Agolde – 90s Pinch Waist Jeans – 30 – Washed Black"}')
    fake_claude.reply("listing description", '{"description": "Great jeans. agolde, denim, straight"}')

    result = await ai_gateway.generate_listing(
        brand_name="Agolde",
        item_name="90s Pinch Waist Jeans",
        model_style=None,
        category_name="Jeans",
        subcategory_name="Straight",
        size="30",
        colour="Washed Black",
        condition_label="Excellent",
        condition_notes="No visible wear",
    )

    assert result.title.startswith("Agolde")
    assert result.description.startswith("Great jeans")
    description_prompt = next(p for p in fake_claude.prompts if "listing description" in p)
    assert "- Condition: Excellent (No visible wear)" in description_prompt


async def test_recognize_item_with_photo_sends_image_block(ai_gateway, fake_claude):
    fake_claude.reply(
        "Please identify",
        '{"brand": "Agolde", "itemType": "Straight jeans", "colour": null, "details": 90}',
    )

    result = await ai_gateway.recognize_item(
        item_name="Jeans",
        photo_base64="data:image/png;base64,iVBORw0KGgo=",
    )

    assert result.brand == "Agolde"
    assert result.item_type == "Straight jeans"
    assert result.colour is None
    assert result.details == "90"

    content = json.loads(fake_claude.requests[0].content)["messages"][0]["content"]
    assert content[0] == {
        "type": "image",
        "source": {"type": "base64", "media_type": "image/png", "data": "iVBORw0KGgo="},
    }
    assert content[1]["type"] == "text"


async def test_recognize_item_prompt_uses_fallbacks(ai_gateway, fake_claude):
    fake_claude.reply("Please identify", "{}")

    await ai_gateway.recognize_item()

    prompt = fake_claude.prompts[0]
    assert "- Item Name: Unknown" in prompt
    assert "- Brand Override: Not specified" in prompt

