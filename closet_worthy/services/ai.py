"""
AI gateway for item recognition, price estimates and listing copy
Talks to the Anthropic Messages API over HTTP
Reference: https://docs.anthropic.com/en/api/messages
"""
import asyncio
import json
import logging
import math
import re
from functools import lru_cache
from typing import Any, Optional, Union

import httpx

from closet_worthy.api.schemas.ai import ListingResult, PricingResult, RecognitionResult
from closet_worthy.core.config import settings
from closet_worthy.core.exceptions import (
    AIResponseParseError,
    AIServiceNotConfiguredError,
    AIUpstreamError,
)
from closet_worthy.services import prompts

logger = logging.getLogger(__name__)

# Models wrap JSON in markdown fences even when asked not to
_CODE_FENCE = re.compile(r"```json\n?|```\n?")
_DATA_URL = re.compile(r"^data:(?P<media_type>image/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers and surrounding whitespace."""
    return _CODE_FENCE.sub("", text).strip()


def parse_json_reply(text: str) -> dict[str, Any]:
    """
    Parse a model reply that should contain a single JSON object.

    Raises:
        AIResponseParseError: If the reply is not a JSON object after fence stripping
    """
    cleaned = strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse AI response: {text!r}")
        raise AIResponseParseError("AI reply is not valid JSON", raw_text=text) from e
    if not isinstance(parsed, dict):
        logger.error(f"AI response is not a JSON object: {text!r}")
        raise AIResponseParseError("AI reply is not a JSON object", raw_text=text)
    return parsed


def _number_field(payload: dict[str, Any], key: str) -> float:
    """
    Read a price from the reply as a finite, non-negative float.

    json.loads accepts bare NaN/Infinity and float() accepts "nan"/"inf",
    so both spellings are checked after conversion.
    """
    value = payload.get(key)
    number: Optional[float] = None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
    # Tolerate quoted numbers such as "325" or "$1,200"
    elif isinstance(value, str):
        try:
            number = float(value.replace("$", "").replace(",", "").strip())
        except ValueError:
            number = None
    if number is None:
        raise AIResponseParseError(f"'{key}' is missing or not a number", raw_text=json.dumps(payload))
    if not math.isfinite(number) or number < 0:
        raise AIResponseParseError(f"'{key}' is not a valid price", raw_text=json.dumps(payload))
    return number


def _text_field(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise AIResponseParseError(f"'{key}' is missing or empty", raw_text=json.dumps(payload))
    return value.strip()


def _image_block(photo_base64: str) -> dict[str, Any]:
    """
    Build an image content block from raw base64 or a data: URL.

    Raw base64 is assumed to be JPEG.
    """
    match = _DATA_URL.match(photo_base64.strip())
    if match:
        media_type, data = match.group("media_type"), match.group("data")
    else:
        media_type, data = "image/jpeg", photo_base64.strip()
    return {
        "type": "image",
        "source": {"type": "base64", "media_type": media_type, "data": data},
    }


@lru_cache()
def get_ai_gateway() -> "AIGateway":
    """
    Get a singleton AIGateway configured from settings.

    Reference: https://docs.python.org/3/library/functools.html#functools.lru_cache
    """
    return AIGateway(api_key=settings.ANTHROPIC_API_KEY)


class AIGateway:
    """
    Turns item attributes into prompts and model replies into typed results.

    Every operation is a single prompt/response round trip (two in parallel
    for pricing and listing). Nothing is retried; any failure raises an
    AIServiceError subclass and no partial result is returned.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        api_url: Optional[str] = None,
        api_version: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url or settings.ANTHROPIC_API_URL
        self.api_version = api_version or settings.ANTHROPIC_API_VERSION
        self.model = model or settings.AI_MODEL
        self.max_tokens = max_tokens or settings.AI_MAX_TOKENS
        self.timeout = timeout or settings.AI_TIMEOUT_SECONDS
        # Tests swap in httpx.MockTransport here
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def complete(self, content: Union[str, list[dict[str, Any]]]) -> str:
        """
        Send one user message and return the text of the reply.

        Args:
            content: Prompt text, or a list of content blocks (text and images)

        Returns:
            Text of the first content block in the reply

        Raises:
            AIServiceNotConfiguredError: If no API key is set
            AIUpstreamError: On transport errors or non-2xx responses
            AIResponseParseError: If the response envelope is malformed
        """
        if not self.api_key:
            raise AIServiceNotConfiguredError()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Content-Type": "application/json",
                        "x-api-key": self.api_key,
                        "anthropic-version": self.api_version,
                    },
                    json={
                        "model": self.model,
                        "max_tokens": self.max_tokens,
                        "messages": [{"role": "user", "content": content}],
                    },
                )
        except httpx.HTTPError as e:
            raise AIUpstreamError(f"Claude API request failed: {type(e).__name__}: {e}") from e

        if response.is_error:
            raise AIUpstreamError(
                f"Claude API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            return response.json()["content"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise AIResponseParseError(
                "Unexpected Claude API response shape", raw_text=response.text
            ) from e

    async def recognize_item(
        self,
        item_name: Optional[str] = None,
        brand_override: Optional[str] = None,
        model_style: Optional[str] = None,
        category_name: Optional[str] = None,
        subcategory_name: Optional[str] = None,
        size: Optional[str] = None,
        colour: Optional[str] = None,
        photo_base64: Optional[str] = None,
    ) -> RecognitionResult:
        """Best-effort identification of an item from partial descriptors and an optional photo."""
        prompt = prompts.recognition_prompt(
            item_name=item_name,
            brand_override=brand_override,
            model_style=model_style,
            category_name=category_name,
            subcategory_name=subcategory_name,
            size=size,
            colour=colour,
        )
        content: Union[str, list[dict[str, Any]]] = prompt
        if photo_base64:
            content = [_image_block(photo_base64), {"type": "text", "text": prompt}]

        reply = await self.complete(content)
        payload = parse_json_reply(reply)
        # Models sometimes answer with null or numbers; keep only usable strings
        cleaned = {
            key: str(value) for key, value in payload.items()
            if value is not None and not isinstance(value, (dict, list))
        }
        return RecognitionResult.model_validate(cleaned)

    async def estimate_pricing(
        self,
        brand_name: str,
        item_name: str,
        model_style: Optional[str],
        category_name: str,
        subcategory_name: Optional[str],
        condition_label: str,
    ) -> PricingResult:
        """
        Estimate retail and resale prices in CAD.

        The two prompts run concurrently; if either fails the whole call fails.
        """
        retail_prompt = prompts.retail_price_prompt(
            brand_name, item_name, model_style, category_name, subcategory_name
        )
        resale_prompt = prompts.resale_price_prompt(
            brand_name, item_name, model_style, category_name, subcategory_name, condition_label
        )

        retail_reply, resale_reply = await asyncio.gather(
            self.complete(retail_prompt),
            self.complete(resale_prompt),
        )

        retail_price = _number_field(parse_json_reply(retail_reply), "retailPrice")
        resale_price = _number_field(parse_json_reply(resale_reply), "resalePrice")
        logger.info(
            f"Estimated pricing for '{brand_name} {item_name}': "
            f"retail {retail_price:.2f} CAD, resale {resale_price:.2f} CAD"
        )
        return PricingResult(retail_price=retail_price, resale_price=resale_price)

    async def generate_listing(
        self,
        brand_name: str,
        item_name: str,
        model_style: Optional[str],
        category_name: str,
        subcategory_name: Optional[str],
        size: str,
        colour: str,
        condition_label: str,
        condition_notes: Optional[str] = None,
    ) -> ListingResult:
        """
        Write a marketplace title and description.

        The two prompts run concurrently; if either fails the whole call fails.
        """
        title_prompt = prompts.listing_title_prompt(
            brand_name, item_name, model_style, category_name, size, colour
        )
        description_prompt = prompts.listing_description_prompt(
            brand_name,
            item_name,
            model_style,
            category_name,
            subcategory_name,
            size,
            colour,
            condition_label,
            condition_notes,
        )

        title_reply, description_reply = await asyncio.gather(
            self.complete(title_prompt),
            self.complete(description_prompt),
        )

        return ListingResult(
            title=_text_field(parse_json_reply(title_reply), "title"),
            description=_text_field(parse_json_reply(description_reply), "description"),
        )
