"""
AI routes
Forward item attributes to the language model and return structured results

Errors are returned as {"error": "..."} rather than FastAPI's {"detail": ...}
so browser clients can show the message directly.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from closet_worthy.api.schemas.ai import (
    ErrorResponse,
    ListingRequest,
    ListingResult,
    PricingRequest,
    PricingResult,
    RecognitionResult,
    RecognizeRequest,
)
from closet_worthy.core.exceptions import AIServiceNotConfiguredError
from closet_worthy.services.ai import AIGateway, get_ai_gateway

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ai",
    tags=["ai"],
)

MISSING_FIELDS = "Missing required fields"
AI_DISABLED = "AI features are disabled"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing required fields or invalid request body"},
    500: {"model": ErrorResponse, "description": "Upstream call failed or reply was not valid JSON"},
    503: {"model": ErrorResponse, "description": "AI features are disabled"},
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/recognize",
    response_model=RecognitionResult,
    summary="Recognize item",
    description="Best-effort identification of brand, type, category, colour, fabric and details.",
    responses={500: ERROR_RESPONSES[500], 503: ERROR_RESPONSES[503]},
)
async def recognize_item(
    request: RecognizeRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    """
    Identify an item from partial descriptors. No field is required.
    """
    try:
        return await gateway.recognize_item(
            item_name=request.item_name,
            brand_override=request.brand_override,
            model_style=request.model_style,
            category_name=request.category_name,
            subcategory_name=request.subcategory_name,
            size=request.size,
            colour=request.colour,
            photo_base64=request.photo_base64,
        )
    except AIServiceNotConfiguredError:
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, AI_DISABLED)
    except Exception as e:
        logger.error(f"Recognition API error: {type(e).__name__}: {e}", exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to recognize item")


@router.post(
    "/pricing",
    response_model=PricingResult,
    summary="Estimate pricing",
    description="Estimate original retail and current resale prices in CAD.",
    responses=ERROR_RESPONSES,
)
async def estimate_pricing(
    request: PricingRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    """
    Estimate retail and resale prices.

    Requires brandName, itemName, categoryName and conditionLabel. Requests
    missing any of them are rejected before the model is called.
    """
    missing = request.missing_required_fields()
    if missing:
        logger.warning(f"Pricing request missing fields: {', '.join(missing)}")
        return error_response(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS)

    try:
        return await gateway.estimate_pricing(
            brand_name=request.brand_name,
            item_name=request.item_name,
            model_style=request.model_style,
            category_name=request.category_name,
            subcategory_name=request.subcategory_name,
            condition_label=request.condition_label,
        )
    except AIServiceNotConfiguredError:
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, AI_DISABLED)
    except Exception as e:
        logger.error(f"Pricing API error: {type(e).__name__}: {e}", exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to estimate pricing")


@router.post(
    "/listing",
    response_model=ListingResult,
    summary="Generate listing",
    description="Write a resale title and description for Grailed/Vestiaire-style marketplaces.",
    responses=ERROR_RESPONSES,
)
async def generate_listing(
    request: ListingRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    """
    Generate listing copy.

    Requires brandName, itemName, categoryName, size, colour and
    conditionLabel; conditionNotes is optional.
    """
    missing = request.missing_required_fields()
    if missing:
        logger.warning(f"Listing request missing fields: {', '.join(missing)}")
        return error_response(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS)

    try:
        return await gateway.generate_listing(
            brand_name=request.brand_name,
            item_name=request.item_name,
            model_style=request.model_style,
            category_name=request.category_name,
            subcategory_name=request.subcategory_name,
            size=request.size,
            colour=request.colour,
            condition_label=request.condition_label,
            condition_notes=request.condition_notes,
        )
    except AIServiceNotConfiguredError:
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, AI_DISABLED)
    except Exception as e:
        logger.error(f"Listing API error: {type(e).__name__}: {e}", exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate listing")
