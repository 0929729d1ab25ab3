"""
Pydantic schemas for API request/response models
"""

from closet_worthy.api.schemas.ai import (
    ListingRequest,
    ListingResult,
    PricingRequest,
    PricingResult,
    RecognitionResult,
    RecognizeRequest,
)
from closet_worthy.api.schemas.closet_item import (
    ClosetItemCreate,
    ClosetItemResponse,
    ClosetItemUpdate,
)
from closet_worthy.api.schemas.dashboard import DashboardMetrics, GroupValue

__all__ = [
    "ClosetItemCreate",
    "ClosetItemResponse",
    "ClosetItemUpdate",
    "DashboardMetrics",
    "GroupValue",
    "ListingRequest",
    "ListingResult",
    "PricingRequest",
    "PricingResult",
    "RecognitionResult",
    "RecognizeRequest",
]
