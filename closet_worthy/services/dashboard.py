"""
Dashboard aggregation over the full item list
"""
from collections import OrderedDict
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Optional, Sequence

from closet_worthy.api.schemas.dashboard import DashboardMetrics, GroupValue
from closet_worthy.models.closet_item import ClosetItem, ItemStatus

UNKNOWN = "Unknown"
TOP_BRANDS = 10


def _amount(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def group_resale_value(
    items: Iterable[ClosetItem],
    key: Callable[[ClosetItem], Optional[str]],
    limit: Optional[int] = None,
) -> list[GroupValue]:
    """
    Sum estimated resale value per group, highest first.

    Items whose key is empty fall into "Unknown". Sums are rounded to
    whole dollars (half up); ties keep first-seen order.
    """
    totals: "OrderedDict[str, Decimal]" = OrderedDict()
    for item in items:
        name = key(item) or UNKNOWN
        totals[name] = totals.get(name, Decimal("0")) + _amount(item.estimated_resale_value_cad)

    groups = [
        GroupValue(name=name, value=int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))
        for name, total in totals.items()
    ]
    groups.sort(key=lambda group: group.value, reverse=True)
    return groups[:limit] if limit is not None else groups


def compute_dashboard_metrics(items: Sequence[ClosetItem]) -> DashboardMetrics:
    """
    Totals, to-do counts and value breakdowns for the dashboard.

    Items must have their brand and category relationships loaded.
    """
    total_retail = sum((_amount(item.retail_price_cad) for item in items), Decimal("0"))
    total_resale = sum((_amount(item.estimated_resale_value_cad) for item in items), Decimal("0"))

    return DashboardMetrics(
        total_items=len(items),
        total_retail_value=float(total_retail),
        total_resale_value=float(total_resale),
        items_to_sell=sum(1 for item in items if item.status == ItemStatus.SELL.value),
        items_to_photograph=sum(1 for item in items if not item.has_photos),
        items_to_price=sum(1 for item in items if item.needs_pricing),
        brand_values=group_resale_value(items, lambda item: item.brand_name, limit=TOP_BRANDS),
        category_values=group_resale_value(items, lambda item: item.category_name),
    )
