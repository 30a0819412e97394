"""
Result objects returned by the analytics modules.
They are created fresh on every call and carry no identity of their own.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from .enums import DemandTrend, TrendDirection, WasteReason
from .inventory import InventoryItem


@dataclass(frozen=True)
class ForecastResult:
    """Predicted demand for one item at the end of a forecast window."""

    item_id: str
    item_name: str
    predicted_quantity: int
    confidence_percent: int  # r2 of the fitted line, as a 0-100 score
    trend: DemandTrend


@dataclass(frozen=True)
class WastePattern:
    """Waste totals for one reason and its share of the overall waste cost."""

    reason: WasteReason
    total_quantity: float
    total_cost: float
    percentage_of_total_cost: float


@dataclass(frozen=True)
class WasteItemSummary:
    item_id: str
    item_name: str
    total_quantity: float
    total_cost: float


@dataclass(frozen=True)
class TrendComparison:
    """Magnitude of a period-over-period change; the sign lives in ``direction``."""

    percentage: float
    direction: TrendDirection


@dataclass(frozen=True)
class ReorderRecommendation:
    should_reorder: bool
    recommended_quantity: int


@dataclass(frozen=True)
class SlowMovingItem:
    item: InventoryItem
    avg_daily_sales: float
    days_of_stock: float  # math.inf when the item did not sell in the window


@dataclass(frozen=True)
class ExpiringItem:
    item: InventoryItem
    days_until_expiry: int


@dataclass(frozen=True)
class TopSellingItem:
    item_name: str
    quantity: float
    revenue: float


@dataclass
class OperationsSnapshot:
    """
    Everything the location dashboard shows, computed for one location at
    ``generated_at``.
    """

    location_id: str
    generated_at: datetime
    inventory_value: float
    revenue: float
    previous_revenue: float
    revenue_trend: TrendComparison
    low_stock_count: int
    monthly_spending: float
    expiring_items: list[ExpiringItem] = field(default_factory=list)
    top_selling_items: list[TopSellingItem] = field(default_factory=list)
    waste_patterns: list[WastePattern] = field(default_factory=list)
    category_distribution: dict[str, float] = field(default_factory=dict)
    daily_revenue: list[tuple[date, float]] = field(default_factory=list)  # oldest day first, zero-filled
    forecasts: list[ForecastResult] = field(default_factory=list)
