"""
Inventory valuation and period-over-period comparisons.
"""

import logging
from collections.abc import Iterable

from models.analytics import TrendComparison
from models.enums import TrendDirection
from models.inventory import InventoryItem

logger = logging.getLogger(__name__)


def calculate_inventory_value(items: Iterable[InventoryItem]) -> float:
    """Total value of stock on hand (stock x unit cost); 0 for no items."""
    return sum((item.current_stock * item.cost_per_unit for item in items), 0.0)


def value_by_category(items: Iterable[InventoryItem]) -> dict[str, float]:
    """Stock value per category, in order of first appearance."""
    distribution: dict[str, float] = {}
    for item in items:
        distribution[item.category] = distribution.get(item.category, 0.0) + item.stock_value
    return distribution


def calculate_trend_percentage(
    current: float, previous: float, neutral_band_percent: float = 0.5
) -> TrendComparison:
    """
    Compare a metric with its value in the previous period.

    Returns the absolute percentage change and its direction. A previous value
    of 0 has no comparable baseline and reports (0, neutral); changes within
    +/- ``neutral_band_percent`` are also neutral.
    """
    if previous == 0:
        logger.debug("No baseline for trend comparison; reporting neutral")
        return TrendComparison(percentage=0.0, direction=TrendDirection.NEUTRAL)

    change = (current - previous) / previous * 100
    if change > neutral_band_percent:
        direction = TrendDirection.UP
    elif change < -neutral_band_percent:
        direction = TrendDirection.DOWN
    else:
        direction = TrendDirection.NEUTRAL
    return TrendComparison(percentage=abs(change), direction=direction)
