"""Operations analytics for restaurant locations"""

from .forecasting import classify_trend, forecast_demand, forecast_items
from .operations import build_operations_snapshot, calculate_spending, daily_revenue, top_selling_items
from .replenishment import (
    calculate_reorder_recommendation,
    days_until_expiration,
    expiring_items,
    identify_slow_moving_items,
    low_stock_items,
    optimize_purchase_quantity,
)
from .valuation import calculate_inventory_value, calculate_trend_percentage, value_by_category
from .waste import identify_waste_patterns, waste_by_item

__all__ = [
    # Forecasting
    "classify_trend",
    "forecast_demand",
    "forecast_items",
    # Waste
    "identify_waste_patterns",
    "waste_by_item",
    # Valuation
    "calculate_inventory_value",
    "calculate_trend_percentage",
    "value_by_category",
    # Replenishment
    "calculate_reorder_recommendation",
    "optimize_purchase_quantity",
    "identify_slow_moving_items",
    "low_stock_items",
    "expiring_items",
    "days_until_expiration",
    # Dashboard
    "build_operations_snapshot",
    "calculate_spending",
    "daily_revenue",
    "top_selling_items",
]
