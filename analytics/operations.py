"""
Location dashboard aggregation.

Combines valuation, replenishment, waste and forecasting results for one
location at an explicit point in time.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta

import pandas as pd

from config.config import ForecastConfig, ReplenishmentConfig, ValuationConfig
from models.analytics import OperationsSnapshot, TopSellingItem
from models.enums import OrderStatus
from models.inventory import InventoryItem
from models.procurement import PurchaseOrder
from models.sales import SalesRecord, WasteRecord

from .forecasting import forecast_items
from .replenishment import expiring_items, low_stock_items
from .valuation import calculate_inventory_value, calculate_trend_percentage, value_by_category
from .waste import identify_waste_patterns

logger = logging.getLogger(__name__)

# Orders in these states do not count towards spending
EXCLUDED_SPENDING_STATUSES = frozenset({OrderStatus.REJECTED, OrderStatus.CANCELLED})


def top_selling_items(sales: Iterable[SalesRecord], limit: int = 5) -> list[TopSellingItem]:
    """Sales grouped by item name, highest revenue first."""
    frame = pd.DataFrame(
        [{"item_name": s.item_name, "quantity": s.quantity_sold, "revenue": s.revenue} for s in sales]
    )
    if frame.empty:
        return []
    grouped = (
        frame.groupby("item_name", sort=False)
        .sum()
        .sort_values("revenue", ascending=False, kind="stable")
        .head(limit)
    )
    return [
        TopSellingItem(item_name=name, quantity=float(row.quantity), revenue=float(row.revenue))
        for name, row in grouped.iterrows()
    ]


def daily_revenue(sales: Iterable[SalesRecord], today: date, days: int = 7) -> list[tuple[date, float]]:
    """Revenue per calendar day for the ``days`` days ending ``today``, oldest first."""
    totals = {today - timedelta(days=offset): 0.0 for offset in range(days - 1, -1, -1)}
    for record in sales:
        if record.date in totals:
            totals[record.date] += record.revenue
    return list(totals.items())


def calculate_spending(orders: Iterable[PurchaseOrder], since: datetime) -> float:
    """Total of orders created since ``since`` that were neither rejected nor cancelled."""
    return sum(
        (
            order.total
            for order in orders
            if order.created_at >= since and order.status not in EXCLUDED_SPENDING_STATUSES
        ),
        0.0,
    )


def build_operations_snapshot(
    location_id: str,
    inventory: Iterable[InventoryItem],
    sales: Iterable[SalesRecord],
    waste: Iterable[WasteRecord],
    orders: Iterable[PurchaseOrder],
    now: datetime,
    window_days: int | None = None,
    forecast_days: int | None = None,
    valuation_config: ValuationConfig | None = None,
    replenishment_config: ReplenishmentConfig | None = None,
    forecast_config: ForecastConfig | None = None,
) -> OperationsSnapshot:
    """
    Build the dashboard figures for ``location_id`` as of ``now``.

    Revenue covers the ``window_days`` days ending today and is compared with
    the window before it. ``window_days`` and ``forecast_days`` default to
    ``ValuationConfig.window_days`` and ``ForecastConfig.horizon_days``. At most
    ``ValuationConfig.forecast_limit`` forecasts are kept, in inventory order.
    """
    valuation_config = valuation_config or ValuationConfig()
    replenishment_config = replenishment_config or ReplenishmentConfig()
    forecast_config = forecast_config or ForecastConfig()
    if window_days is None:
        window_days = valuation_config.window_days
    if forecast_days is None:
        forecast_days = forecast_config.horizon_days

    location_inventory = [item for item in inventory if item.location_id == location_id]
    location_sales = [s for s in sales if s.location_id == location_id]
    location_waste = [w for w in waste if w.location_id == location_id]
    location_orders = [o for o in orders if o.location_id == location_id]

    today = now.date()
    window = timedelta(days=window_days)
    current_start = today - window
    previous_start = today - 2 * window

    current_sales = [s for s in location_sales if current_start <= s.date <= today]
    previous_sales = [s for s in location_sales if previous_start <= s.date < current_start]
    revenue = sum((s.revenue for s in current_sales), 0.0)
    previous_revenue = sum((s.revenue for s in previous_sales), 0.0)

    snapshot = OperationsSnapshot(
        location_id=location_id,
        generated_at=now,
        inventory_value=calculate_inventory_value(location_inventory),
        revenue=revenue,
        previous_revenue=previous_revenue,
        revenue_trend=calculate_trend_percentage(
            revenue, previous_revenue, valuation_config.neutral_band_percent
        ),
        low_stock_count=len(low_stock_items(location_inventory)),
        monthly_spending=calculate_spending(location_orders, now - window),
        expiring_items=expiring_items(location_inventory, today, replenishment_config.expiring_within_days),
        top_selling_items=top_selling_items(current_sales, valuation_config.top_selling_limit),
        waste_patterns=identify_waste_patterns(location_waste),
        category_distribution=value_by_category(location_inventory),
        daily_revenue=daily_revenue(location_sales, today, valuation_config.daily_revenue_days),
        forecasts=forecast_items(
            location_sales, [item.id for item in location_inventory], forecast_days, forecast_config
        )[: valuation_config.forecast_limit],
    )
    logger.info(
        f"Built operations snapshot for {location_id}: value {snapshot.inventory_value:.2f}, "
        f"revenue {revenue:.2f} ({snapshot.revenue_trend.direction.value}), "
        f"{len(snapshot.forecasts)} forecasts"
    )
    return snapshot
