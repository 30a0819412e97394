"""
Replenishment advice: when to reorder, how much, and which stock is not moving.
"""

import logging
import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from config.config import ReplenishmentConfig
from models.analytics import ExpiringItem, ReorderRecommendation, SlowMovingItem
from models.inventory import InventoryItem
from models.sales import SalesRecord

logger = logging.getLogger(__name__)


def calculate_reorder_recommendation(
    current_stock: float,
    avg_daily_sales: float,
    lead_time_days: float,
    safety_stock_days: float | None = None,
    config: ReplenishmentConfig | None = None,
) -> ReorderRecommendation:
    """
    Check stock against the reorder point and size the order.

    The reorder point covers demand over the lead time plus the safety stock
    window. An order tops stock up to that cover plus ``reorder_buffer_days``
    (one week by default). With no sales velocity nothing is reordered.
    ``safety_stock_days`` defaults to ``config.safety_stock_days``.
    """
    config = config or ReplenishmentConfig()
    if safety_stock_days is None:
        safety_stock_days = config.safety_stock_days
    reorder_point = avg_daily_sales * (lead_time_days + safety_stock_days)
    should_reorder = avg_daily_sales > 0 and current_stock <= reorder_point

    if not should_reorder:
        return ReorderRecommendation(should_reorder=False, recommended_quantity=0)

    cover_days = lead_time_days + safety_stock_days + config.reorder_buffer_days
    quantity = math.ceil(avg_daily_sales * cover_days - current_stock)
    logger.debug(
        f"Stock {current_stock} at or below reorder point {reorder_point:.2f}; recommending {quantity} units"
    )
    return ReorderRecommendation(should_reorder=True, recommended_quantity=quantity)


def optimize_purchase_quantity(
    avg_daily_sales: float,
    cost_per_unit: float,
    order_cost: float | None = None,
    holding_cost_rate: float | None = None,
    config: ReplenishmentConfig | None = None,
) -> int:
    """
    Economic Order Quantity: sqrt(2 * annual demand * order cost / holding cost per unit).

    The result is rounded up and never below 1. Without demand or without a
    holding cost the formula has no meaningful answer and 1 is returned.
    Costs left as None come from ``config``.
    """
    config = config or ReplenishmentConfig()
    if order_cost is None:
        order_cost = config.order_cost
    if holding_cost_rate is None:
        holding_cost_rate = config.holding_cost_rate
    annual_demand = avg_daily_sales * 365
    holding_cost_per_unit = cost_per_unit * holding_cost_rate
    if annual_demand <= 0 or holding_cost_per_unit <= 0:
        logger.debug(
            f"Degenerate EOQ inputs (annual demand {annual_demand}, holding cost {holding_cost_per_unit})"
        )
        return 1

    eoq = math.sqrt(2 * annual_demand * order_cost / holding_cost_per_unit)
    return max(1, math.ceil(eoq))


def days_until_expiration(expiration_date: date, today: date) -> int:
    """Whole days until ``expiration_date``; negative once it has passed."""
    return (expiration_date - today).days


def low_stock_items(items: Iterable[InventoryItem]) -> list[InventoryItem]:
    """Items at or below their reorder point."""
    return [item for item in items if item.is_low_stock()]


def expiring_items(items: Iterable[InventoryItem], today: date, within_days: int = 7) -> list[ExpiringItem]:
    """Items expiring between today and ``within_days`` from now, soonest first."""
    expiring = []
    for item in items:
        if item.expiration_date is None:
            continue
        days = days_until_expiration(item.expiration_date, today)
        if 0 <= days <= within_days:
            expiring.append(ExpiringItem(item=item, days_until_expiry=days))
    return sorted(expiring, key=lambda entry: entry.days_until_expiry)


def identify_slow_moving_items(
    items: Iterable[InventoryItem],
    sales: Iterable[SalesRecord],
    now: datetime,
    days: int | None = None,
    min_days_of_stock: float | None = None,
    config: ReplenishmentConfig | None = None,
) -> list[SlowMovingItem]:
    """
    Find stock that will take more than ``min_days_of_stock`` days to sell.

    The sales rate of each item is averaged over the ``days`` days ending at
    ``now``. Items that did not sell at all have infinite days of stock. Items
    with no stock are ignored. The slowest items come first.
    """
    config = config or ReplenishmentConfig()
    if days is None:
        days = config.slow_moving_window_days
    if min_days_of_stock is None:
        min_days_of_stock = config.slow_moving_min_days_of_stock
    today = now.date()
    window_start = today - timedelta(days=days)

    sold_in_window: dict[str, float] = {}
    for record in sales:
        if window_start <= record.date <= today:
            sold_in_window[record.item_id] = sold_in_window.get(record.item_id, 0.0) + record.quantity_sold

    slow_moving = []
    for item in items:
        avg_daily_sales = sold_in_window.get(item.id, 0.0) / days
        days_of_stock = item.current_stock / avg_daily_sales if avg_daily_sales > 0 else math.inf
        if days_of_stock > min_days_of_stock and item.current_stock > 0:
            slow_moving.append(
                SlowMovingItem(item=item, avg_daily_sales=avg_daily_sales, days_of_stock=days_of_stock)
            )

    slow_moving.sort(key=lambda entry: entry.days_of_stock, reverse=True)
    logger.debug(f"{len(slow_moving)} slow-moving items in the {days}-day window ending {today}")
    return slow_moving
