"""
Per-item demand forecasting from daily sales history.

A straight line is fitted through an item's chronologically ordered sales and
extrapolated to the last day of the forecast window. The fit's r2 doubles as
the confidence score.
"""

import logging
import math
from collections.abc import Iterable, Sequence

import numpy as np

from config.config import ForecastConfig
from models.analytics import ForecastResult
from models.enums import DemandTrend
from models.sales import SalesRecord
from utils.statistics import linear_regression

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify_trend(slope: float, mean_quantity: float, threshold: float = 0.05) -> DemandTrend:
    """Label a fitted slope relative to the mean quantity sold."""
    if abs(slope) < mean_quantity * threshold:
        return DemandTrend.STABLE
    return DemandTrend.INCREASING if slope > 0 else DemandTrend.DECREASING


def forecast_demand(
    sales_history: Iterable[SalesRecord],
    item_id: str,
    days_to_forecast: int = 7,
    config: ForecastConfig | None = None,
) -> ForecastResult | None:
    """
    Forecast the quantity of ``item_id`` sold on the last day of the next
    ``days_to_forecast`` days.

    Args:
        sales_history: Sales records for any number of items, in any order.
        item_id: Item to forecast.
        days_to_forecast: Length of the forecast window.
        config: Thresholds; defaults to ForecastConfig().

    Returns:
        A ForecastResult, or None when fewer than ``config.min_history``
        records exist for the item.
    """
    config = config or ForecastConfig()
    # sorted() is stable, so same-day records keep their input order
    item_sales = sorted((s for s in sales_history if s.item_id == item_id), key=lambda s: s.date)

    if len(item_sales) < config.min_history:
        logger.debug(f"Not enough sales history to forecast {item_id} ({len(item_sales)} records)")
        return None

    n = len(item_sales)
    x_values = list(range(n))
    y_values = [s.quantity_sold for s in item_sales]
    regression = linear_regression(x_values, y_values)

    # Extrapolate to the end of the window, not its first day
    next_x = n + days_to_forecast - 1
    predicted = max(0.0, regression.slope * next_x + regression.intercept)

    trend = classify_trend(regression.slope, float(np.mean(y_values)), config.stability_threshold)

    return ForecastResult(
        item_id=item_id,
        item_name=item_sales[0].item_name,
        predicted_quantity=_round_half_up(predicted),
        confidence_percent=_round_half_up(regression.r2 * 100),
        trend=trend,
    )


def forecast_items(
    sales_history: Sequence[SalesRecord],
    item_ids: Iterable[str],
    days_to_forecast: int = 7,
    config: ForecastConfig | None = None,
) -> list[ForecastResult]:
    """Forecast every item in ``item_ids`` that has enough history, keeping the given order."""
    forecasts = []
    for item_id in item_ids:
        result = forecast_demand(sales_history, item_id, days_to_forecast, config)
        if result is not None:
            forecasts.append(result)
    return forecasts
