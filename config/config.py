"""
Configuration classes for restaurant-operations-core.
Defines the tunable constants of the analytics engine and the purchase-order
workflow in a type-safe, extensible way. Every default reproduces the
behaviour the product has always shipped with.
"""

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


@dataclass
class ForecastConfig:
    min_history: int = 3  # Fewer matching sales records -> no forecast
    stability_threshold: float = 0.05  # |slope| below this share of mean sales is "stable"
    horizon_days: int = 7

    @classmethod
    def from_env(cls) -> "ForecastConfig":
        return cls(
            min_history=_env_int("OPS_FORECAST_MIN_HISTORY", cls.min_history),
            stability_threshold=_env_float("OPS_FORECAST_STABILITY_THRESHOLD", cls.stability_threshold),
            horizon_days=_env_int("OPS_FORECAST_HORIZON_DAYS", cls.horizon_days),
        )


@dataclass
class ReplenishmentConfig:
    safety_stock_days: int = 3
    reorder_buffer_days: int = 7  # Extra week ordered on top of lead time + safety stock
    order_cost: float = 50.0
    holding_cost_rate: float = 0.2
    slow_moving_window_days: int = 30
    slow_moving_min_days_of_stock: float = 60.0
    expiring_within_days: int = 7

    @classmethod
    def from_env(cls) -> "ReplenishmentConfig":
        return cls(
            safety_stock_days=_env_int("OPS_SAFETY_STOCK_DAYS", cls.safety_stock_days),
            reorder_buffer_days=_env_int("OPS_REORDER_BUFFER_DAYS", cls.reorder_buffer_days),
            order_cost=_env_float("OPS_ORDER_COST", cls.order_cost),
            holding_cost_rate=_env_float("OPS_HOLDING_COST_RATE", cls.holding_cost_rate),
            slow_moving_window_days=_env_int("OPS_SLOW_MOVING_WINDOW_DAYS", cls.slow_moving_window_days),
            slow_moving_min_days_of_stock=_env_float(
                "OPS_SLOW_MOVING_MIN_DAYS_OF_STOCK", cls.slow_moving_min_days_of_stock
            ),
            expiring_within_days=_env_int("OPS_EXPIRING_WITHIN_DAYS", cls.expiring_within_days),
        )


@dataclass
class ValuationConfig:
    neutral_band_percent: float = 0.5  # Changes within +/- this band report "neutral"
    window_days: int = 30  # Length of the current and previous comparison periods
    top_selling_limit: int = 5
    forecast_limit: int = 5  # Forecasts kept on the dashboard
    daily_revenue_days: int = 7

    @classmethod
    def from_env(cls) -> "ValuationConfig":
        return cls(
            neutral_band_percent=_env_float("OPS_NEUTRAL_BAND_PERCENT", cls.neutral_band_percent),
            window_days=_env_int("OPS_WINDOW_DAYS", cls.window_days),
            top_selling_limit=_env_int("OPS_TOP_SELLING_LIMIT", cls.top_selling_limit),
            forecast_limit=_env_int("OPS_FORECAST_LIMIT", cls.forecast_limit),
            daily_revenue_days=_env_int("OPS_DAILY_REVENUE_DAYS", cls.daily_revenue_days),
        )


@dataclass
class ProcurementConfig:
    tax_rate: float = 0.08
    order_number_prefix: str = "PO"

    @classmethod
    def from_env(cls) -> "ProcurementConfig":
        return cls(
            tax_rate=_env_float("OPS_TAX_RATE", cls.tax_rate),
            order_number_prefix=os.getenv("OPS_ORDER_NUMBER_PREFIX") or cls.order_number_prefix,
        )


# Example usage:
# forecast_config = ForecastConfig.from_env()
# replenishment_config = ReplenishmentConfig(reorder_buffer_days=10)
