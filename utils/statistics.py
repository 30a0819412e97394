"""
Numeric primitives shared by the analytics modules.

Only ordinary-least-squares regression lives here for now; it backs the demand
forecast and its confidence score.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegressionResult:
    """Slope, intercept and coefficient of determination of a fitted line."""

    slope: float
    intercept: float
    r2: float


def linear_regression(x_values: Sequence[float], y_values: Sequence[float]) -> RegressionResult:
    """
    Fit ``y = slope * x + intercept`` with the closed-form least-squares formulas.

    Args:
        x_values: Independent variable observations.
        y_values: Dependent variable observations, same length as ``x_values``.

    Returns:
        A RegressionResult. Empty input yields (0, 0, 0). When every ``y`` is
        identical r2 is 0, and r2 is always clamped to [0, 1]. When every ``x``
        is identical (a single point included) the slope is 0 and the line
        passes through the mean of ``y``.

    Raises:
        ValueError: If the two sequences differ in length.
    """
    x = np.asarray(x_values, dtype=float)
    y = np.asarray(y_values, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"x and y must have the same length (got {x.size} and {y.size})")

    n = x.size
    if n == 0:
        return RegressionResult(slope=0.0, intercept=0.0, r2=0.0)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_x2 = (x * x).sum()

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        logger.debug("Regression over constant x values; slope defaults to 0")
        slope = 0.0
    else:
        slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    mean_y = sum_y / n
    ss_total = ((y - mean_y) ** 2).sum()
    ss_residual = ((y - (slope * x + intercept)) ** 2).sum()
    r2 = 0.0 if ss_total == 0 else 1 - ss_residual / ss_total

    return RegressionResult(
        slope=float(slope),
        intercept=float(intercept),
        r2=float(np.clip(r2, 0.0, 1.0)),
    )
