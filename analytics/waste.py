"""
Waste pattern analysis: where the money lost to discarded inventory goes.
"""

import logging
from collections.abc import Iterable

import pandas as pd

from models.analytics import WasteItemSummary, WastePattern
from models.enums import WasteReason
from models.sales import WasteRecord

logger = logging.getLogger(__name__)


def _waste_frame(waste_records: Iterable[WasteRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "reason": record.reason.value,
                "item_id": record.item_id,
                "item_name": record.item_name,
                "quantity": record.quantity_wasted,
                "cost": record.cost_impact,
            }
            for record in waste_records
        ]
    )


def identify_waste_patterns(waste_records: Iterable[WasteRecord]) -> list[WastePattern]:
    """
    Group waste by reason and rank the reasons by total cost.

    Each pattern carries its share of the overall waste cost; the shares sum
    to 100 whenever any waste cost was recorded and are all 0 otherwise.
    Reasons with equal cost keep the order in which they first appear.
    """
    frame = _waste_frame(waste_records)
    if frame.empty:
        return []

    grouped = frame.groupby("reason", sort=False).agg(
        total_quantity=("quantity", "sum"),
        total_cost=("cost", "sum"),
    )
    total_cost = float(grouped["total_cost"].sum())
    if total_cost > 0:
        grouped["percentage"] = grouped["total_cost"] / total_cost * 100
    else:
        logger.debug("Waste records carry no cost; all percentages are 0")
        grouped["percentage"] = 0.0

    grouped = grouped.sort_values("total_cost", ascending=False, kind="stable")
    return [
        WastePattern(
            reason=WasteReason(reason),
            total_quantity=float(row.total_quantity),
            total_cost=float(row.total_cost),
            percentage_of_total_cost=float(row.percentage),
        )
        for reason, row in grouped.iterrows()
    ]


def waste_by_item(waste_records: Iterable[WasteRecord], limit: int | None = None) -> list[WasteItemSummary]:
    """Total waste per item, most costly first. ``limit`` keeps only the top entries."""
    frame = _waste_frame(waste_records)
    if frame.empty:
        return []

    grouped = frame.groupby("item_id", sort=False).agg(
        item_name=("item_name", "first"),
        total_quantity=("quantity", "sum"),
        total_cost=("cost", "sum"),
    )
    grouped = grouped.sort_values("total_cost", ascending=False, kind="stable")
    if limit is not None:
        grouped = grouped.head(limit)
    return [
        WasteItemSummary(
            item_id=item_id,
            item_name=row.item_name,
            total_quantity=float(row.total_quantity),
            total_cost=float(row.total_cost),
        )
        for item_id, row in grouped.iterrows()
    ]
