"""
Point-of-sale and waste-log records consumed by the analytics modules.
Both are produced by external ingestion paths and never change once created.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from .enums import WasteReason


class SalesRecord(BaseModel):
    """Quantity of one item sold at a location on a given day"""

    model_config = ConfigDict(frozen=True)

    id: str
    date: date
    location_id: str
    item_id: str
    item_name: str
    quantity_sold: float = Field(ge=0)
    revenue: float = 0.0


class WasteRecord(BaseModel):
    """Quantity of one item discarded, with the reason and its cost"""

    model_config = ConfigDict(frozen=True)

    id: str
    date: date
    location_id: str
    item_id: str
    item_name: str
    quantity_wasted: float = Field(ge=0)
    reason: WasteReason
    cost_impact: float = Field(default=0.0, ge=0)
