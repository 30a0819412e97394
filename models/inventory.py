"""
Inventory-related data models for restaurant-operations-core.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class InventoryItem(BaseModel):
    """
    Stock held for one item at one location. ``current_stock`` is updated by the
    caller on restock and consumption; this package only reads it.
    """

    id: str
    name: str
    category: str
    current_stock: float
    unit: str
    reorder_point: float = Field(default=0, ge=0)
    reorder_quantity: float = Field(default=0, ge=0)
    cost_per_unit: float = Field(ge=0)
    location_id: str
    expiration_date: date | None = None
    last_updated: datetime | None = None
    updated_by: str | None = None
    barcode: str | None = None

    @property
    def stock_value(self) -> float:
        return self.current_stock * self.cost_per_unit

    def is_low_stock(self) -> bool:
        """True once stock has fallen to or below the item's reorder point."""
        return self.current_stock <= self.reorder_point
