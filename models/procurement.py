"""
Purchase order models for restaurant-operations-core.
"""

import logging
import math
import random
import string
import uuid
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from config.config import ProcurementConfig

from .enums import OrderStatus, UserRole

logger = logging.getLogger(__name__)

# Money amounts are compared to the cent
MONEY_TOLERANCE = 0.01

_ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


class Actor(BaseModel):
    """The person asking for a workflow action"""

    id: str
    name: str = ""
    role: UserRole


class PurchaseOrderItem(BaseModel):
    """One line of a purchase order"""

    item_id: str
    item_name: str
    quantity: float = Field(gt=0)
    unit_price: float = Field(ge=0)
    total: float

    @classmethod
    def build(cls, item_id: str, item_name: str, quantity: float, unit_price: float) -> "PurchaseOrderItem":
        """Create a line with its total computed from quantity and unit price."""
        return cls(
            item_id=item_id,
            item_name=item_name,
            quantity=quantity,
            unit_price=unit_price,
            total=quantity * unit_price,
        )

    @model_validator(mode="after")
    def _check_line_total(self) -> "PurchaseOrderItem":
        if not math.isclose(self.total, self.quantity * self.unit_price, abs_tol=MONEY_TOLERANCE):
            raise ValueError(
                f"Line total {self.total} does not match quantity x unit price for {self.item_id}"
            )
        return self


def generate_order_number(now: datetime, prefix: str = "PO", rng: random.Random | None = None) -> str:
    """Build a human-readable order number such as ``PO-2501-K3ZQ8M``."""
    rng = rng or random.Random()
    suffix = "".join(rng.choices(_ORDER_NUMBER_ALPHABET, k=6))
    return f"{prefix}-{now:%y%m}-{suffix}"


class PurchaseOrder(BaseModel):
    """
    A purchase order placed with a vendor for one location.

    Totals are fixed at creation: ``subtotal`` is the sum of line totals and
    ``total`` is ``subtotal + tax``. The approval workflow only ever changes
    ``status`` and the approver/rejecter fields.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    order_number: str
    vendor_id: str
    vendor_name: str = ""
    location_id: str
    items: list[PurchaseOrderItem] = Field(default_factory=list)
    subtotal: float
    tax: float = Field(ge=0)
    total: float
    status: OrderStatus = OrderStatus.DRAFT
    created_by: str
    created_by_name: str = ""
    created_at: datetime
    approved_by: str | None = None
    approved_by_name: str | None = None
    approved_at: datetime | None = None
    rejected_by: str | None = None
    rejected_by_name: str | None = None
    rejected_at: datetime | None = None
    rejected_reason: str | None = None
    expected_delivery: datetime | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _check_totals(self) -> "PurchaseOrder":
        line_sum = sum(item.total for item in self.items)
        if not math.isclose(self.subtotal, line_sum, abs_tol=MONEY_TOLERANCE):
            raise ValueError(f"Subtotal {self.subtotal} does not equal the sum of line totals {line_sum}")
        if not math.isclose(self.total, self.subtotal + self.tax, abs_tol=MONEY_TOLERANCE):
            raise ValueError(f"Total {self.total} does not equal subtotal + tax")
        return self

    @classmethod
    def create(
        cls,
        vendor_id: str,
        location_id: str,
        items: list[PurchaseOrderItem],
        created_by: Actor,
        now: datetime,
        vendor_name: str = "",
        notes: str | None = None,
        config: ProcurementConfig | None = None,
        rng: random.Random | None = None,
    ) -> "PurchaseOrder":
        """Open a draft order, computing subtotal, tax and total from the lines."""
        config = config or ProcurementConfig()
        subtotal = sum(item.total for item in items)
        tax = subtotal * config.tax_rate
        order = cls(
            order_number=generate_order_number(now, prefix=config.order_number_prefix, rng=rng),
            vendor_id=vendor_id,
            vendor_name=vendor_name,
            location_id=location_id,
            items=list(items),
            subtotal=subtotal,
            tax=tax,
            total=subtotal + tax,
            status=OrderStatus.DRAFT,
            created_by=created_by.id,
            created_by_name=created_by.name,
            created_at=now,
            notes=notes,
        )
        logger.debug(f"Created draft order {order.order_number} for vendor {vendor_id} ({len(items)} lines)")
        return order
