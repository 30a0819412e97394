"""
Centralized Enum definitions for the project.
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles of the people operating a restaurant location"""

    STAFF = "staff"
    MANAGER = "manager"
    REGIONAL_MANAGER = "regional_manager"  # Same order-approval rights as MANAGER
    ADMIN = "admin"
    OWNER = "owner"  # Same order-approval rights as ADMIN


class OrderStatus(str, Enum):
    """Lifecycle states of a purchase order"""

    DRAFT = "draft"
    PENDING_MANAGER = "pending_manager"
    PENDING_ADMIN = "pending_admin"
    APPROVED = "approved"
    REJECTED = "rejected"
    ORDERED = "ordered"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class WasteReason(str, Enum):
    """Why inventory was discarded"""

    EXPIRATION = "expiration"
    SPOILAGE = "spoilage"
    DAMAGE = "damage"
    OVERPRODUCTION = "overproduction"


class DemandTrend(str, Enum):
    """Direction of a fitted demand line"""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class TrendDirection(str, Enum):
    """Direction of a period-over-period change"""

    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"
