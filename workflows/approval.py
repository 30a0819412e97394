"""
Purchase-order approval workflow.

Orders move ``draft -> pending_manager -> pending_admin -> approved``. Managers
(and regional managers) pass a pending order up to the admins; admins and
owners approve outright. Staff can submit drafts but never approve.

``get_next_status`` and ``can_approve`` are pure and never raise for a
recognised role and status. ``submit_order``, ``approve_order`` and
``reject_order`` enforce those rules and return an updated copy of the order;
the input order is left untouched. Serialising concurrent writes to the same
order is up to the caller.
"""

from datetime import datetime

from models.enums import OrderStatus, UserRole
from models.permissions import RolePermissions
from models.procurement import Actor, PurchaseOrder
from utils.logger import get_logger

logger = get_logger(__name__)

MANAGER_ROLES = frozenset({UserRole.MANAGER, UserRole.REGIONAL_MANAGER})
ADMIN_ROLES = frozenset({UserRole.ADMIN, UserRole.OWNER})

_ROLE_PERMISSIONS: dict[UserRole, RolePermissions] = {
    UserRole.STAFF: RolePermissions(),
    UserRole.MANAGER: RolePermissions(
        can_approve_orders=True,
        can_edit_vendors=True,
        can_view_analytics=True,
    ),
    UserRole.REGIONAL_MANAGER: RolePermissions(
        can_approve_orders=True,
        can_edit_vendors=True,
        can_view_analytics=True,
        can_view_all_locations=True,
    ),
    UserRole.ADMIN: RolePermissions(
        can_approve_orders=True,
        can_edit_vendors=True,
        can_view_analytics=True,
        can_view_all_locations=True,
        can_manage_users=True,
    ),
    UserRole.OWNER: RolePermissions(
        can_approve_orders=True,
        can_edit_vendors=True,
        can_view_analytics=True,
        can_view_all_locations=True,
        can_manage_users=True,
    ),
}


class WorkflowError(Exception):
    """Base class for refused workflow actions."""


class ApprovalPermissionError(WorkflowError):
    """The actor's role may not approve or reject the order in its current state."""


class RejectionReasonRequiredError(WorkflowError, ValueError):
    """A rejection was requested without a reason."""


class InvalidTransitionError(WorkflowError, ValueError):
    """The order's current state does not allow the requested action."""


def get_role_permissions(role: UserRole | str) -> RolePermissions:
    return _ROLE_PERMISSIONS[UserRole(role)]


def get_next_status(current: OrderStatus | str, role: UserRole | str) -> OrderStatus:
    """
    Status an order moves to when ``role`` advances it from ``current``.

    Returns ``current`` unchanged when the role may not advance it or the
    order has left the approval chain.

    Raises:
        ValueError: If ``current`` or ``role`` is not a known value.
    """
    current = OrderStatus(current)
    role = UserRole(role)

    if current == OrderStatus.DRAFT:
        return OrderStatus.PENDING_MANAGER
    if current == OrderStatus.PENDING_MANAGER:
        if role in MANAGER_ROLES:
            return OrderStatus.PENDING_ADMIN
        if role in ADMIN_ROLES:
            return OrderStatus.APPROVED
    if current == OrderStatus.PENDING_ADMIN and role in ADMIN_ROLES:
        return OrderStatus.APPROVED
    return current


def can_approve(role: UserRole | str, status: OrderStatus | str) -> bool:
    """
    Whether ``role`` may approve (or reject) an order in ``status``.

    Unknown status strings are simply not approvable.

    Raises:
        ValueError: If ``role`` is not a known role.
    """
    role = UserRole(role)
    try:
        status = OrderStatus(status)
    except ValueError:
        return False

    if status == OrderStatus.PENDING_MANAGER:
        return role in MANAGER_ROLES or role in ADMIN_ROLES
    if status == OrderStatus.PENDING_ADMIN:
        return role in ADMIN_ROLES
    return False


def submit_order(order: PurchaseOrder, actor: Actor, now: datetime) -> PurchaseOrder:
    """Send a draft order for manager approval. Any role may submit."""
    if order.status != OrderStatus.DRAFT:
        raise InvalidTransitionError(f"Order {order.order_number} is {order.status.value}, not draft")

    next_status = get_next_status(order.status, actor.role)
    logger.info(f"Order {order.order_number} submitted by {actor.id} ({actor.role.value}) at {now.isoformat()}")
    return order.model_copy(update={"status": next_status}, deep=True)


def approve_order(order: PurchaseOrder, actor: Actor, now: datetime) -> PurchaseOrder:
    """
    Advance a pending order one approval step and record who approved it.

    Raises:
        ApprovalPermissionError: If the actor may not approve the order now.
    """
    if not can_approve(actor.role, order.status):
        logger.warning(
            f"{actor.id} ({actor.role.value}) may not approve order {order.order_number} "
            f"in status {order.status.value}"
        )
        raise ApprovalPermissionError(
            f"Role {actor.role.value} cannot approve an order that is {order.status.value}"
        )

    next_status = get_next_status(order.status, actor.role)
    logger.info(
        f"Order {order.order_number}: {order.status.value} -> {next_status.value} by {actor.id} ({actor.role.value})"
    )
    return order.model_copy(
        update={
            "status": next_status,
            "approved_by": actor.id,
            "approved_by_name": actor.name,
            "approved_at": now,
        },
        deep=True,
    )


def reject_order(order: PurchaseOrder, actor: Actor, reason: str, now: datetime) -> PurchaseOrder:
    """
    Reject a pending order. Rejection is final.

    Raises:
        RejectionReasonRequiredError: If ``reason`` is blank.
        ApprovalPermissionError: If the actor may not act on the order now.
    """
    if not reason or not reason.strip():
        raise RejectionReasonRequiredError(f"A reason is required to reject order {order.order_number}")
    if not can_approve(actor.role, order.status):
        logger.warning(
            f"{actor.id} ({actor.role.value}) may not reject order {order.order_number} "
            f"in status {order.status.value}"
        )
        raise ApprovalPermissionError(
            f"Role {actor.role.value} cannot reject an order that is {order.status.value}"
        )

    logger.info(f"Order {order.order_number} rejected by {actor.id} ({actor.role.value}): {reason.strip()}")
    return order.model_copy(
        update={
            "status": OrderStatus.REJECTED,
            "rejected_by": actor.id,
            "rejected_by_name": actor.name,
            "rejected_at": now,
            "rejected_reason": reason.strip(),
        },
        deep=True,
    )
