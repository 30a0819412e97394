"""
Capabilities granted to each user role.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RolePermissions:
    can_view_inventory: bool = True
    can_edit_inventory: bool = True
    can_view_orders: bool = True
    can_create_orders: bool = True
    can_approve_orders: bool = False
    can_view_vendors: bool = True
    can_edit_vendors: bool = False
    can_view_analytics: bool = False
    can_view_all_locations: bool = False
    can_manage_users: bool = False
