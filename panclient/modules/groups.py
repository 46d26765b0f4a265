"""
Group management functions for PANClient.

This module creates address and service groups and edits their membership
incrementally, one member at a time.
"""

import logging
from typing import List, Optional

from ..core.device import Device
from ..core.payload_builder import build_address_group, build_service_group
from ..core.scope import ScopeOptions
from ..core.xml.builder import AddressPath
from ..core.xpath_resolver import ObjectKind
from .objects import create_entry, edit_members

logger = logging.getLogger("panclient")

# Element that holds the members of each group kind
GROUP_MEMBER_CONTAINERS = {
    ObjectKind.ADDRESS_GROUP: "static",
    ObjectKind.SERVICE_GROUP: "members",
}


def create_address_group(
    device: Device,
    name: str,
    group_type: str,
    members: Optional[List[str]] = None,
    filter_expr: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """
    Create a static or dynamic address group.

    Args:
        device: Connected device
        name: Group name
        group_type: static or dynamic
        members: Member address names (static)
        filter_expr: Tag filter expression (dynamic)
        description: Optional description
        tags: Optional tag names
        options: Placement

    Returns:
        AddressPath of the new group
    """
    fragment = build_address_group(
        group_type, members=members, filter_expr=filter_expr, description=description, tags=tags
    )
    return create_entry(device, ObjectKind.ADDRESS_GROUP, name, fragment, options)


def create_service_group(
    device: Device,
    name: str,
    members: List[str],
    tags: Optional[List[str]] = None,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """Create a service group."""
    return create_entry(device, ObjectKind.SERVICE_GROUP, name, build_service_group(members, tags=tags), options)


def edit_group(
    device: Device,
    kind: ObjectKind,
    group: str,
    member: str,
    action: str = "add",
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """
    Add a member to, or remove a member from, a static address group or a service group.

    Args:
        device: Connected device
        kind: ObjectKind.ADDRESS_GROUP or ObjectKind.SERVICE_GROUP
        group: Group name
        member: Member name
        action: add or remove
        options: Placement

    Returns:
        AddressPath of the group

    Raises:
        ValueError: If the kind is not a group kind or the action is unknown
    """
    if kind not in GROUP_MEMBER_CONTAINERS:
        raise ValueError(f"{kind.value} is not a group kind")
    path = device.resolve(kind, options, name=group)
    edit_members(device, path.child(GROUP_MEMBER_CONTAINERS[kind]), member, action)
    return path


def add_group_member(
    device: Device,
    kind: ObjectKind,
    group: str,
    member: str,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """Add one member to a group."""
    return edit_group(device, kind, group, member, "add", options)


def remove_group_member(
    device: Device,
    kind: ObjectKind,
    group: str,
    member: str,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """Remove one member from a group."""
    return edit_group(device, kind, group, member, "remove", options)
