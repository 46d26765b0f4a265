"""
Object management functions for PANClient.

This module creates, reads, renames, clones, tags and deletes configuration
objects (addresses, services, URL categories, tags, external dynamic lists)
and offers the generic operations every other module reuses.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.device import Device
from ..core.payload_builder import (
    build_address,
    build_custom_url_category,
    build_external_dynamic_list,
    build_member,
    build_service,
    build_tag,
    build_tag_members,
)
from ..core.scope import ScopeOptions
from ..core.xml.builder import AddressPath
from ..core.xml.codec import decode_records
from ..core.xpath_resolver import ObjectKind, resolve

logger = logging.getLogger("panclient")

# Kinds that accept a <tag> member list
TAGGABLE_KINDS = (
    ObjectKind.ADDRESS,
    ObjectKind.ADDRESS_GROUP,
    ObjectKind.SERVICE,
    ObjectKind.SERVICE_GROUP,
    ObjectKind.SECURITY_RULE,
    ObjectKind.NAT_RULE,
)


def _options(options: Optional[ScopeOptions]) -> ScopeOptions:
    return options or ScopeOptions()


def create_entry(
    device: Device,
    kind: ObjectKind,
    name: str,
    fragment,
    options: Optional[ScopeOptions] = None,
    parent: Optional[str] = None,
) -> AddressPath:
    """Resolve the container of ``kind`` and set the named entry in it."""
    snapshot = device.snapshot()
    path = resolve(snapshot, kind, _options(options).to_scope(), name=name, parent=parent)
    container = resolve(snapshot, kind, _options(options).to_scope(), parent=parent)
    logger.info(f"Creating {kind.value} '{name}' at {container}")
    device.set_entry(container, name, fragment)
    return path


def create_address(
    device: Device,
    name: str,
    address_type: str,
    value: str,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """
    Create an address object.

    Args:
        device: Connected device
        name: Object name
        address_type: network-address, address-range or domain-name
        value: Address value
        description: Optional description
        tags: Optional tag names
        options: Placement (device-group, shared)

    Returns:
        AddressPath of the new object
    """
    fragment = build_address(address_type, value, description=description, tags=tags)
    return create_entry(device, ObjectKind.ADDRESS, name, fragment, options)


def create_service(
    device: Device,
    name: str,
    protocol: str,
    port: str,
    source_port: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """Create a TCP or UDP service object."""
    fragment = build_service(protocol, port, source_port=source_port, description=description, tags=tags)
    return create_entry(device, ObjectKind.SERVICE, name, fragment, options)


def create_custom_url_category(
    device: Device,
    name: str,
    urls: Optional[List[str]] = None,
    description: Optional[str] = None,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """Create a custom URL category."""
    fragment = build_custom_url_category(urls, description=description)
    return create_entry(device, ObjectKind.CUSTOM_URL_CATEGORY, name, fragment, options)


def edit_url_category(
    device: Device,
    name: str,
    url: str,
    action: str = "add",
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """
    Add a URL to, or remove a URL from, a custom URL category.

    Args:
        device: Connected device
        name: Category name
        url: URL to add or remove
        action: add or remove
        options: Placement

    Returns:
        AddressPath of the category
    """
    path = device.resolve(ObjectKind.CUSTOM_URL_CATEGORY, options, name=name)
    edit_members(device, path.child("list"), url, action)
    return path


def create_tag(
    device: Device,
    name: str,
    color: Optional[str] = None,
    comments: Optional[str] = None,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """
    Create a tag.

    Args:
        device: Connected device
        name: Tag name
        color: Colour name such as "Red" or "Light Green"
        comments: Optional comment
        options: Placement
    """
    return create_entry(device, ObjectKind.TAG, name, build_tag(color, comments), options)


def create_external_dynamic_list(
    device: Device,
    name: str,
    list_type: str,
    url: str,
    recurrence: str,
    at: Optional[str] = None,
    day: Optional[str] = None,
    description: Optional[str] = None,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """
    Create an external dynamic list.

    The element layout follows the connected device's PAN-OS major version.
    """
    snapshot = device.snapshot()
    fragment = build_external_dynamic_list(
        list_type,
        url,
        recurrence,
        at=at,
        day=day,
        description=description,
        panos_major_version=snapshot.major_version,
    )
    return create_entry(device, ObjectKind.EXTERNAL_LIST, name, fragment, options)


def edit_members(device: Device, list_path: AddressPath, member: str, action: str) -> None:
    """Add or remove one ``<member>`` under a list element."""
    if action == "add":
        device.set_config(list_path, build_member(member))
        logger.info(f"Added '{member}' to {list_path}")
    elif action == "remove":
        device.delete_config(list_path.member(member))
        logger.info(f"Removed '{member}' from {list_path}")
    else:
        raise ValueError(f"Invalid member action '{action}', expected add or remove")


def delete_object(
    device: Device,
    kind: ObjectKind,
    name: str,
    options: Optional[ScopeOptions] = None,
    parent: Optional[str] = None,
) -> AddressPath:
    """
    Delete any named configuration entry.

    Args:
        device: Connected device
        kind: Object kind
        name: Entry name
        options: Placement
        parent: Enclosing entry for nested kinds

    Returns:
        AddressPath of the deleted entry
    """
    path = device.resolve(kind, options, name=name, parent=parent)
    device.delete_config(path)
    logger.info(f"Deleted {kind.value} '{name}'")
    return path


def rename_object(
    device: Device,
    kind: ObjectKind,
    name: str,
    new_name: str,
    options: Optional[ScopeOptions] = None,
    parent: Optional[str] = None,
) -> AddressPath:
    """
    Rename any named configuration entry.

    The request targets the entry's resolved path; the new name is
    validated with the same rule as the old one.

    Returns:
        AddressPath of the entry under its new name
    """
    snapshot = device.snapshot()
    scope = _options(options).to_scope()
    path = resolve(snapshot, kind, scope, name=name, parent=parent)
    renamed = resolve(snapshot, kind, scope, name=new_name, parent=parent)
    device.rename_config(path, new_name)
    logger.info(f"Renamed {kind.value} '{name}' to '{new_name}'")
    return renamed


def clone_object(
    device: Device,
    kind: ObjectKind,
    name: str,
    new_name: str,
    options: Optional[ScopeOptions] = None,
    parent: Optional[str] = None,
) -> AddressPath:
    """Clone an entry inside its own container."""
    snapshot = device.snapshot()
    scope = _options(options).to_scope()
    source = resolve(snapshot, kind, scope, name=name, parent=parent)
    clone = resolve(snapshot, kind, scope, name=new_name, parent=parent)
    container = resolve(snapshot, kind, scope, parent=parent)
    device.clone_config(container, source, new_name)
    logger.info(f"Cloned {kind.value} '{name}' as '{new_name}'")
    return clone


def get_object(
    device: Device,
    kind: ObjectKind,
    name: str,
    options: Optional[ScopeOptions] = None,
    active: bool = False,
    parent: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    Read one entry.

    Returns:
        The decoded record, or None when the entry does not exist
    """
    path = device.resolve(kind, options, name=name, parent=parent)
    records = decode_records(device.get_config(path, active=active), kind.value)
    return records[0] if records else None


def list_objects(
    device: Device,
    kind: ObjectKind,
    options: Optional[ScopeOptions] = None,
    active: bool = False,
    parent: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Read every entry of a kind at one placement.

    Args:
        device: Connected device
        kind: Object kind
        options: Placement
        active: Read the running configuration instead of the candidate
        parent: Enclosing entry for nested kinds

    Returns:
        List of decoded records
    """
    path = device.resolve(kind, options, parent=parent)
    records = decode_records(device.get_config(path, active=active), kind.value)
    logger.debug(f"Found {len(records)} {kind.value} entries at {path}")
    return records


def tag_object(
    device: Device,
    kind: ObjectKind,
    name: str,
    tags: List[str],
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """
    Add tags to an object or rule.

    Raises:
        ValueError: If the kind does not carry tags
    """
    if kind not in TAGGABLE_KINDS:
        raise ValueError(f"{kind.value} entries cannot be tagged")
    path = device.resolve(kind, options, name=name)
    device.set_config(path.child("tag"), build_tag_members(tags))
    logger.info(f"Tagged {kind.value} '{name}' with {', '.join(tags)}")
    return path


def untag_object(
    device: Device,
    kind: ObjectKind,
    name: str,
    tag: str,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """Remove one tag from an object or rule."""
    if kind not in TAGGABLE_KINDS:
        raise ValueError(f"{kind.value} entries cannot be tagged")
    path = device.resolve(kind, options, name=name)
    device.delete_config(path.child("tag").member(tag))
    logger.info(f"Removed tag '{tag}' from {kind.value} '{name}'")
    return path
