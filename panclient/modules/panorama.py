"""
Panorama management functions for PANClient.

Device-groups, managed devices, templates, template stacks and commit-all
only exist on Panorama; the resolver rejects them on a firewall session.
"""

import logging
from typing import List, Optional

from ..core.device import Device
from ..core.exceptions import UnsupportedScopeForModeError
from ..core.payload_builder import (
    build_commit_all,
    build_device_group,
    build_template,
    build_template_devices,
    build_template_stack,
)
from ..core.request_builder import build_commit_request
from ..core.scope import ScopeOptions
from ..core.xml.builder import AddressPath, FragmentBuilder
from ..core.xml.codec import result_text
from ..core.xpath_resolver import ObjectKind
from .objects import create_entry

logger = logging.getLogger("panclient")

# Template stacks were introduced in PAN-OS 7
TEMPLATE_STACK_MIN_VERSION = 7


def create_device_group(
    device: Device,
    name: str,
    devices: Optional[List[str]] = None,
    description: Optional[str] = None,
) -> AddressPath:
    """
    Create a device-group.

    Args:
        device: Connected Panorama
        name: Device-group name
        devices: Serial numbers of member firewalls
        description: Optional description
    """
    return create_entry(device, ObjectKind.DEVICE_GROUP, name, build_device_group(devices, description))


def add_device(device: Device, serial: str, device_group: Optional[str] = None) -> AddressPath:
    """
    Add a managed firewall to Panorama, optionally placing it in a device-group.

    Returns:
        AddressPath of the managed device entry
    """
    snapshot = device.snapshot()
    path = device.resolve(ObjectKind.DEVICE, name=serial, snapshot=snapshot)
    device.set_entry(device.resolve(ObjectKind.DEVICE, snapshot=snapshot), serial, FragmentBuilder().build())
    if device_group:
        members = device.resolve(ObjectKind.DEVICE, ScopeOptions(device_group=device_group), snapshot=snapshot)
        device.set_entry(members, serial, FragmentBuilder().build())
        logger.info(f"Added device {serial} to device-group '{device_group}'")
    else:
        logger.info(f"Added device {serial}")
    return path


def remove_device(device: Device, serial: str, device_group: Optional[str] = None) -> AddressPath:
    """
    Remove a managed firewall from a device-group, or from Panorama entirely.
    """
    options = ScopeOptions(device_group=device_group) if device_group else None
    path = device.resolve(ObjectKind.DEVICE, options, name=serial)
    device.delete_config(path)
    logger.info(f"Removed device {serial}{' from device-group ' + repr(device_group) if device_group else ''}")
    return path


def create_template(
    device: Device,
    name: str,
    description: Optional[str] = None,
    devices: Optional[List[str]] = None,
) -> AddressPath:
    """Create a template with an empty vsys1 configuration."""
    return create_entry(device, ObjectKind.TEMPLATE, name, build_template(description, devices))


def _require_template_stacks(device: Device, snapshot) -> None:
    if snapshot.major_version < TEMPLATE_STACK_MIN_VERSION:
        raise UnsupportedScopeForModeError(
            f"Template stacks need PAN-OS {TEMPLATE_STACK_MIN_VERSION} or later, "
            f"{device.session.host} runs {snapshot.software_version}"
        )


def create_template_stack(
    device: Device,
    name: str,
    templates: List[str],
    description: Optional[str] = None,
    devices: Optional[List[str]] = None,
) -> AddressPath:
    """
    Create a template stack.

    Raises:
        UnsupportedScopeForModeError: On Panorama releases before 7
    """
    _require_template_stacks(device, device.snapshot())
    fragment = build_template_stack(templates, description, devices)
    return create_entry(device, ObjectKind.TEMPLATE_STACK, name, fragment)


def assign_template(device: Device, name: str, devices: List[str], stack: bool = False) -> AddressPath:
    """
    Assign managed firewalls to a template or template stack.

    Args:
        device: Connected Panorama
        name: Template or template stack name
        devices: Serial numbers to assign
        stack: Assign to the template stack ``name``

    Returns:
        AddressPath of the template or template stack

    Raises:
        UnsupportedScopeForModeError: On a firewall, or for a stack on
            Panorama releases before 7
    """
    snapshot = device.snapshot()
    kind = ObjectKind.TEMPLATE_STACK if stack else ObjectKind.TEMPLATE
    path = device.resolve(kind, name=name, snapshot=snapshot)
    if stack:
        _require_template_stacks(device, snapshot)
    device.set_config(path, build_template_devices(devices))
    logger.info(f"Assigned {len(devices)} device(s) to {kind.value} '{name}'")
    return path


def commit_all(device: Device, device_group: str, devices: Optional[List[str]] = None) -> Optional[str]:
    """
    Push a device-group's shared policy to its firewalls.

    Args:
        device: Connected Panorama
        device_group: Device-group to push
        devices: Limit the push to these serial numbers

    Returns:
        Job id, or None when Panorama queued nothing
    """
    if not device.session.is_panorama:
        raise UnsupportedScopeForModeError("Commit-all is only available on Panorama")
    root = device.request(build_commit_request(build_commit_all(device_group, devices), action="all"))
    job = result_text(root, "job")
    logger.info(f"Commit-all for device-group '{device_group}' queued as job {job}")
    return job
