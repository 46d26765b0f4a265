"""
Network configuration functions for PANClient.

Interfaces, zones, virtual routers, VLANs, virtual wires and IKE / IPsec VPN
settings only exist on firewalls. The resolver rejects every function here on a
Panorama session before any request is sent.
"""

import logging
from typing import List, Optional

from ..constants import UNIT_INTERFACE_TYPES
from ..core.device import Device
from ..core.exceptions import ValidationError
from ..core.payload_builder import (
    build_ike_crypto_profile,
    build_ike_gateway,
    build_interface_unit,
    build_ipsec_crypto_profile,
    build_ipsec_tunnel,
    build_layer3_interface,
    build_layer3_subinterface,
    build_panorama_server,
    build_proxy_id,
    build_static_route,
    build_virtual_router,
    build_vlan,
    build_vwire,
    build_zone,
    zone_network_element,
)
from ..core.object_validator import validate_choice, validate_interface_name
from ..core.xml.builder import AddressPath
from ..core.xpath_resolver import ObjectKind
from .objects import create_entry, edit_members

logger = logging.getLogger("panclient")

UNIT_INTERFACE_KINDS = {
    "vlan": ObjectKind.VLAN_INTERFACE,
    "loopback": ObjectKind.LOOPBACK_INTERFACE,
    "tunnel": ObjectKind.TUNNEL_INTERFACE,
}


def create_layer3_interface(
    device: Device,
    name: str,
    ip_addresses: Optional[List[str]] = None,
    comment: Optional[str] = None,
) -> AddressPath:
    """
    Configure an ethernet interface in layer-3 mode.

    Args:
        device: Connected firewall
        name: Interface name, e.g. ethernet1/1
        ip_addresses: Static addresses in CIDR notation
        comment: Optional comment
    """
    return create_entry(device, ObjectKind.INTERFACE, name, build_layer3_interface(ip_addresses, comment))


def create_layer3_subinterface(
    device: Device,
    interface: str,
    tag: int,
    ip_addresses: Optional[List[str]] = None,
    comment: Optional[str] = None,
) -> AddressPath:
    """
    Create a tagged layer-3 sub-interface (``<interface>.<tag>``).

    Returns:
        AddressPath of the sub-interface entry
    """
    fragment = build_layer3_subinterface(tag, ip_addresses, comment)
    units = device.resolve(ObjectKind.INTERFACE, name=interface).child("layer3", "units")
    sub_name = validate_interface_name(f"{interface}.{int(tag)}")
    return device.set_entry(units, sub_name, fragment)


def create_zone(
    device: Device,
    name: str,
    zone_type: str,
    interfaces: Optional[List[str]] = None,
    enable_user_id: bool = False,
) -> AddressPath:
    """Create a security zone of type tap, vwire, layer2 or layer3."""
    return create_entry(device, ObjectKind.ZONE, name, build_zone(zone_type, interfaces, enable_user_id))


def edit_zone_interface(
    device: Device,
    zone: str,
    zone_type: str,
    interface: str,
    action: str = "add",
) -> AddressPath:
    """Add an interface to, or remove an interface from, a zone."""
    network_element = zone_network_element(zone_type)
    path = device.resolve(ObjectKind.ZONE, name=zone)
    edit_members(device, path.child("network", network_element), validate_interface_name(interface), action)
    return path


def create_virtual_router(device: Device, name: str, interfaces: Optional[List[str]] = None) -> AddressPath:
    """Create a virtual router."""
    return create_entry(device, ObjectKind.VIRTUAL_ROUTER, name, build_virtual_router(interfaces))


def edit_virtual_router_interface(device: Device, router: str, interface: str, action: str = "add") -> AddressPath:
    """Add an interface to, or remove an interface from, a virtual router."""
    path = device.resolve(ObjectKind.VIRTUAL_ROUTER, name=router)
    edit_members(device, path.child("interface"), validate_interface_name(interface), action)
    return path


def create_static_route(
    device: Device,
    virtual_router: str,
    name: str,
    destination: str,
    next_hop: Optional[str] = None,
    interface: Optional[str] = None,
    metric: int = 10,
) -> AddressPath:
    """
    Add a static route to a virtual router.

    Args:
        device: Connected firewall
        virtual_router: Virtual router name
        name: Route name
        destination: Destination network in CIDR notation
        next_hop: Next-hop IP address
        interface: Egress interface
        metric: Route metric
    """
    fragment = build_static_route(destination, next_hop=next_hop, interface=interface, metric=metric)
    return create_entry(device, ObjectKind.STATIC_ROUTE, name, fragment, parent=virtual_router)


def create_vlan(
    device: Device,
    name: str,
    interfaces: Optional[List[str]] = None,
    vlan_interface: Optional[str] = None,
) -> AddressPath:
    """Create a VLAN."""
    return create_entry(device, ObjectKind.VLAN, name, build_vlan(interfaces, vlan_interface))


def edit_vlan_interface(device: Device, vlan: str, interface: str, action: str = "add") -> AddressPath:
    """Add an interface to, or remove an interface from, a VLAN."""
    path = device.resolve(ObjectKind.VLAN, name=vlan)
    edit_members(device, path.child("interface"), validate_interface_name(interface), action)
    return path


def create_vwire(
    device: Device,
    name: str,
    interface1: str,
    interface2: str,
    tag_allowed: Optional[str] = None,
) -> AddressPath:
    """Create a virtual wire between two interfaces."""
    return create_entry(device, ObjectKind.VIRTUAL_WIRE, name, build_vwire(interface1, interface2, tag_allowed))


def create_interface(
    device: Device,
    interface_type: str,
    name: str,
    ip_addresses: Optional[List[str]] = None,
    comment: Optional[str] = None,
) -> AddressPath:
    """
    Create a vlan, loopback or tunnel interface unit.

    Args:
        device: Connected firewall
        interface_type: vlan, loopback or tunnel
        name: Unit name carrying its number, e.g. tunnel.10
        ip_addresses: Static addresses in CIDR notation; /32 only on loopbacks
        comment: Optional comment

    Raises:
        InvalidTypeDiscriminatorError: If the interface type is unknown
        ValidationError: If the name does not match the type or a loopback
            address is not a host address
    """
    validate_choice("interface type", interface_type, UNIT_INTERFACE_TYPES)
    prefix, _, unit = name.partition(".")
    if prefix != interface_type or not unit.isdigit() or int(unit) < 1:
        logger.error(f"Interface name '{name}' is not a {interface_type} unit")
        raise ValidationError(f"{interface_type} interface name must look like {interface_type}.<number>, got '{name}'")
    if interface_type == "loopback":
        for address in ip_addresses or []:
            if not address.endswith("/32"):
                raise ValidationError(f"Loopback address {address} must be a /32")
    fragment = build_interface_unit(ip_addresses, comment)
    return create_entry(device, UNIT_INTERFACE_KINDS[interface_type], name, fragment)


def create_ike_crypto_profile(
    device: Device,
    name: str,
    encryption: List[str],
    authentication: List[str],
    dh_groups: List[str],
    lifetime: int = 8,
    lifetime_unit: str = "hours",
) -> AddressPath:
    """Create an IKE crypto profile."""
    fragment = build_ike_crypto_profile(encryption, authentication, dh_groups, lifetime, lifetime_unit)
    return create_entry(device, ObjectKind.IKE_CRYPTO_PROFILE, name, fragment)


def create_ipsec_crypto_profile(
    device: Device,
    name: str,
    encryption: List[str],
    authentication: List[str],
    dh_groups: Optional[List[str]] = None,
    lifetime: int = 1,
    lifetime_unit: str = "hours",
) -> AddressPath:
    """Create an ESP IPsec crypto profile; no DH groups means no PFS."""
    fragment = build_ipsec_crypto_profile(encryption, authentication, dh_groups, lifetime, lifetime_unit)
    return create_entry(device, ObjectKind.IPSEC_CRYPTO_PROFILE, name, fragment)


def create_ike_gateway(
    device: Device,
    name: str,
    interface: str,
    peer: str,
    pre_shared_key: str,
    profile: str,
    **settings,
) -> AddressPath:
    """
    Create an IKE gateway authenticated with a pre-shared key.

    Args:
        device: Connected firewall
        name: Gateway name
        interface: Local interface, e.g. ethernet1/1
        peer: Peer IP address, or ``dynamic``
        pre_shared_key: Shared secret
        profile: IKE crypto profile name
        **settings: Version, exchange mode, local address, IDs, NAT
            traversal, passive mode and dead peer detection, as accepted by
            ``build_ike_gateway``
    """
    fragment = build_ike_gateway(interface, peer, pre_shared_key, profile, **settings)
    return create_entry(device, ObjectKind.IKE_GATEWAY, name, fragment)


def create_ipsec_tunnel(device: Device, name: str, interface: str, gateway: str, profile: str) -> AddressPath:
    """
    Create an auto-key IPsec tunnel.

    Args:
        device: Connected firewall
        name: Tunnel name
        interface: Tunnel interface, e.g. tunnel.10
        gateway: IKE gateway name
        profile: IPsec crypto profile name
    """
    return create_entry(device, ObjectKind.IPSEC_TUNNEL, name, build_ipsec_tunnel(interface, gateway, profile))


def add_proxy_id(device: Device, tunnel: str, name: str, local: str, remote: str) -> AddressPath:
    """
    Add a proxy-id to an IPsec tunnel.

    Args:
        device: Connected firewall
        tunnel: IPsec tunnel name
        name: Proxy-id name
        local: Local network
        remote: Remote network
    """
    return create_entry(device, ObjectKind.PROXY_ID, name, build_proxy_id(local, remote), parent=tunnel)


def set_panorama_server(device: Device, primary: str, secondary: Optional[str] = None) -> AddressPath:
    """
    Point a firewall at its Panorama server(s).

    Returns:
        AddressPath of the system settings
    """
    path = device.resolve(ObjectKind.SYSTEM_SETTINGS)
    if device.session.panorama_connected:
        logger.warning(f"{device.session.host} already reports a connected Panorama")
    device.set_config(path, build_panorama_server(primary, secondary))
    logger.info(f"Set Panorama server of {device.session.host} to {primary}")
    return path
