"""
PANClient

A client library for the PAN-OS XML API, for firewalls and Panorama.
"""

import logging
from typing import Any, Dict, List, Optional

__version__ = "0.3.0"

# Import core exceptions
from .core.exceptions import (
    PANClientError, ConfigError, ValidationError, InvalidNameError,
    InvalidTypeDiscriminatorError, RoutingError, UnsupportedScopeForModeError,
    MissingDeviceGroupError, TransportError, ProtocolError, SemanticError,
    RecoverableError, FatalError,
)

# Import core building blocks
from .core.session import ManagementMode, SessionContext, SessionSnapshot
from .core.scope import ObjectScope, RulebasePhase, ScopeOptions
from .core.xpath_resolver import ObjectKind, resolve, resolve_container
from .core.xml.builder import AddressPath, ConfigFragment, FragmentBuilder
from .core.response_classifier import Outcome, OutcomeCategory, OutcomeKind, classify
from .core.transport import HttpTransport
from .core.settings import ClientSettings
from .core.device import Device

# Import functional modules
from .modules import objects, groups, policies, network, panorama

# Set up logging
logger = logging.getLogger("panclient")


class PANClient(Device):
    """
    Object-oriented interface to a connected firewall or Panorama.

    Every method delegates to the functional modules; placement is passed
    as ScopeOptions (device-group, shared, rulebase phase).
    """

    @classmethod
    def from_settings(cls, settings: Optional[ClientSettings] = None, transport=None) -> "PANClient":
        """
        Connect using loaded client settings.

        Args:
            settings: Settings to use; loaded from file and environment when None
            transport: Transport to use instead of HttpTransport
        """
        settings = settings or ClientSettings.load()
        if not settings.host:
            raise ConfigError("No host configured (set PANCLIENT_HOST or 'host' in the settings file)")
        return cls.connect(
            settings.host,
            api_key=settings.api_key,
            username=settings.username,
            password=settings.password,
            verify_ssl=settings.verify_ssl,
            timeout=settings.timeout,
            port=settings.port,
            vsys=settings.vsys,
            transport=transport,
        )

    # Object-related methods
    def create_address(self, name: str, address_type: str, value: str, description: Optional[str] = None,
                       tags: Optional[List[str]] = None, options: Optional[ScopeOptions] = None) -> AddressPath:
        """Create an address object"""
        return objects.create_address(self, name, address_type, value, description, tags, options)

    def create_service(self, name: str, protocol: str, port: str, source_port: Optional[str] = None,
                       description: Optional[str] = None, tags: Optional[List[str]] = None,
                       options: Optional[ScopeOptions] = None) -> AddressPath:
        """Create a service object"""
        return objects.create_service(self, name, protocol, port, source_port, description, tags, options)

    def create_custom_url_category(self, name: str, urls: Optional[List[str]] = None,
                                   description: Optional[str] = None,
                                   options: Optional[ScopeOptions] = None) -> AddressPath:
        """Create a custom URL category"""
        return objects.create_custom_url_category(self, name, urls, description, options)

    def edit_url_category(self, name: str, url: str, action: str = "add",
                          options: Optional[ScopeOptions] = None) -> AddressPath:
        """Add or remove a URL in a custom URL category"""
        return objects.edit_url_category(self, name, url, action, options)

    def create_tag(self, name: str, color: Optional[str] = None, comments: Optional[str] = None,
                   options: Optional[ScopeOptions] = None) -> AddressPath:
        """Create a tag"""
        return objects.create_tag(self, name, color, comments, options)

    def create_external_dynamic_list(self, name: str, list_type: str, url: str, recurrence: str,
                                     at: Optional[str] = None, day: Optional[str] = None,
                                     description: Optional[str] = None,
                                     options: Optional[ScopeOptions] = None) -> AddressPath:
        """Create an external dynamic list"""
        return objects.create_external_dynamic_list(self, name, list_type, url, recurrence, at, day,
                                                    description, options)

    def delete_object(self, kind: ObjectKind, name: str, options: Optional[ScopeOptions] = None,
                      parent: Optional[str] = None) -> AddressPath:
        """Delete any named entry"""
        return objects.delete_object(self, kind, name, options, parent)

    def rename_object(self, kind: ObjectKind, name: str, new_name: str,
                      options: Optional[ScopeOptions] = None, parent: Optional[str] = None) -> AddressPath:
        """Rename any named entry"""
        return objects.rename_object(self, kind, name, new_name, options, parent)

    def clone_object(self, kind: ObjectKind, name: str, new_name: str,
                     options: Optional[ScopeOptions] = None, parent: Optional[str] = None) -> AddressPath:
        """Clone an entry in place"""
        return objects.clone_object(self, kind, name, new_name, options, parent)

    def get_object(self, kind: ObjectKind, name: str, options: Optional[ScopeOptions] = None,
                   active: bool = False, parent: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Read one entry"""
        return objects.get_object(self, kind, name, options, active, parent)

    def list_objects(self, kind: ObjectKind, options: Optional[ScopeOptions] = None,
                     active: bool = False, parent: Optional[str] = None) -> List[Dict[str, Any]]:
        """Read every entry of a kind"""
        return objects.list_objects(self, kind, options, active, parent)

    def tag_object(self, kind: ObjectKind, name: str, tags: List[str],
                   options: Optional[ScopeOptions] = None) -> AddressPath:
        """Add tags to an object"""
        return objects.tag_object(self, kind, name, tags, options)

    def untag_object(self, kind: ObjectKind, name: str, tag: str,
                     options: Optional[ScopeOptions] = None) -> AddressPath:
        """Remove a tag from an object"""
        return objects.untag_object(self, kind, name, tag, options)

    # Group-related methods
    def create_address_group(self, name: str, group_type: str, members: Optional[List[str]] = None,
                             filter_expr: Optional[str] = None, description: Optional[str] = None,
                             tags: Optional[List[str]] = None,
                             options: Optional[ScopeOptions] = None) -> AddressPath:
        """Create a static or dynamic address group"""
        return groups.create_address_group(self, name, group_type, members, filter_expr, description, tags,
                                           options)

    def create_service_group(self, name: str, members: List[str], tags: Optional[List[str]] = None,
                             options: Optional[ScopeOptions] = None) -> AddressPath:
        """Create a service group"""
        return groups.create_service_group(self, name, members, tags, options)

    def edit_group(self, kind: ObjectKind, group: str, member: str, action: str = "add",
                   options: Optional[ScopeOptions] = None) -> AddressPath:
        """Add or remove a group member"""
        return groups.edit_group(self, kind, group, member, action, options)

    # Policy-related methods
    def create_security_rule(self, name: str, from_zones: List[str], to_zones: List[str],
                             options: Optional[ScopeOptions] = None, **fields) -> AddressPath:
        """Create a security rule"""
        return policies.create_security_rule(self, name, from_zones, to_zones, options=options, **fields)

    def list_security_rules(self, options: Optional[ScopeOptions] = None,
                            active: bool = False) -> List[Dict[str, Any]]:
        """Read security rules"""
        return policies.list_security_rules(self, options, active)

    def move_rule(self, name: str, where: str, dst: Optional[str] = None,
                  options: Optional[ScopeOptions] = None) -> AddressPath:
        """Move a rule within its rulebase"""
        return policies.move_rule(self, name, where, dst, options)

    def tag_rule(self, name: str, tags: List[str], options: Optional[ScopeOptions] = None) -> AddressPath:
        """Add tags to a rule"""
        return policies.tag_rule(self, name, tags, options)

    def untag_rule(self, name: str, tag: str, options: Optional[ScopeOptions] = None) -> AddressPath:
        """Remove a tag from a rule"""
        return policies.untag_rule(self, name, tag, options)

    def apply_security_profiles(self, rule: Optional[str] = None, group: Optional[str] = None,
                                profiles: Optional[Dict[str, str]] = None,
                                options: Optional[ScopeOptions] = None) -> List[AddressPath]:
        """Attach security profiles to one or every rule"""
        return policies.apply_security_profiles(self, rule, group, profiles, options)

    def apply_log_forwarding(self, profile: str, rule: Optional[str] = None,
                             options: Optional[ScopeOptions] = None) -> List[AddressPath]:
        """Attach a log forwarding profile to one or every rule"""
        return policies.apply_log_forwarding(self, profile, rule, options)

    # Panorama-related methods
    def create_device_group(self, name: str, devices: Optional[List[str]] = None,
                            description: Optional[str] = None) -> AddressPath:
        """Create a device-group"""
        return panorama.create_device_group(self, name, devices, description)

    def add_device(self, serial: str, device_group: Optional[str] = None) -> AddressPath:
        """Add a managed device"""
        return panorama.add_device(self, serial, device_group)

    def remove_device(self, serial: str, device_group: Optional[str] = None) -> AddressPath:
        """Remove a managed device"""
        return panorama.remove_device(self, serial, device_group)

    def create_template(self, name: str, description: Optional[str] = None,
                        devices: Optional[List[str]] = None) -> AddressPath:
        """Create a template"""
        return panorama.create_template(self, name, description, devices)

    def create_template_stack(self, name: str, templates: List[str], description: Optional[str] = None,
                              devices: Optional[List[str]] = None) -> AddressPath:
        """Create a template stack"""
        return panorama.create_template_stack(self, name, templates, description, devices)

    def assign_template(self, name: str, devices: List[str], stack: bool = False) -> AddressPath:
        """Assign devices to a template or template stack"""
        return panorama.assign_template(self, name, devices, stack)

    def commit_all(self, device_group: str, devices: Optional[List[str]] = None) -> Optional[str]:
        """Push a device-group's policy"""
        return panorama.commit_all(self, device_group, devices)

    # Network methods (firewall only)
    def create_zone(self, name: str, zone_type: str, interfaces: Optional[List[str]] = None,
                    enable_user_id: bool = False) -> AddressPath:
        """Create a zone"""
        return network.create_zone(self, name, zone_type, interfaces, enable_user_id)

    def create_layer3_interface(self, name: str, ip_addresses: Optional[List[str]] = None,
                                comment: Optional[str] = None) -> AddressPath:
        """Configure a layer-3 interface"""
        return network.create_layer3_interface(self, name, ip_addresses, comment)

    def create_virtual_router(self, name: str, interfaces: Optional[List[str]] = None) -> AddressPath:
        """Create a virtual router"""
        return network.create_virtual_router(self, name, interfaces)

    def create_static_route(self, virtual_router: str, name: str, destination: str,
                            next_hop: Optional[str] = None, interface: Optional[str] = None,
                            metric: int = 10) -> AddressPath:
        """Add a static route"""
        return network.create_static_route(self, virtual_router, name, destination, next_hop, interface, metric)

    def set_panorama_server(self, primary: str, secondary: Optional[str] = None) -> AddressPath:
        """Point the firewall at Panorama"""
        return network.set_panorama_server(self, primary, secondary)

    def create_interface(self, interface_type: str, name: str, ip_addresses: Optional[List[str]] = None,
                         comment: Optional[str] = None) -> AddressPath:
        """Create a vlan, loopback or tunnel interface"""
        return network.create_interface(self, interface_type, name, ip_addresses, comment)

    def create_ike_crypto_profile(self, name: str, encryption: List[str], authentication: List[str],
                                  dh_groups: List[str], lifetime: int = 8,
                                  lifetime_unit: str = "hours") -> AddressPath:
        """Create an IKE crypto profile"""
        return network.create_ike_crypto_profile(self, name, encryption, authentication, dh_groups,
                                                 lifetime, lifetime_unit)

    def create_ipsec_crypto_profile(self, name: str, encryption: List[str], authentication: List[str],
                                    dh_groups: Optional[List[str]] = None, lifetime: int = 1,
                                    lifetime_unit: str = "hours") -> AddressPath:
        """Create an IPsec crypto profile"""
        return network.create_ipsec_crypto_profile(self, name, encryption, authentication, dh_groups,
                                                   lifetime, lifetime_unit)

    def create_ike_gateway(self, name: str, interface: str, peer: str, pre_shared_key: str, profile: str,
                           **settings) -> AddressPath:
        """Create an IKE gateway"""
        return network.create_ike_gateway(self, name, interface, peer, pre_shared_key, profile, **settings)

    def create_ipsec_tunnel(self, name: str, interface: str, gateway: str, profile: str) -> AddressPath:
        """Create an IPsec tunnel"""
        return network.create_ipsec_tunnel(self, name, interface, gateway, profile)

    def add_proxy_id(self, tunnel: str, name: str, local: str, remote: str) -> AddressPath:
        """Add a proxy-id to an IPsec tunnel"""
        return network.add_proxy_id(self, tunnel, name, local, remote)


__all__ = [
    "PANClient", "Device", "ClientSettings", "HttpTransport",
    "ManagementMode", "SessionContext", "SessionSnapshot",
    "ObjectScope", "RulebasePhase", "ScopeOptions", "ObjectKind",
    "resolve", "resolve_container",
    "AddressPath", "ConfigFragment", "FragmentBuilder",
    "Outcome", "OutcomeCategory", "OutcomeKind", "classify",
    "PANClientError", "ConfigError", "ValidationError", "InvalidNameError",
    "InvalidTypeDiscriminatorError", "RoutingError", "UnsupportedScopeForModeError",
    "MissingDeviceGroupError", "TransportError", "ProtocolError", "SemanticError",
    "RecoverableError", "FatalError",
]
