"""
Payload builder for PANClient.

Each ``build_*`` function turns typed field values into the ConfigFragment
sent as the ``element`` parameter of a config request. Builders are pure:
no I/O, and identical inputs always produce identical fragments.

Discriminators (address type, group type, protocol, tag colour, ...) are
validated before anything is built. Optional children such as description
and tags are appended only when non-empty, after the mandatory skeleton, in
the order the device's schema expects.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..constants import (
    ADDRESS_GROUP_TYPES,
    ADDRESS_TYPE_ALIASES,
    ADDRESS_TYPES,
    DEFAULT_VALUES,
    DH_GROUPS,
    EDL_RECURRENCES,
    EDL_TYPES,
    IKE_ENCRYPTIONS,
    IKE_EXCHANGE_MODES,
    IKE_HASHES,
    IKE_ID_TYPES,
    IKE_VERSIONS,
    IPSEC_AUTHENTICATIONS,
    IPSEC_ENCRYPTIONS,
    LIFETIME_UNITS,
    SECURITY_ACTIONS,
    SECURITY_PROFILE_TYPES,
    SERVICE_PROTOCOLS,
    TAG_COLORS,
    WEEKDAYS,
    ZONE_TYPES,
)
from .exceptions import ValidationError
from .object_validator import (
    normalize_ports,
    require_members,
    validate_choice,
    validate_interface_name,
    validate_object_name,
    validate_serial,
)
from .xml.builder import ConfigFragment, FragmentBuilder

logger = logging.getLogger("panclient")


def _with_tags(builder: FragmentBuilder, tags: Optional[Iterable[str]]) -> FragmentBuilder:
    tags = [tag for tag in (tags or []) if tag]
    if tags:
        builder.into("tag").members(tags).up()
    return builder


def _ip_entries(builder: FragmentBuilder, ip_addresses: Optional[Iterable[str]]) -> FragmentBuilder:
    addresses = [address for address in (ip_addresses or []) if address]
    if addresses:
        builder.into("ip")
        for address in addresses:
            builder.add("entry", {"name": address})
        builder.up()
    return builder


def _device_entries(builder: FragmentBuilder, serials: Optional[Iterable[str]]) -> FragmentBuilder:
    serials = [validate_serial(serial) for serial in (serials or [])]
    if serials:
        builder.into("devices")
        for serial in serials:
            builder.add("entry", {"name": serial})
        builder.up()
    return builder


def address_type_element(address_type: str) -> str:
    """
    Return the element an address value is stored under.

    Args:
        address_type: network-address, address-range or domain-name
            (the short forms ip, range and fqdn are accepted too)

    Returns:
        ip-netmask, ip-range or fqdn

    Raises:
        InvalidTypeDiscriminatorError: For any other value
    """
    canonical = ADDRESS_TYPE_ALIASES.get(address_type, address_type)
    validate_choice("address type", canonical, list(ADDRESS_TYPES) + list(ADDRESS_TYPE_ALIASES))
    return ADDRESS_TYPES[canonical]


def build_address(
    address_type: str,
    value: str,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> ConfigFragment:
    """
    Build an address object.

    Args:
        address_type: network-address, address-range or domain-name
        value: Address value (e.g. "10.1.1.1/32", "10.1.1.1-10.1.1.9", "www.example.com")
        description: Optional description
        tags: Optional tag names

    Returns:
        ConfigFragment: ``<ip-netmask|ip-range|fqdn>``, ``description``, ``tag``
    """
    element = address_type_element(address_type)
    if not value:
        raise ValidationError("Address value must not be empty")
    builder = FragmentBuilder().add(element, text=value).add_if("description", description)
    return _with_tags(builder, tags).build()


def build_address_group(
    group_type: str,
    members: Optional[List[str]] = None,
    filter_expr: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> ConfigFragment:
    """
    Build a static or dynamic address group.

    Args:
        group_type: static or dynamic
        members: Member address names (static groups)
        filter_expr: Tag filter expression (dynamic groups)
        description: Optional description
        tags: Optional tag names

    Returns:
        ConfigFragment

    Raises:
        InvalidTypeDiscriminatorError: If the group type is unknown
        ValidationError: If a static group has no members or a dynamic group no filter
    """
    validate_choice("address group type", group_type, ADDRESS_GROUP_TYPES)
    builder = FragmentBuilder()
    if group_type == "static":
        builder.into("static").members(require_members("Static address group", members)).up()
    else:
        if not filter_expr:
            raise ValidationError("Dynamic address group needs a filter")
        builder.into("dynamic").add("filter", text=filter_expr).up()
    builder.add_if("description", description)
    return _with_tags(builder, tags).build()


def build_service(
    protocol: str,
    port: str,
    source_port: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> ConfigFragment:
    """
    Build a service object.

    Args:
        protocol: tcp or udp
        port: Destination ports, e.g. "443", "8080-8090", "80, 443"
        source_port: Optional source ports
        description: Optional description
        tags: Optional tag names
    """
    validate_choice("service protocol", protocol, SERVICE_PROTOCOLS)
    builder = FragmentBuilder().into("protocol").into(protocol).add("port", text=normalize_ports(port))
    if source_port:
        builder.add("source-port", text=normalize_ports(source_port))
    builder.up().up().add_if("description", description)
    return _with_tags(builder, tags).build()


def build_service_group(members: List[str], tags: Optional[List[str]] = None) -> ConfigFragment:
    """Build a service group."""
    builder = FragmentBuilder().into("members").members(require_members("Service group", members)).up()
    return _with_tags(builder, tags).build()


def build_custom_url_category(urls: Optional[List[str]] = None, description: Optional[str] = None) -> ConfigFragment:
    """Build a custom URL category holding a URL list."""
    urls = [url for url in (urls or []) if url]
    return FragmentBuilder().into("list").members(urls).up().add_if("description", description).build()


def tag_color_value(color: str) -> str:
    """
    Translate a colour name ("Red", "Light Green", ...) into its configuration value.

    Raises:
        InvalidTypeDiscriminatorError: If the colour is unknown
    """
    validate_choice("tag color", color, TAG_COLORS)
    return TAG_COLORS[color]


def build_tag(color: Optional[str] = None, comments: Optional[str] = None) -> ConfigFragment:
    """Build a tag with an optional colour and comment."""
    builder = FragmentBuilder()
    if color:
        builder.add("color", text=tag_color_value(color))
    return builder.add_if("comments", comments).build()


def _recurrence(builder: FragmentBuilder, recurrence: str, at: Optional[str], day: Optional[str]) -> None:
    validate_choice("list recurrence", recurrence, EDL_RECURRENCES)
    if recurrence in ("five-minute", "hourly"):
        builder.add(recurrence)
        return

    if at is None or not at.isdigit() or not 0 <= int(at) <= 23:
        raise ValidationError(f"A {recurrence} list needs an update hour between 00 and 23, got '{at}'")
    at = f"{int(at):02d}"
    builder.into(recurrence)
    if recurrence == "weekly":
        builder.add("day-of-week", text=validate_choice("day of week", (day or "").lower(), WEEKDAYS))
    elif recurrence == "monthly":
        if not day or not day.isdigit() or not 1 <= int(day) <= 31:
            raise ValidationError(f"A monthly list needs a day of month between 1 and 31, got '{day}'")
        builder.add("day-of-month", text=str(int(day)))
    builder.add("at", text=at).up()


def build_external_dynamic_list(
    list_type: str,
    url: str,
    recurrence: str,
    at: Optional[str] = None,
    day: Optional[str] = None,
    description: Optional[str] = None,
    panos_major_version: int = DEFAULT_VALUES["PANOS_MAJOR_VERSION"],
) -> ConfigFragment:
    """
    Build an external dynamic list.

    PAN-OS 8 and later nest the source and schedule under ``type/<list type>``;
    earlier releases keep them at the top level next to a ``type`` text element.

    Args:
        list_type: ip, domain or url
        url: Source URL of the list
        recurrence: five-minute, hourly, daily, weekly or monthly
        at: Update hour for daily, weekly and monthly lists ("00"-"23")
        day: Day of week (weekly) or day of month (monthly)
        description: Optional description
        panos_major_version: Major version of the target device
    """
    validate_choice("list type", list_type, EDL_TYPES)
    if not url:
        raise ValidationError("External dynamic list needs a source URL")

    builder = FragmentBuilder()
    if panos_major_version >= 8:
        builder.into("type").into(list_type).into("recurring")
        _recurrence(builder, recurrence, at, day)
        builder.up().add("url", text=url).add_if("description", description).up().up()
    else:
        builder.into("recurring")
        _recurrence(builder, recurrence, at, day)
        builder.up().add("url", text=url).add("type", text=list_type).add_if("description", description)
    return builder.build()


def build_member(value: str) -> ConfigFragment:
    """Build a single ``<member>`` element, used to add one value to a list."""
    if not value:
        raise ValidationError("Member value must not be empty")
    return FragmentBuilder().add("member", text=value).build()


def build_members(values: Iterable[str]) -> ConfigFragment:
    """Build one ``<member>`` element per value."""
    return FragmentBuilder().members(require_members("Member list", values)).build()


def build_security_rule(
    from_zones: List[str],
    to_zones: List[str],
    source: Optional[List[str]] = None,
    destination: Optional[List[str]] = None,
    source_user: Optional[List[str]] = None,
    category: Optional[List[str]] = None,
    application: Optional[List[str]] = None,
    service: Optional[List[str]] = None,
    action: str = "allow",
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    disabled: bool = False,
) -> ConfigFragment:
    """
    Build a security rule.

    Unset address, user, category and application lists default to ``any``;
    the service list defaults to ``application-default``.
    """
    validate_choice("rule action", action, SECURITY_ACTIONS.values())
    builder = FragmentBuilder()
    builder.into("from").members(require_members("Rule source zone", from_zones)).up()
    builder.into("to").members(require_members("Rule destination zone", to_zones)).up()
    for tag, values, default in (
        ("source", source, "any"),
        ("destination", destination, "any"),
        ("source-user", source_user, "any"),
        ("category", category, "any"),
        ("application", application, "any"),
        ("service", service, "application-default"),
    ):
        builder.into(tag).members(values or [default]).up()
    builder.add("action", text=action).add_if("description", description)
    _with_tags(builder, tags)
    if disabled:
        builder.add("disabled", text="yes")
    return builder.build()


def build_tag_members(tags: Iterable[str]) -> ConfigFragment:
    """Build the ``<member>`` list added under an object's or rule's ``tag`` element."""
    return build_members(tags)


def build_security_profiles(
    group: Optional[str] = None,
    profiles: Optional[Dict[str, str]] = None,
) -> ConfigFragment:
    """
    Build the profile attachment of a security rule.

    Exactly one of ``group`` or ``profiles`` must be given.

    Args:
        group: Security profile group name
        profiles: Mapping of profile type (url-filtering, file-blocking, virus,
            spyware, vulnerability, wildfire-analysis) to profile name

    Returns:
        ConfigFragment: ``<profile-setting>`` with a group or individual profiles
    """
    if bool(group) == bool(profiles):
        raise ValidationError("Attach either a profile group or individual profiles")

    builder = FragmentBuilder().into("profile-setting")
    if group:
        builder.into("group").add("member", text=group).up()
    else:
        for profile_type in profiles:
            validate_choice("security profile type", profile_type, SECURITY_PROFILE_TYPES)
        builder.into("profiles")
        for profile_type in SECURITY_PROFILE_TYPES:
            if profiles.get(profile_type):
                builder.into(profile_type).add("member", text=profiles[profile_type]).up()
        builder.up()
    return builder.up().build()


def build_log_forwarding(profile: str) -> ConfigFragment:
    """Build the log forwarding attachment of a security rule."""
    validate_object_name(profile)
    return FragmentBuilder().add("log-setting", text=profile).build()


def build_device_group(
    devices: Optional[List[str]] = None,
    description: Optional[str] = None,
) -> ConfigFragment:
    """Build a Panorama device-group with optional member devices."""
    builder = _device_entries(FragmentBuilder(), devices)
    return builder.add_if("description", description).build()


def build_template(
    description: Optional[str] = None,
    devices: Optional[List[str]] = None,
    vsys: str = DEFAULT_VALUES["VSYS"],
) -> ConfigFragment:
    """Build a Panorama template with an empty vsys configuration."""
    builder = FragmentBuilder()
    builder.into("settings").add("default-vsys", text=vsys).up()
    builder.into("config").into("devices").entry("localhost.localdomain")
    builder.into("vsys").add("entry", {"name": vsys}).up()
    builder.up().up().up()
    builder.add_if("description", description)
    return _device_entries(builder, devices).build()


def build_template_stack(
    templates: List[str],
    description: Optional[str] = None,
    devices: Optional[List[str]] = None,
) -> ConfigFragment:
    """Build a Panorama template stack."""
    builder = FragmentBuilder().into("templates").members(require_members("Template stack", templates)).up()
    builder.add_if("description", description)
    return _device_entries(builder, devices).build()


def build_template_devices(devices: List[str]) -> ConfigFragment:
    """Build the device list set on a template or template stack."""
    return _device_entries(FragmentBuilder(), require_members("Template assignment", devices)).build()


def zone_network_element(zone_type: str) -> str:
    """Return the ``network`` child element of a zone type."""
    validate_choice("zone type", zone_type, ZONE_TYPES)
    return ZONE_TYPES[zone_type]


def build_zone(
    zone_type: str,
    interfaces: Optional[List[str]] = None,
    enable_user_id: bool = False,
) -> ConfigFragment:
    """
    Build a security zone.

    Args:
        zone_type: tap, vwire, layer2 or layer3
        interfaces: Interfaces to place in the zone
        enable_user_id: Turn on User-ID for the zone
    """
    element = zone_network_element(zone_type)
    interfaces = [validate_interface_name(name) for name in (interfaces or [])]
    builder = FragmentBuilder().into("network").into(element).members(interfaces).up().up()
    if enable_user_id:
        builder.add("enable-user-identification", text="yes")
    return builder.build()


def build_virtual_router(interfaces: Optional[List[str]] = None) -> ConfigFragment:
    """Build a virtual router with BGP present but disabled."""
    interfaces = [validate_interface_name(name) for name in (interfaces or [])]
    builder = FragmentBuilder()
    if interfaces:
        builder.into("interface").members(interfaces).up()
    builder.into("protocol").into("bgp").into("routing-options")
    builder.into("graceful-restart").add("enable", text="yes").up()
    builder.add("as-format", text="2-byte").up()
    builder.add("enable", text="no").up().up()
    return builder.build()


def build_static_route(
    destination: str,
    next_hop: Optional[str] = None,
    interface: Optional[str] = None,
    metric: int = DEFAULT_VALUES["STATIC_ROUTE_METRIC"],
) -> ConfigFragment:
    """
    Build a static route.

    Args:
        destination: Destination network in CIDR notation
        next_hop: Next-hop IP address
        interface: Egress interface
        metric: Route metric
    """
    if not destination:
        raise ValidationError("Static route needs a destination")
    if not next_hop and not interface:
        raise ValidationError("Static route needs a next hop or an interface")
    builder = FragmentBuilder()
    if interface:
        builder.add("interface", text=validate_interface_name(interface))
    if next_hop:
        builder.into("nexthop").add("ip-address", text=next_hop).up()
    return builder.add("destination", text=destination).add("metric", text=str(metric)).build()


def build_vlan(interfaces: Optional[List[str]] = None, vlan_interface: Optional[str] = None) -> ConfigFragment:
    """Build a VLAN with member interfaces and an optional VLAN interface."""
    interfaces = [validate_interface_name(name) for name in (interfaces or [])]
    builder = FragmentBuilder()
    if interfaces:
        builder.into("interface").members(interfaces).up()
    if vlan_interface:
        builder.into("virtual-interface").add("interface", text=validate_interface_name(vlan_interface)).up()
    return builder.build()


def build_vwire(interface1: str, interface2: str, tag_allowed: Optional[str] = None) -> ConfigFragment:
    """Build a virtual wire between two interfaces."""
    builder = (
        FragmentBuilder()
        .add("interface1", text=validate_interface_name(interface1))
        .add("interface2", text=validate_interface_name(interface2))
    )
    return builder.add_if("tag-allowed", tag_allowed).build()


def build_layer3_interface(ip_addresses: Optional[List[str]] = None, comment: Optional[str] = None) -> ConfigFragment:
    """Build a layer-3 ethernet interface with optional static addresses."""
    builder = _ip_entries(FragmentBuilder().into("layer3"), ip_addresses)
    return builder.up().add_if("comment", comment).build()


def build_layer3_subinterface(
    tag: int,
    ip_addresses: Optional[List[str]] = None,
    comment: Optional[str] = None,
) -> ConfigFragment:
    """Build a layer-3 sub-interface entry body (placed under ``layer3/units``)."""
    if not 1 <= int(tag) <= 4094:
        raise ValidationError(f"VLAN tag {tag} is outside 1-4094")
    builder = _ip_entries(FragmentBuilder().add("tag", text=str(int(tag))), ip_addresses)
    return builder.add_if("comment", comment).build()


def build_interface_unit(ip_addresses: Optional[List[str]] = None, comment: Optional[str] = None) -> ConfigFragment:
    """Build a vlan, loopback or tunnel unit (placed under ``<type>/units``)."""
    return _ip_entries(FragmentBuilder(), ip_addresses).add_if("comment", comment).build()


def _lifetime(builder: FragmentBuilder, value: int, unit: str) -> FragmentBuilder:
    validate_choice("lifetime unit", unit, LIFETIME_UNITS)
    if int(value) < 1:
        raise ValidationError(f"Lifetime must be positive, got {value}")
    return builder.into("lifetime").add(unit, text=str(int(value))).up()


def _dh_group_members(dh_groups: Iterable[str]) -> List[str]:
    # Accept both "14" and "group14"
    groups = []
    for group in require_members("DH group list", dh_groups):
        number = str(group)[len("group"):] if str(group).startswith("group") else str(group)
        groups.append(f"group{validate_choice('DH group', number, DH_GROUPS)}")
    return groups


def _choices(field: str, values: Iterable[str], allowed: Iterable[str]) -> List[str]:
    allowed = list(allowed)
    return [validate_choice(field, value, allowed) for value in require_members(f"{field} list", values)]


def build_ike_crypto_profile(
    encryption: List[str],
    authentication: List[str],
    dh_groups: List[str],
    lifetime: int = 8,
    lifetime_unit: str = "hours",
) -> ConfigFragment:
    """
    Build an IKE crypto profile.

    Args:
        encryption: Encryption algorithms, e.g. aes-256-cbc
        authentication: Hash algorithms, e.g. sha256
        dh_groups: Diffie-Hellman groups as numbers or ``groupN`` names
        lifetime: Key lifetime
        lifetime_unit: seconds, minutes, hours or days

    Raises:
        InvalidTypeDiscriminatorError: On an unknown algorithm, group or unit
    """
    builder = _lifetime(FragmentBuilder(), lifetime, lifetime_unit)
    builder.into("encryption").members(_choices("encryption", encryption, IKE_ENCRYPTIONS)).up()
    builder.into("hash").members(_choices("hash", authentication, IKE_HASHES)).up()
    builder.into("dh-group").members(_dh_group_members(dh_groups)).up()
    return builder.build()


def build_ipsec_crypto_profile(
    encryption: List[str],
    authentication: List[str],
    dh_groups: Optional[List[str]] = None,
    lifetime: int = 1,
    lifetime_unit: str = "hours",
) -> ConfigFragment:
    """
    Build an ESP IPsec crypto profile.

    Without DH groups the profile disables perfect forward secrecy
    (``<dh-group>no-pfs</dh-group>``).
    """
    builder = _lifetime(FragmentBuilder(), lifetime, lifetime_unit)
    builder.into("esp")
    builder.into("encryption").members(_choices("encryption", encryption, IPSEC_ENCRYPTIONS)).up()
    builder.into("authentication").members(_choices("authentication", authentication, IPSEC_AUTHENTICATIONS)).up()
    builder.up()
    if dh_groups:
        builder.into("dh-group").members(_dh_group_members(dh_groups)).up()
    else:
        builder.add("dh-group", text="no-pfs")
    return builder.build()


def build_ike_gateway(
    interface: str,
    peer: str,
    pre_shared_key: str,
    profile: str,
    version: str = "v1",
    mode: str = "auto",
    local_ip: Optional[str] = None,
    local_id: Optional[str] = None,
    local_id_type: str = "ipaddr",
    peer_id: Optional[str] = None,
    peer_id_type: str = "ipaddr",
    nat_traversal: bool = False,
    passive_mode: bool = False,
    dpd_interval: Optional[int] = None,
    dpd_retry: Optional[int] = None,
    require_cookie: bool = False,
) -> ConfigFragment:
    """
    Build an IKE gateway authenticated with a pre-shared key.

    Both the IKEv1 and IKEv2 settings use ``profile`` as their crypto
    profile; ``version`` decides which one the gateway negotiates. A peer
    of ``dynamic`` accepts any peer address.

    Args:
        interface: Local interface terminating the gateway
        peer: Peer IP address, or ``dynamic``
        pre_shared_key: Shared secret
        profile: IKE crypto profile name
        version: v1, v2 or v2-preferred
        mode: IKEv1 exchange mode (auto, main or aggressive)
        local_ip: Local address on ``interface`` in CIDR notation
        local_id: Local identification value
        local_id_type: Local identification type
        peer_id: Peer identification value
        peer_id_type: Peer identification type
        nat_traversal: Enable NAT traversal
        passive_mode: Only respond to IKE requests
        dpd_interval: Dead peer detection interval in seconds; enables DPD
        dpd_retry: IKEv1 dead peer detection retries
        require_cookie: Require an IKEv2 cookie

    Raises:
        ValidationError: If the key, peer or profile is empty
        InvalidTypeDiscriminatorError: On an unknown version, mode or ID type
    """
    validate_choice("IKE version", version, IKE_VERSIONS)
    validate_choice("exchange mode", mode, IKE_EXCHANGE_MODES)
    validate_interface_name(interface)
    if not pre_shared_key:
        raise ValidationError("IKE gateway needs a pre-shared key")
    if not peer:
        raise ValidationError("IKE gateway needs a peer address")
    if not profile:
        raise ValidationError("IKE gateway needs an IKE crypto profile")

    builder = FragmentBuilder()
    builder.into("authentication").into("pre-shared-key").add("key", text=pre_shared_key).up().up()

    builder.into("protocol")
    builder.into("ikev1").add("ike-crypto-profile", text=profile).add("exchange-mode", text=mode)
    if dpd_interval:
        builder.into("dpd").add("enable", text="yes").add("interval", text=str(int(dpd_interval)))
        builder.add_if("retry", str(int(dpd_retry)) if dpd_retry else None).up()
    builder.up()
    builder.into("ikev2").add("ike-crypto-profile", text=profile)
    builder.into("dpd").add("enable", text="yes" if dpd_interval else "no")
    builder.add_if("interval", str(int(dpd_interval)) if dpd_interval else None).up()
    if require_cookie:
        builder.add("require-cookie", text="yes")
    builder.up()
    builder.add("version", text=f"ike{version}").up()

    builder.into("local-address").add("interface", text=interface).add_if("ip", local_ip).up()
    if peer == "dynamic":
        builder.into("peer-address").add("dynamic").up()
    else:
        builder.into("peer-address").add("ip", text=peer).up()

    if local_id:
        validate_choice("local ID type", local_id_type, IKE_ID_TYPES)
        builder.into("local-id").add("type", text=local_id_type).add("id", text=local_id).up()
    if peer_id:
        validate_choice("peer ID type", peer_id_type, IKE_ID_TYPES)
        builder.into("peer-id").add("type", text=peer_id_type).add("id", text=peer_id).up()

    if nat_traversal or passive_mode:
        builder.into("protocol-common")
        if nat_traversal:
            builder.into("nat-traversal").add("enable", text="yes").up()
        if passive_mode:
            builder.add("passive-mode", text="yes")
        builder.up()
    return builder.build()


def build_ipsec_tunnel(interface: str, gateway: str, profile: str) -> ConfigFragment:
    """Build an auto-key IPsec tunnel bound to one IKE gateway."""
    validate_interface_name(interface)
    validate_object_name(gateway)
    validate_object_name(profile)
    builder = FragmentBuilder().into("auto-key")
    builder.into("ike-gateway").add("entry", {"name": gateway}).up()
    builder.add("ipsec-crypto-profile", text=profile).up()
    return builder.add("tunnel-interface", text=interface).build()


def build_proxy_id(local: str, remote: str) -> ConfigFragment:
    """Build an IPsec proxy-id matching any protocol."""
    if not local or not remote:
        raise ValidationError("Proxy-id needs local and remote networks")
    return (
        FragmentBuilder()
        .into("protocol").add("any").up()
        .add("local", text=local)
        .add("remote", text=remote)
        .build()
    )


def build_panorama_server(primary: str, secondary: Optional[str] = None) -> ConfigFragment:
    """Build the Panorama server settings of a firewall."""
    if not primary:
        raise ValidationError("Panorama server address must not be empty")
    return FragmentBuilder().add("panorama-server", text=primary).add_if("panorama-server-2", secondary).build()


def build_op_command(*words: str) -> ConfigFragment:
    """
    Build an operational command from its keywords.

    ``build_op_command("show", "system", "info")`` gives
    ``<show><system><info/></system></show>``.
    """
    if not words:
        raise ValidationError("Operational command must not be empty")
    builder = FragmentBuilder()
    for word in words[:-1]:
        builder.into(word)
    builder.add(words[-1])
    return builder.build()


def build_commit() -> ConfigFragment:
    """Build the ``<commit/>`` command."""
    return FragmentBuilder().add("commit").build()


def build_commit_all(device_group: str, devices: Optional[List[str]] = None) -> ConfigFragment:
    """
    Build a Panorama commit-all pushing shared policy to a device-group.

    Args:
        device_group: Device-group to push
        devices: Limit the push to these serial numbers
    """
    validate_object_name(device_group)
    builder = FragmentBuilder().into("commit-all").into("shared-policy").into("device-group").entry(device_group)
    _device_entries(builder, devices)
    return builder.build()
