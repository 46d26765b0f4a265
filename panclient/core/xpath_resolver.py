"""
XPath resolver for PANClient.

This module decides, for every operation, which configuration-tree location
to target. The decision depends on the object kind, the requested scope and
the session snapshot (firewall or Panorama, shared preference, vsys).

Path templates are kept in ``xpath_mappings/panos.yaml``; the placement
rules are implemented here once and used by every operation.
"""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml

from .exceptions import MissingDeviceGroupError, UnsupportedScopeForModeError, ValidationError
from .object_validator import validate_name, validate_object_name
from .scope import ObjectScope, RulebasePhase, ScopeType
from .session import ManagementMode, SessionSnapshot
from .xml.builder import AddressPath

# Package constants
XPATH_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "xpath_mappings")
MAPPING_FILE = "panos.yaml"

# Initialize logger
logger = logging.getLogger("panclient")

# Cache for loaded XPath mappings
_xpath_cache: Dict[str, Dict[str, Any]] = {}


class ObjectKind(Enum):
    """Every addressable configuration object kind."""

    ADDRESS = "address"
    ADDRESS_GROUP = "address-group"
    SERVICE = "service"
    SERVICE_GROUP = "service-group"
    TAG = "tag"
    CUSTOM_URL_CATEGORY = "custom-url-category"
    EXTERNAL_LIST = "external-list"
    PROFILE_GROUP = "profile-group"
    LOG_FORWARDING_PROFILE = "log-forwarding-profile"
    SECURITY_RULE = "security-rule"
    NAT_RULE = "nat-rule"
    INTERFACE = "interface"
    VLAN_INTERFACE = "vlan-interface"
    LOOPBACK_INTERFACE = "loopback-interface"
    TUNNEL_INTERFACE = "tunnel-interface"
    ZONE = "zone"
    VLAN = "vlan"
    VIRTUAL_WIRE = "virtual-wire"
    VIRTUAL_ROUTER = "virtual-router"
    STATIC_ROUTE = "static-route"
    IKE_GATEWAY = "ike-gateway"
    IPSEC_TUNNEL = "ipsec-tunnel"
    PROXY_ID = "proxy-id"
    IKE_CRYPTO_PROFILE = "ike-crypto-profile"
    IPSEC_CRYPTO_PROFILE = "ipsec-crypto-profile"
    SYSTEM_SETTINGS = "system-settings"
    DEVICE_GROUP = "device-group"
    TEMPLATE = "template"
    TEMPLATE_STACK = "template-stack"
    DEVICE = "device"


class Placement(Enum):
    """Where a kind may live."""

    SCOPED = "scoped"
    RULE = "rule"
    LOCAL = "local"
    PANORAMA = "panorama"


def load_xpath_mappings(file_name: str = MAPPING_FILE) -> Dict[str, Any]:
    """
    Load the XPath mapping file.

    Args:
        file_name: Mapping file name inside the xpath_mappings directory

    Returns:
        Dictionary of XPath mappings

    Raises:
        ValueError: If the mapping file cannot be found or loaded
    """
    if file_name in _xpath_cache:
        return _xpath_cache[file_name]

    file_path = os.path.join(XPATH_DIR, file_name)
    if not os.path.exists(file_path):
        error_msg = f"XPath mapping file not found: {file_path}"
        logger.error(error_msg)
        raise ValueError(error_msg)

    try:
        logger.debug(f"Reading XPath mappings from file: {file_path}")
        with open(file_path, "r") as f:
            mappings = yaml.safe_load(f)
    except yaml.YAMLError as e:
        error_msg = f"Error parsing YAML in XPath mapping file {file_path}: {e}"
        logger.error(error_msg, exc_info=True)
        raise ValueError(error_msg) from e

    missing = {ObjectKind(kind) for kind in mappings["kinds"]} ^ set(ObjectKind)
    if missing:
        error_msg = f"XPath mapping file does not match the known kinds: {sorted(k.value for k in missing)}"
        logger.error(error_msg)
        raise ValueError(error_msg)

    _xpath_cache[file_name] = mappings
    return mappings


def get_kind_mapping(kind: ObjectKind) -> Dict[str, Any]:
    """Return the mapping entry of a kind."""
    return load_xpath_mappings()["kinds"][kind.value]


def get_placement(kind: ObjectKind) -> Placement:
    """Return where a kind may live."""
    return Placement(get_kind_mapping(kind)["placement"])


def get_context_xpath(snapshot: SessionSnapshot, context_type: str, **kwargs) -> str:
    """
    Get the base XPath of a context.

    Args:
        snapshot: Session snapshot
        context_type: Context name from the mapping file (vsys, device, shared, device_group, mgt)
        **kwargs: Template values (device_group)

    Returns:
        str: Base XPath

    Raises:
        ValueError: If the context does not exist for the session's mode
    """
    contexts = load_xpath_mappings()["contexts"][snapshot.mode.value]
    if context_type not in contexts:
        error_msg = f"Context '{context_type}' does not exist on a {snapshot.mode.value}"
        logger.error(error_msg)
        raise ValueError(error_msg)

    template = contexts[context_type]
    if "{device_group}" in template:
        device_group = kwargs.get("device_group")
        validate_object_name(device_group)
        return template.replace("{device_group}", device_group)
    return template.replace("{vsys}", snapshot.vsys)


def _reject(message: str, error_class=UnsupportedScopeForModeError):
    logger.error(message)
    raise error_class(message)


def _scoped_base(snapshot: SessionSnapshot, kind: ObjectKind, scope: ObjectScope) -> str:
    """Base path for scoped and rule kinds."""
    if snapshot.mode is ManagementMode.STANDALONE:
        if scope.is_shared:
            _reject(f"Shared placement of {kind.value} is only available on Panorama")
        if scope.device_group_name:
            _reject(f"Device-group placement of {kind.value} is only available on Panorama")
        return get_context_xpath(snapshot, "vsys")

    if snapshot.shared or scope.is_shared:
        return get_context_xpath(snapshot, "shared")
    if scope.device_group_name:
        return get_context_xpath(snapshot, "device_group", device_group=scope.device_group_name)
    _reject(
        f"A device-group or shared placement is required for {kind.value} on Panorama",
        MissingDeviceGroupError,
    )


def _rulebase_segment(snapshot: SessionSnapshot, kind: ObjectKind, scope: ObjectScope) -> str:
    rulebases = load_xpath_mappings()["rulebases"]
    if scope.type is not ScopeType.RULEBASE:
        if snapshot.mode is ManagementMode.STANDALONE:
            return rulebases[RulebasePhase.LOCAL.value]
        _reject(f"{kind.value} needs the pre or post rulebase on Panorama", ValidationError)
    if snapshot.mode is ManagementMode.STANDALONE:
        if scope.phase is not RulebasePhase.LOCAL:
            _reject(f"The {scope.phase.value} rulebase is only available on Panorama")
    elif scope.phase is RulebasePhase.LOCAL:
        _reject("Panorama has no local rulebase, use the pre or post rulebase")
    return rulebases[scope.phase.value]


def _check_placement(snapshot: SessionSnapshot, kind: ObjectKind, scope: ObjectScope, mapping: Dict[str, Any]) -> None:
    """Reject kinds that do not exist in the session's mode, whatever the name."""
    placement = Placement(mapping["placement"])
    if placement is Placement.LOCAL and snapshot.mode is ManagementMode.CENTRALIZED_MANAGER:
        _reject(f"{kind.value} is firewall configuration and cannot be addressed on Panorama")
    if placement is Placement.PANORAMA and snapshot.mode is ManagementMode.STANDALONE:
        _reject(f"{kind.value} only exists on Panorama")
    if placement is not Placement.RULE and scope.type is ScopeType.RULEBASE:
        _reject(f"A rulebase scope does not apply to {kind.value}", ValidationError)


def _container(
    snapshot: SessionSnapshot,
    kind: ObjectKind,
    scope: ObjectScope,
    parent: Optional[str],
) -> AddressPath:
    mapping = get_kind_mapping(kind)
    placement = Placement(mapping["placement"])

    if placement is Placement.SCOPED:
        path = mapping["path"].replace("{base_path}", _scoped_base(snapshot, kind, scope))
    elif placement is Placement.RULE:
        base_path = _scoped_base(snapshot, kind, scope)
        rulebase = _rulebase_segment(snapshot, kind, scope)
        path = (
            mapping["path"]
            .replace("{base_path}", base_path)
            .replace("{rulebase}", rulebase)
        )
    else:
        if scope.is_shared:
            _reject(f"{kind.value} cannot be placed in shared")
        if scope.device_group_name and "device_group_path" in mapping:
            base = get_context_xpath(snapshot, "device_group", device_group=scope.device_group_name)
            path = mapping["device_group_path"].replace("{base_path}", base)
        elif scope.device_group_name:
            _reject(f"{kind.value} cannot be placed in a device-group")
        elif "parent" in mapping:
            if not parent:
                _reject(f"{kind.value} needs the name of its {mapping['parent']}", ValidationError)
            parent_path = resolve(snapshot, ObjectKind(mapping["parent"]), scope, name=parent)
            return parent_path.child(mapping["path"])
        else:
            contexts = load_xpath_mappings()["contexts"][snapshot.mode.value]
            path = mapping["path"]
            for context_type, placeholder in (("device", "{device}"), ("mgt", "{mgt}"), ("vsys", "{vsys_path}")):
                if placeholder in path and context_type in contexts:
                    path = path.replace(placeholder, get_context_xpath(snapshot, context_type))

    return AddressPath(path)


def resolve(
    snapshot: SessionSnapshot,
    kind: ObjectKind,
    scope: Optional[ObjectScope] = None,
    name: Optional[str] = None,
    parent: Optional[str] = None,
) -> AddressPath:
    """
    Resolve the configuration address of an object.

    Decision order:
        1. Firewall-only kinds on Panorama, and Panorama-only kinds on a
           firewall, are rejected.
        2. On a firewall the vsys or device path is used; shared,
           device-group and pre/post scopes are rejected.
        3. On Panorama the shared path wins when the session prefers shared
           or the scope is shared, even if a device-group was also given.
        4. Otherwise the device-group path is used.
        5. Otherwise MissingDeviceGroupError is raised.
        Rules additionally need an explicit rulebase phase.

    Args:
        snapshot: Immutable session snapshot
        kind: Object kind
        scope: Requested placement (defaults to local)
        name: Entry name; None addresses the container of all entries
        parent: Name of the enclosing entry for nested kinds (static routes, proxy-ids)

    Returns:
        AddressPath: The resolved path

    Raises:
        UnsupportedScopeForModeError: If the kind or scope does not exist in this mode
        MissingDeviceGroupError: If Panorama needs a device-group and none was given
        ValidationError: If the name, parent or phase is invalid
    """
    scope = scope or ObjectScope.local()
    mapping = get_kind_mapping(kind)
    _check_placement(snapshot, kind, scope, mapping)
    validate_name(name, mapping["name_rule"])

    path = _container(snapshot, kind, scope, parent)
    if name is not None:
        path = path.entry(name)

    logger.debug(f"Resolved {kind.value} {name or '*'} with {scope!r} on {snapshot.mode.value}: {path}")
    return path


def resolve_container(
    snapshot: SessionSnapshot,
    kind: ObjectKind,
    scope: Optional[ObjectScope] = None,
    parent: Optional[str] = None,
) -> AddressPath:
    """Resolve the path holding every entry of a kind (used for listing)."""
    return resolve(snapshot, kind, scope, name=None, parent=parent)


def clear_xpath_cache() -> None:
    """Drop cached mappings so the next call reloads the file."""
    _xpath_cache.clear()
