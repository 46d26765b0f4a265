"""
Policy management functions for PANClient.

Rules live in the firewall's local rulebase or in Panorama's pre and post
rulebases. The rulebase phase is always explicit; on Panorama, listing
without a phase reads both the pre and the post rulebase.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.device import Device
from ..core.payload_builder import build_log_forwarding, build_security_profiles, build_security_rule
from ..core.scope import RulebasePhase, ScopeOptions
from ..core.session import SessionSnapshot
from ..core.xml.builder import AddressPath, ConfigFragment
from ..core.xml.codec import decode_records
from ..core.xpath_resolver import ObjectKind, resolve
from .objects import create_entry, tag_object, untag_object

logger = logging.getLogger("panclient")


def _rule_options(device: Device, options: Optional[ScopeOptions]) -> ScopeOptions:
    """Fill in the local phase on firewalls; Panorama callers must choose pre or post."""
    options = options or ScopeOptions()
    if options.phase is None and not device.session.is_panorama:
        return options.with_phase(RulebasePhase.LOCAL)
    return options


def create_security_rule(
    device: Device,
    name: str,
    from_zones: List[str],
    to_zones: List[str],
    source: Optional[List[str]] = None,
    destination: Optional[List[str]] = None,
    application: Optional[List[str]] = None,
    service: Optional[List[str]] = None,
    action: str = "allow",
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    options: Optional[ScopeOptions] = None,
    source_user: Optional[List[str]] = None,
    category: Optional[List[str]] = None,
    disabled: bool = False,
) -> AddressPath:
    """
    Create a security rule.

    Args:
        device: Connected device
        name: Rule name
        from_zones: Source zones
        to_zones: Destination zones
        source: Source addresses (default any)
        destination: Destination addresses (default any)
        application: Applications (default any)
        service: Services (default application-default)
        action: Rule action
        description: Optional description
        tags: Optional tag names
        options: Placement and rulebase phase
        source_user: Source users (default any)
        category: URL categories (default any)
        disabled: Create the rule disabled

    Returns:
        AddressPath of the new rule
    """
    fragment = build_security_rule(
        from_zones,
        to_zones,
        source=source,
        destination=destination,
        application=application,
        service=service,
        action=action,
        description=description,
        tags=tags,
        source_user=source_user,
        category=category,
        disabled=disabled,
    )
    return create_entry(device, ObjectKind.SECURITY_RULE, name, fragment, _rule_options(device, options))


def list_security_rules(
    device: Device,
    options: Optional[ScopeOptions] = None,
    active: bool = False,
    snapshot: Optional[SessionSnapshot] = None,
) -> List[Dict[str, Any]]:
    """
    Read security rules.

    On Panorama without an explicit phase, the pre rulebase is read first
    and the post rulebase second; each record carries a ``rulebase`` key.
    Callers that write back to the listed rules pass their own snapshot.

    Returns:
        List of decoded rule records
    """
    options = options or ScopeOptions()
    snapshot = snapshot or device.snapshot()
    if options.phase is not None or not snapshot.is_panorama:
        phases = [options.phase or RulebasePhase.LOCAL]
    else:
        phases = [RulebasePhase.PRE, RulebasePhase.POST]

    rules = []
    for phase in phases:
        path = resolve(snapshot, ObjectKind.SECURITY_RULE, options.with_phase(phase).to_scope())
        for record in decode_records(device.get_config(path, active=active), ObjectKind.SECURITY_RULE.value):
            record["rulebase"] = phase.value
            rules.append(record)
    logger.debug(f"Found {len(rules)} security rules")
    return rules


def move_rule(
    device: Device,
    name: str,
    where: str,
    dst: Optional[str] = None,
    options: Optional[ScopeOptions] = None,
) -> AddressPath:
    """
    Move a rule within its rulebase.

    Args:
        device: Connected device
        name: Rule to move
        where: top, bottom, before or after
        dst: Reference rule for before and after
        options: Placement and rulebase phase
    """
    path = device.resolve(ObjectKind.SECURITY_RULE, _rule_options(device, options), name=name)
    device.move_config(path, where, dst)
    logger.info(f"Moved rule '{name}' {where}{' ' + dst if dst else ''}")
    return path


def tag_rule(device: Device, name: str, tags: List[str], options: Optional[ScopeOptions] = None) -> AddressPath:
    """Add tags to a security rule."""
    return tag_object(device, ObjectKind.SECURITY_RULE, name, tags, _rule_options(device, options))


def untag_rule(device: Device, name: str, tag: str, options: Optional[ScopeOptions] = None) -> AddressPath:
    """Remove a tag from a security rule."""
    return untag_object(device, ObjectKind.SECURITY_RULE, name, tag, _rule_options(device, options))


def apply_security_profiles(
    device: Device,
    rule: Optional[str] = None,
    group: Optional[str] = None,
    profiles: Optional[Dict[str, str]] = None,
    options: Optional[ScopeOptions] = None,
) -> List[AddressPath]:
    """
    Attach a security profile group, or individual profiles, to one rule or to
    every rule of a rulebase.

    Args:
        device: Connected device
        rule: Rule name; None applies the profiles to every rule found
        group: Security profile group name
        profiles: Mapping of profile type to profile name
        options: Placement and rulebase phase

    Returns:
        Paths of the updated rules
    """
    fragment = build_security_profiles(group=group, profiles=profiles)
    paths = _apply_to_rules(device, fragment, rule, options)
    logger.info(f"Applied security profiles to {len(paths)} rule(s)")
    return paths


def apply_log_forwarding(
    device: Device,
    profile: str,
    rule: Optional[str] = None,
    options: Optional[ScopeOptions] = None,
) -> List[AddressPath]:
    """
    Attach a log forwarding profile to one rule, or to every rule of a rulebase.

    Args:
        device: Connected device
        profile: Log forwarding profile name
        rule: Rule name; None applies the profile to every rule found
        options: Placement and rulebase phase

    Returns:
        Paths of the updated rules
    """
    fragment = build_log_forwarding(profile)
    paths = _apply_to_rules(device, fragment, rule, options)
    logger.info(f"Applied log forwarding profile '{profile}' to {len(paths)} rule(s)")
    return paths


def _apply_to_rules(
    device: Device,
    fragment: ConfigFragment,
    rule: Optional[str],
    options: Optional[ScopeOptions],
) -> List[AddressPath]:
    """Set a fragment on one rule, or on every rule listed, from a single snapshot."""
    snapshot = device.snapshot()
    options = _rule_options(device, options)
    if rule:
        targets = [(rule, options)]
    else:
        targets = [
            (record["name"], options.with_phase(RulebasePhase(record["rulebase"])))
            for record in list_security_rules(device, options, snapshot=snapshot)
        ]

    paths = []
    for name, rule_options in targets:
        path = resolve(snapshot, ObjectKind.SECURITY_RULE, rule_options.to_scope(), name=name)
        device.set_config(path, fragment)
        paths.append(path)
    return paths
