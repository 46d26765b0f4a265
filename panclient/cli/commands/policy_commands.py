"""
Security rule commands for the PANClient CLI.

On Panorama every rule command needs ``--phase pre`` or ``--phase post``,
except ``list``, which reads both rulebases when no phase is given.
"""

import logging
from typing import Dict, List, Optional

import typer

from panclient.constants import MOVE_POSITIONS, SECURITY_ACTIONS
from panclient.core.exceptions import PANClientError

from ..app import policy_app
from ..common import (
    ConnectionOptions,
    ScopeCliOptions,
    complete_output_formats,
    connect,
    console,
    fail,
    output_callback,
    print_records,
    scope_options,
)

# Get logger
logger = logging.getLogger("panclient")


@policy_app.command("create")
def create_rule(
    name: str = typer.Argument(..., help="Rule name"),
    from_zones: List[str] = typer.Option(..., "--from", help="Source zone (repeatable)"),
    to_zones: List[str] = typer.Option(..., "--to", help="Destination zone (repeatable)"),
    source: Optional[List[str]] = typer.Option(None, "--source", help="Source address (repeatable)"),
    destination: Optional[List[str]] = typer.Option(None, "--destination", help="Destination address (repeatable)"),
    application: Optional[List[str]] = typer.Option(None, "--application", help="Application (repeatable)"),
    service: Optional[List[str]] = typer.Option(None, "--service", help="Service (repeatable)"),
    source_user: Optional[List[str]] = typer.Option(None, "--source-user", help="Source user (repeatable)"),
    category: Optional[List[str]] = typer.Option(None, "--category", help="URL category (repeatable)"),
    disabled: bool = typer.Option(False, "--disabled", help="Create the rule disabled"),
    action: str = typer.Option(
        "allow", "--action", help="Rule action", autocompletion=lambda: list(SECURITY_ACTIONS)
    ),
    description: Optional[str] = typer.Option(None, "--description", help="Description"),
    phase: Optional[str] = ScopeCliOptions.phase(),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Create a security rule"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        path = client.create_security_rule(
            name,
            from_zones,
            to_zones,
            options=scope_options(device_group, shared, phase),
            source=source or None,
            destination=destination or None,
            application=application or None,
            service=service or None,
            action=action,
            description=description,
            source_user=source_user or None,
            category=category or None,
            disabled=disabled,
        )
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Created rule '{name}' at {path}", markup=False, highlight=False)


@policy_app.command("list")
def list_rules(
    output_format: str = typer.Option(
        "table", "--format", help="Output format (table or json)",
        autocompletion=complete_output_formats, callback=output_callback,
    ),
    active: bool = typer.Option(False, "--active", help="Read the running instead of the candidate configuration"),
    phase: Optional[str] = ScopeCliOptions.phase(),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """List security rules"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        rules = client.list_security_rules(scope_options(device_group, shared, phase), active=active)
    except (PANClientError, ValueError) as e:
        fail(e)
    print_records(rules, "Security rules", output_format)


@policy_app.command("move")
def move_rule(
    name: str = typer.Argument(..., help="Rule to move"),
    where: str = typer.Argument(..., help="top, bottom, before or after", autocompletion=lambda: list(MOVE_POSITIONS)),
    dst: Optional[str] = typer.Argument(None, help="Reference rule for before and after"),
    phase: Optional[str] = ScopeCliOptions.phase(),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Move a security rule"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        client.move_rule(name, where, dst, scope_options(device_group, shared, phase))
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Moved rule '{name}' {where}{' ' + dst if dst else ''}", markup=False, highlight=False)


@policy_app.command("log-forwarding")
def apply_log_forwarding(
    profile: str = typer.Argument(..., help="Log forwarding profile"),
    rule: Optional[str] = typer.Option(None, "--rule", help="Only this rule; every rule when omitted"),
    phase: Optional[str] = ScopeCliOptions.phase(),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Attach a log forwarding profile to security rules"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        paths = client.apply_log_forwarding(profile, rule, scope_options(device_group, shared, phase))
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Applied '{profile}' to {len(paths)} rule(s)", markup=False, highlight=False)


def _parse_profiles(values: Optional[List[str]]) -> Optional[Dict[str, str]]:
    """Turn ``type=name`` pairs into a profile mapping."""
    if not values:
        return None
    profiles = {}
    for value in values:
        profile_type, sep, profile_name = value.partition("=")
        if not sep or not profile_type or not profile_name:
            raise typer.BadParameter(f"Expected TYPE=NAME, got '{value}'")
        profiles[profile_type] = profile_name
    return profiles


@policy_app.command("security-profiles")
def apply_security_profiles(
    group: Optional[str] = typer.Option(None, "--group", help="Security profile group"),
    profiles: Optional[List[str]] = typer.Option(
        None, "--profile", help="Individual profile as TYPE=NAME, e.g. virus=default (repeatable)"
    ),
    rule: Optional[str] = typer.Option(None, "--rule", help="Only this rule; every rule when omitted"),
    phase: Optional[str] = ScopeCliOptions.phase(),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Attach a profile group or individual profiles to security rules"""
    profile_map = _parse_profiles(profiles)
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        paths = client.apply_security_profiles(rule, group, profile_map, scope_options(device_group, shared, phase))
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Applied security profiles to {len(paths)} rule(s)", markup=False, highlight=False)
