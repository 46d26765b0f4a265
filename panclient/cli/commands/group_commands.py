"""
Group membership commands for the PANClient CLI.
"""

import logging
from typing import List, Optional

import typer

from panclient.core.exceptions import PANClientError
from panclient.core.xpath_resolver import ObjectKind

from ..app import group_app
from ..common import ConnectionOptions, ScopeCliOptions, connect, console, fail, scope_options

# Get logger
logger = logging.getLogger("panclient")

GROUP_KINDS = {
    "address": ObjectKind.ADDRESS_GROUP,
    "service": ObjectKind.SERVICE_GROUP,
}


def group_kind_callback(value: str) -> ObjectKind:
    """Convert a group type name to the group's ObjectKind."""
    if isinstance(value, ObjectKind):
        return value
    if value not in GROUP_KINDS:
        raise typer.BadParameter(f"Group type must be one of: {', '.join(GROUP_KINDS)}")
    return GROUP_KINDS[value]


def _group_type_option():
    return typer.Option(
        "address",
        "--type",
        "-t",
        help="Group type (address or service)",
        autocompletion=lambda: list(GROUP_KINDS),
        callback=group_kind_callback,
    )


@group_app.command("create")
def create_group(
    name: str = typer.Argument(..., help="Group name"),
    members: Optional[List[str]] = typer.Option(None, "--member", help="Member name (repeatable)"),
    filter_expr: Optional[str] = typer.Option(None, "--filter", help="Tag filter for a dynamic address group"),
    group_kind: str = _group_type_option(),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Create a static or dynamic address group, or a service group"""
    options = scope_options(device_group, shared)
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        if group_kind is ObjectKind.SERVICE_GROUP:
            path = client.create_service_group(name, members or [], options=options)
        elif filter_expr:
            path = client.create_address_group(name, "dynamic", filter_expr=filter_expr, options=options)
        else:
            path = client.create_address_group(name, "static", members=members or None, options=options)
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Created {group_kind.value} '{name}' at {path}", markup=False, highlight=False)


@group_app.command("add-member")
def add_member(
    group: str = typer.Argument(..., help="Group name"),
    member: str = typer.Argument(..., help="Member to add"),
    group_kind: str = _group_type_option(),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Add a member to a group"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        client.edit_group(group_kind, group, member, "add", scope_options(device_group, shared))
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Added '{member}' to {group_kind.value} '{group}'", markup=False, highlight=False)


@group_app.command("remove-member")
def remove_member(
    group: str = typer.Argument(..., help="Group name"),
    member: str = typer.Argument(..., help="Member to remove"),
    group_kind: str = _group_type_option(),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Remove a member from a group"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        client.edit_group(group_kind, group, member, "remove", scope_options(device_group, shared))
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Removed '{member}' from {group_kind.value} '{group}'", markup=False, highlight=False)
