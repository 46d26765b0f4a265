"""
Object management commands for the PANClient CLI.

This module provides commands for creating, reading, renaming and deleting
configuration objects on a device.
"""

import logging
from typing import List, Optional

import typer

from panclient.constants import ADDRESS_TYPES, ADDRESS_TYPE_ALIASES, SERVICE_PROTOCOLS, TAG_COLORS
from panclient.core.exceptions import PANClientError

from ..app import object_app
from ..common import (
    ConnectionOptions,
    ScopeCliOptions,
    complete_object_kinds,
    complete_output_formats,
    connect,
    console,
    fail,
    kind_callback,
    output_callback,
    print_records,
    scope_options,
)

# Get logger
logger = logging.getLogger("panclient")


@object_app.command("create-address")
def create_address(
    name: str = typer.Argument(..., help="Address object name"),
    value: str = typer.Argument(..., help="Address value, e.g. 10.0.0.0/24"),
    address_type: str = typer.Option(
        "network-address",
        "--type",
        "-t",
        help="Address type (network-address, address-range, domain-name)",
        autocompletion=lambda: list(ADDRESS_TYPES) + list(ADDRESS_TYPE_ALIASES),
    ),
    description: Optional[str] = typer.Option(None, "--description", help="Description"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Tag name (repeatable)"),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Create an address object"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        path = client.create_address(
            name, address_type, value, description=description, tags=tags or None,
            options=scope_options(device_group, shared),
        )
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Created address '{name}' at {path}", markup=False, highlight=False)


@object_app.command("create-service")
def create_service(
    name: str = typer.Argument(..., help="Service object name"),
    port: str = typer.Argument(..., help="Destination port(s), e.g. 443 or 8000-8080,9000"),
    protocol: str = typer.Option(
        "tcp", "--protocol", help="Protocol (tcp or udp)", autocompletion=lambda: list(SERVICE_PROTOCOLS)
    ),
    source_port: Optional[str] = typer.Option(None, "--source-port", help="Source port(s)"),
    description: Optional[str] = typer.Option(None, "--description", help="Description"),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Create a service object"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        path = client.create_service(
            name, protocol, port, source_port=source_port, description=description,
            options=scope_options(device_group, shared),
        )
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Created service '{name}' at {path}", markup=False, highlight=False)


@object_app.command("create-tag")
def create_tag(
    name: str = typer.Argument(..., help="Tag name"),
    color: Optional[str] = typer.Option(
        None, "--color", help="Colour name, e.g. Red", autocompletion=lambda: list(TAG_COLORS)
    ),
    comments: Optional[str] = typer.Option(None, "--comments", help="Comment"),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Create a tag"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        path = client.create_tag(name, color, comments, options=scope_options(device_group, shared))
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Created tag '{name}' at {path}", markup=False, highlight=False)


@object_app.command("list")
def list_objects(
    kind: str = typer.Argument(..., help="Object kind", autocompletion=complete_object_kinds, callback=kind_callback),
    output_format: str = typer.Option(
        "table", "--format", help="Output format (table or json)",
        autocompletion=complete_output_formats, callback=output_callback,
    ),
    active: bool = typer.Option(False, "--active", help="Read the running instead of the candidate configuration"),
    parent: Optional[str] = typer.Option(None, "--parent", help="Enclosing entry for nested kinds"),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """List every entry of a kind"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        records = client.list_objects(kind, scope_options(device_group, shared), active=active, parent=parent)
    except (PANClientError, ValueError) as e:
        fail(e)
    print_records(records, f"{kind.value} entries", output_format)


@object_app.command("get")
def get_object(
    kind: str = typer.Argument(..., help="Object kind", autocompletion=complete_object_kinds, callback=kind_callback),
    name: str = typer.Argument(..., help="Entry name"),
    output_format: str = typer.Option(
        "table", "--format", help="Output format (table or json)",
        autocompletion=complete_output_formats, callback=output_callback,
    ),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Show one entry"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        record = client.get_object(kind, name, scope_options(device_group, shared))
    except (PANClientError, ValueError) as e:
        fail(e)
    if record is None:
        logger.error(f"{kind.value} '{name}' not found")
        raise typer.Exit(1)
    print_records([record], f"{kind.value} entries", output_format)


@object_app.command("delete")
def delete_object(
    kind: str = typer.Argument(..., help="Object kind", autocompletion=complete_object_kinds, callback=kind_callback),
    name: str = typer.Argument(..., help="Entry name"),
    parent: Optional[str] = typer.Option(None, "--parent", help="Enclosing entry for nested kinds"),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Delete an entry"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        client.delete_object(kind, name, scope_options(device_group, shared), parent=parent)
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Deleted {kind.value} '{name}'", markup=False, highlight=False)


@object_app.command("rename")
def rename_object(
    kind: str = typer.Argument(..., help="Object kind", autocompletion=complete_object_kinds, callback=kind_callback),
    name: str = typer.Argument(..., help="Current name"),
    new_name: str = typer.Argument(..., help="New name"),
    parent: Optional[str] = typer.Option(None, "--parent", help="Enclosing entry for nested kinds"),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Rename an entry"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        client.rename_object(kind, name, new_name, scope_options(device_group, shared), parent=parent)
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Renamed {kind.value} '{name}' to '{new_name}'", markup=False, highlight=False)
