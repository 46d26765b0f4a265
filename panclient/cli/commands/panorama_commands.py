"""
Panorama management commands for the PANClient CLI.
"""

import logging
from typing import List, Optional

import typer

from panclient.core.exceptions import PANClientError

from ..app import panorama_app
from ..common import ConnectionOptions, connect, console, fail

# Get logger
logger = logging.getLogger("panclient")


@panorama_app.command("create-device-group")
def create_device_group(
    name: str = typer.Argument(..., help="Device-group name"),
    devices: Optional[List[str]] = typer.Option(None, "--device", help="Member serial number (repeatable)"),
    description: Optional[str] = typer.Option(None, "--description", help="Description"),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Create a device-group"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        path = client.create_device_group(name, devices or None, description)
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Created device-group '{name}' at {path}", markup=False, highlight=False)


@panorama_app.command("add-device")
def add_device(
    serial: str = typer.Argument(..., help="Firewall serial number"),
    device_group: Optional[str] = typer.Option(None, "--device-group", "-g", help="Device-group to join"),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Add a managed firewall"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        client.add_device(serial, device_group)
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Added device {serial}", markup=False, highlight=False)


@panorama_app.command("assign-template")
def assign_template(
    name: str = typer.Argument(..., help="Template or template stack name"),
    devices: List[str] = typer.Option(..., "--device", help="Serial number to assign (repeatable)"),
    stack: bool = typer.Option(False, "--stack", help="NAME is a template stack"),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Assign firewalls to a template or template stack"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        client.assign_template(name, devices, stack)
    except (PANClientError, ValueError) as e:
        fail(e)
    target = "template-stack" if stack else "template"
    console.print(f"Assigned {len(devices)} device(s) to {target} '{name}'", markup=False, highlight=False)


@panorama_app.command("commit-all")
def commit_all(
    device_group: str = typer.Argument(..., help="Device-group to push"),
    devices: Optional[List[str]] = typer.Option(None, "--device", help="Limit to this serial number (repeatable)"),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Push a device-group's policy to its firewalls"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        job = client.commit_all(device_group, devices or None)
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Commit-all job for {device_group}: {job or 'nothing to push'}")
