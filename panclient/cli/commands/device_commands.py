"""
Device-level commands for the PANClient CLI.

``xpath`` and ``classify`` work offline; ``info`` and ``commit`` talk to a device.
"""

import logging
from typing import Optional

import typer

from panclient.constants import DEFAULT_VALUES
from panclient.core.exceptions import PANClientError
from panclient.core.response_classifier import classify
from panclient.core.session import ManagementMode, SessionSnapshot
from panclient.core.xpath_resolver import resolve

from ..app import app
from ..common import (
    ConnectionOptions,
    ScopeCliOptions,
    complete_object_kinds,
    connect,
    console,
    fail,
    kind_callback,
    scope_options,
)

# Get logger
logger = logging.getLogger("panclient")


@app.command("xpath")
def show_xpath(
    kind: str = typer.Argument(..., help="Object kind", autocompletion=complete_object_kinds, callback=kind_callback),
    name: Optional[str] = typer.Argument(None, help="Entry name; omit for the container"),
    mode: str = typer.Option(
        "firewall",
        "--mode",
        "-m",
        help="Management mode (firewall or panorama)",
        autocompletion=lambda: [mode.value for mode in ManagementMode],
    ),
    device_group: Optional[str] = ScopeCliOptions.device_group(),
    shared: bool = ScopeCliOptions.shared(),
    phase: Optional[str] = ScopeCliOptions.phase(),
    vsys: str = typer.Option(DEFAULT_VALUES["VSYS"], "--vsys", help="Virtual system (firewall)"),
    parent: Optional[str] = typer.Option(None, "--parent", help="Enclosing entry for nested kinds"),
):
    """Print the XPath an operation would address, without contacting a device"""
    try:
        snapshot = SessionSnapshot(mode=ManagementMode(mode), vsys=vsys)
        path = resolve(snapshot, kind, scope_options(device_group, shared, phase).to_scope(), name=name, parent=parent)
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(path.xpath, markup=False, highlight=False, soft_wrap=True)


@app.command("classify")
def classify_code(
    code: str = typer.Argument(..., help="Response code from <response code=...>"),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Message returned with the code"),
):
    """Show how a response code is classified"""
    outcome = classify(code, message)
    console.print(f"{outcome.kind.value} {outcome.category.value}: {outcome.message}", markup=False, highlight=False)


@app.command("info")
def device_info(
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Show the management mode and system information of a device"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
    except (PANClientError, ValueError) as e:
        fail(e)
    session = client.session.to_dict()
    console.print(f"{session['host']}: {session['mode']}", markup=False)
    if not client.session.is_panorama:
        console.print(f"Panorama connected: {'yes' if session['panorama_connected'] else 'no'}")
    for field, value in session["system_info"].items():
        console.print(f"  {field}: {value}", markup=False, highlight=False)


@app.command("commit")
def commit(
    device_group: Optional[str] = typer.Option(
        None, "--device-group", "-g", help="Push this device-group after committing (Panorama)"
    ),
    host: Optional[str] = ConnectionOptions.host(),
    api_key: Optional[str] = ConnectionOptions.api_key(),
    username: Optional[str] = ConnectionOptions.username(),
    password: Optional[str] = ConnectionOptions.password(),
    settings_file: Optional[str] = ConnectionOptions.settings_file(),
    insecure: bool = ConnectionOptions.insecure(),
):
    """Commit the candidate configuration"""
    try:
        client = connect(host, api_key, username, password, settings_file, insecure)
        job = client.commit()
        push_job = client.commit_all(device_group) if device_group else None
    except (PANClientError, ValueError) as e:
        fail(e)
    console.print(f"Commit job: {job or 'nothing to commit'}")
    if device_group:
        console.print(f"Commit-all job for {device_group}: {push_job or 'nothing to push'}")
