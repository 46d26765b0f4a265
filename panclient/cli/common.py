"""
Common CLI options and callbacks for PANClient.

This module provides reusable option classes, the connection helper and the
output helpers shared by every command module.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from panclient import PANClient
from panclient.core.exceptions import PANClientError
from panclient.core.logging_utils import (
    verbose_callback,
    quiet_callback,
    log_level_callback,
    log_file_callback,
)
from panclient.core.scope import RulebasePhase, ScopeOptions
from panclient.core.settings import ClientSettings
from panclient.core.xpath_resolver import ObjectKind

logger = logging.getLogger("panclient")

console = Console()


def complete_object_kinds() -> List[str]:
    """Auto-complete object kinds."""
    return [kind.value for kind in ObjectKind]


def complete_phases() -> List[str]:
    """Auto-complete rulebase phases."""
    return [phase.value for phase in RulebasePhase]


def complete_output_formats() -> List[str]:
    """Auto-complete output formats."""
    return ["table", "json"]


class CommonOptions:
    """Base class for common command options."""

    @staticmethod
    def apply_to_app(app: typer.Typer):
        """Apply common options to the application."""

        @app.callback()
        def callback(
            verbose: bool = typer.Option(
                False, "--verbose", "-v", help="Enable verbose output", callback=verbose_callback
            ),
            quiet: bool = typer.Option(
                False, "--quiet", "-q", help="Suppress console output", callback=quiet_callback
            ),
            log_level: str = typer.Option(
                "info",
                "--log-level",
                "-l",
                help="Set log level (debug, info, warning, error, critical)",
                callback=log_level_callback,
            ),
            log_file: Optional[str] = typer.Option(
                None, "--log-file", "-f", help="Log to file", callback=log_file_callback
            ),
        ):
            """PANClient command line interface"""
            # Configure logging (done by callbacks)
            pass


class ConnectionOptions:
    """Options for reaching a device; unset values fall back to the settings file and environment."""

    @staticmethod
    def host():
        return typer.Option(None, "--host", "-H", help="Firewall or Panorama hostname")

    @staticmethod
    def api_key():
        return typer.Option(None, "--api-key", "-k", help="API key (or PANCLIENT_API_KEY)")

    @staticmethod
    def username():
        return typer.Option(None, "--username", "-u", help="Administrator used to generate an API key")

    @staticmethod
    def password():
        return typer.Option(None, "--password", "-p", help="Administrator password (or PANCLIENT_PASSWORD)")

    @staticmethod
    def settings_file():
        return typer.Option(None, "--settings", "-s", help="Path to a YAML settings file")

    @staticmethod
    def insecure():
        return typer.Option(False, "--insecure", help="Skip TLS certificate verification")


class ScopeCliOptions:
    """Options for object placement."""

    @staticmethod
    def device_group():
        """Option for device group."""
        return typer.Option(None, "--device-group", "-g", help="Device-group name (Panorama)")

    @staticmethod
    def shared():
        """Option for shared placement."""
        return typer.Option(False, "--shared", help="Place the object in shared (Panorama)")

    @staticmethod
    def phase():
        """Option for rulebase phase."""
        return typer.Option(
            None,
            "--phase",
            help="Rulebase phase (pre, post or local)",
            autocompletion=complete_phases,
            callback=phase_callback,
        )


def kind_callback(value: Optional[str]) -> Optional[ObjectKind]:
    """
    Convert an object kind name to an ObjectKind.

    Raises:
        typer.BadParameter: If the kind is unknown
    """
    if value is None or isinstance(value, ObjectKind):
        return value
    try:
        return ObjectKind(value)
    except ValueError:
        raise typer.BadParameter(
            f"Unknown object kind '{value}'. Valid kinds: {', '.join(complete_object_kinds())}"
        )


def phase_callback(value: Optional[str]) -> Optional[str]:
    """Validate a rulebase phase."""
    if value is not None and value not in complete_phases():
        raise typer.BadParameter(f"Rulebase phase must be one of: {', '.join(complete_phases())}")
    return value


def output_callback(value: str) -> str:
    """
    Validate that the output format is supported.

    Raises:
        typer.BadParameter: If the output format is not supported
    """
    if value not in complete_output_formats():
        formats_str = ", ".join(complete_output_formats())
        raise typer.BadParameter(f"Output format '{value}' not supported. Valid formats: {formats_str}")
    return value


def scope_options(device_group: Optional[str], shared: bool, phase: Optional[str] = None) -> ScopeOptions:
    return ScopeOptions(device_group=device_group, shared=shared, phase=phase)


def connect(
    host: Optional[str],
    api_key: Optional[str],
    username: Optional[str],
    password: Optional[str],
    settings_file: Optional[str],
    insecure: bool = False,
    transport=None,
) -> PANClient:
    """
    Load settings, apply command-line overrides and connect.

    Raises:
        ConfigError: If no host is configured
    """
    settings = ClientSettings.load(
        settings_file,
        host=host,
        api_key=api_key,
        username=username,
        password=password,
        verify_ssl=False if insecure else None,
    )
    return PANClient.from_settings(settings, transport=transport)


def print_records(records: List[Dict[str, Any]], title: str, output_format: str = "table") -> None:
    """Print decoded records as a rich table or as JSON."""
    if output_format == "json":
        console.print_json(json.dumps(records))
        return
    if not records:
        console.print(f"No {title.lower()} found")
        return

    columns = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)

    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for record in records:
        table.add_row(*[_cell(record.get(column)) for column in columns])
    console.print(table)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    if isinstance(value, dict):
        return ", ".join(f"{k}={v}" for k, v in value.items())
    return str(value)


def fail(error: Exception) -> None:
    """Log a command failure and exit with status 1."""
    if isinstance(error, PANClientError):
        logger.error(f"{type(error).__name__}: {error}")
    else:
        logger.error(f"Error: {error}")
    raise typer.Exit(1)
