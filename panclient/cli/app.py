"""
Main CLI application for PANClient.

This module provides the main Typer application and command group registration.
"""

import logging
import sys

import typer

from panclient.core.logging_utils import configure_logging
from .common import CommonOptions

# Create main Typer app with auto-completion support
app = typer.Typer(
    help="PANClient CLI",
    add_completion=True,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Create command groups with auto-completion
object_app = typer.Typer(
    help="Object management commands",
    add_completion=True,
    no_args_is_help=True,
)
group_app = typer.Typer(
    help="Group membership commands",
    add_completion=True,
    no_args_is_help=True,
)
policy_app = typer.Typer(
    help="Security rule commands",
    add_completion=True,
    no_args_is_help=True,
)
panorama_app = typer.Typer(
    help="Panorama management commands",
    add_completion=True,
    no_args_is_help=True,
)

# Add sub-apps to main app
app.add_typer(object_app, name="object")
app.add_typer(group_app, name="group")
app.add_typer(policy_app, name="policy")
app.add_typer(panorama_app, name="panorama")

# Get logger
logger = logging.getLogger("panclient")

# Apply common options to the app
CommonOptions.apply_to_app(app)

# Set up a single console handler; the option callbacks adjust it per invocation
configure_logging(level="info")


# ===== Exception Handler =====
def _global_exception_handler(exc_type, exc_value, exc_traceback):
    """
    Global exception handler for unhandled exceptions.
    Provides more user-friendly error messages for common issues.
    """
    from panclient import (
        PANClientError, ConfigError, ValidationError, RoutingError,
        TransportError, ProtocolError, SemanticError,
    )

    if isinstance(exc_value, PANClientError):
        if isinstance(exc_value, ConfigError):
            logger.error(f"Configuration error: {exc_value}")
        elif isinstance(exc_value, ValidationError):
            logger.error(f"Validation error: {exc_value}")
        elif isinstance(exc_value, RoutingError):
            logger.error(f"Routing error: {exc_value}")
        elif isinstance(exc_value, TransportError):
            logger.error(f"Connection error: {exc_value}")
        elif isinstance(exc_value, ProtocolError):
            logger.error(f"Malformed response: {exc_value}")
        elif isinstance(exc_value, SemanticError):
            logger.error(f"Device rejected the request ({exc_value.category.value}): {exc_value}")
        else:
            logger.error(f"{exc_type.__name__}: {exc_value}")
        sys.exit(1)
    elif isinstance(exc_value, ValueError):
        logger.error(f"Value error: {exc_value}")
        sys.exit(1)
    elif isinstance(exc_value, PermissionError):
        logger.error(f"Permission denied: {exc_value}")
        sys.exit(1)
    else:
        # For other exceptions, show the full traceback in debug mode
        logger.error(f"Unexpected error: {exc_type.__name__}: {exc_value}")
        if logger.getEffectiveLevel() <= logging.DEBUG:
            import traceback
            logger.debug("Traceback:")
            for line in traceback.format_tb(exc_traceback):
                logger.debug(line.rstrip())
        sys.exit(1)


# Set up the global exception handler
sys.excepthook = _global_exception_handler
