"""
CLI package for PANClient.

This module organizes the command-line interface for PANClient into a modular structure.
"""

from .app import app

# Import commands to register them with the CLI
# This must be after importing app to avoid circular imports
from .commands import (
    device_commands,
    object_commands,
    group_commands,
    policy_commands,
    panorama_commands,
)
