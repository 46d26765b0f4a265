"""
Command modules for PANClient CLI.

Each module registers commands with the main Typer app or one of its groups.
"""

from . import device_commands
from . import object_commands
from . import group_commands
from . import policy_commands
from . import panorama_commands

__all__ = [
    "device_commands",
    "object_commands",
    "group_commands",
    "policy_commands",
    "panorama_commands",
]
