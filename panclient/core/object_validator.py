"""
Input validation for PANClient.

Names and field values are checked here before any XPath or fragment is
built, so invalid input never reaches the device.
"""

import logging
import re
from typing import Iterable, List, Optional

from ..constants import VALIDATION_RULES
from .exceptions import InvalidNameError, InvalidTypeDiscriminatorError, ValidationError

logger = logging.getLogger("panclient")

_OBJECT_NAME = re.compile(VALIDATION_RULES["ALLOWED_NAME_CHARS"])
_INTERFACE_NAME = re.compile(VALIDATION_RULES["INTERFACE_NAME_FORMAT"])
_SERIAL = re.compile(VALIDATION_RULES["SERIAL_FORMAT"])
_PORT = re.compile(VALIDATION_RULES["PORT_FORMAT"])

# Name rules referenced by the XPath mapping file
NAME_RULES = ("object", "interface", "serial", "none")


def validate_object_name(name: str) -> str:
    """
    Validate a configuration object name.

    Names are 1-63 characters of letters, digits, space, hyphen and underscore.
    A slash would break out of the entry predicate and is rejected.

    Args:
        name: Object name

    Returns:
        The name, unchanged

    Raises:
        InvalidNameError: If the name is empty, too long or contains other characters
    """
    if not name:
        raise InvalidNameError("Object name must not be empty")
    max_length = VALIDATION_RULES["MAX_NAME_LENGTH"]
    if len(name) > max_length:
        raise InvalidNameError(f"Object name '{name}' is {len(name)} characters, the limit is {max_length}")
    if not _OBJECT_NAME.match(name):
        raise InvalidNameError(
            f"Object name '{name}' may only contain letters, digits, space, hyphen and underscore"
        )
    return name


def validate_interface_name(name: str) -> str:
    """Validate an interface name such as ethernet1/1, ethernet1/1.700 or tunnel.10."""
    if not name or not _INTERFACE_NAME.match(name):
        raise InvalidNameError(f"Invalid interface name '{name}'")
    return name


def validate_serial(serial: str) -> str:
    """Validate a managed device serial number."""
    if not serial or not _SERIAL.match(serial):
        raise InvalidNameError(f"Invalid device serial number '{serial}'")
    return serial


def validate_name(name: Optional[str], rule: str) -> Optional[str]:
    """
    Validate a name according to a named rule from the XPath mappings.

    Args:
        name: Name to check (None selects the container)
        rule: One of object, interface, serial, none

    Returns:
        The validated name

    Raises:
        InvalidNameError: If the name violates the rule
        ValueError: If the rule is unknown
    """
    if rule == "none":
        if name is not None:
            raise InvalidNameError(f"This location has no named entries, got '{name}'")
        return None
    if name is None:
        return None
    if rule == "object":
        return validate_object_name(name)
    if rule == "interface":
        return validate_interface_name(name)
    if rule == "serial":
        return validate_serial(name)
    raise ValueError(f"Unknown name rule: {rule}")


def validate_choice(field: str, value: str, allowed: Iterable[str]) -> str:
    """
    Check a discriminator value against a closed set.

    Raises:
        InvalidTypeDiscriminatorError: If the value is not in the set
    """
    allowed = list(allowed)
    if value not in allowed:
        logger.error(f"Rejected {field} '{value}'")
        raise InvalidTypeDiscriminatorError(field, value, allowed)
    return value


def normalize_ports(ports: str) -> str:
    """
    Normalise a service port expression.

    Spaces are stripped; the result is a comma separated list of ports or
    port ranges, each within 0-65535.

    Raises:
        ValidationError: If the port expression is malformed
    """
    normalized = (ports or "").replace(" ", "")
    if not _PORT.match(normalized):
        raise ValidationError(f"Invalid port expression '{ports}'")
    max_port = VALIDATION_RULES["MAX_PORT"]
    for part in normalized.replace("-", ",").split(","):
        if int(part) > max_port:
            raise ValidationError(f"Port {part} is outside 0-{max_port}")
    return normalized


def require_members(field: str, members: Optional[Iterable[str]]) -> List[str]:
    """
    Return a non-empty list of members.

    Raises:
        ValidationError: If no members were given
    """
    values = [member for member in (members or []) if member]
    if not values:
        raise ValidationError(f"{field} needs at least one member")
    return values
