"""
Common constants for the PAN-OS XML API client.

This module defines constants used throughout PANClient, including default
values, API response codes and the closed value sets that payload builders
validate against.
"""

from typing import Dict, List

# Default values
DEFAULT_VALUES = {
    "VSYS": "vsys1",
    "TIMEOUT": 30,
    "STATIC_ROUTE_METRIC": 10,
    "PANOS_MAJOR_VERSION": 8,
    "ADMIN_USER": "admin",
}

# Response codes returned in <response code="..."> and their descriptions.
# The numeric-string keys mirror the attribute value as it appears on the wire.
API_RESPONSE_CODES = {
    "400": "Bad request - Returned when a required parameter is missing, an illegal parameter value is used",
    "403": "Forbidden - Returned for authentication or authorization errors including invalid key, insufficient admin access rights",
    "1": "Unknown command - The specific config or operational command is not recognized",
    "2": "Internal error - Check with technical support when seeing these errors",
    "3": "Internal error - Check with technical support when seeing these errors",
    "4": "Internal error - Check with technical support when seeing these errors",
    "5": "Internal error - Check with technical support when seeing these errors",
    "6": "Bad Xpath - The xpath specified in one or more attributes of the command is invalid. Check the API browser for proper xpath values",
    "7": "Object not present - Object specified by the xpath is not present. For example, entry[@name='value'] where no object with name 'value' is present",
    "8": "Object not unique - For commands that operate on a single object, the specified object is not unique",
    "9": "Internal error - Check with technical support when seeing these errors",
    "10": "Reference count not zero - Object cannot be deleted as there are other objects that refer to it. For example, address object still in use in policy",
    "11": "Internal error - Check with technical support when seeing these errors",
    "12": "Invalid object - Xpath or element values provided are not complete",
    "13": "Operation failed - A descriptive error message is returned in the response",
    "14": "Operation not possible - Operation is not possible. For example, moving a rule up one position when it is already at the top",
    "15": "Operation denied - For example, Admin not allowed to delete own account, Running a command that is not allowed on a passive device",
    "16": "Unauthorized - The API role does not have access rights to run this query",
    "17": "Invalid command - Invalid command or parameters",
    "18": "Malformed command - The XML is malformed",
    "19": "Success - Command completed successfully",
    "20": "Success - Command completed successfully",
    "21": "Internal error - Check with technical support when seeing these errors",
    "22": "Session timed out - The session for this query timed out",
}

# Address object types and the element each one is stored under
ADDRESS_TYPES = {
    "network-address": "ip-netmask",
    "address-range": "ip-range",
    "domain-name": "fqdn",
}

# Short type names accepted as aliases
ADDRESS_TYPE_ALIASES = {
    "ip": "network-address",
    "range": "address-range",
    "fqdn": "domain-name",
}

ADDRESS_GROUP_TYPES = ["static", "dynamic"]

SERVICE_PROTOCOLS = ["tcp", "udp"]

# Tag colour names and their configuration values
TAG_COLORS = {
    "Red": "color1",
    "Green": "color2",
    "Blue": "color3",
    "Yellow": "color4",
    "Copper": "color5",
    "Orange": "color6",
    "Purple": "color7",
    "Gray": "color8",
    "Light Green": "color9",
    "Cyan": "color10",
    "Light Gray": "color11",
    "Blue Gray": "color12",
    "Lime": "color13",
    "Black": "color14",
    "Gold": "color15",
    "Brown": "color16",
}

EDL_TYPES = ["ip", "domain", "url"]

EDL_RECURRENCES = ["five-minute", "hourly", "daily", "weekly", "monthly"]

WEEKDAYS = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

ZONE_TYPES = {
    "tap": "tap",
    "vwire": "virtual-wire",
    "layer2": "layer2",
    "layer3": "layer3",
}

MOVE_POSITIONS = ["top", "bottom", "before", "after"]

# Security profile attachment order inside <profiles>
SECURITY_PROFILE_TYPES = [
    "url-filtering",
    "file-blocking",
    "virus",
    "spyware",
    "vulnerability",
    "wildfire-analysis",
]

SECURITY_ACTIONS = {
    "ALLOW": "allow",
    "DENY": "deny",
    "DROP": "drop",
    "RESET_CLIENT": "reset-client",
    "RESET_SERVER": "reset-server",
    "RESET_BOTH": "reset-both",
}

# Validation rules and limits
VALIDATION_RULES = {
    "MAX_NAME_LENGTH": 63,
    "ALLOWED_NAME_CHARS": r"^[A-Za-z0-9 _-]+$",
    "INTERFACE_NAME_FORMAT": r"^(ethernet\d+/\d+(\.\d+)?|ae\d+(\.\d+)?|(vlan|loopback|tunnel)(\.\d+)?)$",
    "SERIAL_FORMAT": r"^[A-Za-z0-9]+$",
    "PORT_FORMAT": r"^\d+(-\d+)?(,\d+(-\d+)?)*$",
    "MAX_PORT": 65535,
}

# Config retrieval actions
CONFIG_GET_ACTIONS: Dict[str, str] = {"candidate": "get", "active": "show"}

CONFIG_ACTIONS: List[str] = [
    "set",
    "edit",
    "delete",
    "rename",
    "clone",
    "move",
    "multi-move",
    "multi-clone",
    "get",
    "show",
    "override",
]

# Logical interfaces configured as units of a parent interface
UNIT_INTERFACE_TYPES = ["vlan", "loopback", "tunnel"]

# IKE / IPsec crypto settings
IKE_ENCRYPTIONS = ["des", "3des", "aes-128-cbc", "aes-192-cbc", "aes-256-cbc"]

IPSEC_ENCRYPTIONS = IKE_ENCRYPTIONS + ["aes-128-ccm", "aes-128-gcm", "aes-256-gcm", "null"]

IKE_HASHES = ["md5", "sha1", "sha256", "sha384", "sha512"]

IPSEC_AUTHENTICATIONS = IKE_HASHES + ["none"]

DH_GROUPS = ["1", "2", "5", "14", "19", "20"]

LIFETIME_UNITS = ["seconds", "minutes", "hours", "days"]

IKE_VERSIONS = ["v1", "v2", "v2-preferred"]

IKE_EXCHANGE_MODES = ["auto", "main", "aggressive"]

IKE_ID_TYPES = ["ipaddr", "fqdn", "ufqdn", "keyid", "dn"]
