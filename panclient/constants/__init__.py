"""
Constants package for PANClient.

This package exports constants used throughout the client, including default
values, response codes, and the closed value sets used for validation.
"""

from .common import (
    # Default values
    DEFAULT_VALUES,
    # Response codes and messages
    API_RESPONSE_CODES,
    # Object type discriminators
    ADDRESS_TYPES,
    ADDRESS_TYPE_ALIASES,
    ADDRESS_GROUP_TYPES,
    SERVICE_PROTOCOLS,
    TAG_COLORS,
    EDL_TYPES,
    EDL_RECURRENCES,
    WEEKDAYS,
    ZONE_TYPES,
    MOVE_POSITIONS,
    SECURITY_PROFILE_TYPES,
    SECURITY_ACTIONS,
    # Network and VPN discriminators
    UNIT_INTERFACE_TYPES,
    IKE_ENCRYPTIONS,
    IPSEC_ENCRYPTIONS,
    IKE_HASHES,
    IPSEC_AUTHENTICATIONS,
    DH_GROUPS,
    LIFETIME_UNITS,
    IKE_VERSIONS,
    IKE_EXCHANGE_MODES,
    IKE_ID_TYPES,
    # Validation rules and limits
    VALIDATION_RULES,
    # Config actions
    CONFIG_GET_ACTIONS,
    CONFIG_ACTIONS,
)
