"""
Core package for PANClient.

This package provides the building blocks every operation is made of: the
session context, placement scopes, the XPath resolver, payload and request
builders, the HTTP transport and the response classifier.
"""

from . import xml

from .exceptions import (
    PANClientError, ConfigError, ValidationError, InvalidNameError,
    InvalidTypeDiscriminatorError, RoutingError, UnsupportedScopeForModeError,
    MissingDeviceGroupError, TransportError, ProtocolError, SemanticError,
    RecoverableError, FatalError,
)
from .session import ManagementMode, SessionContext, SessionSnapshot
from .scope import ObjectScope, RulebasePhase, ScopeOptions, ScopeType
from .xpath_resolver import ObjectKind, Placement, resolve, resolve_container, load_xpath_mappings
from .response_classifier import Outcome, OutcomeCategory, OutcomeKind, classify, classify_status
from .request_builder import (
    ApiRequest, build_config_request, build_op_request, build_commit_request, build_keygen_request,
)
from .transport import HttpTransport
from .settings import ClientSettings
from .device import Device
from .logging_utils import configure_logging

__all__ = [
    # Exceptions
    "PANClientError", "ConfigError", "ValidationError", "InvalidNameError",
    "InvalidTypeDiscriminatorError", "RoutingError", "UnsupportedScopeForModeError",
    "MissingDeviceGroupError", "TransportError", "ProtocolError", "SemanticError",
    "RecoverableError", "FatalError",
    # Session and scope
    "ManagementMode", "SessionContext", "SessionSnapshot",
    "ObjectScope", "RulebasePhase", "ScopeOptions", "ScopeType",
    # Resolution
    "ObjectKind", "Placement", "resolve", "resolve_container", "load_xpath_mappings",
    # Classification
    "Outcome", "OutcomeCategory", "OutcomeKind", "classify", "classify_status",
    # Requests
    "ApiRequest", "build_config_request", "build_op_request", "build_commit_request",
    "build_keygen_request", "HttpTransport", "ClientSettings", "Device",
    # Logging
    "configure_logging",
]
