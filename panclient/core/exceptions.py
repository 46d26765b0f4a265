"""
Exception classes for PANClient.

This module defines custom exceptions used throughout the PANClient library.
Validation and routing errors are raised before any request leaves the
process; transport, protocol and semantic errors describe what happened on
the wire.
"""

class PANClientError(Exception):
    """
    Base exception class for all PANClient errors.

    All custom exceptions in the library should inherit from this class.
    """
    pass

class ConfigError(PANClientError):
    """Exception raised when client settings cannot be loaded."""
    pass

class ValidationError(PANClientError):
    """Exception raised when input validation fails."""
    pass

class InvalidNameError(ValidationError):
    """Exception raised when an object name violates the naming rules."""
    pass

class InvalidTypeDiscriminatorError(ValidationError):
    """Exception raised for an unrecognised type, protocol or colour value."""

    def __init__(self, field, value, allowed):
        """
        Initialize an InvalidTypeDiscriminatorError.

        Args:
            field: Name of the discriminator (e.g. "address type")
            value: The rejected value
            allowed: Iterable of accepted values
        """
        self.field = field
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid {field} '{value}', expected one of: {', '.join(self.allowed)}"
        )

class RoutingError(PANClientError):
    """Base class for errors raised while resolving a configuration address."""
    pass

class UnsupportedScopeForModeError(RoutingError):
    """Exception raised when a scope or object kind does not exist in the session's management mode."""
    pass

class MissingDeviceGroupError(RoutingError):
    """Exception raised when a Panorama operation needs a device-group and none was given."""
    pass

class TransportError(PANClientError):
    """Exception raised when the HTTP call fails (connect, TLS, timeout, HTTP status)."""
    pass

class ProtocolError(PANClientError):
    """Exception raised when a response body cannot be parsed or decoded."""
    pass

class SemanticError(PANClientError):
    """
    Exception raised when the device answers with a non-success status.

    Carries the classified outcome so callers can branch on the category
    instead of parsing messages.
    """

    recoverable = False

    def __init__(self, outcome):
        """
        Initialize a SemanticError.

        Args:
            outcome: Outcome produced by the response classifier
        """
        self.outcome = outcome
        self.code = outcome.code
        self.category = outcome.category
        self.message = outcome.message
        label = f"code {self.code}" if self.code is not None else "no code"
        super().__init__(f"{self.message} ({self.category.value}, {label})")

class RecoverableError(SemanticError):
    """Semantic error the caller may handle (not found, not unique, still referenced, timed out)."""

    recoverable = True

class FatalError(SemanticError):
    """Semantic error the caller should not retry."""

    recoverable = False
