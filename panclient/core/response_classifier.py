"""
Response classifier for PANClient.

Every status code the XML API can return maps to exactly one outcome
category. Classification is a pure function over (code, message); unknown
codes degrade to a fatal "unknown" outcome instead of raising.
"""

import logging
from enum import Enum
from typing import Dict, Optional

from ..constants import API_RESPONSE_CODES
from .exceptions import FatalError, RecoverableError

logger = logging.getLogger("panclient")


class OutcomeKind(Enum):
    SUCCESS = "success"
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


class OutcomeCategory(Enum):
    SUCCESS = "success"
    BAD_REQUEST = "bad-request"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not-found"
    NOT_UNIQUE = "not-unique"
    REFERENCE_COUNT_NONZERO = "reference-count-nonzero"
    MALFORMED = "malformed"
    TIMEOUT = "timeout"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


CODE_CATEGORIES: Dict[str, OutcomeCategory] = {
    "400": OutcomeCategory.BAD_REQUEST,
    "403": OutcomeCategory.FORBIDDEN,
    "1": OutcomeCategory.BAD_REQUEST,
    "2": OutcomeCategory.INTERNAL,
    "3": OutcomeCategory.INTERNAL,
    "4": OutcomeCategory.INTERNAL,
    "5": OutcomeCategory.INTERNAL,
    "6": OutcomeCategory.MALFORMED,
    "7": OutcomeCategory.NOT_FOUND,
    "8": OutcomeCategory.NOT_UNIQUE,
    "9": OutcomeCategory.INTERNAL,
    "10": OutcomeCategory.REFERENCE_COUNT_NONZERO,
    "11": OutcomeCategory.INTERNAL,
    "12": OutcomeCategory.MALFORMED,
    "13": OutcomeCategory.BAD_REQUEST,
    "14": OutcomeCategory.BAD_REQUEST,
    "15": OutcomeCategory.FORBIDDEN,
    "16": OutcomeCategory.FORBIDDEN,
    "17": OutcomeCategory.BAD_REQUEST,
    "18": OutcomeCategory.MALFORMED,
    "19": OutcomeCategory.SUCCESS,
    "20": OutcomeCategory.SUCCESS,
    "21": OutcomeCategory.INTERNAL,
    "22": OutcomeCategory.TIMEOUT,
}

RECOVERABLE_CATEGORIES = frozenset(
    {
        OutcomeCategory.NOT_FOUND,
        OutcomeCategory.NOT_UNIQUE,
        OutcomeCategory.REFERENCE_COUNT_NONZERO,
        OutcomeCategory.TIMEOUT,
    }
)


class Outcome:
    """Classified result of one API call."""

    __slots__ = ("kind", "category", "code", "message")

    def __init__(self, kind: OutcomeKind, category: OutcomeCategory, message: str, code: Optional[str] = None):
        self.kind = kind
        self.category = category
        self.message = message
        self.code = code

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def is_recoverable(self) -> bool:
        return self.kind is OutcomeKind.RECOVERABLE

    def raise_for_outcome(self) -> None:
        """
        Raise the matching SemanticError for a non-success outcome.

        Raises:
            RecoverableError: For recoverable categories
            FatalError: For every other non-success category
        """
        if self.kind is OutcomeKind.RECOVERABLE:
            raise RecoverableError(self)
        if self.kind is OutcomeKind.FATAL:
            raise FatalError(self)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "kind": self.kind.value,
            "category": self.category.value,
            "code": self.code,
            "message": self.message,
        }

    def __eq__(self, other):
        if not isinstance(other, Outcome):
            return NotImplemented
        return (self.kind, self.category, self.code, self.message) == (
            other.kind,
            other.category,
            other.code,
            other.message,
        )

    def __repr__(self):
        return f"Outcome({self.kind.value}, {self.category.value}, code={self.code!r}, message={self.message!r})"


SUCCESS = Outcome(OutcomeKind.SUCCESS, OutcomeCategory.SUCCESS, "Success")


def classify(code: Optional[str], message: Optional[str] = None) -> Outcome:
    """
    Classify a response status code.

    Args:
        code: Value of the ``code`` attribute (int or str)
        message: Message returned by the device; defaults to the code's description

    Returns:
        Outcome: SUCCESS, RECOVERABLE or FATAL with its category
    """
    code = None if code is None else str(code).strip()
    category = CODE_CATEGORIES.get(code)

    if category is None:
        logger.debug(f"Unmapped response code {code!r}")
        return Outcome(OutcomeKind.FATAL, OutcomeCategory.UNKNOWN, message or f"Unknown error code {code}", code)

    message = message or API_RESPONSE_CODES[code]
    if category is OutcomeCategory.SUCCESS:
        kind = OutcomeKind.SUCCESS
    elif category in RECOVERABLE_CATEGORIES:
        kind = OutcomeKind.RECOVERABLE
    else:
        kind = OutcomeKind.FATAL
    return Outcome(kind, category, message, code)


def classify_status(status: Optional[str], code: Optional[str], message: Optional[str] = None) -> Outcome:
    """
    Classify a response from its ``status`` and ``code`` attributes.

    A ``status="success"`` response is a success regardless of any code;
    an error without a code is a fatal unknown error carrying the message.
    """
    if status == "success":
        return Outcome(OutcomeKind.SUCCESS, OutcomeCategory.SUCCESS, message or "Success", code)
    if code is None:
        return Outcome(OutcomeKind.FATAL, OutcomeCategory.UNKNOWN, message or "Request failed without an error code")
    return classify(code, message)
