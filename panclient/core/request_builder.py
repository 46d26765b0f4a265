"""
Request builder for PANClient.

Requests are assembled as typed key/value maps and encoded by the HTTP
library, never by string formatting. Required parameters are checked per
request type and action before anything is sent.
"""

import logging
from typing import Dict, Optional, Union
from urllib.parse import urlencode

from ..constants import CONFIG_ACTIONS, MOVE_POSITIONS
from .exceptions import ValidationError
from .object_validator import validate_choice
from .xml.builder import AddressPath, ConfigFragment

logger = logging.getLogger("panclient")

Element = Union[ConfigFragment, str]

# Actions whose element body can be large; sent as form data
_POST_ACTIONS = ("set", "edit", "multi-move", "multi-clone")


class ApiRequest:
    """
    One XML API request.

    Attributes:
        method: HTTP method (GET or POST)
        params: Query or form parameters, without the API key
    """

    def __init__(self, method: str, params: Dict[str, str]):
        self.method = method
        self.params = dict(params)

    @property
    def request_type(self) -> str:
        return self.params["type"]

    @property
    def action(self) -> Optional[str]:
        return self.params.get("action")

    def with_key(self, api_key: str) -> Dict[str, str]:
        """Return the parameters with the API key added."""
        params = dict(self.params)
        params["key"] = api_key
        return params

    def to_query(self) -> str:
        """Encode the parameters (without key) as a query string."""
        return urlencode(self.params)

    def __eq__(self, other):
        if not isinstance(other, ApiRequest):
            return NotImplemented
        return self.method == other.method and self.params == other.params

    def __repr__(self):
        return f"ApiRequest({self.method}, {self.params!r})"


def _element_text(element: Optional[Element]) -> Optional[str]:
    if element is None:
        return None
    if isinstance(element, ConfigFragment):
        return element.to_xml()
    return element


def build_config_request(
    action: str,
    xpath: Union[AddressPath, str],
    element: Optional[Element] = None,
    newname: Optional[str] = None,
    clone_from: Optional[Union[AddressPath, str]] = None,
    where: Optional[str] = None,
    dst: Optional[str] = None,
) -> ApiRequest:
    """
    Build a ``type=config`` request.

    Args:
        action: set, edit, delete, rename, clone, move, multi-move, multi-clone, get, show, override
        xpath: Target location
        element: Element body for set, edit, override and multi-* actions
        newname: New entry name for rename and clone
        clone_from: Source location for clone
        where: top, bottom, before or after (move)
        dst: Reference entry for move before/after

    Returns:
        ApiRequest

    Raises:
        ValidationError: If a parameter the action needs is missing
    """
    validate_choice("config action", action, CONFIG_ACTIONS)
    params = {"type": "config", "action": action, "xpath": str(xpath)}

    element_text = _element_text(element)
    if action in ("set", "edit", "override", "multi-move", "multi-clone"):
        if not element_text:
            raise ValidationError(f"Config {action} needs an element")
        params["element"] = element_text
    elif element_text:
        raise ValidationError(f"Config {action} does not take an element")

    if action == "rename":
        if not newname:
            raise ValidationError("Config rename needs a new name")
        params["newname"] = newname
    elif action == "clone":
        if not newname or clone_from is None:
            raise ValidationError("Config clone needs a source and a new name")
        params["from"] = str(clone_from)
        params["newname"] = newname
    elif action == "move":
        validate_choice("move position", where or "", MOVE_POSITIONS)
        params["where"] = where
        if where in ("before", "after"):
            if not dst:
                raise ValidationError(f"Moving {where} another entry needs its name")
            params["dst"] = dst

    method = "POST" if action in _POST_ACTIONS else "GET"
    return ApiRequest(method, params)


def build_op_request(cmd: Element) -> ApiRequest:
    """Build a ``type=op`` request for an operational command."""
    cmd_text = _element_text(cmd)
    if not cmd_text:
        raise ValidationError("Operational command must not be empty")
    return ApiRequest("GET", {"type": "op", "cmd": cmd_text})


def build_commit_request(cmd: Element, action: Optional[str] = None) -> ApiRequest:
    """
    Build a ``type=commit`` request.

    Args:
        cmd: Commit command body
        action: "all" for a Panorama commit-all
    """
    params = {"type": "commit", "cmd": _element_text(cmd)}
    if action:
        params["action"] = action
    return ApiRequest("GET", params)


def build_keygen_request(username: str, password: str) -> ApiRequest:
    """
    Build a ``type=keygen`` request.

    Credentials are sent as form data so they never appear in a URL.
    """
    if not username or not password:
        raise ValidationError("Key generation needs a username and a password")
    return ApiRequest("POST", {"type": "keygen", "user": username, "password": password})
