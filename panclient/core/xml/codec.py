"""
Response codec for PANClient.

Turns raw response bytes into lxml trees, classifies them, and decodes
configuration entries into plain dictionaries, one decoder per object kind.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from lxml import etree

from ...constants import ADDRESS_TYPES, TAG_COLORS
from ..exceptions import ProtocolError
from ..response_classifier import Outcome, classify_status

logger = logging.getLogger("panclient")

_COLOR_NAMES = {value: name for name, value in TAG_COLORS.items()}
_ADDRESS_FIELDS = {element: field for field, element in ADDRESS_TYPES.items()}


def parse_response(raw: bytes) -> etree._Element:
    """
    Parse a response body.

    Args:
        raw: Response bytes as returned by the transport

    Returns:
        The ``<response>`` root element

    Raises:
        ProtocolError: If the body is not XML or its root is not ``response``
    """
    if not raw:
        raise ProtocolError("Empty response body")
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    try:
        root = etree.fromstring(raw, parser=etree.XMLParser(resolve_entities=False, no_network=True))
    except etree.XMLSyntaxError as e:
        error_msg = f"Malformed response: {e}"
        logger.error(error_msg)
        raise ProtocolError(error_msg) from e
    if root.tag != "response":
        raise ProtocolError(f"Unexpected response root element <{root.tag}>")
    return root


def response_message(root: etree._Element) -> Optional[str]:
    """
    Extract the human readable message of a response.

    Messages appear as ``<msg>``, ``<msg><line>..</line></msg>`` or
    ``<result><msg>``; multi-line messages are joined with spaces.
    """
    msg = root.find(".//msg")
    if msg is None:
        return None
    parts = [text.strip() for text in msg.itertext() if text.strip()]
    return " ".join(parts) or None


def classify_response(root: etree._Element) -> Outcome:
    """Classify a parsed response from its status, code and message."""
    return classify_status(root.get("status"), root.get("code"), response_message(root))


def check_response(raw: bytes) -> etree._Element:
    """
    Parse and classify a response, raising on anything but success.

    Returns:
        The ``<response>`` root element

    Raises:
        ProtocolError: If the body cannot be parsed
        RecoverableError: For recoverable failures (not found, not unique, ...)
        FatalError: For every other failure
    """
    root = parse_response(raw)
    outcome = classify_response(root)
    if not outcome.is_success:
        logger.debug(f"Request failed: {outcome!r}")
        outcome.raise_for_outcome()
    return root


def result_text(root: etree._Element, path: str) -> Optional[str]:
    """Return the stripped text at ``result/<path>``, or None."""
    element = root.find(f"result/{path}")
    if element is None or element.text is None:
        return None
    return element.text.strip()


def result_fields(root: etree._Element, path: str) -> Dict[str, str]:
    """Flatten the leaf children at ``result/<path>`` into a dictionary."""
    container = root.find(f"result/{path}")
    if container is None:
        return {}
    return {child.tag: (child.text or "").strip() for child in container if isinstance(child.tag, str) and len(child) == 0}


def _text(element: etree._Element, path: str) -> Optional[str]:
    found = element.find(path)
    if found is None or found.text is None:
        return None
    return found.text.strip()


def _members(element: etree._Element, path: str) -> List[str]:
    return [m.text.strip() for m in element.findall(f"{path}/member") if m.text]


def _entry_names(element: etree._Element, path: str) -> List[str]:
    return [e.get("name") for e in element.findall(f"{path}/entry")]


def _address(entry: etree._Element) -> Dict[str, Any]:
    record = {"name": entry.get("name")}
    for element, field in _ADDRESS_FIELDS.items():
        value = _text(entry, element)
        if value is not None:
            record[field] = value
    record["description"] = _text(entry, "description")
    record["tags"] = _members(entry, "tag")
    return record


def _address_group(entry: etree._Element) -> Dict[str, Any]:
    record = {"name": entry.get("name")}
    if entry.find("dynamic") is not None:
        record["type"] = "dynamic"
        record["filter"] = _text(entry, "dynamic/filter")
    else:
        record["type"] = "static"
        record["members"] = _members(entry, "static")
    record["description"] = _text(entry, "description")
    record["tags"] = _members(entry, "tag")
    return record


def _service(entry: etree._Element) -> Dict[str, Any]:
    record = {"name": entry.get("name"), "protocol": None, "port": None, "source_port": None}
    for protocol in ("tcp", "udp"):
        if entry.find(f"protocol/{protocol}") is not None:
            record["protocol"] = protocol
            record["port"] = _text(entry, f"protocol/{protocol}/port")
            record["source_port"] = _text(entry, f"protocol/{protocol}/source-port")
    record["description"] = _text(entry, "description")
    record["tags"] = _members(entry, "tag")
    return record


def _service_group(entry: etree._Element) -> Dict[str, Any]:
    return {"name": entry.get("name"), "members": _members(entry, "members"), "tags": _members(entry, "tag")}


def _tag(entry: etree._Element) -> Dict[str, Any]:
    color = _text(entry, "color")
    return {"name": entry.get("name"), "color": _COLOR_NAMES.get(color, color), "comments": _text(entry, "comments")}


def _url_category(entry: etree._Element) -> Dict[str, Any]:
    return {"name": entry.get("name"), "urls": _members(entry, "list"), "description": _text(entry, "description")}


def _external_list(entry: etree._Element) -> Dict[str, Any]:
    record = {"name": entry.get("name"), "type": None, "url": None, "recurrence": None}
    typed = entry.find("type")
    if typed is not None and len(typed):
        body = typed[0]
        record["type"] = body.tag
    else:
        body = entry
        record["type"] = _text(entry, "type")
    record["url"] = _text(body, "url")
    recurring = body.find("recurring")
    if recurring is not None and len(recurring):
        record["recurrence"] = recurring[0].tag
    record["description"] = _text(body, "description")
    return record


def _security_rule(entry: etree._Element) -> Dict[str, Any]:
    profiles = {}
    for profile in entry.findall("profile-setting/profiles/*"):
        members = _members(profile, ".")
        if members:
            profiles[profile.tag] = members[0]
    group = _members(entry, "profile-setting/group")
    return {
        "name": entry.get("name"),
        "from": _members(entry, "from"),
        "to": _members(entry, "to"),
        "source": _members(entry, "source"),
        "destination": _members(entry, "destination"),
        "source_user": _members(entry, "source-user"),
        "category": _members(entry, "category"),
        "application": _members(entry, "application"),
        "service": _members(entry, "service"),
        "action": _text(entry, "action"),
        "description": _text(entry, "description"),
        "tags": _members(entry, "tag"),
        "disabled": _text(entry, "disabled") == "yes",
        "profile_group": group[0] if group else None,
        "profiles": profiles,
        "log_setting": _text(entry, "log-setting"),
    }


def _device_group(entry: etree._Element) -> Dict[str, Any]:
    return {
        "name": entry.get("name"),
        "devices": _entry_names(entry, "devices"),
        "description": _text(entry, "description"),
    }


def _template_stack(entry: etree._Element) -> Dict[str, Any]:
    record = _device_group(entry)
    record["templates"] = _members(entry, "templates")
    return record


def _zone(entry: etree._Element) -> Dict[str, Any]:
    record = {"name": entry.get("name"), "type": None, "interfaces": []}
    network = entry.find("network")
    if network is not None:
        for child in network:
            if isinstance(child.tag, str) and child.tag not in ("zone-protection-profile", "log-setting"):
                record["type"] = child.tag
                record["interfaces"] = _members(child, ".")
                break
    record["user_id"] = _text(entry, "enable-user-identification") == "yes"
    return record


def element_to_dict(element: etree._Element) -> Any:
    """
    Convert an element into plain Python data.

    Leaf elements become their text, ``member`` lists become lists of
    strings, ``entry`` children become a dictionary keyed by name, and other
    children become nested dictionaries.
    """
    children = [child for child in element if isinstance(child.tag, str)]
    if not children:
        return (element.text or "").strip() or None
    if all(child.tag == "member" for child in children):
        return [(child.text or "").strip() for child in children]
    if all(child.tag == "entry" for child in children):
        return {child.get("name"): element_to_dict(child) for child in children}
    return {child.tag: element_to_dict(child) for child in children}


def _generic(entry: etree._Element) -> Dict[str, Any]:
    data = element_to_dict(entry)
    record = {"name": entry.get("name")}
    if isinstance(data, dict):
        record.update(data)
    return record


DECODERS: Dict[str, Callable[[etree._Element], Dict[str, Any]]] = {
    "address": _address,
    "address-group": _address_group,
    "service": _service,
    "service-group": _service_group,
    "tag": _tag,
    "custom-url-category": _url_category,
    "external-list": _external_list,
    "security-rule": _security_rule,
    "device-group": _device_group,
    "template": _device_group,
    "template-stack": _template_stack,
    "zone": _zone,
}


def find_entries(root: etree._Element) -> List[etree._Element]:
    """
    Return the configuration entries of a get/show response.

    Handles both a result holding entries directly (entry path) and a
    result holding one container element (container path).
    """
    result = root.find("result") if root.tag == "response" else root
    if result is None:
        return []
    entries = result.findall("entry")
    if entries:
        return entries
    return result.findall("*/entry")


def decode_records(root: etree._Element, kind: str) -> List[Dict[str, Any]]:
    """
    Decode every entry of a response into records.

    Args:
        root: Parsed response
        kind: Object kind value (e.g. "address")

    Returns:
        List of dictionaries, one per entry, in document order
    """
    decoder = DECODERS.get(kind, _generic)
    records = [decoder(entry) for entry in find_entries(root)]
    logger.debug(f"Decoded {len(records)} {kind} record(s)")
    return records
