"""
Device connection for PANClient.

A Device pairs a SessionContext with a transport and offers the XML API
primitives (config actions, operational commands, commit) that the
operation modules are built on. Every call goes through the request
builder and the response classifier.
"""

import logging
from typing import Dict, Optional, Union

from lxml import etree

from ..constants import CONFIG_GET_ACTIONS, DEFAULT_VALUES
from .exceptions import ProtocolError, ValidationError
from .payload_builder import build_commit, build_op_command
from .request_builder import (
    ApiRequest,
    Element,
    build_commit_request,
    build_config_request,
    build_keygen_request,
    build_op_request,
)
from .scope import ScopeOptions
from .session import ManagementMode, SessionContext, SessionSnapshot
from .transport import HttpTransport
from .xml.builder import AddressPath, ConfigFragment, FragmentBuilder
from .xml.codec import check_response, result_fields, result_text
from .xpath_resolver import ObjectKind, resolve

logger = logging.getLogger("panclient")

Path = Union[AddressPath, str]


class Device:
    """A connected firewall or Panorama."""

    def __init__(self, session: SessionContext, transport):
        """
        Initialize with an established session.

        Args:
            session: Session context of the device
            transport: Object with ``send(method, params) -> bytes``
        """
        self.session = session
        self.transport = transport

    @classmethod
    def connect(
        cls,
        host: str,
        api_key: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        verify_ssl=True,
        timeout: float = DEFAULT_VALUES["TIMEOUT"],
        port: Optional[int] = None,
        vsys: str = DEFAULT_VALUES["VSYS"],
        transport=None,
    ) -> "Device":
        """
        Open a session to a device.

        Generates an API key when only credentials are given, then reads
        "show system info" to detect Panorama, and on firewalls reads
        "show panorama-status" to detect a connected Panorama.

        Args:
            host: Hostname or IP address
            api_key: Existing API key
            username: Administrator name used to generate a key
            password: Administrator password used to generate a key
            verify_ssl: Certificate verification (True, False or CA bundle path)
            timeout: Request timeout in seconds
            port: HTTPS port when not 443
            vsys: Virtual system for firewall object paths
            transport: Transport to use instead of HttpTransport

        Returns:
            Device

        Raises:
            ValidationError: If neither an API key nor credentials are given
            TransportError, ProtocolError, SemanticError: If a setup request fails
        """
        transport = transport or HttpTransport(host, verify_ssl=verify_ssl, timeout=timeout, port=port)

        if not api_key:
            if not (username and password):
                raise ValidationError("Either an API key or a username and password are required")
            api_key = cls.generate_api_key(transport, username, password)

        session = SessionContext(host, api_key, vsys=vsys)
        device = cls(session, transport)

        info = device.system_info()
        session.system_info = info
        session.mode = ManagementMode.from_system_info(info)
        if session.mode is ManagementMode.STANDALONE:
            session.panorama_connected = device.panorama_status()

        logger.info(
            f"Connected to {host}: {session.mode.value} {info.get('model', 'unknown model')} "
            f"running {info.get('sw-version', 'unknown version')}"
        )
        return device

    @staticmethod
    def generate_api_key(transport, username: str, password: str) -> str:
        """
        Generate an API key from administrator credentials.

        Raises:
            ProtocolError: If the response carries no key
        """
        request = build_keygen_request(username, password)
        root = check_response(transport.send(request.method, request.params))
        key = result_text(root, "key")
        if not key:
            raise ProtocolError("Key generation response carries no key")
        logger.debug(f"Generated API key for {username}")
        return key

    def snapshot(self) -> SessionSnapshot:
        return self.session.snapshot()

    def set_shared(self, shared: bool = True) -> None:
        self.session.set_shared(shared)

    def request(self, api_request: ApiRequest) -> etree._Element:
        """
        Send a request and return the successful response.

        Raises:
            TransportError: If the HTTP call fails
            ProtocolError: If the response cannot be parsed
            RecoverableError, FatalError: If the device rejects the request
        """
        raw = self.transport.send(api_request.method, api_request.with_key(self.session.api_key))
        return check_response(raw)

    # Configuration primitives

    def set_config(self, xpath: Path, element: Element) -> etree._Element:
        return self.request(build_config_request("set", xpath, element=element))

    def edit_config(self, xpath: Path, element: Element) -> etree._Element:
        return self.request(build_config_request("edit", xpath, element=element))

    def delete_config(self, xpath: Path) -> etree._Element:
        return self.request(build_config_request("delete", xpath))

    def rename_config(self, xpath: Path, newname: str) -> etree._Element:
        return self.request(build_config_request("rename", xpath, newname=newname))

    def clone_config(self, container: Path, source: Path, newname: str) -> etree._Element:
        return self.request(build_config_request("clone", container, clone_from=source, newname=newname))

    def move_config(self, xpath: Path, where: str, dst: Optional[str] = None) -> etree._Element:
        return self.request(build_config_request("move", xpath, where=where, dst=dst))

    def multi_config(self, action: str, xpath: Path, element: Element) -> etree._Element:
        """Run a multi-move or multi-clone with a ``<selected-list>`` element."""
        if action not in ("multi-move", "multi-clone"):
            raise ValidationError(f"Unsupported multi action '{action}'")
        return self.request(build_config_request(action, xpath, element=element))

    def get_config(self, xpath: Path, active: bool = False) -> etree._Element:
        """
        Read configuration.

        Args:
            xpath: Location to read
            active: Read the running configuration instead of the candidate
        """
        action = CONFIG_GET_ACTIONS["active" if active else "candidate"]
        return self.request(build_config_request(action, xpath))

    def set_entry(self, path: AddressPath, name: str, fragment: ConfigFragment) -> AddressPath:
        """
        Create or merge a named entry below a container path.

        An entry with a body is set at the entry path; an empty entry is
        set as ``<entry name="..."/>`` at the container.
        """
        entry_path = path.entry(name)
        if fragment:
            self.set_config(entry_path, fragment)
        else:
            self.set_config(path, FragmentBuilder().add("entry", {"name": name}).build())
        return entry_path

    def resolve(
        self,
        kind: ObjectKind,
        options: Optional[ScopeOptions] = None,
        name: Optional[str] = None,
        parent: Optional[str] = None,
        snapshot: Optional[SessionSnapshot] = None,
    ) -> AddressPath:
        """Resolve a path with the current (or a given) session snapshot."""
        options = options or ScopeOptions()
        return resolve(snapshot or self.snapshot(), kind, options.to_scope(), name=name, parent=parent)

    # Operational commands

    def op(self, cmd: Element) -> etree._Element:
        """Run an operational command given as XML text or a fragment."""
        return self.request(build_op_request(cmd))

    def system_info(self) -> Dict[str, str]:
        """Return the fields of "show system info"."""
        root = self.op(build_op_command("show", "system", "info"))
        return result_fields(root, "system")

    def panorama_status(self) -> bool:
        """Return True when a firewall reports a connected Panorama."""
        root = self.op(build_op_command("show", "panorama-status"))
        result = root.find("result")
        status = " ".join(result.itertext()) if result is not None else ""
        return ": yes" in status

    def commit(self) -> Optional[str]:
        """
        Commit the candidate configuration.

        Returns:
            Job id, or None when there was nothing to commit
        """
        root = self.request(build_commit_request(build_commit()))
        job = result_text(root, "job")
        if job:
            logger.info(f"Commit on {self.session.host} queued as job {job}")
        else:
            logger.info(f"Nothing to commit on {self.session.host}")
        return job

    def __repr__(self):
        return f"{type(self).__name__}({self.session!r})"
