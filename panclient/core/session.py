"""
Session context for PANClient.

A SessionContext is created once per connection and records what kind of
device the client talks to. Operations never read it directly; they take an
immutable snapshot at the start of the call so a concurrent change to the
shared preference cannot affect an operation already in flight.
"""

import logging
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional

from ..constants import DEFAULT_VALUES
from .exceptions import UnsupportedScopeForModeError

logger = logging.getLogger("panclient")


class ManagementMode(Enum):
    """Management mode of the connected device."""

    STANDALONE = "firewall"
    CENTRALIZED_MANAGER = "panorama"

    @classmethod
    def from_system_info(cls, info: Dict[str, str]) -> "ManagementMode":
        """
        Detect the management mode from "show system info" fields.

        Args:
            info: Flat dictionary of the <system> children

        Returns:
            CENTRALIZED_MANAGER for Panorama, STANDALONE otherwise
        """
        if info.get("platform-family") == "m" or info.get("model") == "Panorama":
            return cls.CENTRALIZED_MANAGER
        return cls.STANDALONE


class SessionSnapshot(NamedTuple):
    """Immutable view of a session taken at the start of an operation."""

    mode: ManagementMode
    shared: bool = False
    vsys: str = DEFAULT_VALUES["VSYS"]
    panorama_connected: bool = False
    software_version: Optional[str] = None

    @property
    def is_panorama(self) -> bool:
        return self.mode is ManagementMode.CENTRALIZED_MANAGER

    @property
    def major_version(self) -> int:
        """Major PAN-OS version, or the default when the version is unknown."""
        if not self.software_version:
            return DEFAULT_VALUES["PANOS_MAJOR_VERSION"]
        try:
            return int(self.software_version.split(".")[0])
        except ValueError:
            logger.warning(f"Unparseable software version '{self.software_version}'")
            return DEFAULT_VALUES["PANOS_MAJOR_VERSION"]


class SessionContext:
    """Connection-level facts about the device being managed."""

    def __init__(
        self,
        host: str,
        api_key: str,
        mode: ManagementMode = ManagementMode.STANDALONE,
        panorama_connected: bool = False,
        vsys: str = DEFAULT_VALUES["VSYS"],
        system_info: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize a session context.

        Args:
            host: Hostname or IP address of the device
            api_key: API key used for every request
            mode: Management mode of the device
            panorama_connected: Whether a standalone device reports a connected Panorama
            vsys: Virtual system used for standalone object paths
            system_info: Raw "show system info" fields
        """
        self.host = host
        self.api_key = api_key
        self.mode = mode
        self.panorama_connected = panorama_connected
        self.vsys = vsys
        self.system_info = dict(system_info or {})
        self._shared = False

    @property
    def shared(self) -> bool:
        return self._shared

    @property
    def is_panorama(self) -> bool:
        return self.mode is ManagementMode.CENTRALIZED_MANAGER

    @property
    def software_version(self) -> Optional[str]:
        return self.system_info.get("sw-version")

    def set_shared(self, shared: bool = True) -> None:
        """
        Prefer the shared location for scoped objects on Panorama.

        Args:
            shared: True to place objects in shared, False to clear the preference

        Raises:
            UnsupportedScopeForModeError: If enabling shared on a standalone device
        """
        if shared and not self.is_panorama:
            error_msg = f"Shared placement is only available on Panorama, {self.host} is a firewall"
            logger.error(error_msg)
            raise UnsupportedScopeForModeError(error_msg)
        self._shared = shared
        logger.debug(f"Shared preference for {self.host} set to {shared}")

    def snapshot(self) -> SessionSnapshot:
        """Return an immutable copy of the routing-relevant fields."""
        return SessionSnapshot(
            mode=self.mode,
            shared=self._shared,
            vsys=self.vsys,
            panorama_connected=self.panorama_connected,
            software_version=self.software_version,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation without the API key."""
        return {
            "host": self.host,
            "mode": self.mode.value,
            "panorama_connected": self.panorama_connected,
            "shared": self._shared,
            "vsys": self.vsys,
            "system_info": dict(self.system_info),
        }

    def __repr__(self):
        return f"SessionContext(host={self.host!r}, mode={self.mode.value}, shared={self._shared})"
