"""
Tests for the session context and its snapshots.
"""

import pytest

from panclient.core.exceptions import UnsupportedScopeForModeError
from panclient.core.session import ManagementMode, SessionContext, SessionSnapshot


@pytest.mark.parametrize(
    "info,expected",
    [
        ({"platform-family": "m", "model": "M-200"}, ManagementMode.CENTRALIZED_MANAGER),
        ({"model": "Panorama"}, ManagementMode.CENTRALIZED_MANAGER),
        ({"model": "PA-850", "platform-family": "800"}, ManagementMode.STANDALONE),
        ({}, ManagementMode.STANDALONE),
    ],
)
def test_mode_from_system_info(info, expected):
    assert ManagementMode.from_system_info(info) is expected


class TestSessionContext:
    """Tests for SessionContext."""

    def test_defaults(self):
        session = SessionContext("fw01", "KEY")
        assert session.mode is ManagementMode.STANDALONE
        assert session.vsys == "vsys1"
        assert not session.shared
        assert not session.panorama_connected

    def test_set_shared_on_panorama(self):
        session = SessionContext("pano01", "KEY", mode=ManagementMode.CENTRALIZED_MANAGER)
        session.set_shared()
        assert session.shared
        session.set_shared(False)
        assert not session.shared

    def test_set_shared_on_firewall_fails(self):
        session = SessionContext("fw01", "KEY")
        with pytest.raises(UnsupportedScopeForModeError):
            session.set_shared(True)
        assert not session.shared

    def test_clear_shared_on_firewall_is_allowed(self):
        session = SessionContext("fw01", "KEY")
        session.set_shared(False)
        assert not session.shared

    def test_snapshot_is_independent(self):
        session = SessionContext("pano01", "KEY", mode=ManagementMode.CENTRALIZED_MANAGER)
        before = session.snapshot()
        session.set_shared(True)
        after = session.snapshot()
        assert not before.shared
        assert after.shared

    def test_snapshot_carries_version(self):
        session = SessionContext("fw01", "KEY", system_info={"sw-version": "9.1.3"})
        assert session.snapshot().software_version == "9.1.3"

    def test_to_dict_omits_key(self):
        data = SessionContext("fw01", "SECRETKEY").to_dict()
        assert "SECRETKEY" not in str(data)
        assert data["host"] == "fw01"
        assert data["mode"] == "firewall"

    def test_repr_omits_key(self):
        assert "SECRETKEY" not in repr(SessionContext("fw01", "SECRETKEY"))


class TestSessionSnapshot:
    """Tests for SessionSnapshot."""

    def test_is_immutable(self):
        snapshot = SessionSnapshot(mode=ManagementMode.STANDALONE)
        with pytest.raises(AttributeError):
            snapshot.shared = True

    @pytest.mark.parametrize(
        "version,major",
        [("10.1.6", 10), ("7.1.0", 7), (None, 8), ("garbage", 8)],
    )
    def test_major_version(self, version, major):
        snapshot = SessionSnapshot(mode=ManagementMode.STANDALONE, software_version=version)
        assert snapshot.major_version == major

    def test_is_panorama(self):
        assert SessionSnapshot(mode=ManagementMode.CENTRALIZED_MANAGER).is_panorama
        assert not SessionSnapshot(mode=ManagementMode.STANDALONE).is_panorama
