"""
Test configuration and fixtures for PANClient tests.

This module provides pytest fixtures for unit tests: session snapshots for
both management modes, a recording fake transport and connected devices
built on it.
"""

import os
import sys

import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from panclient import PANClient
from panclient.core.session import ManagementMode, SessionContext, SessionSnapshot
from panclient.core.xpath_resolver import clear_xpath_cache
from tests.common import FakeTransport


@pytest.fixture(autouse=True)
def fresh_mappings():
    """Reload the XPath mapping file for every test."""
    clear_xpath_cache()
    yield
    clear_xpath_cache()


@pytest.fixture
def firewall_snapshot():
    """Snapshot of a standalone firewall session."""
    return SessionSnapshot(mode=ManagementMode.STANDALONE, software_version="10.1.6")


@pytest.fixture
def panorama_snapshot():
    """Snapshot of a Panorama session without shared preference."""
    return SessionSnapshot(mode=ManagementMode.CENTRALIZED_MANAGER, software_version="10.2.3")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def firewall(transport):
    """A connected firewall backed by the fake transport."""
    session = SessionContext(
        "fw01.example.com",
        "SECRETKEY",
        mode=ManagementMode.STANDALONE,
        system_info={"sw-version": "10.1.6", "model": "PA-850"},
    )
    return PANClient(session, transport)


@pytest.fixture
def panorama(transport):
    """A connected Panorama backed by the fake transport."""
    session = SessionContext(
        "pano01.example.com",
        "SECRETKEY",
        mode=ManagementMode.CENTRALIZED_MANAGER,
        system_info={"sw-version": "10.2.3", "model": "Panorama"},
    )
    return PANClient(session, transport)
