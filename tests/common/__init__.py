"""
Common test utilities for PANClient test suite.

This module provides the fake transport and response builders shared by the
unit tests.
"""

from .factories import (
    FW_DEVICE,
    FW_VSYS,
    PANORAMA_MGT,
    PANORAMA_SHARED,
    SUCCESS_XML,
    FIREWALL_SYSTEM_INFO,
    PANORAMA_SYSTEM_INFO,
    FakeTransport,
    dg_path,
    error_xml,
    result_xml,
)

__all__ = [
    # Paths
    "FW_DEVICE",
    "FW_VSYS",
    "PANORAMA_MGT",
    "PANORAMA_SHARED",
    "dg_path",
    # Responses
    "SUCCESS_XML",
    "FIREWALL_SYSTEM_INFO",
    "PANORAMA_SYSTEM_INFO",
    "error_xml",
    "result_xml",
    # Transport
    "FakeTransport",
]
