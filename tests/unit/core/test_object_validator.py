"""
Tests for input validation.
"""

import pytest

from panclient.core.exceptions import InvalidNameError, InvalidTypeDiscriminatorError, ValidationError
from panclient.core.object_validator import (
    normalize_ports,
    require_members,
    validate_choice,
    validate_interface_name,
    validate_name,
    validate_object_name,
    validate_serial,
)


class TestObjectNames:
    """Tests for configuration object names."""

    @pytest.mark.parametrize("name", ["web1", "web server", "web-1_a", "a" * 63])
    def test_valid(self, name):
        assert validate_object_name(name) == name

    @pytest.mark.parametrize(
        "name", ["", "a" * 64, "web/1", "web.1", "host.example", "web'1", 'web"1', "web<1>", "wéb"]
    )
    def test_invalid(self, name):
        with pytest.raises(InvalidNameError):
            validate_object_name(name)

    def test_invalid_name_is_validation_error(self):
        with pytest.raises(ValidationError):
            validate_object_name("a" * 64)


@pytest.mark.parametrize(
    "name",
    ["ethernet1/1", "ethernet1/12.700", "ae1", "ae2.10", "tunnel.10", "loopback.1", "vlan", "vlan.100"],
)
def test_valid_interface_names(name):
    assert validate_interface_name(name) == name


@pytest.mark.parametrize("name", ["", "eth1", "ethernet1", "ethernet1/1/1", "tunnel.x"])
def test_invalid_interface_names(name):
    with pytest.raises(InvalidNameError):
        validate_interface_name(name)


def test_serial():
    assert validate_serial("012801000001") == "012801000001"
    with pytest.raises(InvalidNameError):
        validate_serial("0128-01")


class TestValidateName:
    """Tests for rule-based name validation."""

    def test_none_selects_container(self):
        assert validate_name(None, "object") is None

    def test_none_rule_rejects_names(self):
        with pytest.raises(InvalidNameError):
            validate_name("x", "none")

    def test_dispatches_by_rule(self):
        assert validate_name("ethernet1/1", "interface") == "ethernet1/1"
        with pytest.raises(InvalidNameError):
            validate_name("ethernet1/1", "object")

    def test_unknown_rule(self):
        with pytest.raises(ValueError):
            validate_name("x", "colour")


def test_validate_choice():
    assert validate_choice("protocol", "tcp", ["tcp", "udp"]) == "tcp"
    with pytest.raises(InvalidTypeDiscriminatorError) as exc_info:
        validate_choice("protocol", "sctp", ["tcp", "udp"])
    assert exc_info.value.field == "protocol"
    assert exc_info.value.value == "sctp"
    assert exc_info.value.allowed == ["tcp", "udp"]


@pytest.mark.parametrize(
    "ports,expected",
    [("443", "443"), ("8000-8080", "8000-8080"), ("80, 443", "80,443"), ("0,65535", "0,65535")],
)
def test_normalize_ports(ports, expected):
    assert normalize_ports(ports) == expected


@pytest.mark.parametrize("ports", ["", "http", "80,", "65536", "1-70000", "80;443"])
def test_normalize_ports_invalid(ports):
    with pytest.raises(ValidationError):
        normalize_ports(ports)


def test_require_members():
    assert require_members("Group", ["a", "", "b"]) == ["a", "b"]
    with pytest.raises(ValidationError):
        require_members("Group", [])
    with pytest.raises(ValidationError):
        require_members("Group", None)
