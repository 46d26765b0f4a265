"""
Tests for XML API request construction.
"""

from urllib.parse import parse_qs

import pytest

from panclient.core.exceptions import InvalidTypeDiscriminatorError, ValidationError
from panclient.core.request_builder import (
    ApiRequest,
    build_commit_request,
    build_config_request,
    build_keygen_request,
    build_op_request,
)
from panclient.core.xml.builder import AddressPath, FragmentBuilder

XPATH = AddressPath("/config/shared/address/entry[@name='web1']")
ELEMENT = FragmentBuilder().add("ip-netmask", text="10.1.1.1/32").build()


class TestConfigRequests:
    """Tests for type=config requests."""

    def test_set(self):
        request = build_config_request("set", XPATH, element=ELEMENT)
        assert request.method == "POST"
        assert request.params == {
            "type": "config",
            "action": "set",
            "xpath": "/config/shared/address/entry[@name='web1']",
            "element": "<ip-netmask>10.1.1.1/32</ip-netmask>",
        }

    def test_edit_accepts_text_element(self):
        request = build_config_request("edit", XPATH, element="<entry name='web1'/>")
        assert request.method == "POST"
        assert request.params["element"] == "<entry name='web1'/>"

    @pytest.mark.parametrize("action", ["get", "show", "delete"])
    def test_read_and_delete_use_get(self, action):
        request = build_config_request(action, XPATH)
        assert request.method == "GET"
        assert "element" not in request.params

    @pytest.mark.parametrize("action", ["set", "edit", "override", "multi-move"])
    def test_element_required(self, action):
        with pytest.raises(ValidationError):
            build_config_request(action, XPATH)

    def test_element_not_accepted(self):
        with pytest.raises(ValidationError):
            build_config_request("delete", XPATH, element=ELEMENT)

    def test_unknown_action(self):
        with pytest.raises(InvalidTypeDiscriminatorError):
            build_config_request("upsert", XPATH)

    def test_rename(self):
        request = build_config_request("rename", XPATH, newname="web2")
        assert request.params["newname"] == "web2"
        with pytest.raises(ValidationError):
            build_config_request("rename", XPATH)

    def test_clone(self):
        container = AddressPath("/config/shared/address")
        request = build_config_request("clone", container, clone_from=XPATH, newname="web1-copy")
        assert request.params["xpath"] == "/config/shared/address"
        assert request.params["from"] == XPATH.xpath
        assert request.params["newname"] == "web1-copy"
        with pytest.raises(ValidationError):
            build_config_request("clone", container, newname="web1-copy")

    def test_move(self):
        assert build_config_request("move", XPATH, where="top").params["where"] == "top"
        request = build_config_request("move", XPATH, where="after", dst="r0")
        assert request.params["dst"] == "r0"

    def test_move_needs_reference(self):
        with pytest.raises(ValidationError):
            build_config_request("move", XPATH, where="before")

    def test_move_position(self):
        with pytest.raises(InvalidTypeDiscriminatorError):
            build_config_request("move", XPATH, where="sideways")

    def test_query_is_encoded(self):
        query = build_config_request("set", XPATH, element=ELEMENT).to_query()
        assert "'" not in query
        assert parse_qs(query)["xpath"] == [XPATH.xpath]


def test_op_request():
    request = build_op_request("<show><system><info/></system></show>")
    assert request.method == "GET"
    assert request.params == {"type": "op", "cmd": "<show><system><info/></system></show>"}
    with pytest.raises(ValidationError):
        build_op_request("")


def test_commit_request():
    request = build_commit_request(FragmentBuilder().add("commit").build())
    assert request.params == {"type": "commit", "cmd": "<commit/>"}
    assert build_commit_request("<commit-all/>", action="all").params["action"] == "all"


def test_keygen_request():
    request = build_keygen_request("admin", "s3cret")
    assert request.method == "POST"
    assert request.params == {"type": "keygen", "user": "admin", "password": "s3cret"}
    with pytest.raises(ValidationError):
        build_keygen_request("admin", "")


def test_with_key_does_not_modify_request():
    request = build_config_request("get", XPATH)
    params = request.with_key("SECRET")
    assert params["key"] == "SECRET"
    assert "key" not in request.params
    assert request == ApiRequest("GET", {"type": "config", "action": "get", "xpath": XPATH.xpath})
    assert request.request_type == "config"
    assert request.action == "get"
