"""
Tests for address and service group operations.
"""

import pytest

from panclient.core.exceptions import InvalidTypeDiscriminatorError, ValidationError
from panclient.core.scope import ScopeOptions
from panclient.core.xpath_resolver import ObjectKind
from panclient.modules import groups
from tests.common import FW_VSYS, dg_path


def test_static_address_group(firewall, transport):
    path = firewall.create_address_group("web", "static", members=["web1", "web2"], description="web")
    assert path.xpath == f"{FW_VSYS}/address-group/entry[@name='web']"
    assert transport.last_params["element"] == (
        "<static><member>web1</member><member>web2</member></static><description>web</description>"
    )


def test_dynamic_address_group_on_panorama(panorama, transport):
    path = panorama.create_address_group(
        "prod", "dynamic", filter_expr="'prod'", options=ScopeOptions(device_group="DG1")
    )
    assert path.xpath == f"{dg_path('DG1')}/address-group/entry[@name='prod']"
    assert transport.last_params["element"] == "<dynamic><filter>'prod'</filter></dynamic>"


def test_unknown_group_type_sends_nothing(firewall, transport):
    with pytest.raises(InvalidTypeDiscriminatorError):
        firewall.create_address_group("web", "nested", members=["a"])
    assert transport.calls == []


def test_service_group(firewall, transport):
    firewall.create_service_group("web-services", ["http", "https"], tags=["web"])
    assert transport.last_params["xpath"] == f"{FW_VSYS}/service-group/entry[@name='web-services']"
    assert transport.last_params["element"] == (
        "<members><member>http</member><member>https</member></members><tag><member>web</member></tag>"
    )


def test_service_group_needs_members(firewall, transport):
    with pytest.raises(ValidationError):
        firewall.create_service_group("empty", [])
    assert transport.calls == []


@pytest.mark.parametrize(
    "kind,container",
    [(ObjectKind.ADDRESS_GROUP, "static"), (ObjectKind.SERVICE_GROUP, "members")],
)
def test_add_member(firewall, transport, kind, container):
    groups.add_group_member(firewall, kind, "g1", "m1")
    assert transport.last_params["action"] == "set"
    assert transport.last_params["xpath"].endswith(f"/entry[@name='g1']/{container}")
    assert transport.last_params["element"] == "<member>m1</member>"


@pytest.mark.parametrize(
    "kind,container",
    [(ObjectKind.ADDRESS_GROUP, "static"), (ObjectKind.SERVICE_GROUP, "members")],
)
def test_remove_member(firewall, transport, kind, container):
    groups.remove_group_member(firewall, kind, "g1", "m1")
    assert transport.last_params["action"] == "delete"
    assert transport.last_params["xpath"].endswith(f"/entry[@name='g1']/{container}/member[text()='m1']")


def test_edit_group_in_shared(panorama, transport):
    panorama.edit_group(ObjectKind.ADDRESS_GROUP, "g1", "web1", options=ScopeOptions(shared=True))
    assert transport.last_params["xpath"] == "/config/shared/address-group/entry[@name='g1']/static"


def test_edit_group_rejects_other_kinds(firewall, transport):
    with pytest.raises(ValueError):
        firewall.edit_group(ObjectKind.ADDRESS, "web1", "x")
    assert transport.calls == []


def test_edit_group_rejects_unknown_action(firewall, transport):
    with pytest.raises(ValueError):
        firewall.edit_group(ObjectKind.SERVICE_GROUP, "g1", "x", action="replace")
    assert transport.calls == []
