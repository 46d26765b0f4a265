"""
Tests for the XPath resolver functionality.
"""

import pytest

from panclient.core.exceptions import (
    InvalidNameError,
    MissingDeviceGroupError,
    PANClientError,
    UnsupportedScopeForModeError,
    ValidationError,
)
from panclient.core.scope import ObjectScope, RulebasePhase
from panclient.core.session import ManagementMode, SessionSnapshot
from panclient.core.xpath_resolver import (
    ObjectKind,
    Placement,
    get_context_xpath,
    get_placement,
    load_xpath_mappings,
    resolve,
    resolve_container,
)
from tests.common import FW_DEVICE, FW_VSYS, PANORAMA_MGT, PANORAMA_SHARED, dg_path

FIREWALL = SessionSnapshot(mode=ManagementMode.STANDALONE)
PANORAMA = SessionSnapshot(mode=ManagementMode.CENTRALIZED_MANAGER)
PANORAMA_SHARED_PREF = SessionSnapshot(mode=ManagementMode.CENTRALIZED_MANAGER, shared=True)

LOCAL_KINDS = [kind for kind in ObjectKind if get_placement(kind) is Placement.LOCAL]
PANORAMA_KINDS = [kind for kind in ObjectKind if get_placement(kind) is Placement.PANORAMA]
SCOPED_KINDS = [kind for kind in ObjectKind if get_placement(kind) is Placement.SCOPED]
RULE_KINDS = [kind for kind in ObjectKind if get_placement(kind) is Placement.RULE]

SCOPES = [
    ObjectScope.local(),
    ObjectScope.shared(),
    ObjectScope.device_group("DG1"),
    ObjectScope.rulebase(RulebasePhase.PRE, "DG1"),
    ObjectScope.rulebase(RulebasePhase.POST, shared=True),
    ObjectScope.rulebase(RulebasePhase.LOCAL),
]


def _sample_name(kind):
    rule = load_xpath_mappings()["kinds"][kind.value]["name_rule"]
    return {"object": "web1", "interface": "ethernet1/1", "serial": "012801000001", "none": None}[rule]


def _sample_parent(kind):
    return "parent1" if "parent" in load_xpath_mappings()["kinds"][kind.value] else None


# Mapping file
def test_load_xpath_mappings_covers_every_kind():
    """Every ObjectKind has a mapping entry."""
    mappings = load_xpath_mappings()
    assert set(mappings["kinds"]) == {kind.value for kind in ObjectKind}


def test_load_xpath_mappings_is_cached():
    """Repeated loads return the same mapping object."""
    assert load_xpath_mappings() is load_xpath_mappings()


def test_load_xpath_mappings_missing_file():
    """A missing mapping file raises ValueError."""
    with pytest.raises(ValueError):
        load_xpath_mappings("does-not-exist.yaml")


# get_context_xpath
def test_get_context_xpath_firewall_vsys():
    assert get_context_xpath(FIREWALL, "vsys") == FW_VSYS


def test_get_context_xpath_firewall_other_vsys():
    snapshot = SessionSnapshot(mode=ManagementMode.STANDALONE, vsys="vsys2")
    assert get_context_xpath(snapshot, "vsys") == f"{FW_DEVICE}/vsys/entry[@name='vsys2']"


def test_get_context_xpath_panorama_shared():
    assert get_context_xpath(PANORAMA, "shared") == PANORAMA_SHARED


def test_get_context_xpath_panorama_device_group():
    assert get_context_xpath(PANORAMA, "device_group", device_group="test-dg") == dg_path("test-dg")


def test_get_context_xpath_shared_does_not_exist_on_firewall():
    with pytest.raises(ValueError):
        get_context_xpath(FIREWALL, "shared")


def test_get_context_xpath_invalid_device_group_name():
    with pytest.raises(InvalidNameError):
        get_context_xpath(PANORAMA, "device_group", device_group="bad/dg")


# Worked examples
class TestAddressScenarios:
    """Address placement on both management modes."""

    def test_firewall_address(self):
        path = resolve(FIREWALL, ObjectKind.ADDRESS, ObjectScope.local(), name="web1")
        assert path.xpath == f"{FW_VSYS}/address/entry[@name='web1']"

    def test_panorama_device_group_address(self):
        path = resolve(PANORAMA, ObjectKind.ADDRESS, ObjectScope.device_group("DG1"), name="web1")
        assert "/device-group/entry[@name='DG1']/address/entry[@name='web1']" in path.xpath
        assert path.xpath == f"{dg_path('DG1')}/address/entry[@name='web1']"

    def test_panorama_shared_scope_address(self):
        path = resolve(PANORAMA, ObjectKind.ADDRESS, ObjectScope.shared(), name="web1")
        assert path.xpath == "/config/shared/address/entry[@name='web1']"

    def test_panorama_shared_preference_wins_over_device_group(self):
        path = resolve(PANORAMA_SHARED_PREF, ObjectKind.ADDRESS, ObjectScope.device_group("DG1"), name="web1")
        assert path.xpath == "/config/shared/address/entry[@name='web1']"
        assert "DG1" not in path.xpath

    def test_panorama_shared_rulebase_wins_over_device_group(self):
        scope = ObjectScope.rulebase(RulebasePhase.PRE, "DG1", shared=True)
        path = resolve(PANORAMA, ObjectKind.SECURITY_RULE, scope, name="allow-web")
        assert path.xpath == "/config/shared/pre-rulebase/security/rules/entry[@name='allow-web']"

    def test_interface_on_panorama_is_rejected(self):
        with pytest.raises(UnsupportedScopeForModeError):
            resolve(PANORAMA, ObjectKind.INTERFACE, ObjectScope.device_group("DG1"), name="ethernet1/1")

    def test_panorama_without_device_group(self):
        with pytest.raises(MissingDeviceGroupError):
            resolve(PANORAMA, ObjectKind.ADDRESS, ObjectScope.local(), name="web1")


class TestFirewallPlacement:
    """Standalone devices only know the vsys and device locations."""

    def test_device_group_is_rejected(self):
        with pytest.raises(UnsupportedScopeForModeError):
            resolve(FIREWALL, ObjectKind.ADDRESS, ObjectScope.device_group("DG1"), name="web1")

    def test_shared_is_rejected(self):
        with pytest.raises(UnsupportedScopeForModeError):
            resolve(FIREWALL, ObjectKind.TAG, ObjectScope.shared(), name="prod")

    @pytest.mark.parametrize("kind", PANORAMA_KINDS, ids=lambda k: k.value)
    def test_panorama_kinds_are_rejected(self, kind):
        with pytest.raises(UnsupportedScopeForModeError):
            resolve(FIREWALL, kind, ObjectScope.local(), name=_sample_name(kind))

    def test_interface(self):
        path = resolve(FIREWALL, ObjectKind.INTERFACE, name="ethernet1/3")
        assert path.xpath == f"{FW_DEVICE}/network/interface/ethernet/entry[@name='ethernet1/3']"

    def test_zone_lives_in_vsys(self):
        path = resolve(FIREWALL, ObjectKind.ZONE, name="trust")
        assert path.xpath == f"{FW_VSYS}/zone/entry[@name='trust']"

    def test_custom_url_category(self):
        path = resolve(FIREWALL, ObjectKind.CUSTOM_URL_CATEGORY, name="blocked")
        assert path.xpath == f"{FW_VSYS}/profiles/custom-url-category/entry[@name='blocked']"

    def test_static_route_under_virtual_router(self):
        path = resolve(FIREWALL, ObjectKind.STATIC_ROUTE, name="default", parent="vr1")
        assert path.xpath == (
            f"{FW_DEVICE}/network/virtual-router/entry[@name='vr1']"
            "/routing-table/ip/static-route/entry[@name='default']"
        )

    def test_proxy_id_under_ipsec_tunnel(self):
        path = resolve(FIREWALL, ObjectKind.PROXY_ID, name="p1", parent="tun1")
        assert path.xpath == f"{FW_DEVICE}/network/tunnel/ipsec/entry[@name='tun1']/auto-key/proxy-id/entry[@name='p1']"

    def test_nested_kind_needs_parent(self):
        with pytest.raises(ValidationError):
            resolve(FIREWALL, ObjectKind.STATIC_ROUTE, name="default")

    def test_invalid_parent_name(self):
        with pytest.raises(InvalidNameError):
            resolve(FIREWALL, ObjectKind.STATIC_ROUTE, name="default", parent="vr/1")

    def test_system_settings(self):
        path = resolve(FIREWALL, ObjectKind.SYSTEM_SETTINGS)
        assert path.xpath == f"{FW_DEVICE}/deviceconfig/system"

    def test_system_settings_has_no_entries(self):
        with pytest.raises(InvalidNameError):
            resolve(FIREWALL, ObjectKind.SYSTEM_SETTINGS, name="anything")

    def test_other_vsys(self):
        snapshot = SessionSnapshot(mode=ManagementMode.STANDALONE, vsys="vsys3")
        path = resolve(snapshot, ObjectKind.SERVICE, name="web")
        assert path.xpath == f"{FW_DEVICE}/vsys/entry[@name='vsys3']/service/entry[@name='web']"


class TestPanoramaPlacement:
    """Centralized manager placement rules."""

    @pytest.mark.parametrize("kind", LOCAL_KINDS, ids=lambda k: k.value)
    @pytest.mark.parametrize(
        "scope",
        [ObjectScope.local(), ObjectScope.shared(), ObjectScope.device_group("DG1")],
        ids=["local", "shared", "device-group"],
    )
    def test_local_kinds_are_always_rejected(self, kind, scope):
        with pytest.raises(UnsupportedScopeForModeError):
            resolve(PANORAMA, kind, scope, name=_sample_name(kind), parent=_sample_parent(kind))

    @pytest.mark.parametrize("kind", SCOPED_KINDS, ids=lambda k: k.value)
    def test_scoped_kinds_need_device_group(self, kind):
        with pytest.raises(MissingDeviceGroupError):
            resolve(PANORAMA, kind, ObjectScope.local(), name="obj1")

    @pytest.mark.parametrize("kind", SCOPED_KINDS, ids=lambda k: k.value)
    def test_scoped_kinds_in_device_group(self, kind):
        path = resolve(PANORAMA, kind, ObjectScope.device_group("DG1"), name="obj1")
        assert path.xpath.startswith(dg_path("DG1") + "/")
        assert path.xpath.endswith("/entry[@name='obj1']")

    @pytest.mark.parametrize("kind", SCOPED_KINDS, ids=lambda k: k.value)
    def test_scoped_kinds_in_shared(self, kind):
        path = resolve(PANORAMA, kind, ObjectScope.shared(), name="obj1")
        assert path.xpath.startswith(PANORAMA_SHARED + "/")

    def test_device_group_container(self):
        path = resolve(PANORAMA, ObjectKind.DEVICE_GROUP, name="DG1")
        assert path.xpath == dg_path("DG1")

    def test_template_stack(self):
        path = resolve(PANORAMA, ObjectKind.TEMPLATE_STACK, name="stack1")
        assert path.xpath == f"{FW_DEVICE}/template-stack/entry[@name='stack1']"

    def test_managed_device(self):
        path = resolve(PANORAMA, ObjectKind.DEVICE, name="012801000001")
        assert path.xpath == f"{PANORAMA_MGT}/devices/entry[@name='012801000001']"

    def test_managed_device_in_device_group(self):
        path = resolve(PANORAMA, ObjectKind.DEVICE, ObjectScope.device_group("DG1"), name="012801000001")
        assert path.xpath == f"{dg_path('DG1')}/devices/entry[@name='012801000001']"

    def test_managed_device_serial_rule(self):
        with pytest.raises(InvalidNameError):
            resolve(PANORAMA, ObjectKind.DEVICE, name="not a serial")

    def test_template_in_device_group_is_rejected(self):
        with pytest.raises(UnsupportedScopeForModeError):
            resolve(PANORAMA, ObjectKind.TEMPLATE, ObjectScope.device_group("DG1"), name="t1")

    def test_panorama_kind_in_shared_is_rejected(self):
        with pytest.raises(UnsupportedScopeForModeError):
            resolve(PANORAMA, ObjectKind.DEVICE_GROUP, ObjectScope.shared(), name="DG1")


class TestRulebases:
    """Rules need an explicit rulebase phase on Panorama."""

    @pytest.mark.parametrize(
        "phase,segment",
        [(RulebasePhase.PRE, "pre-rulebase"), (RulebasePhase.POST, "post-rulebase")],
    )
    def test_panorama_phases(self, phase, segment):
        path = resolve(PANORAMA, ObjectKind.SECURITY_RULE, ObjectScope.rulebase(phase, "DG1"), name="r1")
        assert path.xpath == f"{dg_path('DG1')}/{segment}/security/rules/entry[@name='r1']"

    def test_panorama_nat_rule(self):
        path = resolve(PANORAMA, ObjectKind.NAT_RULE, ObjectScope.rulebase(RulebasePhase.POST, "DG1"), name="n1")
        assert path.xpath == f"{dg_path('DG1')}/post-rulebase/nat/rules/entry[@name='n1']"

    def test_firewall_local_rulebase(self):
        path = resolve(FIREWALL, ObjectKind.SECURITY_RULE, ObjectScope.rulebase(RulebasePhase.LOCAL), name="r1")
        assert path.xpath == f"{FW_VSYS}/rulebase/security/rules/entry[@name='r1']"

    def test_firewall_without_phase_uses_local_rulebase(self):
        path = resolve(FIREWALL, ObjectKind.SECURITY_RULE, ObjectScope.local(), name="r1")
        assert path.xpath == f"{FW_VSYS}/rulebase/security/rules/entry[@name='r1']"

    def test_panorama_phase_is_never_inferred(self):
        with pytest.raises(ValidationError):
            resolve(PANORAMA, ObjectKind.SECURITY_RULE, ObjectScope.device_group("DG1"), name="r1")

    def test_panorama_has_no_local_rulebase(self):
        with pytest.raises(UnsupportedScopeForModeError):
            resolve(PANORAMA, ObjectKind.SECURITY_RULE, ObjectScope.rulebase(RulebasePhase.LOCAL, "DG1"), name="r1")

    @pytest.mark.parametrize("phase", [RulebasePhase.PRE, RulebasePhase.POST])
    def test_firewall_has_no_pre_or_post_rulebase(self, phase):
        with pytest.raises(UnsupportedScopeForModeError):
            resolve(FIREWALL, ObjectKind.SECURITY_RULE, ObjectScope.rulebase(phase), name="r1")

    def test_panorama_rulebase_without_device_group(self):
        with pytest.raises(MissingDeviceGroupError):
            resolve(PANORAMA, ObjectKind.SECURITY_RULE, ObjectScope.rulebase(RulebasePhase.PRE), name="r1")

    def test_rulebase_scope_on_object_kind(self):
        with pytest.raises(ValidationError):
            resolve(PANORAMA, ObjectKind.ADDRESS, ObjectScope.rulebase(RulebasePhase.PRE, "DG1"), name="web1")


class TestNames:
    """Name validation happens before any path is built."""

    def test_63_characters_accepted(self):
        name = "a" * 63
        path = resolve(FIREWALL, ObjectKind.ADDRESS, name=name)
        assert path.xpath.endswith(f"[@name='{name}']")

    def test_64_characters_rejected(self):
        with pytest.raises(ValidationError):
            resolve(FIREWALL, ObjectKind.ADDRESS, name="a" * 64)

    def test_slash_rejected(self):
        with pytest.raises(ValidationError):
            resolve(FIREWALL, ObjectKind.ADDRESS, name="web/1")

    def test_quote_rejected(self):
        with pytest.raises(InvalidNameError):
            resolve(FIREWALL, ObjectKind.ADDRESS, name="web']|//*['")

    def test_empty_name_rejected(self):
        with pytest.raises(InvalidNameError):
            resolve(FIREWALL, ObjectKind.ADDRESS, name="")

    def test_name_error_before_routing_error(self):
        with pytest.raises(InvalidNameError):
            resolve(PANORAMA, ObjectKind.ADDRESS, ObjectScope.local(), name="a" * 64)

    @pytest.mark.parametrize(
        "snapshot,kind,name",
        [
            (PANORAMA, ObjectKind.ZONE, "zone/a"),
            (PANORAMA, ObjectKind.INTERFACE, "eth0"),
            (FIREWALL, ObjectKind.DEVICE, "not-a-serial"),
            (FIREWALL, ObjectKind.TEMPLATE, "a" * 64),
        ],
    )
    def test_wrong_mode_rejected_before_name(self, snapshot, kind, name):
        with pytest.raises(UnsupportedScopeForModeError):
            resolve(snapshot, kind, name=name)

    def test_container_has_no_entry(self):
        path = resolve_container(FIREWALL, ObjectKind.ADDRESS)
        assert path.xpath == f"{FW_VSYS}/address"


@pytest.mark.parametrize("kind", list(ObjectKind), ids=lambda k: k.value)
@pytest.mark.parametrize("snapshot", [FIREWALL, PANORAMA, PANORAMA_SHARED_PREF], ids=["fw", "pano", "pano-shared"])
@pytest.mark.parametrize("scope", SCOPES, ids=repr)
def test_resolve_is_total_and_deterministic(kind, snapshot, scope):
    """Every combination either resolves the same path twice or raises a library error."""
    name = _sample_name(kind)
    parent = _sample_parent(kind)
    try:
        first = resolve(snapshot, kind, scope, name=name, parent=parent)
    except PANClientError as e:
        with pytest.raises(type(e)):
            resolve(snapshot, kind, scope, name=name, parent=parent)
        return
    second = resolve(snapshot, kind, scope, name=name, parent=parent)
    assert first == second
    assert first.xpath.startswith("/config/")
