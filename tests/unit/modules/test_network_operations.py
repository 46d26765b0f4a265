"""
Tests for firewall network operations.
"""

import pytest

from panclient.core.exceptions import (
    InvalidNameError,
    InvalidTypeDiscriminatorError,
    UnsupportedScopeForModeError,
    ValidationError,
)
from panclient.modules import network
from tests.common import FW_DEVICE, FW_VSYS


class TestFirewallNetwork:
    """Network configuration on a firewall."""

    def test_zone(self, firewall, transport):
        path = firewall.create_zone("trust", "layer3", ["ethernet1/2"])
        assert path.xpath == f"{FW_VSYS}/zone/entry[@name='trust']"
        assert transport.last_params["element"] == "<network><layer3><member>ethernet1/2</member></layer3></network>"

    def test_layer3_interface(self, firewall, transport):
        path = firewall.create_layer3_interface("ethernet1/1", ["192.0.2.1/24"])
        assert path.xpath == f"{FW_DEVICE}/network/interface/ethernet/entry[@name='ethernet1/1']"

    def test_invalid_interface_name(self, firewall, transport):
        with pytest.raises(InvalidNameError):
            firewall.create_layer3_interface("eth0")
        assert transport.calls == []

    def test_subinterface(self, firewall, transport):
        path = network.create_layer3_subinterface(firewall, "ethernet1/1", 700, ["10.7.0.1/24"])
        assert path.xpath == (
            f"{FW_DEVICE}/network/interface/ethernet/entry[@name='ethernet1/1']"
            "/layer3/units/entry[@name='ethernet1/1.700']"
        )
        assert transport.last_params["element"].startswith("<tag>700</tag>")

    def test_virtual_router_and_static_route(self, firewall, transport):
        firewall.create_virtual_router("vr1", ["ethernet1/1"])
        assert transport.last_params["xpath"] == f"{FW_DEVICE}/network/virtual-router/entry[@name='vr1']"

        path = firewall.create_static_route("vr1", "default", "0.0.0.0/0", next_hop="192.0.2.254")
        assert path.xpath == (
            f"{FW_DEVICE}/network/virtual-router/entry[@name='vr1']"
            "/routing-table/ip/static-route/entry[@name='default']"
        )
        assert "<metric>10</metric>" in transport.last_params["element"]

    def test_static_route_needs_next_hop(self, firewall, transport):
        with pytest.raises(ValidationError):
            firewall.create_static_route("vr1", "default", "0.0.0.0/0")
        assert transport.calls == []

    @pytest.mark.parametrize(
        "edit,child",
        [
            (lambda fw: network.edit_zone_interface(fw, "trust", "layer3", "ethernet1/3"), "zone/entry[@name='trust']/network/layer3"),
            (lambda fw: network.edit_virtual_router_interface(fw, "vr1", "ethernet1/3"), "virtual-router/entry[@name='vr1']/interface"),
            (lambda fw: network.edit_vlan_interface(fw, "vlan10", "ethernet1/3"), "vlan/entry[@name='vlan10']/interface"),
        ],
    )
    def test_interface_membership(self, firewall, transport, edit, child):
        edit(firewall)
        assert transport.last_params["xpath"].endswith(child)
        assert transport.last_params["element"] == "<member>ethernet1/3</member>"

    def test_remove_zone_interface(self, firewall, transport):
        network.edit_zone_interface(firewall, "trust", "layer3", "ethernet1/3", action="remove")
        assert transport.last_params["xpath"].endswith("/layer3/member[text()='ethernet1/3']")

    def test_vlan_and_vwire(self, firewall, transport):
        network.create_vlan(firewall, "vlan10", ["ethernet1/5"], vlan_interface="vlan.10")
        assert transport.last_params["xpath"] == f"{FW_DEVICE}/network/vlan/entry[@name='vlan10']"
        network.create_vwire(firewall, "vw1", "ethernet1/6", "ethernet1/7")
        assert transport.last_params["xpath"] == f"{FW_DEVICE}/network/virtual-wire/entry[@name='vw1']"

    def test_proxy_id(self, firewall, transport):
        path = network.add_proxy_id(firewall, "tun-branch", "p1", "10.0.0.0/24", "10.9.0.0/24")
        assert path.xpath == (
            f"{FW_DEVICE}/network/tunnel/ipsec/entry[@name='tun-branch']/auto-key/proxy-id/entry[@name='p1']"
        )

    def test_panorama_server(self, firewall, transport):
        path = firewall.set_panorama_server("10.0.0.5", "10.0.0.6")
        assert path.xpath == f"{FW_DEVICE}/deviceconfig/system"
        assert transport.last_params["element"] == (
            "<panorama-server>10.0.0.5</panorama-server><panorama-server-2>10.0.0.6</panorama-server-2>"
        )

    def test_panorama_server_warns_when_connected(self, firewall, transport, caplog):
        firewall.session.panorama_connected = True
        with caplog.at_level("WARNING", logger="panclient"):
            firewall.set_panorama_server("10.0.0.5")
        assert "already reports a connected Panorama" in caplog.text


class TestUnitInterfaces:
    """vlan, loopback and tunnel interfaces."""

    @pytest.mark.parametrize(
        "interface_type,name",
        [("loopback", "loopback.1"), ("tunnel", "tunnel.10"), ("vlan", "vlan.100")],
    )
    def test_create(self, firewall, transport, interface_type, name):
        path = firewall.create_interface(interface_type, name, comment="lab")
        assert path.xpath == f"{FW_DEVICE}/network/interface/{interface_type}/units/entry[@name='{name}']"
        assert transport.last_params["element"] == "<comment>lab</comment>"

    def test_addresses(self, firewall, transport):
        firewall.create_interface("tunnel", "tunnel.10", ["169.254.0.1/30"])
        assert transport.last_params["element"] == '<ip><entry name="169.254.0.1/30"/></ip>'

    def test_loopback_needs_host_address(self, firewall, transport):
        firewall.create_interface("loopback", "loopback.1", ["10.255.0.1/32"])
        transport.calls.clear()
        with pytest.raises(ValidationError):
            firewall.create_interface("loopback", "loopback.2", ["10.255.0.0/24"])
        assert transport.calls == []

    @pytest.mark.parametrize("name", ["tunnel", "tunnel.0", "vlan.10", "tunnel.x"])
    def test_name_must_match_type(self, firewall, transport, name):
        with pytest.raises(ValidationError):
            firewall.create_interface("tunnel", name)
        assert transport.calls == []

    def test_unknown_type(self, firewall, transport):
        with pytest.raises(InvalidTypeDiscriminatorError):
            firewall.create_interface("ethernet", "ethernet.1")
        assert transport.calls == []


class TestVpn:
    """IKE and IPsec configuration."""

    def test_ike_crypto_profile(self, firewall, transport):
        path = firewall.create_ike_crypto_profile("ike-strong", ["aes-256-cbc"], ["sha256"], ["14", "group19"])
        assert path.xpath == (
            f"{FW_DEVICE}/network/ike/crypto-profiles/ike-crypto-profiles/entry[@name='ike-strong']"
        )
        assert transport.last_params["element"] == (
            "<lifetime><hours>8</hours></lifetime>"
            "<encryption><member>aes-256-cbc</member></encryption>"
            "<hash><member>sha256</member></hash>"
            "<dh-group><member>group14</member><member>group19</member></dh-group>"
        )

    def test_ipsec_crypto_profile_without_pfs(self, firewall, transport):
        path = network.create_ipsec_crypto_profile(
            firewall, "esp-aes", ["aes-128-gcm"], ["sha1"], lifetime=30, lifetime_unit="minutes"
        )
        assert path.xpath == (
            f"{FW_DEVICE}/network/ike/crypto-profiles/ipsec-crypto-profiles/entry[@name='esp-aes']"
        )
        assert transport.last_params["element"] == (
            "<lifetime><minutes>30</minutes></lifetime>"
            "<esp><encryption><member>aes-128-gcm</member></encryption>"
            "<authentication><member>sha1</member></authentication></esp>"
            "<dh-group>no-pfs</dh-group>"
        )

    def test_ike_gateway(self, firewall, transport):
        path = firewall.create_ike_gateway(
            "gw-branch", "ethernet1/1", "203.0.113.9", "s3cret", "ike-strong", version="v2", local_ip="198.51.100.1/24"
        )
        assert path.xpath == f"{FW_DEVICE}/network/ike/gateway/entry[@name='gw-branch']"
        element = transport.last_params["element"]
        assert element.startswith("<authentication><pre-shared-key><key>s3cret</key></pre-shared-key></authentication>")
        assert "<version>ikev2</version>" in element
        assert "<local-address><interface>ethernet1/1</interface><ip>198.51.100.1/24</ip></local-address>" in element
        assert "<peer-address><ip>203.0.113.9</ip></peer-address>" in element

    def test_ike_gateway_dynamic_peer(self, firewall, transport):
        network.create_ike_gateway(firewall, "gw-any", "ethernet1/1", "dynamic", "s3cret", "ike-strong")
        assert "<peer-address><dynamic/></peer-address>" in transport.last_params["element"]

    def test_ike_gateway_bad_mode(self, firewall, transport):
        with pytest.raises(InvalidTypeDiscriminatorError):
            firewall.create_ike_gateway("gw", "ethernet1/1", "203.0.113.9", "k", "ike", mode="quick")
        assert transport.calls == []

    def test_ipsec_tunnel(self, firewall, transport):
        path = firewall.create_ipsec_tunnel("tun-branch", "tunnel.10", "gw-branch", "esp-aes")
        assert path.xpath == f"{FW_DEVICE}/network/tunnel/ipsec/entry[@name='tun-branch']"
        assert transport.last_params["element"] == (
            '<auto-key><ike-gateway><entry name="gw-branch"/></ike-gateway>'
            "<ipsec-crypto-profile>esp-aes</ipsec-crypto-profile></auto-key>"
            "<tunnel-interface>tunnel.10</tunnel-interface>"
        )


@pytest.mark.parametrize(
    "operation",
    [
        lambda pano: pano.create_zone("trust", "layer3"),
        lambda pano: pano.create_layer3_interface("ethernet1/1"),
        lambda pano: pano.create_virtual_router("vr1"),
        lambda pano: pano.create_static_route("vr1", "default", "0.0.0.0/0", interface="ethernet1/1"),
        lambda pano: network.create_vlan(pano, "vlan10"),
        lambda pano: network.create_vwire(pano, "vw1", "ethernet1/6", "ethernet1/7"),
        lambda pano: network.add_proxy_id(pano, "tun", "p1", "10.0.0.0/24", "10.1.0.0/24"),
        lambda pano: pano.set_panorama_server("10.0.0.5"),
        lambda pano: pano.create_interface("tunnel", "tunnel.10"),
        lambda pano: pano.create_ike_crypto_profile("ike", ["aes-256-cbc"], ["sha256"], ["14"]),
        lambda pano: pano.create_ipsec_crypto_profile("esp", ["aes-128-gcm"], ["sha1"]),
        lambda pano: pano.create_ike_gateway("gw", "ethernet1/1", "203.0.113.9", "k", "ike"),
        lambda pano: pano.create_ipsec_tunnel("tun", "tunnel.10", "gw", "esp"),
    ],
)
def test_network_operations_rejected_on_panorama(panorama, transport, operation):
    with pytest.raises(UnsupportedScopeForModeError):
        operation(panorama)
    assert transport.calls == []
