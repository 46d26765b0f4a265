"""
Modules package for PANClient.

This package contains the operations on a connected device, grouped by
area: objects, groups, policies, network configuration and Panorama
management.
"""

from .objects import (
    create_address, create_service, create_custom_url_category, edit_url_category,
    create_tag, create_external_dynamic_list, delete_object, rename_object,
    clone_object, get_object, list_objects, tag_object, untag_object,
)

from .groups import (
    create_address_group, create_service_group, edit_group,
    add_group_member, remove_group_member,
)

from .policies import (
    create_security_rule, list_security_rules, move_rule, tag_rule, untag_rule,
    apply_security_profiles, apply_log_forwarding,
)

from .network import (
    create_layer3_interface, create_layer3_subinterface, create_zone, edit_zone_interface,
    create_virtual_router, edit_virtual_router_interface, create_static_route,
    create_vlan, edit_vlan_interface, create_vwire, create_interface, create_ike_crypto_profile,
    create_ipsec_crypto_profile, create_ike_gateway, create_ipsec_tunnel, add_proxy_id,
    set_panorama_server,
)

from .panorama import (
    create_device_group, add_device, remove_device, create_template,
    create_template_stack, assign_template, commit_all,
)
