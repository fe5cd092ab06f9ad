"""Pure parsers turning raw tool output into structured records."""

from netconfig.parsers.adapters import (
    format_wmi_date,
    parse_ethtool_driver,
    parse_udev_properties,
    parse_wmi_driver,
    parse_wmi_hardware,
)
from netconfig.parsers.addressing import (
    parse_dhcp_enabled,
    parse_ip_addr_dynamic,
    parse_ip_list,
    parse_ipconfig_dns,
    parse_netsh_dns_servers,
    parse_resolv_conf,
)
from netconfig.parsers.hotspot import (
    parse_hostednetwork_status,
    parse_tethering_status,
)
from netconfig.parsers.routes import (
    parse_gateway,
    parse_ip_route_default,
    parse_ipconfig_gateway,
    parse_proc_net_ipv6_route,
    parse_proc_net_route,
)
from netconfig.parsers.wifi_scan import (
    dbm_to_percent,
    parse_iwlist_scan,
    parse_netsh_networks,
    parse_nmcli_wifi,
)
from netconfig.parsers.wireless import (
    parse_connected_ssid,
    parse_iw_link_ssid,
    parse_nmcli_device_show,
    parse_wlan_interfaces,
    split_wlan_interface_blocks,
    wireless_hardware_from_block,
)

__all__ = [
    "dbm_to_percent",
    "format_wmi_date",
    "parse_connected_ssid",
    "parse_dhcp_enabled",
    "parse_ethtool_driver",
    "parse_gateway",
    "parse_hostednetwork_status",
    "parse_ip_addr_dynamic",
    "parse_ip_list",
    "parse_ip_route_default",
    "parse_ipconfig_dns",
    "parse_ipconfig_gateway",
    "parse_iw_link_ssid",
    "parse_iwlist_scan",
    "parse_netsh_dns_servers",
    "parse_netsh_networks",
    "parse_nmcli_device_show",
    "parse_nmcli_wifi",
    "parse_proc_net_ipv6_route",
    "parse_proc_net_route",
    "parse_resolv_conf",
    "parse_tethering_status",
    "parse_udev_properties",
    "parse_wlan_interfaces",
    "parse_wmi_driver",
    "parse_wmi_hardware",
    "split_wlan_interface_blocks",
    "wireless_hardware_from_block",
]
