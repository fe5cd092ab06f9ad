"""Linux toolset: iproute2, NetworkManager, iw/iwlist, ethtool and sysfs."""

from __future__ import annotations

import ipaddress
from functools import partial
from pathlib import Path

from netconfig.backends.toolsets.base import GatewayStrategy, NetworkToolset
from netconfig.exceptions import ConfigurationError, QueryError
from netconfig.models import DriverDescriptor, HardwareDescriptor, ScanResult
from netconfig.models.constants import AddressFamily, AdapterType
from netconfig.parsers import (
    parse_ethtool_driver,
    parse_ip_addr_dynamic,
    parse_ip_list,
    parse_ip_route_default,
    parse_iw_link_ssid,
    parse_iwlist_scan,
    parse_nmcli_device_show,
    parse_nmcli_wifi,
    parse_proc_net_ipv6_route,
    parse_proc_net_route,
    parse_resolv_conf,
    parse_udev_properties,
)
from netconfig.parsers.labels import infer_manufacturer

SYSFS_NET = Path("/sys/class/net")
PROC_NET = Path("/proc/net")
RESOLV_CONF = Path("/etc/resolv.conf")

DEFAULT_IPV6_PREFIX = 64

NMCLI_SCAN_FIELDS = "SSID,SIGNAL,SECURITY,BSSID,CHAN"


def _nm_family(family: AddressFamily) -> str:
    return "ipv6" if family == AddressFamily.IPV6 else "ipv4"


def _nm_section(family: AddressFamily) -> str:
    return "IP6" if family == AddressFamily.IPV6 else "IP4"


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


class LinuxToolset(NetworkToolset):
    """Network queries and mutations on Linux.

    Writes go through NetworkManager: each setting is staged on the
    device's active connection and applied with ``nmcli device reapply``.
    """

    platform_name = "Linux"

    def __init__(
        self,
        runner=None,
        sysfs_root: Path = SYSFS_NET,
        proc_root: Path = PROC_NET,
        resolv_conf: Path = RESOLV_CONF,
    ) -> None:
        super().__init__(runner)
        self.sysfs_root = sysfs_root
        self.proc_root = proc_root
        self.resolv_conf = resolv_conf

    # Queries

    def query_dhcp_enabled(self, name: str) -> bool:
        output = self._query(
            ["ip", "-4", "addr", "show", "dev", name], "DHCP state query"
        )
        return bool(parse_ip_addr_dynamic(output))

    def gateway_strategies(self, family: AddressFamily) -> list[GatewayStrategy]:
        return [
            partial(self._gateway_from_ip_route, family=family),
            partial(self._gateway_from_proc, family=family),
            partial(self._gateway_from_nmcli, family=family),
        ]

    def _gateway_from_ip_route(self, name: str, family: AddressFamily) -> str | None:
        flag = "-6" if family == AddressFamily.IPV6 else "-4"
        result = self._run(["ip", flag, "route", "show", "default", "dev", name])
        if not result.success:
            return None
        return parse_ip_route_default(result.output)

    def _gateway_from_proc(self, name: str, family: AddressFamily) -> str | None:
        if family == AddressFamily.IPV6:
            text = _read_text(self.proc_root / "ipv6_route")
            return parse_proc_net_ipv6_route(text, name) if text else None
        text = _read_text(self.proc_root / "route")
        return parse_proc_net_route(text, name) if text else None

    def _gateway_from_nmcli(self, name: str, family: AddressFamily) -> str | None:
        result = self._run(
            ["nmcli", "-g", f"{_nm_section(family)}.GATEWAY", "device", "show", name]
        )
        if not result.success:
            return None
        addresses = parse_ip_list(result.output, family)
        return addresses[0] if addresses else None

    def query_dns_primary(self, name: str, family: AddressFamily) -> list[str]:
        output = self._query(["resolvectl", "dns", name], "DNS server query")
        return parse_ip_list(output, family)

    def query_dns_fallback(self, name: str, family: AddressFamily) -> list[str]:
        result = self._run(
            ["nmcli", "-g", f"{_nm_section(family)}.DNS", "device", "show", name]
        )
        if result.success:
            servers = parse_ip_list(result.output, family)
            if servers:
                return servers
        text = _read_text(self.resolv_conf)
        return parse_resolv_conf(text, family) if text else []

    def _sysfs(self, name: str, attribute: str) -> str:
        return (_read_text(self.sysfs_root / name / attribute) or "").strip()

    def _is_wireless(self, name: str, udev: dict[str, str]) -> bool:
        device = self.sysfs_root / name
        return (
            (device / "wireless").exists()
            or (device / "phy80211").exists()
            or udev.get("DEVTYPE") == "wlan"
        )

    def _sysfs_speed(self, name: str) -> str:
        speed = self._sysfs(name, "speed")
        try:
            mbps = int(speed)
        except ValueError:
            return ""
        return f"{mbps} Mbps" if mbps > 0 else ""

    def query_hardware(self, name: str) -> HardwareDescriptor:
        output = self._query(
            ["udevadm", "info", "--query=property", f"--path={self.sysfs_root / name}"],
            "Hardware query",
        )
        udev = parse_udev_properties(output)
        product = udev.get("ID_MODEL_FROM_DATABASE") or udev.get("ID_MODEL", "")
        if not product:
            raise QueryError("Hardware query failed", "no product information")

        wireless = self._is_wireless(name, udev)
        return HardwareDescriptor(
            mac_address=self._sysfs(name, "address"),
            manufacturer=udev.get("ID_VENDOR_FROM_DATABASE")
            or udev.get("ID_VENDOR", "")
            or infer_manufacturer(product),
            product_name=product,
            adapter_type=AdapterType.WIRELESS if wireless else AdapterType.ETHERNET,
            physical_media="802.11 Wireless" if wireless else "Ethernet",
            speed=self._sysfs_speed(name),
            bus_type=udev.get("ID_BUS", "").upper(),
            pnp_device_id=udev.get("ID_PATH", ""),
        )

    def query_wireless_hardware(self, name: str) -> HardwareDescriptor:
        output = self._query(
            ["nmcli", "-t", "device", "show", name], "Wireless interface query"
        )
        fields = parse_nmcli_device_show(output)
        product = fields.get("GENERAL.PRODUCT", "")
        if not product:
            raise QueryError("Wireless interface query failed", "no product information")
        return HardwareDescriptor(
            mac_address=fields.get("GENERAL.HWADDR", "").lower(),
            manufacturer=fields.get("GENERAL.VENDOR", "") or infer_manufacturer(product),
            product_name=product,
            adapter_type=AdapterType.WIRELESS,
            physical_media="802.11 Wireless",
        )

    def query_driver(self, name: str) -> DriverDescriptor:
        output = self._query(["ethtool", "-i", name], "Driver query")
        driver = parse_ethtool_driver(output)
        if driver is None:
            raise QueryError("Driver query failed", "no driver reported")
        return driver

    def query_connected_ssid(self, name: str) -> str | None:
        output = self._query(["iw", "dev", name, "link"], "Connected SSID query")
        return parse_iw_link_ssid(output)

    def scan_wifi(self, name: str) -> ScanResult:
        result = self._run(
            [
                "nmcli",
                "-t",
                "-f",
                NMCLI_SCAN_FIELDS,
                "device",
                "wifi",
                "list",
                "ifname",
                name,
            ]
        )
        if result.success:
            return parse_nmcli_wifi(result.output)

        self._logger.info(f"nmcli scan failed on {name}, falling back to iwlist")
        output = self._query(["iwlist", name, "scan"], "Wi-Fi scan")
        return parse_iwlist_scan(output)

    # Mutations

    def _connection(self, name: str, step: str) -> str:
        output = self._mutate(
            ["nmcli", "-g", "GENERAL.CONNECTION", "device", "show", name], step
        ).strip()
        if not output:
            raise ConfigurationError(step, f"no active connection on {name}")
        return output

    def _modify(self, name: str, step: str, *settings: str) -> None:
        connection = self._connection(name, step)
        self._mutate(["nmcli", "connection", "modify", connection, *settings], step)

    def set_ipv4_dhcp(self, name: str) -> None:
        self._modify(
            name, "enable DHCP",
            "ipv4.method", "auto", "ipv4.addresses", "", "ipv4.gateway", "",
        )

    def set_ipv4_dns_auto(self, name: str) -> None:
        self._modify(
            name, "DNS from DHCP", "ipv4.ignore-auto-dns", "no", "ipv4.dns", ""
        )

    def set_ipv4_static(
        self, name: str, ip: str, mask: str, gateway: str | None
    ) -> None:
        try:
            prefix = ipaddress.IPv4Network(f"0.0.0.0/{mask}").prefixlen
        except ValueError as e:
            raise ConfigurationError("set static address", str(e)) from e
        settings = ["ipv4.method", "manual", "ipv4.addresses", f"{ip}/{prefix}"]
        settings += ["ipv4.gateway", gateway or ""]
        self._modify(name, "set static address", *settings)

    def set_dns_server(self, name: str, family: AddressFamily, server: str) -> None:
        nm = _nm_family(family)
        self._modify(
            name, "set DNS server", f"{nm}.ignore-auto-dns", "yes", f"{nm}.dns", server
        )

    def add_dns_server(
        self, name: str, family: AddressFamily, server: str, index: int
    ) -> None:
        # nmcli appends in order, so the index is implied by the call order.
        self._modify(name, "add DNS server", f"+{_nm_family(family)}.dns", server)

    def set_ipv6_address(self, name: str, ip: str, prefix_len: int | None) -> None:
        prefix = prefix_len if prefix_len is not None else DEFAULT_IPV6_PREFIX
        self._modify(
            name, "set IPv6 address",
            "ipv6.method", "manual", "ipv6.addresses", f"{ip}/{prefix}",
        )

    def add_ipv6_default_route(self, name: str, gateway: str) -> None:
        self._modify(name, "add IPv6 default route", "ipv6.gateway", gateway)

    def apply(self, name: str) -> None:
        self._mutate(["nmcli", "device", "reapply", name], "apply")

    def connect_wifi(self, name: str, ssid: str, password: str | None) -> None:
        args = ["nmcli", "device", "wifi", "connect", ssid]
        if password:
            args += ["password", password]
        args += ["ifname", name]
        self._mutate(args, "connect", log_args=not password)
        self._logger.info(f"Connected {name} to {ssid}")
