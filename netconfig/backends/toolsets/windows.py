"""Windows toolset: netsh, PowerShell/CIM, ipconfig and route."""

from __future__ import annotations

import os
import re
import tempfile
import urllib.parse
from functools import partial
from xml.sax.saxutils import escape

from netconfig.backends.toolsets.base import GatewayStrategy, NetworkToolset
from netconfig.exceptions import ConfigurationError, QueryError
from netconfig.models import DriverDescriptor, HardwareDescriptor, ScanResult
from netconfig.models.constants import AddressFamily
from netconfig.parsers import (
    parse_connected_ssid,
    parse_dhcp_enabled,
    parse_gateway,
    parse_ip_list,
    parse_ipconfig_dns,
    parse_ipconfig_gateway,
    parse_netsh_dns_servers,
    parse_netsh_networks,
    parse_wlan_interfaces,
    parse_wmi_driver,
    parse_wmi_hardware,
)

POWERSHELL = ("powershell", "-NoProfile", "-NonInteractive", "-Command")

_VISIBLE_SSID = re.compile(r"^\s*SSID\s+\d+\s*:\s*(.+?)\s*$", re.MULTILINE)

WLAN_PROFILE_TEMPLATE = """<?xml version="1.0"?>
<WLANProfile xmlns="http://www.microsoft.com/networking/WLAN/profile/v1">
    <name>{name}</name>
    <SSIDConfig>
        <SSID>
            <hex>{hex_ssid}</hex>
            <name>{name}</name>
        </SSID>
    </SSIDConfig>
    <connectionType>ESS</connectionType>
    <connectionMode>auto</connectionMode>
    <MSM>
        <security>
            <authEncryption>
                <authentication>WPA2PSK</authentication>
                <encryption>AES</encryption>
                <useOneX>false</useOneX>
            </authEncryption>
            <sharedKey>
                <keyType>passPhrase</keyType>
                <protected>false</protected>
                <keyMaterial>{key}</keyMaterial>
            </sharedKey>
        </security>
    </MSM>
</WLANProfile>
"""


def ps_literal(value: str) -> str:
    """Quote a value as a PowerShell single-quoted string literal."""
    return "'" + value.replace("'", "''") + "'"


def wql_literal(value: str) -> str:
    """Quote a value for a WQL filter embedded in a PowerShell string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _netsh_family(family: AddressFamily) -> str:
    return "ipv6" if family == AddressFamily.IPV6 else "ipv4"


def _ps_family(family: AddressFamily) -> str:
    return "IPv6" if family == AddressFamily.IPV6 else "IPv4"


def _default_prefix(family: AddressFamily) -> str:
    return "::/0" if family == AddressFamily.IPV6 else "0.0.0.0/0"


def build_wlan_profile(ssid: str, password: str) -> str:
    """WPA2-Personal (AES) profile XML for ``netsh wlan add profile``."""
    return WLAN_PROFILE_TEMPLATE.format(
        name=escape(ssid),
        hex_ssid=ssid.encode("utf-8").hex().upper(),
        key=escape(password),
    )


class WindowsToolset(NetworkToolset):
    """Network queries and mutations on Windows."""

    platform_name = "Windows"

    def _powershell(self, script: str, what: str) -> str:
        output = self._query([*POWERSHELL, script], what)
        if not output.strip():
            raise QueryError(f"{what} failed", "no output")
        return output

    # Queries

    def query_dhcp_enabled(self, name: str) -> bool:
        output = self._query(
            ["netsh", "interface", "ipv4", "show", "config", f"name={name}"],
            "DHCP state query",
        )
        enabled = parse_dhcp_enabled(output)
        if enabled is None:
            raise QueryError("DHCP state query failed", "DHCP flag not reported")
        return enabled

    def gateway_strategies(self, family: AddressFamily) -> list[GatewayStrategy]:
        return [
            partial(self._gateway_from_netroute, family=family),
            partial(self._gateway_from_ipconfig, family=family),
            partial(self._gateway_from_netsh_route, family=family),
            partial(self._gateway_from_route_print, family=family),
        ]

    def _gateway_from_netroute(self, name: str, family: AddressFamily) -> str | None:
        script = (
            f"Get-NetRoute -InterfaceAlias {ps_literal(name)} "
            f"-DestinationPrefix '{_default_prefix(family)}' "
            "-ErrorAction SilentlyContinue | "
            "Sort-Object RouteMetric | Select-Object -ExpandProperty NextHop"
        )
        result = self._run([*POWERSHELL, script])
        if not result.success:
            return None
        addresses = [
            a
            for a in parse_ip_list(result.output, family)
            if a not in ("0.0.0.0", "::")
        ]
        return addresses[0] if addresses else None

    def _gateway_from_ipconfig(self, name: str, family: AddressFamily) -> str | None:
        result = self._run(["ipconfig"])
        if not result.success:
            return None
        return parse_ipconfig_gateway(result.output, name, family)

    def _gateway_from_netsh_route(self, name: str, family: AddressFamily) -> str | None:
        result = self._run(
            ["netsh", "interface", _netsh_family(family), "show", "route"]
        )
        if not result.success:
            return None
        return parse_gateway(result.output)

    def _gateway_from_route_print(self, name: str, family: AddressFamily) -> str | None:
        flag = "-6" if family == AddressFamily.IPV6 else "-4"
        result = self._run(["route", "print", flag])
        if not result.success:
            return None
        return parse_gateway(result.output)

    def query_dns_primary(self, name: str, family: AddressFamily) -> list[str]:
        output = self._query(
            [
                "netsh",
                "interface",
                _netsh_family(family),
                "show",
                "dnsservers",
                f"name={name}",
            ],
            "DNS server query",
        )
        return parse_netsh_dns_servers(output)

    def query_dns_fallback(self, name: str, family: AddressFamily) -> list[str]:
        result = self._run(["ipconfig", "/all"])
        if result.success:
            servers = parse_ipconfig_dns(result.output, name, family)
            if servers:
                return servers

        script = (
            f"(Get-DnsClientServerAddress -InterfaceAlias {ps_literal(name)} "
            f"-AddressFamily {_ps_family(family)} "
            "-ErrorAction SilentlyContinue).ServerAddresses"
        )
        result = self._run([*POWERSHELL, script])
        if not result.success:
            return []
        return parse_ip_list(result.output, family)

    def query_hardware(self, name: str) -> HardwareDescriptor:
        script = (
            "Get-CimInstance Win32_NetworkAdapter "
            f"-Filter \"NetConnectionID='{wql_literal(name)}'\" | "
            "Select-Object MACAddress,Manufacturer,ProductName,Name,"
            "AdapterType,Speed,PNPDeviceID | ConvertTo-Json -Compress"
        )
        output = self._powershell(script, "Hardware query")
        try:
            return parse_wmi_hardware(output)
        except ValueError as e:
            raise QueryError("Hardware query failed", str(e)) from e

    def query_wireless_hardware(self, name: str) -> HardwareDescriptor:
        output = self._query(
            ["netsh", "wlan", "show", "interfaces"], "Wireless interface query"
        )
        result = parse_wlan_interfaces(output, name)
        if not result.records:
            raise QueryError(
                "Wireless interface query failed", f"no block for interface {name}"
            )
        if result.error_count:
            self._logger.debug(f"Wireless block for {name} is missing fields")
        return result.records[0]

    def query_driver(self, name: str) -> DriverDescriptor:
        script = (
            "$adapter = Get-CimInstance Win32_NetworkAdapter "
            f"-Filter \"NetConnectionID='{wql_literal(name)}'\"; "
            "if ($adapter) { "
            "$id = $adapter.PNPDeviceID.Replace('\\', '\\\\'); "
            "Get-CimInstance Win32_PnPSignedDriver -Filter \"DeviceID='$id'\" | "
            "Select-Object DeviceName,DriverVersion,DriverProviderName,"
            "DriverDate,InfName | ConvertTo-Json -Compress }"
        )
        output = self._powershell(script, "Driver query")
        try:
            return parse_wmi_driver(output)
        except ValueError as e:
            raise QueryError("Driver query failed", str(e)) from e

    def query_connected_ssid(self, name: str) -> str | None:
        output = self._query(
            ["netsh", "wlan", "show", "interfaces"], "Connected SSID query"
        )
        return parse_connected_ssid(output, name)

    def scan_wifi(self, name: str) -> ScanResult:
        output = self._query(
            ["netsh", "wlan", "show", "networks", "mode=bssid", f"interface={name}"],
            "Wi-Fi scan",
        )
        return parse_netsh_networks(output)

    # Mutations

    def set_ipv4_dhcp(self, name: str) -> None:
        self._mutate(
            [
                "netsh",
                "interface",
                "ipv4",
                "set",
                "address",
                f"name={name}",
                "source=dhcp",
            ],
            "enable DHCP",
        )

    def set_ipv4_dns_auto(self, name: str) -> None:
        self._mutate(
            [
                "netsh",
                "interface",
                "ipv4",
                "set",
                "dnsservers",
                f"name={name}",
                "source=dhcp",
            ],
            "DNS from DHCP",
        )

    def set_ipv4_static(
        self, name: str, ip: str, mask: str, gateway: str | None
    ) -> None:
        args = ["netsh", "interface", "ipv4", "set", "address", f"name={name}"]
        args += ["static", ip, mask]
        if gateway:
            args.append(gateway)
        self._mutate(args, "set static address")

    def set_dns_server(self, name: str, family: AddressFamily, server: str) -> None:
        self._mutate(
            [
                "netsh",
                "interface",
                _netsh_family(family),
                "set",
                "dns",
                f"name={name}",
                "static",
                server,
            ],
            "set DNS server",
        )

    def add_dns_server(
        self, name: str, family: AddressFamily, server: str, index: int
    ) -> None:
        self._mutate(
            [
                "netsh",
                "interface",
                _netsh_family(family),
                "add",
                "dns",
                f"name={name}",
                server,
                f"index={index}",
            ],
            "add DNS server",
        )

    def set_ipv6_address(self, name: str, ip: str, prefix_len: int | None) -> None:
        address = f"{ip}/{prefix_len}" if prefix_len is not None else ip
        self._mutate(
            [
                "netsh",
                "interface",
                "ipv6",
                "set",
                "address",
                f"interface={name}",
                f"address={address}",
                "store=persistent",
            ],
            "set IPv6 address",
        )

    def add_ipv6_default_route(self, name: str, gateway: str) -> None:
        self._mutate(
            [
                "netsh",
                "interface",
                "ipv6",
                "add",
                "route",
                "::/0",
                f"interface={name}",
                gateway,
            ],
            "add IPv6 default route",
        )

    def visible_ssids(self, name: str) -> list[str]:
        output = self._query(
            ["netsh", "wlan", "show", "networks", f"interface={name}"],
            "Visible network query",
        )
        return _VISIBLE_SSID.findall(output)

    def connect_wifi(self, name: str, ssid: str, password: str | None) -> None:
        """Associate with a WPA2-Personal network through a temporary profile.

        The SSID may arrive percent-encoded from a URL; it is decoded first.
        """
        ssid = urllib.parse.unquote(ssid)

        try:
            visible = self.visible_ssids(name)
        except QueryError as e:
            raise ConfigurationError("scan", str(e)) from e
        if ssid not in visible:
            raise ConfigurationError("scan", f"network {ssid!r} is not in range")

        if password:
            self._add_profile(name, ssid, password)

        connect = ["netsh", "wlan", "connect", f"name={ssid}"]
        attempts = [
            [*connect, f"interface={name}"],
            [*connect, f"ssid={ssid}", f"interface={name}"],
            connect,
        ]
        last_diagnostic = ""
        for args in attempts:
            result = self._run(args)
            if result.success:
                self._logger.info(f"Connected {name} to {ssid}")
                return
            last_diagnostic = result.diagnostic
        raise ConfigurationError(
            "connect", last_diagnostic or "all connect attempts failed"
        )

    def _add_profile(self, name: str, ssid: str, password: str) -> None:
        # A stale profile with the same name would shadow the new key.
        self._run(
            ["netsh", "wlan", "delete", "profile", f"name={ssid}", f"interface={name}"]
        )

        fd, path = tempfile.mkstemp(prefix="wlan-profile-", suffix=".xml")
        try:
            with os.fdopen(fd, "w", encoding="utf-8-sig") as f:
                f.write(build_wlan_profile(ssid, password))

            add = ["netsh", "wlan", "add", "profile", f"filename={path}"]
            result = self._run([*add, f"interface={name}"])
            if not result.success:
                result = self._run([*add, "user=all"])
            if not result.success:
                raise ConfigurationError("add profile", result.diagnostic)
        finally:
            os.unlink(path)
