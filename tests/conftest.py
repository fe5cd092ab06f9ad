"""Shared fixtures: a scripted command runner, fake toolset and fake psutil."""

import socket
import types
from io import StringIO

import psutil
import pytest

from netconfig.backends.toolsets.base import NetworkToolset
from netconfig.exceptions import QueryError
from netconfig.models import DriverDescriptor, HardwareDescriptor, ScanResult
from netconfig.models.constants import AdapterType, AddressFamily
from netconfig.utils.commands import CommandResult
from netconfig.utils.logger import Logger


class FakeRunner:
    """CommandRunner stand-in that answers from a list of scripted responses.

    A response matches when the command starts with its prefix and, if
    given, the joined command line contains ``contains``. Responses added
    later take precedence. Unmatched commands fail like a missing program.
    """

    def __init__(self):
        self.calls = []
        self._responses = []

    def add(self, prefix, output="", success=True, diagnostic="", contains=None):
        self._responses.append(
            (tuple(prefix), contains, CommandResult(output, success, diagnostic))
        )
        return self

    def run(self, args, timeout=None, env=None):
        args = list(args)
        self.calls.append(args)
        line = " ".join(args)
        for prefix, contains, result in reversed(self._responses):
            if tuple(args[: len(prefix)]) != prefix:
                continue
            if contains is not None and contains not in line:
                continue
            return result
        return CommandResult("", False, f"executable not found: {args[0]}")

    def commands(self, program=None):
        """Joined command lines, optionally only those of one program."""
        return [
            " ".join(call) for call in self.calls if program is None or call[0] == program
        ]


class FakeToolset(NetworkToolset):
    """Toolset whose answers are plain attributes and whose writes are recorded."""

    platform_name = "Fake"

    def __init__(self):
        super().__init__(runner=FakeRunner())
        self.dhcp = False
        self.gateways = {AddressFamily.IPV4: [], AddressFamily.IPV6: []}
        self.dns_primary = {AddressFamily.IPV4: [], AddressFamily.IPV6: []}
        self.dns_primary_error = False
        self.dns_fallback = {AddressFamily.IPV4: [], AddressFamily.IPV6: []}
        self.hardware = {}
        self.wireless_hardware = {}
        self.driver = DriverDescriptor(name="e1000e", version="3.2.6")
        self.ssid = None
        self.scan = ScanResult([], 0)
        self.calls = []
        self.strategy_calls = []

    def query_dhcp_enabled(self, name):
        self.calls.append(("query_dhcp", name))
        if isinstance(self.dhcp, Exception):
            raise self.dhcp
        return self.dhcp

    def gateway_strategies(self, family):
        def strategy(index, value, name):
            self.strategy_calls.append((family, index))
            return value

        return [
            lambda name, i=i, v=v: strategy(i, v, name)
            for i, v in enumerate(self.gateways[family])
        ]

    def query_dns_primary(self, name, family):
        if self.dns_primary_error:
            raise QueryError("DNS server query failed", "netsh not found")
        return list(self.dns_primary[family])

    def query_dns_fallback(self, name, family):
        return list(self.dns_fallback[family])

    def query_hardware(self, name):
        hardware = self.hardware.get(name)
        if hardware is None:
            raise QueryError("Hardware query failed", "no adapter")
        return hardware

    def query_wireless_hardware(self, name):
        hardware = self.wireless_hardware.get(name)
        if hardware is None:
            raise QueryError("Wireless interface query failed", "no block")
        return hardware

    def query_driver(self, name):
        return self.driver

    def query_connected_ssid(self, name):
        return self.ssid

    def scan_wifi(self, name):
        return self.scan

    def set_ipv4_dhcp(self, name):
        self.calls.append(("set_ipv4_dhcp", name))

    def set_ipv4_dns_auto(self, name):
        self.calls.append(("set_ipv4_dns_auto", name))

    def set_ipv4_static(self, name, ip, mask, gateway):
        self.calls.append(("set_ipv4_static", name, ip, mask, gateway))

    def set_dns_server(self, name, family, server):
        self.calls.append(("set_dns_server", name, family, server))

    def add_dns_server(self, name, family, server, index):
        self.calls.append(("add_dns_server", name, family, server, index))

    def set_ipv6_address(self, name, ip, prefix_len):
        self.calls.append(("set_ipv6_address", name, ip, prefix_len))

    def add_ipv6_default_route(self, name, gateway):
        self.calls.append(("add_ipv6_default_route", name, gateway))

    def connect_wifi(self, name, ssid, password):
        self.calls.append(("connect_wifi", name, ssid, password))

    def apply(self, name):
        self.calls.append(("apply", name))

    def writes(self):
        return [call for call in self.calls if call[0] != "query_dhcp"]


def make_hardware(product="Intel(R) Ethernet Connection I219-V", wireless=False):
    return HardwareDescriptor(
        mac_address="AA:BB:CC:DD:EE:FF",
        manufacturer="Intel Corporation",
        product_name=product,
        adapter_type=AdapterType.WIRELESS if wireless else AdapterType.ETHERNET,
        physical_media="802.11 Wireless" if wireless else "Ethernet",
    )


@pytest.fixture(autouse=True)
def log_output():
    """Route netconfig logging into a buffer for every test."""
    output = StringIO()
    Logger.configure(level="DEBUG", output=output, timestamps=False)
    return output


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def toolset():
    return FakeToolset()


@pytest.fixture
def fake_interfaces(monkeypatch):
    """Install a fake psutil interface table.

    Call the returned function with ``{name: {...}}`` where each entry may
    set ``mac``, ``ipv4``, ``mask``, ``ipv6``, ``ipv6_mask``, ``up`` and
    ``flags``.
    """

    def install(table):
        addrs = {}
        stats = {}
        for name, entry in table.items():
            snics = []
            if entry.get("mac"):
                snics.append(
                    types.SimpleNamespace(
                        family=psutil.AF_LINK, address=entry["mac"], netmask=None
                    )
                )
            if entry.get("ipv4"):
                snics.append(
                    types.SimpleNamespace(
                        family=socket.AF_INET,
                        address=entry["ipv4"],
                        netmask=entry.get("mask", "255.255.255.0"),
                    )
                )
            if entry.get("ipv6"):
                snics.append(
                    types.SimpleNamespace(
                        family=socket.AF_INET6,
                        address=entry["ipv6"],
                        netmask=entry.get("ipv6_mask", "ffff:ffff:ffff:ffff::"),
                    )
                )
            addrs[name] = snics
            stats[name] = types.SimpleNamespace(
                isup=entry.get("up", True), flags=entry.get("flags", "up,broadcast")
            )

        monkeypatch.setattr(psutil, "net_if_addrs", lambda: addrs)
        monkeypatch.setattr(psutil, "net_if_stats", lambda: stats)

    return install
