"""Network interface backend - enumeration, classification and configuration.

Interfaces are enumerated with psutil and enriched through a platform
toolset (netsh/PowerShell on Windows, iproute2/NetworkManager on Linux).
Records are built fresh on every call; nothing is cached.
"""

from __future__ import annotations

import ipaddress
import socket
import time

import psutil
import requests

from netconfig.backends.toolsets import NetworkToolset, get_network_toolset
from netconfig.config import Settings
from netconfig.exceptions import (
    ConfigurationError,
    HardwareQueryError,
    InterfaceNotFoundError,
    NetConfigError,
    QueryError,
    ValidationError,
)
from netconfig.models import (
    ConnectivityResult,
    DriverDescriptor,
    HardwareDescriptor,
    InterfaceConfigRequest,
    InterfaceRecord,
    InterfaceSummary,
    IPv4Config,
    IPv6Config,
    WiFiScanRecord,
)
from netconfig.models.constants import (
    DNS_NONE,
    DNS_UNAVAILABLE,
    WIRELESS_NAME_HINTS,
    WIRELESS_NAME_PREFIXES,
    AdapterType,
    AddressFamily,
    InterfaceStatus,
)
from netconfig.parsers.routes import is_ip_address
from netconfig.utils.logger import Logger

_LOOPBACK_NAMES = ("lo", "lo0")


def is_wireless_name(name: str) -> bool:
    """Naming heuristic for wireless interfaces (Wi-Fi, WLAN, wlp2s0, ...)."""
    lowered = name.lower()
    return any(hint in lowered for hint in WIRELESS_NAME_HINTS) or lowered.startswith(
        WIRELESS_NAME_PREFIXES
    )


def _mac_address(addresses: list) -> str:
    for addr in addresses:
        if addr.family == psutil.AF_LINK and addr.address:
            return addr.address.replace("-", ":").upper()
    return ""


def _prefix_len(netmask: str | None) -> int | None:
    if not netmask:
        return None
    try:
        return bin(int(ipaddress.ip_address(netmask))).count("1")
    except ValueError:
        pass
    try:
        return int(netmask)
    except ValueError:
        return None


def _status(if_stats) -> InterfaceStatus:
    return InterfaceStatus.UP if if_stats and if_stats.isup else InterfaceStatus.DOWN


def _pick_ipv6(addresses: list):
    """Prefer a global IPv6 address over a link-local one."""
    candidates = [a for a in addresses if a.family == socket.AF_INET6]
    for addr in candidates:
        if not ipaddress.ip_address(addr.address.split("%", 1)[0]).is_link_local:
            return addr
    return candidates[0] if candidates else None


class NetworkEngine:
    """Interface discovery and configuration engine.

    Composes psutil enumeration with a platform toolset. All policy lives
    here: filtering, strategy ordering, DNS sentinels and error wrapping.
    """

    def __init__(
        self,
        toolset: NetworkToolset | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            toolset: Platform toolset; defaults to the one for this OS.
            settings: Runtime settings; defaults to built-in defaults.
        """
        self.settings = settings or Settings()
        self.toolset = toolset or get_network_toolset()
        self._logger = Logger.get("network.engine")

    # Classification

    def is_loopback(self, name: str) -> bool:
        if name in _LOOPBACK_NAMES or name.lower().startswith("loopback"):
            return True
        stats = psutil.net_if_stats().get(name)
        flags = getattr(stats, "flags", "") or ""
        return "loopback" in flags.split(",")

    def is_virtual(self, name: str) -> bool:
        """True if the name matches a configured virtual-adapter signature."""
        lowered = name.lower()
        if any(sig.lower() in lowered for sig in self.settings.virtual_signatures):
            return True
        return lowered.startswith(tuple(self.settings.virtual_prefixes))

    def is_denied_product(self, product_name: str) -> bool:
        return any(denied in product_name for denied in self.settings.product_denylist)

    def _require_interface(self, name: str) -> list:
        addresses = psutil.net_if_addrs().get(name)
        if addresses is None:
            raise InterfaceNotFoundError(name)
        return addresses

    # Enumeration

    def list_interfaces(self) -> list[InterfaceRecord]:
        """List physical interfaces with full records.

        Loopback, virtual and unusable adapters are skipped unless debug mode
        is on. Per-interface failures are logged and the interface dropped.
        """
        debug = self.settings.debug
        records: list[InterfaceRecord] = []

        for name in psutil.net_if_addrs():
            if not debug and (self.is_loopback(name) or self.is_virtual(name)):
                self._logger.debug(f"Skipping loopback/virtual interface {name}")
                continue

            try:
                record = self.get_interface(name)
            except HardwareQueryError as e:
                self._logger.warning(f"Incomplete hardware info for {name}: {e}")
                record = e.partial_record
                if record is None:
                    continue
            except NetConfigError as e:
                self._logger.warning(f"Skipping interface {name}: {e}")
                continue

            if not debug:
                if not record.hardware.is_usable:
                    self._logger.debug(f"Skipping {name}: no MAC or product name")
                    continue
                if self.is_denied_product(record.hardware.product_name):
                    self._logger.debug(
                        f"Skipping {name}: denied product "
                        f"{record.hardware.product_name}"
                    )
                    continue

            records.append(record)

        if not records:
            self._logger.warning("No usable network interfaces found")
        return records

    def list_interfaces_fast(self) -> list[InterfaceSummary]:
        """Lightweight listing: name, status and product, wireless first."""
        debug = self.settings.debug
        stats = psutil.net_if_stats()
        wireless: list[InterfaceSummary] = []
        wired: list[InterfaceSummary] = []

        for name, addresses in psutil.net_if_addrs().items():
            if not debug and (self.is_loopback(name) or self.is_virtual(name)):
                continue
            if not _mac_address(addresses):
                continue

            hardware = self._lookup_hardware(name)
            if hardware is None or not hardware.product_name:
                continue
            if not debug and self.is_denied_product(hardware.product_name):
                continue

            if_stats = stats.get(name)
            summary = InterfaceSummary(
                name=name,
                status=_status(if_stats),
                product_name=hardware.product_name,
            )
            if hardware.adapter_type == AdapterType.WIRELESS or is_wireless_name(name):
                wireless.append(summary)
            else:
                wired.append(summary)

        return wireless + wired

    def get_interface(self, name: str) -> InterfaceRecord:
        """Build the full record for one interface.

        Raises
        ------
            InterfaceNotFoundError: The OS does not know the name.
            HardwareQueryError: Hardware could not be resolved; the record
                built with a MAC-only descriptor is attached.
        """
        addresses = self._require_interface(name)
        if_stats = psutil.net_if_stats().get(name)
        status = _status(if_stats)
        mac = _mac_address(addresses)

        try:
            dhcp = self.toolset.query_dhcp_enabled(name)
        except QueryError as e:
            self._logger.warning(f"DHCP state unknown for {name}: {e}")
            dhcp = False

        ipv4 = next((a for a in addresses if a.family == socket.AF_INET), None)
        ipv4_config = IPv4Config(
            ip=ipv4.address if ipv4 else None,
            mask=ipv4.netmask if ipv4 else None,
            gateway=self.resolve_gateway(name, AddressFamily.IPV4),
            dns=self.resolve_dns(name, AddressFamily.IPV4),
            dhcp=dhcp,
        )

        ipv6 = _pick_ipv6(addresses)
        ipv6_config = IPv6Config()
        if ipv6 is not None:
            ipv6_config = IPv6Config(
                ip=ipv6.address.split("%", 1)[0],
                prefix_len=_prefix_len(ipv6.netmask),
                gateway=self.resolve_gateway(name, AddressFamily.IPV6),
                dns=self.resolve_dns(name, AddressFamily.IPV6),
            )

        hardware, hardware_error = self._resolve_hardware(name, mac)

        try:
            driver = self.toolset.query_driver(name)
        except QueryError as e:
            self._logger.warning(f"Driver info unavailable for {name}: {e}")
            driver = DriverDescriptor()

        connected_ssid = None
        if hardware.adapter_type == AdapterType.WIRELESS:
            try:
                connected_ssid = self.toolset.query_connected_ssid(name)
            except QueryError as e:
                self._logger.warning(f"Connected SSID unknown for {name}: {e}")

        record = InterfaceRecord(
            name=name,
            description=hardware.product_name,
            status=status,
            connected_ssid=connected_ssid,
            dhcp_enabled=dhcp,
            ipv4_config=ipv4_config,
            ipv6_config=ipv6_config,
            hardware=hardware,
            driver=driver,
        )

        if hardware_error is not None:
            raise HardwareQueryError(
                name, str(hardware_error), partial_record=record
            ) from hardware_error
        return record

    def resolve_gateway(self, name: str, family: AddressFamily) -> str | None:
        """Run the gateway strategies in order; the first valid address wins."""
        for strategy in self.toolset.gateway_strategies(family):
            value = strategy(name)
            if value and is_ip_address(value, family):
                return value
        return None

    def resolve_dns(self, name: str, family: AddressFamily) -> list[str]:
        """DNS servers in priority order, or a single sentinel entry.

        ``["unavailable"]`` means the primary query could not run;
        ``["none"]`` means both queries ran and found nothing.
        """
        try:
            servers = self.toolset.query_dns_primary(name, family)
        except QueryError as e:
            self._logger.warning(f"DNS query failed for {name}: {e}")
            return [DNS_UNAVAILABLE]
        if servers:
            return servers

        servers = self.toolset.query_dns_fallback(name, family)
        return servers or [DNS_NONE]

    def _lookup_hardware(self, name: str) -> HardwareDescriptor | None:
        try:
            return self.toolset.query_hardware(name)
        except QueryError as e:
            self._logger.debug(f"Hardware query failed for {name}: {e}")
        if is_wireless_name(name):
            try:
                return self.toolset.query_wireless_hardware(name)
            except QueryError as e:
                self._logger.debug(f"Wireless hardware query failed for {name}: {e}")
        return None

    def _resolve_hardware(
        self, name: str, mac: str
    ) -> tuple[HardwareDescriptor, QueryError | None]:
        try:
            return self.toolset.query_hardware(name), None
        except QueryError as primary_error:
            error = primary_error

        if is_wireless_name(name):
            try:
                return self.toolset.query_wireless_hardware(name), None
            except QueryError as e:
                self._logger.debug(f"Wireless hardware fallback failed for {name}: {e}")

        minimal = HardwareDescriptor(
            mac_address=mac,
            adapter_type=(
                AdapterType.WIRELESS if is_wireless_name(name) else AdapterType.ETHERNET
            ),
        )
        return minimal, error

    # Configuration

    def configure_interface(self, name: str, config: InterfaceConfigRequest) -> None:
        """Apply IPv4 then IPv6 settings; absent families are left alone.

        Raises
        ------
            ConfigurationError: step is "ipv4" or "ipv6"; the cause is chained.
        """
        if config.ipv4_config is not None:
            try:
                self._configure_ipv4(name, config.ipv4_config)
            except NetConfigError as e:
                raise ConfigurationError("ipv4", str(e)) from e

        if config.ipv6_config is not None:
            try:
                self._configure_ipv6(name, config.ipv6_config)
            except NetConfigError as e:
                raise ConfigurationError("ipv6", str(e)) from e

    def _configure_ipv4(self, name: str, config: IPv4Config) -> None:
        changed = False

        if config.dhcp:
            if self.toolset.query_dhcp_enabled(name):
                self._logger.info(f"{name} already uses DHCP, address left unchanged")
            else:
                self.toolset.set_ipv4_dhcp(name)
                changed = True
        else:
            self._require_interface(name)
            if bool(config.ip) != bool(config.mask):
                raise ValidationError(
                    "ipv4_config", "static address needs both ip and mask"
                )
            if config.ip and config.mask:
                self.toolset.set_ipv4_static(
                    name, config.ip, config.mask, config.gateway
                )
                changed = True

        if config.dns_auto:
            self.toolset.set_ipv4_dns_auto(name)
            changed = True
        elif config.dns:
            changed = self._apply_dns(name, AddressFamily.IPV4, config.dns) or changed

        if changed:
            self.toolset.apply(name)

    def _configure_ipv6(self, name: str, config: IPv6Config) -> None:
        self._require_interface(name)
        changed = False

        if config.ip:
            self.toolset.set_ipv6_address(name, config.ip, config.prefix_len)
            changed = True
        if config.gateway:
            self.toolset.add_ipv6_default_route(name, config.gateway)
            changed = True
        if config.dns:
            changed = self._apply_dns(name, AddressFamily.IPV6, config.dns) or changed

        if changed:
            self.toolset.apply(name)

    def _apply_dns(self, name: str, family: AddressFamily, servers: list[str]) -> bool:
        """Replace with the first server, then add the rest at index 2, 3, ..."""
        servers = [s for s in servers if s not in (DNS_NONE, DNS_UNAVAILABLE)]
        for i, server in enumerate(servers):
            if i == 0:
                self.toolset.set_dns_server(name, family, server)
            else:
                self.toolset.add_dns_server(name, family, server, index=i + 1)
        return bool(servers)

    # Wi-Fi

    def scan_wifi(self, name: str) -> list[WiFiScanRecord]:
        """Scan for access points visible to a wireless interface.

        Raises
        ------
            InterfaceNotFoundError: Unknown interface.
            QueryError: No scanner could run.
        """
        self._require_interface(name)
        records, errors = self.toolset.scan_wifi(name)
        if errors:
            self._logger.warning(
                f"Wi-Fi scan on {name}: skipped {errors} malformed entries"
            )
        self._logger.info(f"Wi-Fi scan on {name}: {len(records)} networks")
        return records

    def connect_wifi(self, name: str, ssid: str, password: str | None = None) -> None:
        """Associate a wireless interface with a network.

        Raises
        ------
            ValidationError: Empty SSID.
            ConfigurationError: Unknown or non-wireless interface, or the
                platform tools refused the connection.
        """
        if not ssid:
            raise ValidationError("ssid", "must not be empty")
        try:
            self._require_interface(name)
        except InterfaceNotFoundError as e:
            raise ConfigurationError("connect", str(e)) from e

        if not is_wireless_name(name):
            hardware = self._lookup_hardware(name)
            if hardware is None or hardware.adapter_type != AdapterType.WIRELESS:
                raise ConfigurationError(
                    "connect", f"{name} is not a wireless interface"
                )

        self.toolset.connect_wifi(name, ssid, password)

    # Connectivity

    def check_connectivity(self, target: str | None = None) -> ConnectivityResult:
        """HTTP GET the target; failures are reported, never raised."""
        target = target or self.settings.connectivity_target
        start = time.monotonic()
        try:
            response = requests.get(target, timeout=self.settings.connectivity_timeout)
        except requests.RequestException as e:
            elapsed = int((time.monotonic() - start) * 1000)
            self._logger.info(f"Connectivity check to {target} failed: {e}")
            return ConnectivityResult(
                target=target, success=False, duration_ms=elapsed, error=str(e)
            )

        elapsed = int((time.monotonic() - start) * 1000)
        return ConnectivityResult(
            target=target,
            success=response.ok,
            status_code=response.status_code,
            duration_ms=elapsed,
            error="" if response.ok else f"HTTP {response.status_code}",
        )
