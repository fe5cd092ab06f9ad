"""Base class for platform network toolsets.

A toolset knows which commands to run on one operating system and which
parser reads their output. It holds no policy: the interface engine decides
ordering, fallbacks and error wrapping.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from netconfig.exceptions import ConfigurationError, QueryError
from netconfig.models import DriverDescriptor, HardwareDescriptor, ScanResult
from netconfig.models.constants import AddressFamily
from netconfig.utils.commands import CommandResult, CommandRunner
from netconfig.utils.encoding import safe_preview
from netconfig.utils.logger import Logger

# A gateway strategy maps an interface name to a gateway address or None.
GatewayStrategy = Callable[[str], str | None]


class NetworkToolset(ABC):
    """Per-platform queries and mutations for one interface at a time.

    Read methods raise QueryError when the underlying command could not run
    or produced nothing usable. Write methods raise ConfigurationError
    naming the sub-step that failed.
    """

    platform_name: str = ""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner or CommandRunner()
        self._logger = Logger.get(f"toolset.{self.platform_name.lower()}")

    def _run(
        self,
        args: Sequence[str],
        timeout: float | None = None,
        log_args: bool = True,
    ) -> CommandResult:
        shown = " ".join(args) if log_args else f"{args[0]} (arguments hidden)"
        self._logger.debug(f"Running: {shown}")
        result = self.runner.run(args, timeout=timeout)
        if not result.success:
            self._logger.debug(
                f"Command failed ({args[0]}): {safe_preview(result.diagnostic)}"
            )
        return result

    def _query(self, args: Sequence[str], what: str) -> str:
        """Run a read command and return its output, or raise QueryError."""
        result = self._run(args)
        if not result.success:
            raise QueryError(f"{what} failed", result.diagnostic)
        return result.output

    def _mutate(self, args: Sequence[str], step: str, log_args: bool = True) -> str:
        """Run a write command and return its output, or raise ConfigurationError."""
        result = self._run(args, log_args=log_args)
        if not result.success:
            raise ConfigurationError(step, result.diagnostic or "command failed")
        return result.output

    # Queries

    @abstractmethod
    def query_dhcp_enabled(self, name: str) -> bool:
        """Return whether IPv4 on the interface is DHCP-managed."""
        pass

    @abstractmethod
    def gateway_strategies(self, family: AddressFamily) -> list[GatewayStrategy]:
        """Ordered default-gateway lookups for one address family."""
        pass

    @abstractmethod
    def query_dns_primary(self, name: str, family: AddressFamily) -> list[str]:
        """Primary DNS lookup; raises QueryError if it could not execute."""
        pass

    @abstractmethod
    def query_dns_fallback(self, name: str, family: AddressFamily) -> list[str]:
        """Secondary DNS lookup; returns [] when it finds nothing."""
        pass

    @abstractmethod
    def query_hardware(self, name: str) -> HardwareDescriptor:
        """Primary structured hardware query."""
        pass

    @abstractmethod
    def query_wireless_hardware(self, name: str) -> HardwareDescriptor:
        """Hardware from the wireless interface status dump."""
        pass

    @abstractmethod
    def query_driver(self, name: str) -> DriverDescriptor:
        pass

    @abstractmethod
    def query_connected_ssid(self, name: str) -> str | None:
        pass

    @abstractmethod
    def scan_wifi(self, name: str) -> ScanResult:
        """Scan for access points; raises QueryError if no scanner ran."""
        pass

    # Mutations

    @abstractmethod
    def set_ipv4_dhcp(self, name: str) -> None:
        pass

    @abstractmethod
    def set_ipv4_dns_auto(self, name: str) -> None:
        pass

    @abstractmethod
    def set_ipv4_static(
        self, name: str, ip: str, mask: str, gateway: str | None
    ) -> None:
        pass

    @abstractmethod
    def set_dns_server(self, name: str, family: AddressFamily, server: str) -> None:
        """Replace the DNS list with a single server."""
        pass

    @abstractmethod
    def add_dns_server(
        self, name: str, family: AddressFamily, server: str, index: int
    ) -> None:
        """Append a DNS server at a 1-based priority index."""
        pass

    @abstractmethod
    def set_ipv6_address(self, name: str, ip: str, prefix_len: int | None) -> None:
        pass

    @abstractmethod
    def add_ipv6_default_route(self, name: str, gateway: str) -> None:
        pass

    @abstractmethod
    def connect_wifi(self, name: str, ssid: str, password: str | None) -> None:
        pass

    def apply(self, name: str) -> None:
        """Activate pending changes; a no-op where writes take effect at once."""
        return None
