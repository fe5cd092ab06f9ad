"""NetworkService - the single entry point used by the CLI and API layers."""

from __future__ import annotations

from netconfig.backends.hotspot import HotspotController, probe_hotspot_capability
from netconfig.backends.network import NetworkEngine
from netconfig.backends.toolsets import NetworkToolset, get_network_toolset
from netconfig.config import Settings
from netconfig.models import (
    ConnectivityResult,
    HotspotCapability,
    HotspotConfigRequest,
    HotspotStatusRecord,
    InterfaceConfigRequest,
    InterfaceRecord,
    InterfaceSummary,
    WiFiScanRecord,
)
from netconfig.monitoring import HotspotMonitorDaemon, StatusListener
from netconfig.utils.commands import CommandRunner
from netconfig.utils.logger import Logger


class NetworkService:
    """Owns the interface engine, the hotspot controller and its monitor.

    Example:
        >>> service = NetworkService(Settings.from_env())
        >>> for record in service.list_interfaces():
        ...     print(record.name, record.ipv4_config.ip)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        runner: CommandRunner | None = None,
        toolset: NetworkToolset | None = None,
        capability: HotspotCapability | None = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        Logger.ensure_configured(self.settings.log_level)
        self._logger = Logger.get("service")

        self.runner = runner or CommandRunner()
        self._toolset = toolset
        self._engine: NetworkEngine | None = None

        self.capability = capability or probe_hotspot_capability(self.runner)
        self.hotspot = HotspotController(
            self.capability, runner=self.runner, debug=self.settings.debug
        )
        self.monitor = HotspotMonitorDaemon(self.hotspot, self.settings)

    @property
    def engine(self) -> NetworkEngine:
        """Interface engine, created on first use.

        Raises
        ------
            UnsupportedPlatformError: No toolset for this platform.
        """
        if self._engine is None:
            toolset = self._toolset or get_network_toolset(self.runner)
            self._engine = NetworkEngine(toolset, self.settings)
        return self._engine

    # Interfaces

    def list_interfaces(self) -> list[InterfaceRecord]:
        return self.engine.list_interfaces()

    def list_interfaces_fast(self) -> list[InterfaceSummary]:
        return self.engine.list_interfaces_fast()

    def get_interface(self, name: str) -> InterfaceRecord:
        return self.engine.get_interface(name)

    def configure_interface(self, name: str, config: InterfaceConfigRequest) -> None:
        self._logger.info(f"Configuring interface {name}")
        self.engine.configure_interface(name, config)

    def scan_wifi(self, name: str) -> list[WiFiScanRecord]:
        return self.engine.scan_wifi(name)

    def connect_wifi(self, name: str, ssid: str, password: str | None = None) -> None:
        self.engine.connect_wifi(name, ssid, password)

    def check_connectivity(self, target: str | None = None) -> ConnectivityResult:
        return self.engine.check_connectivity(target)

    # Hotspot

    def get_hotspot_status(self) -> HotspotStatusRecord:
        return self.hotspot.get_status()

    def configure_hotspot(self, request: HotspotConfigRequest) -> None:
        self.hotspot.configure(request)

    def set_hotspot_enabled(self, enabled: bool) -> None:
        self.hotspot.set_enabled(enabled)

    def start_hotspot_monitor(
        self, status_listener: StatusListener | None = None
    ) -> None:
        """Start the monitor; skipped with a log line where no hotspot exists.

        Args:
            status_listener: Optional callback invoked with each status read.
        """
        if not self.capability.supported:
            self._logger.info(
                f"Hotspot monitor not started: no hotspot on {self.capability.platform}"
            )
            return
        if status_listener is not None:
            self.monitor.status_listener = status_listener
        self.monitor.start()

    def stop_hotspot_monitor(self) -> None:
        self.monitor.stop()
