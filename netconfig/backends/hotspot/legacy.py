"""Legacy hotspot backend: ``netsh wlan hostednetwork`` (Windows 10 and older)."""

from __future__ import annotations

from netconfig.backends.hotspot.base import HotspotBackend
from netconfig.exceptions import ConfigurationError, QueryError
from netconfig.models import HotspotStatusRecord
from netconfig.models.constants import HotspotBackendKind
from netconfig.parsers import parse_hostednetwork_status


class LegacyHotspotBackend(HotspotBackend):
    """Hotspot control via the netsh hosted network commands."""

    kind = HotspotBackendKind.LEGACY

    def get_status(self) -> HotspotStatusRecord:
        result = self._run(["netsh", "wlan", "show", "hostednetwork"])
        if not result.success:
            raise QueryError("Hosted network query failed", result.diagnostic)

        status, errors = parse_hostednetwork_status(result.output)
        if errors:
            self._logger.warning(f"Hosted network status: {errors} unreadable fields")
        return status

    def configure(self, ssid: str, passphrase: str) -> None:
        result = self._run(
            [
                "netsh",
                "wlan",
                "set",
                "hostednetwork",
                "mode=allow",
                f"ssid={ssid}",
                f"key={passphrase}",
            ]
        )
        if not result.success:
            raise ConfigurationError("configure", result.diagnostic, backend=self.kind)
        self._logger.info(f"Hosted network configured: {ssid}")

    def set_enabled(self, enabled: bool) -> None:
        action = "start" if enabled else "stop"
        result = self._run(["netsh", "wlan", action, "hostednetwork"])
        if not result.success:
            raise ConfigurationError(
                "enable" if enabled else "disable", result.diagnostic, backend=self.kind
            )
        self._logger.info(f"Hosted network {'started' if enabled else 'stopped'}")
