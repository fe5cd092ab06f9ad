"""Pydantic models for Wi-Fi scans and the mobile hotspot."""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from netconfig.models.constants import HotspotBackendKind


class WiFiScanRecord(BaseModel):
    """One access point seen by a scan."""

    ssid: str = Field("", description="Network name")
    signal: int = Field(0, description="Signal quality in percent (0-100)")
    security: str = Field("", description="Authentication / security label")
    bssid: str = Field("", description="Access point MAC address")
    channel: int = Field(0, description="Channel number")


class ScanResult(NamedTuple):
    """Parsed records plus the number of anomalies absorbed while parsing."""

    records: list
    error_count: int = 0


class HotspotStatusRecord(BaseModel):
    """Mobile hotspot state as reported by a backend."""

    success: bool = False
    error: str = ""
    enabled: bool = False
    ssid: str = ""
    authentication: str = ""
    encryption: str = ""
    max_client_count: int = 0
    client_count: int = 0


class HotspotConfigRequest(BaseModel):
    """Requested hotspot credentials.

    Length rules are checked by HotspotController.configure() so that a
    bad request is rejected with netconfig's ValidationError before any
    backend runs; the model itself accepts any strings.
    """

    ssid: str = Field(..., description="Network name (1-32 characters)")
    passphrase: str = Field(
        ..., description="WPA2 passphrase (8-63 characters)", repr=False
    )
    enable: bool = Field(False, description="Enable the hotspot after configuring")


class HotspotCapability(BaseModel):
    """Hotspot backend availability, resolved once at startup."""

    model_config = ConfigDict(frozen=True)

    platform: str
    os_build: int | None = None
    preferred: HotspotBackendKind | None = None

    @property
    def supported(self) -> bool:
        return self.preferred is not None

    @property
    def alternate(self) -> HotspotBackendKind | None:
        """The backend tried when the preferred one fails in diagnostics mode."""
        if self.preferred == HotspotBackendKind.MODERN:
            return HotspotBackendKind.LEGACY
        if self.preferred == HotspotBackendKind.LEGACY:
            return HotspotBackendKind.MODERN
        return None
