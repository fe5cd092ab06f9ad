"""Pydantic models for structured output."""

from netconfig.models.hotspot_models import (
    HotspotCapability,
    HotspotConfigRequest,
    HotspotStatusRecord,
    ScanResult,
    WiFiScanRecord,
)
from netconfig.models.network_models import (
    ConnectivityResult,
    DriverDescriptor,
    HardwareDescriptor,
    InterfaceConfigRequest,
    InterfaceRecord,
    InterfaceSummary,
    IPv4Config,
    IPv6Config,
)

__all__ = [
    "ConnectivityResult",
    "DriverDescriptor",
    "HardwareDescriptor",
    "HotspotCapability",
    "HotspotConfigRequest",
    "HotspotStatusRecord",
    "IPv4Config",
    "IPv6Config",
    "InterfaceConfigRequest",
    "InterfaceRecord",
    "InterfaceSummary",
    "ScanResult",
    "WiFiScanRecord",
]
