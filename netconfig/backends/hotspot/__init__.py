"""Mobile hotspot control: modern tethering API and legacy hosted network."""

from netconfig.backends.hotspot.base import HotspotBackend
from netconfig.backends.hotspot.capability import probe_hotspot_capability
from netconfig.backends.hotspot.controller import (
    HotspotController,
    validate_hotspot_request,
)
from netconfig.backends.hotspot.diagnostics import collect_hotspot_diagnostics
from netconfig.backends.hotspot.legacy import LegacyHotspotBackend
from netconfig.backends.hotspot.modern import ModernHotspotBackend

__all__ = [
    "HotspotBackend",
    "HotspotController",
    "LegacyHotspotBackend",
    "ModernHotspotBackend",
    "collect_hotspot_diagnostics",
    "probe_hotspot_capability",
    "validate_hotspot_request",
]
