"""Hotspot backend selection, resolved once at startup."""

from __future__ import annotations

import json
import platform

from netconfig.backends.toolsets.windows import POWERSHELL
from netconfig.models import HotspotCapability
from netconfig.models.constants import MODERN_HOTSPOT_MIN_BUILD, HotspotBackendKind
from netconfig.utils.commands import CommandRunner
from netconfig.utils.logger import Logger

_OS_VERSION_SCRIPT = "[System.Environment]::OSVersion.Version | ConvertTo-Json -Compress"


def query_windows_build(runner: CommandRunner) -> int | None:
    """Return the Windows build number, or None if it cannot be read."""
    result = runner.run([*POWERSHELL, _OS_VERSION_SCRIPT])
    if not result.success:
        return None
    try:
        version = json.loads(result.output)
        major = int(version["Major"])
        build = int(version["Build"])
    except (ValueError, KeyError, TypeError):
        return None
    # Windows 11 still reports major version 10.
    return build if major >= 10 else 0


def probe_hotspot_capability(
    runner: CommandRunner | None = None, system: str | None = None
) -> HotspotCapability:
    """Decide which hotspot backend this host should use.

    Windows build 22000 or later gets the modern tethering backend, other
    Windows versions the legacy hosted network. Other platforms get none.
    """
    log = Logger.get("hotspot.capability")
    system = system or platform.system()

    if system != "Windows":
        log.info(f"No hotspot backend on {system}")
        return HotspotCapability(platform=system)

    build = query_windows_build(runner or CommandRunner())
    if build is not None and build >= MODERN_HOTSPOT_MIN_BUILD:
        preferred = HotspotBackendKind.MODERN
    else:
        preferred = HotspotBackendKind.LEGACY

    log.info(f"Hotspot backend: {preferred} (Windows build {build})")
    return HotspotCapability(platform=system, os_build=build, preferred=preferred)
