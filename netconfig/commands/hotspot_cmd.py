"""Hotspot commands - status, enable/disable, configure and monitor."""

from __future__ import annotations

import threading
import time

from netconfig.models import HotspotConfigRequest, HotspotStatusRecord
from netconfig.service import NetworkService


def print_hotspot_status(status: HotspotStatusRecord) -> None:
    print("Mobile Hotspot:")
    print(f"  Enabled:          {'Yes' if status.enabled else 'No'}")
    print(f"  SSID:             {status.ssid or '-'}")
    print(f"  Authentication:   {status.authentication or '-'}")
    print(f"  Encryption:       {status.encryption or '-'}")
    print(f"  Clients:          {status.client_count}/{status.max_client_count}")
    if status.error:
        print(f"  Error:            {status.error}")


def _status_line(status: HotspotStatusRecord) -> str:
    if status.success and status.enabled:
        return f"up  {status.ssid}  {status.client_count}/{status.max_client_count} clients"
    return f"down  {status.error or 'not enabled'}"


def print_status_line(status: HotspotStatusRecord) -> None:
    print(f"{time.strftime('%H:%M:%S')}  {_status_line(status)}")


def run_hotspot_status(service: NetworkService, as_json: bool = False) -> None:
    status = service.get_hotspot_status()
    if as_json:
        print(status.model_dump_json(indent=2))
    else:
        print_hotspot_status(status)


def run_hotspot_set_enabled(service: NetworkService, enabled: bool) -> None:
    service.set_hotspot_enabled(enabled)
    print(f"Hotspot {'enabled' if enabled else 'disabled'}")


def run_hotspot_configure(
    service: NetworkService, ssid: str, password: str, enable: bool = False
) -> None:
    service.configure_hotspot(
        HotspotConfigRequest(ssid=ssid, passphrase=password, enable=enable)
    )
    print(f"Hotspot configured: {ssid}" + (" (enabled)" if enable else ""))


def run_monitor(
    service: NetworkService, stop_event: threading.Event | None = None
) -> None:
    """Run the hotspot monitor in the foreground until Ctrl-C or stop_event."""
    stop_event = stop_event or threading.Event()
    service.start_hotspot_monitor(status_listener=print_status_line)
    if not service.monitor.is_running:
        print("Hotspot monitor is not running (disabled or unsupported platform)")
        return

    print(
        f"Monitoring hotspot every {service.monitor.interval_seconds:g}s "
        "(Ctrl-C to stop)"
    )
    try:
        while not stop_event.wait(1.0):
            pass
    except KeyboardInterrupt:
        print()
    finally:
        service.stop_hotspot_monitor()

    latest = service.monitor.get_latest_status()
    if latest is not None:
        print(f"Last status: {_status_line(latest)}")
