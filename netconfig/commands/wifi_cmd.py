"""Wi-Fi commands - scan, connect and check connectivity."""

from __future__ import annotations

import json

from netconfig.service import NetworkService


def run_scan(service: NetworkService, name: str, as_json: bool = False) -> None:
    """Scan for networks on an interface, strongest signal first."""
    records = sorted(service.scan_wifi(name), key=lambda r: r.signal, reverse=True)
    if as_json:
        print(json.dumps([r.model_dump(mode="json") for r in records], indent=2))
        return
    if not records:
        print(f"No networks visible on {name}")
        return

    print(f"{'SSID':<32} {'SIGNAL':>6}  {'CH':>3}  {'SECURITY':<16} BSSID")
    for r in records:
        ssid = r.ssid or "<hidden>"
        print(f"{ssid:<32} {r.signal:>5}%  {r.channel:>3}  {r.security:<16} {r.bssid}")


def run_connect(
    service: NetworkService, name: str, ssid: str, password: str | None = None
) -> None:
    service.connect_wifi(name, ssid, password)
    print(f"Connected {name} to {ssid}")


def run_connectivity(service: NetworkService, target: str | None = None) -> bool:
    """Probe a URL; returns True when it answered successfully."""
    result = service.check_connectivity(target)
    if result.success:
        print(
            f"OK  {result.target}  HTTP {result.status_code}  {result.duration_ms} ms"
        )
    else:
        print(f"FAIL  {result.target}  {result.error}  {result.duration_ms} ms")
    return result.success
