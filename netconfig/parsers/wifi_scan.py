"""Parsers for Wi-Fi scan output.

Three formats are understood:

- netsh wlan show networks mode=bssid (Windows, English or Chinese labels)
- nmcli -t -f SSID,SIGNAL,SECURITY,BSSID,CHAN device wifi list
- iwlist <iface> scan

Each parser returns a ScanResult of (records, error_count) and never raises
on malformed input. Anomalies are counted so callers can log them.
"""

from __future__ import annotations

import re

from netconfig.models import ScanResult, WiFiScanRecord
from netconfig.parsers.labels import (
    NETWORK_SCAN_IGNORED,
    NETWORK_SCAN_LABELS,
    match_prefix,
    split_label,
)

NMCLI_FIELD_COUNT = 5

_SIGNAL_DBM = re.compile(r"Signal level[=:]\s*(-?\d+)\s*dBm")
_SIGNAL_RATIO = re.compile(r"Signal level[=:]\s*(\d+)\s*/\s*(\d+)")
_FREQUENCY_CHANNEL = re.compile(r"\(Channel\s+(\d+)\)")


def dbm_to_percent(dbm: int) -> int:
    """Rescale a dBm reading to 0-100; -90 dBm maps to 0 and -30 dBm to 100."""
    return max(0, min(100, (dbm + 90) * 100 // 60))


def _to_int(text: str) -> int | None:
    try:
        return int(text.strip().rstrip("%").strip())
    except ValueError:
        return None


def parse_netsh_networks(output: str) -> ScanResult:
    """Parse ``netsh wlan show networks mode=bssid`` output.

    An SSID line opens a new record; the following labelled lines fill it in.
    Records without an SSID (hidden networks) are dropped.
    """
    records: list[WiFiScanRecord] = []
    errors = 0
    current: dict | None = None

    def flush() -> None:
        if current is not None and current.get("ssid"):
            records.append(WiFiScanRecord(**current))

    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue

        if line.startswith(tuple(NETWORK_SCAN_LABELS["ssid"])):
            parts = split_label(line)
            if parts is None:
                errors += 1
                continue
            flush()
            current = {"ssid": parts[1]}
            continue

        if current is None:
            continue

        parts = split_label(line)
        if parts is None:
            continue
        label, value = parts
        if any(label.startswith(ignored) for ignored in NETWORK_SCAN_IGNORED):
            continue

        field = match_prefix(label, NETWORK_SCAN_LABELS)
        if field in ("signal", "channel"):
            number = _to_int(value)
            if number is None:
                errors += 1
                continue
            current[field] = number
        elif field in ("security", "bssid"):
            current[field] = value

    flush()
    return ScanResult(records, errors)


def _split_nmcli_line(line: str) -> list[str]:
    """Split a terse nmcli line on unescaped colons.

    nmcli escapes ':' and '\\' inside values with a backslash, so a
    backslash always escapes the character after it.
    """
    fields: list[str] = []
    current: list[str] = []
    chars = iter(line)
    for ch in chars:
        if ch == "\\":
            current.append(next(chars, ""))
        elif ch == ":":
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields


def parse_nmcli_wifi(output: str) -> ScanResult:
    """Parse terse ``nmcli`` scan output (SSID:SIGNAL:SECURITY:BSSID:CHAN).

    nmcli normally escapes the colons inside the BSSID; when they are not
    escaped the BSSID is every field between SECURITY and CHAN.
    """
    records: list[WiFiScanRecord] = []
    errors = 0

    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue

        fields = _split_nmcli_line(line)
        if len(fields) < NMCLI_FIELD_COUNT:
            errors += 1
            continue

        ssid, signal_text, security = fields[0], fields[1], fields[2]
        bssid = ":".join(fields[3:-1])
        channel_text = fields[-1]

        signal = _to_int(signal_text)
        if signal is None:
            errors += 1
            signal = 0
        channel = _to_int(channel_text)
        if channel is None:
            errors += 1
            channel = 0

        records.append(
            WiFiScanRecord(
                ssid=ssid,
                signal=max(0, min(100, signal)),
                security=security,
                bssid=bssid,
                channel=channel,
            )
        )

    return ScanResult(records, errors)


def parse_iwlist_scan(output: str) -> ScanResult:
    """Parse ``iwlist <iface> scan`` output; each ``Cell`` line starts a record."""
    records: list[WiFiScanRecord] = []
    errors = 0
    current: dict | None = None

    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue

        if line.startswith("Cell"):
            if current is not None:
                records.append(WiFiScanRecord(**current))
            current = {}
            _, sep, address = line.partition("Address:")
            if sep:
                current["bssid"] = address.strip()
            continue

        if current is None:
            continue

        if line.startswith("ESSID:"):
            current["ssid"] = line[len("ESSID:"):].strip().strip('"')
        elif line.startswith("Address:"):
            current["bssid"] = line[len("Address:"):].strip()
        elif line.startswith("Channel:"):
            channel = _to_int(line[len("Channel:"):])
            if channel is None:
                errors += 1
            else:
                current["channel"] = channel
        elif line.startswith("Frequency:") and "channel" not in current:
            match = _FREQUENCY_CHANNEL.search(line)
            if match:
                current["channel"] = int(match.group(1))
        elif "Signal level" in line:
            dbm = _SIGNAL_DBM.search(line)
            ratio = _SIGNAL_RATIO.search(line)
            if dbm:
                current["signal"] = dbm_to_percent(int(dbm.group(1)))
            elif ratio and int(ratio.group(2)) > 0:
                value = int(ratio.group(1)) * 100 // int(ratio.group(2))
                current["signal"] = max(0, min(100, value))
            else:
                errors += 1
        elif line.startswith("Encryption key:"):
            enabled = line[len("Encryption key:"):].strip().lower() == "on"
            current["security"] = "WPA2" if enabled else "Open"

    if current is not None:
        records.append(WiFiScanRecord(**current))

    return ScanResult(records, errors)
