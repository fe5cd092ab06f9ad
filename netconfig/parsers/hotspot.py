"""Parsers for hotspot status output."""

from __future__ import annotations

import json

from netconfig.models import HotspotStatusRecord
from netconfig.parsers.labels import (
    HOSTED_NETWORK_LABELS,
    HOSTED_NETWORK_STARTED,
    match_prefix,
    split_label,
)


def parse_hostednetwork_status(output: str) -> tuple[HotspotStatusRecord, int]:
    """Parse ``netsh wlan show hostednetwork`` (English or Chinese labels).

    Returns the status record and the number of malformed numeric fields.
    """
    fields: dict = {"success": True}
    errors = 0

    for raw in output.splitlines():
        parts = split_label(raw.strip())
        if parts is None:
            continue
        label, value = parts
        field = match_prefix(label, HOSTED_NETWORK_LABELS)
        if field is None or field in fields:
            continue

        if field == "status":
            fields["enabled"] = value in HOSTED_NETWORK_STARTED
            fields["status"] = value
        elif field in ("max_client_count", "client_count"):
            try:
                fields[field] = int(value)
            except ValueError:
                errors += 1
        elif field == "ssid":
            fields["ssid"] = value.strip('"“”')
        else:
            fields[field] = value

    fields.pop("status", None)
    return HotspotStatusRecord(**fields), errors


def parse_tethering_status(text: str) -> HotspotStatusRecord:
    """Parse the JSON status object printed by the tethering bridge script.

    Raises
    ------
        ValueError: If the text is not a JSON object.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    return HotspotStatusRecord(
        success=True,
        enabled=bool(data.get("Enabled", False)),
        ssid=str(data.get("SSID") or ""),
        authentication=str(data.get("Authentication") or ""),
        encryption=str(data.get("Encryption") or ""),
        max_client_count=int(data.get("MaxClients") or 0),
        client_count=int(data.get("ClientsCount") or 0),
    )
