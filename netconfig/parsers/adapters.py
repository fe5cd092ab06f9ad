"""Adapter hardware and driver parsers (WMI JSON, ethtool, udev)."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone

from netconfig.models import DriverDescriptor, HardwareDescriptor
from netconfig.models.constants import (
    DATE_UNKNOWN,
    WIRELESS_NAME_HINTS,
    AdapterType,
)
from netconfig.parsers.labels import infer_manufacturer

DRIVER_STATUS_OK = "OK"

_JSON_DATE = re.compile(r"/Date\((-?\d+)\)/")


def _load_json_object(text: str) -> dict:
    """Load PowerShell ConvertTo-Json output; a list yields its first object."""
    data = json.loads(text)
    if isinstance(data, list):
        if not data:
            raise ValueError("empty result list")
        data = data[0]
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _is_wireless_product(product_name: str) -> bool:
    lowered = product_name.lower()
    return any(hint in lowered for hint in WIRELESS_NAME_HINTS) or "802.11" in lowered


def bus_type_from_device_id(device_id: str) -> str:
    """``PCI\\VEN_8086...`` -> ``PCI``; ``USB\\VID_...`` -> ``USB``."""
    prefix = device_id.split("\\", 1)[0].upper()
    if prefix.startswith("PCI"):
        return "PCI"
    if prefix.startswith("USB"):
        return "USB"
    return prefix


def format_speed(bits_per_second: float | int | str | None) -> str:
    """Format a link speed in bits per second as ``"1000 Mbps"``."""
    try:
        value = float(bits_per_second)
    except (TypeError, ValueError):
        return ""
    if value <= 0:
        return ""
    return f"{value / 1e6:.0f} Mbps"


def parse_wmi_hardware(text: str) -> HardwareDescriptor:
    """Parse a Win32_NetworkAdapter object serialized by ConvertTo-Json.

    Raises
    ------
        ValueError: If the text is not a JSON object (or list of objects).
    """
    data = _load_json_object(text)
    product_name = str(data.get("ProductName") or data.get("Name") or "")
    wireless = _is_wireless_product(product_name)
    device_id = str(data.get("PNPDeviceID") or "")

    return HardwareDescriptor(
        mac_address=str(data.get("MACAddress") or ""),
        manufacturer=str(data.get("Manufacturer") or "")
        or infer_manufacturer(product_name),
        product_name=product_name,
        adapter_type=AdapterType.WIRELESS if wireless else AdapterType.ETHERNET,
        physical_media="802.11 Wireless" if wireless else "Ethernet",
        speed=format_speed(data.get("Speed")),
        bus_type=bus_type_from_device_id(device_id) if device_id else "",
        pnp_device_id=device_id,
    )


def format_wmi_date(value: str | None) -> str:
    """Convert a WMI date to ``YYYY-MM-DD``.

    Accepts the CIM datetime form (``20230115000000.000000-000``) and the
    ``/Date(1673740800000)/`` form ConvertTo-Json produces. Anything else
    becomes ``"Unknown"``.
    """
    if not value:
        return DATE_UNKNOWN
    match = _JSON_DATE.search(value)
    if match:
        try:
            moment = datetime.fromtimestamp(int(match.group(1)) / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return DATE_UNKNOWN
        return moment.strftime("%Y-%m-%d")
    try:
        return datetime.strptime(value[:8], "%Y%m%d").strftime("%Y-%m-%d")
    except ValueError:
        return DATE_UNKNOWN


def parse_wmi_driver(text: str) -> DriverDescriptor:
    """Parse a Win32_PnPSignedDriver object serialized by ConvertTo-Json.

    Raises
    ------
        ValueError: If the text is not a JSON object (or list of objects).
    """
    data = _load_json_object(text)
    return DriverDescriptor(
        name=str(data.get("DeviceName") or ""),
        version=str(data.get("DriverVersion") or ""),
        provider=str(data.get("DriverProviderName") or data.get("Manufacturer") or ""),
        date_installed=format_wmi_date(data.get("DriverDate")),
        status=DRIVER_STATUS_OK,
        path=str(data.get("InfName") or ""),
    )


def parse_key_values(output: str, separator: str = ":") -> dict[str, str]:
    """Parse ``key<sep>value`` lines; later duplicates do not override."""
    values: dict[str, str] = {}
    for raw in output.splitlines():
        key, sep, value = raw.partition(separator)
        if sep and key.strip():
            values.setdefault(key.strip(), value.strip())
    return values


def parse_ethtool_driver(output: str) -> DriverDescriptor | None:
    """Parse ``ethtool -i <iface>``; None when no driver line is present."""
    values = parse_key_values(output)
    name = values.get("driver", "")
    if not name:
        return None
    return DriverDescriptor(
        name=name,
        version=values.get("version", "") or values.get("firmware-version", ""),
        provider="",
        status=DRIVER_STATUS_OK,
        path=values.get("bus-info", ""),
    )


def parse_udev_properties(output: str) -> dict[str, str]:
    """Parse ``udevadm info --query=property`` (``KEY=value`` lines)."""
    return parse_key_values(output, separator="=")
