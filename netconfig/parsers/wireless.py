"""Parsers for wireless interface status dumps."""

from __future__ import annotations

from netconfig.models import HardwareDescriptor, ScanResult
from netconfig.models.constants import AdapterType
from netconfig.parsers.labels import (
    WLAN_INTERFACE_LABELS,
    infer_manufacturer,
    match_exact,
    split_label,
)

DEFAULT_WIRELESS_MEDIA = "802.11 Wireless"
DEFAULT_WIRELESS_BUS = "PCI"


def split_wlan_interface_blocks(output: str) -> dict[str, dict[str, str]]:
    """Split ``netsh wlan show interfaces`` output into per-interface fields.

    A ``Name``/``名称`` line opens a new block. Fields are keyed by their
    canonical name from WLAN_INTERFACE_LABELS; unknown labels are ignored.
    """
    blocks: dict[str, dict[str, str]] = {}
    current: dict[str, str] | None = None

    for raw in output.splitlines():
        parts = split_label(raw)
        if parts is None:
            continue
        label, value = parts
        field = match_exact(label, WLAN_INTERFACE_LABELS)
        if field is None:
            continue
        if field == "name":
            current = {"name": value}
            blocks[value] = current
        elif current is not None:
            current.setdefault(field, value)

    return blocks


def wireless_hardware_from_block(block: dict[str, str]) -> HardwareDescriptor:
    """Build a hardware descriptor from one wireless interface block."""
    description = block.get("description", "")

    rx = block.get("rx_rate", "")
    tx = block.get("tx_rate", "")
    speed = ""
    if rx or tx:
        speed = f"Rx: {rx or '0'} Mbps, Tx: {tx or '0'} Mbps"

    media = block.get("media", "")
    radio = block.get("radio_type", "")
    if radio:
        media = radio if radio.startswith("802.11") else f"802.11 {radio}"
    elif not media:
        media = DEFAULT_WIRELESS_MEDIA

    return HardwareDescriptor(
        mac_address=block.get("mac_address", ""),
        manufacturer=infer_manufacturer(description),
        product_name=description,
        adapter_type=AdapterType.WIRELESS,
        physical_media=media,
        speed=speed,
        bus_type=DEFAULT_WIRELESS_BUS,
    )


def parse_wlan_interfaces(
    output: str, interface_name: str | None = None
) -> ScanResult:
    """Parse interface blocks into HardwareDescriptors.

    With ``interface_name`` only that interface's block is parsed. Blocks
    without a description or MAC are counted as anomalies but still
    returned, so the caller can decide whether a partial record is usable.
    """
    records = []
    errors = 0
    for name, block in split_wlan_interface_blocks(output).items():
        if interface_name is not None and name != interface_name:
            continue
        descriptor = wireless_hardware_from_block(block)
        if not descriptor.is_usable:
            errors += 1
        records.append(descriptor)
    return ScanResult(records, errors)


def parse_connected_ssid(output: str, interface_name: str) -> str | None:
    """Return the SSID the named interface is associated with, if any."""
    block = split_wlan_interface_blocks(output).get(interface_name)
    if block is None:
        return None
    return block.get("ssid") or None


def parse_iw_link_ssid(output: str) -> str | None:
    """Return the SSID from ``iw dev <iface> link``; None when not connected."""
    if output.strip().startswith("Not connected"):
        return None
    for raw in output.splitlines():
        parts = split_label(raw)
        if parts and parts[0] == "SSID":
            return parts[1] or None
    return None


def parse_nmcli_device_show(output: str) -> dict[str, str]:
    """Parse ``nmcli -t device show`` into a flat ``{"GENERAL.HWADDR": ...}`` map."""
    fields: dict[str, str] = {}
    for raw in output.splitlines():
        key, sep, value = raw.partition(":")
        if not sep:
            continue
        fields[key.strip()] = value.replace("\\:", ":").strip()
    return fields
