"""Default-gateway parsers for route tables and ipconfig output."""

from __future__ import annotations

import ipaddress
import socket
import struct

from netconfig.models.constants import AddressFamily
from netconfig.parsers.labels import IPCONFIG_GATEWAY_LABELS, split_label

DEFAULT_ROUTE_PREFIXES = ("0.0.0.0/0", "::/0")


def clean_address(token: str) -> str:
    """Strip a zone index (``fe80::1%12``) and surrounding punctuation."""
    return token.strip().strip("()[],").split("%", 1)[0]


def is_ip_address(token: str, family: AddressFamily | None = None) -> bool:
    """True if token parses as an IP address of the given family."""
    try:
        address = ipaddress.ip_address(clean_address(token))
    except ValueError:
        return False
    if family == AddressFamily.IPV4:
        return address.version == 4
    if family == AddressFamily.IPV6:
        return address.version == 6
    return True


def _last_address(tokens: list[str], skip: str) -> str | None:
    for token in reversed(tokens):
        if token != skip and is_ip_address(token):
            return clean_address(token)
    return None


def parse_gateway(output: str) -> str | None:
    """Find the default gateway in route-table style output.

    Three line shapes are recognized, first match wins:

    1. ``netsh interface ipv4 show route``: a ``0.0.0.0/0`` (or ``::/0``)
       prefix column with the gateway as the last address on the line.
    2. ``route print -4``: ``0.0.0.0  0.0.0.0  <gateway>  <interface>  <metric>``.
    3. A ``Default Gateway : <address>`` line (English or Chinese label).

    Values that are not IP addresses (``On-link``) are skipped.
    """
    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue
        tokens = line.split()

        prefix = next((t for t in tokens if t in DEFAULT_ROUTE_PREFIXES), None)
        if prefix is not None:
            gateway = _last_address(tokens, prefix)
            if gateway:
                return gateway
            continue

        if len(tokens) >= 3 and tokens[0] == "0.0.0.0" and tokens[1] == "0.0.0.0":
            if is_ip_address(tokens[2]):
                return clean_address(tokens[2])
            continue

        if line.startswith(tuple(IPCONFIG_GATEWAY_LABELS)):
            parts = split_label(line)
            if parts and is_ip_address(parts[1]):
                return clean_address(parts[1])

    return None


def ipconfig_sections(output: str) -> dict[str, list[str]]:
    """Split ``ipconfig`` output into adapter sections keyed by header.

    Headers are unindented lines ending with a colon, such as
    ``Wireless LAN adapter Wi-Fi:`` or ``以太网适配器 以太网:``.
    """
    sections: dict[str, list[str]] = {}
    current: list[str] | None = None
    for raw in output.splitlines():
        if not raw.strip():
            continue
        if not raw[0].isspace() and raw.rstrip().endswith(":"):
            current = []
            sections[raw.strip().rstrip(":")] = current
        elif current is not None:
            current.append(raw)
    return sections


def find_ipconfig_section(output: str, interface_name: str) -> list[str] | None:
    """Return the lines of the adapter section whose header names the interface."""
    for header, lines in ipconfig_sections(output).items():
        if header.endswith(f" {interface_name}") or header == interface_name:
            return lines
    return None


def ipconfig_values(lines: list[str], labels: tuple[str, ...] | list[str]) -> list[str]:
    """Collect a labelled ipconfig value plus its continuation lines."""
    values: list[str] = []
    collecting = False
    for raw in lines:
        line = raw.strip()
        if line.startswith(tuple(labels)):
            parts = split_label(line)
            collecting = parts is not None
            if parts and parts[1]:
                values.append(parts[1])
            continue
        if collecting and split_label(line) and not is_ip_address(line):
            collecting = False
            continue
        if collecting:
            values.append(line)
    return values


def parse_ipconfig_gateway(
    output: str,
    interface_name: str,
    family: AddressFamily = AddressFamily.IPV4,
) -> str | None:
    """Default gateway of one adapter from ``ipconfig`` output."""
    section = find_ipconfig_section(output, interface_name)
    if section is None:
        return None
    for value in ipconfig_values(section, tuple(IPCONFIG_GATEWAY_LABELS)):
        if is_ip_address(value, family):
            return clean_address(value)
    return None


def parse_ip_route_default(output: str) -> str | None:
    """Gateway from ``ip route show default``: the token after ``via``."""
    for raw in output.splitlines():
        tokens = raw.split()
        if not tokens or tokens[0] != "default":
            continue
        if "via" in tokens:
            index = tokens.index("via") + 1
            if index < len(tokens) and is_ip_address(tokens[index]):
                return clean_address(tokens[index])
    return None


def _hex_to_ipv4(value: str) -> str:
    # /proc/net/route stores addresses as little-endian hex.
    return socket.inet_ntoa(struct.pack("<L", int(value, 16)))


def parse_proc_net_route(text: str, interface_name: str) -> str | None:
    """Default IPv4 gateway of one interface from ``/proc/net/route``."""
    for raw in text.splitlines()[1:]:
        fields = raw.split()
        if len(fields) < 3 or fields[0] != interface_name:
            continue
        if fields[1] != "00000000":
            continue
        try:
            gateway = _hex_to_ipv4(fields[2])
        except (ValueError, struct.error):
            continue
        if gateway != "0.0.0.0":
            return gateway
    return None


def parse_proc_net_ipv6_route(text: str, interface_name: str) -> str | None:
    """Default IPv6 gateway of one interface from ``/proc/net/ipv6_route``."""
    for raw in text.splitlines():
        fields = raw.split()
        if len(fields) < 10 or fields[-1] != interface_name:
            continue
        destination, prefix_len, next_hop = fields[0], fields[1], fields[4]
        if destination != "0" * 32 or prefix_len != "00":
            continue
        try:
            gateway = ipaddress.IPv6Address(bytes.fromhex(next_hop))
        except ValueError:
            continue
        if not gateway.is_unspecified:
            return str(gateway)
    return None
