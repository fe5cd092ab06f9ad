"""DNS and DHCP parsers."""

from __future__ import annotations

import re

from netconfig.models.constants import AddressFamily
from netconfig.parsers.labels import (
    DHCP_ENABLED_LABELS,
    DNS_SECTION_HEADERS,
    DNS_SECTION_TERMINATORS,
    IPCONFIG_DNS_LABELS,
    NO_VALUES,
    YES_VALUES,
    split_label,
)
from netconfig.parsers.routes import (
    clean_address,
    find_ipconfig_section,
    ipconfig_values,
    is_ip_address,
)

_LIST_SEPARATORS = re.compile(r"[\s|,;{}]+")


def _unique(addresses: list[str]) -> list[str]:
    seen: set[str] = set()
    ordered = []
    for address in addresses:
        if address not in seen:
            seen.add(address)
            ordered.append(address)
    return ordered


def parse_ip_list(output: str, family: AddressFamily | None = None) -> list[str]:
    """Every IP address token in output, in order, without duplicates.

    Accepts one address per line (PowerShell), ``a | b`` (nmcli -g) and
    space separated lists (resolvectl).
    """
    addresses = [
        clean_address(token)
        for token in _LIST_SEPARATORS.split(output)
        if token and is_ip_address(token, family)
    ]
    return _unique(addresses)


def parse_netsh_dns_servers(output: str) -> list[str]:
    """DNS servers from ``netsh interface ipv4 show dnsservers``.

    Collects addresses from the configured-servers header line and the
    indented continuation lines below it, stopping at the
    ``Register with which suffix`` line.
    """
    addresses: list[str] = []
    collecting = False
    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith(tuple(DNS_SECTION_HEADERS)):
            collecting = True
            parts = split_label(line)
            if parts is not None:
                addresses.extend(parse_ip_list(parts[1]))
            continue
        if line.startswith(tuple(DNS_SECTION_TERMINATORS)):
            collecting = False
            continue
        if collecting:
            addresses.extend(parse_ip_list(line))
    return _unique(addresses)


def parse_ipconfig_dns(
    output: str,
    interface_name: str,
    family: AddressFamily | None = None,
) -> list[str]:
    """DNS servers of one adapter from ``ipconfig /all``."""
    section = find_ipconfig_section(output, interface_name)
    if section is None:
        return []
    values = ipconfig_values(section, tuple(IPCONFIG_DNS_LABELS))
    return _unique(
        [clean_address(value) for value in values if is_ip_address(value, family)]
    )


def parse_resolv_conf(text: str, family: AddressFamily | None = None) -> list[str]:
    """``nameserver`` entries of a resolv.conf file."""
    addresses = []
    for raw in text.splitlines():
        tokens = raw.split()
        if len(tokens) >= 2 and tokens[0] == "nameserver":
            if is_ip_address(tokens[1], family):
                addresses.append(clean_address(tokens[1]))
    return _unique(addresses)


def parse_dhcp_enabled(output: str) -> bool | None:
    """DHCP flag from ``netsh interface ipv4 show config``; None if absent."""
    for raw in output.splitlines():
        line = raw.strip()
        if not line.startswith(tuple(DHCP_ENABLED_LABELS)):
            continue
        parts = split_label(line)
        if parts is None:
            continue
        value = parts[1]
        if value in YES_VALUES:
            return True
        if value in NO_VALUES:
            return False
    return None


def parse_ip_addr_dynamic(output: str) -> bool | None:
    """DHCP state from ``ip -4 addr show dev <iface>``.

    A lease-backed address carries the ``dynamic`` flag. Returns None when
    the interface has no IPv4 address at all.
    """
    inet_lines = [
        raw.split() for raw in output.splitlines() if raw.strip().startswith("inet ")
    ]
    if not inet_lines:
        return None
    return any("dynamic" in tokens for tokens in inet_lines)
