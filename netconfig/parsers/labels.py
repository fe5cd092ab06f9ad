"""Label tables for locale-dependent tool output.

Windows tools print field labels in the display language. Each table maps
a canonical field name to the literal label prefixes accepted for it, in
English and Simplified Chinese. Lookups compare the text before the first
colon of a line against these prefixes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

LabelTable = Mapping[str, Sequence[str]]

# netsh wlan show networks mode=bssid
NETWORK_SCAN_LABELS: LabelTable = {
    "ssid": ("SSID", "SSID 名称"),
    "signal": ("Signal", "信号"),
    "security": ("Authentication", "身份验证"),
    "bssid": ("BSSID",),
    "channel": ("Channel", "频道", "信道"),
}

# Labels that share a prefix with a wanted field but carry something else.
NETWORK_SCAN_IGNORED: Sequence[str] = (
    "Channel Utilization",
    "信道利用率",
    "频道利用率",
)

# netsh wlan show interfaces (exact labels)
WLAN_INTERFACE_LABELS: LabelTable = {
    "name": ("Name", "名称"),
    "description": ("Description", "描述"),
    "mac_address": ("Physical address", "物理地址"),
    "media": ("Media type", "媒体类型", "Connection type", "连接类型"),
    "state": ("State", "状态"),
    "ssid": ("SSID", "SSID 名称"),
    "rx_rate": ("Receive rate (Mbps)", "接收速率 (Mbps)"),
    "tx_rate": ("Transmit rate (Mbps)", "传输速率 (Mbps)"),
    "signal": ("Signal", "信号"),
    "band": ("Band", "频段"),
    "radio_type": ("Radio type", "无线电类型"),
}

# netsh wlan show hostednetwork
HOSTED_NETWORK_LABELS: LabelTable = {
    "ssid": ("SSID name", "SSID 名称"),
    "max_client_count": ("Max number of clients", "最大客户端数"),
    "authentication": ("Authentication", "身份验证"),
    "encryption": ("Cipher", "密码", "加密"),
    "client_count": ("Number of clients", "客户端数"),
    "status": ("Status", "状态"),
}

HOSTED_NETWORK_STARTED = ("Started", "已启动")

# netsh interface ipv4 show dnsservers
DNS_SECTION_HEADERS: Sequence[str] = (
    "Statically Configured DNS Servers",
    "静态配置的 DNS 服务器",
    "DNS servers configured through DHCP",
    "通过 DHCP 配置的 DNS 服务器",
)

DNS_SECTION_TERMINATORS: Sequence[str] = (
    "Register with which suffix",
    "用哪个前缀注册",
    "Register with",
)

# ipconfig / ipconfig /all
IPCONFIG_GATEWAY_LABELS: Sequence[str] = ("Default Gateway", "默认网关")
IPCONFIG_DNS_LABELS: Sequence[str] = ("DNS Servers", "DNS 服务器")

# netsh interface ipv4 show config
DHCP_ENABLED_LABELS: Sequence[str] = ("DHCP enabled", "DHCP 已启用")
YES_VALUES: Sequence[str] = ("Yes", "是")
NO_VALUES: Sequence[str] = ("No", "否")

# Vendor name fragments found in adapter descriptions.
VENDOR_FRAGMENTS: Sequence[tuple[str, str]] = (
    ("Intel", "Intel Corporation"),
    ("Realtek", "Realtek Semiconductor Corp."),
    ("Broadcom", "Broadcom Inc."),
    ("MediaTek", "MediaTek Inc."),
    ("Qualcomm", "Qualcomm Technologies, Inc."),
    ("Killer", "Rivet Networks"),
)


def split_label(line: str) -> tuple[str, str] | None:
    """Split "Label : value" at the first colon; None if there is no colon.

    The full-width colon (U+FF1A) printed by some localized tools also counts.
    """
    found = [i for i in (line.find(":"), line.find("\uff1a")) if i >= 0]
    if not found:
        return None
    i = min(found)
    return line[:i].strip(), line[i + 1 :].strip()


def match_prefix(label: str, table: LabelTable) -> str | None:
    """Return the canonical field whose prefixes match label, if any."""
    for field, prefixes in table.items():
        if any(label.startswith(prefix) for prefix in prefixes):
            return field
    return None


def match_exact(label: str, table: LabelTable) -> str | None:
    """Return the canonical field whose labels equal label, if any."""
    for field, labels in table.items():
        if label in labels:
            return field
    return None


def infer_manufacturer(description: str) -> str:
    """Guess the adapter vendor from a free-text product description."""
    for fragment, vendor in VENDOR_FRAGMENTS:
        if fragment in description:
            return vendor
    return ""
