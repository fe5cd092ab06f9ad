"""Interface commands - list, inspect and reconfigure network interfaces."""

from __future__ import annotations

import json

from netconfig.models import (
    InterfaceConfigRequest,
    InterfaceRecord,
    IPv4Config,
    IPv6Config,
)
from netconfig.service import NetworkService


def _dns_text(dns: list[str] | None) -> str:
    return ", ".join(dns) if dns else "-"


def print_interface(record: InterfaceRecord) -> None:
    """Print one interface record in the human readable layout."""
    hw = record.hardware
    print(f"{record.name} ({record.status})")
    if record.description:
        print(f"  Description:      {record.description}")
    if record.connected_ssid:
        print(f"  Connected SSID:   {record.connected_ssid}")

    v4 = record.ipv4_config
    print("\n  IPv4:")
    print(f"    Address:        {v4.ip or '-'}")
    print(f"    Mask:           {v4.mask or '-'}")
    print(f"    Gateway:        {v4.gateway or '-'}")
    print(f"    DNS:            {_dns_text(v4.dns)}")
    print(f"    DHCP:           {'Yes' if record.dhcp_enabled else 'No'}")

    v6 = record.ipv6_config
    if v6.ip:
        print("\n  IPv6:")
        prefix = f"/{v6.prefix_len}" if v6.prefix_len is not None else ""
        print(f"    Address:        {v6.ip}{prefix}")
        print(f"    Gateway:        {v6.gateway or '-'}")
        print(f"    DNS:            {_dns_text(v6.dns)}")

    print("\n  Hardware:")
    print(f"    MAC:            {hw.mac_address or '-'}")
    print(f"    Manufacturer:   {hw.manufacturer or '-'}")
    print(f"    Product:        {hw.product_name or '-'}")
    print(f"    Type:           {hw.adapter_type}")
    if hw.speed:
        print(f"    Speed:          {hw.speed}")
    if hw.bus_type:
        print(f"    Bus:            {hw.bus_type}")

    drv = record.driver
    if drv.name or drv.version:
        print("\n  Driver:")
        print(f"    Name:           {drv.name or '-'}")
        print(f"    Version:        {drv.version or '-'}")
        print(f"    Provider:       {drv.provider or '-'}")
        print(f"    Date:           {drv.date_installed}")


def run_interfaces(
    service: NetworkService, fast: bool = False, as_json: bool = False
) -> None:
    """List interfaces, either full records or the fast summary."""
    if fast:
        summaries = service.list_interfaces_fast()
        if as_json:
            print(json.dumps([s.model_dump(mode="json") for s in summaries], indent=2))
            return
        if not summaries:
            print("No network interfaces found")
            return
        for summary in summaries:
            print(f"  {summary.name:<24} {summary.status:<5} {summary.product_name}")
        return

    records = service.list_interfaces()
    if as_json:
        print(json.dumps([r.model_dump(mode="json") for r in records], indent=2))
        return
    if not records:
        print("No network interfaces found")
        return
    for i, record in enumerate(records):
        if i:
            print()
        print_interface(record)


def build_config_request(
    dhcp: bool = False,
    ip: str | None = None,
    mask: str | None = None,
    gateway: str | None = None,
    dns: tuple[str, ...] | list[str] = (),
    dns_auto: bool = False,
    ipv6: str | None = None,
    ipv6_prefix: int | None = None,
    ipv6_gateway: str | None = None,
    ipv6_dns: tuple[str, ...] | list[str] = (),
) -> InterfaceConfigRequest:
    """Turn command-line options into a configure request.

    A family with no options given is left out, so it is not touched.
    """
    ipv4_config = None
    if dhcp or ip or mask or gateway or dns or dns_auto:
        ipv4_config = IPv4Config(
            ip=ip,
            mask=mask,
            gateway=gateway,
            dns=list(dns) or None,
            dhcp=dhcp,
            dns_auto=dns_auto,
        )

    ipv6_config = None
    if ipv6 or ipv6_gateway or ipv6_dns:
        ipv6_config = IPv6Config(
            ip=ipv6,
            prefix_len=ipv6_prefix,
            gateway=ipv6_gateway,
            dns=list(ipv6_dns) or None,
        )

    return InterfaceConfigRequest(ipv4_config=ipv4_config, ipv6_config=ipv6_config)


def run_configure(
    service: NetworkService, name: str, request: InterfaceConfigRequest
) -> None:
    if request.ipv4_config is None and request.ipv6_config is None:
        print("Nothing to configure")
        return
    service.configure_interface(name, request)
    print(f"Interface {name} configured")


def run_interface(service: NetworkService, name: str, as_json: bool = False) -> None:
    """Show a single interface."""
    record = service.get_interface(name)
    if as_json:
        print(record.model_dump_json(indent=2))
    else:
        print_interface(record)
