#!/usr/bin/env python3
"""netconfig CLI - Command-line interface for netconfig."""

import functools

import click

from netconfig.config import Settings
from netconfig.exceptions import NetConfigError
from netconfig.utils.env import EnvVarError, get_env
from netconfig.utils.logger import Logger


def _handle_errors(func):
    """Report netconfig errors as a one-line message and exit status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (NetConfigError, EnvVarError) as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def _service(ctx: click.Context):
    """Build the NetworkService once per invocation."""
    from netconfig.service import NetworkService

    obj = ctx.ensure_object(dict)
    if "service" not in obj:
        overrides = {"debug": True} if obj.get("debug") else {}
        obj["service"] = NetworkService(Settings.from_env(**overrides))
    return obj["service"]


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    help="Debug mode: no interface filtering, hotspot diagnostics and fallback",
)
@click.pass_context
def netconfig(ctx, debug):
    """netconfig - network interface and mobile hotspot management."""
    # Configure logger at startup if not already configured
    if not Logger.is_configured():
        Logger.configure(
            level=get_env("NETCONFIG_LOG_LEVEL", default="INFO"),
            output="stderr",
            timestamps=True,
        )
    if debug:
        Logger.set_level("DEBUG")

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@netconfig.command()
@click.option("--fast", is_flag=True, help="Names, status and product only")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
@_handle_errors
def interfaces(ctx, fast, as_json):
    """List physical network interfaces."""
    from netconfig.commands.interfaces_cmd import run_interfaces

    run_interfaces(_service(ctx), fast=fast, as_json=as_json)


@netconfig.command()
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
@_handle_errors
def interface(ctx, name, as_json):
    """Show one interface in detail."""
    from netconfig.commands.interfaces_cmd import run_interface

    run_interface(_service(ctx), name, as_json=as_json)


@netconfig.command()
@click.argument("name")
@click.option("--dhcp", is_flag=True, help="Obtain the IPv4 address via DHCP")
@click.option("--ip", default=None, help="Static IPv4 address")
@click.option("--mask", default=None, help="IPv4 subnet mask, e.g. 255.255.255.0")
@click.option("--gateway", default=None, help="IPv4 default gateway")
@click.option("--dns", multiple=True, help="IPv4 DNS server (repeatable, in order)")
@click.option("--dns-auto", is_flag=True, help="Obtain IPv4 DNS servers via DHCP")
@click.option("--ipv6", default=None, help="Static IPv6 address")
@click.option("--ipv6-prefix", type=click.IntRange(0, 128), default=None)
@click.option("--ipv6-gateway", default=None, help="IPv6 default gateway")
@click.option("--ipv6-dns", multiple=True, help="IPv6 DNS server (repeatable)")
@click.pass_context
@_handle_errors
def configure(
    ctx,
    name,
    dhcp,
    ip,
    mask,
    gateway,
    dns,
    dns_auto,
    ipv6,
    ipv6_prefix,
    ipv6_gateway,
    ipv6_dns,
):
    r"""Change the addressing of an interface.

    \b
    Examples:
      netconfig configure Ethernet --dhcp --dns-auto
      netconfig configure Ethernet --ip 192.168.1.10 --mask 255.255.255.0 \
          --gateway 192.168.1.1 --dns 8.8.8.8 --dns 1.1.1.1
    """
    from netconfig.commands.interfaces_cmd import build_config_request, run_configure

    request = build_config_request(
        dhcp=dhcp,
        ip=ip,
        mask=mask,
        gateway=gateway,
        dns=dns,
        dns_auto=dns_auto,
        ipv6=ipv6,
        ipv6_prefix=ipv6_prefix,
        ipv6_gateway=ipv6_gateway,
        ipv6_dns=ipv6_dns,
    )
    run_configure(_service(ctx), name, request)


@netconfig.command()
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
@_handle_errors
def scan(ctx, name, as_json):
    """Scan for Wi-Fi networks visible to an interface."""
    from netconfig.commands.wifi_cmd import run_scan

    run_scan(_service(ctx), name, as_json=as_json)


@netconfig.command()
@click.argument("name")
@click.argument("ssid")
@click.option("--password", "-p", default=None, help="WPA2 passphrase")
@click.pass_context
@_handle_errors
def connect(ctx, name, ssid, password):
    """Connect a wireless interface to a network."""
    from netconfig.commands.wifi_cmd import run_connect

    run_connect(_service(ctx), name, ssid, password)


@netconfig.command()
@click.argument("target", required=False)
@click.pass_context
@_handle_errors
def connectivity(ctx, target):
    """Check internet reachability with an HTTP request."""
    from netconfig.commands.wifi_cmd import run_connectivity

    if not run_connectivity(_service(ctx), target):
        ctx.exit(1)


@netconfig.group()
def hotspot():
    """Manage the mobile hotspot (Windows)."""


@hotspot.command("status")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@click.pass_context
@_handle_errors
def hotspot_status(ctx, as_json):
    """Show the hotspot state."""
    from netconfig.commands.hotspot_cmd import run_hotspot_status

    run_hotspot_status(_service(ctx), as_json=as_json)


@hotspot.command("enable")
@click.pass_context
@_handle_errors
def hotspot_enable(ctx):
    """Turn the hotspot on."""
    from netconfig.commands.hotspot_cmd import run_hotspot_set_enabled

    run_hotspot_set_enabled(_service(ctx), True)


@hotspot.command("disable")
@click.pass_context
@_handle_errors
def hotspot_disable(ctx):
    """Turn the hotspot off."""
    from netconfig.commands.hotspot_cmd import run_hotspot_set_enabled

    run_hotspot_set_enabled(_service(ctx), False)


@hotspot.command("configure")
@click.option("--ssid", required=True, help="Network name (1-32 characters)")
@click.option(
    "--password",
    required=True,
    prompt=True,
    hide_input=True,
    help="WPA2 passphrase (8-63 characters)",
)
@click.option("--enable", is_flag=True, help="Turn the hotspot on afterwards")
@click.pass_context
@_handle_errors
def hotspot_configure(ctx, ssid, password, enable):
    """Set the hotspot SSID and passphrase."""
    from netconfig.commands.hotspot_cmd import run_hotspot_configure

    run_hotspot_configure(_service(ctx), ssid, password, enable=enable)


@netconfig.command()
@click.pass_context
@_handle_errors
def monitor(ctx):
    """Supervise the hotspot and restart it when it drops (Ctrl-C to stop)."""
    from netconfig.commands.hotspot_cmd import run_monitor

    run_monitor(_service(ctx))


@netconfig.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed version information")
def version(verbose):
    """Display netconfig version information."""
    from netconfig.commands.version_cmd import run_version

    run_version(verbose=verbose)


def main():
    """Console script entry point."""
    netconfig(obj={})


if __name__ == "__main__":
    main()
