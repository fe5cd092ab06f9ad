"""Pydantic models for interface records and interface configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from netconfig.models.constants import (
    DATE_UNKNOWN,
    AdapterType,
    InterfaceStatus,
)


class IPv4Config(BaseModel):
    """IPv4 addressing of an interface.

    As a snapshot it mirrors the live system. As a configure input, a None
    field means "leave it alone".
    """

    model_config = ConfigDict(frozen=True)

    ip: str | None = Field(None, description="IPv4 address")
    mask: str | None = Field(None, description="Dotted subnet mask")
    gateway: str | None = Field(None, description="Default gateway")
    dns: list[str] | None = Field(
        None, description="DNS resolvers in priority order (or a sentinel)"
    )
    dhcp: bool = Field(False, description="Address obtained via DHCP")
    dns_auto: bool = Field(False, description="DNS servers obtained via DHCP")


class IPv6Config(BaseModel):
    """IPv6 addressing of an interface."""

    model_config = ConfigDict(frozen=True)

    ip: str | None = Field(None, description="IPv6 address")
    prefix_len: int | None = Field(None, description="Prefix length", ge=0, le=128)
    gateway: str | None = Field(None, description="Default gateway")
    dns: list[str] | None = Field(
        None, description="DNS resolvers in priority order (or a sentinel)"
    )


class HardwareDescriptor(BaseModel):
    """Hardware details of a network adapter."""

    model_config = ConfigDict(frozen=True)

    mac_address: str = Field("", description="MAC address")
    manufacturer: str = Field("", description="Adapter manufacturer")
    product_name: str = Field("", description="Product name / description")
    adapter_type: AdapterType = Field(
        AdapterType.ETHERNET, description="ethernet or wireless"
    )
    physical_media: str = Field("", description="Physical medium")
    speed: str = Field("", description="Link speed, e.g. '1000 Mbps'")
    bus_type: str = Field("", description="Bus type (PCI, USB, ...)")
    pnp_device_id: str = Field("", description="Platform device identifier")

    @property
    def is_usable(self) -> bool:
        """An adapter without MAC or product name is not listed."""
        return bool(self.mac_address) and bool(self.product_name)


class DriverDescriptor(BaseModel):
    """Driver details of a network adapter."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    version: str = ""
    provider: str = ""
    date_installed: str = Field(
        DATE_UNKNOWN, description="ISO date (YYYY-MM-DD) or 'Unknown'"
    )
    status: str = ""
    path: str = Field("", description="Install package (INF) or module path")


class InterfaceRecord(BaseModel):
    """Full description of one network interface, built fresh per lookup."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Interface name")
    description: str = Field("", description="OS supplied description")
    status: InterfaceStatus = Field(..., description="up or down")
    connected_ssid: str | None = Field(
        None, description="Associated Wi-Fi network (wireless only)"
    )
    dhcp_enabled: bool = False
    ipv4_config: IPv4Config = Field(default_factory=IPv4Config)
    ipv6_config: IPv6Config = Field(default_factory=IPv6Config)
    hardware: HardwareDescriptor = Field(default_factory=HardwareDescriptor)
    driver: DriverDescriptor = Field(default_factory=DriverDescriptor)

    @property
    def is_wireless(self) -> bool:
        return self.hardware.adapter_type == AdapterType.WIRELESS


class InterfaceConfigRequest(BaseModel):
    """Requested change to an interface; absent families are left untouched."""

    ipv4_config: IPv4Config | None = None
    ipv6_config: IPv6Config | None = None


class InterfaceSummary(BaseModel):
    """Lightweight interface entry produced by the fast listing."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: InterfaceStatus
    product_name: str = ""


class ConnectivityResult(BaseModel):
    """Outcome of an HTTP reachability probe."""

    target: str
    success: bool
    status_code: int = 0
    duration_ms: int = 0
    error: str = ""
