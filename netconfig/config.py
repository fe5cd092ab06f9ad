"""Runtime settings loaded from environment variables."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from netconfig.models.constants import (
    DEFAULT_PRODUCT_DENYLIST,
    DEFAULT_VIRTUAL_PREFIXES,
    DEFAULT_VIRTUAL_SIGNATURES,
)
from netconfig.utils.env import get_env

DEFAULT_CONNECTIVITY_TARGET = "http://www.baidu.com"
DEFAULT_CONNECTIVITY_TIMEOUT = 3.0


class Settings(BaseModel):
    """netconfig settings.

    Every field has a matching environment variable, see from_env().
    """

    model_config = ConfigDict(frozen=True)

    debug: bool = Field(
        False,
        description="Disable interface filtering; enable hotspot diagnostics and fallback",
    )
    log_level: str = Field("INFO", description="Log level name")

    monitor_enabled: bool = Field(True, description="Run the hotspot health monitor")
    monitor_interval: float = Field(30.0, gt=0, description="Seconds between checks")
    auto_recovery: bool = Field(True, description="Restart the hotspot when it is down")
    settle_delay: float = Field(
        2.0, ge=0, description="Seconds between disable and re-enable during recovery"
    )

    virtual_signatures: tuple[str, ...] = Field(
        DEFAULT_VIRTUAL_SIGNATURES,
        description="Case-insensitive name substrings of virtual adapters",
    )
    virtual_prefixes: tuple[str, ...] = Field(
        DEFAULT_VIRTUAL_PREFIXES, description="Name prefixes of virtual adapters"
    )
    product_denylist: tuple[str, ...] = Field(
        DEFAULT_PRODUCT_DENYLIST, description="Product names never listed"
    )

    connectivity_target: str = DEFAULT_CONNECTIVITY_TARGET
    connectivity_timeout: float = Field(DEFAULT_CONNECTIVITY_TIMEOUT, gt=0)

    @classmethod
    def from_env(cls, **overrides) -> Settings:
        """Build settings from the environment; keyword overrides win.

        Raises:
            EnvVarTypeError: If a variable cannot be converted.
        """
        values = {
            "debug": get_env("NETCONFIG_DEBUG", default=False, as_type=bool),
            "log_level": get_env("NETCONFIG_LOG_LEVEL", default="INFO"),
            "monitor_enabled": get_env(
                "HOTSPOT_MONITOR_ENABLED", default=True, as_type=bool
            ),
            "monitor_interval": get_env(
                "HOTSPOT_MONITOR_INTERVAL", default=30.0, as_type=float
            ),
            "auto_recovery": get_env("HOTSPOT_AUTO_RECOVERY", default=True, as_type=bool),
            "settle_delay": get_env("HOTSPOT_SETTLE_DELAY", default=2.0, as_type=float),
            "virtual_signatures": tuple(
                get_env(
                    "NETCONFIG_VIRTUAL_SIGNATURES",
                    default=list(DEFAULT_VIRTUAL_SIGNATURES),
                    as_type=list,
                )
            ),
            "product_denylist": tuple(
                get_env(
                    "NETCONFIG_PRODUCT_DENYLIST",
                    default=list(DEFAULT_PRODUCT_DENYLIST),
                    as_type=list,
                )
            ),
            "connectivity_target": get_env(
                "NETCONFIG_CONNECTIVITY_TARGET", default=DEFAULT_CONNECTIVITY_TARGET
            ),
        }
        values.update(overrides)
        return cls(**values)
