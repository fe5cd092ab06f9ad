"""netconfig utilities - logging, environment, encoding and command execution."""

from netconfig.utils.commands import CommandResult, CommandRunner
from netconfig.utils.encoding import normalize_text
from netconfig.utils.env import (
    EnvVarError,
    EnvVarNotSetError,
    EnvVarTypeError,
    env_is_set,
    get_env,
    require_env,
)
from netconfig.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)

__all__ = [
    # Commands
    "CommandResult",
    "CommandRunner",
    # Env
    "EnvVarError",
    "EnvVarNotSetError",
    "EnvVarTypeError",
    "LogLevel",
    # Logger
    "Logger",
    "LoggerNotConfiguredError",
    "env_is_set",
    "get_env",
    "normalize_text",
    "require_env",
]
