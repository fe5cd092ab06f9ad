"""Blocking execution of external programs.

All platform tools (netsh, powershell, ip, nmcli, iwlist, ...) are invoked
through CommandRunner so that output decoding and failure reporting are
uniform, and so tests can substitute a fake runner.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from netconfig.exceptions import DecodeError
from netconfig.utils.encoding import normalize_text


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external program invocation.

    Attributes:
        output: Normalized stdout text.
        success: True when the program ran and exited with status 0.
        diagnostic: stderr text, or a description of why the program could
            not run. Empty on a clean success.
        returncode: Exit status, or None if the program never started.
    """

    output: str
    success: bool
    diagnostic: str = ""
    returncode: int | None = None

    @property
    def combined(self) -> str:
        """stdout followed by the diagnostic text, as a terminal would show it."""
        if self.output and self.diagnostic:
            return f"{self.output}\n{self.diagnostic}"
        return self.output or self.diagnostic

    def __iter__(self):
        """Allow ``output, success, diagnostic = runner.run(...)``."""
        return iter((self.output, self.success, self.diagnostic))


class CommandRunner:
    """Run external programs and capture their output.

    No timeout is applied unless one is given; the tools themselves are
    responsible for bounding their runtime.
    """

    def __init__(self, default_timeout: float | None = None) -> None:
        self._default_timeout = default_timeout

    def run(
        self,
        args: Sequence[str],
        timeout: float | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Execute args and return a CommandResult. Never raises for tool failures.

        Args:
            args: Program and arguments.
            timeout: Seconds before the program is killed; falls back to
                the runner's default.
            env: Extra environment variables merged over os.environ.
        """
        run_env = None
        if env:
            run_env = {**os.environ, **env}

        try:
            result = subprocess.run(
                list(args),
                check=False,
                capture_output=True,
                timeout=timeout if timeout is not None else self._default_timeout,
                env=run_env,
            )
        except FileNotFoundError:
            return CommandResult("", False, f"executable not found: {args[0]}")
        except subprocess.TimeoutExpired:
            return CommandResult("", False, f"timed out: {' '.join(args)}")
        except OSError as e:
            return CommandResult("", False, f"failed to start {args[0]}: {e}")

        try:
            stdout = normalize_text(result.stdout or b"")
            stderr = normalize_text(result.stderr or b"")
        except DecodeError as e:
            return CommandResult("", False, str(e), result.returncode)

        if result.returncode != 0:
            diagnostic = stderr.strip() or stdout.strip()
            diagnostic = f"exit status {result.returncode}" + (
                f": {diagnostic}" if diagnostic else ""
            )
            return CommandResult(stdout, False, diagnostic, result.returncode)

        return CommandResult(stdout, True, stderr.strip(), result.returncode)


__all__ = ["CommandResult", "CommandRunner"]
