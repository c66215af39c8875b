from __future__ import annotations

import shlex
from typing import Optional, Sequence

# Lines of a failed command's error output repeated in its message.
ERROR_TAIL_LINES = 20


class SetupError(RuntimeError):
    """Base error for the bootstrap; carries the process exit status."""

    exit_code: int = 1

    def __init__(self, message: str, *, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(SetupError):
    """Bad command line, or an explicit help request (message is None)."""

    def __init__(self, message: Optional[str], *, exit_code: int):
        super().__init__(message or "", exit_code=exit_code)
        self.message = message


class ConfigurationError(SetupError):
    exit_code = 4


class SettingsError(ConfigurationError):
    """The FIRESIM_SETUP_CONFIG file is missing or holds bad values."""

    exit_code = 5


class CommandError(SetupError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = ""):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"Command failed ({returncode}): {' '.join(shlex.quote(a) for a in self.argv)}",
            # Killed by a signal: report it the way a shell would.
            exit_code=returncode if returncode > 0 else 128 - returncode,
        )

    def __str__(self) -> str:
        msg = super().__str__()
        lines = [ln for ln in self.stderr.splitlines() if ln.strip()][-ERROR_TAIL_LINES:]
        if not lines:
            return msg
        return msg + "\n" + "\n".join(f"  {ln}" for ln in lines)
