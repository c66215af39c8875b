from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from .command import run_cmd

logger = logging.getLogger(__name__)

# Sources "$1" quietly in a bash child, then dumps the resulting environment.
_SOURCE_AND_DUMP = 'source "$1" >/dev/null && env -0'

# Bookkeeping bash sets for itself; not part of what the script exported.
_SHELL_VARS = {"_", "SHLVL", "PWD", "OLDPWD"}


def parse_env_dump(dump: str) -> Dict[str, str]:
    """Parse NUL separated ``NAME=value`` records as printed by ``env -0``."""

    out: Dict[str, str] = {}
    for rec in dump.split("\0"):
        if not rec or "=" not in rec:
            continue
        name, value = rec.split("=", 1)
        out[name] = value
    return out


def capture_sourced_env(
    script: str,
    *,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    dry_run: bool = False,
) -> Dict[str, str]:
    """Return the environment a bash shell ends up with after sourcing ``script``.

    The caller decides where to apply it; nothing here touches os.environ.
    """

    r = run_cmd(
        ["bash", "-c", _SOURCE_AND_DUMP, "bash", script], env=env, cwd=cwd, capture=True, dry_run=dry_run
    )
    env_out = parse_env_dump(r.stdout)
    for name in _SHELL_VARS:
        env_out.pop(name, None)
    return env_out


def find_devtoolset(root: str) -> Optional[Path]:
    """Latest (lexically) ``devtoolset-*`` under ``root`` that ships a usable make."""

    base = Path(root)
    if not base.is_dir():
        return None

    found: Optional[Path] = None
    for d in sorted(base.glob("devtoolset-*")):
        make = d / "root/usr/bin/make"
        if make.is_file() and os.access(make, os.X_OK):
            found = d
    return found
