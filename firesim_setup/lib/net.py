from __future__ import annotations

import logging
from typing import Mapping

from .command import run_cmd

logger = logging.getLogger(__name__)


def on_ec2(
    url: str,
    *,
    timeout: int = 1,
    tries: int = 3,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> bool:
    """Return True if the instance metadata page answers.

    This is one of the few checks that works without sudo.
    """

    r = run_cmd(
        ["wget", "-T", str(timeout), "-t", str(tries), "-O", "/dev/null", url],
        check=False,
        capture=True,
        env=env,
        dry_run=dry_run,
    )
    return r.returncode == 0
