from __future__ import annotations

import logging

from ..context import SetupContext
from ..errors import ConfigurationError
from ..flags import PROG
from ..lib.env import PATHS

logger = logging.getLogger(__name__)


class ResolveToolchainStep:
    step_id = "10_resolve_toolchain"
    abort_on_failure = True

    def run(self, ctx: SetupContext) -> None:
        if ctx.flags.skip_toolchain:
            riscv = ctx.env.get("RISCV")
            if not riscv:
                raise ConfigurationError(
                    "You must set the RISCV environment variable before running "
                    f"{PROG} if running under --library or --skip-toolchain."
                )
            ctx.riscv = riscv
            logger.info("Using existing RISCV toolchain at %s", riscv)
            return

        riscv = str(ctx.repo_dir / PATHS.toolchain_install)
        ctx.riscv = riscv
        ctx.env["RISCV"] = riscv
        logger.info("Installing fresh RISCV toolchain to %s", riscv)
