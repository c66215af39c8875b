from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.command import run_cmd
from ..lib.shellenv import capture_sourced_env, find_devtoolset

logger = logging.getLogger(__name__)


class BuildToolchainStep:
    """Build the RISC-V toolchain through Chipyard (whether as top or as library).

    Devtoolset activation only applies to a copy of the environment used for
    the build itself. The devtoolset sudo wrapper mangles options, which breaks
    the aws-fpga install_fpga_mgmt_tools.sh run later on.
    """

    step_id = "40_build_toolchain"
    abort_on_failure = True

    def run(self, ctx: SetupContext) -> None:
        if ctx.flags.skip_toolchain:
            logger.info("Skipping toolchain build (RISCV=%s)", ctx.riscv)
            return

        chipyard = ctx.target_chipyard_dir or ctx.chipyard_dir
        build_env = dict(ctx.env)

        # Latest Developer Toolset for GNU make 4.x
        devtoolset = find_devtoolset(ctx.cfg.devtoolset_root)
        if devtoolset is not None:
            logger.info("Enabling %s", devtoolset.name)
            build_env.update(
                capture_sourced_env(str(devtoolset / "enable"), env=build_env, dry_run=ctx.dry_run)
            )

        argv = ["./scripts/build-toolchains.sh"]
        if ctx.flags.fast_install:
            argv.append("ec2fast")
        run_cmd(argv, cwd=str(chipyard), env=build_env, dry_run=ctx.dry_run)

        chipyard_env = str(chipyard / "env.sh")
        ctx.env.update(capture_sourced_env(chipyard_env, env=ctx.env, dry_run=ctx.dry_run))
        ctx.descriptor.source(chipyard_env)
