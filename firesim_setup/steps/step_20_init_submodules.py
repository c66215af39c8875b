from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.command import run_cmd
from ..lib.env import PATHS
from ..lib.git import set_submodule_update, submodule_update
from ..lib.marshal import marshal_config_path, write_default_config

logger = logging.getLogger(__name__)


class InitSubmodulesStep:
    step_id = "20_init_submodules"
    abort_on_failure = True

    def run(self, ctx: SetupContext) -> None:
        repo = str(ctx.repo_dir)
        chipyard = PATHS.chipyard_submodule

        # Everything except Chipyard, which is large and only wanted standalone.
        set_submodule_update(repo, chipyard, "none", env=ctx.env, dry_run=ctx.dry_run)
        submodule_update(repo, recursive=True, env=ctx.env, dry_run=ctx.dry_run)

        if ctx.flags.is_library:
            logger.info("Library mode: leaving %s to the host project", chipyard)
            return

        # Must be checked before Chipyard's init script, which configures FireMarshal itself.
        marshal_cfg = marshal_config_path(ctx.chipyard_dir)
        ctx.marshal_first_init = not marshal_cfg.is_file()

        set_submodule_update(repo, chipyard, None, env=ctx.env, dry_run=ctx.dry_run)
        submodule_update(repo, chipyard, env=ctx.env, dry_run=ctx.dry_run)
        run_cmd(
            ["./scripts/init-submodules-no-riscv-tools.sh", "--no-firesim"],
            cwd=str(ctx.chipyard_dir),
            env=ctx.env,
            dry_run=ctx.dry_run,
        )

        # A config that existed before this run may carry user edits.
        if ctx.marshal_first_init:
            write_default_config(marshal_cfg, dry_run=ctx.dry_run)
        else:
            logger.info("Keeping existing FireMarshal config %s", str(marshal_cfg))

        ctx.descriptor.export("FIRESIM_STANDALONE", "1")
