from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.command import run_cmd

logger = logging.getLogger(__name__)


class RepoScriptStep:
    step_id = ""
    abort_on_failure = True
    script = ""

    def run(self, ctx: SetupContext) -> None:
        run_cmd([self.script], cwd=str(ctx.repo_dir), env=ctx.env, dry_run=ctx.dry_run)


class BuildLibelfStep(RepoScriptStep):
    step_id = "60_build_libelf"
    script = "./scripts/build-libelf.sh"


class BuildLibdwarfStep(RepoScriptStep):
    step_id = "65_build_libdwarf"
    script = "./scripts/build-libdwarf.sh"
