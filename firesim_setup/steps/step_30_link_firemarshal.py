from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.env import PATHS
from ..lib.marshal import force_symlink

logger = logging.getLogger(__name__)


class LinkFireMarshalStep:
    step_id = "30_link_firemarshal"
    abort_on_failure = True

    def run(self, ctx: SetupContext) -> None:
        if ctx.flags.is_library:
            # FireSim lives at <chipyard>/sims/firesim; the host Chipyard provides FireMarshal.
            ctx.target_chipyard_dir = ctx.repo_dir / ".." / ".."
            target = PATHS.marshal_link_library
        else:
            ctx.target_chipyard_dir = ctx.chipyard_dir
            target = PATHS.marshal_link_standalone

        force_symlink(target, ctx.marshal_dir, dry_run=ctx.dry_run)
