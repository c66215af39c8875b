from __future__ import annotations

import logging

from ..context import SetupContext

logger = logging.getLogger(__name__)

NEXT_STEPS = """\
Setup complete!
To generate simulator RTL and run sw-RTL simulation, source env.sh
To use the manager to deploy builds/simulations on EC2, source sourceme-f1-manager.sh to setup your environment.
To run builds/simulations manually on this machine, source sourceme-f1-full.sh to setup your environment."""


class WriteEnvStep:
    step_id = "90_write_env"
    abort_on_failure = True

    def run(self, ctx: SetupContext) -> None:
        ctx.descriptor.write(str(ctx.env_file), dry_run=ctx.dry_run)
