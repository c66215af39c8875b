from __future__ import annotations

import logging

from ..context import SetupContext
from ..env_descriptor import backup_env_file
from ..lib.env import PATHS

logger = logging.getLogger(__name__)


class BackupEnvStep:
    step_id = "15_backup_env"
    abort_on_failure = True

    def run(self, ctx: SetupContext) -> None:
        # An env.sh on disk means an earlier run completed; keep it as the backup.
        ctx.backup_path = backup_env_file(
            str(ctx.env_file), PATHS.env_backup_suffix, dry_run=ctx.dry_run
        )
        ctx.descriptor.export("FIRESIM_ENV_SOURCED", "1")
