from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .env_descriptor import EnvDescriptor
from .flags import RunFlags
from .lib.env import PATHS
from .setup_config import SetupConfig


@dataclass
class SetupContext:
    """Mutable state handed from stage to stage.

    ``env`` is the environment every child process sees; stages update it
    instead of os.environ.
    """

    repo_dir: Path
    flags: RunFlags
    cfg: SetupConfig
    env: Dict[str, str]
    descriptor: EnvDescriptor
    riscv: Optional[str] = None
    target_chipyard_dir: Optional[Path] = None
    marshal_first_init: Optional[bool] = None
    backup_path: Optional[str] = None

    @property
    def dry_run(self) -> bool:
        return self.cfg.dry_run

    @property
    def chipyard_dir(self) -> Path:
        return self.repo_dir / PATHS.chipyard_submodule

    @property
    def env_file(self) -> Path:
        return self.repo_dir / PATHS.env_file

    @property
    def marshal_dir(self) -> Path:
        return self.repo_dir / PATHS.marshal_link
