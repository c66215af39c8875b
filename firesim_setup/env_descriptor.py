from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class EnvDescriptor:
    """Shell lines recording what the setup run configured.

    Built up as stages succeed and written once at the very end, so an
    ``env.sh`` on disk means a run completed.
    """

    generated_by: str
    lines: List[str] = field(default_factory=list)

    def append(self, line: str) -> None:
        self.lines.append(line)

    def export(self, name: str, value: str) -> None:
        self.append(f"export {name}={shlex.quote(value)}")

    def source(self, path: str) -> None:
        self.append(f"source {shlex.quote(path)}")

    def render(self) -> str:
        return "\n".join([f"# This file was generated by {self.generated_by}", *self.lines]) + "\n"

    def write(self, path: str, *, dry_run: bool = False) -> None:
        p = Path(path)
        if dry_run:
            logger.info("Would write %s", str(p))
            return
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(self.render(), encoding="utf-8")
        logger.info("Wrote %s", str(p))


def backup_env_file(path: str, suffix: str = ".backup", *, dry_run: bool = False) -> Optional[str]:
    """Rename an existing env file aside, replacing any older backup.

    Returns the backup path if a file was moved.
    """

    p = Path(path)
    if not p.is_file():
        return None

    backup = str(p) + suffix
    if dry_run:
        logger.info("Would move %s to %s", str(p), backup)
        return backup
    os.replace(p, backup)
    logger.info("Moved previous %s to %s", p.name, backup)
    return backup
