from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from .env import MARSHAL_FIRESIM_DIR, PATHS

logger = logging.getLogger(__name__)


def marshal_config_path(chipyard_dir: Path) -> Path:
    return chipyard_dir / PATHS.marshal_in_chipyard / PATHS.marshal_config


def write_default_config(path: Path, *, dry_run: bool = False) -> None:
    """Point FireMarshal back at this FireSim checkout."""

    contents = yaml.safe_dump({"firesim-dir": MARSHAL_FIRESIM_DIR}, default_flow_style=False)
    if dry_run:
        logger.info("Would write %s", str(path))
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    logger.info("Wrote FireMarshal config %s", str(path))


def force_symlink(target: str, link: Path, *, dry_run: bool = False) -> None:
    """Create ``link -> target``, replacing whatever is at ``link`` (like ``ln -sfn``)."""

    if dry_run:
        logger.info("Would link %s -> %s", str(link), target)
        return
    link.parent.mkdir(parents=True, exist_ok=True)
    if link.is_symlink() or link.is_file():
        link.unlink()
    os.symlink(target, link)
    logger.info("Linked %s -> %s", str(link), target)
