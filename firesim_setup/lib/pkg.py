from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Mapping, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def pip_install_requirements(
    requirements: str,
    *,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    dry_run: bool = False,
) -> None:
    run_cmd(["sudo", "pip3", "install", "-r", requirements], env=env, cwd=cwd, dry_run=dry_run)


def read_package_list(path: str) -> list[str]:
    """Whitespace separated package names, as xargs would read them."""

    return Path(path).read_text(encoding="utf-8").split()


def yum_install(
    packages: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    if not packages:
        return
    run_cmd(["sudo", "yum", "install", "-y", *packages], env=env, dry_run=dry_run)


def yum_install_from_file(
    path: str,
    *,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    if dry_run and not Path(path).exists():
        logger.info("Would install packages listed in %s", path)
        return
    packages = read_package_list(path)
    if not packages:
        logger.info("No packages listed in %s", path)
    yum_install(packages, env=env, dry_run=dry_run)


def build_autotools_tarball(
    *,
    url: str,
    name: str,
    work_dir: str,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    """Download, configure out of tree, build and ``sudo make install`` a source tarball.

    The tarball and the unpacked tree are removed afterwards, whether or not
    the build succeeded.
    """

    work = Path(work_dir)
    tarball = work / f"{name}.tar.gz"
    src = work / name
    build = src / "build"

    try:
        run_cmd(["wget", "-O", str(tarball), url], env=env, cwd=str(work), dry_run=dry_run)
        run_cmd(["tar", "xvzf", str(tarball)], env=env, cwd=str(work), dry_run=dry_run)
        if dry_run:
            logger.info("Would create %s", str(build))
        else:
            build.mkdir(parents=True, exist_ok=True)
        run_cmd(["../configure"], env=env, cwd=str(build), dry_run=dry_run)
        run_cmd(["make"], env=env, cwd=str(build), dry_run=dry_run)
        run_cmd(["sudo", "make", "install"], env=env, cwd=str(build), dry_run=dry_run)
    finally:
        if dry_run:
            logger.info("Would remove %s and %s", str(tarball), str(src))
        else:
            tarball.unlink(missing_ok=True)
            shutil.rmtree(src, ignore_errors=True)
            if src.exists():
                # Typically files left root-owned by ``sudo make install``.
                logger.warning("Could not remove %s; delete it by hand", str(src))

    logger.info("Installed %s from %s", name, url)
