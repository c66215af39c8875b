from __future__ import annotations

from typing import Mapping

from .command import run_cmd


def set_submodule_update(
    repo: str,
    submodule: str,
    policy: str | None,
    *,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    """Set ``submodule.<path>.update`` in the repo-local config; None unsets it."""

    key = f"submodule.{submodule}.update"
    if policy is None:
        run_cmd(["git", "config", "--unset", key], cwd=repo, env=env, dry_run=dry_run)
    else:
        run_cmd(["git", "config", key, policy], cwd=repo, env=env, dry_run=dry_run)


def submodule_update(
    repo: str,
    *paths: str,
    recursive: bool = False,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    argv = ["git", "submodule", "update", "--init"]
    if recursive:
        argv.append("--recursive")
    argv += list(paths)
    run_cmd(argv, cwd=repo, env=env, dry_run=dry_run)
