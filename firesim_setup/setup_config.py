from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import SettingsError

CONFIG_ENV_VAR = "FIRESIM_SETUP_CONFIG"
LOG_ENV_VAR = "FIRESIM_SETUP_LOG"
DRY_RUN_ENV_VAR = "FIRESIM_SETUP_DRY_RUN"

E2FSPROGS_VERSION = "1.45.4"
E2FSPROGS_URL = "https://git.kernel.org/pub/scm/fs/ext2/e2fsprogs.git/snapshot/e2fsprogs-{version}.tar.gz"
METADATA_URL = "http://169.254.169.254/"

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SetupConfig:
    raw: Dict[str, Any] = field(default_factory=dict)
    environ: Mapping[str, str] = field(default_factory=dict)

    @property
    def log_path(self) -> Optional[str]:
        p = self.environ.get(LOG_ENV_VAR) or self.raw.get("log_path")
        return str(p) if p else None

    @property
    def dry_run(self) -> bool:
        env_val = self.environ.get(DRY_RUN_ENV_VAR)
        if env_val is not None:
            return env_val.strip().lower() in _TRUE
        return bool(self.raw.get("dry_run", False))

    @property
    def devtoolset_root(self) -> str:
        return str(self.raw.get("devtoolset_root") or "/opt/rh")

    @property
    def metadata_url(self) -> str:
        return str(self.raw.get("metadata_url") or METADATA_URL)

    @property
    def metadata_timeout(self) -> int:
        return int(self.raw.get("metadata_timeout", 1))

    @property
    def metadata_tries(self) -> int:
        return int(self.raw.get("metadata_tries", 3))

    @property
    def e2fsprogs_version(self) -> str:
        return str(((self.raw.get("e2fsprogs") or {}).get("version")) or E2FSPROGS_VERSION)

    @property
    def e2fsprogs_url(self) -> str:
        url = ((self.raw.get("e2fsprogs") or {}).get("url")) or E2FSPROGS_URL
        return str(url).format(version=self.e2fsprogs_version)


def load_setup_config(environ: Optional[Mapping[str, str]] = None) -> SetupConfig:
    """Load the optional YAML settings file named by FIRESIM_SETUP_CONFIG."""

    env = dict(os.environ if environ is None else environ)
    path = env.get(CONFIG_ENV_VAR)
    if not path:
        return SetupConfig(raw={}, environ=env)

    p = Path(path).expanduser()
    if not p.exists():
        raise SettingsError(f"{CONFIG_ENV_VAR} points to a missing file: {p}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise SettingsError(f"setup config must be YAML: {p}")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise SettingsError(f"{p} must contain a mapping/object")

    _check_settings(raw, p)
    return SetupConfig(raw=raw, environ=env)


def _check_settings(raw: Dict[str, Any], p: Path) -> None:
    """Reject values the stages could not use, before any stage runs."""

    for key in ("metadata_timeout", "metadata_tries"):
        if key not in raw:
            continue
        val = raw[key]
        if isinstance(val, bool) or not isinstance(val, int) or val < 1:
            raise SettingsError(f"{p}: {key} must be a positive integer, got {val!r}")

    for key in ("log_path", "devtoolset_root", "metadata_url"):
        val = raw.get(key)
        if val is not None and not isinstance(val, str):
            raise SettingsError(f"{p}: {key} must be a string, got {val!r}")

    if "dry_run" in raw and not isinstance(raw["dry_run"], bool):
        raise SettingsError(f"{p}: dry_run must be true or false, got {raw['dry_run']!r}")

    e2fs = raw.get("e2fsprogs")
    if e2fs is None:
        return
    if not isinstance(e2fs, dict):
        raise SettingsError(f"{p}: e2fsprogs must be a mapping with version/url keys, got {e2fs!r}")
    for key in ("version", "url"):
        val = e2fs.get(key)
        if val is not None and not isinstance(val, (str, int, float)):
            raise SettingsError(f"{p}: e2fsprogs.{key} must be a string, got {val!r}")
    url = e2fs.get("url")
    if url is not None:
        try:
            str(url).format(version="0")
        except (KeyError, IndexError, ValueError) as e:
            raise SettingsError(f"{p}: e2fsprogs.url may only use the {{version}} field: {url!r}") from e
