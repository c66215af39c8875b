from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .context import SetupContext
from .env_descriptor import EnvDescriptor
from .errors import ConfigurationError, UsageError
from .flags import PROG, USAGE, RunFlags, parse_flags
from .logging_utils import DEFAULT_LOG_NAME, configure_logging
from .pipeline import PipelineResult, run_pipeline
from .setup_config import SetupConfig, load_setup_config
from .steps import (
    NEXT_STEPS,
    BackupEnvStep,
    BuildLibdwarfStep,
    BuildLibelfStep,
    BuildToolchainStep,
    GenerateTagsStep,
    InitSubmodulesStep,
    LinkFireMarshalStep,
    ProvisionEc2Step,
    ResolveToolchainStep,
    WriteEnvStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        ResolveToolchainStep(),
        BackupEnvStep(),
        InitSubmodulesStep(),
        LinkFireMarshalStep(),
        BuildToolchainStep(),
        ProvisionEc2Step(),
        BuildLibelfStep(),
        BuildLibdwarfStep(),
        GenerateTagsStep(),
        WriteEnvStep(),
    ]


def run(
    *,
    flags: RunFlags,
    cfg: SetupConfig,
    repo_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PipelineResult:
    """Run every setup stage against the checkout in ``repo_dir`` (default: cwd)."""

    repo = Path(repo_dir) if repo_dir is not None else Path.cwd()
    actual_log_path = configure_logging(log_path=cfg.log_path or str(repo / DEFAULT_LOG_NAME))
    logger.info(
        "Setting up %s (fast=%s library=%s skip_toolchain=%s dry_run=%s log=%s)",
        repo,
        flags.fast_install,
        flags.is_library,
        flags.skip_toolchain,
        cfg.dry_run,
        actual_log_path,
    )

    ctx = SetupContext(
        repo_dir=repo,
        flags=flags,
        cfg=cfg,
        env=dict(os.environ if environ is None else environ),
        descriptor=EnvDescriptor(generated_by=PROG),
    )

    result = run_pipeline(ctx=ctx, steps=build_steps())
    if result.ok:
        logger.info("Ran steps: %s", ", ".join(result.ran_steps))
    else:
        logger.error("Setup aborted; %s was not written", str(ctx.env_file))
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        flags = parse_flags(args)
    except UsageError as e:
        if e.message:
            print(e.message, file=sys.stderr)
            print(USAGE, file=sys.stderr)
        else:
            print(USAGE)
        return e.exit_code

    try:
        cfg = load_setup_config()
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code

    try:
        result = run(flags=flags, cfg=cfg)
    except KeyboardInterrupt:
        return 130

    if not result.ok:
        return result.exit_code

    print(NEXT_STEPS)
    return 0
