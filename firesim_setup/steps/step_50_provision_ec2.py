from __future__ import annotations

import logging

from ..context import SetupContext
from ..lib.command import run_cmd
from ..lib.env import PATHS
from ..lib.net import on_ec2
from ..lib.pkg import build_autotools_tarball, pip_install_requirements, yum_install_from_file

logger = logging.getLogger(__name__)


class ProvisionEc2Step:
    step_id = "50_provision_ec2"
    abort_on_failure = True

    def run(self, ctx: SetupContext) -> None:
        cfg = ctx.cfg
        if not on_ec2(
            cfg.metadata_url,
            timeout=cfg.metadata_timeout,
            tries=cfg.metadata_tries,
            env=ctx.env,
            dry_run=ctx.dry_run,
        ):
            logger.info("Instance metadata not reachable; skipping EC2 setup")
            return

        repo = ctx.repo_dir
        env = ctx.env
        dry_run = ctx.dry_run

        run_cmd(["make"], cwd=str(repo / PATHS.xdma_driver), env=env, dry_run=dry_run)

        # The symlink always points at the right FireMarshal by now.
        marshal_dir = ctx.marshal_dir
        pip_install_requirements(
            str(marshal_dir / "python-requirements.txt"), cwd=str(repo), env=env, dry_run=dry_run
        )
        yum_install_from_file(str(marshal_dir / "centos-requirements.txt"), env=env, dry_run=dry_run)

        build_autotools_tarball(
            url=cfg.e2fsprogs_url,
            name=f"e2fsprogs-{cfg.e2fsprogs_version}",
            work_dir=str(repo),
            env=env,
            dry_run=dry_run,
        )

        # qcow2 image support
        run_cmd(["./scripts/install-nbd-kmod.sh"], cwd=str(repo), env=env, dry_run=dry_run)

        # Building the aws libraries and pulling IP once here saves doing it on every worker.
        aws_fpga = str(repo / PATHS.aws_fpga)
        for script in ("./sdk_setup.sh", "./hdk_setup.sh"):
            run_cmd(["bash", "-c", f"source {script}"], cwd=aws_fpga, env=env, dry_run=dry_run)

        logger.info("EC2 setup complete")
