from __future__ import annotations

import collections
import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..errors import ERROR_TAIL_LINES, CommandError

logger = logging.getLogger(__name__)
# Child process output, line by line.
output_logger = logging.getLogger("firesim_setup.output")

# Shell convention for "command not found / not executable".
NOT_RUNNABLE = 127


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def _stream(argv_list: list[str], *, cwd: str | None, env: Mapping[str, str]) -> tuple[int, str]:
    """Relay merged stdout/stderr to the log as it arrives; return (status, output tail)."""

    tail: collections.deque[str] = collections.deque(maxlen=ERROR_TAIL_LINES)
    with subprocess.Popen(
        argv_list,
        text=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        cwd=cwd,
        env=env,
    ) as p:
        assert p.stdout is not None
        for line in p.stdout:
            line = line.rstrip("\n")
            output_logger.info("%s", line)
            tail.append(line)
        returncode = p.wait()
    return returncode, "\n".join(tail)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    capture: bool = False,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - ``env`` is layered over the current process environment.
    - By default output is streamed to the console and the log while the
      command runs; ``capture`` collects stdout/stderr instead (logged at DEBUG).
    - dry_run logs but does not execute.
    - With ``check``, a non-zero exit raises CommandError carrying that status
      and the tail of the command's error output.
    """

    argv_list = list(argv)
    if cwd:
        logger.info("CMD %s (cwd=%s)", _fmt_argv(argv_list), cwd)
    else:
        logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    full_env = {**os.environ, **(env or {})}
    try:
        if capture or input_text is not None:
            p = subprocess.run(
                argv_list,
                input=input_text,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=cwd,
                env=full_env,
            )
            returncode, stdout, stderr = p.returncode, p.stdout or "", p.stderr or ""
            if stdout:
                logger.debug("STDOUT %s", stdout.strip())
            if stderr:
                logger.debug("STDERR %s", stderr.strip())
        else:
            returncode, stderr = _stream(argv_list, cwd=cwd, env=full_env)
            stdout = ""
    except OSError as e:
        logger.debug("Could not start %s: %s", argv_list[0], e)
        if check:
            raise CommandError(argv_list, NOT_RUNNABLE, str(e)) from e
        return CmdResult(argv=argv_list, returncode=NOT_RUNNABLE, stdout="", stderr=str(e))

    if check and returncode != 0:
        raise CommandError(argv_list, returncode, stderr)

    return CmdResult(argv=argv_list, returncode=returncode, stdout=stdout, stderr=stderr)
