from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .errors import UsageError

PROG = "firesim-build-setup"

USAGE = f"""\
usage: {PROG} [ fast | --fast] [--skip-toolchain] [--library]
   fast: if set, pulls in a pre-compiled RISC-V toolchain for an EC2 manager instance
   skip-toolchain: if set, skips RISC-V toolchain handling (cloning or building).
                   The user must define $RISCV in their env to provide their own toolchain.
   library: if set, initializes submodules assuming FireSim is being used
            as a library submodule. Implies --skip-toolchain"""

HELP_TOKENS = {"-h", "-H", "--help"}

# Exit statuses for the flag parser.
EXIT_HELP = 0
EXIT_BAD_OPTION = 1
EXIT_BAD_ARGUMENT = 2
EXIT_HELP_FIRST = 3


@dataclass(frozen=True)
class RunFlags:
    fast_install: bool = False
    is_library: bool = False
    skip_toolchain: bool = False


def parse_flags(argv: Sequence[str]) -> RunFlags:
    """Parse the command line in order; the first offending token decides the status.

    Raises UsageError for help requests (message None) and for bad input.
    """

    args = list(argv)
    if args and args[0] in HELP_TOKENS:
        raise UsageError(None, exit_code=EXIT_HELP_FIRST)

    fast_install = False
    is_library = False
    skip_toolchain = False

    for arg in args:
        if arg in {"fast", "--fast"}:
            fast_install = True
        elif arg == "--library":
            is_library = True
            skip_toolchain = True
        elif arg == "--skip-toolchain":
            skip_toolchain = True
        elif arg in HELP_TOKENS:
            raise UsageError(None, exit_code=EXIT_HELP)
        elif arg.startswith("--"):
            raise UsageError(f"ERROR: bad option {arg}", exit_code=EXIT_BAD_OPTION)
        else:
            raise UsageError(f"ERROR: bad argument {arg}", exit_code=EXIT_BAD_ARGUMENT)

    return RunFlags(fast_install=fast_install, is_library=is_library, skip_toolchain=skip_toolchain)
