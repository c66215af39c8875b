from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_NAME = "build-setup-log"


def configure_logging(
    log_path: str = DEFAULT_LOG_NAME,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Send log records to ``build-setup-log`` (or ``log_path``) and the console.

    Every record, including each line a child command prints, lands in the
    file at DEBUG. The console shows ``level`` and above, which is enough to
    follow the build-toolchains/libelf/libdwarf output live.

    When ``log_path`` is not writable (for example a read-only checkout) the
    file goes to ``build-setup-log`` in the current directory instead; the
    path returned is the one really written.
    """

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_firesim_setup_configured", False):
        return getattr(logger, "_firesim_setup_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError:
        fallback = str(Path.cwd() / DEFAULT_LOG_NAME)
        file_handler = logging.FileHandler(fallback)
        chosen_path = fallback
    file_handler.setFormatter(fmt)
    file_handler.setLevel(logging.DEBUG)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        console.setLevel(level)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_firesim_setup_configured", True)
    setattr(logger, "_firesim_setup_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
