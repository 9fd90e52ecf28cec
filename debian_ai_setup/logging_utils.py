from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "debian-ai-setup.log"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _open_log_file(log_path: str) -> Tuple[Optional[logging.Handler], Optional[str]]:
    """Open the requested log file, else ./debian-ai-setup.log, else nothing."""

    for candidate in (log_path, str(Path.cwd() / FALLBACK_LOG_NAME)):
        try:
            Path(os.path.dirname(candidate) or ".").mkdir(parents=True, exist_ok=True)
            return logging.FileHandler(candidate, encoding="utf-8"), candidate
        except OSError:
            continue
    return None, None


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Optional[str]:
    """Configure logging.

    The log file keeps DEBUG records, so the captured stdout/stderr of every
    apt, dpkg and curl call ends up there; the console shows `level` and up.

    Notes:
    - Without root, writing to /var/log is usually not permitted. The
      requested path is tried first, then ./debian-ai-setup.log. If neither
      can be opened (read-only cwd), the run continues with console output
      only.

    Returns the log file actually in use (None when console-only). The path
    is stored in each run report entry.
    """

    root = logging.getLogger()

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(root, "_debian_ai_setup_configured", False):
        return getattr(root, "_debian_ai_setup_log_path", None)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(logging.DEBUG)

    file_handler, chosen_path = _open_log_file(log_path)
    if file_handler is not None:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(fmt)
        root.addHandler(console)

    setattr(root, "_debian_ai_setup_configured", True)
    setattr(root, "_debian_ai_setup_log_path", chosen_path)

    log = logging.getLogger(__name__)
    if chosen_path is None:
        log.warning("Could not open %s or a local fallback; logging to console only", log_path)
    else:
        log.info("Logging initialized (requested=%s, actual=%s)", log_path, chosen_path)
    return chosen_path
