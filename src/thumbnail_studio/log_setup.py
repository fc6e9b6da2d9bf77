"""Centralised logging configuration.

Call configure() once at startup from the CLI. All modules then use
logging.getLogger(__name__) normally.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

_CONSOLE_FMT = "%(asctime)s  %(levelname)-7s  %(name)s: %(message)s"
_FILE_FMT = "%(asctime)s  %(levelname)-7s  %(name)-20s  %(filename)s:%(lineno)d: %(message)s"
_DATE_FMT = "%H:%M:%S"


def configure(level: str | None = None, log_file: Path | str | None = None) -> None:
    """Set up console (and optional rotating file) handlers. Safe to call multiple times."""

    root = logging.getLogger()
    if root.handlers:
        return

    level = level or os.environ.get("THUMBSTUDIO_LOG_LEVEL", "WARNING")
    root.setLevel(logging.DEBUG)  # handlers apply their own levels

    ch = logging.StreamHandler()
    ch.setLevel(getattr(logging, level.upper(), logging.WARNING))
    ch.setFormatter(logging.Formatter(_CONSOLE_FMT, datefmt=_DATE_FMT))
    root.addHandler(ch)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_FMT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)

    for noisy in ("urllib3", "httpx", "httpcore", "google_genai", "PIL"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
