"""Debug logging to a file, since the terminal belongs to the UI."""

from __future__ import annotations

import logging
from pathlib import Path

from indastreet.config import LOG_LEVEL, LOG_PATH

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def init_logging(path: str | None = None, level: str | int | None = None) -> None:
    """
    Configure the ``indastreet`` logger for the current process.

    Records are appended to ``path`` (``LOG_PATH`` by default). Calling this
    again replaces the previous handlers.
    """
    log_file = Path(path or LOG_PATH)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger("indastreet")
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.addHandler(handler)
    root.setLevel(level or LOG_LEVEL)
    root.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``indastreet`` namespace."""
    if not name:
        return logging.getLogger("indastreet")
    if name == "indastreet" or name.startswith("indastreet."):
        return logging.getLogger(name)
    return logging.getLogger(f"indastreet.{name}")
