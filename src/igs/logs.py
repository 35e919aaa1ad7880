"""Logging setup.

stdout belongs to the interactive frame, so nothing is logged unless a log
file is requested.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_file: Optional[Path], *, debug: bool = False) -> Optional[logging.Handler]:
    """Attach a file handler to the ``igs`` logger. Returns the handler, if any."""
    if log_file is None:
        return None
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("igs")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    return handler
