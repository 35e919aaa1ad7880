"""igs: stage and unstage git changes from an interactive status list."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
