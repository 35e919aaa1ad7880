"""Git interface layer: adapter, status parsing, entry model."""

from igs.git.adapter import Git, GitError, get_repo_root
from igs.git.models import StatusCode, StatusEntry, classify
from igs.git.status_parser import parse_status

__all__ = [
    "Git",
    "GitError",
    "StatusCode",
    "StatusEntry",
    "classify",
    "get_repo_root",
    "parse_status",
]
