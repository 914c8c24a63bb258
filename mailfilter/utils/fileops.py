"""File helpers for writing extracted messages."""

from __future__ import annotations

import re
from pathlib import Path

from mailfilter.config import DEFAULT_FILENAME_MAX_LENGTH

# Anything that is not an ASCII letter or digit collapses to one "_"
_UNSAFE_RUN = re.compile(r"[^A-Za-z0-9]+")


def secure_mkdir(path: Path) -> None:
    """Create directory with 0o700 permissions (owner-only access).

    If the directory already exists, its permissions are tightened to 0o700.
    Parent directories are created as needed.
    """
    path.mkdir(parents=True, exist_ok=True)
    path.chmod(0o700)


def envelope_filename(name: str, max_length: int = DEFAULT_FILENAME_MAX_LENGTH) -> str:
    """Turn a free-form label such as ``<date>-<subject>`` into a file name stem.

    - Replaces each run of non-alphanumeric characters with ``_``
    - Strips trailing ``_``
    - Truncates to ``max_length`` characters
    """
    sanitized = _UNSAFE_RUN.sub("_", name).rstrip("_")
    if not sanitized and name:
        sanitized = "_"
    return sanitized[:max_length]


def unique_path(directory: Path, stem: str, suffix: str) -> Path:
    """Return ``directory/stem+suffix``, adding ``-1``, ``-2``... if it exists."""
    candidate = directory / f"{stem}{suffix}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem}-{counter}{suffix}"
        counter += 1
    return candidate
