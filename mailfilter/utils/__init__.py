"""Utility modules for mailfilter."""

from mailfilter.utils.fileops import envelope_filename, secure_mkdir, unique_path
from mailfilter.utils.output import (
    console,
    error,
    info,
    success,
    warning,
)

__all__ = [
    "console",
    "envelope_filename",
    "error",
    "info",
    "secure_mkdir",
    "success",
    "unique_path",
    "warning",
]
