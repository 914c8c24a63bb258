"""Rich console output helpers for mailfilter."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# Module-level verbosity flags (set by cli.py after argument parsing)
_verbose_enabled: bool = False
_debug_enabled: bool = False
_quiet_enabled: bool = False

# Custom theme for mailfilter
THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "path": "blue underline",
        "filter": "magenta",
    }
)

# Global console instances. stdout may carry extracted messages, so
# everything except command results goes to stderr.
console = Console(theme=THEME, stderr=False)
error_console = Console(theme=THEME, stderr=True)


def set_verbosity(*, verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    """Configure module-level verbosity flags.

    Called from the CLI entry point after argument parsing.
    """
    global _verbose_enabled, _debug_enabled, _quiet_enabled
    _verbose_enabled = verbose or debug  # debug implies verbose
    _debug_enabled = debug
    _quiet_enabled = quiet and not _verbose_enabled


def is_verbose() -> bool:
    """Return whether verbose mode is enabled."""
    return _verbose_enabled


def set_color(enabled: bool) -> None:
    """Enable or disable color on both console instances."""
    console.no_color = not enabled
    error_console.no_color = not enabled


def info(message: str) -> None:
    """Print an info message."""
    if not _quiet_enabled:
        console.print(f"[info]{escape(message)}[/info]")


def status(message: str) -> None:
    """Print a progress or summary line to stderr."""
    if not _quiet_enabled:
        error_console.print(f"[info]{escape(message)}[/info]")


def warning(message: str) -> None:
    """Print a warning message to stderr."""
    error_console.print(f"[warning]Warning:[/warning] {escape(message)}")


def error(message: str, hint: str | None = None) -> None:
    """Print an error message to stderr.

    Args:
        message: The error message.
        hint: Optional hint for resolution.
    """
    error_console.print(f"[error]Error:[/error] {escape(message)}", highlight=False)
    if hint:
        error_console.print(f"  [info]Hint:[/info] {escape(hint)}")


def show_position(text: str, position: int) -> None:
    """Print ``text`` to stderr with a caret under ``position``."""
    error_console.print(f"  {escape(text)}", highlight=False)
    error_console.print(f"  {' ' * position}[error]^[/error]")


def success(message: str) -> None:
    """Print a success message."""
    if not _quiet_enabled:
        console.print(f"[success]{escape(message)}[/success]")


def verbose(message: str) -> None:
    """Print a message to stderr only when verbose mode is enabled."""
    if _verbose_enabled:
        error_console.print(f"[info]{escape(message)}[/info]")


def debug(message: str) -> None:
    """Print a debug message only when debug mode is enabled."""
    if _debug_enabled:
        error_console.print(f"[warning]\\[DEBUG][/warning] {escape(message)}")


def print_path(path: str, prefix: str = "") -> None:
    """Print a path with styling to stderr.

    Args:
        path: File or directory path.
        prefix: Optional prefix.
    """
    if prefix:
        error_console.print(f"{prefix} [path]{escape(path)}[/path]")
    else:
        error_console.print(f"[path]{escape(path)}[/path]")
