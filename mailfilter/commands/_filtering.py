"""Filter compilation and archive scanning shared by count and extract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mailfilter.cli import EXIT_FILTER_ERROR, EXIT_MAILBOX_ERROR
from mailfilter.exceptions import FilterError, LexError, MailboxError, ParseError, PatternError
from mailfilter.filter import CompiledFilter, compile_filter
from mailfilter.mbox import MailboxEntry, iter_messages
from mailfilter.utils.output import debug, error, show_position

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@dataclass
class ScanStats:
    """Running totals of a scan."""

    total: int = 0
    matched: int = 0


def _error_position(exc: FilterError) -> int | None:
    if isinstance(exc, (LexError, ParseError, PatternError)):
        return exc.position
    return None


def compile_or_exit(filter_text: str) -> CompiledFilter:
    """Compile ``filter_text`` or report the compile error and exit.

    Nothing has been read from the archive at this point, so an invalid
    filter never produces partial output.
    """
    try:
        compiled = compile_filter(filter_text)
    except FilterError as e:
        error(f"Invalid filter: {e}")
        position = _error_position(e)
        if position is not None:
            show_position(filter_text, position)
        raise SystemExit(EXIT_FILTER_ERROR)

    debug(f"Compiled filter: {compiled.expression!r}")
    return compiled


def iter_matches(
    archive: Path, compiled: CompiledFilter, stats: ScanStats
) -> Iterator[MailboxEntry]:
    """Yield archive entries accepted by ``compiled``, updating ``stats``.

    Exits with EXIT_MAILBOX_ERROR if the archive cannot be read.
    """
    try:
        for entry in iter_messages(archive):
            stats.total += 1
            if compiled.matches(entry.message):
                stats.matched += 1
                yield entry
    except MailboxError as e:
        error(str(e))
        raise SystemExit(EXIT_MAILBOX_ERROR)
