"""Count the messages of an archive that match a filter."""

from __future__ import annotations

from pathlib import Path

import click

from mailfilter.cli import Context, pass_context
from mailfilter.commands._filtering import ScanStats, compile_or_exit, iter_matches
from mailfilter.utils.output import verbose


@click.command("count")
@click.argument("archive", type=click.Path(path_type=Path))
@click.argument("filter_text", metavar="FILTER", required=False, default="")
@pass_context
def cli(ctx: Context, archive: Path, filter_text: str) -> None:
    """Count how many messages match FILTER.

    ARCHIVE is an MBOX file. Without FILTER every message is counted.
    The count is printed on stdout.

    \b
    Examples:
      mailfilter count inbox.mbox 'subject=~/thank you/i'
      mailfilter count inbox.mbox 'subject!~/^re:/i and body=~/tax/'
    """
    compiled = compile_or_exit(filter_text)

    stats = ScanStats()
    for _ in iter_matches(archive, compiled, stats):
        pass

    click.echo(stats.matched)
    verbose(f"{stats.matched} of {stats.total} messages matched")
