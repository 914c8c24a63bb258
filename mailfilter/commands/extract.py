"""Extract the messages of an archive that match a filter."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mailfilter.cli import EXIT_MAILBOX_ERROR, Context, pass_context
from mailfilter.commands._filtering import ScanStats, compile_or_exit, iter_matches
from mailfilter.config import DEFAULT_FILENAME_MAX_LENGTH
from mailfilter.utils.fileops import envelope_filename, secure_mkdir, unique_path
from mailfilter.utils.output import error, is_verbose, print_path, status

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mailfilter.mbox import MailboxEntry

# Each split file is a one-message MBOX archive
SPLIT_SUFFIX = ".mbox"


def split_stem(entry: MailboxEntry, max_length: int = DEFAULT_FILENAME_MAX_LENGTH) -> str:
    """Build the file name stem ``<date>-<subject>`` for one message."""
    stem = envelope_filename(f"{entry.message['date']}-{entry.message['subject']}", max_length)
    return stem or f"message-{entry.index + 1}"


def _write_split(entries: Iterable[MailboxEntry], directory: Path, max_length: int) -> None:
    """Write each entry to its own file in ``directory``."""
    if not directory.exists():
        secure_mkdir(directory)
    for entry in entries:
        path = unique_path(directory, split_stem(entry, max_length), SPLIT_SUFFIX)
        path.write_bytes(entry.raw)
        if is_verbose():
            print_path(str(path), prefix="Saved")


@click.command("extract")
@click.argument("archive", type=click.Path(path_type=Path))
@click.argument("filter_text", metavar="FILTER", required=False, default="")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, allow_dash=True),
    default="-",
    show_default=True,
    help="Write matching messages to this file ('-' for stdout)",
)
@click.option(
    "--split",
    "-s",
    is_flag=True,
    default=False,
    help="Write each matching message to its own file instead",
)
@click.option(
    "--directory",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Target directory for --split (default: [extract] directory from config, "
    "else the current directory)",
)
@pass_context
def cli(
    ctx: Context,
    archive: Path,
    filter_text: str,
    output: str,
    split: bool,
    directory: Path | None,
) -> None:
    """Extract the messages that match FILTER.

    ARCHIVE is an MBOX file. Without FILTER every message is extracted.
    Matching messages are written verbatim, in archive order, as a new
    MBOX stream. With --split each message is saved as
    <date>-<subject>.mbox instead.

    \b
    Examples:
      mailfilter extract inbox.mbox 'from$=@example.com' > example.mbox
      mailfilter extract inbox.mbox 'subject=~/invoice/i' -o invoices.mbox
      mailfilter extract inbox.mbox 'to="me@example.com"' --split -d ./mails
    """
    # Compile before touching the archive or the output
    compiled = compile_or_exit(filter_text)

    stats = ScanStats()
    matches = iter_matches(archive, compiled, stats)

    config = ctx.config
    max_length = config.filename_max_length if config else DEFAULT_FILENAME_MAX_LENGTH

    try:
        if split:
            if directory is None:
                directory = (config.extract_dir if config else None) or Path.cwd()
            _write_split(matches, directory, max_length)
        else:
            with click.open_file(output, "wb") as stream:
                for entry in matches:
                    stream.write(entry.raw)
    except OSError as e:
        error(f"Failed to write messages: {e}")
        raise SystemExit(EXIT_MAILBOX_ERROR)

    status(f"Extracted {stats.matched} of {stats.total} messages")
