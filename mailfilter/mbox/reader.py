"""Iterate the messages of an MBOX archive."""

from __future__ import annotations

import logging
import mailbox
from collections.abc import Iterator
from pathlib import Path
from typing import NamedTuple

from mailfilter.exceptions import MailboxNotFoundError, MailboxReadError
from mailfilter.mbox.message import MailMessage

log = logging.getLogger(__name__)


class MailboxEntry(NamedTuple):
    """One archived message.

    ``raw`` is the message as stored in the archive, ``From `` line
    included and terminated by the blank separator line, so writing the
    ``raw`` bytes of several entries one after another yields a valid
    MBOX archive.
    """

    index: int
    raw: bytes
    message: MailMessage


def _with_separator(raw: bytes) -> bytes:
    # mailbox strips the blank line that separates a message from the next one
    if raw.endswith(b"\n\n"):
        return raw
    if raw.endswith(b"\n"):
        return raw + b"\n"
    return raw + b"\n\n"


def iter_messages(path: Path) -> Iterator[MailboxEntry]:
    """Yield every message of an MBOX archive in archive order.

    Args:
        path: Path to the MBOX file.

    Yields:
        MailboxEntry for each message.

    Raises:
        MailboxNotFoundError: If ``path`` is not a file.
        MailboxReadError: If the archive cannot be read.
    """
    if not path.is_file():
        raise MailboxNotFoundError(path)

    try:
        mbox = mailbox.mbox(path, factory=None, create=False)
        keys = mbox.keys()
    except (OSError, mailbox.Error) as e:
        raise MailboxReadError(path, str(e)) from e

    log.debug("Opened %s (%d messages)", path, len(keys))
    try:
        for index, key in enumerate(keys):
            try:
                raw = mbox.get_bytes(key, from_=True)
            except (OSError, KeyError) as e:
                raise MailboxReadError(path, str(e)) from e
            yield MailboxEntry(index=index, raw=_with_separator(raw), message=MailMessage(raw))
    finally:
        mbox.close()
