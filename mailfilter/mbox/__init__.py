"""MBOX archive access."""

from mailfilter.mbox.message import MailMessage
from mailfilter.mbox.reader import MailboxEntry, iter_messages

__all__ = [
    "MailMessage",
    "MailboxEntry",
    "iter_messages",
]
