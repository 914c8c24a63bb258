"""Unit tests for MBOX archive iteration."""

from __future__ import annotations

from pathlib import Path

import pytest

from mailfilter.exceptions import MailboxNotFoundError
from mailfilter.mbox import MailboxEntry, MailMessage, iter_messages


class TestIterMessages:
    def test_yields_every_message_in_order(self, sample_mbox: Path) -> None:
        entries = list(iter_messages(sample_mbox))
        assert [e.index for e in entries] == [0, 1, 2, 3]
        assert [e.message["subject"] for e in entries] == [
            "thank you for the update",
            "RE: update",
            "Fwd: update",
            "Thank You",
        ]

    def test_entries(self, sample_mbox: Path) -> None:
        entry = next(iter_messages(sample_mbox))
        assert isinstance(entry, MailboxEntry)
        assert isinstance(entry.message, MailMessage)
        assert entry.message["from"] == "Alice <alice@example.com>"
        assert entry.message["body"] == "Thanks again, see attached tax form."

    def test_raw_is_verbatim(self, sample_mbox: Path, sample_raws: list[bytes]) -> None:
        for entry in iter_messages(sample_mbox):
            assert entry.raw == sample_raws[entry.index]
            assert entry.raw.startswith(b"From ")
            assert entry.raw.endswith(b"\n\n")

    def test_raw_entries_rebuild_archive(self, sample_mbox: Path) -> None:
        rebuilt = b"".join(entry.raw for entry in iter_messages(sample_mbox))
        assert rebuilt == sample_mbox.read_bytes()

    def test_last_message_without_blank_line(
        self, temp_dir: Path, sample_raws: list[bytes]
    ) -> None:
        path = temp_dir / "one.mbox"
        path.write_bytes(sample_raws[3].rstrip(b"\n") + b"\n")
        [entry] = list(iter_messages(path))
        assert entry.raw == sample_raws[3]
        assert entry.message["body"] == "AAA"

    def test_empty_archive(self, temp_dir: Path) -> None:
        path = temp_dir / "empty.mbox"
        path.write_bytes(b"")
        assert list(iter_messages(path)) == []

    def test_missing_archive(self, temp_dir: Path) -> None:
        with pytest.raises(MailboxNotFoundError) as exc_info:
            list(iter_messages(temp_dir / "nope.mbox"))
        assert exc_info.value.path == temp_dir / "nope.mbox"

    def test_directory_is_not_an_archive(self, temp_dir: Path) -> None:
        with pytest.raises(MailboxNotFoundError):
            list(iter_messages(temp_dir))
