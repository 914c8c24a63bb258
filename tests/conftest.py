"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


# Messages of the sample archive, each ending with a newline. In the file
# every message is followed by one blank separator line.
SAMPLE_MESSAGES: list[str] = [
    """From alice@example.com Mon Jun 01 10:00:00 2020
From: Alice <alice@example.com>
To: bob@example.org
Subject: thank you for the update
Date: Mon, 01 Jun 2020 10:00:00 +0000
Message-ID: <1@example.com>

Thanks again, see attached tax form.
""",
    """From carol@example.com Tue Jun 02 11:00:00 2020
From: Carol <carol@example.com>
To: bob@example.org
Subject: RE: update
Date: Tue, 02 Jun 2020 11:00:00 +0000
Message-ID: <2@example.com>

Reply about the tax return.
""",
    """From dave@example.net Wed Jun 03 12:00:00 2020
From: dave@example.net
To: alice@example.com
Subject: Fwd: update
Date: Wed, 03 Jun 2020 12:00:00 +0000
Message-ID: <3@example.net>

see attached tax form
""",
    """From erin@example.com Thu Jun 04 13:00:00 2020
From: Erin <erin@example.com>
To: bob@example.org
Subject: Thank You
Date: Thu, 04 Jun 2020 13:00:00 +0000
Message-ID: <4@example.com>

AAA
""",
]


def sample_raw(index: int) -> bytes:
    """Verbatim bytes of one sample message, separator line included."""
    return (SAMPLE_MESSAGES[index] + "\n").encode()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[display]
colored_output = false

[extract]
directory = "/tmp/mailfilter-extract"
filename_max_length = 40
""")
    return config_path


@pytest.fixture
def missing_config(temp_dir: Path) -> Path:
    """A config path that does not exist, so defaults are used."""
    return temp_dir / "no-such-config.toml"


@pytest.fixture
def sample_raws() -> list[bytes]:
    """Verbatim bytes of each sample message, in archive order."""
    return [sample_raw(i) for i in range(len(SAMPLE_MESSAGES))]


@pytest.fixture
def sample_mbox(temp_dir: Path, sample_raws: list[bytes]) -> Path:
    """Write the four-message sample archive."""
    path = temp_dir / "sample.mbox"
    path.write_bytes(b"".join(sample_raws))
    return path
