"""Read-only field view of a parsed email message."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from email import message_from_bytes, policy
from email.errors import HeaderParseError
from email.message import EmailMessage

log = logging.getLogger(__name__)

# Fields every message exposes, even when the header is missing
STANDARD_FIELDS: tuple[str, ...] = ("subject", "from", "to", "date")

BODY_FIELD = "body"

# Raised by the email package's structured header parser on malformed input
MALFORMED_HEADER_ERRORS: tuple[type[Exception], ...] = (
    HeaderParseError,
    IndexError,
    ValueError,
    TypeError,
    AttributeError,
)


def _decode_payload(part: EmailMessage) -> str:
    """Decode a text part, falling back to a lossy decode on bad charsets."""
    try:
        return part.get_content()
    except (LookupError, UnicodeDecodeError) as e:
        log.warning("Could not decode %s body (%s), using lossy decode", part.get_content_type(), e)
        payload = part.get_payload(decode=True) or b""
        return payload.decode("utf-8", errors="replace")


class MailMessage(Mapping[str, str]):
    """Message fields keyed by lower-cased header name, plus ``body``.

    Headers are read when the message is constructed. A header the email
    package cannot parse keeps its raw, undecoded value. The ``text/plain``
    body is only decoded the first time ``body`` is looked up; trailing
    line breaks are dropped so ``body="text"`` can match a one-line body.
    """

    def __init__(self, raw: bytes) -> None:
        self._message: EmailMessage = message_from_bytes(raw, policy=policy.default)
        self._headers: dict[str, str] = dict.fromkeys(STANDARD_FIELDS, "")
        for name in dict.fromkeys(key.lower() for key in self._message.keys()):
            if name == BODY_FIELD:
                continue
            self._headers[name] = self._header_value(name)
        self._body: str | None = None

    def _header_value(self, name: str) -> str:
        try:
            values = [str(value) for value in self._message.get_all(name, [])]
        except MALFORMED_HEADER_ERRORS as e:
            log.warning("Malformed %s header (%r), using raw value", name, e)
            values = [value for key, value in self._message.raw_items() if key.lower() == name]
        return "\n".join(values)

    @property
    def body(self) -> str:
        if self._body is None:
            try:
                part = self._message.get_body(preferencelist=("plain",))
            except MALFORMED_HEADER_ERRORS as e:
                log.warning("Malformed MIME structure (%r), treating body as empty", e)
                part = None
            text = _decode_payload(part) if part is not None else ""
            self._body = text.rstrip("\r\n")
        return self._body

    def __getitem__(self, key: str) -> str:
        if key == BODY_FIELD:
            return self.body
        return self._headers[key]

    def __iter__(self) -> Iterator[str]:
        yield from self._headers
        yield BODY_FIELD

    def __len__(self) -> int:
        return len(self._headers) + 1

    def __repr__(self) -> str:
        return f"MailMessage(subject={self._headers['subject']!r}, from={self._headers['from']!r})"
