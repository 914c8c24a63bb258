"""Exception hierarchy for mailfilter."""

from __future__ import annotations

from pathlib import Path


class MailfilterError(Exception):
    """Base exception for all mailfilter errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all mailfilter errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(MailfilterError):
    """Configuration-related errors."""

    pass


class ConfigNotFoundError(ConfigError):
    """Configuration file not found (non-fatal, defaults used)."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}")


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Filter compilation errors
class FilterError(MailfilterError):
    """A filter expression could not be compiled.

    Raised only while compiling; evaluating a compiled filter never fails.
    """

    pass


class LexError(FilterError):
    """Malformed token, e.g. an unterminated pattern literal."""

    def __init__(self, position: int, message: str) -> None:
        self.position = position
        self.message = message
        super().__init__(f"{message} at position {position}")


class ParseError(FilterError):
    """The token stream violates the filter grammar."""

    def __init__(self, position: int, expected: tuple[str, ...], found: str) -> None:
        self.position = position
        self.expected = expected
        self.found = found
        super().__init__(
            f"Expected {' or '.join(expected)} at position {position}, found {found}"
        )


class PatternError(FilterError):
    """A pattern literal is not a valid regular expression."""

    def __init__(self, pattern: str, position: int, detail: str) -> None:
        self.pattern = pattern
        self.position = position
        self.detail = detail
        super().__init__(f"Invalid pattern /{pattern}/ at position {position}: {detail}")


# Mailbox Errors
class MailboxError(MailfilterError):
    """Mailbox archive errors."""

    pass


class MailboxNotFoundError(MailboxError):
    """Archive file doesn't exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Mailbox not found: {path}")


class MailboxReadError(MailboxError):
    """Archive exists but could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")
