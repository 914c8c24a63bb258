"""AST data classes for compiled filter expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class MatchClause:
    """A single ``field operator value`` test.

    Operators:
        - ``=~``: pattern found anywhere in the field
        - ``!~``: pattern not found in the field
        - ``^~``: field starts with the literal
        - ``$=``: field ends with the literal
        - ``!=``: field differs from the literal
        - ``=``: field equals the literal

    ``field`` is stored lower-cased. ``value`` is a compiled pattern for
    the two regex operators and a plain string for the others.
    """

    field: str
    operator: str
    value: str | re.Pattern[str]


@dataclass(frozen=True)
class And:
    """Both sides must match; ``right`` is skipped when ``left`` fails."""

    left: Expression
    right: Expression


@dataclass(frozen=True)
class Or:
    """Either side must match; ``right`` is skipped when ``left`` matches."""

    left: Expression
    right: Expression


Expression = Union[MatchClause, And, Or]
