"""
Parse errors raised by the script parser.

Every error is fatal to the parse: the first malformed line aborts it.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional


class ParseErrorKind(Enum):
    """What went wrong while parsing a script."""
    DANGLING_CONDITION_BEFORE_NODE = auto()
    DANGLING_CONDITION_AT_EOF = auto()
    MISSING_NODE_NAME = auto()
    CONDITION_OUTSIDE_NODE = auto()
    CONSECUTIVE_CONDITIONS = auto()
    CONDITION_FOLLOWED_BY_NON_CHOICE = auto()
    INVALID_META_OR_ACTION_LINE = auto()
    INVALID_CHOICE_FORMAT = auto()
    DUAL_CONDITION_CONFLICT = auto()
    CONTENT_OUTSIDE_NODE = auto()


class ScriptParseError(Exception):
    """
    Raised when a script cannot be parsed.

    Attributes:
        kind: The ParseErrorKind of the failure
        message: Human-readable description
        line: 1-based line number of the offending line, or None for
            errors detected at end of input
    """

    def __init__(self, kind: ParseErrorKind, message: str, line: Optional[int] = None):
        self.kind = kind
        self.message = message
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"Error on line {self.line}: {self.message}"

    def __repr__(self) -> str:
        return f"ScriptParseError({self.kind.name}, {self.message!r}, line={self.line})"
