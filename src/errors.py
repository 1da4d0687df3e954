"""Error types raised while decoding todo records and board files.

Only two parse failures are hard errors (bad date, bad priority); all
other odd content is absorbed as literal text or metadata.
"""
from __future__ import annotations
from typing import Optional


class InvalidPriorityError(ValueError):
    MISSING_PARENS = "missing_parens"
    INVALID_PRIORITY = "invalid_priority"

    _MESSAGES = {
        MISSING_PARENS: "Missing one or both parenthesis in todo priority",
        INVALID_PRIORITY: "Invalid priority for todo priority",
    }

    def __init__(self, kind: str, token: str = ""):
        self.kind = kind
        self.token = token
        super().__init__(f"{self._MESSAGES[kind]}: {token!r}")


class TodoParseError(ValueError):
    BAD_DATE = "bad_date"
    BAD_PRIORITY = "bad_priority"

    def __init__(self, kind: str, token: str, detail: Optional[str] = None):
        self.kind = kind
        self.token = token
        msg = f"{kind}: {token!r}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class TagContainsWhitespaceError(ValueError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tag contains whitespace: {name!r}")


class StorageError(Exception):
    """A board file could not be read back into todos."""

    def __init__(self, path: object, lineno: int, reason: str):
        self.path = path
        self.lineno = lineno
        super().__init__(f"{path}:{lineno}: {reason}")
