"""Todo priority: NONE or a letter rank A..Z (A is most urgent).

Members compare in declaration order (NONE < A < B < ... < Z). Text form
is "(X)"; NONE has no text form.
"""
from __future__ import annotations
from enum import Enum
from string import ascii_uppercase

from errors import InvalidPriorityError


class Priority(Enum):
    NONE = 0
    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7
    H = 8
    I = 9  # noqa: E741
    J = 10
    K = 11
    L = 12
    M = 13
    N = 14
    O = 15  # noqa: E741
    P = 16
    Q = 17
    R = 18
    S = 19
    T = 20
    U = 21
    V = 22
    W = 23
    X = 24
    Y = 25
    Z = 26

    def __lt__(self, other: "Priority") -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: "Priority") -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: "Priority") -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: "Priority") -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.value >= other.value

    def is_some(self) -> bool:
        """Convenience for `!= Priority.NONE`."""
        return self is not Priority.NONE

    def is_none(self) -> bool:
        return not self.is_some()

    def encode(self, bare: bool = False) -> str:
        """Text form: "(X) " with a trailing space, or "(X)" when bare."""
        if self is Priority.NONE:
            return ""
        return f"({self.name})" if bare else f"({self.name}) "

    def __str__(self) -> str:
        return self.encode(bare=True)

    @classmethod
    def decode(cls, token: str) -> "Priority":
        """Strict decode of "(X)".

        Raises InvalidPriorityError with kind MISSING_PARENS when the token
        is not wrapped in parentheses, INVALID_PRIORITY when the enclosed
        content is not a single letter A..Z.
        """
        if not (token.startswith("(") and token.endswith(")")) or len(token) < 2:
            raise InvalidPriorityError(InvalidPriorityError.MISSING_PARENS, token)
        inner = token[1:-1]
        if len(inner) != 1 or inner not in ascii_uppercase:
            raise InvalidPriorityError(InvalidPriorityError.INVALID_PRIORITY, token)
        return cls[inner]

    def increment(self) -> "Priority":
        """One step toward A. A and NONE stay put."""
        if self.value <= Priority.A.value:
            return self
        return Priority(self.value - 1)

    def decrement(self) -> "Priority":
        """One step away from A; Z falls back to NONE."""
        if self is Priority.NONE:
            return self
        if self is Priority.Z:
            return Priority.NONE
        return Priority(self.value + 1)
