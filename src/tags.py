"""Inline tags and key:value metadata found in todo text.

Tokens are split on single spaces only. A token is:
    key:value  - metadata (exactly one ':' and both sides non-empty)
    +name      - project tag
    @name      - context tag
    other      - literal text
Sigils only count at the start of a token, so "3+4" and "jk@lm" stay literal.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple, Union

from errors import TagContainsWhitespaceError

PROJECT = "project"
CONTEXT = "context"

_SIGILS = {PROJECT: "+", CONTEXT: "@"}


@dataclass(frozen=True)
class Tag:
    """A +project or @context marker. Build with Tag.project / Tag.context."""
    kind: str
    name: str

    @classmethod
    def project(cls, name: str) -> "Tag":
        return cls._checked(PROJECT, name)

    @classmethod
    def context(cls, name: str) -> "Tag":
        return cls._checked(CONTEXT, name)

    @classmethod
    def _checked(cls, kind: str, name: str) -> "Tag":
        if any(ch.isspace() for ch in name):
            raise TagContainsWhitespaceError(name)
        return cls(kind, name)

    @property
    def is_project(self) -> bool:
        return self.kind == PROJECT

    @property
    def is_context(self) -> bool:
        return self.kind == CONTEXT

    def __str__(self) -> str:
        return f"{_SIGILS[self.kind]}{self.name}"


Segment = Union[str, Tag]


class Metadata:
    """Ordered key:value pairs; keys are unique and keep their first position."""

    def __init__(self, pairs: Optional[List[Tuple[str, str]]] = None):
        self._pairs: List[Tuple[str, str]] = []
        for key, value in pairs or []:
            self.set(key, value)

    def get(self, key: str) -> Optional[str]:
        for k, v in self._pairs:
            if k == key:
                return v
        return None

    def set(self, key: str, value: str) -> None:
        for i, (k, _) in enumerate(self._pairs):
            if k == key:
                self._pairs[i] = (key, value)
                return
        self._pairs.append((key, value))

    def delete(self, key: str) -> None:
        self._pairs = [(k, v) for k, v in self._pairs if k != key]

    def copy(self) -> "Metadata":
        return Metadata(list(self._pairs))

    def encode(self) -> str:
        return " ".join(f"{k}:{v}" for k, v in self._pairs)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._pairs)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._pairs))

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Metadata):
            return NotImplemented
        return self._pairs == other._pairs

    def __str__(self) -> str:
        return self.encode()

    def __repr__(self) -> str:
        return f"Metadata({self._pairs!r})"


# -------------------- token scanning --------------------
def tokens(text: str) -> List[str]:
    """Space-delimited tokens, dropping empty and whitespace-only ones."""
    return [tok for tok in text.split(" ") if tok and not tok.isspace()]


def split_metadata_token(token: str) -> Optional[Tuple[str, str]]:
    if token.count(":") != 1:
        return None
    key, value = token.split(":")
    if not key or not value:
        return None
    return key, value


def is_metadata_token(token: str) -> bool:
    return split_metadata_token(token) is not None


def classify(token: str) -> Segment:
    """Tag for +name / @name tokens, the token itself otherwise.

    Tokens still holding a tab or newline stay literal text.
    """
    if len(token) < 2 or any(ch.isspace() for ch in token):
        return token
    if token[0] == "+":
        return Tag(PROJECT, token[1:])
    if token[0] == "@":
        return Tag(CONTEXT, token[1:])
    return token


def split_description(text: str) -> List[Segment]:
    return [classify(tok) for tok in tokens(text)]


def join_segments(segments: List[Segment]) -> str:
    return " ".join(str(seg) for seg in segments)


def scan_tags(text: str) -> Set[Tag]:
    return {seg for seg in split_description(text) if isinstance(seg, Tag)}


def scan_metadata(text: str) -> Metadata:
    meta = Metadata()
    for tok in tokens(text):
        pair = split_metadata_token(tok)
        if pair:
            meta.set(*pair)
    return meta
