"""The Todo record and its todo.txt line codec.

Line layout (every group optional, groups separated by one space):

    x (A) 2023-01-08 2023-01-07 Call +mom @phone due:2023-01-10 key:value

i.e. completion mark, priority, completion date, creation date,
description (text interleaved with +project / @context tags), deadline
and metadata. For every line the parser accepts in this canonical form,
str(Todo.parse(line)) == line.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Optional, Set, Tuple

from clock import Clock, resolve as resolve_clock
from deadline import DUE_KEY, NEVER, Deadline
from errors import InvalidPriorityError, TodoParseError
from priority import Priority
from tags import (
    CONTEXT,
    PROJECT,
    Metadata,
    Segment,
    Tag,
    join_segments,
    split_description,
    split_metadata_token,
    classify,
    tokens,
)
from theme import PLAIN_STYLE, StyleScheme, paint

logger = logging.getLogger(__name__)

COMPLETED_MARK = "x"
DATE_TOKEN_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MAX_LEADING_DATES = 2


def _iso(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


@dataclass
class Todo:
    """A single todo.

    `Todo()` is the empty record and has no creation date; `Todo.new(...)`
    stamps the creation date with today. `completion_date` is only set by
    complete(); setting `completed` directly leaves it alone.
    """
    description: List[Segment] = field(default_factory=list)
    completed: bool = False
    priority: Priority = Priority.NONE
    metadata: Metadata = field(default_factory=Metadata)
    deadline: Deadline = NEVER
    creation: Optional[date] = None
    completion_date: Optional[date] = None

    @classmethod
    def new(
        cls,
        title: str,
        deadline: Deadline = NEVER,
        priority: Priority = Priority.NONE,
        clock: Optional[Clock] = None,
    ) -> "Todo":
        return cls(
            description=split_description(title),
            priority=priority,
            deadline=deadline,
            creation=resolve_clock(clock).today(),
        )

    # -------------------- state --------------------
    @property
    def title(self) -> str:
        """Plain description text, tags included."""
        return join_segments(self.description)

    def due(self, clock: Optional[Clock] = None) -> bool:
        """True when on or past the deadline, unless already completed."""
        return not self.completed and self.deadline.due(clock)

    def complete(self, clock: Optional[Clock] = None) -> None:
        self.completed = True
        self.completion_date = resolve_clock(clock).today()

    def copy(self) -> "Todo":
        return replace(self, description=list(self.description), metadata=self.metadata.copy())

    # -------------------- metadata --------------------
    def get_meta(self, key: str) -> Optional[str]:
        return self.metadata.get(key)

    def set_meta(self, key: str, value: str, clock: Optional[Clock] = None) -> None:
        """Set a key:value pair; a `due` value replaces the deadline.

        A `due` value that is not a recognised deadline is stored as plain
        metadata and the deadline is cleared, as parse() would read it back.
        """
        if key != DUE_KEY:
            self.metadata.set(key, value)
            return
        deadline = Deadline.resolve(value, self.creation, clock)
        if deadline is None:
            self.deadline = NEVER
            self.metadata.set(key, value)
        else:
            self.deadline = deadline
            self.metadata.delete(key)

    def delete_meta(self, key: str) -> None:
        self.metadata.delete(key)

    # -------------------- tags --------------------
    def tags(self) -> Set[Tag]:
        return {seg for seg in self.description if isinstance(seg, Tag)}

    def has_tag(self, tag: Tag) -> bool:
        return tag in self.description

    def has_project_tag(self, name: str) -> bool:
        return self.has_tag(Tag(PROJECT, name))

    def has_context_tag(self, name: str) -> bool:
        return self.has_tag(Tag(CONTEXT, name))

    def add_tag(self, tag: Tag) -> None:
        if not self.has_tag(tag):
            self.description.append(tag)

    def remove_tag(self, tag: Tag) -> None:
        self.description = [seg for seg in self.description if seg != tag]

    # -------------------- parsing --------------------
    @classmethod
    def parse(cls, line: str, clock: Optional[Clock] = None) -> "Todo":
        """Build a Todo from one todo.txt line.

        Raises TodoParseError (BAD_PRIORITY) for a parenthesised token that
        is not a priority letter, and (BAD_DATE) for a date-shaped token
        that is not a calendar date or a malformed `due:<N>d` offset. All
        other content is kept as description text or metadata; a `due:`
        value that is not a recognised deadline stays in the metadata.
        """
        toks = tokens(line.rstrip("\r\n"))
        pos = 0
        todo = cls()

        if pos < len(toks) and toks[pos] == COMPLETED_MARK:
            todo.completed = True
            pos += 1

        if pos < len(toks):
            try:
                todo.priority = Priority.decode(toks[pos])
                pos += 1
            except InvalidPriorityError as e:
                if e.kind == InvalidPriorityError.INVALID_PRIORITY:
                    raise TodoParseError(TodoParseError.BAD_PRIORITY, toks[pos]) from e

        dates: List[date] = []
        while pos < len(toks) and len(dates) < MAX_LEADING_DATES and DATE_TOKEN_RE.match(toks[pos]):
            try:
                dates.append(date.fromisoformat(toks[pos]))
            except ValueError as e:
                raise TodoParseError(TodoParseError.BAD_DATE, toks[pos], str(e)) from e
            pos += 1
        if len(dates) == 1:
            todo.creation = dates[0]
        elif len(dates) == 2:
            todo.completion_date, todo.creation = dates

        for tok in toks[pos:]:
            pair = split_metadata_token(tok)
            if pair:
                todo.metadata.set(*pair)
            else:
                todo.description.append(classify(tok))

        due_value = todo.metadata.get(DUE_KEY)
        if due_value is not None:
            deadline = Deadline.resolve(due_value, todo.creation, clock)
            if deadline is None:
                logger.debug("keeping unrecognised due value %r as metadata", due_value)
            else:
                todo.deadline = deadline
                todo.metadata.delete(DUE_KEY)

        return todo

    from_str = parse

    # -------------------- formatting --------------------
    def _completion_text(self) -> str:
        # a completion date is only meaningful next to a creation date
        if self.completion_date and self.creation:
            return _iso(self.completion_date)
        return ""

    def _words(self) -> List[Tuple[str, str]]:
        """(text, style slot) per output token, in line order."""
        words: List[Tuple[str, str]] = []
        if self.completed:
            words.append((COMPLETED_MARK, "tick"))
        if self.priority.is_some():
            words.append((self.priority.encode(bare=True), "priority"))
        if self._completion_text():
            words.append((self._completion_text(), "completion"))
        if self.creation:
            words.append((_iso(self.creation), "creation"))
        for seg in self.description:
            if isinstance(seg, Tag):
                words.append((str(seg), "project" if seg.is_project else "context"))
            else:
                words.append((seg, "description"))
        if self.deadline.is_some():
            words.append((self.deadline.encode(), "deadline"))
        words.extend((f"{k}:{v}", "metadata") for k, v in self.metadata)
        return words

    def format(self) -> str:
        return " ".join(text for text, _ in self._words())

    def styled_words(self, scheme: StyleScheme = PLAIN_STYLE) -> List[str]:
        """Output tokens, each painted on its own so they can be wrapped freely."""
        scheme = scheme.for_todo(self.completed)
        if scheme.faded:
            return [paint(text, scheme.faded) for text, _ in self._words()]
        return [paint(text, getattr(scheme, slot)) for text, slot in self._words()]

    def styled(self, scheme: StyleScheme = PLAIN_STYLE) -> str:
        """Format with ANSI styles; the plain scheme gives exactly format()."""
        return " ".join(self.styled_words(scheme))

    def __str__(self) -> str:
        return self.format()
