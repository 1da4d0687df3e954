"""Board logic: named columns of todos, lookup/move by title, and rendering.

Todos are looked up by their plain title (description text with tags).
Moving a todo takes it out of the source column and appends a copy to the
target column; nothing changes when either column or the todo is missing.
"""
from __future__ import annotations
import logging
import shutil
from typing import Iterator, List, Mapping, Optional

from clock import Clock
from models import Todo
from theme import BOLD, FADE, PLAIN_STYLE, StyleScheme, paint, visible_len

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Todos"
MIN_COL_WIDTH = 18
SEP = " | "


class Column:
    """A list of todos under a title."""

    def __init__(self, title: str, todos: Optional[List[Todo]] = None):
        self.title: str = title
        self.todos: List[Todo] = list(todos or [])

    def add(self, todo: Todo) -> None:
        self.todos.append(todo)

    def get(self, title: str) -> Optional[Todo]:
        """First todo whose title matches, or None."""
        for todo in self.todos:
            if todo.title == title:
                return todo
        return None

    def pop(self, title: str) -> Optional[Todo]:
        """Remove and return the first todo whose title matches."""
        for i, todo in enumerate(self.todos):
            if todo.title == title:
                return self.todos.pop(i)
        return None

    def has_meta(self, key: str) -> Optional[Todo]:
        """First todo carrying metadata `key`."""
        for todo in self.todos:
            if todo.get_meta(key) is not None:
                return todo
        return None

    def get_meta(self, key: str, value: str) -> Optional[Todo]:
        """First todo carrying the pair `key:value`."""
        for todo in self.todos:
            if todo.get_meta(key) == value:
                return todo
        return None

    def due(self, clock: Optional[Clock] = None) -> bool:
        return any(t.due(clock) for t in self.todos)

    def __len__(self) -> int:
        return len(self.todos)

    def __iter__(self) -> Iterator[Todo]:
        return iter(self.todos)

    def __str__(self) -> str:
        lines = [f"| {self.title} |"]
        lines.extend(f"| {todo}" for todo in self.todos)
        return "\n".join(lines) + "\n"


class Board:
    """A titled table of columns."""

    def __init__(self, title: Optional[str] = None, columns: Optional[List[str]] = None):
        self.title: str = title or DEFAULT_TITLE
        self.columns: List[Column] = []
        for name in columns or []:
            self.add_col(name)

    # -------------------- columns --------------------
    def add_col(self, title: str) -> Column:
        """Add a column; an existing column with that title is returned as is."""
        existing = self.col(title)
        if existing is not None:
            return existing
        column = Column(title)
        self.columns.append(column)
        return column

    def col(self, title: str) -> Optional[Column]:
        for column in self.columns:
            if column.title == title:
                return column
        return None

    def titles(self) -> List[str]:
        return [c.title for c in self.columns]

    # -------------------- queries --------------------
    def all_todos(self) -> List[Todo]:
        return [todo for column in self.columns for todo in column.todos]

    def get_todo(self, title: str, col_title: str) -> Optional[Todo]:
        column = self.col(col_title)
        return column.get(title) if column else None

    def todo_at(self, col_title: str, number: int) -> Optional[Todo]:
        """1-based position lookup used by the CLI."""
        column = self.col(col_title)
        if column is None or number < 1 or number > len(column.todos):
            return None
        return column.todos[number - 1]

    def has_meta(self, col_title: str, key: str) -> Optional[Todo]:
        column = self.col(col_title)
        return column.has_meta(key) if column else None

    def get_meta(self, col_title: str, key: str, value: str) -> Optional[Todo]:
        column = self.col(col_title)
        return column.get_meta(key, value) if column else None

    def due(self, clock: Optional[Clock] = None) -> bool:
        """True if any column holds a todo that is due."""
        return any(c.due(clock) for c in self.columns)

    # -------------------- todo operations --------------------
    def add_todo(self, todo: Todo, col_title: str) -> bool:
        column = self.col(col_title)
        if column is None:
            logger.debug("add_todo: no column %r", col_title)
            return False
        column.add(todo)
        return True

    def move_todo(self, title: str, from_col: str, to_col: str) -> bool:
        source = self.col(from_col)
        target = self.col(to_col)
        if source is None or target is None:
            return False
        todo = source.pop(title)
        if todo is None:
            return False
        target.add(todo.copy())
        return True

    def remove_todo(self, title: str, col_title: str) -> Optional[Todo]:
        column = self.col(col_title)
        return column.pop(title) if column else None

    # -------------------- display --------------------
    def render(self, scheme: StyleScheme = PLAIN_STYLE, width: Optional[int] = None) -> List[str]:
        """Columns side by side, each todo wrapped to its column width."""
        if not self.columns:
            return [f"=== {self.title} ===", "(no columns)"]
        term_width = width or shutil.get_terminal_size((120, 30)).columns
        widths = self._compute_column_widths(term_width)
        wrapped = self._wrap_all_columns(widths, scheme)
        return self._layout(widths, wrapped, scheme)

    def display(self, scheme: StyleScheme = PLAIN_STYLE, width: Optional[int] = None) -> None:
        for line in self.render(scheme, width):
            print(line)

    def _compute_column_widths(self, term_width: int) -> List[int]:
        sep_total = len(SEP) * (len(self.columns) - 1)
        widths: List[int] = []
        for column in self.columns:
            longest = len(column.title)
            for i, todo in enumerate(column.todos, start=1):
                longest = max(longest, len(f"{i}. ") + len(str(todo)))
            widths.append(max(MIN_COL_WIDTH, longest))
        if sum(widths) + sep_total > term_width:
            target_space = max(term_width - sep_total, len(widths) * MIN_COL_WIDTH)
            while sum(widths) > target_space:
                widest = max(range(len(widths)), key=lambda i: widths[i])
                if widths[widest] <= MIN_COL_WIDTH:
                    break
                widths[widest] -= 1
        return widths

    def _wrap_all_columns(self, widths: List[int], scheme: StyleScheme) -> Mapping[int, List[str]]:
        empty_style = "" if scheme.is_plain() else FADE
        wrapped = {}
        for idx, column in enumerate(self.columns):
            if not column.todos:
                wrapped[idx] = [paint('(empty)', empty_style)]
                continue
            lines: List[str] = []
            for number, todo in enumerate(column.todos, start=1):
                lines.extend(self._wrap_todo(number, todo, widths[idx], scheme))
            wrapped[idx] = lines
        return wrapped

    @staticmethod
    def _wrap_todo(number: int, todo: Todo, col_width: int, scheme: StyleScheme) -> List[str]:
        prefix = f"{number}. "
        limit = max(1, col_width - len(prefix))
        lines: List[str] = []
        current: List[str] = []
        current_len = 0
        for word in todo.styled_words(scheme):
            wlen = visible_len(word)
            candidate = wlen if not current else current_len + 1 + wlen
            if current and candidate > limit:
                lines.append(" ".join(current))
                current, current_len = [word], wlen
            else:
                current.append(word)
                current_len = candidate
        lines.append(" ".join(current))
        number_style = "" if scheme.is_plain() else BOLD
        out = [paint(prefix.rstrip(), number_style) + " " + lines[0]]
        out.extend(" " * len(prefix) + line for line in lines[1:])
        return out

    def _layout(self, widths: List[int], wrapped: Mapping[int, List[str]], scheme: StyleScheme) -> List[str]:
        header_style = "" if scheme.is_plain() else BOLD
        rows = max(len(lines) for lines in wrapped.values())
        header_cells = []
        for idx, column in enumerate(self.columns):
            cell = paint(column.title, header_style)
            header_cells.append(cell + ' ' * max(0, widths[idx] - visible_len(cell)))
        out = [f"=== {self.title} ===", SEP.join(header_cells).rstrip(),
               SEP.join('-' * w for w in widths)]
        for r in range(rows):
            cells = []
            for idx in range(len(self.columns)):
                col_lines = wrapped[idx]
                line = col_lines[r] if r < len(col_lines) else ''
                cells.append(line + ' ' * max(0, widths[idx] - visible_len(line)))
            out.append(SEP.join(cells).rstrip())
        return out

    def __str__(self) -> str:
        parts = [f"=== {self.title} ==="]
        parts.extend(str(column) for column in self.columns)
        return "\n".join(parts)
