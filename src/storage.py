"""Persistence helpers (load/save/cleanup) for the board.

The board file is plain todo.txt: one todo per line. Column membership
travels as an ordinary `col:<title>` metadata pair, written on save and
stripped from the in-memory todo on load. Lines without it land in the
first column.
"""
from __future__ import annotations
import logging
import os
from datetime import timedelta
from pathlib import Path
from typing import List, Optional, Sequence

from board import Board
from clock import Clock, resolve as resolve_clock
from errors import StorageError, TodoParseError
from models import Todo

logger = logging.getLogger(__name__)

COLUMN_KEY = "col"


def load_board(path: Path, columns: Sequence[str], clock: Optional[Clock] = None) -> Board:
    """Read a board file; a missing file gives an empty board with `columns`."""
    board = Board(columns=list(columns))
    if not path.exists():
        logger.debug("no board file at %s, starting empty", path)
        return board
    text = path.read_text(encoding="utf-8")
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            todo = Todo.parse(line, clock)
        except TodoParseError as e:
            raise StorageError(path, lineno, str(e)) from e
        col_title = todo.get_meta(COLUMN_KEY)
        todo.delete_meta(COLUMN_KEY)
        if col_title is None:
            if not board.columns:
                board.add_col(columns[0] if columns else "todo")
            col_title = board.columns[0].title
        board.add_col(col_title).add(todo)
    logger.debug("loaded %d todos from %s", len(board.all_todos()), path)
    return board


def dump_lines(board: Board) -> List[str]:
    lines: List[str] = []
    for column in board.columns:
        for todo in column.todos:
            record = todo.copy()
            record.set_meta(COLUMN_KEY, column.title)
            lines.append(str(record))
    return lines


def save_board(board: Board, path: Path) -> None:
    """Persist the board atomically (temp file + rename)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = dump_lines(board)
    payload = "\n".join(lines) + ("\n" if lines else "")
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(payload, encoding="utf-8")
    os.replace(tmp_path, path)
    logger.debug("saved %d todos to %s", len(lines), path)


def clean_completed(board: Board, keep_days: int, clock: Optional[Clock] = None) -> int:
    """Drop completed todos whose completion date is more than `keep_days` old.

    keep_days <= 0 disables cleanup. Returns the number of todos removed.
    """
    if keep_days <= 0:
        return 0
    today = resolve_clock(clock).today()
    removed = 0
    for column in board.columns:
        kept = [t for t in column.todos if not _is_old(t, today, keep_days)]
        removed += len(column.todos) - len(kept)
        column.todos = kept
    if removed:
        logger.info("removed %d completed todos older than %d days", removed, keep_days)
    return removed


def _is_old(todo: Todo, today, keep_days: int) -> bool:
    if not todo.completed or todo.completion_date is None:
        return False
    return (today - todo.completion_date) > timedelta(days=keep_days)
