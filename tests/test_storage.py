from datetime import date
from pathlib import Path

import pytest

from board import Board
from errors import StorageError
from models import Todo
from storage import clean_completed, dump_lines, load_board, save_board

COLUMNS = ["todo", "in-progress", "done"]


def test_missing_file_gives_empty_board(tmp_path: Path):
    board = load_board(tmp_path / "todo.txt", COLUMNS)
    assert board.titles() == COLUMNS
    assert board.all_todos() == []


def test_save_then_load(tmp_path: Path, clock):
    path = tmp_path / "nested" / "todo.txt"
    board = Board(columns=COLUMNS)
    board.add_todo(Todo.new("Buy milk +shop", clock=clock), "todo")
    board.add_todo(Todo.parse("(A) 2024-05-01 Write report due:2024-05-20 pages:3"), "in-progress")
    save_board(board, path)

    assert path.read_text(encoding="utf-8") == (
        "2024-05-10 Buy milk +shop col:todo\n"
        "(A) 2024-05-01 Write report due:2024-05-20 pages:3 col:in-progress\n"
    )
    assert not path.with_suffix(".txt.tmp").exists()

    loaded = load_board(path, COLUMNS)
    assert [str(t) for t in loaded.col("todo")] == ["2024-05-10 Buy milk +shop"]
    report = loaded.get_todo("Write report", "in-progress")
    assert report.get_meta("col") is None
    assert report.get_meta("pages") == "3"
    assert loaded.col("done").todos == []


def test_dump_does_not_touch_board(clock):
    board = Board(columns=["todo"])
    board.add_todo(Todo.new("a", clock=clock), "todo")
    assert dump_lines(board) == ["2024-05-10 a col:todo"]
    assert board.get_todo("a", "todo").get_meta("col") is None


def test_load_places_lines_by_column(tmp_path: Path):
    path = tmp_path / "todo.txt"
    path.write_text(
        "plain line without column\n"
        "\n"
        "x 2024-05-02 2024-05-01 shipped col:done\n"
        "idea col:someday\n",
        encoding="utf-8",
    )
    board = load_board(path, COLUMNS)
    assert board.titles() == COLUMNS + ["someday"]
    assert board.get_todo("plain line without column", "todo") is not None
    assert board.get_todo("shipped", "done").completed
    assert board.get_todo("idea", "someday") is not None


def test_load_reports_bad_lines(tmp_path: Path):
    path = tmp_path / "todo.txt"
    path.write_text("fine\n(a) bad priority\n", encoding="utf-8")
    with pytest.raises(StorageError) as exc:
        load_board(path, COLUMNS)
    assert exc.value.lineno == 2
    assert "todo.txt:2" in str(exc.value)


def test_load_keeps_unknown_due_values(tmp_path: Path):
    path = tmp_path / "todo.txt"
    path.write_text("Pay rent due:2nd col:todo\n", encoding="utf-8")
    board = load_board(path, COLUMNS)
    todo = board.get_todo("Pay rent", "todo")
    assert todo.get_meta("due") == "2nd"
    assert dump_lines(board) == ["Pay rent due:2nd col:todo"]


def test_clean_completed(clock):
    board = Board(columns=["done"])
    old = Todo.parse("x 2024-04-01 2024-03-01 old")
    recent = Todo.parse("x 2024-05-05 2024-03-01 recent")
    open_todo = Todo.parse("2024-01-01 still open")
    for todo in (old, recent, open_todo):
        board.add_todo(todo, "done")

    assert clean_completed(board, 0, clock) == 0
    assert clean_completed(board, 7, clock) == 1
    assert [t.title for t in board.col("done")] == ["recent", "still open"]
    assert recent.completion_date == date(2024, 5, 5)
