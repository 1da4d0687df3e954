from pathlib import Path

import pytest

from config import DEFAULT_COLUMNS, default_todo_path, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.todo_file == (Path.home() / ".todoboard" / "todo.txt").resolve()
    assert settings.columns == list(DEFAULT_COLUMNS)
    assert settings.alt_screen is True
    assert settings.log_level == "WARNING"
    assert settings.keep_days == 7


def test_env_overrides(tmp_path: Path):
    settings = load_settings({
        "TODOBOARD_FILE": str(tmp_path / "board.txt"),
        "TODOBOARD_COLUMNS": "inbox, next ,bad title,a:b,,done",
        "TODOBOARD_ALT_SCREEN": "off",
        "TODOBOARD_LOG_LEVEL": "debug",
        "TODOBOARD_KEEP_DAYS": "0",
    })
    assert settings.todo_file == (tmp_path / "board.txt").resolve()
    assert settings.columns == ["inbox", "next", "done"]
    assert settings.alt_screen is False
    assert settings.log_level == "DEBUG"
    assert settings.keep_days == 0


def test_default_path_reads_process_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("TODOBOARD_FILE", str(tmp_path / "x.txt"))
    assert default_todo_path() == (tmp_path / "x.txt").resolve()


def test_bad_keep_days():
    with pytest.raises(ValueError):
        load_settings({"TODOBOARD_KEEP_DAYS": "week"})
