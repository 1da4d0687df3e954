"""Settings read from TODOBOARD_* environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

DEFAULT_COLUMNS = ("todo", "in-progress", "done")
DEFAULT_KEEP_DAYS = 7
DEFAULT_LOG_LEVEL = "WARNING"


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def default_todo_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Default per-user board file:
      ~/.todoboard/todo.txt

    Override with TODOBOARD_FILE env var or --file CLI option.
    """
    env = os.environ if env is None else env
    raw = env.get("TODOBOARD_FILE")
    if raw:
        return Path(raw).expanduser().resolve()
    return (Path.home() / ".todoboard" / "todo.txt").resolve()


def _columns(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(DEFAULT_COLUMNS)
    names = [name.strip() for name in raw.split(",")]
    # column titles end up in "col:<title>" metadata, so no spaces or colons
    names = [n for n in names if n and " " not in n and ":" not in n]
    return names or list(DEFAULT_COLUMNS)


def _keep_days(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_KEEP_DAYS
    try:
        return max(0, int(raw))
    except ValueError as e:
        raise ValueError(f"TODOBOARD_KEEP_DAYS must be an integer, got {raw!r}") from e


@dataclass
class Settings:
    todo_file: Path
    columns: List[str] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    alt_screen: bool = True
    log_level: str = DEFAULT_LOG_LEVEL
    keep_days: int = DEFAULT_KEEP_DAYS


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    return Settings(
        todo_file=default_todo_path(env),
        columns=_columns(env.get("TODOBOARD_COLUMNS")),
        alt_screen=_truthy_env(env.get("TODOBOARD_ALT_SCREEN"), True),
        log_level=(env.get("TODOBOARD_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        keep_days=_keep_days(env.get("TODOBOARD_KEEP_DAYS")),
    )
