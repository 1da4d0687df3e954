"""Command-line interface loop for the todo board.

Todos are addressed by column and 1-based position as shown on screen
("mv todo 2 done"). Column names may be shortened to any unique prefix.
"""
import logging
from pathlib import Path
from typing import List, Optional

from board import Board, Column
from clock import Clock, resolve as resolve_clock
from config import Settings
from errors import TodoParseError
from models import Todo
from priority import Priority
from storage import COLUMN_KEY, clean_completed, save_board
from theme import PLAIN_STYLE, StyleScheme

logger = logging.getLogger(__name__)

# --- terminal control helpers ---
# We aggressively clear: ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home))
# Order (3J first) improves reliability in some terminals.
def _clear_screen() -> None:  # pragma: no cover
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:  # pragma: no cover
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:  # pragma: no cover
    print("\033[?1049l", end="", flush=True)


HELP_LINES = [
    "Commands:",
    "  add <col> <todo...>      Add a todo.txt line to a column (e.g. add todo (A) call +mom due:2d)",
    "  mv <col> <n> <col>       Move todo #n to another column",
    "  done <col> <n>           Mark todo #n complete",
    "  rm <col> <n>             Remove todo #n",
    "  pri <col> <n> <+|->      Raise or lower the priority of todo #n",
    "  col <title>              Add a column",
    "  help                     Show this help (press Enter to return)",
    "  exit                     Save and exit",
]


class CLI:
    def __init__(
        self,
        board: Board,
        path: Path,
        settings: Settings,
        scheme: StyleScheme = PLAIN_STYLE,
        clock: Optional[Clock] = None,
    ):
        self.board: Board = board
        self.path: Path = path
        self.settings: Settings = settings
        self.scheme: StyleScheme = scheme
        self.clock: Clock = resolve_clock(clock)

    def run(self) -> None:  # pragma: no cover - interactive
        """Main REPL loop; board is always cleared/redrawn each cycle."""
        exit_message: Optional[str] = None
        message: Optional[str] = None
        if self.settings.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                self.board.display(self.scheme)
                if message:
                    print(f"\n{message}")
                line = input("\n: ").strip()
                if not line:
                    message = None
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    print("\n".join(HELP_LINES))
                    input("\nPress Enter to return to the board...")
                    message = None
                    continue
                if lower == 'exit':
                    self.persist()
                    exit_message = "Goodbye."
                    break
                message = self.handle(line)
                self.persist()
        except (KeyboardInterrupt, EOFError):
            self.persist()
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.settings.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    def persist(self) -> None:
        clean_completed(self.board, self.settings.keep_days, self.clock)
        save_board(self.board, self.path)

    # -------------------- command dispatch --------------------
    def handle(self, line: str) -> Optional[str]:
        """Run one command; returns a message for the user, or None."""
        tokens = line.split()
        if not tokens:
            return None
        cmd = tokens[0].lower()
        handler = {
            'add': self._cmd_add,
            'mv': self._cmd_mv,
            'done': self._cmd_done,
            'rm': self._cmd_rm,
            'pri': self._cmd_pri,
            'col': self._cmd_col,
        }.get(cmd)
        if handler is None:
            return "Unknown command. Type 'help' for instructions."
        return handler(line, tokens)

    def _column(self, name: str) -> Optional[Column]:
        exact = self.board.col(name)
        if exact is not None:
            return exact
        matches = [c for c in self.board.columns if c.title.lower().startswith(name.lower())]
        return matches[0] if len(matches) == 1 else None

    def _locate(self, col_name: str, number: str):
        column = self._column(col_name)
        if column is None:
            return None, None, f"No column {col_name!r}."
        if not number.isdigit():
            return column, None, "Invalid number."
        todo = self.board.todo_at(column.title, int(number))
        if todo is None:
            return column, None, f"No todo #{number} in {column.title}."
        return column, todo, None

    # ---- individual command helpers ----
    def _cmd_add(self, line: str, tokens: List[str]) -> Optional[str]:
        if len(tokens) < 3:
            return "Usage: add <col> <todo...>"
        column = self._column(tokens[1])
        if column is None:
            return f"No column {tokens[1]!r}."
        text = line.split(None, 2)[2]
        try:
            todo = Todo.parse(text, self.clock)
        except TodoParseError as e:
            logger.debug("rejected todo %r: %s", text, e)
            return f"Could not add todo: {e}"
        if todo.get_meta(COLUMN_KEY) is not None:
            return f"'{COLUMN_KEY}:' is reserved for the column; use mv to place a todo."
        if todo.creation is None:
            todo.creation = self.clock.today()
        column.add(todo)
        return None

    def _cmd_mv(self, line: str, tokens: List[str]) -> Optional[str]:
        if len(tokens) != 4:
            return "Usage: mv <col> <n> <col>"
        column, todo, error = self._locate(tokens[1], tokens[2])
        if error:
            return error
        target = self._column(tokens[3])
        if target is None:
            return f"No column {tokens[3]!r}."
        if target is column:
            return f"Todo already in {target.title}."
        column.todos.pop(int(tokens[2]) - 1)
        target.add(todo.copy())
        return None

    def _cmd_done(self, line: str, tokens: List[str]) -> Optional[str]:
        if len(tokens) != 3:
            return "Usage: done <col> <n>"
        _, todo, error = self._locate(tokens[1], tokens[2])
        if error:
            return error
        if todo.completed:
            return "Todo already complete."
        todo.complete(self.clock)
        return None

    def _cmd_rm(self, line: str, tokens: List[str]) -> Optional[str]:
        if len(tokens) != 3:
            return "Usage: rm <col> <n>"
        column, todo, error = self._locate(tokens[1], tokens[2])
        if error:
            return error
        column.todos.pop(int(tokens[2]) - 1)
        return f'Removed "{todo.title}".'

    def _cmd_pri(self, line: str, tokens: List[str]) -> Optional[str]:
        if len(tokens) != 4 or tokens[3] not in {'+', '-'}:
            return "Usage: pri <col> <n> <+|->"
        _, todo, error = self._locate(tokens[1], tokens[2])
        if error:
            return error
        if tokens[3] == '+':
            # a todo without priority starts at the lowest rank
            todo.priority = todo.priority.increment() if todo.priority.is_some() else Priority.Z
        else:
            todo.priority = todo.priority.decrement()
        return None

    def _cmd_col(self, line: str, tokens: List[str]) -> Optional[str]:
        if len(tokens) != 2 or ":" in tokens[1]:
            return "Usage: col <title>"
        if self.board.col(tokens[1]) is not None:
            return f"Column {tokens[1]} already exists."
        self.board.add_col(tokens[1])
        return None
