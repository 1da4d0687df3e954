"""Main entry point for the todo.txt board."""
import logging
from pathlib import Path
from typing import Optional

import click

from cli import CLI
from config import load_settings
from errors import StorageError
from storage import load_board
from theme import PLAIN_STYLE, active_scheme


@click.command()
@click.option("--file", "todo_file", type=click.Path(dir_okay=False, path_type=Path),
              help="Board file (default: ~/.todoboard/todo.txt or TODOBOARD_FILE).")
@click.option("--alt-screen/--no-alt-screen", default=None,
              help="Use the terminal's alternate screen (default: TODOBOARD_ALT_SCREEN, on).")
@click.option("--plain", is_flag=True, help="Disable colors.")
@click.option("--print", "print_only", is_flag=True, help="Print the board once and exit.")
def main(todo_file: Optional[Path], alt_screen: Optional[bool], plain: bool, print_only: bool) -> None:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if todo_file is not None:
        settings.todo_file = todo_file.expanduser().resolve()
    if alt_screen is not None:
        settings.alt_screen = alt_screen

    try:
        board = load_board(settings.todo_file, settings.columns)
    except StorageError as e:
        raise click.ClickException(f"Cannot read board: {e}") from e

    scheme = PLAIN_STYLE if plain else active_scheme()
    if print_only:
        board.display(scheme)
        return
    CLI(board, settings.todo_file, settings, scheme).run()


if __name__ == "__main__":
    main()
