"""Terminal input: line reading and an arrow-key selection menu."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import ExitStack
from typing import Any


class InteractionError(Exception):
    """Raised when the terminal cannot be driven."""


def read_input(prompt: str, reader: Callable[[str], str] = input) -> str:
    """Read lines until an empty one and return them joined together.

    End of input or an interrupt stops reading and keeps what was read so far.
    """
    parts = []
    while True:
        try:
            line = reader(prompt + ">> ")
        except (EOFError, KeyboardInterrupt):
            break
        if not line:
            break
        parts.append(line)
    return "".join(parts)


class Menu:
    """A list of options with one selected entry."""

    def __init__(self, options: Sequence[str]) -> None:
        if not options:
            raise ValueError("a menu needs at least one option")
        self.options = list(options)
        self.selected = 0

    def move_up(self) -> None:
        if self.selected > 0:
            self.selected -= 1

    def move_down(self) -> None:
        if self.selected < len(self.options) - 1:
            self.selected += 1

    def render(self) -> list[str]:
        return [
            f"> {option}" if index == self.selected else f"  {option}"
            for index, option in enumerate(self.options)
        ]


def _draw(terminal: Any, menu: Menu) -> None:
    stream = terminal.stream
    try:
        stream.write(terminal.home + terminal.clear)
        for row, line in enumerate(menu.render()):
            text = terminal.blue(line) if row == menu.selected else line
            stream.write(terminal.move_xy(0, row) + text)
        stream.write(terminal.move_xy(0, len(menu.options)))
        stream.flush()
    except OSError as exc:
        raise InteractionError("terminal error when 'render menu'") from exc


def _is_enter(terminal: Any, key: Any) -> bool:
    return getattr(key, "code", None) == terminal.KEY_ENTER or str(key) in ("\r", "\n")


def select(options: Sequence[str], terminal: Any = None) -> int:
    """Let the user pick an option with the arrow keys; return its index."""
    menu = Menu(options)
    if terminal is None:
        import blessed

        terminal = blessed.Terminal()
    try:
        with ExitStack() as stack:
            stack.enter_context(terminal.fullscreen())
            stack.enter_context(terminal.hidden_cursor())
            stack.enter_context(terminal.cbreak())
            _draw(terminal, menu)
            while True:
                key = terminal.inkey()
                code = getattr(key, "code", None)
                if code == terminal.KEY_UP:
                    menu.move_up()
                elif code == terminal.KEY_DOWN:
                    menu.move_down()
                elif _is_enter(terminal, key):
                    break
                _draw(terminal, menu)
    except OSError as exc:
        raise InteractionError("terminal error when 'select'") from exc
    return menu.selected