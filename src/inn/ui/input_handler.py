"""
Input handler module for processing key events.
"""

from typing import Callable, Dict, Final

from ..core.editor import Editor
from ..utils.keys import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_F,
    CTRL_H,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    PAGE_DOWN,
    PAGE_UP,
)

QUIT_TIMES: Final[int] = 3

HELP_STATUS_MESSAGE: Final[str] = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"
UNSAVED_CHANGES_STATUS_MESSAGE: Final[str] = (
    "WARNING!!! File has unsaved changes. Press Ctrl-Q {} more times to quit."
)


class InputHandler:
    """Handles key events and executes corresponding actions."""

    def __init__(self, editor: Editor, quit_times: int = QUIT_TIMES) -> None:
        self.editor = editor
        self.quit_times_setting = quit_times
        self.quit_times = quit_times
        self.command_handlers: Dict[int, Callable[[int], None]] = self._setup_handlers()

    def _setup_handlers(self) -> Dict[int, Callable[[int], None]]:
        """Set up the keyboard command handlers."""

        return {
            ENTER: self._handle_enter,
            CTRL_S: self._save,
            CTRL_F: self._find,
            HOME_KEY: self._move_line_start,
            END_KEY: self._move_line_end,
            BACKSPACE: self._backspace,
            CTRL_H: self._backspace,
            DEL_KEY: self._delete_char,
            PAGE_UP: self._page,
            PAGE_DOWN: self._page,
            ARROW_UP: self._move,
            ARROW_DOWN: self._move,
            ARROW_LEFT: self._move,
            ARROW_RIGHT: self._move,
            CTRL_L: self._ignore,
            ESC: self._ignore,
        }

    def handle_input(self, key: int) -> bool:
        """Handle a single key event. Returns False if should quit."""

        if self.editor.prompt is not None:
            self.editor.handle_prompt_key(key)
            self.quit_times = self.quit_times_setting
            return True

        if key == CTRL_Q:
            return self._quit()

        handler = self.command_handlers.get(key, self._insert)
        handler(key)

        self.quit_times = self.quit_times_setting
        return True

    def _quit(self) -> bool:
        """Count down quit presses while the buffer has unsaved changes."""

        if self.editor.buffer.dirty and self.quit_times > 0:
            self.editor.set_status_message(UNSAVED_CHANGES_STATUS_MESSAGE.format(self.quit_times))
            self.quit_times -= 1
            return True

        return False

    def _handle_enter(self, key: int) -> None:
        self.editor.insert_newline()

    def _save(self, key: int) -> None:
        self.editor.save()

    def _find(self, key: int) -> None:
        self.editor.find()

    def _move_line_start(self, key: int) -> None:
        self.editor.home()

    def _move_line_end(self, key: int) -> None:
        self.editor.end()

    def _backspace(self, key: int) -> None:
        self.editor.delete_char()

    def _delete_char(self, key: int) -> None:
        """Delete character under the cursor."""

        self.editor.forward_delete()

    def _page(self, key: int) -> None:
        self.editor.page(key)

    def _move(self, key: int) -> None:
        self.editor.move_cursor(key)

    def _ignore(self, key: int) -> None:
        pass

    def _insert(self, key: int) -> None:
        """Insert a plain byte at the cursor."""

        if key > 0xff:
            return

        self.editor.insert_char(chr(key))
