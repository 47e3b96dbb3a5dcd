"""
Prompt sessions that take over key input from the editor for a while.
"""

from typing import TYPE_CHECKING

from ..utils.keys import BACKSPACE, CTRL_H, DEL_KEY, ENTER, ESC
from ..utils.search import SearchEngine

if TYPE_CHECKING:
    from .editor import Editor


class PromptSession:
    """
    Base class for prompts shown in the message bar.

    The cursor and viewport offsets are captured when the prompt starts so
    that canceling can put them back.
    """

    label = ''
    help_text = ''

    def __init__(self, editor: 'Editor') -> None:
        self.editor = editor
        self.query = ''
        self.saved_cx = editor.cursor.cx
        self.saved_cy = editor.cursor.cy
        self.saved_rowoff = editor.viewport.rowoff
        self.saved_coloff = editor.viewport.coloff

    def message(self) -> str:
        return f"{self.label}: {self.query} {self.help_text}".rstrip()

    def handle_key(self, key: int) -> bool:
        """
        Feed one key to the prompt.

        Returns:
            bool: True when the prompt is finished
        """

        if key in (DEL_KEY, CTRL_H, BACKSPACE):
            self.query = self.query[:-1]
        elif key == ESC:
            self.cancel()
            return True
        elif key == ENTER:
            if self.query:
                self.confirm()
                return True
        elif 32 <= key < 127:
            self.query += chr(key)

        self.on_change(key)
        self.editor.set_status_message(self.message())
        return False

    def on_change(self, key: int) -> None:
        """Called after every key that did not end the prompt."""

    def confirm(self) -> None:
        self.editor.set_status_message('')

    def cancel(self) -> None:
        """Restore the cursor and viewport captured when the prompt started."""

        self.editor.cursor.cx = self.saved_cx
        self.editor.cursor.cy = self.saved_cy
        self.editor.viewport.rowoff = self.saved_rowoff
        self.editor.viewport.coloff = self.saved_coloff
        self.editor.set_status_message('')


class SearchPrompt(PromptSession):
    """Incremental search: every key moves to and highlights a match."""

    label = 'Search'
    help_text = '(Use ESC/Arrows/Enter)'

    def __init__(self, editor: 'Editor') -> None:
        super().__init__(editor)
        self.engine = SearchEngine(editor.buffer)

    def on_change(self, key: int) -> None:
        result = self.engine.step(self.query, key)
        if result is None:
            return

        self.editor.cursor.cy = result.row
        self.editor.cursor.cx = result.column
        self.editor.viewport.rowoff = result.row

    def confirm(self) -> None:
        self.engine.step(self.query, ENTER)
        super().confirm()

    def cancel(self) -> None:
        self.engine.step(self.query, ESC)
        super().cancel()


class SaveAsPrompt(PromptSession):
    """Asks for a file name and saves the buffer under it."""

    label = 'Save as'
    help_text = '(ESC to cancel)'

    def confirm(self) -> None:
        buffer = self.editor.buffer
        buffer.filename = self.query
        buffer.select_syntax(self.query)
        self.editor.save()

    def cancel(self) -> None:
        super().cancel()
        self.editor.set_status_message('Save aborted')
