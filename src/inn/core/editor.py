"""
Editor session tying the buffer, cursor, viewport and prompts together.

Nothing in here touches the terminal: the window manager asks for the
visible rows through draw_rows() and feeds decoded keys back in.
"""

import logging
import time
from typing import Final, Iterator, List, Optional, Tuple

from pygments.token import Token, _TokenType

from .buffer import Buffer
from .prompt import PromptSession, SaveAsPrompt, SearchPrompt
from .syntax import token_for
from .viewport import Cursor, Viewport
from ..utils.keys import ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT, ARROW_UP, PAGE_UP

logger = logging.getLogger(__name__)

VERSION: Final[str] = '0.1.0'
STATUS_MESSAGE_DURATION: Final[int] = 5

DrawnRow = Tuple[str, List[_TokenType]]


class Editor:
    """A single editing session over one buffer."""

    def __init__(self, buffer: Optional[Buffer] = None,
                 screenrows: int = 24, screencols: int = 80) -> None:
        self.buffer = buffer if buffer is not None else Buffer()
        self.cursor = Cursor()
        self.viewport = Viewport(screenrows=screenrows, screencols=screencols)
        self.status_message = ''
        self.status_message_time = 0.0
        self.prompt: Optional[PromptSession] = None

    def set_status_message(self, message: str) -> None:
        self.status_message = message
        self.status_message_time = time.time()

    def resize(self, screenrows: int, screencols: int) -> None:
        """Set the number of text rows and columns available for the buffer."""

        self.viewport.screenrows = max(1, screenrows)
        self.viewport.screencols = max(1, screencols)

    def open(self, path: str) -> None:
        """Load a file into the buffer and move the cursor to its start."""

        self.buffer.load_file(path)
        self.cursor = Cursor()
        self.viewport.rowoff = 0
        self.viewport.coloff = 0

    def save(self) -> None:
        """Save the buffer, asking for a file name first when it has none."""

        if not self.buffer.filename:
            self.start_prompt(SaveAsPrompt(self))
            return

        try:
            written = self.buffer.save_file()
        except IOError as e:
            logger.error("Save failed: %s", e)
            self.set_status_message(f"Can't save! I/O error: {e}")
            return

        self.set_status_message(f"{written} bytes written to disk")

    def find(self) -> None:
        """Start an incremental search."""

        self.start_prompt(SearchPrompt(self))

    def start_prompt(self, prompt: PromptSession) -> None:
        self.prompt = prompt
        self.set_status_message(prompt.message())

    def handle_prompt_key(self, key: int) -> None:
        """Send a key to the active prompt, closing the prompt once it is done."""

        prompt = self.prompt
        if prompt is None:
            return

        # Confirming a save-as prompt may start a new prompt.
        self.prompt = None
        if not prompt.handle_key(key) and self.prompt is None:
            self.prompt = prompt

    def insert_char(self, ch: str) -> None:
        self.buffer.insert_char(self.cursor.cy, self.cursor.cx, ch)
        self.cursor.cx += 1

    def insert_newline(self) -> None:
        """Split the current row at the cursor and move to the new row."""

        self.buffer.split_row(self.cursor.cy, self.cursor.cx)
        self.cursor.cy += 1
        self.cursor.cx = 0

    def delete_char(self) -> None:
        """Delete the character left of the cursor."""

        if self.cursor.cy >= self.buffer.numrows:
            return

        self.cursor.cy, self.cursor.cx = self.buffer.delete_char(self.cursor.cy, self.cursor.cx)

    def forward_delete(self) -> None:
        self.buffer.forward_delete(self.cursor.cy, self.cursor.cx)

    def move_cursor(self, key: int) -> None:
        """Move the cursor one step with an arrow key, snapping to the row end."""

        cursor = self.cursor
        row = self.buffer.get_row(cursor.cy)

        if key == ARROW_LEFT:
            if cursor.cx != 0:
                cursor.cx -= 1
            elif cursor.cy > 0:
                cursor.cy -= 1
                cursor.cx = self.buffer.rows[cursor.cy].size
        elif key == ARROW_RIGHT:
            if row is not None and cursor.cx < row.size:
                cursor.cx += 1
            elif row is not None and cursor.cx == row.size:
                cursor.cy += 1
                cursor.cx = 0
        elif key == ARROW_UP:
            if cursor.cy != 0:
                cursor.cy -= 1
        elif key == ARROW_DOWN:
            if cursor.cy < self.buffer.numrows:
                cursor.cy += 1

        row = self.buffer.get_row(cursor.cy)
        rowlen = row.size if row is not None else 0
        if cursor.cx > rowlen:
            cursor.cx = rowlen

    def page(self, key: int) -> None:
        """Move the cursor a full screen up or down."""

        if key == PAGE_UP:
            self.cursor.cy = self.viewport.rowoff
        else:
            self.cursor.cy = min(self.viewport.rowoff + self.viewport.screenrows - 1,
                                 self.buffer.numrows)

        for _ in range(self.viewport.screenrows):
            self.move_cursor(ARROW_UP if key == PAGE_UP else ARROW_DOWN)

    def home(self) -> None:
        self.cursor.cx = 0

    def end(self) -> None:
        row = self.buffer.get_row(self.cursor.cy)
        if row is not None:
            self.cursor.cx = row.size

    def scroll(self) -> None:
        self.viewport.scroll(self.cursor, self.buffer)

    def draw_rows(self) -> Iterator[DrawnRow]:
        """
        Yield the visible part of every screen row.

        Each item is the rendered text clipped to the viewport and one
        pygments token type per character used to pick its color.
        """

        viewport = self.viewport
        for y in range(viewport.screenrows):
            filerow = y + viewport.rowoff
            row = self.buffer.get_row(filerow)

            if row is None:
                if self.buffer.numrows == 0 and y == viewport.screenrows // 3:
                    text = self._welcome_line()
                else:
                    text = '~'
                yield text, [Token.Text] * len(text)
                continue

            start = viewport.coloff
            end = start + viewport.screencols
            text = row.render[start:end]
            tags = [token_for(hl) for hl in row.hl[start:end]]
            yield text, tags

    def _welcome_line(self) -> str:
        cols = self.viewport.screencols
        welcome = f"inn editor -- version {VERSION}"[:cols]
        padding = (cols - len(welcome)) // 2
        if not padding:
            return welcome

        return '~' + ' ' * (padding - 1) + welcome

    def status_line(self) -> str:
        """Build the status bar: file name, line count, modified flag and position."""

        cols = self.viewport.screencols
        name = self.buffer.filename or '[No Name]'
        modified = '(modified)' if self.buffer.dirty else ''
        language = self.buffer.syntax.name if self.buffer.syntax else 'no ft'

        status = f"{name[:20]} - {self.buffer.numrows} lines {modified}"[:cols]
        rstatus = f"{language} | {self.cursor.cy + 1}/{self.buffer.numrows}"

        if len(status) + len(rstatus) <= cols:
            return status + ' ' * (cols - len(status) - len(rstatus)) + rstatus

        return status + ' ' * (cols - len(status))

    def message_line(self) -> str:
        if not self.status_message:
            return ''

        if self.prompt is None and time.time() - self.status_message_time >= STATUS_MESSAGE_DURATION:
            return ''

        return self.status_message[:self.viewport.screencols]

    def screen_cursor(self) -> Tuple[int, int]:
        """Get the cursor position relative to the top left of the text area."""

        return (self.cursor.cy - self.viewport.rowoff,
                self.cursor.rx - self.viewport.coloff)
