"""
Cursor position and the scrolled window of rows and columns shown on screen.
"""

from dataclasses import dataclass

from .buffer import Buffer
from .render import raw_to_rendered_column


@dataclass
class Cursor:
    """Cursor position in file coordinates."""

    cx: int = 0
    cy: int = 0
    rx: int = 0


@dataclass
class Viewport:
    """Row and column offsets of the visible window plus its size."""

    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0

    def scroll(self, cursor: Cursor, buffer: Buffer) -> None:
        """Move the offsets so that the cursor is inside the window."""

        cursor.rx = 0
        row = buffer.get_row(cursor.cy)
        if row is not None:
            cursor.rx = raw_to_rendered_column(row, cursor.cx)

        if cursor.cy < self.rowoff:
            self.rowoff = cursor.cy
        if cursor.cy >= self.rowoff + self.screenrows:
            self.rowoff = cursor.cy - self.screenrows + 1
        if cursor.rx < self.coloff:
            self.coloff = cursor.rx
        if cursor.rx >= self.coloff + self.screencols:
            self.coloff = cursor.rx - self.screencols + 1
