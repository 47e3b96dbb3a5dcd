"""
Buffer module holding the rows of the file being edited.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .render import render
from .syntax import LanguageProfile, SyntaxHighlighter, select_profile

logger = logging.getLogger(__name__)

FILE_ENCODING = 'latin-1'


@dataclass
class Row:
    """A single line of text with its rendered and highlighted forms."""

    idx: int
    chars: str
    render: str = ''
    hl: List[int] = field(default_factory=list)
    hl_open_comment: bool = False

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def insert_char(self, at: int, ch: str) -> None:
        """Insert ch at raw column at, clamped to the row."""

        at = max(0, min(at, self.size))
        self.chars = self.chars[:at] + ch + self.chars[at:]

    def delete_char(self, at: int) -> bool:
        """Delete the character at raw column at. Returns False when out of range."""

        if not 0 <= at < self.size:
            return False

        self.chars = self.chars[:at] + self.chars[at + 1:]
        return True

    def truncate(self, at: int) -> str:
        """Cut the row at raw column at and return the removed suffix."""

        at = max(0, min(at, self.size))
        suffix = self.chars[at:]
        self.chars = self.chars[:at]
        return suffix


class Buffer:
    """Ordered rows of text plus the state needed to save and highlight them."""

    def __init__(self) -> None:
        self.rows: List[Row] = []
        self.dirty = False
        self.filename: Optional[str] = None
        self.syntax: Optional[LanguageProfile] = None
        self.highlighter = SyntaxHighlighter()

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def get_row(self, at: int) -> Optional[Row]:
        """Get the row at the given index, or None past the end."""

        if not 0 <= at < len(self.rows):
            return None

        return self.rows[at]

    def select_syntax(self, filename: Optional[str]) -> None:
        """Pick the language profile for filename and re-highlight every row."""

        self.syntax = select_profile(filename)
        self.highlighter.profile = self.syntax

        for row in self.rows:
            row.hl_open_comment = False
        for row in self.rows:
            self.highlighter.highlight_row(self.rows, row.idx)

    def update_row(self, row: Row) -> None:
        """Recompute render and highlight after the row's raw content changed."""

        row.render = render(row.chars)
        self.highlighter.update(self.rows, row.idx)

    def _renumber(self, start: int) -> None:
        # TODO: keep indices lazily if renumbering shows up on large files.
        for j in range(start, len(self.rows)):
            self.rows[j].idx = j

    def insert_row(self, at: int, text: str = '') -> Row:
        """Insert a new row at the given index, clamped to the buffer."""

        at = max(0, min(at, len(self.rows)))

        row = Row(idx=at, chars=text)
        self.rows.insert(at, row)
        self._renumber(at + 1)

        self.update_row(row)
        if at + 1 < len(self.rows):
            self.highlighter.update(self.rows, at + 1)

        self.dirty = True
        return row

    def delete_row(self, at: int) -> None:
        """Delete the row at the given index. Out of range indices are ignored."""

        if not 0 <= at < len(self.rows):
            return

        del self.rows[at]
        self._renumber(at)

        if at < len(self.rows):
            self.highlighter.update(self.rows, at)

        self.dirty = True

    def insert_char(self, row: int, col: int, ch: str) -> None:
        """Insert a character, appending an empty row when row is one past the end."""

        if row == len(self.rows):
            self.insert_row(row, '')

        target = self.get_row(row)
        if target is None:
            return

        target.insert_char(col, ch)
        self.update_row(target)
        self.dirty = True

    def delete_char(self, row: int, col: int) -> Tuple[int, int]:
        """
        Delete the character before (row, col), as backspace does.

        At column 0 the row is joined onto the previous one.

        Returns:
            The cursor position after the deletion
        """

        target = self.get_row(row)
        if target is None or (row == 0 and col <= 0):
            return row, col

        if col <= 0:
            join_col = self.join_row(row)
            if join_col is None:
                return row, col
            return row - 1, join_col

        col = min(col, target.size)
        if not target.delete_char(col - 1):
            return row, col

        self.update_row(target)
        self.dirty = True
        return row, col - 1

    def forward_delete(self, row: int, col: int) -> None:
        """Delete the character at (row, col), joining the next row at the end."""

        target = self.get_row(row)
        if target is None:
            return

        if col >= target.size:
            self.join_row(row + 1)
            return

        if target.delete_char(col):
            self.update_row(target)
            self.dirty = True

    def append_text(self, row: int, text: str) -> None:
        """Append text to the end of a row."""

        target = self.get_row(row)
        if target is None:
            return

        target.chars += text
        self.update_row(target)
        self.dirty = True

    def split_row(self, row: int, col: int) -> None:
        """Move everything from col onward into a new row right after row."""

        target = self.get_row(row)
        if target is None:
            if row == len(self.rows):
                self.insert_row(row, '')
            return

        suffix = target.truncate(col)
        self.update_row(target)
        self.insert_row(row + 1, suffix)

    def join_row(self, row: int) -> Optional[int]:
        """
        Append row onto the previous row and delete it.

        Returns:
            The column where the two rows meet, or None when nothing was joined
        """

        if not 0 < row < len(self.rows):
            return None

        previous = self.rows[row - 1]
        join_col = previous.size
        self.append_text(row - 1, self.rows[row].chars)
        self.delete_row(row)

        return join_col

    def rows_to_string(self) -> str:
        """Serialize the buffer, one newline after every row."""

        return ''.join(f"{row.chars}\n" for row in self.rows)

    def load_file(self, filename: str) -> None:
        """Load rows from a file, stripping trailing newlines and carriage returns."""

        rows: List[Row] = []
        with open(filename, 'rb') as f:
            for line in f:
                line = line.rstrip(b'\r\n')
                rows.append(Row(idx=len(rows), chars=line.decode(FILE_ENCODING)))

        self.filename = filename
        self.rows = rows
        for row in self.rows:
            row.render = render(row.chars)
        self.select_syntax(filename)
        self.dirty = False

        logger.info("Loaded %d lines from %s", len(rows), filename)

    def save_file(self, filename: Optional[str] = None) -> int:
        """
        Write the buffer to a file.

        Args:
            filename: Optional filename to save to. If None, uses current filename.

        Returns:
            int: Number of bytes written
        """

        save_filename = filename or self.filename
        if not save_filename:
            raise IOError("Failed to save file: no filename")

        data = self.rows_to_string().encode(FILE_ENCODING)

        try:
            fd = os.open(save_filename, os.O_RDWR | os.O_CREAT, 0o644)
            try:
                os.ftruncate(fd, len(data))
                written = 0
                while written < len(data):
                    written += os.write(fd, data[written:])
            finally:
                os.close(fd)
        except OSError as e:
            raise IOError(f"Failed to save file: {e.strerror or e}") from e

        self.filename = save_filename
        self.dirty = False
        logger.info("Wrote %d bytes to %s", len(data), save_filename)
        return len(data)
