"""
Incremental search over the rendered text of buffer rows.
"""

from typing import List, Optional

from ..core.buffer import Buffer
from ..core.render import rendered_to_raw_column
from ..core.syntax import HL_MATCH
from .keys import ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT, ARROW_UP, ENTER, ESC


class SearchResult:
    """Represents a search hit with its row, raw column and rendered span."""

    def __init__(self, row: int, column: int, offset: int, length: int):
        self.row = row
        self.column = column
        self.offset = offset
        self.length = length

    def __repr__(self) -> str:
        return (f"SearchResult(row={self.row}, column={self.column}, "
                f"offset={self.offset}, length={self.length})")


class SearchEngine:
    """Finds matches row by row, wrapping around the buffer and marking the hit."""

    def __init__(self, buffer: Buffer) -> None:
        self.buffer = buffer
        self.last_match = -1
        self.direction = 1
        self.saved_hl_line = -1
        self.saved_hl: Optional[List[int]] = None

    def restore(self) -> None:
        """Put back the highlighting that the last match overlay replaced."""

        if self.saved_hl is not None:
            row = self.buffer.get_row(self.saved_hl_line)
            if row is not None and len(self.saved_hl) == row.rsize:
                row.hl = self.saved_hl

        self.saved_hl = None
        self.saved_hl_line = -1

    def reset(self) -> None:
        """Forget the last match so the next search starts from the top."""

        self.last_match = -1
        self.direction = 1

    def step(self, query: str, key: int) -> Optional[SearchResult]:
        """
        Advance the search after a key was pressed in the search prompt.

        Arrow right/down search forward from the last match, arrow left/up
        search backward. Enter and Escape end the search. Any other key
        means the query changed, so the search restarts from the top.

        Args:
            query: Current search query
            key: The key that triggered this step

        Returns:
            Optional[SearchResult]: The match that is now highlighted
        """

        self.restore()

        if key in (ENTER, ESC):
            self.reset()
            return None

        if key in (ARROW_RIGHT, ARROW_DOWN):
            self.direction = 1
        elif key in (ARROW_LEFT, ARROW_UP):
            self.direction = -1
        else:
            self.reset()

        if self.last_match == -1:
            self.direction = 1

        return self.find_next(query)

    def find_next(self, query: str) -> Optional[SearchResult]:
        """Scan from the last match in the current direction, wrapping once around."""

        if not query:
            return None

        numrows = self.buffer.numrows
        current = self.last_match
        for _ in range(numrows):
            current += self.direction
            if current == -1:
                current = numrows - 1
            elif current == numrows:
                current = 0

            row = self.buffer.rows[current]
            offset = row.render.find(query)
            if offset == -1:
                continue

            self.last_match = current
            self._overlay(current, offset, len(query))

            return SearchResult(
                current,
                rendered_to_raw_column(row, offset),
                offset,
                len(query)
            )

        return None

    def _overlay(self, line: int, offset: int, length: int) -> None:
        row = self.buffer.rows[line]
        self.saved_hl_line = line
        self.saved_hl = row.hl.copy()

        end = min(offset + length, row.rsize)
        row.hl[offset:end] = [HL_MATCH] * (end - offset)
