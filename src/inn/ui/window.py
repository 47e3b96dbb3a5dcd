"""
Window management module drawing the editor with curses.
"""

import curses
from typing import Dict, Final, Optional

from pygments.token import Token, _TokenType

from ..core.editor import Editor

READ_TIMEOUT_MS: Final[int] = 100
MIN_HEIGHT: Final[int] = 3
MIN_WIDTH: Final[int] = 10

TOKEN_COLORS: Final[Dict[_TokenType, int]] = {
    Token.Comment: 1,
    Token.Keyword: 2,
    Token.Keyword.Type: 3,
    Token.String: 4,
    Token.Number: 5,
    Token.Generic.Emph: 6,
}


def safe_addstr(window: 'curses.window', y: int, x: int, string: str, attr: int = 0) -> None:
    """Safely add a string to a window, truncating if necessary."""

    height, width = window.getmaxyx()
    if y >= height or x >= width:
        return

    available = width - x
    if available <= 0:
        return

    if len(string) > available:
        string = string[:available]

    try:
        window.addstr(y, x, string, attr)
    except curses.error:
        pass


class WindowManager:
    """Owns the curses screen: reads raw bytes and draws the editor state."""

    def __init__(self, stdscr: 'curses.window', editor: Editor):
        self.stdscr = stdscr
        self.editor = editor
        self.height, self.width = stdscr.getmaxyx()

        if self.height < MIN_HEIGHT or self.width < MIN_WIDTH:
            raise ValueError(
                f"Terminal too small. Minimum size: {MIN_WIDTH}x{MIN_HEIGHT}, "
                f"Current size: {self.width}x{self.height}"
            )

        curses.raw()
        curses.noecho()
        curses.nonl()
        stdscr.keypad(False)
        stdscr.timeout(READ_TIMEOUT_MS)

        self._init_colors()
        self.editor.resize(self.height - 2, self.width)

    def _init_colors(self) -> None:
        """Initialize color pairs for syntax highlighting."""

        if not curses.has_colors():
            return

        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(TOKEN_COLORS[Token.Comment], curses.COLOR_CYAN, -1)
        curses.init_pair(TOKEN_COLORS[Token.Keyword], curses.COLOR_YELLOW, -1)
        curses.init_pair(TOKEN_COLORS[Token.Keyword.Type], curses.COLOR_GREEN, -1)
        curses.init_pair(TOKEN_COLORS[Token.String], curses.COLOR_MAGENTA, -1)
        curses.init_pair(TOKEN_COLORS[Token.Number], curses.COLOR_RED, -1)
        curses.init_pair(TOKEN_COLORS[Token.Generic.Emph], curses.COLOR_BLACK, curses.COLOR_YELLOW)

    def _get_token_color(self, token_type: _TokenType) -> int:
        """
        Get the color attribute for a token type.

        Args:
            token_type: The Pygments token type

        Returns:
            The curses color attribute
        """

        while token_type is not None:
            if token_type in TOKEN_COLORS:
                return curses.color_pair(TOKEN_COLORS[token_type])
            token_type = token_type.parent

        return curses.color_pair(0)

    def read_byte(self) -> Optional[int]:
        """Read one raw byte, or None when the read timed out."""

        ch = self.stdscr.getch()
        if ch == -1:
            return None

        return ch

    def resize(self) -> None:
        """Handle terminal resize events."""

        self.height, self.width = self.stdscr.getmaxyx()
        self.editor.resize(self.height - 2, self.width)

    def refresh_all(self) -> None:
        """Scroll to the cursor and redraw every line of the screen."""

        height, width = self.stdscr.getmaxyx()
        if (height, width) != (self.height, self.width):
            self.resize()

        self.editor.scroll()
        self.stdscr.erase()

        for y, (text, tags) in enumerate(self.editor.draw_rows()):
            self.draw_row(y, text, tags)

        self.draw_status()
        self.draw_message()

        cy, cx = self.editor.screen_cursor()
        try:
            self.stdscr.move(cy, cx)
        except curses.error:
            pass

        self.stdscr.refresh()

    def draw_row(self, y: int, text: str, tags: list) -> None:
        """Draw one text row, switching color whenever the token type changes."""

        text = ''.join(ch if ch.isprintable() else '?' for ch in text)
        x = 0
        while x < len(text):
            start = x
            tag = tags[x] if x < len(tags) else Token.Text
            while x < len(text) and (tags[x] if x < len(tags) else Token.Text) is tag:
                x += 1

            safe_addstr(self.stdscr, y, start, text[start:x], self._get_token_color(tag))

    def draw_status(self) -> None:
        """Draw the status bar."""

        safe_addstr(self.stdscr, self.height - 2, 0, self.editor.status_line(), curses.A_REVERSE)

    def draw_message(self) -> None:
        # The bottom right cell cannot be written without scrolling the screen.
        safe_addstr(self.stdscr, self.height - 1, 0, self.editor.message_line()[:self.width - 1])
