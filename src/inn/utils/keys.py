"""
Key codes and the decoder turning raw terminal bytes into key events.
"""

from typing import Callable, Dict, Final, Optional

ESC: Final[int] = 27
ENTER: Final[int] = 13
BACKSPACE: Final[int] = 127

ARROW_LEFT: Final[int] = 1000
ARROW_RIGHT: Final[int] = 1001
ARROW_UP: Final[int] = 1002
ARROW_DOWN: Final[int] = 1003
DEL_KEY: Final[int] = 1004
HOME_KEY: Final[int] = 1005
END_KEY: Final[int] = 1006
PAGE_UP: Final[int] = 1007
PAGE_DOWN: Final[int] = 1008


def ctrl_key(k: str) -> int:
    """Get the byte a terminal sends for Ctrl plus the given letter."""

    return ord(k) & 0x1f


CTRL_F: Final[int] = ctrl_key('f')
CTRL_H: Final[int] = ctrl_key('h')
CTRL_L: Final[int] = ctrl_key('l')
CTRL_Q: Final[int] = ctrl_key('q')
CTRL_S: Final[int] = ctrl_key('s')

TILDE_SEQUENCES: Final[Dict[str, int]] = {
    '1': HOME_KEY,
    '3': DEL_KEY,
    '4': END_KEY,
    '5': PAGE_UP,
    '6': PAGE_DOWN,
    '7': HOME_KEY,
    '8': END_KEY,
}

BRACKET_SEQUENCES: Final[Dict[str, int]] = {
    'A': ARROW_UP,
    'B': ARROW_DOWN,
    'C': ARROW_RIGHT,
    'D': ARROW_LEFT,
    'H': HOME_KEY,
    'F': END_KEY,
}

SS3_SEQUENCES: Final[Dict[str, int]] = {
    'H': HOME_KEY,
    'F': END_KEY,
}


class KeyDecoder:
    """
    Reads key events from a byte source.

    read_byte returns the next byte, or None when no byte arrived within
    the terminal's read timeout.
    """

    def __init__(self, read_byte: Callable[[], Optional[int]]) -> None:
        self.read_byte = read_byte

    def read_key(self) -> int:
        """Wait for the next key and decode escape sequences."""

        c = self.read_byte()
        while c is None:
            # An empty read means the timeout expired, not end of input.
            c = self.read_byte()

        if c != ESC:
            return c

        return self._read_escape_sequence()

    def _read_escape_sequence(self) -> int:
        first = self.read_byte()
        if first is None:
            return ESC
        second = self.read_byte()
        if second is None:
            return ESC

        seq0, seq1 = chr(first), chr(second)

        if seq0 == '[':
            if seq1.isdigit():
                third = self.read_byte()
                if third is None or chr(third) != '~':
                    return ESC
                return TILDE_SEQUENCES.get(seq1, ESC)

            return BRACKET_SEQUENCES.get(seq1, ESC)

        if seq0 == 'O':
            return SS3_SEQUENCES.get(seq1, ESC)

        return ESC
