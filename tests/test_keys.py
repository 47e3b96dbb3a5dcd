"""Tests for decoding raw terminal bytes into key events."""

import pytest

from inn.utils.keys import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    CTRL_Q,
    DEL_KEY,
    END_KEY,
    ESC,
    HOME_KEY,
    KeyDecoder,
    PAGE_DOWN,
    PAGE_UP,
    ctrl_key,
)


class FakeTerminal:
    """Byte source where None stands for a read that timed out."""

    def __init__(self, data):
        self.data = [b if b is None or isinstance(b, int) else ord(b) for b in data]
        self.reads = 0

    def read_byte(self):
        self.reads += 1
        if not self.data:
            return None
        return self.data.pop(0)


def decode(data):
    return KeyDecoder(FakeTerminal(data).read_byte).read_key()


class TestPlainBytes:
    def test_printable_byte(self) -> None:
        assert decode(b"a") == ord("a")

    def test_control_byte(self) -> None:
        assert decode([CTRL_Q]) == ctrl_key("q") == 17

    def test_empty_reads_are_retried(self) -> None:
        terminal = FakeTerminal([None, None, None, "x"])
        assert KeyDecoder(terminal.read_byte).read_key() == ord("x")
        assert terminal.reads == 4


class TestEscapeSequences:
    def test_delete(self) -> None:
        assert decode([ESC, "[", "3", "~"]) == DEL_KEY

    def test_up_arrow(self) -> None:
        assert decode([ESC, "[", "A"]) == ARROW_UP

    @pytest.mark.parametrize("letter,key", [
        ("A", ARROW_UP),
        ("B", ARROW_DOWN),
        ("C", ARROW_RIGHT),
        ("D", ARROW_LEFT),
        ("H", HOME_KEY),
        ("F", END_KEY),
    ])
    def test_bracket_letters(self, letter, key) -> None:
        assert decode([ESC, "[", letter]) == key

    @pytest.mark.parametrize("digit,key", [
        ("1", HOME_KEY),
        ("3", DEL_KEY),
        ("4", END_KEY),
        ("5", PAGE_UP),
        ("6", PAGE_DOWN),
        ("7", HOME_KEY),
        ("8", END_KEY),
    ])
    def test_tilde_sequences(self, digit, key) -> None:
        assert decode([ESC, "[", digit, "~"]) == key

    def test_application_mode_home_end(self) -> None:
        assert decode([ESC, "O", "H"]) == HOME_KEY
        assert decode([ESC, "O", "F"]) == END_KEY


class TestDegradedSequences:
    def test_lone_escape(self) -> None:
        assert decode([ESC]) == ESC

    def test_timeout_after_bracket(self) -> None:
        assert decode([ESC, "[", None, "A"]) == ESC

    def test_timeout_before_tilde(self) -> None:
        assert decode([ESC, "[", "3"]) == ESC

    def test_unknown_digit(self) -> None:
        assert decode([ESC, "[", "2", "~"]) == ESC

    def test_digit_without_tilde(self) -> None:
        assert decode([ESC, "[", "5", "x"]) == ESC

    def test_unknown_letter(self) -> None:
        assert decode([ESC, "[", "Z"]) == ESC

    def test_unknown_prefix(self) -> None:
        assert decode([ESC, "x", "y"]) == ESC


def test_consecutive_keys() -> None:
    decoder = KeyDecoder(FakeTerminal(b"\x1b[Bq\x1b[6~").read_byte)
    assert decoder.read_key() == ARROW_DOWN
    assert decoder.read_key() == ord("q")
    assert decoder.read_key() == PAGE_DOWN
