"""Shared fixtures for the editor tests."""

import pytest

from inn.core.buffer import Buffer
from inn.core.editor import Editor


def make_buffer(lines, filename=None):
    """Build a buffer from lines, highlighted for filename."""
    buf = Buffer()
    buf.select_syntax(filename)
    for line in lines:
        buf.insert_row(buf.numrows, line)
    buf.dirty = False
    return buf


@pytest.fixture
def c_buffer():
    """The two-row C buffer used throughout the examples."""
    return make_buffer(["int x = 1; // hi", "int y = 2;"], "example.c")


@pytest.fixture
def c_editor(c_buffer):
    return Editor(c_buffer, screenrows=10, screencols=40)
