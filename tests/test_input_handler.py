"""Tests for key dispatch and the quit confirmation counter."""

from inn.core.editor import Editor
from inn.core.prompt import SearchPrompt
from inn.ui.input_handler import InputHandler
from inn.utils.keys import (
    ARROW_LEFT,
    ARROW_RIGHT,
    BACKSPACE,
    CTRL_F,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
)

from conftest import make_buffer


def press(handler, *keys):
    return [handler.handle_input(key) for key in keys]


class TestQuit:
    def test_clean_buffer_quits_immediately(self) -> None:
        handler = InputHandler(Editor(make_buffer(["a"])))
        assert handler.handle_input(CTRL_Q) is False

    def test_dirty_buffer_needs_repeated_presses(self) -> None:
        editor = Editor(make_buffer(["a"]))
        editor.buffer.dirty = True
        handler = InputHandler(editor, quit_times=2)
        assert press(handler, CTRL_Q, CTRL_Q, CTRL_Q) == [True, True, False]
        assert "unsaved changes" in editor.status_message

    def test_other_key_resets_counter(self) -> None:
        editor = Editor(make_buffer(["a"]))
        editor.buffer.dirty = True
        handler = InputHandler(editor, quit_times=1)
        assert press(handler, CTRL_Q, ARROW_LEFT, CTRL_Q) == [True, True, True]
        assert handler.handle_input(CTRL_Q) is False

    def test_default_count(self) -> None:
        editor = Editor(make_buffer(["a"]))
        editor.buffer.dirty = True
        handler = InputHandler(editor)
        assert press(handler, CTRL_Q, CTRL_Q, CTRL_Q, CTRL_Q) == [True, True, True, False]


class TestDispatch:
    def test_typing_and_enter(self) -> None:
        editor = Editor()
        handler = InputHandler(editor)
        press(handler, ord("h"), ord("i"), ENTER, ord("\t"), ord("x"))
        assert [row.chars for row in editor.buffer.rows] == ["hi", "\tx"]

    def test_backspace_and_delete(self) -> None:
        editor = Editor(make_buffer(["abcd"]))
        handler = InputHandler(editor)
        press(handler, END_KEY, BACKSPACE, HOME_KEY, DEL_KEY)
        assert editor.buffer.rows[0].chars == "bc"
        assert editor.cursor.cx == 0

    def test_arrows(self) -> None:
        editor = Editor(make_buffer(["abc"]))
        handler = InputHandler(editor)
        press(handler, ARROW_RIGHT, ARROW_RIGHT, ARROW_LEFT)
        assert editor.cursor.cx == 1

    def test_ignored_keys(self) -> None:
        editor = Editor(make_buffer(["abc"]))
        handler = InputHandler(editor)
        press(handler, CTRL_L, ESC)
        assert editor.buffer.rows[0].chars == "abc"
        assert not editor.buffer.dirty

    def test_find_routes_keys_to_prompt(self, c_editor) -> None:
        handler = InputHandler(c_editor)
        handler.handle_input(CTRL_F)
        assert isinstance(c_editor.prompt, SearchPrompt)
        press(handler, ord("y"), ENTER)
        assert c_editor.prompt is None
        assert (c_editor.cursor.cy, c_editor.cursor.cx) == (1, 4)
        assert not c_editor.buffer.dirty

    def test_quit_key_inside_prompt_does_not_quit(self, c_editor) -> None:
        c_editor.buffer.dirty = False
        handler = InputHandler(c_editor)
        handler.handle_input(CTRL_F)
        assert handler.handle_input(CTRL_Q) is True
        assert c_editor.prompt is not None

    def test_save_key(self, tmp_path) -> None:
        path = tmp_path / "out.txt"
        editor = Editor(make_buffer(["abc"]))
        editor.buffer.filename = str(path)
        handler = InputHandler(editor)
        press(handler, ord("!"), CTRL_S)
        assert path.read_text() == "!abc\n"
        assert not editor.buffer.dirty
