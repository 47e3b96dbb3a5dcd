"""
Entry point for the inn editor.
"""

import argparse
import curses
import logging
import sys
from typing import List, Optional

from .core.editor import Editor
from .ui.input_handler import HELP_STATUS_MESSAGE, QUIT_TIMES, InputHandler
from .ui.window import WindowManager
from .utils.keys import KeyDecoder

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        prog='inn',
        description="inn - a small terminal text editor"
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=str,
        help="File to open"
    )
    parser.add_argument(
        "--quit-times",
        type=int,
        default=QUIT_TIMES,
        help="Extra Ctrl-Q presses needed to quit with unsaved changes"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Write debug logging to this file"
    )
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str]) -> None:
    """Send log records to a file; the terminal belongs to curses."""

    if not log_file:
        return

    handler = logging.FileHandler(log_file)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger('inn')
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def run(stdscr: 'curses.window', editor: Editor, quit_times: int) -> None:
    """Main loop: draw, then block for the next key."""

    window_manager = WindowManager(stdscr, editor)
    input_handler = InputHandler(editor, quit_times)
    decoder = KeyDecoder(window_manager.read_byte)

    editor.set_status_message(HELP_STATUS_MESSAGE)

    while True:
        window_manager.refresh_all()
        if not input_handler.handle_input(decoder.read_key()):
            break


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = parse_args(argv)
    setup_logging(args.log_file)

    editor = Editor()
    if args.file:
        try:
            editor.open(args.file)
        except OSError as e:
            print(f"Error loading {args.file}: {e}", file=sys.stderr)
            return 1

    try:
        curses.wrapper(run, editor, args.quit_times)
    except (ValueError, curses.error) as e:
        logger.error("Terminal error: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
