"""
UI package for the terminal front end.

This package implements the WindowManager that draws the editor with
curses and reads raw key bytes, and the InputHandler that dispatches
decoded keys to editor actions.
"""

from .input_handler import InputHandler
from .window import WindowManager

__all__ = ['WindowManager', 'InputHandler']
