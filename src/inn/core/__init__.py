"""
Core package for the editing and rendering logic.

This package implements the row buffer with its edit operations, tab
rendering and column mapping, the syntax highlighter, the cursor and
viewport, and the editor session with its prompts. Nothing here does
terminal I/O.
"""

from .buffer import Buffer, Row

__all__ = ['Buffer', 'Row']
