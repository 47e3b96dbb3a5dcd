"""
inn - a small terminal text editor.
"""

import logging

from .core.buffer import Buffer, Row
from .core.editor import Editor

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ['Buffer', 'Row', 'Editor']
