"""
Utility package for key decoding and search support.
"""

from .keys import KeyDecoder
from .search import SearchEngine, SearchResult

__all__ = [
    'KeyDecoder',
    'SearchEngine',
    'SearchResult'
]
