"""
Syntax highlighting module for the editor.

Rows are classified one rendered character at a time against a language
profile. Block comment state is carried from row to row through the
row's hl_open_comment flag.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Final, List, Optional, Sequence, Tuple, TYPE_CHECKING

from pygments.lexers import get_lexer_for_filename
from pygments.token import Token, _TokenType
from pygments.util import ClassNotFound

if TYPE_CHECKING:
    from .buffer import Row

logger = logging.getLogger(__name__)

HL_NORMAL: Final[int] = 0
HL_COMMENT: Final[int] = 1
HL_MLCOMMENT: Final[int] = 2
HL_KEYWORD1: Final[int] = 3
HL_KEYWORD2: Final[int] = 4
HL_STRING: Final[int] = 5
HL_NUMBER: Final[int] = 6
HL_MATCH: Final[int] = 7

HL_HIGHLIGHT_NUMBERS: Final[int] = 1 << 0
HL_HIGHLIGHT_STRINGS: Final[int] = 1 << 1

SEPARATORS: Final[str] = ',.()+-/*=~%<>[];'

HIGHLIGHT_TOKENS: Final[Dict[int, _TokenType]] = {
    HL_NORMAL: Token.Text,
    HL_COMMENT: Token.Comment.Single,
    HL_MLCOMMENT: Token.Comment.Multiline,
    HL_KEYWORD1: Token.Keyword,
    HL_KEYWORD2: Token.Keyword.Type,
    HL_STRING: Token.String,
    HL_NUMBER: Token.Number,
    HL_MATCH: Token.Generic.Emph,
}


@dataclass(frozen=True)
class LanguageProfile:
    """
    Highlighting rules for one language.

    Keywords ending in '|' belong to the second keyword class.
    """

    name: str
    filematch: Tuple[str, ...]
    keywords: Tuple[str, ...]
    singleline_comment_start: str
    multiline_comment_start: str
    multiline_comment_end: str
    flags: int
    lexer_aliases: Tuple[str, ...] = ()


C_KEYWORDS: Final[Tuple[str, ...]] = (
    'switch', 'if', 'while', 'for', 'break', 'continue', 'return', 'else',
    'struct', 'union', 'typedef', 'static', 'enum', 'class', 'case',
    'default', 'do', 'goto', 'sizeof', 'extern', 'volatile', 'register',
    'NULL', 'namespace', 'template', 'this', 'new', 'delete', 'true',
    'false', 'public', 'private', 'protected', 'virtual', 'try', 'throw',
    'operator',
    'int|', 'long|', 'double|', 'float|', 'char|', 'unsigned|', 'signed|',
    'void|', 'short|', 'auto|', 'const|', 'bool|',
)

PYTHON_KEYWORDS: Final[Tuple[str, ...]] = (
    'and', 'as', 'assert', 'async', 'await', 'break', 'class', 'continue',
    'def', 'del', 'elif', 'else', 'except', 'finally', 'for', 'from',
    'global', 'if', 'import', 'in', 'is', 'lambda', 'nonlocal', 'not', 'or',
    'pass', 'raise', 'return', 'try', 'while', 'with', 'yield',
    'None|', 'True|', 'False|', 'self|', 'int|', 'str|', 'float|', 'bool|',
    'list|', 'dict|', 'tuple|', 'set|', 'bytes|',
)

HLDB: Final[Tuple[LanguageProfile, ...]] = (
    LanguageProfile(
        name='c',
        filematch=('.c', '.h', '.cpp', '.hpp', '.cc'),
        keywords=C_KEYWORDS,
        singleline_comment_start='//',
        multiline_comment_start='/*',
        multiline_comment_end='*/',
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
        lexer_aliases=('c', 'cpp', 'c++', 'objective-c'),
    ),
    LanguageProfile(
        name='python',
        filematch=('.py', '.pyw'),
        keywords=PYTHON_KEYWORDS,
        singleline_comment_start='#',
        multiline_comment_start='',
        multiline_comment_end='',
        flags=HL_HIGHLIGHT_NUMBERS | HL_HIGHLIGHT_STRINGS,
        lexer_aliases=('python', 'python3', 'py', 'py3'),
    ),
)


def is_separator(ch: str) -> bool:
    """Check whether a character bounds keywords and numbers."""

    return ch == '' or ch == '\0' or ch.isspace() or ch in SEPARATORS


def token_for(hl: int) -> _TokenType:
    """Get the pygments token type used to style a highlight class."""

    return HIGHLIGHT_TOKENS.get(hl, Token.Text)


def _match_filename(profile: LanguageProfile, filename: str) -> bool:
    for pattern in profile.filematch:
        if pattern.startswith('.'):
            if filename.endswith(pattern):
                return True
            continue

        if pattern in filename:
            return True

    return False


def select_profile(filename: Optional[str],
                   profiles: Sequence[LanguageProfile] = HLDB) -> Optional[LanguageProfile]:
    """
    Pick the language profile for a file name.

    The profile table is tried first. Names it does not know are resolved
    through pygments, and the profile sharing an alias with the lexer wins.

    Args:
        filename: Name of the file being edited
        profiles: Profile table to search

    Returns:
        The matching profile, or None when the file gets no highlighting
    """

    if not filename:
        return None

    for profile in profiles:
        if _match_filename(profile, filename):
            logger.debug("Selected %s profile for %s", profile.name, filename)
            return profile

    try:
        lexer = get_lexer_for_filename(filename)
    except ClassNotFound:
        return None

    aliases = set(lexer.aliases)
    for profile in profiles:
        if aliases.intersection(profile.lexer_aliases):
            logger.debug("Selected %s profile for %s via lexer %s",
                         profile.name, filename, lexer.name)
            return profile

    return None


class SyntaxHighlighter:
    """Classifies rendered row characters using a language profile."""

    def __init__(self, profile: Optional[LanguageProfile] = None) -> None:
        self.profile = profile

    def update(self, rows: List['Row'], at: int) -> int:
        """
        Highlight row `at` and every following row its comment state reaches.

        Returns the number of rows that were highlighted.
        """

        count = 0
        while 0 <= at < len(rows):
            changed = self.highlight_row(rows, at)
            count += 1
            if not changed:
                break
            at += 1

        return count

    def highlight_row(self, rows: List['Row'], at: int) -> bool:
        """
        Classify one row in place.

        Returns True when the row's open block comment flag changed, which
        means the next row has to be highlighted again.
        """

        row = rows[at]
        row.hl = [HL_NORMAL] * row.rsize

        profile = self.profile
        if profile is None:
            changed = row.hl_open_comment
            row.hl_open_comment = False
            return changed

        keywords = profile.keywords
        scs = profile.singleline_comment_start
        mcs = profile.multiline_comment_start
        mce = profile.multiline_comment_end
        numbers = bool(profile.flags & HL_HIGHLIGHT_NUMBERS)
        strings = bool(profile.flags & HL_HIGHLIGHT_STRINGS)

        text = row.render
        hl = row.hl
        prev_sep = True
        in_string = ''
        in_comment = at > 0 and rows[at - 1].hl_open_comment

        i = 0
        while i < len(text):
            ch = text[i]
            prev_hl = hl[i - 1] if i > 0 else HL_NORMAL

            if scs and not in_string and not in_comment and text.startswith(scs, i):
                hl[i:] = [HL_COMMENT] * (len(text) - i)
                break

            if mcs and mce and not in_string:
                if in_comment:
                    if text.startswith(mce, i):
                        end = min(i + len(mce), len(text))
                        hl[i:end] = [HL_MLCOMMENT] * (end - i)
                        i = end
                        in_comment = False
                        prev_sep = True
                        continue

                    hl[i] = HL_MLCOMMENT
                    i += 1
                    continue

                if text.startswith(mcs, i):
                    end = min(i + len(mcs), len(text))
                    hl[i:end] = [HL_MLCOMMENT] * (end - i)
                    i = end
                    in_comment = True
                    continue

            if strings:
                if in_string:
                    hl[i] = HL_STRING
                    if ch == '\\' and i + 1 < len(text):
                        hl[i + 1] = HL_STRING
                        i += 2
                        continue

                    if ch == in_string:
                        in_string = ''
                    i += 1
                    prev_sep = True
                    continue

                if ch in ('"', "'"):
                    in_string = ch
                    hl[i] = HL_STRING
                    i += 1
                    continue

            if numbers:
                if (ch.isdigit() and (prev_sep or prev_hl == HL_NUMBER)) or \
                        (ch == '.' and prev_hl == HL_NUMBER):
                    hl[i] = HL_NUMBER
                    i += 1
                    prev_sep = False
                    continue

            if prev_sep:
                matched = self._match_keyword(text, hl, i, keywords)
                if matched:
                    i += matched
                    prev_sep = False
                    continue

            prev_sep = is_separator(ch)
            i += 1

        changed = row.hl_open_comment != in_comment
        row.hl_open_comment = in_comment
        return changed

    @staticmethod
    def _match_keyword(text: str, hl: List[int], i: int, keywords: Tuple[str, ...]) -> int:
        """Mark a keyword starting at i and return its length, or 0."""

        for keyword in keywords:
            second_class = keyword.endswith('|')
            word = keyword[:-1] if second_class else keyword
            end = i + len(word)

            if not word or not text.startswith(word, i):
                continue

            tail = text[end] if end < len(text) else ''
            if not is_separator(tail):
                continue

            mark = HL_KEYWORD2 if second_class else HL_KEYWORD1
            hl[i:end] = [mark] * len(word)
            return len(word)

        return 0
