"""
Tab expansion and raw/rendered column mapping for buffer rows.
"""

from typing import Final, TYPE_CHECKING

if TYPE_CHECKING:
    from .buffer import Row

TAB_STOP: Final[int] = 8


def render(raw: str, tab_stop: int = TAB_STOP) -> str:
    """Expand tabs to the next multiple of tab_stop, copying everything else."""

    out = []
    idx = 0
    for ch in raw:
        if ch != '\t':
            out.append(ch)
            idx += 1
            continue

        out.append(' ')
        idx += 1
        while idx % tab_stop != 0:
            out.append(' ')
            idx += 1

    return ''.join(out)


def raw_to_rendered_column(row: 'Row', cx: int, tab_stop: int = TAB_STOP) -> int:
    """Convert a raw column of the row into its rendered column."""

    rx = 0
    for ch in row.chars[:cx]:
        if ch == '\t':
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1

    return rx


def rendered_to_raw_column(row: 'Row', rx: int, tab_stop: int = TAB_STOP) -> int:
    """
    Convert a rendered column back into a raw column.

    Returns the first raw column whose rendered position reaches or exceeds
    rx, or the row size when rx lies past the end of the row.
    """

    cur_rx = 0
    for cx, ch in enumerate(row.chars):
        if cur_rx >= rx:
            return cx

        if ch == '\t':
            cur_rx += (tab_stop - 1) - (cur_rx % tab_stop)
        cur_rx += 1

    return row.size
