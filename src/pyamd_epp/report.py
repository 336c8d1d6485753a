"""Render read results as aligned columns."""

from typing import Sequence

from .types import ReadResult

NUM_COLUMNS = 3
COLUMN_SPACING = 2


def format_report(
    results: Sequence[ReadResult],
    columns: int = NUM_COLUMNS,
    spacing: int = COLUMN_SPACING,
) -> list[str]:
    """
    Lay out "<label>: <value>" entries in rows of `columns`, left to right then top to bottom.

    Every entry is left-aligned and padded to the widest entry; entries in a row
    are joined by `spacing` spaces. Input order is kept, so sort before calling.
    """
    if columns < 1:
        raise ValueError(f"columns must be >= 1, got {columns}")
    if not results:
        return []

    entries = [r.rendered for r in results]
    width = max(len(e) for e in entries)
    sep = " " * spacing

    lines: list[str] = []
    for start in range(0, len(entries), columns):
        row = entries[start:start + columns]
        lines.append(sep.join(e.ljust(width) for e in row))
    return lines
