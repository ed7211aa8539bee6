"""Column width resolution for the playlist grid."""

from __future__ import annotations

from typing import Sequence

from ncmpy.columns import ColumnDescriptor


def layout(total_width: int, columns: Sequence[ColumnDescriptor]) -> list[int]:
    """Return the cell width of each column for a grid ``total_width`` wide.

    Fixed columns keep their declared width. Relative columns share what is
    left in proportion to their weights, rounded down, so the result may
    leave a few trailing cells unused.
    """
    fixed_total = sum(column.width for column in columns if column.is_fixed)
    relative_total = sum(column.width for column in columns if not column.is_fixed)
    free_space = max(0, total_width - fixed_total)

    widths: list[int] = []
    for column in columns:
        if column.is_fixed:
            widths.append(column.width)
        elif relative_total:
            widths.append(column.width * free_space // relative_total)
        else:
            widths.append(0)
    return widths

