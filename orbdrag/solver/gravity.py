"""
Gravity Module - Removes cleared cells and compacts playable columns.
"""

from typing import AbstractSet, List, Sequence

from .board import COLS, EMPTY, PLAY_ROWS_START, TOTAL_ROWS, Position


def apply_gravity(grid: Sequence[Sequence[int]],
                  clear_mask: AbstractSet[Position]) -> List[List[int]]:
    """
    Drop surviving cells to the bottom of each playable column.

    Cells outside the mask keep their relative order; vacated cells at
    the top of the playable region become EMPTY. Row 0 is copied as-is
    and no new pieces are introduced.

    Args:
        grid: 6x6 cell codes
        clear_mask: Positions removed before compaction

    Returns:
        New 2D list of cell codes
    """
    result = [list(row) for row in grid]
    if not clear_mask:
        return result

    for c in range(COLS):
        write_row = TOTAL_ROWS - 1
        for r in range(TOTAL_ROWS - 1, PLAY_ROWS_START - 1, -1):
            if (r, c) not in clear_mask:
                result[write_row][c] = grid[r][c]
                write_row -= 1
        for r in range(write_row, PLAY_ROWS_START - 1, -1):
            result[r][c] = EMPTY

    return result
