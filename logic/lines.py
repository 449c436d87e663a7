"""
Line geometry for N×N boards.
Every window of `win_length` cells that could hold a winning line.
"""

from functools import lru_cache
from typing import List, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

# Cell codes used in the numpy view of a board
EMPTY_CODE = 0


@lru_cache(maxsize=None)
def window_indices(size: int, win_length: int) -> np.ndarray:
    """
    Flat cell indices of every line window on a size x size board.

    Windows are listed per direction: rows, columns, diagonals (down-right),
    anti-diagonals (down-left). Within each direction they follow the
    row-major order of their start cell.

    Args:
        size: Board dimension.
        win_length: Number of cells in a window.

    Returns:
        Read-only int array of shape (num_windows, win_length).
    """
    if win_length > size:
        return np.empty((0, win_length), dtype=np.intp)

    cells = np.arange(size * size).reshape(size, size)

    rows = sliding_window_view(cells, win_length, axis=1).reshape(-1, win_length)
    cols = sliding_window_view(cells, win_length, axis=0).reshape(-1, win_length)

    # Every win_length x win_length block holds one diagonal and one anti-diagonal
    blocks = sliding_window_view(cells, (win_length, win_length))
    diagonals = np.diagonal(blocks, axis1=2, axis2=3).reshape(-1, win_length)
    anti_diagonals = np.diagonal(
        blocks[..., ::-1], axis1=2, axis2=3
    ).reshape(-1, win_length)

    windows = np.concatenate([rows, cols, diagonals, anti_diagonals])
    windows.setflags(write=False)
    return windows


def line_windows(codes: np.ndarray, win_length: int) -> np.ndarray:
    """
    Cut an encoded board into its line windows.

    Args:
        codes: (size, size) array of cell codes.
        win_length: Number of cells in a window.

    Returns:
        Array of shape (num_windows, win_length) with the cell codes.
    """
    return codes.ravel()[window_indices(codes.shape[0], win_length)]


def window_cells(size: int, win_length: int, window: int) -> List[Tuple[int, int]]:
    """Get the (row, col) cells of a window by its index."""
    return [divmod(int(i), size) for i in window_indices(size, win_length)[window]]
