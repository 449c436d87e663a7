"""
Tests for the win checker and the line window geometry.
"""

import numpy as np
import pytest

from logic.game_state import GameState, Player
from logic.lines import line_windows, window_indices
from logic.win_checker import WinChecker


def make_state(rows, win_length):
    state = GameState(size=len(rows), win_length=win_length)
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            if ch != ".":
                state.place(r, c, Player(ch))
    return state


@pytest.mark.parametrize("size,win_length,expected", [
    (3, 3, 8),      # 3 rows, 3 columns, 2 diagonals
    (5, 4, 28),     # 10 + 10 + 4 + 4
    (4, 1, 64),     # every cell, four times
    (3, 4, 0),      # too long to fit
])
def test_window_count(size, win_length, expected):
    assert window_indices(size, win_length).shape == (expected, win_length)


def test_windows_on_3x3():
    windows = {tuple(w) for w in window_indices(3, 3).tolist()}
    assert windows == {
        (0, 1, 2), (3, 4, 5), (6, 7, 8),
        (0, 3, 6), (1, 4, 7), (2, 5, 8),
        (0, 4, 8), (2, 4, 6),
    }


def test_windows_are_read_only():
    windows = window_indices(4, 3)
    with pytest.raises(ValueError):
        windows[0, 0] = 99


def test_line_windows_reads_codes():
    codes = np.arange(9).reshape(3, 3)
    windows = line_windows(codes, 3)
    assert windows[0].tolist() == [0, 1, 2]
    assert windows[-1].tolist() == [2, 4, 6]


def test_check_winner():
    checker = WinChecker()
    state = make_state(["XXX.", "OO..", "O...", "...."], 3)
    assert checker.check_winner(state) == Player.X
    assert checker.has_won(state, Player.X)
    assert not checker.has_won(state, Player.O)


def test_no_winner():
    checker = WinChecker()
    state = make_state(["XO.", ".X.", "..O"], 3)
    assert checker.check_winner(state) is None
    assert checker.get_winning_line(state) is None


@pytest.mark.parametrize("rows,line", [
    (["O...", "O...", "O...", "...."], [(0, 0), (1, 0), (2, 0)]),
    ([".X..", "..X.", "...X", "...."], [(0, 1), (1, 2), (2, 3)]),
    (["....", "..O.", ".O..", "O..."], [(1, 2), (2, 1), (3, 0)]),
])
def test_get_winning_line(rows, line):
    state = make_state(rows, 3)
    assert WinChecker().get_winning_line(state) == line


def test_game_result_in_progress():
    result = WinChecker().game_result(make_state(["X..", "...", "..."], 3))
    assert not result.is_game_over
    assert result.winner is None
    assert not result.is_draw


def test_game_result_draw():
    result = WinChecker().game_result(make_state(["OXO", "OXX", "XOO"], 3))
    assert result.is_game_over
    assert result.is_draw
    assert result.winner is None


def test_game_result_full_board_win_is_not_draw():
    result = WinChecker().game_result(make_state(["OOO", "XXO", "XOX"], 3))
    assert result.is_game_over
    assert result.winner == Player.O
    assert not result.is_draw
    assert result.winning_line == [(0, 0), (0, 1), (0, 2)]
