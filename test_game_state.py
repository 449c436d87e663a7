"""
Tests for the game state: placing, undoing, win/draw checks, copies and
serialization.
"""

import pytest

from logic.game_state import GameState, Move, Player


def fill(state, rows):
    """Place markers from a picture like ["OX.", ...] ('.' is empty)."""
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            if ch != ".":
                assert state.place(r, c, Player(ch))


# ==================== PLACE / UNDO ====================

def test_new_state_is_empty():
    state = GameState(size=5, win_length=4)
    assert state.current_player == Player.O
    assert state.moves == []
    assert len(state.get_empty_cells()) == 25


@pytest.mark.parametrize("row,col", [(0, 0), (2, 3), (4, 4)])
def test_place_on_empty_cell(row, col):
    state = GameState(size=5, win_length=4)

    assert state.place(row, col, Player.X)
    assert state.board[row][col] == Player.X
    assert state.moves == [Move(row, col, Player.X)]


def test_place_on_occupied_cell_fails():
    state = GameState(size=3, win_length=3)
    assert state.place(1, 1, Player.O)

    assert not state.place(1, 1, Player.X)
    assert state.board[1][1] == Player.O
    assert len(state.moves) == 1


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 3), (7, 7)])
def test_place_off_board_fails(row, col):
    state = GameState(size=3, win_length=3)

    assert not state.place(row, col, Player.O)
    assert state.moves == []
    assert len(state.get_empty_cells()) == 9


def test_undo_returns_moves_newest_first():
    state = GameState(size=3, win_length=3)
    placed = [(0, 0, Player.O), (1, 1, Player.X), (2, 2, Player.O)]
    for row, col, player in placed:
        state.place(row, col, player)

    for row, col, player in reversed(placed):
        assert state.undo() == Move(row, col, player)

    assert all(cell is None for line in state.board for cell in line)
    assert state.undo() is None


def test_undo_on_empty_history():
    state = GameState()
    assert state.undo() is None
    assert state.moves == []


def test_switch_player_toggles():
    state = GameState()
    state.switch_player()
    assert state.current_player == Player.X
    state.switch_player()
    assert state.current_player == Player.O


def test_player_opposite():
    assert Player.O.opposite() == Player.X
    assert Player.X.opposite() == Player.O


def test_empty_cells_row_major():
    state = GameState(size=3, win_length=3)
    fill(state, ["O.X", ".X.", "..O"])
    assert state.get_empty_cells() == [(0, 1), (1, 0), (1, 2), (2, 0), (2, 1)]


@pytest.mark.parametrize("size,win_length", [(0, 1), (3, 4), (3, 0), (-2, 1)])
def test_invalid_geometry_raises(size, win_length):
    with pytest.raises(ValueError):
        GameState(size=size, win_length=win_length)


# ==================== WIN / DRAW ====================

@pytest.mark.parametrize("cells", [
    [(2, 0), (2, 1), (2, 2), (2, 3)],          # horizontal
    [(0, 4), (1, 4), (2, 4), (3, 4)],          # vertical
    [(1, 0), (2, 1), (3, 2), (4, 3)],          # diagonal
    [(0, 4), (1, 3), (2, 2), (3, 1)],          # anti-diagonal
])
def test_check_win_each_direction(cells):
    state = GameState(size=5, win_length=4)
    for row, col in cells:
        state.place(row, col, Player.X)

    assert state.check_win(Player.X)
    assert not state.check_win(Player.O)


@pytest.mark.parametrize("cells", [
    [(2, 0), (2, 1), (2, 2)],
    [(0, 4), (1, 4), (2, 4)],
    [(1, 0), (2, 1), (3, 2)],
    [(0, 4), (1, 3), (2, 2)],
])
def test_check_win_near_miss(cells):
    state = GameState(size=5, win_length=4)
    for row, col in cells:
        state.place(row, col, Player.X)

    assert not state.check_win(Player.X)


def test_broken_run_is_not_a_win():
    state = GameState(size=5, win_length=4)
    fill(state, ["OOXOO", ".....", ".....", ".....", "....."])
    assert not state.check_win(Player.O)


def test_anti_diagonal_in_corner():
    state = GameState(size=5, win_length=4)
    for row, col in [(1, 4), (2, 3), (3, 2), (4, 1)]:
        state.place(row, col, Player.O)
    assert state.check_win(Player.O)


def test_check_draw_full_board():
    state = GameState(size=3, win_length=3)
    fill(state, ["OXO", "OXX", "XOO"])
    assert state.check_draw()
    assert not state.check_win(Player.O)
    assert not state.check_win(Player.X)


def test_check_draw_ignores_wins():
    state = GameState(size=3, win_length=3)
    fill(state, ["OOO", "XXO", "XOX"])
    assert state.check_win(Player.O)
    assert state.check_draw()


def test_not_draw_with_empty_cell():
    state = GameState(size=3, win_length=3)
    fill(state, ["OXO", "OXX", "XO."])
    assert not state.check_draw()


# ==================== COPY ====================

def test_copy_is_independent():
    state = GameState(size=4, win_length=3)
    state.place(0, 0, Player.O)

    clone = state.copy()
    clone.place(1, 1, Player.X)
    clone.switch_player()

    assert state.board[1][1] is None
    assert len(state.moves) == 1
    assert state.current_player == Player.O

    state.undo()
    assert clone.board[0][0] == Player.O
    assert len(clone.moves) == 2


# ==================== SERIALIZE ====================

@pytest.mark.parametrize("rows", [
    [],
    ["O...", ".X..", "....", "...."],
    ["OXOX", "XOXO", "OXOX", "XOXO"],
])
def test_serialize_round_trip(rows):
    state = GameState(size=4, win_length=3)
    fill(state, rows)
    state.switch_player()

    restored = GameState.from_dict(state.serialize())

    assert restored == state
    assert restored.moves == state.moves
    assert restored.current_player == Player.X


def test_restore_from_replaces_state():
    source = GameState(size=3, win_length=3)
    source.place(1, 1, Player.X)
    target = GameState(size=5, win_length=4)
    target.place(0, 0, Player.O)

    target.restore_from(source.serialize())

    assert target.size == 3
    assert target.win_length == 3
    assert target.board[1][1] == Player.X
    assert target.moves == [Move(1, 1, Player.X)]


def test_serialized_record_is_plain_data():
    state = GameState(size=3, win_length=3)
    state.place(0, 2, Player.O)
    record = state.serialize()

    assert record == {
        "size": 3,
        "win_length": 3,
        "board": [[None, None, "O"], [None, None, None], [None, None, None]],
        "move_history": [{"row": 0, "col": 2, "player": "O"}],
        "current_player": "O",
    }


def test_restore_rejects_history_mismatch():
    state = GameState(size=3, win_length=3)
    state.place(0, 0, Player.O)
    record = state.serialize()
    record["move_history"] = []

    with pytest.raises(ValueError):
        GameState.from_dict(record)


def test_restore_rejects_missing_fields():
    with pytest.raises(ValueError):
        GameState.from_dict({"size": 3})


def test_render_shows_markers():
    state = GameState(size=3, win_length=3)
    state.place(0, 0, Player.O)
    state.place(2, 1, Player.X)
    text = state.render()

    assert " O |" in text
    assert " X |" in text
    assert text.count("+---+---+---+") == 4
