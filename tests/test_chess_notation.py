import pytest

from move_detection.chess_notation import MoveInferencer
from move_detection.utils import CellIndex


@pytest.fixture
def inferencer():
    return MoveInferencer()


@pytest.mark.parametrize("row, col, flipped, expected", [
    (0, 0, False, "a8"),
    (7, 7, False, "h1"),
    (0, 0, True, "h1"),
    (7, 0, True, "h8"),
    (7, 7, True, "a8"),
    (6, 4, False, "e2"),
    (1, 3, True, "e2"),
])
def test_square_to_uci(inferencer, row, col, flipped, expected):
    assert inferencer.square_to_uci(row, col, flipped) == expected


@pytest.mark.parametrize("flipped", [False, True])
def test_every_square_maps_back_to_its_cell(inferencer, flipped):
    names = {}
    for row in range(8):
        for col in range(8):
            name = inferencer.square_to_uci(row, col, flipped)
            names[name] = (row, col)
            assert inferencer.uci_to_square(name, flipped) == (row, col)
    assert len(names) == 64


@pytest.mark.parametrize("square", ["", "a", "a9", "i1", "A1", "e22", "11"])
def test_uci_to_square_rejects_malformed_squares(inferencer, square):
    with pytest.raises(ValueError):
        inferencer.uci_to_square(square)


def test_two_changed_squares_are_origin_then_destination(inferencer):
    result = inferencer.infer([CellIndex(1, 4), CellIndex(3, 4)], flipped=False)
    assert result.detected
    assert result.move == "e7e5"
    assert result.describe() == "Move detected: e7e5"


def test_orientation_changes_only_the_notation(inferencer):
    changes = [CellIndex(1, 4), CellIndex(3, 4)]
    assert inferencer.infer(changes, flipped=True).move == "d2d4"
    assert inferencer.infer(changes, flipped=True).changed_cells == changes


@pytest.mark.parametrize("changes", [
    [],
    [CellIndex(4, 4)],
    [CellIndex(7, 4), CellIndex(7, 5), CellIndex(7, 6)],
    [CellIndex(7, 4), CellIndex(7, 5), CellIndex(7, 6), CellIndex(7, 7)],
])
def test_any_other_count_is_no_move(inferencer, changes):
    result = inferencer.infer(changes, flipped=False)
    assert not result.detected
    assert result.move is None
    assert result.describe() == f"No move detected ({len(changes)} squares changed)"


def test_format_game_notation(inferencer):
    assert inferencer.format_game_notation([]) == ""
    assert inferencer.format_game_notation(["e2e4"]) == "1. e2e4"
    assert inferencer.format_game_notation(["e2e4", "e7e5", "g1f3"]) == "1. e2e4 e7e5 2. g1f3"
    assert inferencer.format_game_notation(["e7e5", "g1f3", "b8c6"], first_move_black=True) == "1... e7e5 2. g1f3 b8c6"


def test_format_game_notation_with_a_single_black_move(inferencer):
    assert inferencer.format_game_notation(["e7e5"], first_move_black=True) == "1... e7e5"
    assert inferencer.format_game_notation([], first_move_black=True) == ""
