from typing import List, Tuple

from .utils import CellIndex, MoveResult

class MoveInferencer:
    def square_to_uci(self, row: int, col: int, flipped: bool = False) -> str:
        """
        Map a visual square (row 0 = top, col 0 = left) to its algebraic name.
        """
        if flipped:  # H1 is top-left
            file = chr(ord('a') + (7 - col))
            rank = row + 1
        else:  # A8 is top-left
            file = chr(ord('a') + col)
            rank = 8 - row
        return f'{file}{rank}'

    def uci_to_square(self, square: str, flipped: bool = False) -> Tuple[int, int]:
        if len(square) != 2 or square[0] not in 'abcdefgh' or square[1] not in '12345678':
            raise ValueError(f"Not a chess square: {square!r}")
        file = ord(square[0]) - ord('a')
        rank = int(square[1])
        if flipped:
            return rank - 1, 7 - file
        return 8 - rank, file

    def infer(self, changes: List[CellIndex], flipped: bool = False) -> MoveResult:
        """
        Interprets the changed squares as a move.

        Exactly two changed squares are read as origin then destination in
        row-major order; any other count is reported as no move.
        """
        if len(changes) != 2:
            return MoveResult(None, list(changes))

        origin, destination = changes
        move = (self.square_to_uci(origin[0], origin[1], flipped) +
                self.square_to_uci(destination[0], destination[1], flipped))
        return MoveResult(move, list(changes))

    def format_game_notation(self, moves: List[str], first_move_black: bool = False) -> str:
        """Number the moves pairwise, "1. e2e4 e7e5 2. g1f3"."""
        parts = []
        move_number = 1
        if first_move_black and moves:
            parts.append(f"1... {moves[0]}")
            moves = moves[1:]
            move_number = 2

        for i in range(0, len(moves), 2):
            parts.append(f"{move_number}. " + " ".join(moves[i:i + 2]))
            move_number += 1
        return " ".join(parts)
