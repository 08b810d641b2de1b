import numpy as np
import pytest

BOARD_SIZE = 80
SQUARE_SIZE = BOARD_SIZE // 8


def make_board(size: int = BOARD_SIZE) -> np.ndarray:
    """Checkered 8x8 board in BGR, light and dark squares."""
    board = np.zeros((size, size, 3), dtype=np.uint8)
    square = size // 8
    for row in range(8):
        for col in range(8):
            color = (181, 217, 240) if (row + col) % 2 == 0 else (99, 136, 181)
            board[row * square:(row + 1) * square, col * square:(col + 1) * square] = color
    return board


def paint_square(board: np.ndarray, row: int, col: int, color=(20, 20, 20), fraction: float = 0.5) -> np.ndarray:
    """Returns a copy with the top part of one square painted, covering `fraction` of it."""
    painted = board.copy()
    square = board.shape[1] // 8
    rows = int(round(square * fraction))
    painted[row * square:row * square + rows, col * square:(col + 1) * square] = color
    return painted


def embed(board: np.ndarray, x: int, y: int, width: int = 200, height: int = 150) -> np.ndarray:
    frame = np.full((height, width, 3), 255, dtype=np.uint8)
    frame[y:y + board.shape[0], x:x + board.shape[1]] = board
    return frame


@pytest.fixture
def board():
    return make_board()
