import numpy as np
from typing import List

import logging

from .config import DETECTION_SETTINGS
from .utils import CellIndex

logger = logging.getLogger(__name__)

class GridDiffer:
    def __init__(self, pixel_threshold: int = DETECTION_SETTINGS['pixel_threshold'],
                 cell_threshold: float = DETECTION_SETTINGS['cell_threshold']):
        self.pixel_threshold = pixel_threshold
        self.cell_threshold = cell_threshold
        self.num_cells = 8

    def _color_channels(self, image: np.ndarray) -> np.ndarray:
        # drop alpha, widen so the subtraction cannot wrap around
        if image.ndim == 2:
            image = image[:, :, np.newaxis]
        return image[:, :, :3].astype(np.int16)

    def changed_pixels(self, previous: np.ndarray, current: np.ndarray) -> np.ndarray:
        """
        Returns a boolean mask over the common extent of both images, True where
        the summed absolute RGB difference exceeds the pixel threshold.
        """
        height = min(previous.shape[0], current.shape[0])
        width = min(previous.shape[1], current.shape[1])
        old = self._color_channels(previous[:height, :width])
        new = self._color_channels(current[:height, :width])
        difference = np.abs(old - new).sum(axis=2)
        return difference > self.pixel_threshold

    def cell_ratios(self, previous: np.ndarray, current: np.ndarray) -> np.ndarray:
        """
        Returns the 8x8 matrix of changed-pixel fractions, one per square.

        Square size is taken from the previous image's width. Pixels outside the
        common extent of the two images count as unchanged.
        """
        square_size = previous.shape[1] // self.num_cells
        if square_size == 0:
            return np.zeros((self.num_cells, self.num_cells), dtype=np.float64)

        grid_size = square_size * self.num_cells
        changed = self.changed_pixels(previous, current)

        mask = np.zeros((grid_size, grid_size), dtype=bool)
        height = min(changed.shape[0], grid_size)
        width = min(changed.shape[1], grid_size)
        mask[:height, :width] = changed[:height, :width]

        counts = mask.reshape(self.num_cells, square_size, self.num_cells, square_size).sum(axis=(1, 3))
        return counts / float(square_size * square_size)

    def diff(self, previous: np.ndarray, current: np.ndarray) -> List[CellIndex]:
        """
        Returns the squares whose content changed, in row-major order.
        """
        ratios = self.cell_ratios(previous, current)
        changes = [CellIndex(int(row), int(col)) for row, col in np.argwhere(ratios > self.cell_threshold)]
        if changes:
            logger.debug(f"Changed squares: {[(c.row, c.col) for c in changes]}")
        return changes
