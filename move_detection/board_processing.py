import numpy as np

import logging

from .utils import BoardRect, FrameDecodeError, RegionOutOfBounds

logger = logging.getLogger(__name__)

class RegionExtractor:
    def frame_size(self, frame: np.ndarray):
        """
        Returns (width, height) of a frame, failing if it is not a pixel array.
        """
        if frame is None:
            raise FrameDecodeError("Frame could not be loaded.")
        if not isinstance(frame, np.ndarray) or frame.ndim not in (2, 3) or frame.size == 0:
            raise FrameDecodeError(f"Unsupported frame of shape {getattr(frame, 'shape', None)}")
        height, width = frame.shape[:2]
        return width, height

    def extract(self, frame: np.ndarray, rect: BoardRect) -> np.ndarray:
        """
        Crops the frame to the board area. The result is a size x size copy
        whose pixel (i, j) is frame pixel (rect.x + i, rect.y + j).
        """
        width, height = self.frame_size(frame)

        if rect.x + rect.size > width or rect.y + rect.size > height:
            raise RegionOutOfBounds(rect, width, height)

        # copy so the full frame can be released right away
        board = frame[rect.y:rect.y + rect.size, rect.x:rect.x + rect.size].copy()
        logger.debug(f"Extracted board of shape {board.shape} at ({rect.x}, {rect.y})")
        return board
