from typing import Iterable
import cv2
import logging
import mss
from mss.exception import ScreenShotError
import numpy as np

from .config import DETECTION_SETTINGS
from .utils import CaptureUnavailable

logger = logging.getLogger(__name__)

class VideoFileSampler:
    def __init__(self, video_path: str, interval_seconds: float = DETECTION_SETTINGS['interval_seconds']):
        """
        Supplies one frame per detection interval of video time.
        """
        self.video_path = video_path
        self.cap = cv2.VideoCapture(video_path)
        if not self.cap.isOpened():
            raise ValueError(f"Could not open video: {video_path}")

        self.fps = self.cap.get(cv2.CAP_PROP_FPS) or 1
        self.frame_interval = max(1, int(self.fps * interval_seconds))
        self.frame_number = 0
        self.exhausted = False

    def sample(self) -> np.ndarray:
        if self.exhausted:
            raise CaptureUnavailable(f"Video {self.video_path} is exhausted")

        # the first frame is the baseline, then one frame every interval
        skip = 0 if self.frame_number == 0 else self.frame_interval - 1
        for _ in range(skip):
            if not self.cap.grab():
                return self._finish()
            self.frame_number += 1

        ret, frame = self.cap.read()
        if not ret:
            return self._finish()
        self.frame_number += 1
        logger.debug(f"Sampled frame {self.frame_number} of {self.video_path}")
        return frame

    def _finish(self):
        self.exhausted = True
        self.release()
        raise CaptureUnavailable(f"No more frames in {self.video_path}")

    def release(self):
        self.cap.release()


class ScreenSampler:
    def __init__(self, monitor_index: int = 1):
        """
        Supplies full screenshots of one monitor. Index 0 is all monitors combined.
        """
        self.sct = mss.mss()
        if monitor_index < 0 or monitor_index >= len(self.sct.monitors):
            monitor_index = 1 if len(self.sct.monitors) > 1 else 0
        self.monitor = self.sct.monitors[monitor_index]
        logger.info(f"Screen capture initialized: {self.monitor['width']}x{self.monitor['height']}")

    def sample(self) -> np.ndarray:
        try:
            screenshot = self.sct.grab(self.monitor)
        except ScreenShotError as e:
            raise CaptureUnavailable(f"Screen capture failed: {e}") from e
        img = np.array(screenshot)
        # mss returns BGRA
        return cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)

    def close(self):
        self.sct.close()


class FrameSequenceSampler:
    def __init__(self, frames: Iterable[np.ndarray]):
        """
        Replays frames that are already in memory, one per sample.
        """
        self._frames = iter(frames)
        self.exhausted = False

    def sample(self) -> np.ndarray:
        try:
            return next(self._frames)
        except StopIteration:
            self.exhausted = True
            raise CaptureUnavailable("Frame sequence is exhausted")
