from typing import Callable, Optional
import logging
import threading
import numpy as np

from .board_processing import RegionExtractor
from .chess_notation import MoveInferencer
from .config import BOARD_REGION, DETECTION_SETTINGS
from .square_processing import GridDiffer
from .utils import BoardRect, DetectionError, MoveResult

logger = logging.getLogger(__name__)

class DetectionLoop:
    def __init__(self, sampler, board_rect: Optional[BoardRect] = None,
                 on_move: Optional[Callable[[str], None]] = None,
                 on_log: Optional[Callable[[str], None]] = None,
                 flipped: bool = False,
                 interval_seconds: float = DETECTION_SETTINGS['interval_seconds'],
                 extractor: Optional[RegionExtractor] = None,
                 differ: Optional[GridDiffer] = None,
                 inferencer: Optional[MoveInferencer] = None):
        """
        Periodically samples the board area, compares it with the previous
        snapshot and reports the inferred move.

        `sampler` is any object with a `sample()` method returning a full frame.
        """
        self.sampler = sampler
        self._board_rect = board_rect or BoardRect.from_dict(BOARD_REGION)
        self.on_move = on_move
        self.on_log = on_log
        self.flipped = flipped
        self.interval_seconds = interval_seconds
        self.extractor = extractor or RegionExtractor()
        self.differ = differ or GridDiffer()
        self.inferencer = inferencer or MoveInferencer()

        self._previous_board: Optional[np.ndarray] = None
        self._tick_lock = threading.Lock()
        # guards _stop_event and _thread across start/stop from different threads
        self._lifecycle_lock = threading.RLock()
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._stop_event is not None and not self._stop_event.is_set()

    @property
    def has_baseline(self) -> bool:
        return self._previous_board is not None

    @property
    def board_rect(self) -> BoardRect:
        return self._board_rect

    @board_rect.setter
    def board_rect(self, rect: BoardRect):
        # never swap the region in the middle of a comparison
        with self._tick_lock:
            self._board_rect = rect
        self._log(f"Board area: x={rect.x}, y={rect.y}, size={rect.size}")

    def _log(self, message: str, level: int = logging.INFO):
        if self.on_log is None:
            logger.log(level, message)
            return
        try:
            self.on_log(message)
        except Exception as e:
            logger.error(f"Log callback failed: {e}")

    def _emit_move(self, move: str):
        if self.on_move is None:
            return
        try:
            self.on_move(move)
        except Exception as e:
            logger.error(f"Move callback failed for {move}: {e}")

    def start(self):
        with self._lifecycle_lock:
            if self.is_running:
                logger.warning("Detection already running")
                return

            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(target=self._run, args=(stop_event,),
                                            name="move-detection", daemon=True)
            self._log("Detection started...")
            self._thread.start()

    def stop(self, timeout: float = DETECTION_SETTINGS['stop_timeout_seconds']):
        with self._lifecycle_lock:
            if not self.is_running:
                return

            self._stop_event.set()
            thread = self._thread
            if thread is not None and thread is not threading.current_thread():
                # an in-flight tick is allowed to finish
                thread.join(timeout=timeout)
                if thread.is_alive():
                    logger.warning("Tick still in progress after stop; it will finish in the background")
            self._log("Detection stopped")

    def flip(self) -> bool:
        self.flipped = not self.flipped
        self._log(f"Board flipped: {'Black bottom' if self.flipped else 'White bottom'}")
        return self.flipped

    def _run(self, stop_event: threading.Event):
        # fixed delay: the wait starts only once the tick is done
        while not stop_event.is_set():
            self.tick()
            if stop_event.wait(self.interval_seconds):
                break

    def tick(self) -> Optional[MoveResult]:
        """
        Runs one sample-compare-infer cycle.

        Returns the inferred move result, or None when the tick only captured
        the baseline or failed. Failures are logged and leave the previous
        snapshot untouched.
        """
        with self._tick_lock:
            try:
                frame = self.sampler.sample()
                board = self.extractor.extract(frame, self._board_rect)
            except DetectionError as e:
                self._log(f"Error: {e}", logging.ERROR)
                return None
            except Exception as e:
                logger.exception("Unexpected failure while sampling the board")
                self._log(f"Error: {e}", logging.ERROR)
                return None

            previous = self._previous_board
            if previous is None:
                self._previous_board = board
                self._log("Baseline board captured")
                return None

            if previous.shape != board.shape:
                self._previous_board = board
                self._log(f"Board size changed from {previous.shape[:2]} to {board.shape[:2]}, "
                          f"baseline reset", logging.WARNING)
                return None

            try:
                changes = self.differ.diff(previous, board)
                result = self.inferencer.infer(changes, self.flipped)
            except Exception as e:
                logger.exception("Unexpected failure while comparing boards")
                self._log(f"Error: {e}", logging.ERROR)
                return None

            self._previous_board = board

        self._log(result.describe())
        if result.detected:
            self._emit_move(result.move)
        return result
