from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional


class DetectionError(Exception):
    """Base class for failures raised while processing a detection tick."""


class RegionOutOfBounds(DetectionError):
    def __init__(self, rect: 'BoardRect', frame_width: int, frame_height: int):
        self.rect = rect
        self.frame_width = frame_width
        self.frame_height = frame_height
        super().__init__(
            f"Board area x={rect.x}, y={rect.y}, size={rect.size} exceeds "
            f"frame of {frame_width}x{frame_height}"
        )


class FrameDecodeError(DetectionError):
    pass


class CaptureUnavailable(DetectionError):
    pass


@dataclass(frozen=True)
class BoardRect:
    x: int
    y: int
    size: int

    def __post_init__(self):
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Board offset must be non-negative, got ({self.x}, {self.y})")
        if self.size <= 0:
            raise ValueError(f"Board size must be positive, got {self.size}")

    @classmethod
    def from_dict(cls, region: dict) -> 'BoardRect':
        return cls(int(region['x']), int(region['y']), int(region['size']))


class CellIndex(NamedTuple):
    row: int
    col: int


@dataclass
class MoveResult:
    move: Optional[str]
    changed_cells: List[CellIndex] = field(default_factory=list)

    @property
    def detected(self) -> bool:
        return self.move is not None

    def describe(self) -> str:
        if self.move:
            return f"Move detected: {self.move}"
        return f"No move detected ({len(self.changed_cells)} squares changed)"
