from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LabelScore:
    """
    One ranked classifier result.
    """

    label: str
    confidence: float

    def as_tuple(self) -> Tuple[str, float]:
        return self.label, self.confidence


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def aspect(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """
    Frame with top-left origin, in whatever space the producer reports.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    def as_xyxy(self) -> Tuple[float, float, float, float]:
        return self.x, self.y, self.x + self.width, self.y + self.height
