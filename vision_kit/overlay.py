from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

from .types import Point, Rect
from .viewport import AffineTransform

Color = Tuple[int, int, int]

# OpenCV expects BGR.
PURPLE: Color = (128, 0, 128)
ORANGE: Color = (0, 128, 255)
GREEN: Color = (0, 255, 0)
CYAN: Color = (255, 255, 0)
BLUE: Color = (255, 0, 0)
RED: Color = (0, 0, 255)
YELLOW: Color = (0, 255, 255)
BLACK: Color = (0, 0, 0)

LINE_WIDTH = 3
SMALL_DOT_RADIUS = 5.0


@dataclass(frozen=True)
class RectAnnotation:
    rect: Rect
    color: Color


@dataclass(frozen=True)
class PointAnnotation:
    center: Point
    color: Color
    radius: float = SMALL_DOT_RADIUS


@dataclass(frozen=True)
class TextAnnotation:
    rect: Rect
    text: str
    color: Color = BLACK


Annotation = Union[RectAnnotation, PointAnnotation, TextAnnotation]


class Overlay:
    """
    Display-space annotations drawn on top of a shown image.

    Geometry handed to the `add_*` helpers is in content-native (source image)
    coordinates and gets mapped through `transform` before it is stored.
    """

    def __init__(self) -> None:
        self._items: List[Annotation] = []

    def __len__(self) -> int:
        return len(self._items)

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        return tuple(self._items)

    def of_type(self, kind: type) -> List[Annotation]:
        return [a for a in self._items if isinstance(a, kind)]

    def clear(self) -> None:
        self._items.clear()

    def add_rect(self, rect: Rect, color: Color, transform: Optional[AffineTransform] = None) -> RectAnnotation:
        t = transform or AffineTransform.identity()
        item = RectAnnotation(rect=t.apply_rect(rect), color=color)
        self._items.append(item)
        return item

    def add_point(
        self,
        point: Point,
        color: Color,
        transform: Optional[AffineTransform] = None,
        radius: float = SMALL_DOT_RADIUS,
    ) -> PointAnnotation:
        t = transform or AffineTransform.identity()
        item = PointAnnotation(center=t.apply_point(point), color=color, radius=radius)
        self._items.append(item)
        return item

    def add_label(self, rect: Rect, text: str, transform: Optional[AffineTransform] = None) -> TextAnnotation:
        t = transform or AffineTransform.identity()
        item = TextAnnotation(rect=t.apply_rect(rect), text=text)
        self._items.append(item)
        return item

    def render(self, image_bgr: np.ndarray, *, line_width: int = LINE_WIDTH) -> np.ndarray:
        """
        Draw every annotation on a copy of `image_bgr` (H, W, 3) and return it.
        """

        try:
            import cv2  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ImportError("OpenCV is required for Overlay.render(). Install with `pip install opencv-python`.") from e

        if image_bgr is None or not hasattr(image_bgr, "shape"):
            raise TypeError("image_bgr must be a NumPy array (BGR).")
        if image_bgr.ndim != 3 or image_bgr.shape[2] != 3:
            raise ValueError(f"Expected image shape (H, W, 3), got {getattr(image_bgr, 'shape', None)}")

        out = image_bgr.copy()
        for item in self._items:
            if isinstance(item, RectAnnotation):
                x1, y1, x2, y2 = (int(round(v)) for v in item.rect.as_xyxy())
                cv2.rectangle(out, (x1, y1), (x2, y2), item.color, thickness=line_width)
            elif isinstance(item, PointAnnotation):
                center = (int(round(item.center.x)), int(round(item.center.y)))
                cv2.circle(out, center, int(round(item.radius)), item.color, thickness=-1, lineType=cv2.LINE_AA)
            else:
                _draw_fitted_text(cv2, out, item)
        return out


def _draw_fitted_text(cv2, out: np.ndarray, item: TextAnnotation) -> None:
    # Shrink the font until the text fits the frame width.
    if not item.text or item.rect.width <= 0 or item.rect.height <= 0:
        return
    font = cv2.FONT_HERSHEY_SIMPLEX
    scale = 1.0
    (tw, th), baseline = cv2.getTextSize(item.text, font, scale, 1)
    if tw > 0:
        scale = min(scale, item.rect.width / tw)
    if th + baseline > 0:
        scale = min(scale, item.rect.height / (th + baseline))
    scale = max(scale, 0.1)
    (_, th), baseline = cv2.getTextSize(item.text, font, scale, 1)
    origin = (int(round(item.rect.x)), int(round(item.rect.y + th)))
    cv2.putText(out, item.text, origin, font, scale, item.color, thickness=1, lineType=cv2.LINE_AA)
