from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

from .types import Point, Rect, Size


@dataclass(frozen=True)
class AffineTransform:
    """
    Uniform scale followed by a translation: p' = p * scale + (translate_x, translate_y).
    """

    scale: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0

    @classmethod
    def identity(cls) -> "AffineTransform":
        return cls()

    @property
    def is_identity(self) -> bool:
        return self.scale == 1.0 and self.translate_x == 0.0 and self.translate_y == 0.0

    def apply_point(self, point: Point) -> Point:
        return Point(
            x=point.x * self.scale + self.translate_x,
            y=point.y * self.scale + self.translate_y,
        )

    def apply_rect(self, rect: Rect) -> Rect:
        origin = self.apply_point(rect.origin)
        return Rect(x=origin.x, y=origin.y, width=rect.width * self.scale, height=rect.height * self.scale)

    def apply_xy(self, xy: np.ndarray) -> np.ndarray:
        """
        Vectorized variant for an (N, 2) array of points.
        """

        pts = np.asarray(xy, dtype=np.float64).reshape(-1, 2)
        return pts * self.scale + np.array([self.translate_x, self.translate_y], dtype=np.float64)


def compute_transform(container: Size, content: Size) -> AffineTransform:
    """
    Aspect-fit `content` inside `container`, centered.

    The scale comes from whichever axis would otherwise overflow, so the scaled
    content touches the container on that axis and is letterboxed/pillarboxed
    on the other. Zero or negative extents return the identity transform.
    """

    if container.is_degenerate or content.is_degenerate:
        return AffineTransform.identity()

    if container.aspect > content.aspect:
        scale = container.height / content.height
    else:
        scale = container.width / content.width

    scaled_w = content.width * scale
    scaled_h = content.height * scale
    return AffineTransform(
        scale=scale,
        translate_x=(container.width - scaled_w) / 2,
        translate_y=(container.height - scaled_h) / 2,
    )


@dataclass(frozen=True)
class Viewport:
    container_width: float
    container_height: float
    content_width: float
    content_height: float

    @property
    def container(self) -> Size:
        return Size(self.container_width, self.container_height)

    @property
    def content(self) -> Size:
        return Size(self.content_width, self.content_height)

    def transform(self) -> AffineTransform:
        return compute_transform(self.container, self.content)


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


def display_size(image_size: Size, view_size: Size, orientation: Orientation = Orientation.PORTRAIT) -> Size:
    """
    Size to pre-scale an image to before showing it in a view.

    Portrait fills the view width, landscape fills the view height; the other
    side follows the image aspect ratio.
    """

    if image_size.is_degenerate or view_size.is_degenerate:
        return image_size

    if orientation is Orientation.LANDSCAPE:
        height = view_size.height
        return Size(width=image_size.width * height / image_size.height, height=height)

    width = view_size.width
    return Size(width=width, height=image_size.height * width / image_size.width)


def image_size_of(image: np.ndarray) -> Size:
    h, w = image.shape[:2]
    return Size(width=float(w), height=float(h))


def scale_for_display(image: np.ndarray, size: Size) -> np.ndarray:
    """
    Resize an image to `size` (rounded to whole pixels). Returns the input when no resize is needed.
    """

    try:
        import cv2  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ImportError("OpenCV is required for scale_for_display(). Install with `pip install opencv-python`.") from e

    target: Tuple[int, int] = (max(1, int(round(size.width))), max(1, int(round(size.height))))
    h, w = image.shape[:2]
    if (w, h) == target:
        return image
    return cv2.resize(image, target, interpolation=cv2.INTER_LINEAR)
