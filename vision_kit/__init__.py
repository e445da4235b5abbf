"""
Small, framework-agnostic helpers for showing vision model output.

- top-K ranking of quantized classifier scores
- aspect-fit geometry mapping from image space to display space
- classifier preprocessing + pipeline (ONNX Runtime backend is optional)
- overlay annotations rendered with OpenCV
"""

from .types import LabelScore, Point, Rect, Size
from .errors import InvalidArgument
from .ranking import RankConfig, rank_labels
from .viewport import AffineTransform, Orientation, Viewport, compute_transform, display_size, scale_for_display
from .labels import load_labels, parse_labels
from .overlay import Overlay
from .runtime import (
    ClassifierPipeline,
    InputConfig,
    ModelOptions,
    find_project_root,
    load_classifier,
    resolve_model_path,
    resolve_path,
    scaled_image_data,
)

__all__ = [
    "LabelScore",
    "Point",
    "Rect",
    "Size",
    "InvalidArgument",
    "RankConfig",
    "rank_labels",
    "AffineTransform",
    "Orientation",
    "Viewport",
    "compute_transform",
    "display_size",
    "scale_for_display",
    "load_labels",
    "parse_labels",
    "Overlay",
    "ClassifierPipeline",
    "InputConfig",
    "ModelOptions",
    "find_project_root",
    "load_classifier",
    "resolve_model_path",
    "resolve_path",
    "scaled_image_data",
]
