"""
Request/response driver for the codelab: pick an image, run a vision service
on it, and collect overlay annotations in display space.

Every `run_*` call is synchronous. Service failures are logged and reported
as `None` (or a failure message for classification); the overlay is always
cleared first so stale annotations never outlive a new request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np

from vision_kit.overlay import Overlay
from vision_kit.runtime import ClassifierPipeline
from vision_kit.types import LabelScore, Size
from vision_kit.viewport import (
    AffineTransform,
    Orientation,
    compute_transform,
    display_size,
    image_size_of,
    scale_for_display,
)

from .annotate import annotate_document_text, annotate_faces, annotate_text
from .catalog import DEFAULT_CATALOG, ImageDisplay, catalog_entry, load_catalog_image
from .reporting import FAILED_TO_DETECT_OBJECTS_MESSAGE, NO_RESULTS_MESSAGE, format_results
from .results import DocumentText, DocumentTextRecognizer, Face, FaceDetector, RecognizedText, TextRecognizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationOutcome:
    results: Optional[List[LabelScore]]
    message: str

    @property
    def ok(self) -> bool:
        return self.results is not None


class CodelabSession:
    def __init__(
        self,
        view_size: Size,
        *,
        text_recognizer: Optional[TextRecognizer] = None,
        document_recognizer: Optional[DocumentTextRecognizer] = None,
        face_detector: Optional[FaceDetector] = None,
        classifier: Optional[ClassifierPipeline] = None,
        catalog: Sequence[ImageDisplay] = DEFAULT_CATALOG,
        image_root: Union[str, Path] = "Media",
    ):
        self.view_size = view_size
        self.text_recognizer = text_recognizer
        self.document_recognizer = document_recognizer
        self.face_detector = face_detector
        self.classifier = classifier
        self.catalog = tuple(catalog)
        self.image_root = Path(image_root)
        self.overlay = Overlay()
        self.image: Optional[np.ndarray] = None
        self.selected: Optional[ImageDisplay] = None

    # ------------------------------------------------------------------ #
    # Image selection
    # ------------------------------------------------------------------ #
    def select_image(self, row: int) -> ImageDisplay:
        entry = catalog_entry(row, self.catalog)
        self.overlay.clear()
        self.image = load_catalog_image(row, self.image_root, self.catalog)
        self.selected = entry
        logger.debug("selected image row=%d file=%s", row, entry.file)
        return entry

    def pick_image(self, image: np.ndarray, orientation: Orientation = Orientation.PORTRAIT) -> np.ndarray:
        """
        Show an externally supplied image, pre-scaled to the view like an aspect-fit image view would.
        """

        if image is None or not hasattr(image, "shape") or image.ndim != 3 or image.shape[2] != 3:
            raise ValueError(f"Expected image shape (H, W, 3), got {getattr(image, 'shape', None)}")
        self.overlay.clear()
        target = display_size(image_size_of(image), self.view_size, orientation)
        self.image = scale_for_display(image, target)
        self.selected = None
        return self.image

    def transform(self) -> AffineTransform:
        if self.image is None:
            return AffineTransform.identity()
        return compute_transform(self.view_size, image_size_of(self.image))

    def _require_image(self) -> np.ndarray:
        if self.image is None:
            raise RuntimeError("No image selected. Call select_image() or pick_image() first.")
        return self.image

    # ------------------------------------------------------------------ #
    # Vision services
    # ------------------------------------------------------------------ #
    def run_text_recognition(self) -> Optional[RecognizedText]:
        if self.text_recognizer is None:
            raise RuntimeError("No text recognizer configured.")
        image = self._require_image()
        text = self._call_service("Text recognizer", self.text_recognizer.process, image)
        if text is None:
            return None
        annotate_text(self.overlay, text, self.transform())
        return text

    def run_cloud_text_recognition(self) -> Optional[DocumentText]:
        if self.document_recognizer is None:
            raise RuntimeError("No document text recognizer configured.")
        image = self._require_image()
        text = self._call_service("Document text recognizer", self.document_recognizer.process, image)
        if text is None:
            return None
        annotate_document_text(self.overlay, text, self.transform())
        return text

    def run_face_contour_detection(self) -> Optional[List[Face]]:
        if self.face_detector is None:
            raise RuntimeError("No face detector configured.")
        image = self._require_image()
        faces = self._call_service("Face detector", self.face_detector.process, image)
        if faces is None:
            return None
        faces = list(faces)
        annotate_faces(self.overlay, faces, self.transform())
        return faces

    def run_model_inference(self) -> ClassificationOutcome:
        if self.classifier is None:
            raise RuntimeError("No classifier configured.")
        image = self._require_image()
        self.overlay.clear()

        try:
            blob = self.classifier.preprocess(image)
        except ValueError as exc:
            logger.error("Failed to scale image to model input: %s", exc)
            return ClassificationOutcome(results=None, message=FAILED_TO_DETECT_OBJECTS_MESSAGE)

        try:
            output = self.classifier.infer(blob)
        except Exception as exc:
            logger.error("Failed to run the model with error: %s", exc)
            return ClassificationOutcome(results=None, message=FAILED_TO_DETECT_OBJECTS_MESSAGE)

        # Label/score mismatches are a configuration bug; let them propagate.
        results = self.classifier.classify_output(output)
        message = format_results(results)
        logger.info("classification results=%d top=%s", len(results), results[0].label if results else "-")
        return ClassificationOutcome(results=results, message=message)

    def _call_service(self, name: str, fn, image: np.ndarray):
        self.overlay.clear()
        try:
            result = fn(image)
        except Exception as exc:
            logger.error("%s failed with error: %s", name, exc)
            return None
        if result is None:
            logger.error("%s failed with error: %s", name, NO_RESULTS_MESSAGE)
            return None
        return result

    def render(self) -> np.ndarray:
        """
        Current image with the overlay drawn on a display-sized canvas.
        """

        image = self._require_image()
        t = self.transform()
        canvas_size = self.view_size if not self.view_size.is_degenerate else image_size_of(image)
        canvas = np.zeros((int(round(canvas_size.height)), int(round(canvas_size.width)), 3), dtype=np.uint8)
        shown = scale_for_display(image, Size(image.shape[1] * t.scale, image.shape[0] * t.scale))
        x0, y0 = int(round(t.translate_x)), int(round(t.translate_y))
        h = min(shown.shape[0], canvas.shape[0] - y0)
        w = min(shown.shape[1], canvas.shape[1] - x0)
        if h > 0 and w > 0:
            canvas[y0 : y0 + h, x0 : x0 + w] = shown[:h, :w]
        return self.overlay.render(canvas)
