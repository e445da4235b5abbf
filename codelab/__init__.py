"""
Codelab application layer built on top of `vision_kit`.

`vision_kit` stays free of app concerns; this package covers:
- result types + protocols for the vision services (text, document text, faces)
- turning results into overlay annotations
- classifier profile config and the sample image catalog
- `CodelabSession`, the request/response driver tying it together
"""

from __future__ import annotations

from .annotate import CONTOUR_COLORS, annotate_document_text, annotate_faces, annotate_text
from .catalog import DEFAULT_CATALOG, ImageDisplay, catalog_entry, catalog_titles, load_catalog_image
from .config import ClassifierProfile, load_classifier_profile
from .reporting import (
    FAILED_TO_DETECT_OBJECTS_MESSAGE,
    NO_RESULTS_MESSAGE,
    format_results,
    write_annotations_json,
    write_classification_json,
)
from .results import (
    ContourType,
    DocumentText,
    DocumentTextRecognizer,
    Face,
    FaceDetector,
    RecognizedText,
    TextRecognizer,
)
from .results_io import load_document_text_json, load_faces_json, load_text_json
from .session import ClassificationOutcome, CodelabSession

__all__ = [
    "CONTOUR_COLORS",
    "annotate_document_text",
    "annotate_faces",
    "annotate_text",
    "DEFAULT_CATALOG",
    "ImageDisplay",
    "catalog_entry",
    "catalog_titles",
    "load_catalog_image",
    "ClassifierProfile",
    "load_classifier_profile",
    "FAILED_TO_DETECT_OBJECTS_MESSAGE",
    "NO_RESULTS_MESSAGE",
    "format_results",
    "write_annotations_json",
    "write_classification_json",
    "ContourType",
    "DocumentText",
    "DocumentTextRecognizer",
    "Face",
    "FaceDetector",
    "RecognizedText",
    "TextRecognizer",
    "load_document_text_json",
    "load_faces_json",
    "load_text_json",
    "ClassificationOutcome",
    "CodelabSession",
]
