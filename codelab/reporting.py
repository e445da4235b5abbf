from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import numpy as np

from vision_kit.overlay import Overlay, PointAnnotation, RectAnnotation, TextAnnotation
from vision_kit.types import LabelScore

FAILED_TO_DETECT_OBJECTS_MESSAGE = "Failed to detect objects in image."
NO_RESULTS_MESSAGE = "No results returned."


def format_results(results: Optional[Sequence[LabelScore]]) -> str:
    """
    One "label: confidence" line per result, or the failure message when there are none to show.

    Confidences print at float32 precision, matching the scores the classifier emits.
    """

    if results is None:
        return FAILED_TO_DETECT_OBJECTS_MESSAGE
    return "".join(f"{r.label}: {str(np.float32(r.confidence))}\n" for r in results)


def overlay_to_dict(overlay: Overlay) -> Dict[str, Any]:
    rects, points, labels = [], [], []
    for item in overlay.annotations:
        if isinstance(item, RectAnnotation):
            rects.append({"rect": asdict(item.rect), "color": list(item.color)})
        elif isinstance(item, PointAnnotation):
            points.append({"center": asdict(item.center), "color": list(item.color), "radius": item.radius})
        elif isinstance(item, TextAnnotation):
            labels.append({"rect": asdict(item.rect), "text": item.text})
    return {"rects": rects, "points": points, "labels": labels}


def write_annotations_json(path: Path, overlay: Overlay) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(overlay_to_dict(overlay), indent=2, sort_keys=True), encoding="utf-8")
    return path


def write_classification_json(path: Path, results: Sequence[LabelScore]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"results": [asdict(r) for r in results]}
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    return path
