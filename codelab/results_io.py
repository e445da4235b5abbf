"""
Load vision service results saved as JSON (e.g. by a cloud call made elsewhere).

Frames are `[x, y, width, height]`, points are `[x, y]`:

    {"text": "...", "blocks": [{"text": "...", "frame": [x, y, w, h], "lines": [...]}]}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from vision_kit.types import Point, Rect

from .results import (
    ContourType,
    DocumentBlock,
    DocumentParagraph,
    DocumentSymbol,
    DocumentText,
    DocumentWord,
    Face,
    RecognizedText,
    TextBlock,
    TextElement,
    TextLine,
)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Results file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid results JSON: {path}") from exc


def _is_number(v: Any) -> bool:
    return not isinstance(v, bool) and isinstance(v, (int, float))


def _parse_rect(value: Any, where: str) -> Rect:
    if not isinstance(value, (list, tuple)) or len(value) != 4 or not all(_is_number(v) for v in value):
        raise ValueError(f"{where}: frame must be [x, y, width, height], got {value!r}")
    x, y, w, h = (float(v) for v in value)
    return Rect(x=x, y=y, width=w, height=h)


def _parse_point(value: Any, where: str) -> Point:
    if not isinstance(value, (list, tuple)) or len(value) != 2 or not all(_is_number(v) for v in value):
        raise ValueError(f"{where}: point must be [x, y], got {value!r}")
    return Point(x=float(value[0]), y=float(value[1]))


def _children(node: Dict[str, Any], key: str, where: str) -> List[Dict[str, Any]]:
    items = node.get(key, [])
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise ValueError(f"{where}: '{key}' must be a list of objects")
    return items


def _text(node: Dict[str, Any], where: str) -> str:
    value = node.get("text", "")
    if not isinstance(value, str):
        raise ValueError(f"{where}: text must be a string")
    return value


def _root(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError("Results JSON must be an object")
    return payload


def parse_text(payload: Any) -> RecognizedText:
    root = _root(payload)
    blocks = []
    for bi, b in enumerate(_children(root, "blocks", "text")):
        bw = f"blocks[{bi}]"
        lines = []
        for li, ln in enumerate(_children(b, "lines", bw)):
            lw = f"{bw}.lines[{li}]"
            elements = tuple(
                TextElement(text=_text(e, f"{lw}.elements[{ei}]"), frame=_parse_rect(e.get("frame"), f"{lw}.elements[{ei}]"))
                for ei, e in enumerate(_children(ln, "elements", lw))
            )
            lines.append(TextLine(text=_text(ln, lw), frame=_parse_rect(ln.get("frame"), lw), elements=elements))
        blocks.append(TextBlock(text=_text(b, bw), frame=_parse_rect(b.get("frame"), bw), lines=tuple(lines)))
    return RecognizedText(text=_text(root, "text"), blocks=tuple(blocks))


def parse_document_text(payload: Any) -> DocumentText:
    root = _root(payload)
    blocks = []
    for bi, b in enumerate(_children(root, "blocks", "document")):
        bw = f"blocks[{bi}]"
        paragraphs = []
        for pi, p in enumerate(_children(b, "paragraphs", bw)):
            pw = f"{bw}.paragraphs[{pi}]"
            words = []
            for wi, w in enumerate(_children(p, "words", pw)):
                ww = f"{pw}.words[{wi}]"
                symbols = tuple(
                    DocumentSymbol(text=_text(s, f"{ww}.symbols[{si}]"), frame=_parse_rect(s.get("frame"), f"{ww}.symbols[{si}]"))
                    for si, s in enumerate(_children(w, "symbols", ww))
                )
                words.append(DocumentWord(text=_text(w, ww), frame=_parse_rect(w.get("frame"), ww), symbols=symbols))
            paragraphs.append(DocumentParagraph(text=_text(p, pw), frame=_parse_rect(p.get("frame"), pw), words=tuple(words)))
        blocks.append(DocumentBlock(text=_text(b, bw), frame=_parse_rect(b.get("frame"), bw), paragraphs=tuple(paragraphs)))
    return DocumentText(text=_text(root, "text"), blocks=tuple(blocks))


def parse_faces(payload: Any) -> List[Face]:
    root = _root(payload)
    faces: List[Face] = []
    for fi, f in enumerate(_children(root, "faces", "faces")):
        fw = f"faces[{fi}]"
        raw_contours = f.get("contours", {})
        if not isinstance(raw_contours, dict):
            raise ValueError(f"{fw}: contours must be an object")
        contours: Dict[ContourType, Tuple[Point, ...]] = {}
        for name, points in raw_contours.items():
            try:
                kind = ContourType(name)
            except ValueError as exc:
                raise ValueError(f"{fw}: unknown contour type {name!r}") from exc
            if not isinstance(points, list):
                raise ValueError(f"{fw}.contours.{name}: must be a list of points")
            contours[kind] = tuple(_parse_point(p, f"{fw}.contours.{name}[{i}]") for i, p in enumerate(points))
        faces.append(Face(frame=_parse_rect(f.get("frame"), fw), contours=contours))
    return faces


def load_text_json(path: Path) -> RecognizedText:
    return parse_text(_read_json(path))


def load_document_text_json(path: Path) -> DocumentText:
    return parse_document_text(_read_json(path))


def load_faces_json(path: Path) -> List[Face]:
    return parse_faces(_read_json(path))
