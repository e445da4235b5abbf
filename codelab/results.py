"""
Structured output of the vision services the codelab talks to.

The services themselves (on-device text recognizer, cloud document text
recognizer, face contour detector) live outside this package; they only have
to return these types. Geometry is in source-image pixel coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Protocol, Sequence, Tuple

import numpy as np

from vision_kit.types import Point, Rect


# On-device text: blocks -> lines -> elements
@dataclass(frozen=True)
class TextElement:
    text: str
    frame: Rect


@dataclass(frozen=True)
class TextLine:
    text: str
    frame: Rect
    elements: Tuple[TextElement, ...] = ()


@dataclass(frozen=True)
class TextBlock:
    text: str
    frame: Rect
    lines: Tuple[TextLine, ...] = ()


@dataclass(frozen=True)
class RecognizedText:
    text: str
    blocks: Tuple[TextBlock, ...] = ()


# Cloud document text: blocks -> paragraphs -> words -> symbols
@dataclass(frozen=True)
class DocumentSymbol:
    text: str
    frame: Rect


@dataclass(frozen=True)
class DocumentWord:
    text: str
    frame: Rect
    symbols: Tuple[DocumentSymbol, ...] = ()


@dataclass(frozen=True)
class DocumentParagraph:
    text: str
    frame: Rect
    words: Tuple[DocumentWord, ...] = ()


@dataclass(frozen=True)
class DocumentBlock:
    text: str
    frame: Rect
    paragraphs: Tuple[DocumentParagraph, ...] = ()


@dataclass(frozen=True)
class DocumentText:
    text: str
    blocks: Tuple[DocumentBlock, ...] = ()


class ContourType(str, Enum):
    FACE = "face"
    LEFT_EYEBROW_TOP = "left_eyebrow_top"
    LEFT_EYEBROW_BOTTOM = "left_eyebrow_bottom"
    RIGHT_EYEBROW_TOP = "right_eyebrow_top"
    RIGHT_EYEBROW_BOTTOM = "right_eyebrow_bottom"
    LEFT_EYE = "left_eye"
    RIGHT_EYE = "right_eye"
    UPPER_LIP_TOP = "upper_lip_top"
    UPPER_LIP_BOTTOM = "upper_lip_bottom"
    LOWER_LIP_TOP = "lower_lip_top"
    LOWER_LIP_BOTTOM = "lower_lip_bottom"
    NOSE_BRIDGE = "nose_bridge"
    NOSE_BOTTOM = "nose_bottom"


@dataclass(frozen=True)
class Face:
    frame: Rect
    contours: Dict[ContourType, Tuple[Point, ...]] = field(default_factory=dict)

    def contour(self, kind: ContourType) -> Tuple[Point, ...]:
        return self.contours.get(kind, ())


class TextRecognizer(Protocol):
    def process(self, image: np.ndarray) -> RecognizedText: ...


class DocumentTextRecognizer(Protocol):
    def process(self, image: np.ndarray) -> DocumentText: ...


class FaceDetector(Protocol):
    def process(self, image: np.ndarray) -> Sequence[Face]: ...


def count_elements(text: RecognizedText) -> int:
    return sum(len(line.elements) for block in text.blocks for line in block.lines)


def count_symbols(text: DocumentText) -> int:
    total = 0
    for block in text.blocks:
        for paragraph in block.paragraphs:
            for word in paragraph.words:
                total += len(word.symbols)
    return total
