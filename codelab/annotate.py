from __future__ import annotations

from typing import Dict, Sequence

from vision_kit.overlay import BLUE, CYAN, GREEN, ORANGE, PURPLE, RED, YELLOW, Color, Overlay
from vision_kit.viewport import AffineTransform

from .results import ContourType, DocumentText, Face, RecognizedText


CONTOUR_COLORS: Dict[ContourType, Color] = {
    ContourType.FACE: BLUE,
    ContourType.LEFT_EYEBROW_TOP: ORANGE,
    ContourType.LEFT_EYEBROW_BOTTOM: ORANGE,
    ContourType.RIGHT_EYEBROW_TOP: ORANGE,
    ContourType.RIGHT_EYEBROW_BOTTOM: ORANGE,
    ContourType.LEFT_EYE: CYAN,
    ContourType.RIGHT_EYE: CYAN,
    ContourType.UPPER_LIP_TOP: RED,
    ContourType.UPPER_LIP_BOTTOM: RED,
    ContourType.LOWER_LIP_TOP: RED,
    ContourType.LOWER_LIP_BOTTOM: RED,
    ContourType.NOSE_BRIDGE: YELLOW,
    ContourType.NOSE_BOTTOM: YELLOW,
}


def annotate_text(overlay: Overlay, text: RecognizedText, transform: AffineTransform) -> None:
    """
    Blocks purple, lines orange, elements green with their text on top.
    """

    for block in text.blocks:
        overlay.add_rect(block.frame, PURPLE, transform)
        for line in block.lines:
            overlay.add_rect(line.frame, ORANGE, transform)
            for element in line.elements:
                overlay.add_rect(element.frame, GREEN, transform)
                overlay.add_label(element.frame, element.text, transform)


def annotate_document_text(overlay: Overlay, text: DocumentText, transform: AffineTransform) -> None:
    """
    Blocks purple, paragraphs orange, words green, symbols cyan with their text on top.
    """

    for block in text.blocks:
        overlay.add_rect(block.frame, PURPLE, transform)
        for paragraph in block.paragraphs:
            overlay.add_rect(paragraph.frame, ORANGE, transform)
            for word in paragraph.words:
                overlay.add_rect(word.frame, GREEN, transform)
                for symbol in word.symbols:
                    overlay.add_rect(symbol.frame, CYAN, transform)
                    overlay.add_label(symbol.frame, symbol.text, transform)


def annotate_faces(overlay: Overlay, faces: Sequence[Face], transform: AffineTransform) -> None:
    for face in faces:
        overlay.add_rect(face.frame, GREEN, transform)
        # Fixed draw order so overlapping dots stack the same way every time.
        for kind, color in CONTOUR_COLORS.items():
            for point in face.contour(kind):
                overlay.add_point(point, color, transform)
