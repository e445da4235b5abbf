from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple, Union

import numpy as np


@dataclass(frozen=True)
class ImageDisplay:
    file: str
    name: str


DEFAULT_CATALOG: Tuple[ImageDisplay, ...] = (
    ImageDisplay(file="Please_walk_on_the_grass.jpg", name="Image 1"),
    ImageDisplay(file="non-latin.jpg", name="Image 2"),
    ImageDisplay(file="nl2.jpg", name="Image 3"),
    ImageDisplay(file="grace_hopper.jpg", name="Image 4"),
    ImageDisplay(file="tennis.jpg", name="Image 5"),
    ImageDisplay(file="mountain.jpg", name="Image 6"),
)


def catalog_entry(row: int, catalog: Sequence[ImageDisplay] = DEFAULT_CATALOG) -> ImageDisplay:
    if row < 0 or row >= len(catalog):
        raise IndexError(f"Catalog row {row} out of range (0..{len(catalog) - 1})")
    return catalog[row]


def catalog_titles(catalog: Sequence[ImageDisplay] = DEFAULT_CATALOG) -> Tuple[str, ...]:
    return tuple(entry.name for entry in catalog)


def load_catalog_image(
    row: int,
    root: Union[str, Path] = "Media",
    catalog: Sequence[ImageDisplay] = DEFAULT_CATALOG,
) -> np.ndarray:
    import cv2

    entry = catalog_entry(row, catalog)
    path = Path(root) / entry.file
    img = cv2.imread(str(path))
    if img is None:
        raise FileNotFoundError(f"Could not read image at path: {path}")
    return img
