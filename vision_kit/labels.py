from __future__ import annotations

from pathlib import Path
from typing import List, Union

LABELS_SEPARATOR = "\n"


def parse_labels(text: str) -> List[str]:
    """
    Split a newline-delimited label list.

    Interior blank lines are kept because label order must stay index-aligned
    with the model output; only the empty entry left by a trailing newline is
    dropped. Windows line endings are tolerated.
    """

    labels = [line.rstrip("\r") for line in text.split(LABELS_SEPARATOR)]
    if labels and labels[-1] == "":
        labels.pop()
    return labels


def load_labels(labels_path: Union[str, Path]) -> List[str]:
    path = Path(labels_path)
    if not path.exists():
        raise FileNotFoundError(f"Labels file not found: {path}")
    return parse_labels(path.read_text(encoding="utf-8"))
