from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .errors import InvalidArgument
from .types import LabelScore


@dataclass(frozen=True)
class RankConfig:
    """
    Settings for turning a quantized classifier output into ranked labels.
    """

    # Quantized models emit 0..255; dividing by this maps back to [0, 1].
    max_rgb: float = 255.0
    top_k: int = 5

    def __post_init__(self) -> None:
        if self.max_rgb <= 0:
            raise InvalidArgument("max_rgb must be > 0")
        if self.top_k < 0:
            raise InvalidArgument("top_k must be >= 0")


def rank_labels(
    raw_scores: Sequence[int],
    labels: Sequence[str],
    max_rgb: float = 255.0,
    top_k: int = 5,
) -> List[LabelScore]:
    """
    Normalize quantized scores, drop non-positive ones and keep the `top_k` best.

    Ties keep their original label order (stable sort), so the output is
    deterministic for identical inputs.

    Args:
        raw_scores: one quantized score per label (index-aligned with `labels`)
        labels: label names
        max_rgb: value that maps to confidence 1.0
        top_k: maximum number of results
    """

    cfg = RankConfig(max_rgb=max_rgb, top_k=top_k)

    scores = np.asarray(raw_scores, dtype=np.float64).reshape(-1)
    if scores.shape[0] != len(labels):
        raise InvalidArgument(
            f"Expected one score per label, got {scores.shape[0]} scores for {len(labels)} labels."
        )
    if cfg.top_k == 0 or scores.size == 0:
        return []

    confidences = scores / cfg.max_rgb
    keep = np.where(confidences > 0)[0]
    if keep.size == 0:
        return []

    # Negate for descending order; "stable" keeps index order on exact ties.
    order = keep[np.argsort(-confidences[keep], kind="stable")][: cfg.top_k]
    return [LabelScore(label=labels[int(i)], confidence=float(confidences[i])) for i in order]


def rank_with_config(raw_scores: Sequence[int], labels: Sequence[str], cfg: RankConfig) -> List[LabelScore]:
    return rank_labels(raw_scores, labels, max_rgb=cfg.max_rgb, top_k=cfg.top_k)
