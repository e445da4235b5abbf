from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from vision_kit.ranking import RankConfig
from vision_kit.runtime import InputConfig, ModelOptions


@dataclass(frozen=True)
class ClassifierProfile:
    """
    Which model/labels the custom classifier uses and how its output is ranked.

    Relative paths resolve against `model_dir`.
    """

    schema_version: int = 1
    model_dir: str = "Models"
    local_model: str = "mobilenet_v1.0_224_quant.onnx"
    hosted_model: Optional[str] = "mobilenet_v1_224_quant.onnx"
    labels_file: str = "labels.txt"
    input_width: int = 224
    input_height: int = 224
    input_components: int = 3
    max_rgb: float = 255.0
    top_k: int = 5

    def __post_init__(self) -> None:
        if self.schema_version != 1:
            raise ValueError("classifier profile schema_version must be 1")
        if not self.local_model:
            raise ValueError("local_model must not be empty")
        if not self.labels_file:
            raise ValueError("labels_file must not be empty")
        if self.max_rgb <= 0:
            raise ValueError("max_rgb must be > 0")
        if self.top_k < 0:
            raise ValueError("top_k must be >= 0")

    def model_options(self, root: Optional[Path] = None) -> ModelOptions:
        model_dir = Path(self.model_dir)
        return ModelOptions(
            local_model=model_dir / self.local_model,
            hosted_model=(model_dir / self.hosted_model) if self.hosted_model else None,
            root=root if root is not None else "auto",
        )

    @property
    def labels_path(self) -> Path:
        return Path(self.model_dir) / self.labels_file

    def input_config(self) -> InputConfig:
        return InputConfig(width=self.input_width, height=self.input_height, components=self.input_components)

    def rank_config(self) -> RankConfig:
        return RankConfig(max_rgb=self.max_rgb, top_k=self.top_k)


def _require_number(payload: Dict[str, Any], key: str, default: float) -> float:
    value = payload.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number")
    return float(value)


def _require_int(payload: Dict[str, Any], key: str, default: Optional[int] = None) -> int:
    if key not in payload:
        if default is None:
            raise ValueError(f"Missing required key: {key}")
        return default
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return int(value)


def _optional_str(payload: Dict[str, Any], key: str, default: Optional[str]) -> Optional[str]:
    value = payload.get(key, default)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{key} must be a string if provided")
    return value


def load_classifier_profile(path: Path) -> ClassifierProfile:
    if not path.exists():
        raise FileNotFoundError(f"Classifier profile not found: {path}")
    raw = path.read_text(encoding="utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid classifier profile JSON: {path}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Classifier profile must be a JSON object")

    allowed = {
        "schema_version",
        "model_dir",
        "local_model",
        "hosted_model",
        "labels_file",
        "input_width",
        "input_height",
        "input_components",
        "max_rgb",
        "top_k",
    }
    unknown = sorted(set(payload.keys()) - allowed)
    if unknown:
        raise ValueError(f"Unknown classifier profile keys: {unknown}")

    defaults = ClassifierProfile()
    return ClassifierProfile(
        schema_version=_require_int(payload, "schema_version"),
        model_dir=_optional_str(payload, "model_dir", defaults.model_dir) or defaults.model_dir,
        local_model=_optional_str(payload, "local_model", defaults.local_model) or "",
        hosted_model=_optional_str(payload, "hosted_model", defaults.hosted_model),
        labels_file=_optional_str(payload, "labels_file", defaults.labels_file) or "",
        input_width=_require_int(payload, "input_width", defaults.input_width),
        input_height=_require_int(payload, "input_height", defaults.input_height),
        input_components=_require_int(payload, "input_components", defaults.input_components),
        max_rgb=_require_number(payload, "max_rgb", defaults.max_rgb),
        top_k=_require_int(payload, "top_k", defaults.top_k),
    )
