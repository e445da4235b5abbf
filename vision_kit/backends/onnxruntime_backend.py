from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import numpy as np


PathLike = Union[str, Path]


@dataclass(frozen=True)
class OnnxRuntimeBackendConfig:
    """
    Configuration for ONNX Runtime inference.

    - providers: ORT execution providers (e.g., ["CPUExecutionProvider"])
    - input_name/output_name: override auto-selected I/O names if needed
    """

    providers: Optional[Sequence[str]] = None
    input_name: Optional[str] = None
    output_name: Optional[str] = None


def _shape_matches(actual: Sequence[Any], expected: Sequence[int]) -> bool:
    # Symbolic/unknown dims (str or None) match anything.
    if len(actual) != len(expected):
        return False
    return all(not isinstance(a, int) or a == e for a, e in zip(actual, expected))


def _io_shape(items: Sequence[Any], name: str) -> Sequence[Any]:
    for item in items:
        if item.name == name:
            return list(item.shape)
    raise ValueError(f"Model has no tensor named {name!r}")


def check_session_io(
    session: Any,
    input_name: str,
    output_name: str,
    input_dims: Sequence[int],
    output_dims: Sequence[int],
) -> None:
    """
    Fail early when a session's declared shapes disagree with the input size or label count.
    """

    in_shape = _io_shape(session.get_inputs(), input_name)
    if not _shape_matches(in_shape, input_dims):
        raise ValueError(f"Model input shape {in_shape} does not match expected {tuple(input_dims)}")
    out_shape = _io_shape(session.get_outputs(), output_name)
    if not _shape_matches(out_shape, output_dims):
        raise ValueError(f"Model output shape {out_shape} does not match expected {tuple(output_dims)}")


class OnnxRuntimeBackend:
    """
    Minimal ONNX Runtime backend for a quantized image classifier.

    Expects a uint8 NHWC blob shaped (1, H, W, C) and returns the primary
    output, typically (1, num_labels) uint8 scores.
    """

    def __init__(self, model_path: PathLike, cfg: OnnxRuntimeBackendConfig = OnnxRuntimeBackendConfig()):
        try:
            import onnxruntime as ort  # type: ignore
        except Exception as e:  # pragma: no cover
            raise ImportError(
                "onnxruntime is required for the ONNX backend. Install it with `pip install onnxruntime`."
            ) from e

        self.model_path = Path(model_path)
        if not self.model_path.exists():
            raise FileNotFoundError(str(self.model_path))

        sess_opts = ort.SessionOptions()
        providers = list(cfg.providers) if cfg.providers is not None else None
        self.session = ort.InferenceSession(str(self.model_path), sess_options=sess_opts, providers=providers)

        self.input_name = cfg.input_name or self.session.get_inputs()[0].name
        self.output_name = cfg.output_name or self.session.get_outputs()[0].name

    def check_io(self, input_dims: Sequence[int], output_dims: Sequence[int]) -> None:
        check_session_io(self.session, self.input_name, self.output_name, input_dims, output_dims)

    def infer(self, blob: np.ndarray) -> np.ndarray:
        outputs = self.session.run([self.output_name], {self.input_name: blob})
        return outputs[0]
