from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

import numpy as np

from .errors import InvalidArgument
from .labels import load_labels
from .ranking import RankConfig, rank_with_config
from .types import LabelScore


PathLike = Union[str, Path]


def find_project_root(
    start: Optional[PathLike] = None,
    markers: Sequence[str] = ("pyproject.toml", ".git"),
) -> Path:
    """
    Best-effort project root discovery, used to resolve relative model/label paths.
    """

    p = Path(start) if start is not None else Path.cwd()
    p = p.resolve()

    if p.is_file():
        p = p.parent

    for parent in (p, *p.parents):
        for m in markers:
            if (parent / m).exists():
                return parent
    return p


def resolve_path(path: PathLike, root: Optional[PathLike] = "auto") -> Path:
    """
    Absolute paths are returned as-is; relative ones resolve against `root`
    (or the detected project root when `root` is "auto"/None).
    """

    p = Path(path)
    if p.is_absolute():
        return p

    if root == "auto" or root is None:
        base = find_project_root()
    else:
        base = Path(root).resolve()

    return (base / p).resolve()


@dataclass(frozen=True)
class InputConfig:
    """
    Shape of the classifier input tensor: (batch_size, height, width, components), uint8 RGB.
    """

    width: int = 224
    height: int = 224
    components: int = 3
    batch_size: int = 1

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        if self.components not in (1, 3):
            raise ValueError("components must be 1 (gray) or 3 (RGB)")
        if self.batch_size != 1:
            raise ValueError("Only batch_size=1 is supported")

    @property
    def dimensions(self) -> tuple:
        return (self.batch_size, self.height, self.width, self.components)


def scaled_image_data(image_bgr: np.ndarray, cfg: InputConfig = InputConfig()) -> np.ndarray:
    """
    Resize a BGR image to the model input size and pack it as a uint8 NHWC batch.
    """

    try:
        import cv2  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ImportError("OpenCV is required for scaled_image_data(). Install with `pip install opencv-python`.") from e

    if image_bgr is None or not hasattr(image_bgr, "shape"):
        raise TypeError("image_bgr must be a NumPy array (BGR).")
    if image_bgr.ndim != 3 or image_bgr.shape[2] != 3:
        raise ValueError(f"Expected image shape (H, W, 3), got {getattr(image_bgr, 'shape', None)}")
    if image_bgr.shape[0] == 0 or image_bgr.shape[1] == 0:
        raise ValueError("Cannot scale an empty image.")

    resized = cv2.resize(image_bgr, (cfg.width, cfg.height), interpolation=cv2.INTER_LINEAR)
    if cfg.components == 3:
        pixels = cv2.cvtColor(resized, cv2.COLOR_BGR2RGB)
    else:
        pixels = cv2.cvtColor(resized, cv2.COLOR_BGR2GRAY)[:, :, None]

    blob = np.ascontiguousarray(pixels, dtype=np.uint8)
    return blob.reshape(cfg.dimensions)


class ClassifierPipeline:
    """
    preprocess (resize to model input) -> inference -> top-K label ranking.

    `infer_fn` takes the uint8 NHWC blob and returns the raw quantized output,
    shaped (1, N) or (N,) with N == len(labels).
    """

    def __init__(
        self,
        infer_fn: Callable[[np.ndarray], np.ndarray],
        labels: Sequence[str],
        *,
        backend: Optional[object] = None,
        model_path: Optional[Path] = None,
        input_cfg: InputConfig = InputConfig(),
        rank_cfg: RankConfig = RankConfig(),
    ):
        self._infer_fn = infer_fn
        self.labels: List[str] = list(labels)
        self.backend = backend
        self.model_path = model_path
        self.input_cfg = input_cfg
        self.rank_cfg = rank_cfg

    @property
    def output_dimensions(self) -> tuple:
        return (self.input_cfg.batch_size, len(self.labels))

    def preprocess(self, image_bgr: np.ndarray) -> np.ndarray:
        return scaled_image_data(image_bgr, self.input_cfg)

    def infer(self, blob: np.ndarray) -> np.ndarray:
        return self._infer_fn(blob)

    def classify_output(self, output: np.ndarray) -> List[LabelScore]:
        out = np.asarray(output)
        if out.ndim == 2:
            # First batch row; batch size is always 1.
            out = out[0]
        if out.ndim != 1:
            raise InvalidArgument(f"Unsupported classifier output shape: {np.asarray(output).shape}")
        return rank_with_config(out, self.labels, self.rank_cfg)

    def __call__(self, image_bgr: np.ndarray) -> List[LabelScore]:
        blob = self.preprocess(image_bgr)
        return self.classify_output(self.infer(blob))


@dataclass(frozen=True)
class ModelOptions:
    """
    Where to find the classifier model.

    The hosted model is a copy fetched out-of-band (e.g. a newer revision);
    when it is present it takes precedence over the bundled local model.
    """

    local_model: PathLike
    hosted_model: Optional[PathLike] = None
    root: Optional[PathLike] = field(default="auto")


def resolve_model_path(options: ModelOptions) -> Path:
    if options.hosted_model is not None:
        hosted = resolve_path(options.hosted_model, root=options.root)
        if hosted.exists():
            return hosted

    local = resolve_path(options.local_model, root=options.root)
    if local.exists():
        return local
    raise FileNotFoundError(f"Failed to find the model file: {local}")


def load_classifier(
    model_options: ModelOptions,
    labels_path: PathLike,
    *,
    input_cfg: InputConfig = InputConfig(),
    rank_cfg: RankConfig = RankConfig(),
    onnx_providers: Optional[Sequence[str]] = None,
    onnx_input_name: Optional[str] = None,
    onnx_output_name: Optional[str] = None,
) -> ClassifierPipeline:
    """
    Build an ONNX Runtime backed classifier for a quantized image model.

    Typical usage:
        clf = load_classifier(ModelOptions("Models/mobilenet_v1.0_224_quant.onnx"), "Models/labels.txt")
        results = clf(cv2.imread("Media/grace_hopper.jpg"))
    """

    from .backends.onnxruntime_backend import OnnxRuntimeBackend, OnnxRuntimeBackendConfig

    model_path = resolve_model_path(model_options)
    labels = load_labels(resolve_path(labels_path, root=model_options.root))
    if not labels:
        raise ValueError(f"Labels file is empty: {labels_path}")

    backend = OnnxRuntimeBackend(
        model_path,
        OnnxRuntimeBackendConfig(
            providers=onnx_providers,
            input_name=onnx_input_name,
            output_name=onnx_output_name,
        ),
    )
    backend.check_io(input_cfg.dimensions, (input_cfg.batch_size, len(labels)))
    return ClassifierPipeline(
        backend.infer,
        labels,
        backend=backend,
        model_path=model_path,
        input_cfg=input_cfg,
        rank_cfg=rank_cfg,
    )
