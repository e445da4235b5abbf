import argparse
import logging
from pathlib import Path

import cv2

from codelab import ClassifierProfile, format_results, load_catalog_image, load_classifier_profile, write_classification_json
from vision_kit import RankConfig, load_classifier


def main() -> int:
    parser = argparse.ArgumentParser(description="Classify an image with a quantized model and print the top labels.")
    src = parser.add_mutually_exclusive_group()
    src.add_argument("--image", default=None, help="Path to an input image.")
    src.add_argument("--row", type=int, default=None, help="Sample catalog row (0-based) under --media.")
    parser.add_argument("--media", default="Media", help="Directory holding the sample catalog images.")
    parser.add_argument("--profile", default=None, help="Classifier profile JSON (defaults to the bundled MobileNet).")
    parser.add_argument("--top-k", type=int, default=None, help="Override the number of labels to keep.")
    parser.add_argument(
        "--onnx-providers",
        default=None,
        help='Comma-separated ORT providers, e.g. "CPUExecutionProvider".',
    )
    parser.add_argument("--out", default=None, help="Optional JSON path to save the ranked results.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...).")
    args = parser.parse_args()

    logging.basicConfig(level=str(args.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")

    profile = load_classifier_profile(Path(args.profile)) if args.profile else ClassifierProfile()
    rank_cfg = profile.rank_config()
    if args.top_k is not None:
        if args.top_k < 0:
            raise ValueError("--top-k must be >= 0")
        rank_cfg = RankConfig(max_rgb=rank_cfg.max_rgb, top_k=int(args.top_k))

    onnx_providers = None
    if args.onnx_providers:
        onnx_providers = [p.strip() for p in str(args.onnx_providers).split(",") if p.strip()]

    classifier = load_classifier(
        profile.model_options(),
        profile.labels_path,
        input_cfg=profile.input_config(),
        rank_cfg=rank_cfg,
        onnx_providers=onnx_providers,
    )

    if args.row is not None:
        img = load_catalog_image(args.row, args.media)
    else:
        image_path = args.image or str(Path(args.media) / "grace_hopper.jpg")
        img = cv2.imread(image_path)
        if img is None:
            raise FileNotFoundError(f"Could not read image at path: {image_path}")

    results = classifier(img)
    print(format_results(results), end="")

    if args.out:
        write_classification_json(Path(args.out), results)
        print(f"Wrote results: {args.out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
