import argparse
import logging
from pathlib import Path

import cv2
import numpy as np

from codelab import (
    CodelabSession,
    load_document_text_json,
    load_faces_json,
    load_text_json,
    write_annotations_json,
)
from vision_kit import Size


class _SavedResults:
    """
    Stands in for a live vision service by replaying results saved to disk.
    """

    def __init__(self, result):
        self._result = result

    def process(self, image: np.ndarray):
        return self._result


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Draw saved text/document/face results onto an image as shown in a fixed-size view."
    )
    parser.add_argument("--image", required=True, help="Path to the source image the results refer to.")
    kind = parser.add_mutually_exclusive_group(required=True)
    kind.add_argument("--text", default=None, help="On-device text results JSON.")
    kind.add_argument("--document", default=None, help="Cloud document text results JSON.")
    kind.add_argument("--faces", default=None, help="Face contour results JSON.")
    parser.add_argument("--view-width", type=float, default=375.0, help="Display view width in pixels.")
    parser.add_argument("--view-height", type=float, default=667.0, help="Display view height in pixels.")
    parser.add_argument("--out", default=None, help="Output image path for the rendered overlay.")
    parser.add_argument("--annotations-out", default=None, help="Optional JSON path to save display-space annotations.")
    parser.add_argument("--show", action="store_true", help="Show a window with the rendered overlay.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...).")
    args = parser.parse_args()

    logging.basicConfig(level=str(args.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.view_width <= 0 or args.view_height <= 0:
        raise ValueError("--view-width and --view-height must be > 0")

    img = cv2.imread(args.image)
    if img is None:
        raise FileNotFoundError(f"Could not read image at path: {args.image}")

    view = Size(width=float(args.view_width), height=float(args.view_height))
    if args.text:
        session = CodelabSession(view, text_recognizer=_SavedResults(load_text_json(Path(args.text))))
        session.image = img
        session.run_text_recognition()
    elif args.document:
        session = CodelabSession(view, document_recognizer=_SavedResults(load_document_text_json(Path(args.document))))
        session.image = img
        session.run_cloud_text_recognition()
    else:
        session = CodelabSession(view, face_detector=_SavedResults(load_faces_json(Path(args.faces))))
        session.image = img
        session.run_face_contour_detection()

    vis = session.render()
    print(f"annotations={len(session.overlay)} scale={session.transform().scale:.4f}")

    if args.out:
        ok = cv2.imwrite(args.out, vis)
        if not ok:
            raise RuntimeError(f"Failed to write output image: {args.out}")
        print(f"Wrote overlay: {args.out}")

    if args.annotations_out:
        write_annotations_json(Path(args.annotations_out), session.overlay)
        print(f"Wrote annotations: {args.annotations_out}")

    if args.show:
        cv2.imshow("annotations", vis)
        cv2.waitKey(0)
        cv2.destroyAllWindows()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
