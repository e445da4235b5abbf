import json
import tempfile
import unittest
from pathlib import Path

import cv2
import numpy as np

from codelab.catalog import DEFAULT_CATALOG, ImageDisplay, catalog_entry, catalog_titles
from codelab.reporting import (
    FAILED_TO_DETECT_OBJECTS_MESSAGE,
    format_results,
    write_annotations_json,
    write_classification_json,
)
from codelab.results import Face, RecognizedText, TextBlock, TextElement, TextLine
from codelab.session import CodelabSession
from vision_kit.overlay import PointAnnotation, RectAnnotation, TextAnnotation
from vision_kit.runtime import ClassifierPipeline
from vision_kit.types import LabelScore, Rect, Size
from vision_kit.viewport import AffineTransform, Orientation


class _Fixed:
    def __init__(self, result):
        self.result = result
        self.calls = 0

    def process(self, image):
        self.calls += 1
        return self.result


class _Broken:
    def process(self, image):
        raise RuntimeError("service unavailable")


def _text() -> RecognizedText:
    element = TextElement(text="hi", frame=Rect(0, 0, 10, 5))
    line = TextLine(text="hi", frame=Rect(0, 0, 10, 5), elements=(element,))
    return RecognizedText(text="hi", blocks=(TextBlock(text="hi", frame=Rect(0, 0, 10, 5), lines=(line,)),))


class TestCodelabSession(unittest.TestCase):
    def _session(self, **kwargs) -> CodelabSession:
        session = CodelabSession(Size(200, 400), **kwargs)
        session.pick_image(np.zeros((50, 100, 3), dtype=np.uint8))
        return session

    def test_pick_image_scales_to_view_width(self) -> None:
        session = CodelabSession(Size(200, 400))
        shown = session.pick_image(np.zeros((50, 100, 3), dtype=np.uint8), Orientation.PORTRAIT)
        self.assertEqual(shown.shape, (100, 200, 3))
        self.assertEqual(session.transform(), AffineTransform(scale=1.0, translate_x=0.0, translate_y=150.0))

    def test_pick_image_rejects_non_bgr(self) -> None:
        session = CodelabSession(Size(200, 400))
        for shape in ((50, 100, 4), (50, 100, 1), (50, 100)):
            with self.subTest(shape=shape):
                with self.assertRaises(ValueError):
                    session.pick_image(np.zeros(shape, dtype=np.uint8))
        self.assertIsNone(session.image)
        with self.assertRaises(RuntimeError):
            session.render()

    def test_transform_without_image_is_identity(self) -> None:
        self.assertTrue(CodelabSession(Size(200, 400)).transform().is_identity)

    def test_requires_image_and_service(self) -> None:
        with self.assertRaises(RuntimeError):
            CodelabSession(Size(10, 10), text_recognizer=_Fixed(_text())).run_text_recognition()
        with self.assertRaises(RuntimeError):
            self._session().run_face_contour_detection()

    def test_text_recognition_annotates_in_display_space(self) -> None:
        session = self._session(text_recognizer=_Fixed(_text()))
        result = session.run_text_recognition()
        self.assertIsNotNone(result)
        self.assertEqual(len(session.overlay.of_type(RectAnnotation)), 3)
        label = session.overlay.of_type(TextAnnotation)[0]
        self.assertEqual(label.rect, Rect(0.0, 150.0, 10.0, 5.0))

    def test_new_request_clears_previous_annotations(self) -> None:
        session = self._session(text_recognizer=_Fixed(_text()))
        session.run_text_recognition()
        session.run_text_recognition()
        self.assertEqual(len(session.overlay), 4)

    def test_service_failure_logged_and_overlay_cleared(self) -> None:
        session = self._session(text_recognizer=_Fixed(_text()), document_recognizer=_Broken())
        session.run_text_recognition()
        with self.assertLogs("codelab.session", level="ERROR") as logs:
            self.assertIsNone(session.run_cloud_text_recognition())
        self.assertIn("Document text recognizer failed with error: service unavailable", logs.output[0])
        self.assertEqual(len(session.overlay), 0)

    def test_no_results_logged(self) -> None:
        session = self._session(text_recognizer=_Fixed(None))
        with self.assertLogs("codelab.session", level="ERROR") as logs:
            self.assertIsNone(session.run_text_recognition())
        self.assertIn("No results returned.", logs.output[0])

    def test_face_detection(self) -> None:
        face = Face(frame=Rect(10, 10, 20, 20))
        session = self._session(face_detector=_Fixed([face]))
        faces = session.run_face_contour_detection()
        self.assertEqual(faces, [face])
        self.assertEqual(len(session.overlay.of_type(RectAnnotation)), 1)
        self.assertEqual(session.overlay.of_type(PointAnnotation), [])

    def test_model_inference(self) -> None:
        clf = ClassifierPipeline(lambda blob: np.array([[0, 255, 51]], dtype=np.uint8), ["bg", "dog", "cat"])
        session = self._session(classifier=clf)
        outcome = session.run_model_inference()
        self.assertTrue(outcome.ok)
        self.assertEqual([r.label for r in outcome.results], ["dog", "cat"])
        self.assertEqual(outcome.message, "dog: 1.0\ncat: 0.2\n")

    def test_model_inference_failure(self) -> None:
        def boom(blob):
            raise RuntimeError("interpreter not ready")

        session = self._session(classifier=ClassifierPipeline(boom, ["a"]))
        with self.assertLogs("codelab.session", level="ERROR"):
            outcome = session.run_model_inference()
        self.assertFalse(outcome.ok)
        self.assertEqual(outcome.message, FAILED_TO_DETECT_OBJECTS_MESSAGE)

    def test_render_is_view_sized(self) -> None:
        session = self._session(text_recognizer=_Fixed(_text()))
        session.run_text_recognition()
        out = session.render()
        self.assertEqual(out.shape, (400, 200, 3))

    def test_select_image_from_catalog(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        root = Path(tmpdir.name)
        catalog = (ImageDisplay(file="a.png", name="Image 1"), ImageDisplay(file="missing.png", name="Image 2"))
        cv2.imwrite(str(root / "a.png"), np.full((20, 30, 3), 9, dtype=np.uint8))

        session = CodelabSession(Size(30, 20), catalog=catalog, image_root=root)
        entry = session.select_image(0)
        self.assertEqual(entry.name, "Image 1")
        self.assertEqual(session.image.shape, (20, 30, 3))
        with self.assertRaises(FileNotFoundError):
            session.select_image(1)
        with self.assertRaises(IndexError):
            session.select_image(2)


class TestCatalogAndReporting(unittest.TestCase):
    def test_default_catalog(self) -> None:
        self.assertEqual(len(DEFAULT_CATALOG), 6)
        self.assertEqual(catalog_titles()[0], "Image 1")
        self.assertEqual(catalog_entry(3).file, "grace_hopper.jpg")
        with self.assertRaises(IndexError):
            catalog_entry(-1)

    def test_format_results(self) -> None:
        self.assertEqual(format_results(None), FAILED_TO_DETECT_OBJECTS_MESSAGE)
        self.assertEqual(format_results([]), "")
        self.assertEqual(format_results([LabelScore("a", 0.5)]), "a: 0.5\n")
        self.assertEqual(format_results([LabelScore("a", 1 / 255.0)]), "a: 0.003921569\n")

    def test_write_json_artifacts(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        root = Path(tmpdir.name)
        session = CodelabSession(Size(200, 400), text_recognizer=_Fixed(_text()))
        session.pick_image(np.zeros((50, 100, 3), dtype=np.uint8))
        session.run_text_recognition()

        ann = json.loads(write_annotations_json(root / "out" / "ann.json", session.overlay).read_text(encoding="utf-8"))
        self.assertEqual(len(ann["rects"]), 3)
        self.assertEqual(ann["labels"][0]["text"], "hi")
        self.assertEqual(ann["labels"][0]["rect"]["y"], 150.0)

        res = json.loads(
            write_classification_json(root / "res.json", [LabelScore("dog", 1.0)]).read_text(encoding="utf-8")
        )
        self.assertEqual(res, {"results": [{"label": "dog", "confidence": 1.0}]})


if __name__ == "__main__":
    unittest.main()
