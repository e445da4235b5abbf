import json
import tempfile
import unittest
from pathlib import Path

from codelab.results import ContourType, count_elements, count_symbols
from codelab.results_io import (
    load_document_text_json,
    load_faces_json,
    load_text_json,
    parse_faces,
    parse_text,
)
from vision_kit.types import Point, Rect


TEXT_PAYLOAD = {
    "text": "Please walk",
    "blocks": [
        {
            "text": "Please walk",
            "frame": [10, 20, 200, 40],
            "lines": [
                {
                    "text": "Please walk",
                    "frame": [10, 20, 200, 40],
                    "elements": [
                        {"text": "Please", "frame": [10, 20, 90, 40]},
                        {"text": "walk", "frame": [110, 20, 100, 40]},
                    ],
                }
            ],
        }
    ],
}

DOCUMENT_PAYLOAD = {
    "text": "Hi",
    "blocks": [
        {
            "text": "Hi",
            "frame": [0, 0, 20, 10],
            "paragraphs": [
                {
                    "text": "Hi",
                    "frame": [0, 0, 20, 10],
                    "words": [
                        {
                            "text": "Hi",
                            "frame": [0, 0, 20, 10],
                            "symbols": [
                                {"text": "H", "frame": [0, 0, 10, 10]},
                                {"text": "i", "frame": [10, 0, 10, 10]},
                            ],
                        }
                    ],
                }
            ],
        }
    ],
}

FACES_PAYLOAD = {
    "faces": [
        {
            "frame": [5, 5, 50, 60],
            "contours": {"face": [[5, 5], [55, 5]], "nose_bottom": [[30, 40]]},
        }
    ]
}


class TestResultsIO(unittest.TestCase):
    def _write(self, payload) -> Path:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        path = Path(tmpdir.name) / "results.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_text(self) -> None:
        text = load_text_json(self._write(TEXT_PAYLOAD))
        self.assertEqual(text.text, "Please walk")
        self.assertEqual(count_elements(text), 2)
        self.assertEqual(text.blocks[0].lines[0].elements[1].frame, Rect(110.0, 20.0, 100.0, 40.0))

    def test_document_text(self) -> None:
        doc = load_document_text_json(self._write(DOCUMENT_PAYLOAD))
        self.assertEqual(count_symbols(doc), 2)
        self.assertEqual(doc.blocks[0].paragraphs[0].words[0].symbols[1].text, "i")

    def test_faces(self) -> None:
        faces = load_faces_json(self._write(FACES_PAYLOAD))
        self.assertEqual(len(faces), 1)
        self.assertEqual(faces[0].contour(ContourType.FACE), (Point(5.0, 5.0), Point(55.0, 5.0)))
        self.assertEqual(faces[0].contour(ContourType.LEFT_EYE), ())

    def test_empty_results(self) -> None:
        self.assertEqual(parse_text({"text": ""}).blocks, ())
        self.assertEqual(parse_faces({}), [])

    def test_bad_frame_rejected(self) -> None:
        with self.assertRaises(ValueError):
            parse_text({"blocks": [{"text": "x", "frame": [1, 2, 3]}]})
        with self.assertRaises(ValueError):
            parse_text({"blocks": [{"text": "x", "frame": [1, 2, 3, True]}]})

    def test_unknown_contour_rejected(self) -> None:
        with self.assertRaises(ValueError):
            parse_faces({"faces": [{"frame": [0, 0, 1, 1], "contours": {"ear": [[0, 0]]}}]})

    def test_root_must_be_object(self) -> None:
        with self.assertRaises(ValueError):
            parse_text([1, 2])

    def test_invalid_json_and_missing_file(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        bad = Path(tmpdir.name) / "bad.json"
        bad.write_text("{", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_text_json(bad)
        with self.assertRaises(FileNotFoundError):
            load_faces_json(Path(tmpdir.name) / "missing.json")


if __name__ == "__main__":
    unittest.main()
