import json
import os
import tempfile
import unittest
from pathlib import Path


from testenv.io.fs import read_json, write_json_atomic, write_text_atomic


class TestSafeIO(unittest.TestCase):
    def test_write_json_is_atomic_and_cleans_temp(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out_dir = Path(td) / "out"
            out_path = out_dir / "state.json"

            payload = {"b": 1, "a": True, "c": None, "nested": {"x": "y"}}
            write_json_atomic(out_path, payload)

            self.assertEqual(payload, read_json(out_path))
            self.assertEqual([], list(out_dir.glob("*.tmp")))

    def test_write_json_keeps_key_order_and_trailing_newline(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out_path = Path(td) / "doc.json"
            write_json_atomic(out_path, {"z": 1, "a": 2})

            text = out_path.read_text(encoding="utf-8")
            self.assertTrue(text.endswith("\n"))
            self.assertLess(text.index('"z"'), text.index('"a"'))
            self.assertEqual(json.dumps({"z": 1, "a": 2}, indent=2) + "\n", text)

    def test_write_text_replaces_existing_content(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "nested" / "file.js"
            write_text_atomic(p, "first\n")
            write_text_atomic(p, "second\n")
            self.assertEqual("second\n", p.read_text(encoding="utf-8"))

    def test_failed_write_keeps_previous_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out_path = Path(td) / "users.json"
            write_json_atomic(out_path, [{"_id": "u1"}])

            with self.assertRaises(TypeError):
                write_json_atomic(out_path, [{"_id": object()}])

            self.assertEqual([{"_id": "u1"}], read_json(out_path))
            self.assertEqual(["users.json"], sorted(os.listdir(td)))


if __name__ == "__main__":
    unittest.main()
