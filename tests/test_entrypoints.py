import subprocess
import sys
import tempfile
import unittest
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]


def _run(script: str, *args: str, cwd: Path) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(REPO_ROOT / script), *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        env={"PATH": "", "NO_COLOR": "1", "PYTHONIOENCODING": "utf-8", "PYTHONPATH": str(REPO_ROOT)},
        timeout=60,
    )


class TestEntryPoints(unittest.TestCase):
    def test_cli_help_exits_zero(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            res = _run("testenv_cli.py", "--help", cwd=Path(td))
            self.assertEqual(0, res.returncode, res.stderr)
            self.assertIn("Usage: testenv <action>", res.stdout)

    def test_help_does_not_load_project_config(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "testenv.yaml").write_text("- a\n- b\n", encoding="utf-8")
            for script, args in (
                ("testenv_cli.py", ()),
                ("testenv_cli.py", ("--help",)),
                ("testenv_cli.py", ("run", "-h")),
                ("testenv_runner.py", ("--help",)),
            ):
                res = _run(script, *args, cwd=root)
                self.assertEqual(0, res.returncode, f"{script} {args}: {res.stdout}")
                self.assertNotIn("must be a mapping", res.stdout)

            res = _run("testenv_cli.py", "check", cwd=root)
            self.assertEqual(1, res.returncode)
            self.assertIn("must be a mapping", res.stdout)

    def test_runner_help_exits_zero(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            res = _run("testenv_runner.py", "-h", cwd=Path(td))
            self.assertEqual(0, res.returncode, res.stderr)
            self.assertIn("--detect-open-handles", res.stdout)

    def test_runner_without_manifest_exits_one(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            res = _run("testenv_runner.py", "--bogus", cwd=Path(td))
            self.assertEqual(1, res.returncode)
            self.assertIn("Unknown option: --bogus", res.stdout)
            self.assertIn("package.json not found!", res.stdout)

    def test_cli_init_creates_workspace(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            res = _run("testenv_cli.py", "init", cwd=root)
            self.assertEqual(0, res.returncode, res.stdout + res.stderr)
            self.assertTrue((root / "tests" / "setup.js").exists())
            self.assertTrue((root / "tests" / "fixtures" / "uploads" / ".gitkeep").exists())


if __name__ == "__main__":
    unittest.main()
