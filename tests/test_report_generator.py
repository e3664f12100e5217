from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from testenv.audit import ReportGenerator, TestFileIndexer
from testenv.audit.report import count_by_category, print_report
from testenv.log import RecordingLogger


def _make_corpus(root: Path) -> None:
    layout = {
        "unit": ["a", "b", "c"],
        "integration": ["d", "e"],
        "e2e": ["f"],
    }
    for category, names in layout.items():
        for name in names:
            p = root / "tests" / category / f"{name}.test.js"
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text("describe('x', () => {});\n", encoding="utf-8")


def test_counts_include_zero_categories(tmp_path: Path) -> None:
    _make_corpus(tmp_path)
    records = TestFileIndexer(tmp_path, [tmp_path / "tests"]).index()

    counts = count_by_category(records)

    assert counts == {
        "unit": 3,
        "integration": 2,
        "e2e": 1,
        "api": 0,
        "performance": 0,
        "security": 0,
    }


def test_generate_writes_report_and_overwrites(tmp_path: Path) -> None:
    _make_corpus(tmp_path)
    records = TestFileIndexer(tmp_path, [tmp_path / "tests"]).index()
    out_dir = tmp_path / "test-results"
    gen = ReportGenerator(out_dir)

    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    report = gen.generate(records, now=now)

    assert report.total_files == 6
    data = json.loads(gen.report_path.read_text(encoding="utf-8"))
    assert data["schema_version"] == "test_report_v1"
    assert data["timestamp"] == "2026-01-01T00:00:00+00:00"
    assert data["summary"]["total_files"] == 6
    assert data["summary"]["counts_by_category"]["unit"] == 3
    assert {f["path"] for f in data["files"]} >= {"tests/unit/a.test.js", "tests/e2e/f.test.js"}

    gen.generate(records[:1], now=now)
    data = json.loads(gen.report_path.read_text(encoding="utf-8"))
    assert data["summary"]["total_files"] == 1
    assert len(data["files"]) == 1


def test_other_category_appears_only_when_used(tmp_path: Path) -> None:
    p = tmp_path / "tests" / "misc" / "z.test.js"
    p.parent.mkdir(parents=True)
    p.write_text("", encoding="utf-8")
    records = TestFileIndexer(tmp_path, [tmp_path / "tests"]).index()

    report = ReportGenerator(tmp_path / "out").build(records)
    assert report.counts_by_category["other"] == 1

    log = RecordingLogger()
    print_report(log, report)
    assert "  other: 1 files" in log.messages()
    assert "Total: 1 files" in log.messages()
