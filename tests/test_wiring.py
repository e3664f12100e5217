from __future__ import annotations

import json
from pathlib import Path

from testenv.audit import IssueCode
from testenv.log import Level, RecordingLogger
from testenv.wiring import build_toolkit


def test_build_toolkit_reads_yaml_and_dotenv(tmp_path: Path) -> None:
    (tmp_path / "testenv.yaml").write_text("output_dir: reports\nunknown_key: 1\n", encoding="utf-8")
    (tmp_path / ".env").write_text("MONGODB_TEST_URI=mongodb://envfile:27017/x\n", encoding="utf-8")
    log = RecordingLogger()

    toolkit = build_toolkit(tmp_path, log=log, environ={})

    assert toolkit.layout.output_root == tmp_path.resolve() / "reports"
    assert toolkit.env.database_uri == "mongodb://envfile:27017/x"
    assert log.messages(Level.WARNING) == ["Unknown config key ignored: unknown_key"]


def test_custom_fixture_set_is_used_by_init(tmp_path: Path) -> None:
    (tmp_path / "seed.yaml").write_text(
        "widgets:\n  - _id: w1\n    name: Gear\n  - _id: w2\n    name: Cog\n", encoding="utf-8"
    )
    (tmp_path / "testenv.yaml").write_text("fixtures_file: seed.yaml\n", encoding="utf-8")
    log = RecordingLogger()
    toolkit = build_toolkit(tmp_path, log=log, environ={"USE_MEMORY_DB": "true"})

    toolkit.initialize()

    data_dir = tmp_path.resolve() / "tests" / "fixtures" / "data"
    assert sorted(p.name for p in data_dir.iterdir()) == ["widgets.json"]
    records = json.loads((data_dir / "widgets.json").read_text(encoding="utf-8"))
    assert [r["name"] for r in records] == ["Gear", "Cog"]
    assert "[1/4] Creating test directories..." in log.messages()


def test_wider_file_pattern_surfaces_naming_warnings(tmp_path: Path) -> None:
    (tmp_path / "testenv.yaml").write_text("test_file_pattern: '.*\\.js$'\n", encoding="utf-8")
    unit = tmp_path / "tests" / "unit"
    unit.mkdir(parents=True)
    body = "describe('Helpers', () => {\n  it('works', () => {\n    expect(1).toBe(1);\n  });\n});\n"
    (unit / "auth.test.js").write_text(body, encoding="utf-8")
    (unit / "helpers.js").write_text(body, encoding="utf-8")
    log = RecordingLogger()
    toolkit = build_toolkit(tmp_path, log=log, environ={})

    result = toolkit.run_checks()

    assert result.files_checked == 2
    naming = result.issues_for(IssueCode.NAMING)
    assert [i.file for i in naming] == ["tests/unit/helpers.js"]
    assert "(js, jsx, ts, tsx, mjs, cjs)" in naming[0].message
    assert any("helpers.js" in m for m in log.messages(Level.WARNING))
