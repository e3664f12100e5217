from __future__ import annotations

import os
from pathlib import Path

import pytest

from testenv.config import (
    DEFAULT_DATABASE_URI,
    DEFAULT_JWT_SECRET,
    REQUIRED_DEPENDENCIES,
    ProjectConfig,
    TestEnvironment,
    load_project_config,
    read_env,
)
from testenv.errors import ConfigurationError


def test_missing_config_file_means_defaults(tmp_path: Path) -> None:
    config, warnings = load_project_config(tmp_path)
    assert warnings == []
    assert config.test_root == tmp_path.resolve() / "tests"
    assert config.output_root == tmp_path.resolve() / "test-results"
    assert config.runner_command == ("npx", "jest")
    assert config.required_dependencies == REQUIRED_DEPENDENCIES


def test_yaml_overrides_and_unknown_keys(tmp_path: Path) -> None:
    (tmp_path / "testenv.yaml").write_text(
        "\n".join(
            [
                "test_dir: spec",
                "coverage_threshold: 80",
                "runner_command: yarn jest",
                "required_dependencies: [jest]",
                "mystery: 1",
            ]
        ),
        encoding="utf-8",
    )
    config, warnings = load_project_config(tmp_path)

    assert config.test_dir == "spec"
    assert config.coverage_threshold == 80.0
    assert config.runner_command == ("yarn", "jest")
    assert config.required_dependencies == {"jest": ""}
    assert warnings == ["Unknown config key ignored: mystery"]
    assert config.search_roots()[0] == tmp_path.resolve() / "spec"


def test_wrong_types_are_configuration_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        ProjectConfig.from_dict({"coverage_threshold": "high"}, project_root=tmp_path)
    with pytest.raises(ConfigurationError):
        ProjectConfig.from_dict({"extra_test_roots": "tests"}, project_root=tmp_path)


def test_non_mapping_document_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "testenv.yaml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_project_config(tmp_path)


def test_explicit_config_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_project_config(tmp_path, config_path=tmp_path / "nope.yaml")


def test_environment_defaults() -> None:
    env = TestEnvironment.from_env({})
    assert env.database_uri == DEFAULT_DATABASE_URI
    assert env.jwt_secret == DEFAULT_JWT_SECRET
    assert env.disable_external_apis is True
    assert env.headless is True
    assert env.slow_mo_ms == 0
    assert not env.use_memory_db


def test_environment_reads_switches() -> None:
    env = TestEnvironment.from_env(
        {
            "MONGODB_TEST_URI": "mongodb://db:27018/x",
            "USE_MEMORY_DB": "true",
            "HEADLESS": "false",
            "SLOW_MO": "250",
            "VERBOSE_TESTS": "1",
        }
    )
    assert env.database_uri == "mongodb://db:27018/x"
    assert env.use_memory_db and env.verbose_tests
    assert env.headless is False
    assert env.slow_mo_ms == 250


def test_child_env_is_a_copy_with_test_variables() -> None:
    base = {"PATH": "/bin", "DISABLE_EXTERNAL_APIS": "false"}
    child = TestEnvironment.from_env({}).child_env(base, verbose=True)

    assert child["PATH"] == "/bin"
    assert child["NODE_ENV"] == "test"
    assert child["MONGODB_TEST_URI"] == DEFAULT_DATABASE_URI
    assert child["JWT_SECRET"] == DEFAULT_JWT_SECRET
    assert child["DISABLE_EXTERNAL_APIS"] == "true"
    assert child["VERBOSE_TESTS"] == "true"
    assert base == {"PATH": "/bin", "DISABLE_EXTERNAL_APIS": "false"}

    quiet = TestEnvironment.from_env({}).child_env({}, verbose=False)
    assert "VERBOSE_TESTS" not in quiet


def test_read_env_layers_dotenv_under_real_environment(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("JWT_SECRET=from-file\nMONGODB_TEST_URI=mongodb://file/x\n", encoding="utf-8")
    before = dict(os.environ)

    merged = read_env(tmp_path, environ={"JWT_SECRET": "from-shell"})

    assert merged["JWT_SECRET"] == "from-shell"
    assert merged["MONGODB_TEST_URI"] == "mongodb://file/x"
    assert dict(os.environ) == before

    assert "MONGODB_TEST_URI" not in read_env(tmp_path, load_dotenv_file=False, environ={})


def test_test_file_pattern_must_compile(tmp_path: Path) -> None:
    config, warnings = ProjectConfig.from_dict({"test_file_pattern": r".*\.js$"}, project_root=tmp_path)
    assert warnings == []
    assert config.test_file_regex is not None
    assert config.test_file_regex.match("helpers.js")
    assert ProjectConfig(project_root=tmp_path).test_file_regex is None

    with pytest.raises(ConfigurationError, match="not a valid regular expression"):
        ProjectConfig.from_dict({"test_file_pattern": "(unclosed"}, project_root=tmp_path)
