"""testenv.config

Project configuration and test-run environment.

Two sources feed the toolkit:

* ``testenv.yaml`` (optional, project root) - *where* things live and *how*
  the delegated runner is invoked. Missing file means defaults.
* environment variables (optionally seeded from ``<project_root>/.env``) -
  datastore URI, token secret and harness switches for the test run.

Both are parsed once per invocation into frozen dataclasses; nothing here
mutates ``os.environ``.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Pattern, Tuple, Union

from dotenv import dotenv_values

from testenv.errors import ConfigurationError

CONFIG_FILENAME = "testenv.yaml"
ENV_FILENAME = ".env"

DEFAULT_DATABASE_URI = "mongodb://localhost:27017/app_test"
DEFAULT_JWT_SECRET = "test-jwt-secret-key"
DEFAULT_BASE_URL = "http://localhost:3000"

# Canonical test kinds, in report order.
TEST_CATEGORIES: Tuple[str, ...] = (
    "unit",
    "integration",
    "e2e",
    "api",
    "performance",
    "security",
)
OTHER_CATEGORY = "other"

REQUIRED_DEPENDENCIES: Dict[str, str] = {
    "jest": "Testing framework",
    "supertest": "HTTP testing",
    "@types/jest": "Jest TypeScript support",
}

OPTIONAL_DEPENDENCIES: Dict[str, str] = {
    "puppeteer": "E2E testing",
    "mongodb-memory-server": "In-memory MongoDB",
    "jest-html-reporters": "HTML test reports",
    "jest-junit": "JUnit test reports",
}

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(environ: Mapping[str, str], name: str) -> bool:
    return str(environ.get(name, "")).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class ProjectConfig:
    """Filesystem layout and runner settings for one project."""

    __test__ = False

    project_root: Path
    test_dir: str = "tests"
    extra_test_roots: Tuple[str, ...] = ("__tests__",)
    fixtures_dir: str = "tests/fixtures"
    output_dir: str = "test-results"
    manifest: str = "package.json"
    coverage_summary: str = "coverage/coverage-summary.json"
    coverage_threshold: float = 70.0
    runner_command: Tuple[str, ...] = ("npx", "jest")
    test_timeout_ms: int = 30000
    required_dependencies: Dict[str, str] = field(default_factory=lambda: dict(REQUIRED_DEPENDENCIES))
    optional_dependencies: Dict[str, str] = field(default_factory=lambda: dict(OPTIONAL_DEPENDENCIES))
    fixtures_file: Optional[str] = None
    test_file_pattern: Optional[str] = None

    def _abs(self, rel: str) -> Path:
        p = Path(rel)
        return p if p.is_absolute() else self.project_root / p

    @property
    def test_root(self) -> Path:
        return self._abs(self.test_dir)

    @property
    def fixtures_root(self) -> Path:
        return self._abs(self.fixtures_dir)

    @property
    def output_root(self) -> Path:
        return self._abs(self.output_dir)

    @property
    def manifest_path(self) -> Path:
        return self._abs(self.manifest)

    @property
    def coverage_summary_path(self) -> Path:
        return self._abs(self.coverage_summary)

    @property
    def test_file_regex(self) -> Optional[Pattern[str]]:
        """Custom file-name pattern used when indexing, if configured."""
        return re.compile(self.test_file_pattern) if self.test_file_pattern else None

    @property
    def fixtures_file_path(self) -> Optional[Path]:
        return self._abs(self.fixtures_file) if self.fixtures_file else None

    def search_roots(self) -> List[Path]:
        """Directories scanned for test files (test root first)."""
        return [self.test_root] + [self._abs(r) for r in self.extra_test_roots]

    @staticmethod
    def from_dict(raw: Mapping[str, Any], *, project_root: Path) -> Tuple["ProjectConfig", List[str]]:
        """Build a config from a parsed YAML mapping.

        Returns ``(config, warnings)``; unknown keys are reported, not fatal.
        """
        known = {f.name for f in fields(ProjectConfig)} - {"project_root"}
        warnings = [f"Unknown config key ignored: {k}" for k in raw if k not in known]

        kwargs: Dict[str, Any] = {}
        for key in ("test_dir", "fixtures_dir", "output_dir", "manifest", "coverage_summary", "fixtures_file"):
            if key in raw and raw[key] is not None:
                kwargs[key] = _require_str(raw[key], key)

        if raw.get("test_file_pattern") is not None:
            kwargs["test_file_pattern"] = _require_pattern(raw["test_file_pattern"], "test_file_pattern")

        if "extra_test_roots" in raw:
            kwargs["extra_test_roots"] = tuple(_require_str_list(raw["extra_test_roots"], "extra_test_roots"))

        if "runner_command" in raw:
            cmd = raw["runner_command"]
            parts = cmd.split() if isinstance(cmd, str) else _require_str_list(cmd, "runner_command")
            if not parts:
                raise ConfigurationError("runner_command must not be empty")
            kwargs["runner_command"] = tuple(parts)

        if "coverage_threshold" in raw:
            kwargs["coverage_threshold"] = _require_number(raw["coverage_threshold"], "coverage_threshold")
        if "test_timeout_ms" in raw:
            kwargs["test_timeout_ms"] = int(_require_number(raw["test_timeout_ms"], "test_timeout_ms"))

        for key in ("required_dependencies", "optional_dependencies"):
            if key in raw:
                kwargs[key] = _require_dep_table(raw[key], key)

        return ProjectConfig(project_root=Path(project_root), **kwargs), warnings


def _require_str(value: Any, key: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"Config key '{key}' must be a non-empty string (got {value!r})")
    return value.strip()


def _require_pattern(value: Any, key: str) -> str:
    text = _require_str(value, key)
    try:
        re.compile(text)
    except re.error as e:
        raise ConfigurationError(f"Config key '{key}' is not a valid regular expression: {e}") from e
    return text


def _require_str_list(value: Any, key: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"Config key '{key}' must be a list of strings (got {value!r})")
    return [v.strip() for v in value if v.strip()]


def _require_number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"Config key '{key}' must be a number (got {value!r})")
    return float(value)


def _require_dep_table(value: Any, key: str) -> Dict[str, str]:
    # Accept either {name: description} or a plain list of names.
    if isinstance(value, list):
        return {name: "" for name in _require_str_list(value, key)}
    if isinstance(value, dict):
        return {str(k): str(v or "") for k, v in value.items()}
    raise ConfigurationError(f"Config key '{key}' must be a mapping or a list (got {value!r})")


def load_project_config(
    project_root: Union[str, Path],
    *,
    config_path: Optional[Union[str, Path]] = None,
) -> Tuple[ProjectConfig, List[str]]:
    """Load ``testenv.yaml`` (if present) for *project_root*.

    An explicit *config_path* that does not exist is an error; the implicit
    default file is optional.
    """
    import yaml

    root = Path(project_root).expanduser().resolve()
    if config_path is not None:
        p = Path(config_path).expanduser().resolve()
        if not p.exists():
            raise ConfigurationError(f"Config file not found: {p}")
    else:
        p = root / CONFIG_FILENAME
        if not p.exists():
            return ProjectConfig(project_root=root), []

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{p.name} must be a mapping/object at top level: {p}")
    return ProjectConfig.from_dict(raw, project_root=root)


@dataclass(frozen=True)
class TestEnvironment:
    """Environment-derived settings for the test run and the harness."""

    __test__ = False

    database_uri: str = DEFAULT_DATABASE_URI
    jwt_secret: str = DEFAULT_JWT_SECRET
    verbose_tests: bool = False
    use_memory_db: bool = False
    use_real_db: bool = False
    disable_external_apis: bool = True
    base_url: str = DEFAULT_BASE_URL
    headless: bool = True
    slow_mo_ms: int = 0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TestEnvironment":
        env = os.environ if environ is None else environ
        raw_slow_mo = str(env.get("SLOW_MO", "") or "0").strip()
        try:
            slow_mo = max(0, int(raw_slow_mo))
        except ValueError:
            slow_mo = 0
        raw_disable = env.get("DISABLE_EXTERNAL_APIS")
        return cls(
            database_uri=env.get("MONGODB_TEST_URI") or DEFAULT_DATABASE_URI,
            jwt_secret=env.get("JWT_SECRET") or DEFAULT_JWT_SECRET,
            verbose_tests=_flag(env, "VERBOSE_TESTS"),
            use_memory_db=_flag(env, "USE_MEMORY_DB"),
            use_real_db=_flag(env, "USE_REAL_DB"),
            disable_external_apis=True if raw_disable is None else _flag(env, "DISABLE_EXTERNAL_APIS"),
            base_url=env.get("TEST_BASE_URL") or DEFAULT_BASE_URL,
            headless=str(env.get("HEADLESS", "")).strip().lower() != "false",
            slow_mo_ms=slow_mo,
        )

    def child_env(
        self,
        base: Optional[Mapping[str, str]] = None,
        *,
        verbose: bool = False,
    ) -> Dict[str, str]:
        """Environment for the delegated runner.

        A copy of *base* (default ``os.environ``) with the test-run variables
        applied. External API calls are always disabled for the child.
        """
        env = dict(os.environ if base is None else base)
        env["NODE_ENV"] = "test"
        env["MONGODB_TEST_URI"] = self.database_uri
        env["JWT_SECRET"] = self.jwt_secret
        env["DISABLE_EXTERNAL_APIS"] = "true"
        if verbose:
            env["VERBOSE_TESTS"] = "true"
        return env


def read_env(
    project_root: Union[str, Path],
    *,
    load_dotenv_file: bool = True,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Merge ``<project_root>/.env`` under the process environment.

    Values already present in the real environment always win. The result is
    a fresh dict; ``os.environ`` is left untouched.
    """
    merged: Dict[str, str] = {}
    if load_dotenv_file:
        dotenv_path = Path(project_root) / ENV_FILENAME
        if dotenv_path.exists():
            merged.update({k: v for k, v in dotenv_values(dotenv_path).items() if v is not None})
    merged.update(os.environ if environ is None else environ)
    return merged
