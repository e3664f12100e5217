"""testenv.toolkit

One object that represents the toolkit's primary capabilities.

Why this exists
---------------
The behaviour is spread over :mod:`testenv.workspace`, :mod:`testenv.audit`
and :mod:`testenv.execution`. Entry points (the two CLIs, CI scripts, tests)
should not wire those modules together themselves, so
:class:`TestEnvToolkit` is the front door:

- ``initialize(...)``: provision directories, fixtures and harness files
- ``generate_samples()``: write the sample test files
- ``run_checks()``: index + audit, persist ``quality-report.json``
- ``generate_report()``: index + categorized ``test-report.json``
- ``run_tests(options)``: preflight, environment, one supervised runner process

Build instances through :func:`testenv.wiring.build_toolkit`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence

from testenv.audit import (
    QUALITY_REPORT_FILENAME,
    TEST_FILE_RE,
    AuditResult,
    QualityAuditor,
    ReportGenerator,
    TestFileIndexer,
    TestFileRecord,
    TestReport,
    build_context,
    print_audit_summary,
    print_report,
    write_audit_artifact,
)
from testenv.config import ProjectConfig, TestEnvironment
from testenv.execution import ProcessOutcome, RunOptions, SubprocessOrchestrator, check_runner_dependencies
from testenv.log import ConsoleLogger, get_default_logger
from testenv.workspace import (
    DEFAULT_FIXTURES,
    DirectoryProvisioner,
    FixtureWriter,
    HarnessScaffolder,
    SampleTestWriter,
    WorkspaceLayout,
    load_fixture_set,
)
from testenv.workspace.environment import (
    STRATEGY_IN_MEMORY,
    Connector,
    DatastoreCheck,
    check_datastore,
    cleanup_run_artifacts,
    default_connector,
)

OrchestratorFactory = Callable[..., SubprocessOrchestrator]


class TestEnvToolkit:
    """High-level facade over provisioning, auditing and test execution."""

    __test__ = False

    def __init__(
        self,
        config: ProjectConfig,
        environ: Mapping[str, str],
        *,
        log: Optional[ConsoleLogger] = None,
        connect: Connector = default_connector,
        orchestrator_factory: OrchestratorFactory = SubprocessOrchestrator,
    ) -> None:
        self.config = config
        self.environ = dict(environ)
        self.env = TestEnvironment.from_env(self.environ)
        self.layout = WorkspaceLayout.from_config(config)
        self.log = log or get_default_logger()
        self._connect = connect
        self._orchestrator_factory = orchestrator_factory

    # ------------------------------------------------------------------
    # Provisioning
    # ------------------------------------------------------------------

    def initialize(self, *, generate_samples: bool = False, run_checks: bool = False) -> None:
        log = self.log
        log.header("Initializing Test Environment")

        log.step(1, 4, "Creating test directories...")
        DirectoryProvisioner(log=log, project_root=self.layout.project_root).provision(self.layout.directories())

        log.step(2, 4, "Setting up test database...")
        check = self.check_datastore()
        if check.strategy == STRATEGY_IN_MEMORY:
            log.info("Fixtures will be loaded into the in-memory database by the harness")

        log.step(3, 4, "Creating test fixtures...")
        fixtures = DEFAULT_FIXTURES
        if self.config.fixtures_file_path is not None:
            fixtures = load_fixture_set(self.config.fixtures_file_path)
        writer = FixtureWriter(self.layout.fixture_data_dir, log=log)
        writer.write_all(fixtures)
        writer.ensure_placeholders(self.layout.placeholder_dirs())

        log.step(4, 4, "Setting up test configuration...")
        HarnessScaffolder(self.layout.test_root, log=log).emit()

        log.success("Test environment initialized")

        if generate_samples:
            self.generate_samples()
        if run_checks:
            self.run_checks()

    def generate_samples(self) -> List[Path]:
        self.log.header("Generating Sample Test Files")
        return SampleTestWriter(self.layout.test_root, log=self.log).write_all()

    # ------------------------------------------------------------------
    # Audit / report
    # ------------------------------------------------------------------

    def index_tests(self) -> List[TestFileRecord]:
        pattern = self.config.test_file_regex or TEST_FILE_RE
        return TestFileIndexer(self.config.project_root, self.config.search_roots(), pattern=pattern).index()

    def run_checks(self, records: Optional[Sequence[TestFileRecord]] = None) -> AuditResult:
        """Run every audit rule; issues are advisory and never raise."""
        self.log.header("Running Test Quality Checks")
        files = list(records) if records is not None else self.index_tests()
        result = QualityAuditor(log=self.log).audit(build_context(self.config, files))
        path = write_audit_artifact(result, self.layout.output_root / QUALITY_REPORT_FILENAME)
        print_audit_summary(self.log, result)
        self.log.info(f"Quality report saved to: {self.layout.relative(path)}")
        return result

    def generate_report(self, records: Optional[Sequence[TestFileRecord]] = None) -> TestReport:
        self.log.header("Generating Test Report")
        files = list(records) if records is not None else self.index_tests()
        generator = ReportGenerator(self.layout.output_root)
        report = generator.generate(files)
        print_report(self.log, report)
        self.log.success(f"Test report saved to: {generator.report_path}")
        return report

    # ------------------------------------------------------------------
    # Run path
    # ------------------------------------------------------------------

    def check_datastore(self) -> DatastoreCheck:
        return check_datastore(self.env, log=self.log, connect=self._connect)

    def _print_run_summary(self, options: RunOptions) -> None:
        log = self.log
        log.header("Test Configuration Summary")
        log.plain(f"Test Mode: {options.mode}")
        log.plain(f"Coverage: {'Enabled' if options.coverage else 'Disabled'}")
        log.plain(f"Verbose: {'Enabled' if options.verbose else 'Disabled'}")
        if options.test_file:
            log.plain(f"Test File: {options.test_file}")
        else:
            log.plain("Test Scope: All Tests")
        log.plain("Environment: test")
        log.plain(f"Database: {self.env.database_uri}")

    def run_tests(self, options: RunOptions) -> ProcessOutcome:
        """Prepare the environment and run the delegated runner once.

        Raises :class:`~testenv.errors.ConfigurationError` when required
        tooling is missing and :class:`~testenv.errors.ProcessFailure` when
        the runner fails.
        """
        log = self.log
        log.header("Test Runner")

        log.header("Checking Dependencies")
        check_runner_dependencies(self.config.manifest_path, self.config.required_dependencies, log=log)

        log.header("Setting up Test Environment")
        child_env = self.env.child_env(self.environ, verbose=options.verbose)
        log.success("Test environment configured")

        self._print_run_summary(options)

        if not self.env.use_memory_db:
            log.header("Checking Datastore Connection")
            self.check_datastore()

        if not options.watch:
            log.header("Cleaning up Test Artifacts")
            cleanup_run_artifacts(self.config.project_root, log=log)
            log.success("Test artifacts cleaned up")

        log.header("Running Tests")
        orchestrator = self._orchestrator_factory(
            self.config.runner_command,
            cwd=self.config.project_root,
            env=child_env,
            log=log,
            test_timeout_ms=self.config.test_timeout_ms,
        )
        outcome = orchestrator.run(options)
        log.success("All tests completed successfully!")

        if options.coverage:
            coverage_dir = self.config.project_root / "coverage"
            if coverage_dir.exists():
                log.info(f"Coverage report generated at: {coverage_dir / 'index.html'}")
        return outcome
