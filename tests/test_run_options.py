from __future__ import annotations

from testenv.execution import RunOptions, build_runner_args, parse_run_args, parse_run_options
from testenv.log import Level, RecordingLogger


def test_coverage_verbose_and_file() -> None:
    opts = parse_run_options(["-c", "-v", "-f", "auth.test"])
    assert opts == RunOptions(coverage=True, verbose=True, test_file="auth.test")


def test_long_flags_and_run_subcommand() -> None:
    opts = parse_run_options(["run", "--watch", "--update-snapshots", "--silent", "--detect-open-handles"])
    assert opts.watch and opts.update_snapshots and opts.silent and opts.detect_open_handles
    assert not opts.coverage


def test_unknown_flags_become_warnings() -> None:
    log = RecordingLogger()
    args = parse_run_args(["--bogus", "-c", "stray"], log)

    assert args.options.coverage is True
    assert args.warnings == ("Unknown option: --bogus",)
    assert log.messages(Level.WARNING) == ["Unknown option: --bogus"]


def test_trailing_file_flag_is_ignored_with_warning() -> None:
    args = parse_run_args(["-f"])
    assert args.options.test_file is None
    assert len(args.warnings) == 1


def test_help_flag() -> None:
    assert parse_run_args(["-h"]).show_help is True
    assert parse_run_args([]).show_help is False


def test_runner_args_order_and_fixed_tail() -> None:
    opts = RunOptions(coverage=True, verbose=True, test_file="auth.test")
    assert build_runner_args(opts) == [
        "--coverage",
        "--coverageDirectory=coverage",
        "--coverageReporters=text",
        "--coverageReporters=lcov",
        "--coverageReporters=html",
        "--verbose",
        "auth.test",
        "--testTimeout=30000",
        "--forceExit",
        "--maxWorkers=1",
    ]


def test_single_worker_is_always_requested() -> None:
    combos = [
        RunOptions(),
        RunOptions(watch=True),
        RunOptions(coverage=True, silent=True, detect_open_handles=True, update_snapshots=True),
    ]
    for opts in combos:
        args = build_runner_args(opts, test_timeout_ms=1000)
        assert args.count("--maxWorkers=1") == 1
        assert "--testTimeout=1000" in args
