"""Subprocess-backed pytest runner."""

from __future__ import annotations

import shlex
import subprocess
import sys
import tempfile
import xml.etree.ElementTree as ElementTree
from collections.abc import Callable, Sequence
from dataclasses import replace
from pathlib import Path

from unified_test_orchestrator.configuration.runtime_settings import Verbosity

from .runner_contracts import RunnerError, RunnerOutcome, RunnerSettings

CommandRunner = Callable[[Sequence[str], float], int]

# pytest exit codes that still produce a usable junit report
_REPORTING_EXIT_CODES = frozenset({0, 1})
_NO_TESTS_COLLECTED = 5

_VERBOSITY_FLAGS = {
    Verbosity.MINIMAL: ("-qq",),
    Verbosity.NORMAL: ("-q",),
    Verbosity.DETAILED: ("-v",),
    Verbosity.VERBOSE: ("-vv",),
}


class PytestRunner:  # pylint: disable=too-few-public-methods
    """Run a test file or directory with `python -m pytest` in a child process."""

    def __init__(
        self,
        *,
        python_executable: str | None = None,
        run_command: CommandRunner | None = None,
    ) -> None:
        self._python = python_executable or sys.executable
        self._run_command = run_command or _run_subprocess

    def run(self, test_path: Path, settings: RunnerSettings) -> RunnerOutcome:
        if not test_path.exists():
            raise RunnerError(f"Test path not found: {test_path}")
        if settings.results_path is not None:
            settings.results_path.parent.mkdir(parents=True, exist_ok=True)
            return self._run_with_report(test_path, settings, settings.results_path)
        with tempfile.TemporaryDirectory(prefix="uto-junit-") as scratch:
            return self._run_with_report(test_path, settings, Path(scratch) / "junit.xml")

    def build_command(
        self, test_path: Path, settings: RunnerSettings, junit_path: Path
    ) -> list[str]:
        command = [
            self._python,
            "-m",
            "pytest",
            str(test_path),
            *_VERBOSITY_FLAGS[settings.verbosity],
            "-p",
            "no:cacheprovider",
            f"--junitxml={junit_path}",
        ]
        if settings.enable_coverage and settings.coverage_target is not None:
            command.append(f"--cov={settings.coverage_target}")
            if settings.coverage_report_path is not None:
                settings.coverage_report_path.parent.mkdir(parents=True, exist_ok=True)
                command.append(f"--cov-report=json:{settings.coverage_report_path}")
            command.append(f"--cov-fail-under={settings.coverage_threshold}")
        return command

    def _run_with_report(
        self, test_path: Path, settings: RunnerSettings, junit_path: Path
    ) -> RunnerOutcome:
        command = self.build_command(test_path, settings, junit_path)
        exit_code = self._run_command(command, settings.timeout_minutes * 60)
        if exit_code == _NO_TESTS_COLLECTED:
            return RunnerOutcome(total=0, passed=0, failed=0, exit_code=exit_code)
        if not junit_path.exists():
            raise RunnerError(
                f"pytest exited with code {exit_code} without a report: {shlex.join(command)}"
            )
        outcome = parse_junit_report(junit_path, exit_code=exit_code)
        if exit_code not in _REPORTING_EXIT_CODES and outcome.total == 0:
            raise RunnerError(f"pytest exited with code {exit_code}: {shlex.join(command)}")
        if exit_code != 0 and outcome.failed == 0:
            return replace(outcome, error=_run_failure_reason(exit_code, settings))
        return outcome


def parse_junit_report(report_path: Path, *, exit_code: int = 0) -> RunnerOutcome:
    """Sum testsuite counters from a junit XML report."""
    try:
        root = ElementTree.parse(report_path).getroot()
    except ElementTree.ParseError as exc:
        raise RunnerError(f"Unreadable junit report {report_path}: {exc}") from exc
    suites = [root] if root.tag == "testsuite" else list(root.iter("testsuite"))
    tests = failures = errors = skipped = 0
    for suite in suites:
        tests += int(suite.get("tests", 0))
        failures += int(suite.get("failures", 0))
        errors += int(suite.get("errors", 0))
        skipped += int(suite.get("skipped", 0))
    executed = max(0, tests - skipped)
    failed = min(executed, failures + errors)
    return RunnerOutcome(
        total=executed,
        passed=executed - failed,
        failed=failed,
        skipped=skipped,
        exit_code=exit_code,
    )


def _run_failure_reason(exit_code: int, settings: RunnerSettings) -> str:
    if exit_code == 1 and settings.enable_coverage:
        return f"Coverage below the {settings.coverage_threshold:g}% threshold"
    return f"pytest exited with code {exit_code} although no test failed"


def _run_subprocess(command: Sequence[str], timeout_seconds: float) -> int:
    try:
        completed = subprocess.run(
            list(command),
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout_seconds,
        )
    except FileNotFoundError as exc:
        raise RunnerError(f"Runner command not found: {shlex.join(command)}") from exc
    except subprocess.TimeoutExpired as exc:
        raise RunnerError(
            f"Runner timed out after {timeout_seconds:.0f}s: {shlex.join(command)}"
        ) from exc
    return completed.returncode
