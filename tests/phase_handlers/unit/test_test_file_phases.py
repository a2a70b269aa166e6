"""Unit and integration phase tests with a fake external runner."""

from __future__ import annotations

from pathlib import Path

import pytest
from unified_test_orchestrator.configuration import RunConfiguration
from unified_test_orchestrator.module_catalog import describe_module
from unified_test_orchestrator.phase_handlers import (
    IntegrationTestPhase,
    UnitTestPhase,
    UnknownPhaseError,
    build_phase_handlers,
    find_integration_tests,
    handler_for,
)
from unified_test_orchestrator.run_planning import Phase
from unified_test_orchestrator.test_runner import RunnerError, RunnerOutcome


class _FakeRunner:
    def __init__(self, outcomes) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[tuple[Path, object]] = []

    def run(self, test_path: Path, settings):
        self.calls.append((test_path, settings))
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _module(tmp_path: Path, name: str, *, colocated: bool = False, centralized: bool = False):
    module_dir = tmp_path / "modules" / name
    module_dir.mkdir(parents=True)
    (module_dir / "__init__.py").write_text("", encoding="utf-8")
    if colocated:
        (module_dir / "tests").mkdir()
        (module_dir / "tests" / f"test_{name}.py").write_text("", encoding="utf-8")
    if centralized:
        (tmp_path / "tests" / "unit" / "modules" / name).mkdir(parents=True)
    return describe_module(module_dir, tests_root=tmp_path / "tests")


def test_unit_phase_runs_colocated_test_file(tmp_path: Path) -> None:
    descriptor = _module(tmp_path, "Alpha", colocated=True)
    runner = _FakeRunner([RunnerOutcome(total=4, passed=3, failed=1)])

    result = UnitTestPhase(runner).handle(descriptor, RunConfiguration())

    assert runner.calls[0][0] == descriptor.colocated_test_file
    assert not result.success
    assert (result.tests_run, result.tests_passed, result.tests_failed) == (4, 3, 1)


def test_unit_phase_runs_centralized_directory(tmp_path: Path) -> None:
    descriptor = _module(tmp_path, "Beta", centralized=True)
    runner = _FakeRunner([{"Passed": 2, "Failed": 0}])

    result = UnitTestPhase(runner).handle(descriptor, RunConfiguration())

    assert runner.calls[0][0] == tmp_path / "tests" / "unit" / "modules" / "Beta"
    assert result.success
    assert result.tests_run == 2


def test_unit_phase_skips_modules_without_tests(tmp_path: Path) -> None:
    descriptor = _module(tmp_path, "Gamma")
    runner = _FakeRunner([RunnerOutcome(total=1, passed=1, failed=0)])

    result = UnitTestPhase(runner).handle(descriptor, RunConfiguration())

    assert runner.calls == []
    assert result.success
    assert result.skipped
    assert result.details[0].startswith("Skipped:")


def test_runner_errors_are_retried_then_reported(tmp_path: Path) -> None:
    descriptor = _module(tmp_path, "Alpha", colocated=True)
    runner = _FakeRunner([RunnerError("interpreter missing")])

    result = UnitTestPhase(runner).handle(descriptor, RunConfiguration(retry_count=2))

    assert len(runner.calls) == 3
    assert not result.success
    assert (result.tests_run, result.tests_failed) == (1, 1)
    assert result.error == "interpreter missing"


def test_run_error_fails_unit_phase_even_when_all_tests_pass(tmp_path: Path) -> None:
    descriptor = _module(tmp_path, "Alpha", colocated=True)
    runner = _FakeRunner(
        [RunnerOutcome(total=3, passed=3, failed=0, exit_code=1, error="Coverage below 90%")]
    )

    result = UnitTestPhase(runner).handle(descriptor, RunConfiguration(enable_coverage=True))

    assert not result.success
    assert (result.tests_run, result.tests_passed, result.tests_failed) == (3, 3, 0)
    assert result.error == "Coverage below 90%"
    assert "test_Alpha.py: Coverage below 90%" in result.details
    assert not result.skipped


def test_retry_recovers_from_transient_runner_error(tmp_path: Path) -> None:
    descriptor = _module(tmp_path, "Alpha", colocated=True)
    runner = _FakeRunner(
        [RunnerError("busy"), RunnerOutcome(total=2, passed=2, failed=0)]
    )

    result = UnitTestPhase(runner).handle(descriptor, RunConfiguration(retry_count=1))

    assert len(runner.calls) == 2
    assert result.success
    assert result.tests_passed == 2


def test_artifact_paths_are_derived_from_output_directory(tmp_path: Path) -> None:
    descriptor = _module(tmp_path, "Alpha", colocated=True)
    runner = _FakeRunner([RunnerOutcome(total=1, passed=1, failed=0)])

    UnitTestPhase(runner, artifacts_dir=tmp_path / "out").handle(
        descriptor, RunConfiguration()
    )

    settings = runner.calls[0][1]
    assert settings.results_path == tmp_path / "out" / "reports" / "junit" / "Alpha-unit-0.xml"
    assert settings.coverage_report_path == tmp_path / "out" / "coverage" / "Alpha-unit-0.json"
    assert settings.coverage_target == descriptor.path


def test_integration_files_match_module_name_case_insensitively(tmp_path: Path) -> None:
    integration_dir = tmp_path / "tests" / "integration"
    integration_dir.mkdir(parents=True)
    for name in ("test_alpha_flow.py", "test_ALPHA_api.py", "test_beta.py", "alpha_notes.py"):
        (integration_dir / name).write_text("", encoding="utf-8")

    matches = find_integration_tests(integration_dir, "Alpha")

    assert [path.name for path in matches] == ["test_ALPHA_api.py", "test_alpha_flow.py"]
    assert find_integration_tests(tmp_path / "missing", "Alpha") == []


def test_integration_phase_sums_counts_across_matching_files(tmp_path: Path) -> None:
    descriptor = _module(tmp_path, "Alpha")
    integration_dir = tmp_path / "tests" / "integration"
    integration_dir.mkdir(parents=True)
    (integration_dir / "test_alpha_one.py").write_text("", encoding="utf-8")
    (integration_dir / "test_alpha_two.py").write_text("", encoding="utf-8")
    runner = _FakeRunner(
        [RunnerOutcome(total=2, passed=2, failed=0), RunnerOutcome(total=3, passed=1, failed=2)]
    )

    result = IntegrationTestPhase(runner, integration_dir).handle(descriptor, RunConfiguration())

    assert result.phase is Phase.INTEGRATION
    assert (result.tests_run, result.tests_passed, result.tests_failed) == (5, 3, 2)
    assert not result.success


def test_integration_phase_skips_without_matching_files(tmp_path: Path) -> None:
    descriptor = _module(tmp_path, "Alpha")

    result = IntegrationTestPhase(_FakeRunner([None]), tmp_path / "none").handle(
        descriptor, RunConfiguration()
    )

    assert result.skipped


def test_handler_table_covers_every_phase(tmp_path: Path) -> None:
    handlers = build_phase_handlers(_FakeRunner([None]), integration_dir=tmp_path)

    assert set(handlers) == set(Phase)
    assert handler_for(handlers, Phase.UNIT) is handlers[Phase.UNIT]


def test_missing_handler_raises_unknown_phase_error() -> None:
    with pytest.raises(UnknownPhaseError, match="Performance"):
        handler_for({}, Phase.PERFORMANCE)
