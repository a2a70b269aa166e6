"""Sequential and parallel execution engine tests."""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from pathlib import Path

import pytest
from unified_test_orchestrator.configuration import RunConfiguration
from unified_test_orchestrator.module_catalog import describe_module
from unified_test_orchestrator.phase_handlers import PhaseResult
from unified_test_orchestrator.run_execution import (
    ParallelEngine,
    RunAbortedError,
    SequentialEngine,
    select_engine,
)
from unified_test_orchestrator.run_logging import LogLevel
from unified_test_orchestrator.run_planning import ExecutionPlan, Phase, SuiteKind, phases_for


class _RecordingSink:
    def __init__(self) -> None:
        self.messages: list[tuple[LogLevel, str]] = []

    def log(self, level: LogLevel, message: str) -> None:
        self.messages.append((level, message))


class _ScriptedHandler:
    """Passes every module except the ones listed as failing or raising."""

    def __init__(self, phase: Phase, *, failing=(), raising=()) -> None:
        self.phase = phase
        self._failing = set(failing)
        self._raising = set(raising)
        self.seen: list[str] = []
        self._lock = threading.Lock()

    def handle(self, module, configuration) -> PhaseResult:
        with self._lock:
            self.seen.append(module.name)
        if module.name in self._raising:
            raise RuntimeError(f"{module.name} exploded")
        failed = 1 if module.name in self._failing else 0
        return PhaseResult(
            module_name=module.name,
            phase=self.phase,
            success=failed == 0,
            tests_run=2,
            tests_passed=2 - failed,
            tests_failed=failed,
            duration_seconds=0.01,
        )


def _handlers(**scripts):
    return {phase: _ScriptedHandler(phase, **scripts.get(phase.name, {})) for phase in Phase}


def _plan(tmp_path: Path, suite_kind: SuiteKind, *names: str, jobs: int = 2) -> ExecutionPlan:
    modules = []
    for name in names:
        module_dir = tmp_path / "modules" / name
        module_dir.mkdir(parents=True, exist_ok=True)
        (module_dir / "__init__.py").write_text("", encoding="utf-8")
        modules.append(describe_module(module_dir, tests_root=tmp_path / "tests"))
    return ExecutionPlan(
        suite_kind=suite_kind,
        profile="CI",
        started_at=datetime.now(UTC),
        modules=tuple(modules),
        phases=phases_for(suite_kind),
        configuration=RunConfiguration(parallel_jobs=jobs),
    )


def _cells(results):
    return [(result.phase, result.module_name, result.success) for result in results]


@pytest.mark.parametrize("suite_kind", list(SuiteKind))
def test_every_plan_cell_produces_exactly_one_result(tmp_path: Path, suite_kind) -> None:
    plan = _plan(tmp_path, suite_kind, "Alpha", "Beta", "Gamma")

    sequential = SequentialEngine(_handlers(), log_sink=_RecordingSink()).run(plan)
    parallel = ParallelEngine(_handlers(), log_sink=_RecordingSink()).run(plan)

    assert len(sequential) == plan.cell_count
    assert len(parallel) == plan.cell_count
    assert {(r.phase, r.module_name) for r in sequential} == {
        (phase, module.name) for phase in plan.phases for module in plan.modules
    }


def test_sequential_order_is_phase_major_in_catalog_order(tmp_path: Path) -> None:
    plan = _plan(tmp_path, SuiteKind.MODULES, "Alpha", "Beta")

    results = SequentialEngine(_handlers(), log_sink=_RecordingSink()).run(plan)

    assert [(r.phase, r.module_name) for r in results] == [
        (Phase.ENVIRONMENT, "Alpha"),
        (Phase.ENVIRONMENT, "Beta"),
        (Phase.UNIT, "Alpha"),
        (Phase.UNIT, "Beta"),
    ]


def test_parallel_and_sequential_produce_equivalent_results(tmp_path: Path) -> None:
    plan = _plan(tmp_path, SuiteKind.ALL, "Alpha", "Beta", "Gamma", "Delta", jobs=3)
    scripts = {"UNIT": {"failing": {"Beta"}}, "INTEGRATION": {"raising": {"Gamma"}}}

    sequential = SequentialEngine(_handlers(**scripts), log_sink=_RecordingSink()).run(plan)
    parallel = ParallelEngine(_handlers(**scripts), log_sink=_RecordingSink()).run(plan)

    assert _cells(sequential) == _cells(parallel)


def test_handler_exception_becomes_failed_result(tmp_path: Path) -> None:
    plan = _plan(tmp_path, SuiteKind.UNIT, "Alpha", "Beta")

    results = SequentialEngine(
        _handlers(UNIT={"raising": {"Alpha"}}), log_sink=_RecordingSink()
    ).run(plan)

    alpha, beta = results
    assert not alpha.success
    assert (alpha.tests_run, alpha.tests_failed) == (1, 1)
    assert "RuntimeError: Alpha exploded" in alpha.error
    assert beta.success


def test_sequential_environment_failure_aborts_with_complete_results(tmp_path: Path) -> None:
    plan = _plan(tmp_path, SuiteKind.ALL, "Alpha", "Beta", "Gamma")
    handlers = _handlers(ENVIRONMENT={"failing": {"Beta"}})

    with pytest.raises(RunAbortedError) as excinfo:
        SequentialEngine(handlers, log_sink=_RecordingSink()).run(plan)

    results = excinfo.value.results
    assert len(results) == plan.cell_count
    assert handlers[Phase.ENVIRONMENT].seen == ["Alpha", "Beta"]
    assert handlers[Phase.UNIT].seen == []
    not_executed = [r for r in results if r.details and r.details[0].startswith("Not executed")]
    assert len(not_executed) == plan.cell_count - 2
    assert all(not r.success and r.tests_run == 0 for r in not_executed)
    assert "Beta" in str(excinfo.value)


def test_parallel_environment_failure_aborts_after_the_phase(tmp_path: Path) -> None:
    plan = _plan(tmp_path, SuiteKind.PERFORMANCE, "Alpha", "Beta", "Gamma")
    handlers = _handlers(ENVIRONMENT={"failing": {"Alpha"}})

    with pytest.raises(RunAbortedError) as excinfo:
        ParallelEngine(handlers, log_sink=_RecordingSink()).run(plan)

    results = excinfo.value.results
    assert len(results) == plan.cell_count
    assert sorted(handlers[Phase.ENVIRONMENT].seen) == ["Alpha", "Beta", "Gamma"]
    assert handlers[Phase.PERFORMANCE].seen == []
    assert [r.module_name for r in results if r.phase is Phase.PERFORMANCE] == [
        "Alpha",
        "Beta",
        "Gamma",
    ]


def test_failures_in_later_phases_do_not_abort(tmp_path: Path) -> None:
    plan = _plan(tmp_path, SuiteKind.ALL, "Alpha", "Beta")

    results = SequentialEngine(
        _handlers(UNIT={"failing": {"Alpha", "Beta"}}), log_sink=_RecordingSink()
    ).run(plan)

    assert len(results) == plan.cell_count
    assert [r.module_name for r in results if r.phase is Phase.PERFORMANCE] == ["Alpha", "Beta"]


def test_parallel_engine_falls_back_to_sequential_when_pool_unavailable(tmp_path: Path) -> None:
    plan = _plan(tmp_path, SuiteKind.MODULES, "Alpha", "Beta")
    sink = _RecordingSink()

    def _no_threads(max_workers: int):
        raise RuntimeError("can't start new thread")

    results = ParallelEngine(_handlers(), log_sink=sink, executor_factory=_no_threads).run(plan)

    assert len(results) == plan.cell_count
    assert all(result.success for result in results)
    warnings = [message for level, message in sink.messages if level is LogLevel.WARN]
    assert len(warnings) == 2
    assert "running phase Environment sequentially" in warnings[0]


def test_parallel_engine_bounds_workers_by_parallel_jobs(tmp_path: Path) -> None:
    plan = _plan(tmp_path, SuiteKind.UNIT, "Alpha", "Beta", "Gamma", jobs=2)
    requested: list[int] = []

    def _recording_pool(max_workers: int):
        from concurrent.futures import ThreadPoolExecutor

        requested.append(max_workers)
        return ThreadPoolExecutor(max_workers=max_workers)

    ParallelEngine(_handlers(), log_sink=_RecordingSink(), executor_factory=_recording_pool).run(
        plan
    )

    assert requested == [2]


def test_select_engine_returns_requested_strategy() -> None:
    assert isinstance(select_engine(True, {}), ParallelEngine)
    assert isinstance(select_engine(False, {}), SequentialEngine)
