"""Sequential and parallel execution strategies over a plan's phase x module cells."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import Executor, ThreadPoolExecutor, wait
from typing import Any, Protocol

from unified_test_orchestrator.configuration.runtime_settings import RunConfiguration
from unified_test_orchestrator.module_catalog.descriptor_models import ModuleDescriptor
from unified_test_orchestrator.phase_handlers import (
    PhaseHandler,
    PhaseHandlerTable,
    PhaseResult,
    handler_for,
)
from unified_test_orchestrator.run_logging import LogLevel, LogSink, emit, resolve_log_sink
from unified_test_orchestrator.run_planning.plan_models import ExecutionPlan, Phase

ExecutorFactory = Callable[[int], Executor]


class RunAbortedError(Exception):
    """Raised when an Environment-phase failure stops the run.

    `results` still holds one result per plan cell; cells that never ran are
    recorded as not executed.
    """

    def __init__(self, message: str, *, results: Sequence[PhaseResult]) -> None:
        super().__init__(message)
        self.results = list(results)
        # set by the orchestrator once reports for the aborted run are written
        self.outcome: Any = None


class ExecutionEngine(Protocol):  # pylint: disable=too-few-public-methods
    """Strategy that executes every cell of a plan."""

    def run(self, plan: ExecutionPlan) -> list[PhaseResult]: ...


class _PoolUnavailableError(Exception):
    """Raised when worker threads cannot be provided."""


def invoke_handler(
    handler: PhaseHandler,
    module: ModuleDescriptor,
    phase: Phase,
    configuration: RunConfiguration,
) -> PhaseResult:
    """Run one cell, converting any handler exception into a failed result."""
    try:
        return handler.handle(module, configuration)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        return PhaseResult.failed_attempt(
            module.name,
            phase,
            f"{type(exc).__name__}: {exc}",
            details=(f"Handler raised while testing module '{module.name}'",),
        )


def _not_executed_cells(
    plan: ExecutionPlan, *, from_phase: int, from_module: int, reason: str
) -> list[PhaseResult]:
    cells = []
    for phase_index, phase in enumerate(plan.phases[from_phase:], start=from_phase):
        first_module = from_module if phase_index == from_phase else 0
        for module in plan.modules[first_module:]:
            cells.append(PhaseResult.not_executed(module.name, phase, reason))
    return cells


def _abort_reason(failed: Sequence[PhaseResult]) -> str:
    names = ", ".join(result.module_name for result in failed)
    return f"run aborted after Environment phase failure in: {names}"


class SequentialEngine:  # pylint: disable=too-few-public-methods
    """Runs phases in plan order and modules in catalog order on the calling thread."""

    def __init__(self, handlers: PhaseHandlerTable, *, log_sink: LogSink | None = None) -> None:
        self._handlers = handlers
        self._log_sink = resolve_log_sink(log_sink)

    def run(self, plan: ExecutionPlan) -> list[PhaseResult]:
        results: list[PhaseResult] = []
        for phase_index, phase in enumerate(plan.phases):
            handler = handler_for(self._handlers, phase)
            emit(
                self._log_sink,
                LogLevel.INFO,
                f"Phase {phase.value}: {len(plan.modules)} module(s)",
            )
            for module_index, module in enumerate(plan.modules):
                result = invoke_handler(handler, module, phase, plan.configuration)
                results.append(result)
                _log_result(self._log_sink, result)
                if phase is Phase.ENVIRONMENT and not result.success:
                    reason = _abort_reason([result])
                    emit(self._log_sink, LogLevel.ERROR, reason)
                    results.extend(
                        _not_executed_cells(
                            plan,
                            from_phase=phase_index,
                            from_module=module_index + 1,
                            reason=reason,
                        )
                    )
                    raise RunAbortedError(reason, results=results)
        return results


class ParallelEngine:  # pylint: disable=too-few-public-methods
    """Runs each phase's modules on a bounded thread pool with a barrier between phases."""

    def __init__(
        self,
        handlers: PhaseHandlerTable,
        *,
        log_sink: LogSink | None = None,
        executor_factory: ExecutorFactory | None = None,
    ) -> None:
        self._handlers = handlers
        self._log_sink = resolve_log_sink(log_sink)
        self._executor_factory = executor_factory or _thread_pool

    def run(self, plan: ExecutionPlan) -> list[PhaseResult]:
        results: list[PhaseResult] = []
        for phase_index, phase in enumerate(plan.phases):
            handler = handler_for(self._handlers, phase)
            emit(
                self._log_sink,
                LogLevel.INFO,
                f"Phase {phase.value}: {len(plan.modules)} module(s) on "
                f"{plan.configuration.parallel_jobs} worker(s)",
            )
            phase_results = self._run_phase(plan, phase, handler)
            results.extend(phase_results)
            for result in phase_results:
                _log_result(self._log_sink, result)

            failed = [result for result in phase_results if not result.success]
            if phase is Phase.ENVIRONMENT and failed:
                reason = _abort_reason(failed)
                emit(self._log_sink, LogLevel.ERROR, reason)
                results.extend(
                    _not_executed_cells(
                        plan, from_phase=phase_index + 1, from_module=0, reason=reason
                    )
                )
                raise RunAbortedError(reason, results=results)
        return results

    def _run_phase(
        self, plan: ExecutionPlan, phase: Phase, handler: PhaseHandler
    ) -> list[PhaseResult]:
        try:
            return self._run_phase_in_pool(plan, phase, handler)
        except _PoolUnavailableError as exc:
            emit(
                self._log_sink,
                LogLevel.WARN,
                f"Parallel execution unavailable ({exc}); running phase {phase.value} sequentially",
            )
        return [
            invoke_handler(handler, module, phase, plan.configuration) for module in plan.modules
        ]

    def _run_phase_in_pool(
        self, plan: ExecutionPlan, phase: Phase, handler: PhaseHandler
    ) -> list[PhaseResult]:
        try:
            executor = self._executor_factory(plan.configuration.parallel_jobs)
        except (RuntimeError, OSError) as exc:
            raise _PoolUnavailableError(str(exc)) from exc
        with executor:
            try:
                futures = [
                    executor.submit(invoke_handler, handler, module, phase, plan.configuration)
                    for module in plan.modules
                ]
            except RuntimeError as exc:
                raise _PoolUnavailableError(str(exc)) from exc
            wait(futures)
        return [future.result() for future in futures]


def select_engine(
    parallel: bool,
    handlers: PhaseHandlerTable,
    *,
    log_sink: LogSink | None = None,
    executor_factory: ExecutorFactory | None = None,
) -> ExecutionEngine:
    """Return the parallel or sequential strategy."""
    if parallel:
        return ParallelEngine(handlers, log_sink=log_sink, executor_factory=executor_factory)
    return SequentialEngine(handlers, log_sink=log_sink)


def _thread_pool(max_workers: int) -> Executor:
    return ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix="uto-phase")


def _log_result(sink: LogSink, result: PhaseResult) -> None:
    if result.skipped:
        emit(sink, LogLevel.DEBUG, f"{result.module_name} [{result.phase.value}] skipped")
        return
    level = LogLevel.SUCCESS if result.success else LogLevel.ERROR
    emit(
        sink,
        level,
        f"{result.module_name} [{result.phase.value}] "
        f"{result.tests_passed}/{result.tests_run} passed ({result.duration_seconds:.2f}s)",
    )
