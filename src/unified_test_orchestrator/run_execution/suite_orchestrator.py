"""Suite orchestration use-case service."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from unified_test_orchestrator.configuration.runtime_settings import ProjectSettings
from unified_test_orchestrator.event_bus import (
    TEST_RUN_COMPLETED,
    TEST_SCAFFOLDS_GENERATED,
    EventBus,
)
from unified_test_orchestrator.module_catalog import ModuleDescriptor, build_catalog
from unified_test_orchestrator.phase_handlers import (
    ModuleLoader,
    PhaseHandlerTable,
    PhaseResult,
    build_phase_handlers,
)
from unified_test_orchestrator.results_writing import generate_reports, summarize
from unified_test_orchestrator.run_logging import LogLevel, LogSink, emit, resolve_log_sink
from unified_test_orchestrator.run_planning import plan_execution
from unified_test_orchestrator.scaffold_generation import ScaffoldOutcome
from unified_test_orchestrator.scaffold_generation import (
    generate_missing_tests as scaffold_missing_tests,
)
from unified_test_orchestrator.test_runner import ExternalTestRunner, PytestRunner

from .execution_engines import ExecutorFactory, RunAbortedError, select_engine
from .run_contracts import SuiteRunOutcome, SuiteRunRequest


class SuiteOrchestrator:
    """Ties catalog, planning, execution, reporting and events together for one project."""

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        settings: ProjectSettings,
        *,
        runner: ExternalTestRunner | None = None,
        log_sink: LogSink | None = None,
        event_bus: EventBus | None = None,
        handlers: PhaseHandlerTable | None = None,
        loader: ModuleLoader | None = None,
        executor_factory: ExecutorFactory | None = None,
    ) -> None:
        self._settings = settings
        self._runner = runner
        self._log_sink = resolve_log_sink(log_sink)
        self._event_bus = event_bus or EventBus()
        self._handlers = handlers
        self._loader = loader
        self._executor_factory = executor_factory

    # pylint: enable=too-many-arguments

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def catalog(self, module_filter: Iterable[str] | None = None) -> list[ModuleDescriptor]:
        layout = self._settings.layout
        return build_catalog(
            layout.modules_root,
            module_filter,
            tests_root=layout.tests_root,
            log_sink=self._log_sink,
        )

    def execute(self, request: SuiteRunRequest) -> SuiteRunOutcome:
        """Run one suite end to end and return results plus written report paths.

        An Environment-phase failure still produces reports from the complete
        result set. The `RunAbortedError` is then re-raised with its `outcome`
        attribute set.
        """
        modules = self.catalog(request.module_filter)
        plan = plan_execution(
            request.suite_kind,
            modules,
            request.profile_name,
            extra_profiles=self._settings.profiles,
            log_sink=self._log_sink,
        )
        output_dir = self._resolve_output_dir(request.output_path)
        emit(
            self._log_sink,
            LogLevel.INFO,
            f"Running suite {plan.suite_kind.value} with profile {plan.profile}: "
            f"{len(plan.modules)} module(s), {len(plan.phases)} phase(s)",
        )

        engine = select_engine(
            request.parallel,
            self._handlers or self._build_handlers(output_dir),
            log_sink=self._log_sink,
            executor_factory=self._executor_factory,
        )
        aborted: RunAbortedError | None = None
        try:
            results = engine.run(plan)
        except RunAbortedError as exc:
            aborted = exc
            results = exc.results

        generated_at = datetime.now(UTC)
        report_paths = None
        if request.generate_report:
            report_paths = generate_reports(
                results,
                plan.suite_kind,
                output_dir,
                editor_export=_choose(request.editor_export, self._settings.reports.editor_export),
                workbook=_choose(request.workbook, self._settings.reports.workbook),
                generated_at=generated_at,
            )
            emit(self._log_sink, LogLevel.INFO, f"Report written to {report_paths.json_path}")

        summary = summarize(results, plan.suite_kind, generated_at=generated_at)
        self._event_bus.publish(
            TEST_RUN_COMPLETED,
            {
                "summary": summary.as_document(),
                "aborted": aborted is not None,
                "report": str(report_paths.json_path) if report_paths else None,
            },
        )
        outcome = SuiteRunOutcome(
            suite_kind=plan.suite_kind,
            results=tuple(results),
            summary=summary,
            report_paths=report_paths,
            aborted=aborted is not None,
        )
        level = LogLevel.SUCCESS if summary.failed_modules == 0 else LogLevel.ERROR
        emit(
            self._log_sink,
            level,
            f"Suite {plan.suite_kind.value}: {summary.successful_modules}/"
            f"{summary.total_modules} module(s) passed, "
            f"{summary.passed_tests}/{summary.total_tests} test(s) passed",
        )
        if aborted is not None:
            aborted.outcome = outcome
            raise aborted
        return outcome

    # pylint: disable=too-many-arguments
    def run_suite(
        self,
        suite_kind,
        profile_name: str = "Development",
        module_filter: Iterable[str] | None = None,
        parallel: bool = False,
        output_path: str | None = None,
        generate_report: bool = True,
        editor_export: bool | None = None,
        workbook: bool | None = None,
    ) -> list[PhaseResult]:
        """Run one suite and return its results in execution order."""
        outcome = self.execute(
            SuiteRunRequest(
                suite_kind=suite_kind,
                profile_name=profile_name,
                module_filter=tuple(module_filter) if module_filter is not None else None,
                parallel=parallel,
                output_path=output_path,
                generate_report=generate_report,
                editor_export=editor_export,
                workbook=workbook,
            )
        )
        return list(outcome.results)

    # pylint: enable=too-many-arguments

    def generate_missing_tests(
        self,
        module_filter: Iterable[str] | None = None,
        max_concurrency: int = 4,
        overwrite: bool = False,
    ) -> list[ScaffoldOutcome]:
        """Scaffold test files for catalogued modules that have none."""
        outcomes = scaffold_missing_tests(
            self.catalog(),
            module_filter,
            max_concurrency=max_concurrency,
            overwrite=overwrite,
        )
        for outcome in outcomes:
            if outcome.success:
                emit(self._log_sink, LogLevel.SUCCESS, f"Generated {outcome.test_path}")
            else:
                emit(
                    self._log_sink,
                    LogLevel.WARN,
                    f"Skipped {outcome.module_name}: {outcome.error}",
                )
        self._event_bus.publish(
            TEST_SCAFFOLDS_GENERATED,
            {
                "generated": [outcome.module_name for outcome in outcomes if outcome.success],
                "failed": [outcome.module_name for outcome in outcomes if not outcome.success],
            },
        )
        return outcomes

    def _resolve_output_dir(self, output_path: str | None) -> Path:
        if output_path:
            return Path(output_path).resolve()
        return self._settings.layout.output_dir

    def _build_handlers(self, output_dir: Path) -> PhaseHandlerTable:
        return build_phase_handlers(
            self._runner or PytestRunner(),
            integration_dir=self._settings.layout.integration_tests_dir,
            artifacts_dir=output_dir,
            loader=self._loader,
        )


def _choose(requested: bool | None, configured: bool) -> bool:
    return configured if requested is None else requested
