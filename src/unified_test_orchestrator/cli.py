"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from unified_test_orchestrator.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    ProjectSettings,
    load_project_settings,
    write_placeholder_configuration,
)
from unified_test_orchestrator.module_catalog import CatalogError
from unified_test_orchestrator.phase_handlers import UnknownPhaseError
from unified_test_orchestrator.run_execution import (
    RunAbortedError,
    SuiteOrchestrator,
    SuiteRunOutcome,
    SuiteRunRequest,
)
from unified_test_orchestrator.run_planning import PlanningError, SuiteKind
from unified_test_orchestrator.scaffold_generation import ScaffoldError
from unified_test_orchestrator.test_runner import RunnerError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class CliError(Exception):
    """Custom CLI error."""


def _config_option(function):
    return click.option(
        "--config",
        "config_path",
        required=False,
        type=click.Path(path_type=str),
        help=f"Project configuration file (default: ./{DEFAULT_CONFIG_FILENAME} if present)",
    )(function)


def _load_settings(config_path: str | None) -> ProjectSettings:
    try:
        return load_project_settings(config_path)
    except (ConfigurationError, OSError) as exc:
        raise CliError(str(exc)) from exc


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="unified-test-orchestrator")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Route run messages through Python logging at this level instead of the console.",
)
def cli(log_level: str | None) -> None:
    """Unified test orchestrator for module-based projects."""
    if log_level:
        logging.basicConfig(
            level=log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML project configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML project configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="list-modules")
@_config_option
def list_modules(config_path: str | None) -> None:
    """List catalogued modules with their test strategy and test location."""
    orchestrator = SuiteOrchestrator(_load_settings(config_path))
    try:
        catalog = orchestrator.catalog()
    except CatalogError as exc:
        raise CliError(str(exc)) from exc
    for module in catalog:
        click.echo(f"{module.name}\t{module.test_strategy.value}\t{module.test_path}")


@cli.command(name="run")
@click.option(
    "--suite",
    "suite_kind",
    default=SuiteKind.ALL.value,
    show_default=True,
    type=click.Choice([kind.value for kind in SuiteKind], case_sensitive=False),
    help="Suite to execute",
)
@click.option("--profile", "profile_name", default="Development", show_default=True)
@click.option(
    "--module",
    "module_names",
    multiple=True,
    help="Restrict the run to this module (repeatable)",
)
@click.option("--parallel", is_flag=True, default=False, help="Run modules of a phase in parallel.")
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory for reports, logs and coverage output",
)
@click.option("--no-report", is_flag=True, default=False, help="Skip writing report files.")
@click.option(
    "--editor-export/--no-editor-export",
    default=None,
    help="Write the editor-consumable JSON export (default: from configuration)",
)
@click.option(
    "--workbook/--no-workbook",
    default=None,
    help="Write the results workbook (default: from configuration)",
)
@_config_option
# pylint: disable-next=too-many-arguments
def run_tests(
    suite_kind: str,
    profile_name: str,
    module_names: tuple[str, ...],
    parallel: bool,
    output_dir: str | None,
    no_report: bool,
    editor_export: bool | None,
    workbook: bool | None,
    config_path: str | None,
) -> None:
    """Execute a test suite against the project's modules."""
    orchestrator = SuiteOrchestrator(_load_settings(config_path))
    request = SuiteRunRequest(
        suite_kind=suite_kind,
        profile_name=profile_name,
        module_filter=module_names or None,
        parallel=parallel,
        output_path=output_dir,
        generate_report=not no_report,
        editor_export=editor_export,
        workbook=workbook,
    )
    try:
        outcome = orchestrator.execute(request)
    except RunAbortedError as exc:
        if exc.outcome is not None:
            _echo_outcome(exc.outcome)
        raise CliError(str(exc)) from exc
    except (
        CatalogError,
        ConfigurationError,
        PlanningError,
        RunnerError,
        UnknownPhaseError,
        OSError,
    ) as exc:
        raise CliError(str(exc)) from exc

    _echo_outcome(outcome)
    if outcome.summary.failed_modules:
        raise CliError(f"{outcome.summary.failed_modules} module(s) failed.")


@cli.command(name="generate-tests")
@click.option(
    "--module",
    "module_names",
    multiple=True,
    help="Only scaffold this module (repeatable)",
)
@click.option("--max-concurrency", default=4, show_default=True, type=click.IntRange(min=1))
@click.option("--overwrite", is_flag=True, default=False, help="Replace existing test files.")
@_config_option
def generate_tests(
    module_names: tuple[str, ...],
    max_concurrency: int,
    overwrite: bool,
    config_path: str | None,
) -> None:
    """Generate starter test files for modules without tests."""
    orchestrator = SuiteOrchestrator(_load_settings(config_path))
    try:
        outcomes = orchestrator.generate_missing_tests(
            module_names or None,
            max_concurrency=max_concurrency,
            overwrite=overwrite,
        )
    except (CatalogError, ScaffoldError, OSError) as exc:
        raise CliError(str(exc)) from exc
    for outcome in outcomes:
        status = "generated" if outcome.success else f"skipped ({outcome.error})"
        click.echo(f"{outcome.module_name}\t{status}\t{outcome.test_path}")
    if not outcomes:
        click.echo("All modules already have tests.")


def _echo_outcome(outcome: SuiteRunOutcome) -> None:
    summary = outcome.summary
    click.echo(
        f"{summary.suite_kind.value}: {summary.successful_modules}/{summary.total_modules} "
        f"module(s) passed, {summary.passed_tests}/{summary.total_tests} test(s) passed "
        f"({summary.success_rate}%)"
    )
    if outcome.report_paths is not None:
        for path in outcome.report_paths.all_paths():
            click.echo(str(path))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
