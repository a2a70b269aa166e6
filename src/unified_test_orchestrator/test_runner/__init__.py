"""External test runner exports."""

from .pytest_runner import PytestRunner, parse_junit_report
from .result_shapes import ZERO_COUNTS, CaseCounts, extract_counts
from .runner_contracts import ExternalTestRunner, RunnerError, RunnerOutcome, RunnerSettings

__all__ = [
    "CaseCounts",
    "ExternalTestRunner",
    "PytestRunner",
    "RunnerError",
    "RunnerOutcome",
    "RunnerSettings",
    "ZERO_COUNTS",
    "extract_counts",
    "parse_junit_report",
]
