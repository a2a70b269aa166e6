"""Defensive extraction of pass/fail counts from runner results.

Runners have exposed their totals in several shapes over time. Each probe below
recognizes one shape and returns None when it does not apply; the first match
wins and an unrecognized object yields zero counts.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CaseCounts:
    """Normalized counts where run always equals passed plus failed."""

    run: int
    passed: int
    failed: int

    def __add__(self, other: CaseCounts) -> CaseCounts:
        return CaseCounts(
            run=self.run + other.run,
            passed=self.passed + other.passed,
            failed=self.failed + other.failed,
        )


ZERO_COUNTS = CaseCounts(run=0, passed=0, failed=0)


def extract_counts(result: Any) -> CaseCounts:
    """Probe known result shapes and return normalized counts; never raises."""
    if result is None:
        return ZERO_COUNTS
    for probe in _PROBES:
        try:
            counts = probe(result)
        except (TypeError, ValueError, AttributeError):
            counts = None
        if counts is not None:
            return counts
    return ZERO_COUNTS


def _normalize(*, total: Any = None, passed: Any = None, failed: Any = None) -> CaseCounts | None:
    total_value = _as_count(total)
    passed_value = _as_count(passed)
    failed_value = _as_count(failed)
    if passed_value is None and failed_value is None:
        if total_value is None:
            return None
        # only a total is known; nothing can be attributed to failures
        return CaseCounts(run=total_value, passed=total_value, failed=0)
    if passed_value is None:
        passed_value = max(0, (total_value or 0) - (failed_value or 0))
    if failed_value is None:
        failed_value = max(0, (total_value or 0) - passed_value)
    return CaseCounts(
        run=passed_value + failed_value,
        passed=passed_value,
        failed=failed_value,
    )


def _as_count(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, list | tuple | set | frozenset):
        return len(value)
    return max(0, int(value))


def _probe_attributes(*names: str) -> Callable[[Any], CaseCounts | None]:
    total_name, passed_name, failed_name = names

    def probe(result: Any) -> CaseCounts | None:
        if isinstance(result, Mapping):
            return None
        if not any(hasattr(result, name) for name in (passed_name, failed_name)):
            return None
        return _normalize(
            total=getattr(result, total_name, None),
            passed=getattr(result, passed_name, None),
            failed=getattr(result, failed_name, None),
        )

    return probe


def _probe_unittest_result(result: Any) -> CaseCounts | None:
    if not (hasattr(result, "testsRun") and hasattr(result, "failures")):
        return None
    failed = len(result.failures) + len(getattr(result, "errors", ()))
    failed += len(getattr(result, "unexpectedSuccesses", ()))
    skipped = len(getattr(result, "skipped", ()))
    executed = max(0, int(result.testsRun) - skipped)
    return _normalize(total=executed, failed=min(failed, executed))


def _probe_junit_mapping(result: Any) -> CaseCounts | None:
    if not isinstance(result, Mapping) or "tests" not in result:
        return None
    if "failures" not in result and "errors" not in result:
        return None
    total = int(result["tests"]) - int(result.get("skipped", 0) or 0)
    failed = int(result.get("failures", 0) or 0) + int(result.get("errors", 0) or 0)
    return _normalize(total=max(0, total), failed=min(failed, max(0, total)))


def _probe_plain_mapping(result: Any) -> CaseCounts | None:
    if not isinstance(result, Mapping):
        return None
    lowered = {str(key).lower(): value for key, value in result.items()}
    for total_key, passed_key, failed_key in (
        ("total", "passed", "failed"),
        ("totalcount", "passedcount", "failedcount"),
        ("testsrun", "testspassed", "testsfailed"),
    ):
        if passed_key in lowered or failed_key in lowered:
            return _normalize(
                total=lowered.get(total_key),
                passed=lowered.get(passed_key),
                failed=lowered.get(failed_key),
            )
    return None


def _probe_pytest_stats(result: Any) -> CaseCounts | None:
    stats = getattr(result, "stats", None)
    if not isinstance(stats, Mapping):
        return None
    passed = len(stats.get("passed", ()))
    failed = len(stats.get("failed", ())) + len(stats.get("error", ()))
    return _normalize(passed=passed, failed=failed)


_PROBES: tuple[Callable[[Any], CaseCounts | None], ...] = (
    _probe_attributes("total", "passed", "failed"),
    _probe_attributes("TotalCount", "PassedCount", "FailedCount"),
    _probe_attributes("tests_run", "tests_passed", "tests_failed"),
    _probe_unittest_result,
    _probe_junit_mapping,
    _probe_plain_mapping,
    _probe_pytest_stats,
)
