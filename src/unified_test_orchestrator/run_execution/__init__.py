"""Run execution domain exports."""

from .execution_engines import (
    ExecutionEngine,
    ParallelEngine,
    RunAbortedError,
    SequentialEngine,
    invoke_handler,
    select_engine,
)
from .run_contracts import SuiteRunOutcome, SuiteRunRequest
from .suite_orchestrator import SuiteOrchestrator

__all__ = [
    "ExecutionEngine",
    "ParallelEngine",
    "RunAbortedError",
    "SequentialEngine",
    "SuiteOrchestrator",
    "SuiteRunOutcome",
    "SuiteRunRequest",
    "invoke_handler",
    "select_engine",
]
