"""
Data models passed between the CI host and the sync step.

This package provides the execution context a step runs in and the
results the process runner reports back.
"""

from .execution_context import ExecutionContext
from .command_result import CommandResult

__all__ = [
    "ExecutionContext",
    "CommandResult",
]
