"""
Process runner.

This package handles:
1. Launching external commands with a given environment and directory
2. Streaming their combined stdout/stderr to an output sink
3. Reporting exit codes
"""

from .runner import ProcessRunner, SubprocessRunner

__all__ = ["ProcessRunner", "SubprocessRunner"]
