"""
podsync runs the CocoaPods dependency sync as a build step: it refreshes the
spec repositories, optionally after clearing the Pods folder, and installs
the pods of a project.
"""

from .dependency_sync_step import DISPLAY_NAME, DependencySyncStep
from .podsync_config import StepConfig
from .podsync_exceptions import PodSyncException
from .step_models import CommandResult, ExecutionContext

__all__ = [
    "DISPLAY_NAME",
    "DependencySyncStep",
    "StepConfig",
    "PodSyncException",
    "CommandResult",
    "ExecutionContext",
]
