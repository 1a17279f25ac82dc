"""
Sync plan construction.

This package handles:
1. Resolving the directory CocoaPods runs in
2. Building the argument lists of the refresh and install phases
3. Tracking the status of each phase while the step runs
"""

from .plan_builder import (
    CLEAN_COMMAND,
    INSTALL_PHASE,
    REFRESH_PHASE,
    VERBOSE_FLAG,
    CommandPhase,
    PhaseStatus,
    SyncPlan,
    SyncPlanBuilder,
)

__all__ = [
    "CLEAN_COMMAND",
    "INSTALL_PHASE",
    "REFRESH_PHASE",
    "VERBOSE_FLAG",
    "CommandPhase",
    "PhaseStatus",
    "SyncPlan",
    "SyncPlanBuilder",
]
