"""
Sync plan builder.

Turns a StepConfig and an ExecutionContext into the ordered commands the
step runs. Building a plan never touches the filesystem or starts a process.
"""

import pathlib
from typing import List, Optional

from podsync.podsync_config import StepConfig
from podsync.step_models import ExecutionContext

PODS_DIRECTORY = "Pods"
CLEAN_COMMAND = ["rm", "-r", "-f", PODS_DIRECTORY]
VERBOSE_FLAG = "--verbose"

REFRESH_PHASE = "refresh"
INSTALL_PHASE = "install"


class PhaseStatus:
    """Enumeration of phase statuses."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class CommandPhase:
    """
    An ordered group of commands run in the same directory.

    The phase stops at the first command exiting nonzero; that exit code is
    the exit code of the phase.
    """

    def __init__(
            self,
            name: str,
            commands: List[List[str]],
            status: str = PhaseStatus.PENDING,
    ):
        """
        Initialize a command phase.

        Args:
            name: Phase name, "refresh" or "install"
            commands: Argument vectors, run in order
            status: Current phase status
        """
        self.name = name
        self.commands = commands
        self.status = status
        self.exit_code: Optional[int] = None
        self.error_message: Optional[str] = None

    def mark(self, exit_code: int) -> None:
        self.exit_code = exit_code
        self.status = PhaseStatus.SUCCEEDED if exit_code == 0 else PhaseStatus.FAILED

    def mark_error(self, error_message: str) -> None:
        self.exit_code = None
        self.error_message = error_message
        self.status = PhaseStatus.FAILED

    def skip(self) -> None:
        self.status = PhaseStatus.SKIPPED

    @property
    def errored(self) -> bool:
        """True if the phase ended on an error rather than an exit code."""
        return self.error_message is not None

    def __repr__(self) -> str:
        return (
            f"CommandPhase(name={self.name}, "
            f"status={self.status}, commands={self.commands})"
        )


class SyncPlan:
    """
    The complete set of commands for one run of the step.
    """

    def __init__(self, working_directory: pathlib.Path, phases: List[CommandPhase]):
        self.working_directory = working_directory
        self.phases = phases

    @property
    def succeeded(self) -> bool:
        return all(phase.status == PhaseStatus.SUCCEEDED for phase in self.phases)

    def __repr__(self) -> str:
        return f"SyncPlan(cwd={self.working_directory}, phases={self.phases})"


class SyncPlanBuilder:
    """
    Builds the refresh and install phases from a StepConfig.
    """

    def __init__(self, config: StepConfig):
        self.config = config

    def build(self, ctx: ExecutionContext) -> SyncPlan:
        """
        Create the plan for running the step in the given context.

        Returns:
            SyncPlan with the refresh phase followed by the install phase
        """
        return SyncPlan(
            working_directory=ctx.resolve(self.config.project_root),
            phases=[self.refresh_phase(), self.install_phase()],
        )

    def refresh_phase(self) -> CommandPhase:
        """
        Optionally clear the Pods folder, then update the spec repositories.
        """
        commands = []
        if self.config.clean_pods:
            commands.append(list(CLEAN_COMMAND))

        commands.append(self.config.pod_command + ["repo", "update"])
        return CommandPhase(REFRESH_PHASE, commands)

    def install_phase(self) -> CommandPhase:
        """
        Install (or update) the pods of the project.
        """
        args = self.config.pod_command + [self.config.install_command]
        if self.config.verbose:
            args.append(VERBOSE_FLAG)
        return CommandPhase(INSTALL_PHASE, [args])
