"""
CocoaPods sync build step.

Refreshes the CocoaPods spec repositories and installs the pods of a
project, streaming the output of every command to the build log.
"""

import logging
import sys
from typing import Dict, Optional, TextIO

from podsync.podsync_config import StepConfig
from podsync.podsync_logger import PodSyncLogger
from podsync.process_runner import ProcessRunner, SubprocessRunner
from podsync.step_models import CommandResult, ExecutionContext
from podsync.sync_plan import CommandPhase, PhaseStatus, SyncPlan, SyncPlanBuilder

DISPLAY_NAME = "Update CocoaPods"


class DependencySyncStep:
    """
    Runs the refresh phase and then the install phase of a sync plan.

    A phase exiting nonzero does not stop the run, but a phase ending on an
    error (launch failure, interruption) does: the remaining phases are
    skipped. The step succeeds only if both phases exit with 0.
    """

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        logger: Optional[PodSyncLogger] = None,
    ):
        """
        Initialize the sync step.

        Args:
            runner: Launches the external commands, defaults to SubprocessRunner
            logger: Logger for progress and error messages
        """
        self.runner = runner or SubprocessRunner()
        self.logger = logger or PodSyncLogger()
        self.plan: Optional[SyncPlan] = None

    def execute(
        self,
        config: StepConfig,
        ctx: ExecutionContext,
        output_sink: Optional[TextIO] = None,
    ) -> bool:
        """
        Run the step.

        Args:
            config: Step configuration from the host
            ctx: Workspace and environment of the build
            output_sink: Receives the output of every command, defaults to stdout

        Returns:
            True if both phases succeeded, False otherwise. Never raises.
        """
        output_sink = output_sink if output_sink is not None else sys.stdout

        try:
            self.plan = SyncPlanBuilder(config).build(ctx)
        except Exception as e:
            self.logger.log(f"Failed to build sync plan: {str(e)}", logging.ERROR)
            self.plan = None
            return False

        try:
            return self._run_plan(ctx, output_sink)
        except KeyboardInterrupt:
            self.logger.log(f"{DISPLAY_NAME} interrupted", logging.ERROR)
            for phase in self.plan.phases:
                if phase.status in (PhaseStatus.PENDING, PhaseStatus.RUNNING):
                    phase.mark_error("Interrupted")
            return False

    def _run_plan(self, ctx: ExecutionContext, output_sink: TextIO) -> bool:
        self.logger.log(
            f"{DISPLAY_NAME}: running {len(self.plan.phases)} phases in {self.plan.working_directory}",
            logging.INFO,
        )

        results = []
        aborted = False
        for phase in self.plan.phases:
            if aborted:
                phase.skip()
                self.logger.log(f"Skipping phase {phase.name}", logging.INFO)
                continue
            results.append(self.run_phase(phase, ctx, output_sink))
            aborted = phase.errored

        success = self.plan.succeeded
        self.logger.log(
            f"{DISPLAY_NAME} {'succeeded' if success else 'failed'}: "
            + ", ".join(f"{r.phase}={r.exit_code}" for r in results),
            logging.INFO if success else logging.ERROR,
        )
        return success

    def run_phase(
        self, phase: CommandPhase, ctx: ExecutionContext, output_sink: TextIO
    ) -> CommandResult:
        """
        Run the commands of a phase until one of them exits nonzero.

        Launch failures and interruptions mark the phase failed with exit code -1
        and end the run.

        Returns:
            CommandResult of the last command run
        """
        phase.status = PhaseStatus.RUNNING
        result = CommandResult(exit_code=0, phase=phase.name)
        argv = []

        try:
            for argv in phase.commands:
                self.logger.log(f"Running {' '.join(argv)}", logging.DEBUG)
                output_sink.write(f"$ {' '.join(argv)}\n")

                exit_code = self.runner.run(
                    argv, ctx.environment, self.plan.working_directory, output_sink
                )
                result = CommandResult(exit_code=exit_code, argv=argv, phase=phase.name)
                if exit_code != 0:
                    self.logger.log(
                        f"{' '.join(argv)} exited with code {exit_code}",
                        logging.ERROR,
                    )
                    break

            phase.mark(result.exit_code)

        except (Exception, KeyboardInterrupt) as e:
            error_msg = f"Phase {phase.name} failed: {str(e) or type(e).__name__}"
            self.logger.log(error_msg, logging.ERROR)
            phase.mark_error(error_msg)
            result = CommandResult(exit_code=-1, argv=list(argv), phase=phase.name)

        return result

    def get_run_summary(self) -> Dict[str, Dict[str, object]]:
        """
        Get the status of every phase of the last run.

        Returns:
            Dictionary mapping phase names to their status, exit code and error
        """
        if self.plan is None:
            return {}

        return {
            phase.name: {
                "status": phase.status,
                "exit_code": phase.exit_code,
                "error": phase.error_message,
            }
            for phase in self.plan.phases
        }
