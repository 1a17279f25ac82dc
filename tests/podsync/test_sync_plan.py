"""
Tests for the sync plan builder.
"""

import pathlib

import pytest

from podsync.podsync_config import StepConfig
from podsync.step_models import ExecutionContext
from podsync.sync_plan import (
    CLEAN_COMMAND,
    INSTALL_PHASE,
    REFRESH_PHASE,
    PhaseStatus,
    SyncPlanBuilder,
)


class TestSyncPlanBuilder:
    """Tests for SyncPlanBuilder."""

    @pytest.fixture
    def ctx(self):
        """Context rooted at a fixed workspace."""
        return ExecutionContext.from_host("/build/workspace", environment={"PATH": "/usr/bin"})

    def test_phases_in_order(self, ctx):
        """Test that the refresh phase comes before the install phase."""
        plan = SyncPlanBuilder(StepConfig()).build(ctx)

        assert [phase.name for phase in plan.phases] == [REFRESH_PHASE, INSTALL_PHASE]
        assert all(phase.status == PhaseStatus.PENDING for phase in plan.phases)

    @pytest.mark.parametrize("verbose", [True, False])
    def test_no_clean_without_clean_pods(self, ctx, verbose):
        """Test that no cache removal is planned unless clean_pods is set."""
        plan = SyncPlanBuilder(StepConfig(clean_pods=False, verbose=verbose)).build(ctx)

        refresh = plan.phases[0]
        assert refresh.commands == [["pod", "repo", "update"]]
        assert all(cmd[0] != "rm" for phase in plan.phases for cmd in phase.commands)

    def test_clean_precedes_repo_update(self, ctx):
        """Test that the Pods folder is removed before the repo update."""
        plan = SyncPlanBuilder(StepConfig(clean_pods=True)).build(ctx)

        assert plan.phases[0].commands == [
            ["rm", "-r", "-f", "Pods"],
            ["pod", "repo", "update"],
        ]

    def test_verbose_flag_added_once(self, ctx):
        """Test that --verbose appears exactly once in the install command."""
        plan = SyncPlanBuilder(StepConfig(verbose=True, clean_pods=True)).build(ctx)

        install = plan.phases[1].commands
        assert install == [["pod", "install", "--verbose"]]
        assert install[0].count("--verbose") == 1

    def test_plain_install_without_verbose(self, ctx):
        """Test that the install command has no flags by default."""
        plan = SyncPlanBuilder(StepConfig()).build(ctx)

        assert plan.phases[1].commands == [["pod", "install"]]

    def test_empty_project_root_uses_workspace(self, ctx):
        """Test that an empty project root leaves the workspace unchanged."""
        plan = SyncPlanBuilder(StepConfig(project_root="")).build(ctx)

        assert plan.working_directory == pathlib.Path("/build/workspace")

    def test_project_root_joined_to_workspace(self, ctx):
        """Test that the project root is resolved against the workspace."""
        plan = SyncPlanBuilder(StepConfig(project_root="ios/App")).build(ctx)

        assert plan.working_directory == pathlib.Path("/build/workspace/ios/App")

    def test_update_command(self, ctx):
        """Test that install_command="update" runs pod update instead."""
        plan = SyncPlanBuilder(StepConfig(install_command="update", verbose=True)).build(ctx)

        assert plan.phases[1].commands == [["pod", "update", "--verbose"]]

    def test_tokenized_pod_executable(self, ctx):
        """Test that a multi-word pod executable is split into arguments."""
        config = StepConfig(pod_executable="bundle exec pod", clean_pods=True)
        plan = SyncPlanBuilder(config).build(ctx)

        assert plan.phases[0].commands[-1] == [
            "bundle", "exec", "pod", "repo", "update",
        ]
        assert plan.phases[1].commands == [["bundle", "exec", "pod", "install"]]

    def test_plans_do_not_share_clean_command(self, ctx):
        """Test that mutating a plan does not leak into later plans."""
        builder = SyncPlanBuilder(StepConfig(clean_pods=True))
        builder.build(ctx).phases[0].commands[0].append("extra")

        assert builder.build(ctx).phases[0].commands[0] == CLEAN_COMMAND


class TestCommandPhase:
    """Tests for phase status tracking."""

    def test_mark_success_and_failure(self):
        plan = SyncPlanBuilder(StepConfig()).build(ExecutionContext.from_host("/ws", {}))
        refresh, install = plan.phases

        refresh.mark(0)
        install.mark(31)

        assert refresh.status == PhaseStatus.SUCCEEDED
        assert install.status == PhaseStatus.FAILED
        assert install.exit_code == 31
        assert not plan.succeeded

    def test_mark_error(self):
        plan = SyncPlanBuilder(StepConfig()).build(ExecutionContext.from_host("/ws", {}))
        refresh = plan.phases[0]

        refresh.mark_error("boom")

        assert refresh.status == PhaseStatus.FAILED
        assert refresh.exit_code is None
        assert refresh.error_message == "boom"
        assert refresh.errored

    def test_skip(self):
        plan = SyncPlanBuilder(StepConfig()).build(ExecutionContext.from_host("/ws", {}))
        refresh, install = plan.phases

        refresh.mark(0)
        install.skip()

        assert install.status == PhaseStatus.SKIPPED
        assert not install.errored
        assert not plan.succeeded
