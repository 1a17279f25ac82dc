"""
MCP (Model Context Protocol) runner for the CocoaPods sync step.

This module exposes the sync step as MCP tools using the fastmcp framework.
The step configuration is read from the ``podsync.toml`` file at the
workspace root, the same file the CI host persists its configuration in.

Workflow:
- If podsync.toml exists at startup, it is loaded immediately
- If it is missing, every tool checks for it again at call time
- Tool arguments override the loaded configuration for a single run
"""

import io
import json
import logging
import os
from typing import Any, Dict, Optional

from fastmcp import FastMCP

from podsync.dependency_sync_step import DISPLAY_NAME, DependencySyncStep
from podsync.podsync_config import PODSYNC_TOML_NAME, PODSYNC_TOML_SCHEMA, StepConfig
from podsync.podsync_exceptions import PodSyncException
from podsync.podsync_logger import PodSyncLogger
from podsync.process_runner import ProcessRunner
from podsync.step_models import ExecutionContext


class MCPToolError(Exception):
    """Base exception for MCP tool errors."""

    pass


class PodSyncMCPRunner:
    """
    MCP runner that exposes the sync step as MCP tools using fastmcp.

    Example usage:
    ```python
    runner = PodSyncMCPRunner("/path/to/workspace")
    server = runner.create_mcp_server()
    server.run()
    ```
    """

    def __init__(
        self,
        workspace_root: Optional[str] = None,
        runner: Optional[ProcessRunner] = None,
    ):
        """
        Initialize the MCP runner.

        Args:
            workspace_root: Root directory of the workspace. If None, uses current directory.
            runner: Process runner handed to every sync step
        """
        self.workspace_root = workspace_root or os.getcwd()
        self.logger = PodSyncLogger()
        self.runner = runner
        self.config: Optional[StepConfig] = None

        self._try_load_config()

    @property
    def config_path(self) -> str:
        return os.path.join(self.workspace_root, PODSYNC_TOML_NAME)

    def _try_load_config(self) -> None:
        """
        Attempt to load podsync.toml, but don't fail if missing or invalid.
        """
        if not os.path.exists(self.config_path):
            return

        try:
            self.config = StepConfig.from_toml(self.config_path)
            self.logger.log(
                f"Loaded podsync configuration from {self.config_path}", logging.INFO
            )
        except PodSyncException as e:
            self.logger.log(
                f"Failed to load {self.config_path}: {str(e)}", logging.ERROR
            )
            # Don't raise - let tools check at call time

    def _ensure_configured(self) -> bool:
        """
        Check if configuration needs to be loaded at tool call time.

        Returns:
            True if configured (either already or just loaded), False otherwise
        """
        if self.config is None:
            self._try_load_config()
        return self.config is not None

    def get_configuration_error_message(self) -> str:
        """
        Get an informative error message for when the runner is not configured.
        """
        return (
            f"{DISPLAY_NAME} is not configured.\n\n"
            f"Please create a '{PODSYNC_TOML_NAME}' file in your workspace root "
            f"with the following schema:\n\n"
            f"{PODSYNC_TOML_SCHEMA}"
        )

    def run_pod_sync(
        self,
        clean_pods: Optional[bool] = None,
        verbose: Optional[bool] = None,
        project_root: Optional[str] = None,
        build_variables: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Run the sync step in the workspace and collect its output.

        Returns:
            Dictionary with status, success, output and the per-phase summary
        """
        if not self._ensure_configured():
            return {
                "status": "error",
                "message": self.get_configuration_error_message(),
            }

        overrides = {
            "clean_pods": clean_pods,
            "verbose": verbose,
            "project_root": project_root,
        }
        overrides = {k: v for k, v in overrides.items() if v is not None}
        try:
            config = StepConfig.from_dict({**self.config.to_dict(), **overrides})
        except PodSyncException as e:
            raise MCPToolError(f"Invalid pod sync arguments: {str(e)}")

        ctx = ExecutionContext.from_host(
            self.workspace_root, build_variables=build_variables
        )
        output = io.StringIO()
        step = DependencySyncStep(runner=self.runner, logger=self.logger)
        success = step.execute(config, ctx, output)

        return {
            "status": "success",
            "success": success,
            "output": output.getvalue(),
            "summary": step.get_run_summary(),
        }

    def create_mcp_server(self) -> FastMCP:
        """
        Create and configure a FastMCP server instance with the sync tools.
        """
        server = FastMCP("podsync-mcp")
        self._register_tools(server)
        return server

    def _register_tools(self, server: FastMCP) -> None:
        """
        Register the sync tools with the fastmcp server.

        Args:
            server: The FastMCP server instance
        """

        @server.tool()
        def pod_sync(
            clean_pods: Optional[bool] = None,
            verbose: Optional[bool] = None,
            project_root: Optional[str] = None,
        ) -> str:
            """Refresh the CocoaPods spec repositories and install the project's pods.

            Args:
                clean_pods: Remove the Pods folder first (overrides podsync.toml)
                verbose: Run pod install with --verbose (overrides podsync.toml)
                project_root: Podfile directory relative to the workspace
            """
            return json.dumps(self.run_pod_sync(clean_pods, verbose, project_root))

        @server.tool()
        def pod_sync_config() -> str:
            """Show the CocoaPods sync configuration loaded from podsync.toml."""
            if not self._ensure_configured():
                return json.dumps(
                    {
                        "status": "error",
                        "message": self.get_configuration_error_message(),
                    }
                )
            return json.dumps({"status": "success", "config": self.config.to_dict()})


def main() -> None:
    """Serve the sync tools for the workspace in the current directory."""
    PodSyncMCPRunner().create_mcp_server().run()


__all__ = [
    "PodSyncMCPRunner",
    "MCPToolError",
]
