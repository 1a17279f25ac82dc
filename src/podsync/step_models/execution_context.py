"""
Execution context supplied by the CI host when a step runs.
"""

import dataclasses
import os
import pathlib
from typing import Dict, Mapping, Optional, Union


@dataclasses.dataclass(frozen=True)
class ExecutionContext:
    """
    Where and with which environment the external commands run.

    Owned by a single step invocation and never persisted.
    """

    working_directory: pathlib.Path
    environment: Dict[str, str] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_host(
        cls,
        workspace: Union[str, os.PathLike],
        environment: Optional[Mapping[str, str]] = None,
        build_variables: Optional[Mapping[str, str]] = None,
    ) -> "ExecutionContext":
        """
        Build a context from the host's workspace and environment.

        Args:
            workspace: Root of the build workspace
            environment: Inherited environment, defaults to os.environ
            build_variables: Build parameters merged over the environment

        Returns:
            ExecutionContext whose environment has build variables applied last
        """
        env: Dict[str, str] = dict(os.environ if environment is None else environment)
        env.update(build_variables or {})
        return cls(working_directory=pathlib.Path(workspace), environment=env)

    def resolve(self, project_root: str) -> pathlib.Path:
        """The directory commands run in for the given project root."""
        if not project_root:
            return self.working_directory
        return self.working_directory / project_root
