"""
Configuration parameters for the CocoaPods sync step.

The host persists the step configuration as the ``[podsync]`` table of a
``podsync.toml`` file. The keys accepted there are the field names of
:class:`StepConfig`; the aliases match the names the CI host uses in its
build configuration form.
"""

import pathlib
import shlex
from typing import Any, Dict, List, Literal, Union

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from podsync.podsync_exceptions import PodSyncConfigError

PODSYNC_TOML_NAME = "podsync.toml"

PODSYNC_TOML_SCHEMA = """
# Configuration for the CocoaPods sync step
[podsync]
# Remove the "Pods" folder before refreshing the spec repositories
clean_pods = false

# Pass --verbose to the install command
verbose = false

# Directory holding the Podfile, relative to the workspace root.
# Empty means the workspace root itself.
project_root = ""

# "install" (default) or "update"
# install_command = "install"

# Command used to invoke CocoaPods, e.g. "bundle exec pod"
# pod_executable = "pod"
"""


class StepConfig(BaseModel):
    """
    Configuration of a single CocoaPods sync step. Immutable once built.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    clean_pods: bool = Field(
        False, alias="cleanpods", description="Remove the Pods folder before refreshing"
    )
    verbose: bool = Field(False, description="Make CocoaPods verbose in the build log")
    project_root: str = Field(
        "", alias="projectRoot", description="Podfile directory relative to the workspace"
    )
    install_command: Literal["install", "update"] = Field(
        "install", alias="installCommand", description="Second phase pod subcommand"
    )
    pod_executable: str = Field(
        "pod", alias="podExecutable", description="Command used to invoke CocoaPods"
    )

    @field_validator("project_root")
    @classmethod
    def _relative_project_root(cls, value: str) -> str:
        value = value.strip()
        path = pathlib.PurePath(value)
        if value and path.is_absolute():
            raise ValueError(f"project_root must be relative to the workspace: {value}")
        if ".." in path.parts:
            raise ValueError(f"project_root must stay inside the workspace: {value}")
        return value

    @field_validator("pod_executable")
    @classmethod
    def _non_empty_executable(cls, value: str) -> str:
        if not shlex.split(value):
            raise ValueError("pod_executable must not be empty")
        return value

    @property
    def pod_command(self) -> List[str]:
        """The tokenized CocoaPods invocation, e.g. ["bundle", "exec", "pod"]."""
        return shlex.split(self.pod_executable)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "StepConfig":
        """
        Create a StepConfig from a dictionary.

        Raises:
            PodSyncConfigError: If a key is unknown or a value is invalid
        """
        try:
            return cls.model_validate(d)
        except ValidationError as e:
            raise PodSyncConfigError(f"Invalid podsync configuration: {e}") from e

    @classmethod
    def from_toml(cls, path: Union[str, pathlib.Path]) -> "StepConfig":
        """
        Load the ``[podsync]`` table of a TOML file.

        A file without a ``[podsync]`` table yields the default configuration.

        Raises:
            PodSyncConfigError: If the file cannot be read or parsed
        """
        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise PodSyncConfigError(f"Failed to read {path}: {e}") from e

        section = toml_dict.get("podsync", {})
        if not isinstance(section, dict):
            raise PodSyncConfigError(f"[podsync] in {path} must be a table")
        return cls.from_dict(section)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dictionary form used in podsync.toml."""
        return self.model_dump()
