"""
Results reported by the process runner.
"""

import dataclasses
from typing import List


@dataclasses.dataclass(frozen=True)
class CommandResult:
    """
    Exit code of one command or phase of the sync step.
    """

    exit_code: int
    argv: List[str] = dataclasses.field(default_factory=list)
    phase: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0
