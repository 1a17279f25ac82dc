"""
This file contains various utility functions like I/O operations, handling paths, etc.
used by the podsync tests.
"""

import pathlib
from typing import Dict, List, Optional

from podsync.process_runner import ProcessRunner


class RecordingRunner(ProcessRunner):
    """
    Process runner that records every invocation instead of launching it.

    Exit codes are taken from ``exit_codes`` keyed by the joined argv;
    unlisted commands exit with 0. Commands listed in ``raises`` raise the
    given exception instead.
    """

    def __init__(
        self,
        exit_codes: Optional[Dict[str, int]] = None,
        raises: Optional[Dict[str, Exception]] = None,
    ):
        self.exit_codes = exit_codes or {}
        self.raises = raises or {}
        self.calls: List[dict] = []

    def run(self, argv, env, cwd, output_sink) -> int:
        command = " ".join(argv)
        self.calls.append({"argv": list(argv), "env": dict(env), "cwd": pathlib.Path(cwd)})
        if command in self.raises:
            raise self.raises[command]
        output_sink.write(f"ran {command}\n")
        return self.exit_codes.get(command, 0)

    @property
    def argvs(self) -> List[List[str]]:
        return [call["argv"] for call in self.calls]
