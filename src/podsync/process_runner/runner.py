"""
Process runner implementation.

The sync step only depends on the ProcessRunner interface, so hosts and
tests can supply their own way of launching commands.
"""

import abc
import os
import subprocess
from typing import List, Mapping, TextIO, Union

from podsync.podsync_exceptions import ProcessInterruptedError, ProcessLaunchError


class ProcessRunner(abc.ABC):
    """
    Runs one external command to completion.
    """

    @abc.abstractmethod
    def run(
        self,
        argv: List[str],
        env: Mapping[str, str],
        cwd: Union[str, os.PathLike],
        output_sink: TextIO,
    ) -> int:
        """
        Run a command and wait for it.

        Args:
            argv: Program and arguments
            env: Complete environment of the child process
            cwd: Directory the child process starts in
            output_sink: Receives the combined stdout/stderr of the child

        Returns:
            The exit code of the command

        Raises:
            ProcessLaunchError: If the command could not be started
            ProcessInterruptedError: If waiting for the command was interrupted
        """


class SubprocessRunner(ProcessRunner):
    """
    Runs commands with subprocess.Popen, streaming output line by line.
    """

    def run(self, argv, env, cwd, output_sink) -> int:
        try:
            process = subprocess.Popen(
                argv,
                cwd=str(cwd),
                env=dict(env),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except (OSError, ValueError) as e:
            raise ProcessLaunchError(argv, e) from e

        try:
            for line in process.stdout:
                output_sink.write(line)
                if hasattr(output_sink, "flush"):
                    output_sink.flush()
            return process.wait()
        except KeyboardInterrupt:
            process.terminate()
            process.wait()
            raise ProcessInterruptedError(argv)
        finally:
            if process.poll() is None:
                process.kill()
                process.wait()
            process.stdout.close()
