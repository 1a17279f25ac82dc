"""
This module contains the exceptions raised by podsync.
"""


class PodSyncException(Exception):
    """
    Base exception for podsync
    """

    def __init__(self, message: str):
        super().__init__(message)


class PodSyncConfigError(PodSyncException):
    """Raised when the step configuration cannot be loaded or is invalid."""

    pass


class ProcessLaunchError(PodSyncException):
    """Raised when an external command could not be started."""

    def __init__(self, argv, cause: Exception):
        super().__init__(f"Failed to launch {' '.join(argv)}: {cause}")
        self.argv = list(argv)
        self.cause = cause


class ProcessInterruptedError(PodSyncException):
    """Raised when waiting for an external command was interrupted."""

    def __init__(self, argv):
        super().__init__(f"Interrupted while waiting for {' '.join(argv)}")
        self.argv = list(argv)
