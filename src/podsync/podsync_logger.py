"""
Multi-purpose logger for podsync.

Every record is emitted as a single JSON line on the "podsync" logger.
"""

import inspect
import logging
from datetime import datetime

from pydantic import BaseModel


class LogLine(BaseModel):
    """
    Represents a line in the podsync log
    """

    time: str
    level: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class PodSyncLogger:
    """
    Logger class
    """

    def __init__(self, name: str = "podsync") -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

    def log(self, debug_message: str, level: int) -> None:
        """
        Log the debug message at the given level.
        """
        debug_message = debug_message.replace("'", '"').replace("\n", " ")

        # Collect details about the caller
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        if caller is not None:
            caller_file = caller.f_code.co_filename.split("/")[-1]
            caller_name = caller.f_code.co_name
            caller_line = caller.f_lineno
        else:
            caller_file, caller_name, caller_line = "<unknown>", "<unknown>", 0

        self.logger.log(
            level=level,
            msg=LogLine(
                time=str(datetime.now()),
                level=logging.getLevelName(level),
                caller_file=caller_file,
                caller_name=caller_name,
                caller_line=caller_line,
                message=debug_message,
            ).model_dump_json(),
        )
