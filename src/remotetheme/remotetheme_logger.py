"""
Logger passed explicitly into every remotetheme component.
"""

import inspect
import logging
from datetime import datetime

from pydantic import BaseModel

LOG_KEY = "Remote Theme:"


class LogLine(BaseModel):
    """
    Represents a line in the remotetheme log
    """

    time: str
    level: str
    tag: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class RemoteThemeLogger:
    """
    Logger class that writes JSON lines to the ``remotetheme`` logger.

    Handlers and levels are configured by the host application; this class
    only formats records.
    """

    def __init__(self, name: str = "remotetheme") -> None:
        self.logger = logging.getLogger(name)

    def log(self, message: str, level: int, tag: str = LOG_KEY) -> None:
        """
        Log the message at the given level, tagged with ``tag``.
        """
        if not self.logger.isEnabledFor(level):
            return

        message = message.replace("\n", " ")

        caller = inspect.stack(context=0)[1]
        log_line = LogLine(
            time=str(datetime.now()),
            level=logging.getLevelName(level),
            tag=tag,
            caller_file=caller.filename.split("/")[-1],
            caller_name=caller.function,
            caller_line=caller.lineno,
            message=message,
        )
        self.logger.log(level=level, msg=log_line.model_dump_json())

