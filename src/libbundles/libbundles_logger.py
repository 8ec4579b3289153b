"""
Logger for libbundles.

Each record is emitted as a JSON payload that carries the caller's location.
"""

import inspect
import logging

from pydantic import BaseModel


class LogLine(BaseModel):
    """
    Represents a line in the libbundles log
    """

    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class LibbundlesLogger:
    """
    Logger class
    """

    def __init__(self, name: str = "libbundles") -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

    def log(self, debug_message: str, level: int) -> None:
        """
        Log the debug message at the given level
        """
        debug_message = debug_message.replace("'", '"').replace("\n", " ")

        caller_frame = inspect.currentframe().f_back
        caller_file = caller_frame.f_code.co_filename.split("/")[-1]
        caller_line = caller_frame.f_lineno
        caller_name = caller_frame.f_code.co_name

        self.logger.log(
            level=level,
            msg=LogLine(
                caller_file=caller_file,
                caller_name=caller_name,
                caller_line=caller_line,
                message=debug_message,
            ).model_dump_json(),
        )
