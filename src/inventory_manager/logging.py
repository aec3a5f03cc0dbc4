"""Logging for the inventory tool.

One `inventory` logger owns the handlers (stderr, plus an optional file);
module loggers are its children and propagate to it. Settings come from
LOG_LEVEL (default INFO) and LOG_FILE.
"""

import logging
import os
from typing import Optional, Union

ROOT_LOGGER_NAME = "inventory"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(value: Union[str, int, None]) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        level = getattr(logging, value.strip().upper(), None)
        if isinstance(level, int) and not isinstance(level, bool):
            return level
    return logging.INFO


def configure_logging(level: Union[str, int, None] = None, log_file: Optional[str] = None) -> logging.Logger:
    """(Re)build the handlers of the `inventory` logger.

    Explicit arguments win over LOG_LEVEL / LOG_FILE. Calling it again replaces
    the previous handlers instead of stacking new ones.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(_resolve_level(level if level is not None else os.environ.get("LOG_LEVEL")))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)

    path = log_file if log_file is not None else os.environ.get("LOG_FILE")
    if path:
        try:
            file_handler = logging.FileHandler(path, encoding="utf-8")
        except OSError as e:
            root.warning(f"LOG_FILE {path!r} could not be opened ({e}); logging to stderr only")
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    # The host application's root logger does not get a second copy.
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        configure_logging()
    return root.getChild(name)
