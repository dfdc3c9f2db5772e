"""Logging for newspulse: one named logger writing to the console and a run log.

The run log starts out as ``output/pipeline.log``. Once ``config.yaml`` is
loaded, :func:`set_log_dir` moves it next to the CSV tables in the configured
``output_dir``.
"""

import logging
import os
from pathlib import Path
from typing import Optional

LOGGER_NAME = "newspulse"
LOG_FILENAME = "pipeline.log"

_FORMATTER = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(module)s.%(funcName)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def setup_logger(name: str = LOGGER_NAME, log_file: str = f"output/{LOG_FILENAME}") -> logging.Logger:
    """
    Configure and return a logger that writes to a file and the console.

    Args:
        name (str): The name of the logger.
        log_file (str): The path to the log file. It is created on the first record.

    Returns:
        logging.Logger: The configured logger instance.
    """
    logger = logging.getLogger(name)

    # Only the logger's own handlers count; test runners attach theirs to root
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    _add_file_handler(logger, Path(log_file))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_FORMATTER)
    logger.addHandler(console_handler)

    return logger


def set_log_dir(output_dir: str, target: Optional[logging.Logger] = None) -> Path:
    """Point the file handler of ``target`` at ``<output_dir>/pipeline.log``.

    Any other file handler on the logger is closed and removed; the console
    handler is left alone. Calling it again with the same directory is a no-op.

    Returns:
        Path: The log file now in use.
    """
    target = target or logger
    log_path = Path(output_dir) / LOG_FILENAME
    wanted = os.path.abspath(log_path)

    for handler in [h for h in target.handlers if isinstance(h, logging.FileHandler)]:
        if handler.baseFilename == wanted:
            return log_path
        target.removeHandler(handler)
        handler.close()

    _add_file_handler(target, log_path)
    target.debug(f"set_log_dir: logging to {log_path}")
    return log_path


def _add_file_handler(target: logging.Logger, log_path: Path) -> None:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path, encoding="utf-8", delay=True)
    file_handler.setFormatter(_FORMATTER)
    target.addHandler(file_handler)


logger = setup_logger()
