"""
Logging Configuration
=====================
Console (and optionally file) output for the `wireframeprojector` loggers.

Frame timestamps are printed to the millisecond, since a run produces a
frame roughly every 16 ms. Per-point projection failures after the first one
of a run are logged at DEBUG, so they only appear with `level=logging.DEBUG`.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach handlers to the package logger.

    Calling it again replaces the handlers instead of adding more, so tests
    and a second `main()` in the same process do not print every line twice.

    Args:
        level: Threshold for the package logger and its handlers.
        log_file: Path of a log file, truncated on each start. None logs to
            stdout only.
    """
    logger = logging.getLogger("wireframeprojector")
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging to {'stdout and ' + log_file if log_file else 'stdout'} at {logging.getLevelName(level)}.")
