"""Package-wide logging: task messages on stdout, everything in `whaleopt.log`.

Per-iteration progress is written with `Logger.to_file`, which tags the
record so the console handler drops it while the file handler keeps it.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler

LOG_FORMAT = "%(asctime)s - %(name)s — %(levelname)s — %(message)s"
LOG_FILE = "whaleopt.log"
LOG_LEVEL = logging.DEBUG

FILE_ONLY = "file_only"


class ConsoleFilter(logging.Filter):
    """Rejects records tagged as file-only."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not getattr(record, FILE_ONLY, False)


class Logger(logging.Logger):
    """Logger with a file-only shortcut for high-volume messages."""

    def to_file(self, msg: str, *args, **kwargs) -> None:
        """Logs `msg` at INFO level to the log file only."""

        extra = dict(kwargs.pop("extra", None) or {})
        extra[FILE_ONLY] = True

        self.info(msg, *args, extra=extra, **kwargs)


def _build_handlers() -> list:
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.addFilter(ConsoleFilter())

    # Opened on first record, so importing the package creates no file
    log_file = TimedRotatingFileHandler(LOG_FILE, when="midnight", delay=True)

    for handler in (console, log_file):
        handler.setFormatter(formatter)

    return [console, log_file]


def get_logger(logger_name: str) -> Logger:
    """Gets a named logger, attaching the console and file handlers once.

    Args:
        logger_name: The name of the logger.

    Returns:
        Logger instance.
    """

    previous_class = logging.getLoggerClass()
    logging.setLoggerClass(Logger)
    try:
        logger = logging.getLogger(logger_name)
    finally:
        logging.setLoggerClass(previous_class)

    if not logger.handlers:
        logger.setLevel(LOG_LEVEL)
        for handler in _build_handlers():
            logger.addHandler(handler)
        logger.propagate = False

    return logger
