"""Logging setup: console plus a size-rotated file under LOG_DIR."""

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Third-party loggers that log every request/job at INFO
NOISY_LOGGERS = ("httpx", "google_genai", "apscheduler.executors.default")


def setup_logger(name: str = "api", log_dir: str | None = None) -> logging.Logger:
    """
    Build the application logger once.

    Level comes from LOG_LEVEL (default INFO), the file lands in
    ``<log_dir>/<name>.log`` with 5 backups of 10 MB each.

    Args:
        name: Logger name, also used for the log file name
        log_dir: Directory for the log file (LOG_DIR env or "logs")

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_dir = log_dir or os.getenv("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(
        filename=os.path.join(log_dir, f"{name}.log"),
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger


logger = setup_logger()
