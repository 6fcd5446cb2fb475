"""Logging setup for the application."""

import logging
import sys

# Third-party loggers that log every request; only shown at DEBUG
NOISY_LOGGERS = ("urllib3", "uvicorn.access")


def setup_logger(log_level: str = "INFO", name: str = "external_prs") -> logging.Logger:
    """
    Set up and configure application logger.

    Creates a logger with a simple, readable format suitable for CLI output.
    Per-request chatter from urllib3 and uvicorn's access log is held back
    to WARNING unless the level is DEBUG.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown values fall back to INFO.
        name: Logger name (default: external_prs)

    Returns:
        logging.Logger: Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stdout,
        force=True,
    )

    third_party_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(third_party_level)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    return logger
