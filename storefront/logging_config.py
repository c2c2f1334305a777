"""
logging_config.py: Centralized Logging Configuration for the storefront API

Configures one logging setup for the whole application so that every module
logs with the same format and handlers.

Features:
    • Console output (stdout) plus an optional log file
    • Process ID tagging for multi-worker visibility
    • Reduced verbosity for the Google / Firebase client libraries
"""

import logging
import sys

from .settings import settings


def setup_logging():
    """
    Configures the global logging system for the application.

    The configuration includes:
        - Log level: settings.log_level (INFO by default)
        - Log format: timestamp, log level, process ID, and message
        - Output destinations:
            1. Console (stdout): real-time logs, container friendly
            2. File: settings.log_file, only when configured
        - Reduced verbosity for google-cloud / urllib3
    """
    log_format = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(message)s'

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=log_format,
        handlers=handlers,
    )

    for noisy in ("google", "urllib3", "grpc"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name):
    """
    Returns a logger for a given module or component name.

    Args:
        name (str): The logger name, typically the module's __name__.

    Returns:
        logging.Logger: A logger that follows the global format and handlers.
    """
    return logging.getLogger(name)
