"""
Dayflow Onboarding Logging Configuration

Configurable logging with debug mode support.
"""

import os
import logging
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "dayflow_onboarding"


def is_debug_mode() -> bool:
    """Check the DAYFLOW_DEBUG environment variable."""
    return os.environ.get("DAYFLOW_DEBUG", "").lower() in ("1", "true", "yes")


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    quiet: bool = False
) -> logging.Logger:
    """Set up logging configuration.

    Args:
        level: Logging level (default: DEBUG if DAYFLOW_DEBUG, else WARNING)
        log_file: Optional path to log file
        quiet: If True, suppress console output

    Returns:
        Configured logger
    """
    debug = is_debug_mode()
    if level is None:
        level = logging.DEBUG if debug else logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else level)

    # Clear existing handlers
    logger.handlers.clear()

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if debug:
            console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            console_format = "%(message)s"

        console_handler.setFormatter(logging.Formatter(console_format))
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
        file_handler.setFormatter(logging.Formatter(file_format))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger under the dayflow_onboarding namespace.

    Args:
        name: Logger name (will be prefixed with 'dayflow_onboarding.')

    Returns:
        Logger instance
    """
    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


# Environment variable documentation
ENV_VARS = {
    "DAYFLOW_DEBUG": {
        "description": "Enable debug mode with verbose logging",
        "values": ["1", "true", "yes"],
        "default": "false"
    },
    "DAYFLOW_ONBOARDING_STATE": {
        "description": "Override the onboarding state file location",
        "default": "~/.dayflow/onboarding-state.json"
    },
    "DAYFLOW_ONBOARDING_CONFIG": {
        "description": "Override the onboarding config file location",
        "default": "~/.dayflow/onboarding.yaml"
    },
    "DAYFLOW_FAST_PATH_PROVIDER": {
        "description": "Provider value that skips the provider setup step",
        "default": "dayflow"
    }
}
