# -*- coding: utf-8 -*-

"""
Taskboard client configuration.

Values are read from the environment (and a local .env file, if present)
once at import time.
"""

import os
import sys

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

APP_VERSION = "1.0.0"

# Base URL of the task service API, without trailing slash
API_URL = os.getenv("TASKBOARD_API_URL", "http://localhost:5000/api").rstrip("/")

# Bearer token sent with every request; empty disables the header
API_TOKEN = os.getenv("TASKBOARD_API_TOKEN", "")

DEFAULT_TIMEOUT = 15.0


def _read_timeout() -> float:
    raw = os.getenv("TASKBOARD_TIMEOUT", "")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid TASKBOARD_TIMEOUT {raw!r}, using {DEFAULT_TIMEOUT}s")
        return DEFAULT_TIMEOUT


# Per-request timeout in seconds
REQUEST_TIMEOUT = _read_timeout()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Replace loguru's default sink with a single stderr sink at `level`."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )
