"""Utility modules for the notes backend application."""

from app.utils.logger import logger, setup_logger, get_logger
from app.utils.environment import is_debug, get_environment
from app.utils.sentry_utils import configure_sentry, capture_exception
from app.utils.response_utils import error_response, internal_error
from app.utils.constants import (
    API_PREFIX,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)

__all__ = [
    # Logger
    "logger",
    "setup_logger",
    "get_logger",
    # Environment
    "is_debug",
    "get_environment",
    # Sentry
    "configure_sentry",
    "capture_exception",
    # Response
    "error_response",
    "internal_error",
    # Constants
    "API_PREFIX",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
