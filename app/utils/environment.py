"""Environment detection utilities."""

import os


def get_environment() -> str:
    """Get the current environment name.

    Returns:
        Environment name: 'local', 'staging', or 'production'
    """
    return os.getenv("ENV", "local")


def is_debug() -> bool:
    """Check if running in debug/local mode.

    Returns:
        True if ENV is 'local' or not set
    """
    return get_environment() == "local"
