"""
Environment configuration for Alembic migrations.
This module provides the database URL for the current environment.
"""

import os

from dotenv import load_dotenv

# Get the environment from ENV variable, default to local
env = os.getenv("ENV", "local")
dotenv_file = f".env.{env}"

# Load environment variables from the appropriate .env file
print(f"Alembic: Loading environment variables from {dotenv_file}")
load_dotenv(dotenv_file)


def get_database_url() -> str:
    """
    Get the synchronous (psycopg2) database URL.

    Uses DATABASE_URL when set, otherwise composes it from the DB_* variables,
    the same way the application settings do.
    """
    # Imported after load_dotenv so the settings see the .env values
    from app.config import settings

    return settings.sync_database_url
