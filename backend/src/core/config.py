"""
Application configuration using python-dotenv.

This module loads environment variables from .env file into os.environ
for use throughout the application.
"""

import os
import pathlib
from dotenv import load_dotenv


# Determine if we're running in a test environment
# Don't load .env file during testing to ensure predictable test behavior
is_testing = os.getenv("PYTEST_VERSION") is not None

# Load .env file into os.environ (only outside of testing)
if not is_testing:
    # Try multiple possible locations for .env file
    possible_paths = [
        pathlib.Path(__file__).parent.parent.parent / ".env",  # backend/.env (when run from backend/src)
        pathlib.Path(__file__).parent.parent.parent.parent / ".env",  # .env at repository root
        pathlib.Path.cwd() / ".env",  # .env in current directory
    ]

    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(env_path)
            break


def _env_flag(name: str, default: str = "false") -> bool:
    """Read a boolean environment variable ("1", "true", "yes", "on" are true)."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def get_database_url():
    """Get the database URL from environment."""
    return os.getenv(
        "DATABASE_URL",
        "postgresql://localhost/vault_dev"
    )

DATABASE_URL = get_database_url()

# Maintenance API
# Leaving the token empty disables the cleanup endpoint entirely
MAINTENANCE_API_TOKEN = os.getenv("MAINTENANCE_API_TOKEN", "")

# Nightly cleanup (fix mode)
CLEANUP_SCHEDULER_ENABLED = _env_flag("CLEANUP_SCHEDULER_ENABLED")
CLEANUP_SCHEDULE_HOUR = int(os.getenv("CLEANUP_SCHEDULE_HOUR", "3"))
