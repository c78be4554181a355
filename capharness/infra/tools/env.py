"""Environment configuration and loading for capharness.

Centralizes config paths and dotenv loading. Call load_user_env() before
reading configuration so values from the user's .env file are visible.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# User config directory (stores .env)
USER_CONFIG_DIR = Path.home() / ".config" / "capharness"


def get_scripts_dir() -> Path | None:
    """Get the default script root, respecting CAPHARNESS_SCRIPTS_DIR.

    Evaluated at call time, so it sees values loaded by load_user_env().
    """
    raw = os.environ.get("CAPHARNESS_SCRIPTS_DIR")
    return Path(raw) if raw else None


def load_user_env() -> None:
    """Load environment from ${USER_CONFIG_DIR}/.env, if present."""
    load_dotenv(dotenv_path=USER_CONFIG_DIR / ".env")
