"""Console logging helpers for capharness.

Colored, timestamped status lines for the CLI, plus the switch that routes
module loggers to stderr in verbose mode.
"""

import logging
import sys
from datetime import datetime

# Global verbose setting (can be modified at runtime)
_verbose_enabled: bool = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable verbose output globally.

    Verbose mode also sends DEBUG records from capharness loggers to stderr.
    """
    global _verbose_enabled
    _verbose_enabled = enabled
    if enabled:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
        logging.getLogger("capharness").setLevel(logging.DEBUG)


def truncate_text(text: str, max_length: int) -> str:
    """Truncate text to max_length, adding ellipsis if truncated.

    Respects global verbose setting. If verbose is enabled,
    returns the original text unchanged.
    """
    if _verbose_enabled:
        return text
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


class Colors:
    """ANSI color codes for terminal output (bright variants)."""

    RESET = "\033[0m"
    GREEN = "\033[92m"
    CYAN = "\033[96m"
    RED = "\033[91m"
    GRAY = "\033[90m"


def log(
    icon: str,
    message: str,
    color: str = Colors.RESET,
) -> None:
    """Print one timestamped status line."""
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(
        f"{Colors.GRAY}{timestamp}{Colors.RESET} {color}{icon} {message}{Colors.RESET}"
    )
