"""Logging utilities for zonemap.

Provides color-coded, tagged console output. Engine trace lines are only
printed when ``ZONEMAP_VERBOSE`` is set so library calls stay quiet by default.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for message types
    BLUE = "\033[94m"      # Engine operations (search, validation, inference)
    YELLOW = "\033[93m"    # Warnings
    RED = "\033[91m"       # Errors
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if ZONEMAP_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("ZONEMAP_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def is_verbose() -> bool:
    """True when ZONEMAP_VERBOSE is set to a truthy value."""
    return os.getenv("ZONEMAP_VERBOSE", "").strip().lower() in {"1", "true", "yes", "on"}


def log_engine(message: str) -> None:
    """Log an engine operation (blue)."""
    print(colored(message, Color.BLUE))


def log_warning(message: str) -> None:
    """Log a warning (yellow)."""
    print(colored(message, Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(message, Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(message, Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(message, Color.CYAN))


def trace(message: str, color: Color = Color.BLUE) -> None:
    """Print an engine trace line when verbose output is enabled."""
    if is_verbose():
        print(colored(message, color))


# Markers for message types (color-blind accessible)
LOG_TAG_ENGINE = "[•]"
LOG_TAG_WARNING = "[?]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
