"""Logging utilities -- ANSI terminal colors and debug log setup for the CLI.

The library itself only emits records through ``logging.getLogger``;
this module is where the command line decides how they are shown.
"""

import logging
import sys

# ---------------------------------------------------------------------------
# ANSI color codes
# ---------------------------------------------------------------------------

_RESET = '\033[0m'
_DIM = '\033[2m'

_GREEN = '\033[32m'
_YELLOW = '\033[33m'
_CYAN = '\033[36m'

_BOLD_RED = '\033[1;31m'
_BOLD_CYAN = '\033[1;36m'


def _is_tty():
    """Check if stdout is a terminal (not piped)."""
    try:
        return sys.stdout.isatty()
    except AttributeError:
        return False


# Module-level flag -- set once at import time
_USE_COLOR = _is_tty()


def set_color_enabled(enabled: bool):
    """Override automatic color detection."""
    global _USE_COLOR
    _USE_COLOR = enabled


def _c(code: str, text: str) -> str:
    """Apply ANSI code if color is enabled."""
    if _USE_COLOR:
        return f'{code}{text}{_RESET}'
    return text


# ---------------------------------------------------------------------------
# CLI formatting helpers
# ---------------------------------------------------------------------------

def cli_header(text: str) -> str:
    """Bold cyan header line (one per IFD)."""
    return _c(_BOLD_CYAN, text)


def cli_success(text: str) -> str:
    """Green text for a recognised maker note."""
    return _c(_GREEN, text)


def cli_warning(text: str) -> str:
    """Yellow text for missing or unclaimed data."""
    return _c(_YELLOW, text)


def cli_error(text: str) -> str:
    """Red text for errors."""
    return _c(_BOLD_RED, text)


def cli_info(text: str) -> str:
    """Cyan text for informational messages."""
    return _c(_CYAN, text)


def cli_dim(text: str) -> str:
    """Dim text for secondary information."""
    return _c(_DIM, text)


# ---------------------------------------------------------------------------
# Library log records
# ---------------------------------------------------------------------------

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s: %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def enable_debug_logging(stream=None) -> logging.Handler:
    """Route ``exiftiff`` DEBUG records (skipped tags and IFDs) to stderr."""
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATEFMT))
    logger = logging.getLogger('exiftiff')
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler
