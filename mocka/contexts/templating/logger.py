"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_render_result(template_name: str, values: dict, source_length: int) -> None:
    """Log a successful template render."""
    _log_debug(f"Rendered '{template_name}' template ({source_length} chars)")
    for key, value in values.items():
        _log_debug(f"  {key} = {value!r}")
