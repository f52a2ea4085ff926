"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """
    Current local time formatted for directory names.

    Returns:
        Timestamp like "20251114_123456"
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def format_elapsed(seconds: float) -> str:
    """
    Format a duration for log lines.

    Args:
        seconds: Elapsed time in seconds

    Returns:
        Compact string such as "850ms", "2.41s" or "3m 12s"

    Examples:
        format_elapsed(0.85)
        # "850ms"

        format_elapsed(192.4)
        # "3m 12s"
    """
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, remainder = divmod(int(seconds), 60)
    return f"{minutes}m {remainder}s"
