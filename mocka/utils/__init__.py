"""
Shared utilities for MOCKA.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps for workspace and log directory names
"""

from mocka.utils.logger import setup_logger
from mocka.utils.timestamp import format_elapsed, now

__all__ = ["setup_logger", "format_elapsed", "now"]
