"""
Execution context logger.

Provides logging interface for running built executables with automatic [run] prefix.
All execution modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from mocka.utils.timestamp import format_elapsed

CONTEXT_PREFIX = "[run]"


def _log_info(message: str) -> None:
    """Log info message with [run] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [run] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [run] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_run_start(executable: Path, pid: int) -> None:
    """Log that an executable was spawned."""
    _log_info(f"Started {executable.name} (pid {pid})")
    _log_debug(f"  Executable: {executable}")


def log_run_result(executable: Path, result) -> None:  # result: ExecutionResult
    """Log how a supervised process ended."""
    elapsed = format_elapsed(result.elapsed_s)
    if result.cancelled:
        _log_warning(f"{executable.name} cancelled ({elapsed})")
    elif result.returncode == 0:
        _log_info(f"{executable.name} exited cleanly ({elapsed})")
    else:
        _log_info(f"{executable.name} exited with status {result.returncode} ({elapsed})")


def log_stop(template_name: str) -> None:
    """Log that a program's owned scope is being cancelled."""
    _log_info(f"Stopping {template_name} program")
