"""
Rendering context logger.

Provides logging interface for the build step with automatic [build] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from mocka.utils.logger import setup_logger as _setup_logger
from mocka.utils.timestamp import format_elapsed

load_dotenv()

CONTEXT_PREFIX = "[build]"


def setup_build_logger(log_dir: Path) -> Path:
    """
    Setup logger for the build step.

    Configures loguru with provenance tracking and build-specific context.

    Args:
        log_dir: Directory for this build session

    Returns:
        Path to log file

    Example:
        from mocka.contexts.rendering.logger import setup_build_logger, _log_info

        log_file = setup_build_logger(log_dir)
        _log_info("Starting build...")
    """
    return _setup_logger(
        context_name="build",
        log_dir=log_dir,
        extra_provenance={"Go compiler": os.getenv("MOCKA_GO_COMPILER", "go")},
    )


# Wrapper functions with automatic [build] prefix


def _log_info(message: str) -> None:
    """Log info message with [build] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [build] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [build] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [build] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level build-specific logging helpers


def log_build_start(template_name: str, source_file: Path, output_file: Path) -> None:
    """Log start of a build with context."""
    _log_info(f"Building {template_name} program")
    _log_info(f"Workspace: {source_file.parent}")
    _log_debug(f"  Source: {source_file}")
    _log_debug(f"  Output: {output_file}")


def log_build_result(
    template_name: str,
    result,  # CompilationResult
) -> None:
    """
    Log build result with diagnostics.

    Args:
        template_name: Program template name
        result: CompilationResult from compile_go_source()
    """
    elapsed = format_elapsed(result.elapsed_s)
    if result.success:
        _log_success(f"{template_name}: build succeeded ({elapsed})")
        if result.executable_path:
            _log_debug(f"  Executable: {result.executable_path}")
    else:
        _log_error(f"{template_name}: build failed with {len(result.errors)} errors ({elapsed})")
        for i, err in enumerate(result.errors[:5], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > 5:
            _log_error(f"  ... and {len(result.errors) - 5} more errors")

    # Raw compiler output on failure, bypassing the format template
    if not result.success:
        if result.stdout:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nCOMPILER STDOUT:\n{'=' * 80}\n{result.stdout}\n"
            )
        if result.stderr:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nCOMPILER STDERR:\n{'=' * 80}\n{result.stderr}\n"
            )
