"""
Loguru sink configuration shared by the contexts.

A logging session writes one file per context under a timestamped directory
and echoes INFO and above to stdout. Each session opens with a provenance
block so a build log can be traced back to the interpreter, host and
toolchain that produced it. Contexts wrap this in contexts/{context}/logger.py.
"""

import os
import platform
import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {process} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | {message}"
PROVENANCE_RULE = "-" * 80


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Replace the active loguru sinks with a session file and a console echo.

    Every existing sink, including loguru's default stderr sink and any the
    host application installed, is removed first.

    Args:
        context_name: Context identifier, used as the log file stem
        log_dir: Directory for this logging session, created if missing
        extra_provenance: Context-specific entries for the provenance block

    Returns:
        Path to the session log file

    Example:
        log_file = setup_logger(
            "build",
            Path("outs/logs/build_20251114_123456"),
            extra_provenance={"Go compiler": "go"},
        )
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=os.getenv("MOCKA_CONSOLE_LOG_LEVEL", "INFO"),
        colorize=True,
    )

    logger.info(PROVENANCE_RULE)
    for key, value in session_provenance(extra_provenance).items():
        logger.info(f"{key}: {value}")
    logger.info(PROVENANCE_RULE)

    return log_file


def session_provenance(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Describe the running interpreter and host, followed by any context entries."""
    provenance = {
        "Command": " ".join(sys.argv) or "<interactive>",
        "Working directory": str(Path.cwd()),
        "Python": platform.python_version(),
        "Platform": f"{platform.system()} {platform.machine()}",
        "PID": str(os.getpid()),
    }
    provenance.update(extra or {})
    return provenance
