"""
Go Compilation Module

Handles compilation of rendered .go files to native executables using the Go toolchain.
"""

import os
import re
import subprocess
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

GO_COMPILER = os.getenv("MOCKA_GO_COMPILER", "go")

EXECUTABLE_BASENAME = "mocka"

# Go diagnostics look like "./main.go:7:2: undefined: foo"
GO_ERROR_PATTERN = re.compile(r"^(?:\.[\\/])?\S+\.go:\d+(?::\d+)?: .+$", re.MULTILINE)


@dataclass
class CompilationResult:
    """
    Result of Go compilation.

    Attributes:
        success: Whether the compiler exited with status 0
        executable_path: Path to generated executable (None if failed)
        stdout: Standard output from the compiler
        stderr: Standard error from the compiler
        returncode: Compiler exit status (None if it could not be started)
        errors: List of parsed compiler errors
        elapsed_s: Wall-clock compilation time in seconds
    """

    success: bool
    executable_path: Optional[Path] = None
    stdout: str = ""
    stderr: str = ""
    returncode: Optional[int] = None
    errors: List[str] = field(default_factory=list)
    elapsed_s: float = 0.0


def executable_name(base: str = EXECUTABLE_BASENAME) -> str:
    """
    Platform-appropriate executable filename.

    Args:
        base: Name without suffix

    Returns:
        base with ".exe" appended on Windows, unchanged elsewhere
    """
    if sys.platform.startswith("win"):
        return f"{base}.exe"
    return base


def _parse_go_output(output: str) -> List[str]:
    """
    Extract compiler diagnostics from go build output.

    Args:
        output: Combined stdout/stderr of the compiler

    Returns:
        List of "file:line:col: message" lines, in order
    """
    return [match.group(0).strip() for match in GO_ERROR_PATTERN.finditer(output)]


def compile_go_source(
    source_file: Path,
    output_file: Path,
    compiler: str = GO_COMPILER,
) -> CompilationResult:
    """
    Compile a Go source file into an executable with `go build`.

    Pure compilation function - assumes the source file exists and the output
    directory is writable. The exit status of the compiler is the only
    success signal.

    Args:
        source_file: Path to the .go file to compile
        output_file: Path the executable is written to
        compiler: Go toolchain binary (default: MOCKA_GO_COMPILER or "go")

    Returns:
        CompilationResult with success status and diagnostic information
    """
    source_file = Path(source_file)
    output_file = Path(output_file)

    cmd = [compiler, "build", "-o", str(output_file), str(source_file)]

    start_time = time.time()
    try:
        result = subprocess.run(
            cmd,
            cwd=source_file.parent,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
        )
    except OSError as e:
        # Toolchain missing or not executable
        return CompilationResult(
            success=False,
            errors=[f"Failed to start compiler '{compiler}': {e}"],
            elapsed_s=time.time() - start_time,
        )
    elapsed_s = time.time() - start_time

    success = result.returncode == 0
    errors = [] if success else _parse_go_output(result.stdout + "\n" + result.stderr)
    if not success and not errors:
        errors.append(f"Compiler exited with status {result.returncode}")

    return CompilationResult(
        success=success,
        executable_path=output_file if success else None,
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
        errors=errors,
        elapsed_s=elapsed_s,
    )
