"""Exceptions raised by BuildableProgram operations."""

from pathlib import Path
from typing import Optional


class MockaError(Exception):
    """Base class for all MOCKA errors."""

    pass


class FilesystemError(MockaError):
    """
    Exception raised when creating, reading or writing a file or directory fails.

    Attributes:
        message: Error description
        path: File or directory involved
        original_error: The underlying OSError
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = Path(path) if path is not None else None
        self.original_error = original_error

        parts = [message]
        if path is not None:
            parts.append(f"Path: {path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class CompilerInvocationError(MockaError):
    """
    Exception raised when the Go toolchain cannot be started or exits non-zero.

    Attributes:
        message: Error description
        result: CompilationResult with captured compiler output
    """

    def __init__(self, message: str, result=None):  # result: CompilationResult
        self.message = message
        self.result = result

        parts = [message]
        if result is not None:
            if result.returncode is not None:
                parts.append(f"Exit status: {result.returncode}")
            for error in result.errors[:5]:
                parts.append(f"  {error}")
            if len(result.errors) > 5:
                parts.append(f"  ... and {len(result.errors) - 5} more errors")

        super().__init__("\n".join(parts))


class ArtifactNotFoundError(MockaError):
    """
    Exception raised when an operation needs a built executable that does not exist.

    Attributes:
        message: Error description
        path: Recorded artifact path (None if nothing was built)
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path
        super().__init__(message if path is None else f"{message}\nPath: {path}")


class ProcessExecutionError(MockaError):
    """
    Exception raised when the built executable fails to start or exits non-zero.

    Attributes:
        message: Error description
        returncode: Exit status of the process (None if it never started)
        path: Executable that was run
    """

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        path: Optional[Path] = None,
    ):
        self.message = message
        self.returncode = returncode
        self.path = path

        parts = [message]
        if returncode is not None:
            parts.append(f"Exit status: {returncode}")
        if path is not None:
            parts.append(f"Executable: {path}")

        super().__init__("\n".join(parts))


class ProcessCancelledError(ProcessExecutionError):
    """Exception raised when a running executable was terminated by its cancellation scope."""

    pass
