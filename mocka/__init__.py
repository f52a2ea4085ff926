"""
MOCKA - Mock applications on demand

Renders small throwaway Go programs from templates, builds them with the Go
toolchain and runs them under a cancellable scope. Useful as stand-ins for
real binaries and HTTP services in tests.

Architecture:
- Templating Context: Program kinds and Go source rendering
- Rendering Context: Go toolchain invocation
- Execution Context: Process supervision and cancellation
"""

from mocka.buildable_program import (
    BuildableProgram,
    new_console_program,
    new_web_server_program,
)
from mocka.contexts.execution import CancellationScope
from mocka.contexts.templating import ConsoleProgram, TemplateRenderError, WebServerProgram
from mocka.exceptions import (
    ArtifactNotFoundError,
    CompilerInvocationError,
    FilesystemError,
    MockaError,
    ProcessCancelledError,
    ProcessExecutionError,
)

__version__ = "0.1.0"

__all__ = [
    "BuildableProgram",
    "new_console_program",
    "new_web_server_program",
    "CancellationScope",
    "ConsoleProgram",
    "WebServerProgram",
    # Errors
    "MockaError",
    "FilesystemError",
    "CompilerInvocationError",
    "ArtifactNotFoundError",
    "ProcessExecutionError",
    "ProcessCancelledError",
    "TemplateRenderError",
]
