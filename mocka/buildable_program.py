"""
Buildable Programs

A BuildableProgram renders a throwaway Go program from a template, builds it
with the Go toolchain and can run the resulting executable under a
cancellation scope.

Usage:
    from mocka import new_console_program, new_web_server_program

    program = new_console_program(42)
    program.build()
    try:
        program.run()
    except ProcessExecutionError as e:
        assert e.returncode == 42

    server = new_web_server_program(8080, 404, "Not Found")
    server.build()
    threading.Thread(target=server.run).start()
    ...
    server.stop()
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, List, Optional, TextIO, Union

from dotenv import load_dotenv

from mocka.contexts.execution import CancellationScope, run_executable
from mocka.contexts.execution.logger import log_stop
from mocka.contexts.rendering.compiler import GO_COMPILER, compile_go_source, executable_name
from mocka.contexts.rendering.logger import (
    _log_debug,
    log_build_result,
    log_build_start,
    setup_build_logger,
)
from mocka.contexts.templating import (
    ConsoleProgram,
    ProgramKind,
    ProgramSourceGenerator,
    WebServerProgram,
)
from mocka.exceptions import (
    ArtifactNotFoundError,
    CompilerInvocationError,
    FilesystemError,
    ProcessCancelledError,
    ProcessExecutionError,
)
from mocka.utils.timestamp import now

load_dotenv()
TEMP_DIR = os.getenv("MOCKA_TEMP_DIR") or None
LOGS_PATH = os.getenv("MOCKA_LOGS_PATH") or None

WORKSPACE_PREFIX = "mocka-"

PathLike = Union[str, os.PathLike]


class BuildableProgram:
    """
    Lifecycle of a single throwaway program: render, build, run, stop.

    The source is rendered once at construction. Every build() allocates a
    fresh workspace under the temp directory and replaces the recorded
    executable only on success. run() may be called any number of times,
    each spawning an independent process bound either to the caller's
    CancellationScope or to the scope this instance owns, which stop()
    cancels.

    Attributes:
        compiler: Go toolchain binary used by build()
        temp_dir: Parent directory for build workspaces (None uses the platform default)
        logs_path: If set, each build writes a build.log under logs_path/build_<timestamp>/.
            This reconfigures the process-wide loguru logger: build() removes every
            existing sink, including ones the host application added, and installs
            a DEBUG file sink plus an INFO stdout sink in their place.
    """

    def __init__(
        self,
        kind: ProgramKind,
        generator: Optional[ProgramSourceGenerator] = None,
        compiler: str = GO_COMPILER,
        temp_dir: Optional[PathLike] = TEMP_DIR,
        logs_path: Optional[PathLike] = LOGS_PATH,
    ):
        generator = generator or ProgramSourceGenerator()

        self._kind = kind
        self._rendered_source = generator.render(kind)
        self._source_filename = generator.source_filename(kind)

        self.compiler = compiler
        self.temp_dir = temp_dir
        self.logs_path = Path(logs_path) if logs_path else None

        self._artifact_path: Optional[Path] = None
        self._workspaces: List[Path] = []
        self._scope = CancellationScope()

    @classmethod
    def console(cls, exit_code: int, **kwargs) -> "BuildableProgram":
        """Program that exits immediately with exit_code."""
        return cls(ConsoleProgram(exit_code=exit_code), **kwargs)

    @classmethod
    def web_server(
        cls, port: int, status_code: int, status_message: str, **kwargs
    ) -> "BuildableProgram":
        """Program that answers every HTTP request on port with status_code and status_message."""
        return cls(
            WebServerProgram(port=port, status_code=status_code, status_message=status_message),
            **kwargs,
        )

    # Read-only state

    @property
    def kind(self) -> ProgramKind:
        return self._kind

    @property
    def rendered_source(self) -> str:
        return self._rendered_source

    @property
    def artifact_path(self) -> Optional[Path]:
        return self._artifact_path

    @property
    def scope(self) -> CancellationScope:
        """The scope this instance owns and stop() cancels."""
        return self._scope

    @property
    def workspaces(self) -> List[Path]:
        return list(self._workspaces)

    def get_artifact_path(self) -> Optional[Path]:
        """Path to the built executable, or None if no build has succeeded."""
        return self._artifact_path

    get_exe_path = get_artifact_path

    # Source

    def write_source(self, stream: TextIO) -> None:
        """Write the rendered source to a text stream."""
        stream.write(self._rendered_source)

    def copy_source(self, path: PathLike) -> None:
        """
        Write the rendered source to a file, creating or truncating it.

        Raises:
            FilesystemError: If the file cannot be created or written
        """
        try:
            # newline="" keeps the file byte-identical to write_source output
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(self._rendered_source)
        except OSError as e:
            raise FilesystemError(
                "Failed to write source file", path=path, original_error=e
            ) from e

    # Build

    def build(self) -> Path:
        """
        Build the program into a fresh temporary workspace.

        The workspace is not removed afterwards; see cleanup(). When logs_path
        is set, the global loguru sinks are replaced before building.

        Returns:
            Path to the built executable

        Raises:
            FilesystemError: If the workspace or source file cannot be created
            CompilerInvocationError: If the compiler cannot start or exits non-zero
        """
        if self.logs_path is not None:
            setup_build_logger(self.logs_path / f"build_{now()}")

        try:
            workspace = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=self.temp_dir))
        except OSError as e:
            raise FilesystemError(
                "Failed to create build workspace", path=self.temp_dir, original_error=e
            ) from e
        self._workspaces.append(workspace)

        source_file = workspace / self._source_filename
        self.copy_source(source_file)

        output_file = workspace / executable_name()
        template_name = self._kind.template_name

        log_build_start(template_name, source_file, output_file)
        result = compile_go_source(source_file, output_file, compiler=self.compiler)
        log_build_result(template_name, result)

        if not result.success:
            raise CompilerInvocationError(f"Failed to build {template_name} program", result=result)

        self._artifact_path = output_file
        return output_file

    # Executable

    def _read_artifact(self) -> bytes:
        if self._artifact_path is None:
            raise ArtifactNotFoundError("No executable has been built")
        try:
            return self._artifact_path.read_bytes()
        except FileNotFoundError as e:
            raise ArtifactNotFoundError(
                "Built executable no longer exists", path=self._artifact_path
            ) from e
        except OSError as e:
            raise FilesystemError(
                "Failed to read executable", path=self._artifact_path, original_error=e
            ) from e

    def write_exe(self, stream: BinaryIO) -> None:
        """
        Write the built executable's bytes to a binary stream.

        Raises:
            ArtifactNotFoundError: If nothing was built or the executable is gone
            FilesystemError: If the executable cannot be read
        """
        stream.write(self._read_artifact())

    def copy_exe(self, path: PathLike) -> None:
        """
        Copy the built executable to path with mode 0o666 (before umask).

        Existing files are truncated and keep their permissions.

        Raises:
            ArtifactNotFoundError: If nothing was built or the executable is gone
            FilesystemError: If the executable cannot be read or path cannot be written
        """
        content = self._read_artifact()
        try:
            flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
            fd = os.open(path, flags, 0o666)
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        except OSError as e:
            raise FilesystemError(
                "Failed to write executable copy", path=path, original_error=e
            ) from e

    # Process lifecycle

    def run(self, scope: Optional[CancellationScope] = None) -> None:
        """
        Run the built executable and block until it exits.

        Args:
            scope: Caller-owned scope; cancelling it terminates the process.
                Defaults to the scope owned by this instance (see stop()).

        Raises:
            ArtifactNotFoundError: If nothing was built or the executable is gone
            ProcessCancelledError: If the scope was cancelled
            ProcessExecutionError: If the process cannot start or exits non-zero
        """
        if self._artifact_path is None:
            raise ArtifactNotFoundError("No executable has been built")
        if not self._artifact_path.exists():
            raise ArtifactNotFoundError(
                "Built executable no longer exists", path=self._artifact_path
            )

        active_scope = scope if scope is not None else self._scope
        result = run_executable(self._artifact_path, active_scope)

        if result.cancelled:
            raise ProcessCancelledError(
                "Executable was cancelled", returncode=result.returncode, path=self._artifact_path
            )
        if result.returncode != 0:
            raise ProcessExecutionError(
                f"Executable exited with status {result.returncode}",
                returncode=result.returncode,
                path=self._artifact_path,
            )

    def stop(self) -> None:
        """
        Cancel the owned scope, terminating processes started by run() without a scope.

        Processes bound to a caller-supplied scope are unaffected. Once stopped,
        later run() calls without a scope are cancelled before they start.

        Blocks until every such process has exited. Processes are stopped one
        after another, so each one that ignores terminate adds up to
        MOCKA_TERMINATE_GRACE_S seconds before it is killed.
        """
        if not self._scope.cancelled:
            log_stop(self._kind.template_name)
        self._scope.cancel()

    # Workspace management

    def cleanup(self) -> None:
        """
        Remove every workspace this instance created and forget the executable.

        Raises:
            FilesystemError: If a workspace cannot be removed
        """
        while self._workspaces:
            workspace = self._workspaces[-1]
            if workspace.exists():
                try:
                    shutil.rmtree(workspace)
                except OSError as e:
                    raise FilesystemError(
                        "Failed to remove build workspace", path=workspace, original_error=e
                    ) from e
                _log_debug(f"Removed workspace {workspace}")
            self._workspaces.pop()
        self._artifact_path = None

    def __enter__(self) -> "BuildableProgram":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.stop()
        self.cleanup()

    def __repr__(self) -> str:
        return f"BuildableProgram({self._kind!r}, artifact_path={self._artifact_path})"


def new_console_program(exit_code: int, **kwargs) -> BuildableProgram:
    """Create a console program that exits immediately with exit_code."""
    return BuildableProgram.console(exit_code, **kwargs)


def new_web_server_program(
    port: int, status_code: int, status_message: str, **kwargs
) -> BuildableProgram:
    """Create a web server answering every request with status_code and status_message."""
    return BuildableProgram.web_server(port, status_code, status_message, **kwargs)
