"""
Process Supervision Module

Spawns a built executable bound to a CancellationScope and waits for it.
"""

import os
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from mocka.contexts.execution.cancellation import CancellationScope
from mocka.contexts.execution.logger import _log_debug, log_run_result, log_run_start
from mocka.exceptions import ProcessExecutionError

load_dotenv()

# Seconds between terminate and kill when a scope is cancelled
TERMINATE_GRACE_S = float(os.getenv("MOCKA_TERMINATE_GRACE_S", "5"))


@dataclass
class ExecutionResult:
    """
    Result of running an executable.

    Attributes:
        returncode: Exit status (None if the process was never started)
        cancelled: Whether the process was terminated by its scope
        elapsed_s: Wall-clock run time in seconds
        pid: Process id (None if the process was never started)
    """

    returncode: Optional[int]
    cancelled: bool = False
    elapsed_s: float = 0.0
    pid: Optional[int] = None


def _terminate(proc: subprocess.Popen, grace_period_s: float) -> None:
    """
    Ask a process to stop, then kill it if it outlives the grace period.

    Blocks the cancelling thread until the process is gone, for up to
    grace_period_s when the process ignores terminate.
    """
    if proc.poll() is not None:
        return
    _log_debug(f"Terminating pid {proc.pid}")
    proc.terminate()
    try:
        proc.wait(timeout=grace_period_s)
    except subprocess.TimeoutExpired:
        _log_debug(f"pid {proc.pid} ignored terminate, killing")
        proc.kill()
        proc.wait()


def run_executable(
    executable: Path,
    scope: CancellationScope,
    grace_period_s: float = TERMINATE_GRACE_S,
) -> ExecutionResult:
    """
    Run an executable until it exits or its scope is cancelled.

    The process inherits no stdin and its output is discarded. If the scope
    is already cancelled the process is not started.

    Args:
        executable: Path to the built executable
        scope: Scope whose cancellation terminates the process
        grace_period_s: Seconds to wait after terminate before killing

    Returns:
        ExecutionResult with the exit status and whether it was cancelled

    Raises:
        ProcessExecutionError: If the process could not be started
    """
    executable = Path(executable)

    if scope.cancelled:
        _log_debug(f"Scope already cancelled, not starting {executable.name}")
        return ExecutionResult(returncode=None, cancelled=True)

    start_time = time.time()
    try:
        proc = subprocess.Popen(
            [str(executable)],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise ProcessExecutionError(
            f"Failed to start executable: {e}", path=executable
        ) from e

    log_run_start(executable, proc.pid)

    terminated = threading.Event()

    def on_cancel() -> None:
        terminated.set()
        _terminate(proc, grace_period_s)

    remove_callback = scope.add_callback(on_cancel)
    try:
        returncode = proc.wait()
    finally:
        remove_callback()

    # Status 0 means the process finished on its own before the cancel reached it
    result = ExecutionResult(
        returncode=returncode,
        cancelled=terminated.is_set() and returncode != 0,
        elapsed_s=time.time() - start_time,
        pid=proc.pid,
    )
    log_run_result(executable, result)
    return result
