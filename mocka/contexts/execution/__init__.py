"""
Execution Context

Responsibilities:
- Provides cancellation scopes that can be shared across threads
- Spawns built executables and waits for them
- Terminates processes whose scope is cancelled

Owns: process supervision
Never: Builds or modifies executables
"""

from mocka.contexts.execution.cancellation import CancellationScope
from mocka.contexts.execution.runner import ExecutionResult, run_executable

__all__ = ["CancellationScope", "ExecutionResult", "run_executable"]
