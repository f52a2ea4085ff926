"""
Rendering Context

Responsibilities:
- Compiles rendered Go source to a native executable
- Names build output per platform convention
- Captures compiler output and parses diagnostics

Owns: Go toolchain invocation, build logs
Never: Modifies template content
"""

from mocka.contexts.rendering.compiler import (
    CompilationResult,
    compile_go_source,
    executable_name,
)

__all__ = ["CompilationResult", "compile_go_source", "executable_name"]
