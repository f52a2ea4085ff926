"""
Templating Context

Responsibilities:
- Models program kinds (console, webserver) as immutable variants
- Loads Go source templates and their placeholder configs
- Renders a program kind into final Go source

Owns: program kinds, template system, source rendering
Never: Touches the filesystem outside the template directory
"""

from mocka.contexts.templating.exceptions import TemplateRenderError
from mocka.contexts.templating.program_kinds import (
    ConsoleProgram,
    ProgramKind,
    WebServerProgram,
)
from mocka.contexts.templating.registries import TemplateConfigRegistry, TemplateRegistry
from mocka.contexts.templating.source_generator import ProgramSourceGenerator

__all__ = [
    # Program kinds
    "ConsoleProgram",
    "WebServerProgram",
    "ProgramKind",
    # Rendering
    "ProgramSourceGenerator",
    "TemplateRenderError",
    # Registries
    "TemplateRegistry",
    "TemplateConfigRegistry",
]
