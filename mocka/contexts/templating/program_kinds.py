"""
Program kinds that can be rendered from a template.

Each kind is a frozen dataclass carrying only the values its own template
needs, so a console program can never carry a port and a web server can
never carry an exit code.
"""

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, Union


@dataclass(frozen=True)
class ConsoleProgram:
    """
    A console program that exits immediately.

    Attributes:
        exit_code: Status the process exits with (passed through unvalidated)
    """

    exit_code: int

    template_name: ClassVar[str] = "console"

    def template_values(self) -> Dict[str, Any]:
        """Placeholder values for the console template."""
        return asdict(self)


@dataclass(frozen=True)
class WebServerProgram:
    """
    A web server that answers every request identically.

    Attributes:
        port: TCP port to listen on
        status_code: HTTP status code sent with every response
        status_message: Response body sent with every response
    """

    port: int
    status_code: int
    status_message: str

    template_name: ClassVar[str] = "webserver"

    def template_values(self) -> Dict[str, Any]:
        """Placeholder values for the webserver template."""
        return asdict(self)


ProgramKind = Union[ConsoleProgram, WebServerProgram]
