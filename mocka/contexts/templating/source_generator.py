"""
Program Source Generator

Renders a ProgramKind into final Go source text.
"""

from typing import Any, Dict, List

from jinja2 import TemplateError, TemplateNotFound

from mocka.contexts.templating.exceptions import TemplateRenderError
from mocka.contexts.templating.logger import _log_error, log_render_result
from mocka.contexts.templating.program_kinds import ProgramKind
from mocka.contexts.templating.registries import TemplateConfigRegistry, TemplateRegistry


class ProgramSourceGenerator:
    """Converts a program kind to Go source using its registered template."""

    def __init__(
        self,
        template_registry: TemplateRegistry = None,
        config_registry: TemplateConfigRegistry = None,
    ):
        self.template_registry = template_registry or TemplateRegistry()
        self.config_registry = config_registry or TemplateConfigRegistry()

    def required_placeholders(self, template_name: str) -> List[str]:
        """
        Placeholders declared in a template's config.

        Raises:
            TemplateRenderError: If the template has no config
        """
        try:
            config = self.config_registry.get_config(template_name)
        except FileNotFoundError as e:
            raise TemplateRenderError(
                f"No config for template '{template_name}'",
                template_name=template_name,
                template_path=self.config_registry.get_config_path(template_name),
                original_error=e,
            ) from e
        return list(config.get("placeholders", []))

    def source_filename(self, kind: ProgramKind) -> str:
        """Filename the rendered source of this kind is written to (e.g. 'main.go')."""
        config = self.config_registry.get_config(kind.template_name)
        return config.get("source_filename", "main.go")

    def render(self, kind: ProgramKind) -> str:
        """
        Render the template for a program kind.

        Args:
            kind: ConsoleProgram or WebServerProgram

        Returns:
            Go source with every placeholder substituted

        Raises:
            TemplateRenderError: If a declared placeholder has no value, the
                template is missing, or Jinja2 fails to render
        """
        template_name = kind.template_name
        template_path = self.template_registry.get_template_path(template_name)
        values: Dict[str, Any] = kind.template_values()

        missing = [p for p in self.required_placeholders(template_name) if p not in values]
        if missing:
            _log_error(f"Missing placeholders for '{template_name}': {missing}")
            raise TemplateRenderError(
                f"Missing values for placeholders: {', '.join(missing)}",
                template_name=template_name,
                template_path=template_path,
            )

        try:
            template = self.template_registry.get_template(template_name)
            source = template.render(**values)
        except TemplateNotFound as e:
            raise TemplateRenderError(
                f"Template '{template_name}' not found",
                template_name=template_name,
                template_path=template_path,
                original_error=e,
            ) from e
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render template '{template_name}'",
                template_name=template_name,
                template_path=template_path,
                original_error=e,
            ) from e

        log_render_result(template_name, values, len(source))
        return source
