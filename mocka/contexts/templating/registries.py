"""
Templating Registries

Centralized registries for loading and caching program templates and their configs.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound
from omegaconf import OmegaConf

load_dotenv()
DEFAULT_TYPES_PATH = Path(__file__).parent / "types"
TYPES_PATH = Path(os.getenv("MOCKA_TEMPLATE_TYPES_PATH", str(DEFAULT_TYPES_PATH)))

TEMPLATE_FILENAME = "template.go.jinja"
CONFIG_FILENAME = "template_config.yaml"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for Go source generation.

    Templates are stored in mocka/contexts/templating/types/{template_name}/template.go.jinja
    and use the standard {{ var }} delimiters.
    """

    def __init__(self, types_base_path: Optional[Path] = None):
        """
        Initialize the template registry.

        Args:
            types_base_path: Base path for type directories. Defaults to
                           MOCKA_TEMPLATE_TYPES_PATH from environment
        """
        if types_base_path is None:
            types_base_path = TYPES_PATH

        self.types_base_path = Path(types_base_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.types_base_path)),
            # An unsubstituted placeholder must fail loudly
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=False,
            lstrip_blocks=False,
            keep_trailing_newline=True,
        )

    def get_template(self, template_name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            template_name: Name of the template (e.g., 'console')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if template_name in self._cache:
            return self._cache[template_name]

        template_path = f"{template_name}/{TEMPLATE_FILENAME}"

        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as e:
            missing_path = self.types_base_path / template_path
            raise TemplateNotFound(
                f"Template not found for '{template_name}' at {missing_path}"
            ) from e

        self._cache[template_name] = template
        return template

    def get_template_path(self, template_name: str) -> Path:
        """Get the file path for a template."""
        return self.types_base_path / template_name / TEMPLATE_FILENAME

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_name: str) -> bool:
        """Check if a template is in the cache."""
        return template_name in self._cache


class TemplateConfigRegistry:
    """
    Registry for loading and caching template configurations.

    Configs are stored in mocka/contexts/templating/types/{template_name}/template_config.yaml
    and declare the placeholders a template requires and the filename its
    rendered source is written to.
    """

    def __init__(self, types_base_path: Optional[Path] = None):
        if types_base_path is None:
            types_base_path = TYPES_PATH

        self.types_base_path = Path(types_base_path)
        self._cache: Dict[str, Dict[str, Any]] = {}

    def get_config(self, template_name: str) -> Dict[str, Any]:
        """
        Get a template config by name, loading and caching it if necessary.

        Args:
            template_name: Name of the template (e.g., 'webserver')

        Returns:
            Dict containing the template configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        if template_name in self._cache:
            return self._cache[template_name]

        config_path = self.get_config_path(template_name)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Template config not found for '{template_name}' at {config_path}"
            )

        config = OmegaConf.load(config_path)
        config_dict = OmegaConf.to_container(config, resolve=True)

        self._cache[template_name] = config_dict
        return config_dict

    def get_config_path(self, template_name: str) -> Path:
        """Get the file path for a template's config."""
        return self.types_base_path / template_name / CONFIG_FILENAME

    def clear_cache(self):
        """Clear the config cache."""
        self._cache.clear()

    def is_cached(self, template_name: str) -> bool:
        """Check if a config is in the cache."""
        return template_name in self._cache

