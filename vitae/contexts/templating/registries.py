"""
Templating Registries

Centralized registry for loading and caching the HTML document templates.
"""

import os
import re
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("TEMPLATES_PATH", str(Path(__file__).parent / "template")))

TEMPLATE_SUFFIX = ".html.jinja"


def display_url(url: str) -> str:
    """
    Shorten a URL for printed display by dropping the scheme, "www." and trailing slash.

    Example:
        display_url("https://www.linkedin.com/in/jdoe/")  # "linkedin.com/in/jdoe"
    """
    return re.sub(r"^(https?://)?(www\.)?", "", url).rstrip("/")


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for HTML generation.

    Templates are stored in vitae/contexts/templating/template/{name}.html.jinja.

    Autoescaping is off. Every template escapes free-text fields
    explicitly with the `e` filter and interpolates URL, icon and image fields
    verbatim.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding *.html.jinja files. Defaults to
                           TEMPLATES_PATH from environment (or the packaged templates)
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["display_url"] = display_url

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name without suffix (e.g., 'website', 'print')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        template_file = f"{name}{TEMPLATE_SUFFIX}"

        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found at {self.templates_path / template_file}"
            ) from e

        self._cache[name] = template
        return template

    def get_template_path(self, name: str) -> Path:
        """Get the file path for a named template."""
        return self.templates_path / f"{name}{TEMPLATE_SUFFIX}"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        """Check if a template is in the cache."""
        return name in self._cache
