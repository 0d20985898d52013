"""
Templating Registries

Registry for loading and caching theme templates.
"""

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from vitae.contexts.templating.helpers import FILTERS, HELPERS

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", Path(__file__).resolve().parents[3]))
TEMPLATES_PATH = Path(os.getenv("TEMPLATES_PATH", PROJECT_ROOT / "templates"))
DEFAULT_THEME = os.getenv("VITAE_THEME", "default")

# Theme file names under <templates_path>/<theme>/
RESUME_TEMPLATE_NAME = "resume.yaml.jinja"
WEBSITE_TEMPLATE_NAME = "index.html.jinja"


def create_environment(
    search_path: Optional[Path] = None, autoescape: bool = False
) -> Environment:
    """
    Create a Jinja2 environment with the formatting helpers registered.

    StrictUndefined turns references to unknown variables or helpers into errors
    instead of silently rendering empty strings.
    """
    loader = FileSystemLoader(str(search_path)) if search_path is not None else None
    env = Environment(
        loader=loader,
        # Catches silent failures
        undefined=StrictUndefined,
        autoescape=autoescape,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.globals.update(HELPERS)
    env.filters.update(FILTERS)
    return env


class TemplateRegistry:
    """
    Registry for loading and caching theme templates.

    Templates are stored in <templates_path>/<theme>/<name>, e.g.
    templates/default/resume.yaml.jinja.
    """

    def __init__(self, templates_path: Path = None, autoescape: bool = False):
        """
        Initialize the template registry.

        Args:
            templates_path: Base path for theme directories. Defaults to
                            TEMPLATES_PATH from environment
            autoescape: Enable HTML autoescaping (for website templates)
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}
        self.env = create_environment(self.templates_path, autoescape=autoescape)

    def get_template(self, theme: str, name: str = RESUME_TEMPLATE_NAME) -> Template:
        """
        Get a theme template, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If template file doesn't exist
            jinja2.TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        key = f"{theme}/{name}"
        if key in self._cache:
            return self._cache[key]

        try:
            template = self.env.get_template(key)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found for theme '{theme}' at {self.get_template_path(theme, name)}"
            ) from e

        self._cache[key] = template
        return template

    def get_template_path(self, theme: str, name: str = RESUME_TEMPLATE_NAME) -> Path:
        return self.templates_path / theme / name

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, theme: str, name: str = RESUME_TEMPLATE_NAME) -> bool:
        return f"{theme}/{name}" in self._cache
