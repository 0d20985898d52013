"""
Static Website Generation

Renders a theme's index.html.jinja against resume data and copies the static
assets next to it. The default language is published at the output root; every
other language goes to <output_dir>/<lang>/ and shares the root's assets.
"""

import os
import shutil
from pathlib import Path
from typing import List, Optional, Union

import jinja2
from dotenv import load_dotenv

from vitae.contexts.intake import ResumeData, detect_languages, load_resume_data
from vitae.contexts.publishing.logger import _log_debug, _log_error, _log_info, _log_success
from vitae.contexts.templating.exceptions import TemplateSyntaxError
from vitae.contexts.templating.registries import (
    PROJECT_ROOT,
    TEMPLATES_PATH,
    WEBSITE_TEMPLATE_NAME,
    TemplateRegistry,
)
from vitae.contexts.templating.template_loader import template_context
from vitae.utils.languages import DEFAULT_LANG, validate_directories

load_dotenv()
ASSETS_PATH = Path(os.getenv("ASSETS_PATH", PROJECT_ROOT / "assets"))
DEFAULT_THEME = os.getenv("VITAE_THEME", "default")

# Asset paths (relative to the assets directory) never published
EXCLUDED_ASSETS = {"files/.gitkeep", "files/cv.pdf"}


def seq(n: int) -> List[int]:
    """
    Examples:
        >>> seq(3)
        [1, 2, 3]
    """
    return list(range(1, n + 1))


def sub(a: int, b: int) -> int:
    return a - b


class WebsiteGenerator:
    """
    Generates a single-language static website.

    Args:
        templates_dir: Directory holding theme directories
        theme: Theme name
        assets_dir: Static assets copied to <output_dir>/assets
    """

    def __init__(
        self,
        templates_dir: Optional[Union[str, Path]] = None,
        theme: str = DEFAULT_THEME,
        assets_dir: Optional[Union[str, Path]] = None,
    ):
        self.theme = theme
        self.assets_dir = Path(assets_dir) if assets_dir else ASSETS_PATH
        self.registry = TemplateRegistry(
            Path(templates_dir) if templates_dir else TEMPLATES_PATH, autoescape=True
        )
        self.registry.env.globals.update({"seq": seq, "sub": sub})

    def generate(
        self,
        data: ResumeData,
        output_dir: Union[str, Path],
        lang: str = DEFAULT_LANG,
        copy_assets: bool = True,
    ) -> Path:
        """
        Clear output_dir and write index.html (plus assets) into it.

        Returns:
            Path to the generated index.html

        Raises:
            FileNotFoundError: If the theme has no website template
            TemplateSyntaxError: If the template cannot be compiled or rendered
        """
        _log_info(f"Generating static website ({lang})")
        output_dir = Path(output_dir)
        self._clear_output_dir(output_dir)

        index_path = self._generate_index_page(data, output_dir, lang)
        if copy_assets:
            self._copy_assets(output_dir)

        _log_success(f"Website generated: {index_path}")
        return index_path

    def _generate_index_page(self, data: ResumeData, output_dir: Path, lang: str) -> Path:
        template_path = self.registry.get_template_path(self.theme, WEBSITE_TEMPLATE_NAME)
        if not template_path.is_file():
            raise FileNotFoundError(f"Website template not found for theme '{self.theme}': {template_path}")

        try:
            template = self.registry.get_template(self.theme, WEBSITE_TEMPLATE_NAME)
            html = template.render(**template_context(data, lang))
        except jinja2.TemplateSyntaxError as e:
            _log_error(f"Website template syntax error at line {e.lineno}: {e.message}")
            raise TemplateSyntaxError(
                "Malformed template directive", template_path, original_error=e, lineno=e.lineno
            ) from e
        except jinja2.UndefinedError as e:
            _log_error(f"Undefined name in website template: {e}")
            raise TemplateSyntaxError(
                "Template references an undefined variable or helper", template_path, original_error=e
            ) from e

        index_path = output_dir / "index.html"
        index_path.write_text(html, encoding="utf-8")
        _log_debug(f"Generated index: {index_path}")
        return index_path

    def _copy_assets(self, output_dir: Path) -> None:
        assets_output_dir = output_dir / "assets"
        assets_output_dir.mkdir(parents=True, exist_ok=True)

        for path in sorted(self.assets_dir.rglob("*")):
            if not path.is_file():
                continue
            rel_path = path.relative_to(self.assets_dir).as_posix()
            if rel_path in EXCLUDED_ASSETS:
                continue

            destination = assets_output_dir / rel_path
            _log_debug(f"Copying asset {path} -> {destination}")
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, destination)

    def _clear_output_dir(self, output_dir: Path) -> None:
        _log_info(f"Clearing output directory: {output_dir}")
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)


def generate_multi_language_website(
    data_dir: Union[str, Path],
    output_dir: Union[str, Path],
    theme: str = DEFAULT_THEME,
    templates_dir: Optional[Union[str, Path]] = None,
    assets_dir: Optional[Union[str, Path]] = None,
) -> List[Path]:
    """
    Generate the website for every detected language.

    The default language is written first, to output_dir itself, and is the only
    one that copies assets. Other languages go to output_dir/<lang>.

    Returns:
        Paths of the generated index.html files, in detection order
    """
    validate_directories(data_dir)
    output_dir = Path(output_dir)
    generator = WebsiteGenerator(templates_dir, theme, assets_dir)

    index_paths = []
    for lang in detect_languages(data_dir):
        _log_info(f"Generating website for language: {lang}")
        localized_output_dir = output_dir if lang == DEFAULT_LANG else output_dir / lang
        data = load_resume_data(data_dir, lang)
        index_paths.append(
            generator.generate(data, localized_output_dir, lang, copy_assets=lang == DEFAULT_LANG)
        )
    return index_paths
