"""
PDF Generation Module

Resolves a theme's resume template against resume data and lays it out into a
PDF file under <output_dir>/assets/files/.
"""

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv

from vitae.contexts.intake import ResumeData, detect_languages, load_resume_data
from vitae.contexts.rendering.geometry import A4, PageGeometry
from vitae.contexts.rendering.layout_engine import LayoutEngine, LayoutResult
from vitae.contexts.rendering.logger import (
    _log_error,
    _log_info,
    _log_warning,
    log_render_result,
    log_render_start,
)
from vitae.contexts.rendering.pdf_surface import OutputWriteError, PdfSurface
from vitae.contexts.templating.registries import TEMPLATES_PATH, TemplateRegistry
from vitae.contexts.templating.template_loader import resolve_theme
from vitae.utils.languages import DEFAULT_LANG, is_default_lang, validate_directories
from vitae.utils.pdf_processing import page_count

load_dotenv()
DEFAULT_THEME = os.getenv("VITAE_THEME", "default")

# Generated files live here, relative to the output root
FILES_SUBDIR = Path("assets") / "files"


def pdf_filename(lang: str = DEFAULT_LANG) -> str:
    """
    Examples:
        >>> pdf_filename("en")
        'resume.pdf'
        >>> pdf_filename("es")
        'resume-es.pdf'
    """
    if is_default_lang(lang):
        return "resume.pdf"
    return f"resume-{lang}.pdf"


def pdf_output_path(output_dir: Union[str, Path], lang: str = DEFAULT_LANG) -> Path:
    return Path(output_dir) / FILES_SUBDIR / pdf_filename(lang)


@dataclass
class RenderResult:
    """
    Result of generating one PDF.

    Attributes:
        pdf_path: Path to the written PDF
        lang: Language the PDF was rendered for
        page_count: Number of pages produced
        layout: Row placements reported by the layout engine
        elapsed_time: Seconds spent resolving and rendering
    """

    pdf_path: Path
    lang: str
    page_count: int
    layout: LayoutResult
    elapsed_time: float


class PDFGenerator:
    """
    Generates resume PDFs from a theme.

    Args:
        output_dir: Output root; PDFs go to <output_dir>/assets/files/
        templates_dir: Directory holding theme directories (defaults to TEMPLATES_PATH)
        theme: Theme name
        geometry: Page geometry
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        templates_dir: Optional[Union[str, Path]] = None,
        theme: str = DEFAULT_THEME,
        geometry: PageGeometry = A4,
    ):
        self.output_dir = Path(output_dir)
        self.theme = theme
        self.geometry = geometry
        self.registry = TemplateRegistry(Path(templates_dir) if templates_dir else TEMPLATES_PATH)
        self.engine = LayoutEngine(geometry)

    def generate(self, data: ResumeData, lang: str = DEFAULT_LANG, verbose: bool = False) -> RenderResult:
        """
        Render one PDF for a language.

        No file is written if the template cannot be resolved.

        Raises:
            ValueError: If data is None
            FileNotFoundError: If the theme template does not exist
            TemplateSyntaxError / TemplateStructureError: If the template is invalid
            OutputWriteError: If the output directory or file cannot be written
        """
        if data is None:
            raise ValueError("Resume data cannot be None")

        start_time = time.time()
        output_path = pdf_output_path(self.output_dir, lang)
        log_render_start(lang, self.registry.get_template_path(self.theme), output_path)

        template = resolve_theme(self.registry, self.theme, data, lang)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            _log_error(f"Cannot create output directory {output_path.parent}: {e}")
            raise OutputWriteError(f"Cannot create output directory {output_path.parent}: {e}") from e

        surface = PdfSurface(
            output_path,
            self.geometry,
            title=data.basic.name or None,
            author=data.basic.name or None,
        )
        layout = self.engine.render(template, surface)
        written_pages = page_count(output_path)
        if written_pages != layout.page_count:
            _log_warning(f"Layout produced {layout.page_count} pages but {output_path.name} has {written_pages}")

        result = RenderResult(
            pdf_path=output_path,
            lang=lang,
            page_count=layout.page_count,
            layout=layout,
            elapsed_time=time.time() - start_time,
        )
        log_render_result(result, verbose=verbose)
        return result


def generate_pdf(
    data: ResumeData,
    output_dir: Union[str, Path],
    lang: str = DEFAULT_LANG,
    theme: str = DEFAULT_THEME,
    templates_dir: Optional[Union[str, Path]] = None,
) -> RenderResult:
    """Generate a single PDF. Convenience wrapper around PDFGenerator."""
    return PDFGenerator(output_dir, templates_dir, theme).generate(data, lang)


def generate_multi_language_pdf(
    data_dir: Union[str, Path],
    output_dir: Union[str, Path],
    target_lang: str = "",
    theme: str = DEFAULT_THEME,
    templates_dir: Optional[Union[str, Path]] = None,
) -> List[RenderResult]:
    """
    Generate one PDF per detected language.

    Languages render one after another; the first failure stops the batch.

    Args:
        data_dir: Resume data directory (with optional lang/<code>/ overlays)
        output_dir: Output root
        target_lang: Only render this language (empty = all detected languages)
        theme: Theme name
        templates_dir: Directory holding theme directories

    Returns:
        One RenderResult per language, in detection order
    """
    validate_directories(data_dir)
    generator = PDFGenerator(output_dir, templates_dir, theme)

    results = []
    for lang in detect_languages(data_dir, target_lang):
        _log_info(f"Processing language: {lang}")
        data = load_resume_data(data_dir, lang)
        results.append(generator.generate(data, lang))
    return results
