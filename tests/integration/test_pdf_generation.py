"""
Integration tests for PDF generation.
Tests: resume data → default theme → PDF file readable by PyPDF2/pdfplumber.
"""

from pathlib import Path

import pytest
from PIL import Image

from vitae.contexts.intake import load_resume_data
from vitae.contexts.rendering.layout_engine import render
from vitae.contexts.rendering.pdf_generator import (
    PDFGenerator,
    generate_multi_language_pdf,
    generate_pdf,
    pdf_filename,
    pdf_output_path,
)
from vitae.contexts.rendering.pdf_surface import OutputWriteError, PdfSurface
from vitae.contexts.templating.exceptions import TemplateStructureError
from vitae.contexts.templating.template_model import (
    Align,
    Col,
    ImageProp,
    LineProp,
    Row,
    Template,
    TextProp,
)
from vitae.utils.pdf_processing import normalize_for_matching, page_count, page_text

FIXTURES_PATH = Path(__file__).resolve().parents[1] / "fixtures" / "data"


@pytest.mark.integration
def test_pdf_file_naming(tmp_path):
    """Test default language is unsuffixed and other languages carry their code."""
    assert pdf_filename("en") == "resume.pdf"
    assert pdf_filename("") == "resume.pdf"
    assert pdf_filename("es") == "resume-es.pdf"
    assert pdf_output_path(tmp_path, "es") == tmp_path / "assets" / "files" / "resume-es.pdf"


@pytest.mark.integration
def test_generate_default_theme_pdf(tmp_path):
    """Test generating the fixture resume with the bundled theme."""
    data = load_resume_data(FIXTURES_PATH, "en")
    result = generate_pdf(data, tmp_path)

    assert result.pdf_path == tmp_path / "assets" / "files" / "resume.pdf"
    assert result.pdf_path.exists()
    assert page_count(result.pdf_path) == result.page_count >= 1

    text = normalize_for_matching(" ".join(page_text(result.pdf_path)))
    assert normalize_for_matching("Jane A. Doe") in text
    assert normalize_for_matching("Senior Backend Engineer") in text
    assert normalize_for_matching("jane@example.com") in text
    assert "present" in text


@pytest.mark.integration
def test_generate_multi_language_pdf(tmp_path):
    """Test one PDF per language with translated content."""
    results = generate_multi_language_pdf(FIXTURES_PATH, tmp_path)

    assert [r.lang for r in results] == ["en", "es"]
    assert (tmp_path / "assets" / "files" / "resume.pdf").exists()
    assert (tmp_path / "assets" / "files" / "resume-es.pdf").exists()

    spanish = normalize_for_matching(" ".join(page_text(results[1].pdf_path)))
    assert normalize_for_matching("Ingeniera Backend Sénior") in spanish
    assert normalize_for_matching("Experiencia") in spanish


@pytest.mark.integration
def test_generate_single_target_language(tmp_path):
    """Test restricting generation to one language."""
    results = generate_multi_language_pdf(FIXTURES_PATH, tmp_path, target_lang="es")

    assert [r.lang for r in results] == ["es"]
    assert not (tmp_path / "assets" / "files" / "resume.pdf").exists()


@pytest.mark.integration
def test_generate_requires_data(tmp_path):
    """Test generating without data fails fast."""
    with pytest.raises(ValueError):
        PDFGenerator(tmp_path).generate(None)


@pytest.mark.integration
def test_unwritable_output_dir(tmp_path):
    """Test an output root that cannot be created raises OutputWriteError."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    data = load_resume_data(FIXTURES_PATH)

    with pytest.raises(OutputWriteError):
        PDFGenerator(blocker / "out").generate(data)


@pytest.mark.integration
def test_missing_theme_writes_nothing(tmp_path):
    """Test a missing theme template is an input error and no PDF is written."""
    data = load_resume_data(FIXTURES_PATH)
    with pytest.raises(FileNotFoundError):
        PDFGenerator(tmp_path / "out", theme="does-not-exist").generate(data)
    assert not (tmp_path / "out").exists()


@pytest.mark.integration
def test_invalid_theme_output_writes_nothing(tmp_path):
    """Test a theme resolving to an invalid document fails before writing."""
    theme_dir = tmp_path / "templates" / "broken"
    theme_dir.mkdir(parents=True)
    (theme_dir / "resume.yaml.jinja").write_text(
        "rows:\n  - height: 5\n    cols:\n      - width: 12\n"
        "        text: {content: a, size: 9}\n        line: {thickness: 1}\n",
        encoding="utf-8",
    )
    data = load_resume_data(FIXTURES_PATH)

    with pytest.raises(TemplateStructureError):
        generate_pdf(data, tmp_path / "out", theme="broken", templates_dir=tmp_path / "templates")
    assert not pdf_output_path(tmp_path / "out").exists()


@pytest.mark.integration
def test_page_break_produces_two_pages(tmp_path):
    """Test two 150mm rows produce a two-page PDF with the footer on both pages."""
    template = Template(
        rows=(
            Row(150, (Col(12, TextProp("First block", 12)),)),
            Row(150, (Col(12, TextProp("Second block", 12)),)),
        ),
        footer=Row(5, (Col(12, TextProp("Footer text", 8)),)),
    )
    output = tmp_path / "two.pdf"
    result = render(template, PdfSurface(output))

    assert result.page_count == 2
    assert page_count(output) == 2
    first, second = page_text(output)
    assert "First block" in first and "Footer text" in first
    assert "Second block" in second and "Footer text" in second


@pytest.mark.integration
def test_empty_template_is_one_blank_page(tmp_path):
    """Test an empty template still writes a valid one-page PDF."""
    output = tmp_path / "empty.pdf"
    render(Template(), PdfSurface(output))
    assert page_count(output) == 1


@pytest.mark.integration
def test_lines_images_and_links_render(tmp_path):
    """Test every content variant renders into a readable PDF."""
    image_path = tmp_path / "dot.png"
    Image.new("RGBA", (20, 10), (255, 0, 0, 128)).save(image_path)

    template = Template(
        rows=(
            Row(8, (Col(12, TextProp("Visit site", 10, hyperlink="https://example.com")),)),
            Row(4, (Col(12, LineProp(0.5)),)),
            Row(20, (Col(4, ImageProp(str(image_path), 50, True)), Col(4, ImageProp("missing.png")))),
            Row(8, (Col(12, TextProp("Jus tified text " * 20, 10, align=Align.JUSTIFY)),)),
        ),
    )
    output = tmp_path / "variants.pdf"
    result = render(template, PdfSurface(output, title="Variants", author="Tester"))

    assert result.page_count == 1
    assert "Visit site" in page_text(output)[0]
