"""
Integration tests for static website generation.
Tests: resume data → index.html per language + copied assets.
"""

from pathlib import Path

import pytest

from vitae.contexts.intake import load_resume_data
from vitae.contexts.publishing import WebsiteGenerator, generate_multi_language_website
from vitae.contexts.publishing.website_generator import seq, sub
from vitae.contexts.templating.exceptions import TemplateSyntaxError

FIXTURES_PATH = Path(__file__).resolve().parents[1] / "fixtures" / "data"


def _assets(tmp_path: Path) -> Path:
    assets = tmp_path / "assets"
    (assets / "css").mkdir(parents=True)
    (assets / "files").mkdir()
    (assets / "css" / "style.css").write_text("body {}", encoding="utf-8")
    (assets / "files" / ".gitkeep").write_text("", encoding="utf-8")
    (assets / "files" / "cv.pdf").write_bytes(b"%PDF-1.4 stale")
    (assets / "files" / "notes.txt").write_text("kept", encoding="utf-8")
    return assets


@pytest.mark.integration
def test_seq_and_sub():
    """Test template arithmetic helpers."""
    assert seq(3) == [1, 2, 3]
    assert seq(0) == []
    assert sub(10, 7) == 3


@pytest.mark.integration
def test_generate_website(tmp_path):
    """Test index.html content and asset copy exclusions."""
    output_dir = tmp_path / "public"
    generator = WebsiteGenerator(assets_dir=_assets(tmp_path))
    index_path = generator.generate(load_resume_data(FIXTURES_PATH), output_dir, "en")

    assert index_path == output_dir / "index.html"
    html = index_path.read_text(encoding="utf-8")
    assert "<html lang=\"en\">" in html
    assert "Jane A. Doe" in html
    assert "mailto:jane@example.com" in html
    assert "assets/files/resume.pdf" in html
    assert html.count('class="dot on"') == 9 + 8 + 7 + 5

    assert (output_dir / "assets" / "css" / "style.css").exists()
    assert (output_dir / "assets" / "files" / "notes.txt").exists()
    assert not (output_dir / "assets" / "files" / ".gitkeep").exists()
    assert not (output_dir / "assets" / "files" / "cv.pdf").exists()


@pytest.mark.integration
def test_generate_clears_output_dir(tmp_path):
    """Test stale files in the output directory are removed."""
    output_dir = tmp_path / "public"
    output_dir.mkdir()
    (output_dir / "stale.html").write_text("old", encoding="utf-8")

    WebsiteGenerator(assets_dir=_assets(tmp_path)).generate(
        load_resume_data(FIXTURES_PATH), output_dir, copy_assets=False
    )

    assert not (output_dir / "stale.html").exists()
    assert not (output_dir / "assets").exists()
    assert (output_dir / "index.html").exists()


@pytest.mark.integration
def test_html_is_escaped(tmp_path):
    """Test resume text is HTML-escaped."""
    data = load_resume_data(FIXTURES_PATH)
    data.basic.phrase = "<script>alert(1)</script>"
    output_dir = tmp_path / "public"

    WebsiteGenerator(assets_dir=_assets(tmp_path)).generate(data, output_dir)

    html = (output_dir / "index.html").read_text(encoding="utf-8")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


@pytest.mark.integration
def test_multi_language_website(tmp_path):
    """Test default language at the root and translations in subdirectories."""
    output_dir = tmp_path / "public"
    index_paths = generate_multi_language_website(
        FIXTURES_PATH, output_dir, assets_dir=_assets(tmp_path)
    )

    assert index_paths == [output_dir / "index.html", output_dir / "es" / "index.html"]
    assert (output_dir / "assets" / "css" / "style.css").exists()
    assert not (output_dir / "es" / "assets").exists()

    spanish = (output_dir / "es" / "index.html").read_text(encoding="utf-8")
    assert "<html lang=\"es\">" in spanish
    assert "Ingeniera Backend Sénior" in spanish
    assert "../assets/files/resume-es.pdf" in spanish


@pytest.mark.integration
def test_missing_website_template(tmp_path):
    """Test a theme without index.html.jinja is an input error."""
    generator = WebsiteGenerator(templates_dir=tmp_path, theme="none", assets_dir=_assets(tmp_path))
    with pytest.raises(FileNotFoundError):
        generator.generate(load_resume_data(FIXTURES_PATH), tmp_path / "public")


@pytest.mark.integration
def test_website_template_undefined_name(tmp_path):
    """Test undefined names in the website template are reported."""
    theme_dir = tmp_path / "templates" / "bad"
    theme_dir.mkdir(parents=True)
    (theme_dir / "index.html.jinja").write_text("{{ data.nothing_here }}", encoding="utf-8")
    generator = WebsiteGenerator(tmp_path / "templates", "bad", _assets(tmp_path))

    with pytest.raises(TemplateSyntaxError):
        generator.generate(load_resume_data(FIXTURES_PATH), tmp_path / "public")
