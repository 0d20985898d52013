"""Unit tests for page geometry and text measurement."""

import pytest

from vitae.contexts.rendering.geometry import A4, PageGeometry
from vitae.contexts.rendering.text_metrics import (
    FontSpec,
    chars_per_line,
    estimate_line_count,
    estimate_text_height,
    line_height,
    paragraph_ends,
    string_width,
    wrap_paragraphs,
    wrap_text,
)
from vitae.contexts.templating.template_model import FontStyle

LOREM = (
    "Designed and operated the ingestion platform, cutting end-to-end latency in half "
    "while onboarding forty new data producers across three business units."
)


@pytest.mark.unit
def test_a4_geometry():
    """Test A4 grid constants."""
    assert A4.usable_width == 190
    assert A4.grid_unit == pytest.approx(190 / 12)
    assert A4.column_width(12) == pytest.approx(190)
    assert A4.printable_bottom == 277
    assert A4.footer_y == 282


@pytest.mark.unit
def test_fits_boundary():
    """Test a row ending exactly at the printable bottom fits; one more unit does not."""
    assert A4.fits(10, 267)
    assert not A4.fits(10, 268)
    assert PageGeometry(height=100, bottom_margin=10).fits(50, 40)


@pytest.mark.unit
def test_font_names():
    """Test core font resolution per style."""
    assert FontSpec(10).name == "Helvetica"
    assert FontSpec(10, FontStyle.BOLD).name == "Helvetica-Bold"
    assert FontSpec(10, FontStyle.BOLD_ITALIC, "Times").name == "Times-BoldItalic"
    assert FontSpec(10).size_mm == pytest.approx(3.527)


@pytest.mark.unit
def test_line_height():
    """Test drawing line height uses factor 1.3."""
    assert line_height(12) == pytest.approx(12 * 0.3527 * 1.3)


@pytest.mark.unit
def test_wrap_text_fits_width():
    """Test every wrapped line fits the width and no words are lost."""
    font = FontSpec(10)
    lines = wrap_text(LOREM, 60, font)

    assert len(lines) > 1
    assert all(string_width(line, font) <= 60 for line in lines)
    assert " ".join(lines).split() == LOREM.split()


@pytest.mark.unit
def test_wrap_text_keeps_explicit_newlines():
    """Test paragraphs wrap independently and blank paragraphs stay as empty lines."""
    lines = wrap_text("first\n\nsecond", 100, FontSpec(10))
    assert lines == ["first", "", "second"]


@pytest.mark.unit
def test_wrap_text_breaks_long_words():
    """Test a word wider than the column is split across lines."""
    font = FontSpec(10)
    lines = wrap_text("x" * 200, 20, font)

    assert len(lines) > 1
    assert "".join(lines) == "x" * 200


@pytest.mark.unit
def test_chars_per_line_at_least_one():
    """Test tiny columns still hold one character per line."""
    assert chars_per_line(72, 0.5) == 1


@pytest.mark.unit
def test_estimate_line_count():
    """Test paragraph-wise line estimate."""
    assert estimate_line_count("", 10, 100) == 0
    assert estimate_line_count("   ", 10, 100) == 0
    assert estimate_line_count("a\nb", 10, 100) == 2
    assert estimate_line_count("a\n\nb", 10, 100) == 3


@pytest.mark.unit
def test_estimate_is_idempotent():
    """Test repeated estimates are identical."""
    first = estimate_text_height(LOREM, 10, 6)
    assert all(estimate_text_height(LOREM, 10, 6) == first for _ in range(5))


@pytest.mark.unit
@pytest.mark.parametrize("size", [6, 8, 10, 12, 16, 24])
def test_line_count_monotonic_in_font_size(size):
    """Test increasing font size never decreases the estimated line count."""
    width = A4.column_width(4)
    assert estimate_line_count(LOREM, size + 1, width) >= estimate_line_count(LOREM, size, width)


@pytest.mark.unit
@pytest.mark.parametrize("units", range(2, 13))
def test_line_count_monotonic_in_width(units):
    """Test decreasing column width never decreases the estimated line count."""
    wide = estimate_line_count(LOREM, 10, A4.column_width(units))
    narrow = estimate_line_count(LOREM, 10, A4.column_width(units - 1))
    assert narrow >= wide


@pytest.mark.unit
def test_estimate_text_height_formula():
    """Test height = lines * size * 0.3527 * 1.2 + 1.0."""
    lines = estimate_line_count(LOREM, 10, A4.column_width(6))
    expected = lines * 10 * 0.3527 * 1.2 + 1.0
    assert estimate_text_height(LOREM, 10, 6) == pytest.approx(expected)
    assert estimate_text_height("", 10, 6) == 0.0


@pytest.mark.unit
@pytest.mark.parametrize(
    "style,name",
    [
        (FontStyle.NORMAL, "Helvetica"),
        (FontStyle.BOLD, "Helvetica-Bold"),
        (FontStyle.ITALIC, "Helvetica-Oblique"),
        (FontStyle.BOLD_ITALIC, "Helvetica-BoldOblique"),
    ],
)
def test_font_spec_names(style, name):
    """Test each style maps to its Helvetica core font."""
    assert FontSpec(10, style).name == name


@pytest.mark.unit
def test_paragraph_ends_mark_closing_lines():
    """Test the closing line of each wrapped paragraph is found in the flat line list."""
    paragraphs = wrap_paragraphs(LOREM + "\n\nShort tail", 60, FontSpec(10))
    lines = wrap_text(LOREM + "\n\nShort tail", 60, FontSpec(10))

    ends = paragraph_ends(paragraphs)

    assert len(paragraphs[0]) > 1
    assert ends == {len(paragraphs[0]) - 1, len(paragraphs[0]), len(lines) - 1}
    assert lines[-1] == "Short tail"
