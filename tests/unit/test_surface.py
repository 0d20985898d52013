"""Unit tests for drawing surface cursor, page and footer behaviour."""

import pytest
from PIL import Image
from PyPDF2 import PdfReader

from vitae.contexts.rendering.geometry import A4
from vitae.contexts.rendering.pdf_surface import OutputWriteError, PdfSurface
from vitae.contexts.rendering.surface import (
    CELL_MARGIN_MM,
    PageBreakOp,
    PageEndOp,
    RecordingSurface,
)
from vitae.contexts.rendering.text_metrics import FontSpec
from vitae.contexts.templating.template_model import BLACK, LIGHT_GRAY, Align
from vitae.utils.pdf_processing import page_count, page_text


@pytest.mark.unit
def test_set_y_negative_measures_from_bottom():
    """Test set_y(-15) lands 15mm above the bottom edge, at the left margin."""
    surface = RecordingSurface()
    surface.add_page()
    surface.set_xy(80, 40)
    surface.set_y(-15)
    assert surface.get_xy() == (A4.left_margin, 282)


@pytest.mark.unit
def test_add_page_resets_cursor():
    """Test a new page starts at the top-left margins."""
    surface = RecordingSurface()
    surface.add_page()
    surface.set_xy(50, 200)
    surface.add_page()

    assert surface.get_xy() == (10, 10)
    assert surface.page_number == 2


@pytest.mark.unit
def test_footer_runs_before_each_page_end():
    """Test the footer callback runs once per page, before the page is finished."""
    surface = RecordingSurface()
    calls = []
    surface.register_footer(lambda: calls.append(surface.page_number))

    surface.add_page()
    surface.add_page()
    surface.close()

    assert calls == [1, 2]
    assert surface.ops == [PageBreakOp(1), PageEndOp(1, (10, 10)), PageBreakOp(2), PageEndOp(2, (10, 10))]


@pytest.mark.unit
def test_close_is_idempotent_and_adds_missing_page():
    """Test closing an unused surface produces one page, and closing twice is harmless."""
    surface = RecordingSurface()
    surface.close()
    surface.close()

    assert surface.ops_of(PageBreakOp) == [PageBreakOp(1)]
    assert len(surface.ops_of(PageEndOp)) == 1


@pytest.mark.unit
def test_add_page_after_close_fails():
    """Test a closed surface rejects new pages."""
    surface = RecordingSurface()
    surface.close()
    with pytest.raises(RuntimeError):
        surface.add_page()


@pytest.mark.unit
def test_split_lines_respects_cell_margin():
    """Test wrapping uses the width minus the cell margins."""
    surface = RecordingSurface()
    font = FontSpec(10)
    text = "alpha beta gamma delta epsilon zeta eta theta"

    lines = surface.split_lines(text, 30, font)
    assert lines == surface.split_lines(text, 30, font)
    assert len(lines) >= len(surface.split_lines(text, 30 + 2 * CELL_MARGIN_MM, font))


@pytest.mark.unit
def test_pdf_surface_translates_to_cp1252(tmp_path):
    """Test characters outside cp1252 are replaced, others kept."""
    surface = PdfSurface(tmp_path / "out.pdf")
    assert surface.translate_text("Educación – café") == "Educación – café"
    assert surface.translate_text("日本") == "??"


@pytest.mark.unit
def test_pdf_surface_draws_every_primitive(tmp_path):
    """Test text, lines, images and links are written to the PDF."""
    image_path = tmp_path / "dot.png"
    Image.new("RGB", (4, 2), (0, 0, 255)).save(image_path)
    output = tmp_path / "primitives.pdf"
    font = FontSpec(10)

    surface = PdfSurface(output)
    surface.add_page()
    for i, align in enumerate(Align):
        lines = [f"{align.value} aligned words", "closing line"]
        surface.draw_text_block(10, 10 + 20 * i, 190, lines, 5, font, align, BLACK)
    surface.draw_line(10, 100, 200, 100, 0.5, LIGHT_GRAY)
    surface.draw_image(image_path, 10, 110, 40, 20)
    surface.add_link(10, 10, 190, 10, "https://example.com")
    surface.close()

    assert page_count(output) == 1
    text = page_text(output)[0]
    assert "center aligned words" in text
    assert "closing line" in text

    annotations = [a.get_object() for a in PdfReader(str(output)).pages[0]["/Annots"]]
    assert [a["/A"]["/URI"] for a in annotations] == ["https://example.com"]


@pytest.mark.unit
def test_justify_leaves_paragraph_endings_unstretched():
    """Test only lines inside a paragraph are stretched."""
    lines = ["a b", "c d", "e f", "g h"]
    assert [PdfSurface._stretches(i, lines, frozenset({1})) for i in range(4)] == [
        True,
        False,
        True,
        False,
    ]
    assert not PdfSurface._stretches(0, ["single"], frozenset())


@pytest.mark.unit
def test_pdf_surface_unwritable_path(tmp_path):
    """Test failing to save the PDF raises OutputWriteError."""
    surface = PdfSurface(tmp_path / "missing" / "out.pdf")
    surface.add_page()
    with pytest.raises(OutputWriteError):
        surface.close()
