"""
PDF drawing surface backed by a reportlab canvas.

The layout engine works in millimeters from the top-left corner; reportlab works
in points from the bottom-left corner. Conversion happens here and nowhere else.
"""

from pathlib import Path
from typing import FrozenSet, List, Optional

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas as pdf_canvas

from vitae.contexts.rendering.geometry import A4, PageGeometry
from vitae.contexts.rendering.logger import _log_debug, _log_error
from vitae.contexts.rendering.surface import CELL_MARGIN_MM, DrawingSurface, PathLike
from vitae.contexts.rendering.text_metrics import FontSpec
from vitae.contexts.templating.template_model import Align, Color

# Core PDF fonts only cover this encoding
OUTPUT_ENCODING = "cp1252"

# Baseline offset below the middle of a line, as a fraction of the font size
BASELINE_FACTOR = 0.3


class OutputWriteError(OSError):
    """Raised when the output document cannot be written."""


def _rgb(color: Color):
    return color.red / 255, color.green / 255, color.blue / 255


class PdfSurface(DrawingSurface):
    """
    Drawing surface writing a PDF file.

    The file is written when close() is called.
    """

    def __init__(
        self,
        output_path: Path,
        geometry: PageGeometry = A4,
        title: Optional[str] = None,
        author: Optional[str] = None,
    ):
        super().__init__(geometry)
        self.output_path = Path(output_path)
        self.canvas = pdf_canvas.Canvas(
            str(self.output_path), pagesize=(geometry.width * mm, geometry.height * mm)
        )
        if title:
            self.canvas.setTitle(self.translate_text(title))
        if author:
            self.canvas.setAuthor(self.translate_text(author))
            self.canvas.setCreator(self.translate_text(author))

    def _to_pdf_y(self, y: float) -> float:
        """Top-based mm to bottom-based points."""
        return (self.geometry.height - y) * mm

    def translate_text(self, text: str) -> str:
        return text.encode(OUTPUT_ENCODING, "replace").decode(OUTPUT_ENCODING)

    def draw_text_block(
        self,
        x: float,
        y: float,
        width: float,
        lines: List[str],
        line_height: float,
        font: FontSpec,
        align: Align,
        color: Color,
        paragraph_ends: FrozenSet[int] = frozenset(),
    ) -> None:
        c = self.canvas
        c.saveState()
        c.setFillColorRGB(*_rgb(color))
        c.setFont(font.name, font.size)

        left = (x + CELL_MARGIN_MM) * mm
        right = (x + width - CELL_MARGIN_MM) * mm
        available = right - left

        for i, line in enumerate(lines):
            if not line:
                continue
            baseline = self._to_pdf_y(y + (i + 0.5) * line_height + BASELINE_FACTOR * font.size_mm)

            if align == Align.CENTER:
                c.drawCentredString((left + right) / 2, baseline, line)
            elif align == Align.RIGHT:
                c.drawRightString(right, baseline, line)
            elif align == Align.JUSTIFY and self._stretches(i, lines, paragraph_ends):
                gap = available - stringWidth(line, font.name, font.size)
                text = c.beginText(left, baseline)
                text.setFont(font.name, font.size)
                text.setWordSpace(max(gap, 0) / line.count(" "))
                text.textOut(line)
                c.drawText(text)
            else:
                c.drawString(left, baseline, line)

        c.restoreState()

    @staticmethod
    def _stretches(index: int, lines: List[str], paragraph_ends: FrozenSet[int]) -> bool:
        """Justified lines stretch unless they close a paragraph or the block."""
        if index in paragraph_ends or index == len(lines) - 1:
            return False
        return " " in lines[index]

    def draw_line(self, x1, y1, x2, y2, thickness, color) -> None:
        c = self.canvas
        c.saveState()
        c.setStrokeColorRGB(*_rgb(color))
        c.setLineWidth(thickness * mm)
        c.line(x1 * mm, self._to_pdf_y(y1), x2 * mm, self._to_pdf_y(y2))
        c.restoreState()

    def draw_image(self, path: PathLike, x: float, y: float, width: float, height: float) -> None:
        self.canvas.drawImage(
            str(path),
            x * mm,
            self._to_pdf_y(y + height),
            width=width * mm,
            height=height * mm,
            mask="auto",
        )

    def add_link(self, x, y, width, height, url) -> None:
        rect = (x * mm, self._to_pdf_y(y + height), (x + width) * mm, self._to_pdf_y(y))
        self.canvas.linkURL(url, rect, relative=0, thickness=0)

    def _end_page(self, page: int) -> None:
        _log_debug(f"Finished page {page}")
        self.canvas.showPage()

    def _finish(self) -> None:
        try:
            self.canvas.save()
        except OSError as e:
            _log_error(f"Failed to write PDF {self.output_path}: {e}")
            raise OutputWriteError(f"Failed to write PDF to {self.output_path}: {e}") from e
