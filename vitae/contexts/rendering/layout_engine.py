"""
Layout Engine

Places template rows on pages of a drawing surface.

Row algorithm:
1. startY = cursor Y.
2. If startY + declared height goes past the printable bottom, start a new page
   and set startY to the top margin.
3. Render columns left to right from the left margin, each column n grid units wide.
4. Move the cursor to startY + declared height.

Page breaks and cursor advancement use the declared row height. The measured
content height (wrapped text, scaled images) is reported per row in the
LayoutResult so templates can be corrected, but it never moves the cursor.

The footer row, if any, is drawn on every page at a fixed offset from the bottom
edge, with the cursor saved and restored around it.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger

from vitae.contexts.rendering.geometry import A4, PageGeometry
from vitae.contexts.rendering.logger import CONTEXT_PREFIX
from vitae.contexts.rendering.surface import DrawingSurface
from vitae.contexts.rendering.text_metrics import FontSpec, line_height, paragraph_ends
from vitae.contexts.templating.template_model import (
    BLACK,
    LIGHT_GRAY,
    Col,
    ImageProp,
    LineProp,
    Row,
    Template,
    TextProp,
)


@dataclass(frozen=True)
class RowPlacement:
    """
    Where a row ended up.

    Attributes:
        index: Position of the row in the template
        page: Page the row was drawn on (1-based)
        y: Top of the row on that page
        declared_height: Height from the template
        measured_height: Tallest column content after wrapping/scaling
    """

    index: int
    page: int
    y: float
    declared_height: float
    measured_height: float

    @property
    def overflow(self) -> bool:
        return self.measured_height > self.declared_height


@dataclass
class LayoutResult:
    page_count: int
    placements: List[RowPlacement] = field(default_factory=list)

    @property
    def overflowing_rows(self) -> List[RowPlacement]:
        return [p for p in self.placements if p.overflow]


class LayoutEngine:
    """
    Renders a Template onto a DrawingSurface.

    Args:
        geometry: Page geometry; must match the surface's
        log: Logger used for render diagnostics (defaults to loguru's logger)
    """

    def __init__(self, geometry: PageGeometry = A4, log=None):
        self.geometry = geometry
        self.log = log if log is not None else logger

    def render(self, template: Template, surface: DrawingSurface) -> LayoutResult:
        """
        Draw every row of the template, then close the surface.

        Returns:
            LayoutResult with page count and per-row placements
        """
        if surface.page_number == 0:
            surface.add_page()

        if template.footer is not None:
            footer = template.footer
            surface.register_footer(lambda: self._render_footer(footer, surface))

        placements = [
            self._render_row(index, row, surface) for index, row in enumerate(template.rows)
        ]

        page_count = surface.page_number
        surface.close()

        result = LayoutResult(page_count=page_count, placements=placements)
        for placement in result.overflowing_rows:
            self.log.debug(
                f"{CONTEXT_PREFIX} Row {placement.index} content ({placement.measured_height:.1f}mm) "
                f"exceeds declared height ({placement.declared_height:.1f}mm)"
            )
        return result

    def _render_row(self, index: int, row: Row, surface: DrawingSurface) -> RowPlacement:
        _, start_y = surface.get_xy()

        if not self.geometry.fits(start_y, row.height):
            surface.add_page()
            start_y = self.geometry.top_margin

        measured = self._render_cols(row, start_y, surface)
        surface.set_xy(self.geometry.left_margin, start_y + row.height)

        return RowPlacement(
            index=index,
            page=surface.page_number,
            y=start_y,
            declared_height=row.height,
            measured_height=measured,
        )

    def _render_footer(self, footer: Row, surface: DrawingSurface) -> None:
        saved_x, saved_y = surface.get_xy()
        surface.set_y(-self.geometry.footer_offset)
        _, footer_y = surface.get_xy()
        self._render_cols(footer, footer_y, surface)
        surface.set_xy(saved_x, saved_y)

    def _render_cols(self, row: Row, start_y: float, surface: DrawingSurface) -> float:
        """Render a row's columns at start_y; returns the tallest measured column."""
        current_x = self.geometry.left_margin
        measured = 0.0
        for col in row.cols:
            width = self.geometry.column_width(col.width)
            surface.set_xy(current_x, start_y)
            measured = max(measured, self._render_col(col, current_x, start_y, width, row, surface))
            current_x += width
        return measured

    def _render_col(
        self, col: Col, x: float, y: float, width: float, row: Row, surface: DrawingSurface
    ) -> float:
        content = col.content
        if isinstance(content, TextProp):
            return self._render_text(content, x, y, width, surface)
        if isinstance(content, LineProp):
            return self._render_line(content, x, y, width, row, surface)
        if isinstance(content, ImageProp):
            return self._render_image(content, x, y, width, surface)
        return 0.0

    def _render_text(
        self, text: TextProp, x: float, y: float, width: float, surface: DrawingSurface
    ) -> float:
        font = FontSpec(size=text.size, style=text.style)
        lh = line_height(text.size)
        paragraphs = surface.split_paragraphs(surface.translate_text(text.content), width, font)
        lines = [line for paragraph in paragraphs for line in paragraph]

        surface.draw_text_block(
            x, y, width, lines, lh, font, text.align, text.color or BLACK,
            paragraph_ends=paragraph_ends(paragraphs),
        )
        height = len(lines) * lh

        # The whole block is one clickable region
        if text.hyperlink:
            surface.add_link(x, y, width, height, text.hyperlink)
        return height

    def _render_line(
        self, line: LineProp, x: float, y: float, width: float, row: Row, surface: DrawingSurface
    ) -> float:
        line_y = y + row.height / 2
        surface.draw_line(x, line_y, x + width, line_y, line.thickness, line.color or LIGHT_GRAY)
        return line.thickness

    def _render_image(
        self, image: ImageProp, x: float, y: float, width: float, surface: DrawingSurface
    ) -> float:
        path = Path(image.path)
        if not path.is_file():
            self.log.warning(f"{CONTEXT_PREFIX} Image not found, skipping: {path}")
            return 0.0

        drawn_width = width * image.percent / 100 if image.percent > 0 else width
        if image.center:
            x += (width - drawn_width) / 2

        height = surface.image_height(path, drawn_width)
        surface.draw_image(path, x, y, drawn_width, height)
        return height


def render(
    template: Template, surface: DrawingSurface, geometry: Optional[PageGeometry] = None
) -> LayoutResult:
    """Render a template onto a surface with a default-configured LayoutEngine."""
    engine = LayoutEngine(geometry or surface.geometry)
    return engine.render(template, surface)
