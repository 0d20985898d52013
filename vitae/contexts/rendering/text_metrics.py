"""
Text measurement for the grid layout.

Two kinds of measurement live here:
- Wrapping with real font metrics (reportlab's core-font width tables), used by
  drawing surfaces to split a text block into lines.
- A quick height estimate from an average character width, used by templates to
  pick row heights before layout. It is an approximation tuned for Helvetica.
"""

import math
from dataclasses import dataclass
from typing import FrozenSet, List

from reportlab.pdfbase.pdfmetrics import stringWidth

from vitae.contexts.rendering.geometry import A4, PageGeometry
from vitae.contexts.templating.template_model import FontStyle

POINTS_TO_MM = 0.3527

# Line height used when drawing text blocks
LINE_HEIGHT_FACTOR = 1.3

# Constants for the pre-layout height estimate
ESTIMATE_LINE_HEIGHT_FACTOR = 1.2
CHAR_WIDTH_FACTOR = 0.55
ESTIMATE_PADDING_MM = 1.0

# Helvetica core font name for each style
FONT_VARIANTS = {
    FontStyle.NORMAL: "Helvetica",
    FontStyle.BOLD: "Helvetica-Bold",
    FontStyle.ITALIC: "Helvetica-Oblique",
    FontStyle.BOLD_ITALIC: "Helvetica-BoldOblique",
}


def points_to_mm(points: float) -> float:
    return points * POINTS_TO_MM


def line_height(font_size: float, factor: float = LINE_HEIGHT_FACTOR) -> float:
    """Line height in mm for a font size in points."""
    return points_to_mm(font_size) * factor


@dataclass(frozen=True)
class FontSpec:
    """Resolved font for a text block. Size is in points."""

    size: float
    style: FontStyle = FontStyle.NORMAL

    @property
    def name(self) -> str:
        """Core font name as understood by reportlab (e.g., "Helvetica-Bold")."""
        return FONT_VARIANTS[self.style]

    @property
    def size_mm(self) -> float:
        return points_to_mm(self.size)


def string_width(text: str, font: FontSpec) -> float:
    """Rendered width of text in mm."""
    return points_to_mm(stringWidth(text, font.name, font.size))


def _break_word(word: str, width: float, font: FontSpec) -> List[str]:
    """Split a word wider than the column into pieces that fit (at least one char each)."""
    pieces = []
    current = ""
    for char in word:
        if current and string_width(current + char, font) > width:
            pieces.append(current)
            current = char
        else:
            current += char
    if current:
        pieces.append(current)
    return pieces


def wrap_paragraph(paragraph: str, width: float, font: FontSpec) -> List[str]:
    """
    Greedy word-wrap for a single paragraph based on rendered width.

    A blank paragraph still occupies one (empty) line.
    """
    words = paragraph.split()
    if not words:
        return [""]

    lines: List[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if string_width(candidate, font) <= width:
            current = candidate
            continue
        if current:
            lines.append(current)
        if string_width(word, font) <= width:
            current = word
        else:
            *full, current = _break_word(word, width, font)
            lines.extend(full)
    if current:
        lines.append(current)
    return lines


def wrap_paragraphs(text: str, width: float, font: FontSpec) -> List[List[str]]:
    """Wrap each newline-separated paragraph of text to a width in mm."""
    return [wrap_paragraph(paragraph, width, font) for paragraph in text.split("\n")]


def wrap_text(text: str, width: float, font: FontSpec) -> List[str]:
    """Wrap text to a width in mm, honouring explicit newlines."""
    return [line for paragraph in wrap_paragraphs(text, width, font) for line in paragraph]


def paragraph_ends(paragraphs: List[List[str]]) -> FrozenSet[int]:
    """
    Indices of the last line of each paragraph in the flattened line list.

    Examples:
        >>> sorted(paragraph_ends([["a", "b"], [""], ["c"]]))
        [1, 2, 3]
    """
    ends = set()
    index = -1
    for paragraph in paragraphs:
        index += len(paragraph)
        ends.add(index)
    return frozenset(ends)


def chars_per_line(font_size: float, width: float) -> int:
    """Estimated characters per line for a font size (points) and width (mm); at least 1."""
    char_width = points_to_mm(font_size) * CHAR_WIDTH_FACTOR
    return max(1, int(width / char_width))


def estimate_line_count(text: str, font_size: float, width: float) -> int:
    """
    Estimate wrapped line count from an average character width.

    Each newline-delimited paragraph wraps independently; empty paragraphs count as one line.
    Blank text has zero lines.
    """
    text = text.strip()
    if not text:
        return 0

    per_line = chars_per_line(font_size, width)
    lines = 0
    for paragraph in text.split("\n"):
        if not paragraph:
            lines += 1
            continue
        lines += math.ceil(len(paragraph) / per_line)
    return lines


def estimate_text_height(
    text: str, font_size: float, col_units: int, geometry: PageGeometry = A4
) -> float:
    """
    Estimate the height (mm) a text column needs.

    Args:
        text: Text content
        font_size: Font size in points
        col_units: Column width in grid units
        geometry: Page geometry used to convert grid units to mm

    Returns:
        lines * line height + padding, or 0 for blank text
    """
    lines = estimate_line_count(text, font_size, geometry.column_width(col_units))
    if lines == 0:
        return 0.0
    return lines * line_height(font_size, ESTIMATE_LINE_HEIGHT_FACTOR) + ESTIMATE_PADDING_MM
