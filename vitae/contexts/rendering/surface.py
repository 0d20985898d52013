"""
Drawing Surface

Abstract sink for positioned draw primitives and page-break signals. The layout
engine only talks to this interface, so it does not depend on a concrete output
format.

All coordinates are millimeters from the top-left corner of the page.

Surfaces own:
- a cursor (get_xy / set_xy / set_y)
- the page sequence (add_page / page_number / close)
- a footer callback, run at the end of every page before the page is finished
- text metrics (split_paragraphs / split_lines / translate_text) and image measurement

RecordingSurface keeps every primitive as a list of operations; it is used for
dry runs and tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, FrozenSet, List, Optional, Tuple, Union

from PIL import Image

from vitae.contexts.rendering.geometry import A4, PageGeometry
from vitae.contexts.rendering.text_metrics import FontSpec, wrap_paragraphs
from vitae.contexts.templating.template_model import Align, Color

# Horizontal padding inside a text cell, on each side
CELL_MARGIN_MM = 1.0

PathLike = Union[str, Path]


class DrawingSurface(ABC):
    """Base class for output surfaces driven by the layout engine."""

    def __init__(self, geometry: PageGeometry = A4):
        self.geometry = geometry
        self._x = geometry.left_margin
        self._y = geometry.top_margin
        self._page = 0
        self._footer: Optional[Callable[[], None]] = None
        self._closed = False

    # ---- Cursor -------------------------------------------------------------

    def get_xy(self) -> Tuple[float, float]:
        return (self._x, self._y)

    def set_xy(self, x: float, y: float) -> None:
        self._x = x
        self._y = y

    def set_y(self, y: float) -> None:
        """
        Move the cursor vertically and back to the left margin.

        A negative y is measured from the bottom edge of the page.
        """
        if y < 0:
            y = self.geometry.height + y
        self._x = self.geometry.left_margin
        self._y = y

    # ---- Pages --------------------------------------------------------------

    @property
    def page_number(self) -> int:
        """Current page (1-based); 0 before the first page is added."""
        return self._page

    @property
    def closed(self) -> bool:
        return self._closed

    def add_page(self) -> None:
        """Finish the current page (footer included) and start a new one at the top margin."""
        if self._closed:
            raise RuntimeError("Cannot add a page to a closed surface")
        if self._page > 0:
            self._finish_page()
        self._page += 1
        self._x = self.geometry.left_margin
        self._y = self.geometry.top_margin
        self._begin_page(self._page)

    def register_footer(self, callback: Optional[Callable[[], None]]) -> None:
        """Register a callback drawing the footer; it runs once per page."""
        self._footer = callback

    def close(self) -> None:
        """Finish the last page and finalize the output. Idempotent."""
        if self._closed:
            return
        if self._page == 0:
            self.add_page()
        self._finish_page()
        self._closed = True
        self._finish()

    def _finish_page(self) -> None:
        if self._footer is not None:
            self._footer()
        self._end_page(self._page)

    # ---- Metrics ------------------------------------------------------------

    def split_paragraphs(self, text: str, width: float, font: FontSpec) -> List[List[str]]:
        """Wrap each paragraph of text into lines fitting a cell of the given width."""
        return wrap_paragraphs(text, max(width - 2 * CELL_MARGIN_MM, 0.0), font)

    def split_lines(self, text: str, width: float, font: FontSpec) -> List[str]:
        return [line for paragraph in self.split_paragraphs(text, width, font) for line in paragraph]

    def translate_text(self, text: str) -> str:
        """Convert text to what the output encoding can represent."""
        return text

    def image_height(self, path: PathLike, width: float) -> float:
        """Height of an image drawn at the given width, keeping its aspect ratio."""
        with Image.open(path) as img:
            img_width, img_height = img.size
        return width * img_height / img_width

    # ---- Primitives ---------------------------------------------------------

    @abstractmethod
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
        """
        Draw pre-wrapped lines in a cell whose top-left corner is (x, y).

        paragraph_ends holds the indices of lines that close a paragraph; justified
        text leaves those lines unstretched.
        """

    @abstractmethod
    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, thickness: float, color: Color
    ) -> None:
        ...

    @abstractmethod
    def draw_image(self, path: PathLike, x: float, y: float, width: float, height: float) -> None:
        ...

    @abstractmethod
    def add_link(self, x: float, y: float, width: float, height: float, url: str) -> None:
        """Make a rectangular region clickable."""

    # ---- Hooks --------------------------------------------------------------

    def _begin_page(self, page: int) -> None:
        pass

    def _end_page(self, page: int) -> None:
        pass

    def _finish(self) -> None:
        pass


# =============================================================================
# Recording surface
# =============================================================================


@dataclass(frozen=True)
class PageBreakOp:
    """A new page was started."""

    page: int


@dataclass(frozen=True)
class PageEndOp:
    """A page was finished; cursor is the position after its footer ran."""

    page: int
    cursor: Tuple[float, float]


@dataclass(frozen=True)
class TextBlockOp:
    page: int
    x: float
    y: float
    width: float
    lines: Tuple[str, ...]
    line_height: float
    font: FontSpec
    align: Align
    color: Color
    paragraph_ends: FrozenSet[int] = frozenset()

    @property
    def height(self) -> float:
        return len(self.lines) * self.line_height


@dataclass(frozen=True)
class LineOp:
    page: int
    x1: float
    y1: float
    x2: float
    y2: float
    thickness: float
    color: Color


@dataclass(frozen=True)
class ImageOp:
    page: int
    path: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class LinkOp:
    page: int
    x: float
    y: float
    width: float
    height: float
    url: str


class RecordingSurface(DrawingSurface):
    """
    Surface that records draw operations instead of producing output.

    Attributes:
        ops: Every operation in the order it was issued
    """

    def __init__(self, geometry: PageGeometry = A4):
        super().__init__(geometry)
        self.ops: list = []

    def draw_text_block(
        self, x, y, width, lines, line_height, font, align, color, paragraph_ends=frozenset()
    ) -> None:
        self.ops.append(
            TextBlockOp(
                self._page, x, y, width, tuple(lines), line_height, font, align, color,
                frozenset(paragraph_ends),
            )
        )

    def draw_line(self, x1, y1, x2, y2, thickness, color) -> None:
        self.ops.append(LineOp(self._page, x1, y1, x2, y2, thickness, color))

    def draw_image(self, path, x, y, width, height) -> None:
        self.ops.append(ImageOp(self._page, str(path), x, y, width, height))

    def add_link(self, x, y, width, height, url) -> None:
        self.ops.append(LinkOp(self._page, x, y, width, height, url))

    def _begin_page(self, page: int) -> None:
        self.ops.append(PageBreakOp(page))

    def _end_page(self, page: int) -> None:
        self.ops.append(PageEndOp(page, self.get_xy()))

    def ops_of(self, op_type) -> list:
        """Recorded operations of one type, in order."""
        return [op for op in self.ops if isinstance(op, op_type)]

    def ops_on_page(self, page: int) -> list:
        return [op for op in self.ops if op.page == page]
