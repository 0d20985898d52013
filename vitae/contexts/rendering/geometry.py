"""
Page geometry for the grid layout.

All lengths are millimeters measured from the top-left corner of the page.
The usable width (page width minus left/right margins) is split into a fixed
number of grid units; a column spanning n units is n * (usable_width / grid_columns) wide.
"""

from dataclasses import dataclass

# A4 portrait
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0

GRID_COLUMNS = 12


@dataclass(frozen=True)
class PageGeometry:
    """
    Fixed page size, margins and grid.

    Attributes:
        width: Page width
        height: Page height
        left_margin: Left margin (first column starts here)
        top_margin: Top margin (cursor position after a page break)
        right_margin: Right margin
        bottom_margin: Bottom margin; rows may not extend into it
        grid_columns: Number of grid units across the usable width
        footer_offset: Distance of the footer row from the bottom edge
    """

    width: float = A4_WIDTH_MM
    height: float = A4_HEIGHT_MM
    left_margin: float = 10.0
    top_margin: float = 10.0
    right_margin: float = 10.0
    bottom_margin: float = 20.0
    grid_columns: int = GRID_COLUMNS
    footer_offset: float = 15.0

    @property
    def usable_width(self) -> float:
        return self.width - self.left_margin - self.right_margin

    @property
    def grid_unit(self) -> float:
        """Width of a single grid unit."""
        return self.usable_width / self.grid_columns

    @property
    def printable_bottom(self) -> float:
        """Lowest Y a row may reach without triggering a page break."""
        return self.height - self.bottom_margin

    @property
    def footer_y(self) -> float:
        return self.height - self.footer_offset

    def column_width(self, units: int) -> float:
        return self.grid_unit * units

    def fits(self, start_y: float, height: float) -> bool:
        """True if a row of the given height starting at start_y ends within the printable area."""
        return start_y + height <= self.printable_bottom


A4 = PageGeometry()
