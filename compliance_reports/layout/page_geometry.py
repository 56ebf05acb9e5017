"""Page Geometry Module

Page dimensions, margins and the shared text style used by the layout engine.

Coordinates follow the PDF convention: points, origin at the bottom-left
corner of the page, y growing upwards. The cursor therefore starts near the
top of the page and moves *down* (y decreases) as content is written.
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple

from ..config import (
    BOX_PADDING,
    COLORS,
    COLUMN_GUTTER,
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_MARGIN_BOTTOM,
    DEFAULT_MARGIN_TOP,
    DEFAULT_MARGIN_X,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    TABLE_CELL_PADDING,
    TABLE_MIN_ROW_HEIGHT,
)
from .font_manager import FontHandle, FontSet

Color = Tuple[float, float, float]


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page size and margins.

    Attributes:
        width, height: Page size in points
        margin_x: Left and right margin
        margin_top: Top margin; y never rises above height - margin_top
        margin_bottom: Bottom margin; y never falls below it
    """

    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT
    margin_x: float = DEFAULT_MARGIN_X
    margin_top: float = DEFAULT_MARGIN_TOP
    margin_bottom: float = DEFAULT_MARGIN_BOTTOM

    @property
    def content_left(self) -> float:
        return self.margin_x

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin_x

    @property
    def top_limit(self) -> float:
        """Highest y the cursor may occupy."""
        return self.height - self.margin_top

    @property
    def center_x(self) -> float:
        return self.width / 2

    def centered_x(self, text_width: float) -> float:
        """x position that centres a run of the given width on the page."""
        return self.center_x - text_width / 2


@dataclass
class LayoutStyle:
    """Fonts, sizes and colours shared by all content items of a document.

    Attributes:
        fonts: Regular/bold font pair
        font_size: Body text size
        line_height: Vertical advance per text line
        box_padding: Inner padding of bordered boxes
        column_gutter: Gap between the two columns of a two-column row
        cell_padding: Inner padding of table cells
        min_row_height: Floor for table row height
        colors: Palette name → RGB tuple
    """

    fonts: FontSet
    font_size: float = DEFAULT_FONT_SIZE
    line_height: float = DEFAULT_LINE_HEIGHT
    box_padding: float = BOX_PADDING
    column_gutter: float = COLUMN_GUTTER
    cell_padding: float = TABLE_CELL_PADDING
    min_row_height: float = TABLE_MIN_ROW_HEIGHT
    colors: Dict[str, Color] = field(default_factory=lambda: dict(COLORS))

    def font(self, bold: bool = False) -> FontHandle:
        return self.fonts.get(bold)

    def color(self, name: str) -> Color:
        return self.colors.get(name, self.colors["text"])

    def text_width(self, text: str, bold: bool = False, size: float = None) -> float:
        return self.font(bold).width_of_text_at_size(text, size or self.font_size)
