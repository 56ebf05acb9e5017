"""Section Renderer Module

Report-level drawing operations (section titles, key/value pairs, grids,
tables, bordered boxes) built on content items and the page cursor.

Every operation goes through place(), which measures an item in full before
painting it:

1. the item fits below the cursor: paint it and advance
2. it fits on a fresh page: break the page first, then paint
3. it is taller than a whole page: split it at a line boundary, paint the
   head, break, and continue with the tail
"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import BOX_GAP, SECTION_GAP, SECTION_TITLE_HEIGHT, SECTION_TITLE_SIZE, TABLE_MIN_ROW_HEIGHT
from ..utils import text_or_blank
from .content_items import (
    Box,
    BoxChoice,
    BoxRow,
    BoxText,
    ContentItem,
    KeyValue,
    Label,
    Paragraph,
    Rule,
    SectionTitle,
    Spacer,
    TableCell,
    TableRow,
    TwoColumnRow,
)
from .page_cursor import PageCursor
from .page_geometry import LayoutStyle

logger = logging.getLogger(__name__)

Pair = Tuple[str, object]


class SectionRenderer:
    """Draws report sections through a PageCursor.

    Attributes:
        cursor: Page cursor owning the current page and y position
        style: Shared fonts, sizes and colours
    """

    def __init__(self, cursor: PageCursor, style: LayoutStyle):
        self.cursor = cursor
        self.style = style

    @property
    def geometry(self):
        return self.cursor.geometry

    @property
    def content_width(self) -> float:
        return self.geometry.content_width

    def place(self, item: ContentItem) -> None:
        """
        Measure, paginate and paint a content item.

        Blocks taller than a page are split at line boundaries; items that
        cannot be split are painted on a fresh page and the rest of that
        page is consumed, so the cursor never leaves the content area.

        Args:
            item: Content item to place at the cursor
        """
        cursor = self.cursor
        cursor.start()
        x = self.geometry.content_left
        width = self.content_width

        while True:
            height = item.measure(self.style, width)
            if height <= 0:
                return

            if cursor.fits(height):
                item.paint(cursor.page, self.style, x, cursor.y, width)
                cursor.advance(height)
                break

            if height <= cursor.capacity and not cursor.at_page_top:
                cursor.break_page()
                continue

            parts = item.split(self.style, width, cursor.remaining)
            if parts is None:
                if not cursor.at_page_top:
                    cursor.break_page()
                    continue
                logger.warning(
                    "%s of height %.1f exceeds page capacity %.1f and cannot be split; clipping",
                    type(item).__name__, height, cursor.capacity,
                )
                item.paint(cursor.page, self.style, x, cursor.y, width)
                cursor.skip_to_bottom()
                return

            head, tail = parts
            logger.debug("Splitting %s across pages %d/%d", type(item).__name__,
                         cursor.page_number, cursor.page_number + 1)
            head.paint(cursor.page, self.style, x, cursor.y, width)
            cursor.advance(head.measure(self.style, width))
            cursor.break_page()
            item = tail

        if item.space_after:
            cursor.advance(min(item.space_after, cursor.remaining))

    # Basic operations

    def section_title(self, text: str) -> None:
        """Fixed-height title bar, kept on the same page as the next line."""
        self.cursor.ensure_space(SECTION_TITLE_HEIGHT + SECTION_GAP + self.style.line_height)
        self.place(SectionTitle(text, SECTION_TITLE_HEIGHT, SECTION_TITLE_SIZE))

    def key_value(self, label: str, value=None) -> None:
        self.place(KeyValue(label, text_or_blank(value)))

    def two_column_rows(self, pairs: Sequence[Pair]) -> None:
        """
        Lay out label/value pairs two per row.

        Args:
            pairs: (label, value) pairs; an odd trailing pair occupies the
                   left column alone
        """
        pairs = [(label, text_or_blank(value)) for label, value in pairs]
        for index in range(0, len(pairs), 2):
            right = pairs[index + 1] if index + 1 < len(pairs) else None
            self.place(TwoColumnRow(pairs[index], right))

    def paragraph(self, title: str, body) -> None:
        """Bold title then wrapped body; nothing at all when body is empty."""
        if not body:
            return
        self.place(Paragraph(title, text_or_blank(body)))

    def text(self, text, bold: bool = False, size: Optional[float] = None, color: str = "text",
             align: str = "left", indent: float = 0.0, space_after: float = 0.0) -> None:
        self.place(Label(text_or_blank(text), bold=bold, size=size, color=color, align=align,
                         indent=indent, space_after=space_after,
                         line_height=max(self.style.line_height, (size or 0) + 4)))

    def spacer(self, height: float) -> None:
        """Vertical gap; dropped at a page break instead of starting a new page."""
        self.cursor.start()
        if height <= 0 or self.cursor.at_page_top:
            return
        self.place(Spacer(min(height, self.cursor.remaining)))

    def divider(self) -> None:
        self.place(Rule())

    def page_break(self) -> None:
        """Continue on a fresh page unless the current one is still empty."""
        self.cursor.start()
        if not self.cursor.at_page_top:
            self.cursor.break_page()

    # Tables

    def table(self, headers: Sequence[str], rows: Iterable[Sequence[object]], fractions: Sequence[float],
              min_row_height: float = TABLE_MIN_ROW_HEIGHT, striped: bool = False,
              align: Optional[Sequence[str]] = None) -> None:
        """
        Draw a table whose header row repeats on every page it spans.

        Args:
            headers: Column headings
            rows: Row cell values (strings or TableCell)
            fractions: Column widths as fractions of the content width
            min_row_height: Floor for each row's height
            striped: Shade every other body row
            align: Optional per-column alignment ("left"/"center")
        """
        align = list(align or ["left"] * len(headers))
        header_row = TableRow(
            [TableCell(h, bold=True, align=a) for h, a in zip(headers, align)],
            fractions, fill="section_bg", rule="row_rule", min_height=min_row_height,
        )

        def repeat_header(page):
            self._paint_row(header_row)

        header_height = header_row.measure(self.style, self.content_width)
        self.cursor.ensure_space(header_height + min_row_height)
        self.place(header_row)
        self.cursor.add_page_break_listener(repeat_header)
        try:
            for index, cells in enumerate(rows):
                cells = [c if isinstance(c, TableCell) else TableCell(text_or_blank(c), align=a)
                         for c, a in zip(cells, align)]
                fill = "row_alt" if striped and index % 2 == 0 else "white"
                self.place(TableRow(cells, fractions, fill=fill, min_height=min_row_height))
        finally:
            self.cursor.remove_page_break_listener(repeat_header)

    def _paint_row(self, row: TableRow) -> None:
        height = row.measure(self.style, self.content_width)
        row.paint(self.cursor.page, self.style, self.geometry.content_left, self.cursor.y, self.content_width)
        self.cursor.advance(height)

    # Boxes

    def box(self, rows: List[BoxRow], padding: Optional[float] = None, gap: float = BOX_GAP) -> None:
        """Bordered, shaded panel sized from its rows before painting."""
        if not rows:
            return
        self.place(Box(rows, padding=padding, space_after=gap))

    def question_box(self, label: str, text) -> None:
        """Box with a bold question and its free-text answer."""
        self.box([BoxText(label, bold=True), BoxText(text_or_blank(text))])

    def choice_box(self, label: str, answer: Optional[str], extra_lines: Sequence[str] = ()) -> None:
        """Box with a bold question, Yes/No buttons and optional detail lines."""
        rows: List[BoxRow] = [BoxText(label, bold=True), BoxChoice(answer)]
        rows.extend(BoxText(line) for line in extra_lines if line)
        self.box(rows)

    def finish(self) -> None:
        """Paint the footer of the last page."""
        self.cursor.finalize()
