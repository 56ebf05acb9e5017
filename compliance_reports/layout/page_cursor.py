"""Page Cursor Module

Tracks the current page and vertical write position, and decides when a new
page is needed.

The cursor has two states: writing (normal) and a transient page break that
is resolved immediately: the abandoned page gets its footer, a new page is
appended, its header is painted and the cursor resets to the first line
below the header. Callers must measure a block *before* painting it and call
ensure_space() with the full height; blocks are never broken mid-paint.
"""
import logging
from typing import Callable, List, Optional

from ..exceptions import LayoutOverflowError
from .document import Document, Page
from .page_geometry import PageGeometry

logger = logging.getLogger(__name__)

# Tolerance for float comparisons on y positions
EPSILON = 1e-6


class PageCursor:
    """Current page and y position of a document being written.

    Invariant: after any write, geometry.margin_bottom <= y <= geometry.top_limit.

    Attributes:
        document: Document receiving new pages
        geometry: Page size and margins
        header: Optional object with draw(page) -> content top y
        footer: Optional object with draw(page)
        page: Page currently being written
        y: Current vertical position (top of the next block)
        content_top: y at which content starts on the current page
    """

    def __init__(self, document: Document, geometry: PageGeometry, header=None, footer=None):
        self.document = document
        self.geometry = geometry
        self.header = header
        self.footer = footer
        self.page: Optional[Page] = None
        self.y: float = geometry.top_limit
        self.content_top: float = geometry.top_limit
        self.finalized = False
        self._page_break_listeners: List[Callable[[Page], None]] = []

    @property
    def page_number(self) -> int:
        return self.page.number if self.page else 0

    @property
    def remaining(self) -> float:
        """Height left above the bottom margin on the current page."""
        return self.y - self.geometry.margin_bottom

    @property
    def capacity(self) -> float:
        """Height available for content on a freshly started page."""
        return self.content_top - self.geometry.margin_bottom

    @property
    def at_page_top(self) -> bool:
        """True if nothing has been written below the header yet."""
        return abs(self.y - self.content_top) < EPSILON

    def start(self) -> Page:
        """Append the first page and paint its header."""
        if self.page is not None:
            return self.page
        self._open_page()
        return self.page

    def add_page_break_listener(self, listener: Callable[[Page], None]) -> None:
        """Register a callback invoked with each page opened by a page break."""
        self._page_break_listeners.append(listener)

    def remove_page_break_listener(self, listener: Callable[[Page], None]) -> None:
        if listener in self._page_break_listeners:
            self._page_break_listeners.remove(listener)

    def fits(self, height: float) -> bool:
        return height <= self.remaining + EPSILON

    def ensure_space(self, height: float) -> bool:
        """
        Make sure a block of the given height fits below the cursor.

        Breaks the page when the block does not fit. A block taller than a
        whole page is left to the caller on a fresh page (breaking again
        would only produce blank pages).

        Args:
            height: Full height of the block about to be painted

        Returns:
            True if a page break happened
        """
        self.start()
        if self.fits(height) or self.at_page_top:
            return False
        self.break_page()
        return True

    def break_page(self) -> Page:
        """Finish the current page and continue on a new one."""
        self.start()
        self._paint_footer(self.page)
        logger.debug("Page break after page %d", self.page.number)
        self._open_page()
        for listener in list(self._page_break_listeners):
            listener(self.page)
        # Rows repeated by listeners (table headers) count as page top
        self.content_top = self.y
        return self.page

    def advance(self, height: float) -> None:
        """
        Move the cursor down after painting a block.

        Raises:
            LayoutOverflowError: If the move would cross the bottom margin
        """
        if height > self.remaining + EPSILON:
            raise LayoutOverflowError(height, self.remaining)
        self.y = max(self.y - height, self.geometry.margin_bottom)

    def skip_to_bottom(self) -> None:
        """Consume the rest of the page without painting anything."""
        self.y = self.geometry.margin_bottom

    def finalize(self) -> None:
        """Paint the footer of the last page. Safe to call more than once."""
        if self.finalized:
            return
        self.start()
        self._paint_footer(self.page)
        self.finalized = True

    def _open_page(self) -> None:
        self.page = self.document.add_page()
        top = self.geometry.top_limit
        if self.header is not None and "header" not in self.page.decorations:
            top = min(self.header.draw(self.page), top)
            self.page.decorations.add("header")
        self.content_top = max(top, self.geometry.margin_bottom)
        self.y = self.content_top

    def _paint_footer(self, page: Page) -> None:
        if self.footer is None or "footer" in page.decorations:
            return
        self.footer.draw(page)
        page.decorations.add("footer")
