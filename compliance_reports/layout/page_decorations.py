"""Page Decorations Module

Per-page header and footer renderers.

Each decoration records itself in ``page.decorations`` and drawing it a
second time on the same page is a no-op. Headers return the y position at
which content may start below them.
"""
import logging
from datetime import datetime
from typing import Optional

from ..utils import format_date
from .document import Page
from .image_loader import LogoImage
from .page_geometry import LayoutStyle, PageGeometry

logger = logging.getLogger(__name__)


class PageDecoration:
    """Base class: paint once per page."""

    key = "decoration"

    def __init__(self, style: LayoutStyle, geometry: PageGeometry):
        self.style = style
        self.geometry = geometry

    def draw(self, page: Page):
        if self.key not in page.decorations:
            self._paint(page)
            page.decorations.add(self.key)
        return self.content_top(page)

    def content_top(self, page: Page) -> Optional[float]:
        return None

    def _paint(self, page: Page) -> None:
        raise NotImplementedError


class CenteredHeader(PageDecoration):
    """Stacked, centred header band: logo, company, report title, subtitle.

    The band is 100pt tall, or 120pt when a logo is shown, and is closed by
    an accent divider. Content starts 14pt below the band.
    """

    key = "header"
    BAND_HEIGHT = 100
    BAND_HEIGHT_WITH_LOGO = 120
    LOGO_WIDTH = 72
    LOGO_MAX_HEIGHT = 40
    CONTENT_GAP = 14

    def __init__(self, style, geometry, company_name: str, title: str,
                 subtitle: Optional[str] = None, logo: Optional[LogoImage] = None):
        super().__init__(style, geometry)
        self.company_name = company_name or "Company"
        self.title = title
        self.subtitle = subtitle
        self.logo = logo

    @property
    def band_height(self) -> float:
        return self.BAND_HEIGHT_WITH_LOGO if self.logo else self.BAND_HEIGHT

    def content_top(self, page):
        return page.height - self.band_height - self.CONTENT_GAP

    def _paint(self, page):
        style = self.style
        band = self.band_height
        center_x = page.width / 2
        page.draw_rect(0, page.height - band, page.width, band, fill=style.color("header_bg"))

        y = page.height - 16
        if self.logo:
            logo_w = self.LOGO_WIDTH
            logo_h = self.logo.scaled_height(logo_w)
            if logo_h > self.LOGO_MAX_HEIGHT:
                logo_h = self.LOGO_MAX_HEIGHT
                logo_w = logo_h / self.logo.aspect
            page.draw_image(self.logo, center_x - logo_w / 2, y - logo_h, logo_w, logo_h)
            y -= logo_h + 6

        for text, size, bold, color, gap in (
            (self.company_name, 13, True, "text", 6),
            (self.title, 12, True, "text", 4),
            (self.subtitle, 11, False, "subtle", 0),
        ):
            if not text:
                continue
            width = style.text_width(text, bold=bold, size=size)
            page.draw_text(text, center_x - width / 2, y - size, style.font(bold), size, style.color(color))
            y -= size + gap

        page.draw_rect(self.geometry.margin_x, page.height - band - 1,
                       self.geometry.content_width, 2, fill=style.color("accent"))


class LeftAlignedHeader(PageDecoration):
    """Left-aligned header: company name, report title and generation date.

    date_format controls the "Generated:" line; include %H:%M to show the time.

    With a logo the logo sits at the left edge and the text moves to its
    right; the band grows to the taller of the two.
    """

    key = "header"
    TOP_OFFSET = 40
    LOGO_SIZE = 48
    LOGO_GAP = 12

    def __init__(self, style, geometry, company_name: str, title: str,
                 generated_at: Optional[datetime] = None, logo: Optional[LogoImage] = None,
                 date_format: str = "%d-%m-%Y"):
        super().__init__(style, geometry)
        self.company_name = company_name or "Company"
        self.title = title
        self.generated_at = generated_at
        self.date_format = date_format
        self.logo = logo

    def _logo_box(self):
        width = height = self.LOGO_SIZE
        if self.logo.aspect >= 1:
            width = height / self.logo.aspect
        else:
            height = width * self.logo.aspect
        return width, height

    def _text_lines(self):
        lines = [(self.company_name, 16, True, "text", 20), (self.title, 14, True, "text", 18)]
        if self.generated_at is not None:
            lines.append((f"Generated: {format_date(self.generated_at, self.date_format)}", 10, False, "subtle", 14))
        return lines

    def _band_height(self) -> float:
        text_height = sum(line[4] for line in self._text_lines())
        if self.logo:
            return max(text_height, self._logo_box()[1])
        return text_height

    def content_top(self, page):
        return page.height - self.TOP_OFFSET - self._band_height() - 16

    def _paint(self, page):
        style = self.style
        top = page.height - self.TOP_OFFSET
        x = self.geometry.margin_x

        if self.logo:
            logo_w, logo_h = self._logo_box()
            page.draw_image(self.logo, x, top - logo_h, logo_w, logo_h)
            x += logo_w + self.LOGO_GAP

        y = top
        for text, size, bold, color, advance in self._text_lines():
            page.draw_text(text, x, y - size, style.font(bold), size, style.color(color))
            y -= advance

        divider_y = top - self._band_height() - 6
        page.draw_rect(self.geometry.margin_x, divider_y, self.geometry.content_width, 1,
                       fill=style.color("divider"))


class PageFooter(PageDecoration):
    """Divider rule and page number below the bottom margin, plus an optional note.

    page_format may use {number} and {total}; a format with {total} is
    resolved by the document once the last page exists. With align="center"
    the page line is centred and drawn at the note size.
    """

    key = "footer"
    OFFSET = 24

    def __init__(self, style, geometry, note: Optional[str] = None,
                 page_format: str = "Page {number}", align: str = "left"):
        super().__init__(style, geometry)
        self.note = note
        self.page_format = page_format
        self.align = align

    def _paint(self, page):
        style = self.style
        footer_y = self.geometry.margin_bottom - self.OFFSET
        page.draw_line(self.geometry.margin_x, footer_y + 12, self.geometry.margin_x + self.geometry.content_width,
                       footer_y + 12, style.color("divider"))

        size = 8 if self.align == "center" else 10
        x = page.width / 2 if self.align == "center" else self.geometry.margin_x
        if "{total}" in self.page_format:
            page.draw_page_number(self.page_format, x, footer_y, style.font(), size, style.color("subtle"),
                                  align=self.align)
        else:
            text = self.page_format.format(number=page.number)
            if self.align == "center":
                x -= style.text_width(text, size=size) / 2
            page.draw_text(text, x, footer_y, style.font(), size, style.color("subtle"))

        if self.note:
            width = style.text_width(self.note, size=8)
            page.draw_text(self.note, self.geometry.centered_x(width), footer_y - 12, style.font(), 8,
                           style.color("subtle"))
