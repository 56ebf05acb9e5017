"""Document Module

In-memory document model: an ordered list of pages, each holding an ordered
list of draw commands. Commands are replayed onto a ReportLab canvas only
when the document is serialized, which keeps layout decisions inspectable
and makes the output byte-for-byte reproducible.
"""
import io
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Set, Tuple, Union

import pandas as pd
from reportlab.pdfgen import canvas as pdfcanvas

from ..config import COLORS, PAGE_SIZE
from .font_manager import FontHandle, FontSet

logger = logging.getLogger(__name__)

Color = Tuple[float, float, float]


@dataclass(frozen=True)
class TextRun:
    text: str
    x: float
    y: float
    font_name: str
    size: float
    color: Color


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[Color] = None
    stroke: Optional[Color] = None
    stroke_width: float = 1.0


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    width: float = 1.0


@dataclass(frozen=True)
class ImageDraw:
    image: Any  # LogoImage
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PageNumberText:
    """Text holding {number} and {total}, resolved once the page count is final.

    x is the left edge, or the centre when align is "center".
    """

    template: str
    x: float
    y: float
    font: Any  # FontHandle
    size: float
    color: Color
    align: str = "left"

    def resolve(self, number: int, total: int) -> TextRun:
        text = self.template.format(number=number, total=total)
        x = self.x
        if self.align == "center":
            x -= self.font.width_of_text_at_size(text, self.size) / 2
        return TextRun(text, x, self.y, self.font.name, self.size, self.color)


DrawCommand = Union[TextRun, Rect, Line, ImageDraw, PageNumberText]


class Page:
    """A fixed-size drawable surface.

    Attributes:
        number: 1-based page number
        width, height: Page size in points
        commands: Draw commands in paint order
        decorations: Names of decorations already painted ("header", "footer")
    """

    def __init__(self, number: int, width: float, height: float):
        self.number = number
        self.width = width
        self.height = height
        self.commands: List[DrawCommand] = []
        self.decorations: Set[str] = set()

    def draw_text(self, text: str, x: float, y: float, font: FontHandle, size: float,
                  color: Color = COLORS["text"]) -> None:
        self.commands.append(TextRun(str(text), x, y, font.name, size, color))

    def draw_rect(self, x: float, y: float, width: float, height: float,
                  fill: Optional[Color] = None, stroke: Optional[Color] = None,
                  stroke_width: float = 1.0) -> None:
        self.commands.append(Rect(x, y, width, height, fill, stroke, stroke_width))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float,
                  color: Color = COLORS["divider"], width: float = 1.0) -> None:
        self.commands.append(Line(x1, y1, x2, y2, color, width))

    def draw_image(self, image, x: float, y: float, width: float, height: float) -> None:
        self.commands.append(ImageDraw(image, x, y, width, height))

    def draw_page_number(self, template: str, x: float, y: float, font: FontHandle, size: float,
                         color: Color = COLORS["text"], align: str = "left") -> None:
        """Queue text that needs the final page count (see Document.resolve_page_numbers)."""
        self.commands.append(PageNumberText(template, x, y, font, size, color, align))

    def texts(self) -> List[str]:
        """Text of every text run, in paint order."""
        return [c.text for c in self.commands if isinstance(c, TextRun)]

    def text_runs(self) -> List[TextRun]:
        return [c for c in self.commands if isinstance(c, TextRun)]

    def rects(self) -> List[Rect]:
        return [c for c in self.commands if isinstance(c, Rect)]

    def __repr__(self) -> str:
        return f"Page(number={self.number}, commands={len(self.commands)})"


class Document:
    """Ordered pages plus the fonts and metadata of one report.

    Created once per export and discarded after save().
    """

    def __init__(self, fonts: FontSet, page_size: Tuple[float, float] = PAGE_SIZE,
                 title: str = "", author: str = ""):
        self.fonts = fonts
        self.page_width, self.page_height = page_size
        self.title = title
        self.author = author
        self.pages: List[Page] = []

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_page(self) -> Page:
        page = Page(len(self.pages) + 1, self.page_width, self.page_height)
        self.pages.append(page)
        return page

    def all_text(self) -> List[str]:
        """Text of every run on every page."""
        return [text for page in self.pages for text in page.texts()]

    def resolve_page_numbers(self) -> None:
        """Turn queued page-number text into text runs now that the page count is known."""
        total = self.page_count
        for page in self.pages:
            page.commands = [
                c.resolve(page.number, total) if isinstance(c, PageNumberText) else c
                for c in page.commands
            ]

    def save(self) -> bytes:
        """
        Serialize the document to PDF bytes.

        The canvas runs in invariant mode, so identical pages produce
        identical bytes (no creation timestamp or random document id).

        Returns:
            PDF file content
        """
        buffer = io.BytesIO()
        c = pdfcanvas.Canvas(buffer, pagesize=(self.page_width, self.page_height), invariant=1)
        if self.title:
            c.setTitle(self.title)
        if self.author:
            c.setAuthor(self.author)
        self.resolve_page_numbers()

        for page in self.pages:
            c.setPageSize((page.width, page.height))
            for command in page.commands:
                self._replay(c, command)
            c.showPage()

        c.save()
        pdf_bytes = buffer.getvalue()
        buffer.close()
        logger.debug("Serialized %d pages (%d bytes)", self.page_count, len(pdf_bytes))
        return pdf_bytes

    @staticmethod
    def _replay(c, command: DrawCommand) -> None:
        if isinstance(command, TextRun):
            c.setFillColorRGB(*command.color)
            c.setFont(command.font_name, command.size)
            c.drawString(command.x, command.y, command.text)
        elif isinstance(command, Rect):
            if command.fill is not None:
                c.setFillColorRGB(*command.fill)
            if command.stroke is not None:
                c.setStrokeColorRGB(*command.stroke)
                c.setLineWidth(command.stroke_width)
            c.rect(command.x, command.y, command.width, command.height,
                   stroke=1 if command.stroke is not None else 0,
                   fill=1 if command.fill is not None else 0)
        elif isinstance(command, Line):
            c.setStrokeColorRGB(*command.color)
            c.setLineWidth(command.width)
            c.line(command.x1, command.y1, command.x2, command.y2)
        elif isinstance(command, ImageDraw):
            c.drawImage(command.image.reader, command.x, command.y,
                        width=command.width, height=command.height, mask='auto')

    def layout_summary(self) -> pd.DataFrame:
        """
        Summarize page contents for previewing a layout.

        Returns:
            DataFrame with one row per page: page number, text runs,
            rectangles, images and the first text on the page
        """
        rows = []
        for page in self.pages:
            texts = page.texts()
            rows.append({
                "Page": page.number,
                "Text runs": len(texts),
                "Rectangles": len(page.rects()),
                "Images": sum(1 for c in page.commands if isinstance(c, ImageDraw)),
                "First text": texts[0] if texts else "",
            })
        return pd.DataFrame(rows, columns=["Page", "Text runs", "Rectangles", "Images", "First text"])
