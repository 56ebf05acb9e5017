"""Content Items Module

Self-measuring drawable units used by the section renderer.

Every item implements the same measure-then-paint capability:

- measure(style, width) -> height the item needs at that width
- paint(page, style, x, top, width) -> draw with its top edge at ``top``
- split(style, width, available) -> (head, tail) or None

The renderer always measures an item in full before painting it, so boxes
and table rows can size their backgrounds before any line inside them is
drawn. split() lets blocks taller than a page continue on the next page at
a line boundary.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .page_geometry import LayoutStyle
from .text_wrapper import wrap_paragraphs, wrap_text

# Distance from the bottom of a line box to the text baseline
BASELINE_OFFSET = 4

# Below this share of the available width a label gets its own line
MAX_INLINE_LABEL_SHARE = 0.6


def baseline(top: float, index: int, line_height: float) -> float:
    """Baseline y of the index-th line of a block whose top edge is at top."""
    return top - (index + 1) * line_height + BASELINE_OFFSET


@dataclass(frozen=True)
class Run:
    """A piece of text at a horizontal offset within a line."""

    text: str
    dx: float = 0.0
    bold: bool = False
    size: Optional[float] = None
    color: str = "text"


Row = List[Run]


class ContentItem(ABC):
    """Base class for measurable, paintable content."""

    # Vertical gap left after the item (not part of its measured height)
    space_after: float = 0.0

    @abstractmethod
    def measure(self, style: LayoutStyle, width: float) -> float:
        """Height needed to paint the item at the given width."""

    @abstractmethod
    def paint(self, page, style: LayoutStyle, x: float, top: float, width: float) -> None:
        """Paint the item with its top-left corner at (x, top)."""

    def split(self, style: LayoutStyle, width: float, available: float) -> Optional[Tuple["ContentItem", "ContentItem"]]:
        """Split into a head fitting in ``available`` and the remaining tail."""
        return None


class Spacer(ContentItem):
    """Empty vertical space."""

    def __init__(self, height: float):
        self.height = height

    def measure(self, style, width):
        return self.height

    def paint(self, page, style, x, top, width):
        pass


class Rule(ContentItem):
    """Horizontal divider line spanning the content width."""

    def __init__(self, thickness: float = 1.0, color: str = "accent", height: float = 10.0):
        self.thickness = thickness
        self.color = color
        self.height = height

    def measure(self, style, width):
        return self.height

    def paint(self, page, style, x, top, width):
        page.draw_rect(x, top - 2 - self.thickness, width, self.thickness, fill=style.color(self.color))


class SectionTitle(ContentItem):
    """Fixed-height title bar: shaded background with bold text."""

    def __init__(self, text: str, height: float = 24.0, size: float = 12.0, fill: str = "section_bg"):
        self.text = text
        self.height = height
        self.size = size
        self.fill = fill
        self.space_after = 6.0

    def measure(self, style, width):
        return self.height

    def paint(self, page, style, x, top, width):
        page.draw_rect(x, top - self.height, width, self.height, fill=style.color(self.fill))
        text_y = top - self.height + (self.height - self.size) / 2 + 2
        page.draw_text(self.text, x + 10, text_y, style.font(bold=True), self.size, style.color("text"))


class LineItem(ContentItem):
    """Text laid out as rows of runs, one row per line height.

    Subclasses implement layout_rows(). Splitting happens between rows.
    """

    def __init__(self, line_height: Optional[float] = None, space_after: float = 0.0):
        self.line_height = line_height
        self.space_after = space_after

    @abstractmethod
    def layout_rows(self, style: LayoutStyle, width: float) -> List[Row]:
        """Rows of runs at the given width."""

    def _line_height(self, style: LayoutStyle) -> float:
        return self.line_height or style.line_height

    def measure(self, style, width):
        return len(self.layout_rows(style, width)) * self._line_height(style)

    def paint(self, page, style, x, top, width):
        line_height = self._line_height(style)
        for index, row in enumerate(self.layout_rows(style, width)):
            y = baseline(top, index, line_height)
            for run in row:
                if not run.text:
                    continue
                page.draw_text(run.text, x + run.dx, y, style.font(run.bold),
                               run.size or style.font_size, style.color(run.color))

    def split(self, style, width, available):
        rows = self.layout_rows(style, width)
        line_height = self._line_height(style)
        count = int((available + 1e-6) // line_height)
        if count < 1 or count >= len(rows):
            return None
        head = PrewrappedLines(rows[:count], line_height=self.line_height)
        tail = PrewrappedLines(rows[count:], line_height=self.line_height, space_after=self.space_after)
        return head, tail


class PrewrappedLines(LineItem):
    """Rows already laid out (the pieces of a split item)."""

    def __init__(self, rows: List[Row], line_height: Optional[float] = None, space_after: float = 0.0):
        super().__init__(line_height=line_height, space_after=space_after)
        self.rows = rows

    def layout_rows(self, style, width):
        return self.rows


class Label(LineItem):
    """Wrapped text block, optionally bold, indented or aligned."""

    def __init__(self, text, bold: bool = False, size: Optional[float] = None, color: str = "text",
                 align: str = "left", indent: float = 0.0, line_height: Optional[float] = None,
                 space_after: float = 0.0, keep_breaks: bool = False):
        super().__init__(line_height=line_height, space_after=space_after)
        self.text = text
        self.bold = bold
        self.size = size
        self.color = color
        self.align = align
        self.indent = indent
        self.keep_breaks = keep_breaks

    def layout_rows(self, style, width):
        size = self.size or style.font_size
        font = style.font(self.bold)
        available = width - self.indent
        wrap = wrap_paragraphs if self.keep_breaks else wrap_text
        rows = []
        for line in wrap(self.text, font, size, available):
            dx = self.indent
            if self.align != "left":
                slack = max(available - font.width_of_text_at_size(line, size), 0)
                dx += slack / 2 if self.align == "center" else slack
            rows.append([Run(line, dx, self.bold, size, self.color)])
        return rows


class KeyValue(LineItem):
    """Bold "Label: " followed by its value on the same baseline.

    Continuation lines of the value are aligned under the value column, not
    under the label. A label wider than most of the available width gets
    its own line(s) and the value wraps underneath at full width.
    """

    def __init__(self, label: str, value, separator: str = ": ", value_color: str = "text",
                 value_bold: bool = False, space_after: float = 0.0):
        super().__init__(space_after=space_after)
        self.label = label
        self.value = value
        self.separator = separator
        self.value_color = value_color
        self.value_bold = value_bold

    def layout_rows(self, style, width):
        label_text = f"{self.label}{self.separator}"
        size = style.font_size
        label_width = style.text_width(label_text, bold=True)
        value_font = style.font(self.value_bold)
        value = "" if self.value is None else self.value

        if label_width <= width * MAX_INLINE_LABEL_SHARE:
            lines = wrap_text(value, value_font, size, width - label_width)
            rows = [[Run(label_text, 0, True), Run(lines[0], label_width, self.value_bold, color=self.value_color)]]
            rows.extend([Run(line, label_width, self.value_bold, color=self.value_color)] for line in lines[1:])
            return rows

        rows = [[Run(line, 0, True)] for line in wrap_text(label_text.rstrip(), style.font(True), size, width)]
        if str(value).strip():
            rows.extend([Run(line, 0, self.value_bold, color=self.value_color)]
                        for line in wrap_text(value, value_font, size, width))
        return rows


class Paragraph(LineItem):
    """Bold title line followed by the wrapped body.

    Renders nothing (zero height) when the body is empty, so optional
    free-text answers leave no gap.
    """

    def __init__(self, title: str, body, space_after: float = 4.0):
        super().__init__(space_after=space_after)
        self.title = title
        self.body = body

    def measure(self, style, width):
        if not self.body:
            return 0.0
        return super().measure(style, width)

    def layout_rows(self, style, width):
        if not self.body:
            return []
        rows = [[Run(line, 0, True)] for line in wrap_text(self.title, style.font(True), style.font_size, width)]
        rows.extend([Run(line)] for line in wrap_paragraphs(self.body, style.font(), style.font_size, width))
        return rows


class TwoColumnRow(LineItem):
    """Two label/value cells side by side, separated by the column gutter.

    The row is as tall as the taller cell, so uneven content never clips.
    """

    def __init__(self, left: Tuple[str, object], right: Optional[Tuple[str, object]] = None,
                 space_after: float = 0.0):
        super().__init__(space_after=space_after)
        self.left = left
        self.right = right

    def column_width(self, style: LayoutStyle, width: float) -> float:
        return (width - style.column_gutter) / 2

    def layout_rows(self, style, width):
        column_width = self.column_width(style, width)
        left_rows = KeyValue(*self.left).layout_rows(style, column_width)
        right_rows = KeyValue(*self.right).layout_rows(style, column_width) if self.right else []
        offset = column_width + style.column_gutter

        rows = []
        for index in range(max(len(left_rows), len(right_rows))):
            row = list(left_rows[index]) if index < len(left_rows) else []
            if index < len(right_rows):
                row.extend(Run(r.text, r.dx + offset, r.bold, r.size, r.color) for r in right_rows[index])
            rows.append(row)
        return rows


@dataclass(frozen=True)
class TableCell:
    text: object = ""
    bold: bool = False
    align: str = "left"
    color: str = "text"


CellLike = Union[str, TableCell, None]


def _as_cell(cell: CellLike) -> TableCell:
    if isinstance(cell, TableCell):
        return cell
    return TableCell("" if cell is None else cell)


class TableRow(ContentItem):
    """One table row; every cell wraps independently to its column width.

    Row height = max wrapped line count x line height + vertical padding,
    floored at the style's minimum row height.
    """

    def __init__(self, cells: Sequence[CellLike], fractions: Sequence[float], fill: Optional[str] = "white",
                 rule: Optional[str] = "row_rule", min_height: Optional[float] = None,
                 lines: Optional[List[List[str]]] = None):
        self.cells = [_as_cell(c) for c in cells]
        self.fractions = list(fractions)
        self.fill = fill
        self.rule = rule
        self.min_height = min_height
        self._lines = lines

    def column_widths(self, width: float) -> List[float]:
        return [f * width for f in self.fractions]

    def cell_lines(self, style: LayoutStyle, width: float) -> List[List[str]]:
        if self._lines is not None:
            return self._lines
        lines = []
        for cell, column_width in zip(self.cells, self.column_widths(width)):
            inner = max(column_width - 2 * style.cell_padding, 1)
            lines.append(wrap_text(cell.text, style.font(cell.bold), style.font_size, inner))
        return lines

    def _min_height(self, style: LayoutStyle) -> float:
        return style.min_row_height if self.min_height is None else self.min_height

    def measure(self, style, width):
        line_count = max((len(l) for l in self.cell_lines(style, width)), default=1)
        return max(line_count * style.line_height + 2 * style.cell_padding, self._min_height(style))

    def paint(self, page, style, x, top, width):
        height = self.measure(style, width)
        if self.fill:
            page.draw_rect(x, top - height, width, height, fill=style.color(self.fill))

        cell_x = x
        for cell, lines, column_width in zip(self.cells, self.cell_lines(style, width), self.column_widths(width)):
            font = style.font(cell.bold)
            for index, line in enumerate(lines):
                if not line:
                    continue
                if cell.align == "center":
                    line_x = cell_x + (column_width - font.width_of_text_at_size(line, style.font_size)) / 2
                else:
                    line_x = cell_x + style.cell_padding
                y = baseline(top - style.cell_padding, index, style.line_height)
                page.draw_text(line, line_x, y, font, style.font_size, style.color(cell.color))
            cell_x += column_width

        if self.rule:
            page.draw_rect(x, top - height, width, 1, fill=style.color(self.rule))

    def split(self, style, width, available):
        lines = self.cell_lines(style, width)
        count = int((available - 2 * style.cell_padding + 1e-6) // style.line_height)
        longest = max(len(l) for l in lines)
        if count < 1 or count >= longest:
            return None
        head = TableRow(self.cells, self.fractions, self.fill, self.rule, 0, [l[:count] for l in lines])
        tail = TableRow(self.cells, self.fractions, self.fill, self.rule, 0, [l[count:] or [""] for l in lines])
        return head, tail


class BoxRow(ABC):
    """A row inside a Box, occupying a whole number of line units."""

    @abstractmethod
    def line_count(self, style: LayoutStyle, width: float) -> int:
        """Number of line-height units the row occupies."""

    @abstractmethod
    def paint(self, page, style: LayoutStyle, x: float, top: float, width: float) -> None:
        """Paint the row with its top edge at top."""

    def split(self, style, width, units: int) -> Optional[Tuple["BoxRow", "BoxRow"]]:
        return None


class BoxText(BoxRow):
    """Wrapped text lines inside a box."""

    def __init__(self, text, bold: bool = False, color: str = "text", lines: Optional[List[str]] = None):
        self.text = text
        self.bold = bold
        self.color = color
        self._lines = lines

    def lines(self, style: LayoutStyle, width: float) -> List[str]:
        if self._lines is not None:
            return self._lines
        return wrap_paragraphs(self.text, style.font(self.bold), style.font_size, width)

    def line_count(self, style, width):
        return len(self.lines(style, width))

    def paint(self, page, style, x, top, width):
        font = style.font(self.bold)
        for index, line in enumerate(self.lines(style, width)):
            if line:
                page.draw_text(line, x, baseline(top, index, style.line_height), font,
                               style.font_size, style.color(self.color))

    def split(self, style, width, units):
        lines = self.lines(style, width)
        if units < 1 or units >= len(lines):
            return None
        return (BoxText(self.text, self.bold, self.color, lines[:units]),
                BoxText(self.text, self.bold, self.color, lines[units:]))


class BoxChoice(BoxRow):
    """Yes/No button pair with the selected answer highlighted.

    The selected button is also striped and double-bordered so the answer
    stays readable when printed in black and white.
    """

    BUTTON_WIDTH = 64
    BUTTON_HEIGHT = 18
    BUTTON_GAP = 16
    UNITS = 2

    def __init__(self, value: Optional[str]):
        self.value = (value or "").strip().lower() or None

    def line_count(self, style, width):
        return self.UNITS

    def paint(self, page, style, x, top, width):
        button_y = top - 6 - self.BUTTON_HEIGHT
        symbols = style.fonts.bold.unicode
        yes_label = "✓ Yes" if symbols else "Yes"
        no_label = "✗ No" if symbols else "No"
        self._button(page, style, x, button_y, yes_label, self.value == "yes", "success", "success_bg", vertical=True)
        self._button(page, style, x + self.BUTTON_WIDTH + self.BUTTON_GAP, button_y, no_label,
                     self.value == "no", "danger", "danger_bg", vertical=False)

    def _button(self, page, style, x, y, label, selected, color, background, vertical):
        w, h = self.BUTTON_WIDTH, self.BUTTON_HEIGHT
        page.draw_rect(x, y, w, h,
                       fill=style.color(background if selected else "white"),
                       stroke=style.color(color if selected else "divider"))
        page.draw_text(label, x + 8, y + 4, style.font(True), 10,
                       style.color(color if selected else "subtle"))
        if not selected:
            return
        stripe = style.color("stripe")
        if vertical:
            sx = x + 2
            while sx < x + w - 2:
                page.draw_rect(sx, y + 2, 1, h - 4, fill=stripe)
                sx += 4
        else:
            sy = y + 2
            while sy < y + h - 2:
                page.draw_rect(x + 2, sy, w - 4, 1, fill=stripe)
                sy += 4
        page.draw_rect(x + 1, y + 1, w - 2, h - 2, stroke=style.color(color))


class Box(ContentItem):
    """Bordered, shaded panel holding rows of text and answer buttons.

    Height = total line units x line height + 2 x padding. The background
    and border are painted before any row, sized from that measurement.
    """

    def __init__(self, rows: List[BoxRow], fill: str = "box_bg", border: str = "divider",
                 padding: Optional[float] = None, space_after: float = 12.0):
        self.rows = rows
        self.fill = fill
        self.border = border
        self.padding = padding
        self.space_after = space_after

    def _padding(self, style: LayoutStyle) -> float:
        return style.box_padding if self.padding is None else self.padding

    def inner_width(self, style: LayoutStyle, width: float) -> float:
        return width - 2 * self._padding(style)

    def line_units(self, style: LayoutStyle, width: float) -> int:
        inner = self.inner_width(style, width)
        return sum(row.line_count(style, inner) for row in self.rows)

    def measure(self, style, width):
        return self.line_units(style, width) * style.line_height + 2 * self._padding(style)

    def paint(self, page, style, x, top, width):
        height = self.measure(style, width)
        padding = self._padding(style)
        inner = self.inner_width(style, width)
        page.draw_rect(x, top - height, width, height, fill=style.color(self.fill))
        page.draw_rect(x, top - height, width, height, stroke=style.color(self.border))

        row_top = top - padding
        for row in self.rows:
            row.paint(page, style, x + padding, row_top, inner)
            row_top -= row.line_count(style, inner) * style.line_height

    def split(self, style, width, available):
        padding = self._padding(style)
        inner = self.inner_width(style, width)
        units = int((available - 2 * padding + 1e-6) // style.line_height)
        if units < 1 or units >= self.line_units(style, width):
            return None

        head: List[BoxRow] = []
        for index, row in enumerate(self.rows):
            count = row.line_count(style, inner)
            if count <= units:
                head.append(row)
                units -= count
                continue
            tail = list(self.rows[index + 1:])
            parts = row.split(style, inner, units)
            if parts is not None:
                head.append(parts[0])
                tail.insert(0, parts[1])
            else:
                tail.insert(0, row)
            break
        else:
            return None

        if not head:
            return None
        return (Box(head, self.fill, self.border, self.padding, space_after=0.0),
                Box(tail, self.fill, self.border, self.padding, self.space_after))
