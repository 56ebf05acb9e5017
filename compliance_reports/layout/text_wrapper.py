"""Text Wrapper Module

Greedy word wrapping against a font's width measurement.

Any object exposing ``width_of_text_at_size(text, size)`` can be used as the
font, which keeps these functions pure and easy to test in isolation.
"""
from typing import Any, List


def wrap_text(text: Any, font, size: float, max_width: float) -> List[str]:
    """
    Wrap text into lines no wider than max_width, packing whole words greedily.

    Whitespace is normalised (runs of spaces/newlines act as one separator).
    A single word wider than max_width is placed on its own line unmodified;
    it is never hyphenated or truncated.

    Args:
        text: Text to wrap (None and non-strings are coerced)
        font: Object with width_of_text_at_size(text, size)
        size: Font size in points
        max_width: Width budget in points

    Returns:
        List of lines; always at least one entry ([""] for empty input)

    Examples:
        >>> wrap_text("", font, 11, 100)
        ['']
    """
    if text is None:
        return [""]
    words = str(text).split()

    lines: List[str] = []
    line = ""
    for word in words:
        candidate = f"{line} {word}" if line else word
        if font.width_of_text_at_size(candidate, size) <= max_width:
            line = candidate
        else:
            if line:
                lines.append(line)
            line = word
    if line:
        lines.append(line)

    return lines or [""]


def wrap_paragraphs(text: Any, font, size: float, max_width: float) -> List[str]:
    """
    Wrap text while keeping explicit line breaks as hard breaks.

    Blank source lines are preserved as empty lines so free-text answers keep
    their paragraph spacing.

    Args:
        text: Multi-line text
        font: Object with width_of_text_at_size(text, size)
        size: Font size in points
        max_width: Width budget in points

    Returns:
        List of lines; always at least one entry
    """
    if text is None:
        return [""]
    source_lines = str(text).strip().splitlines()
    if not source_lines:
        return [""]

    lines: List[str] = []
    for source_line in source_lines:
        lines.extend(wrap_text(source_line, font, size, max_width))
    return lines
