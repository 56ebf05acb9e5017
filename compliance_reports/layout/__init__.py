"""Document Layout Package

Manual PDF layout engine shared by all report builders:

Core Classes:
- Document / Page: In-memory pages of draw commands, serialized with ReportLab
- PageCursor: Current page and y position, page breaks
- SectionRenderer: Section titles, key/value pairs, grids, tables, boxes
- FontManager: Font resolution and the process-wide font cache

Decorations:
- CenteredHeader, LeftAlignedHeader, PageFooter

Helper Functions:
- wrap_text / wrap_paragraphs: Greedy word wrap
- load_logo: Fetch and decode a company logo
"""

from .document import Document, Page
from .font_manager import FontHandle, FontManager, FontSet, clear_font_cache
from .image_loader import LogoImage, load_logo
from .page_cursor import PageCursor
from .page_decorations import CenteredHeader, LeftAlignedHeader, PageFooter
from .page_geometry import LayoutStyle, PageGeometry
from .section_renderer import SectionRenderer
from .text_wrapper import wrap_paragraphs, wrap_text

# Expose public API
__all__ = [
    # Document model
    'Document',
    'Page',
    'PageGeometry',
    'LayoutStyle',

    # Layout
    'PageCursor',
    'SectionRenderer',
    'CenteredHeader',
    'LeftAlignedHeader',
    'PageFooter',

    # Assets
    'FontHandle',
    'FontSet',
    'FontManager',
    'clear_font_cache',
    'LogoImage',
    'load_logo',

    # Helper functions
    'wrap_text',
    'wrap_paragraphs',
]
