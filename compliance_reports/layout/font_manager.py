"""Font Manager Module

Handles font resolution, registration with ReportLab and the process-wide
font cache shared by every report builder.
"""
import hashlib
import io
import logging
import os
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import requests
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from ..config import BUNDLED_FONT_DIR, DEFAULT_HTTP_TIMEOUT
from ..exceptions import FontError, FontFetchError

logger = logging.getLogger(__name__)

# Registered fonts, keyed by font identity (source kind + location).
# Shared by all builders; each entry is initialised exactly once.
_FONT_CACHE: Dict[str, "FontHandle"] = {}
_CACHE_LOCK = threading.Lock()

SYSTEM_FONT_PATHS = [
    '/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf',
    '/usr/share/fonts/dejavu/DejaVuSans.ttf',
    '/usr/share/fonts/TTF/DejaVuSans.ttf',
    '/Library/Fonts/DejaVuSans.ttf',
    'C:\\Windows\\Fonts\\DejaVuSans.ttf',
]

SYSTEM_BOLD_FONT_PATHS = [
    '/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf',
    '/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf',
    '/usr/share/fonts/TTF/DejaVuSans-Bold.ttf',
    '/Library/Fonts/DejaVuSans-Bold.ttf',
    'C:\\Windows\\Fonts\\DejaVuSans-Bold.ttf',
]

STANDARD_REGULAR = 'Helvetica'
STANDARD_BOLD = 'Helvetica-Bold'


@dataclass(frozen=True)
class FontHandle:
    """A registered, measurable font.

    Attributes:
        name: Font name registered with ReportLab (used by the canvas)
        unicode: True for embedded TrueType fonts; False for the standard
                 Type1 fallback, which cannot draw symbols such as check marks
    """

    name: str
    unicode: bool = True

    def width_of_text_at_size(self, text: str, size: float) -> float:
        """Return the rendered width of text in points."""
        return pdfmetrics.stringWidth(text, self.name, size)


@dataclass(frozen=True)
class FontSet:
    """Regular and bold fonts used by one document."""

    regular: FontHandle
    bold: FontHandle

    def get(self, bold: bool = False) -> FontHandle:
        return self.bold if bold else self.regular


def _cached(key: str, loader: Callable[[], FontHandle]) -> FontHandle:
    with _CACHE_LOCK:
        handle = _FONT_CACHE.get(key)
        if handle is None:
            handle = loader()
            _FONT_CACHE[key] = handle
        return handle


def clear_font_cache() -> None:
    """Forget all cached font handles (fonts stay registered with ReportLab)."""
    with _CACHE_LOCK:
        _FONT_CACHE.clear()


class FontManager:
    """Resolves the regular/bold font pair for report documents.

    Resolution order for each weight:
    1. Remote TTF URL (if configured) - fetch failure is fatal
    2. DejaVu Sans in the configured font directory
    3. Bundled fonts/ directory
    4. System font paths (Linux, macOS, Windows)
    5. Standard Helvetica (no Unicode symbols)

    If only a regular TrueType font is found, or the regular font comes from a
    URL and no bold URL is set, the regular font is also used for bold text.

    Attributes:
        font_dir: Optional extra directory containing DejaVuSans*.ttf
        regular_url: Optional URL of the regular TTF
        bold_url: Optional URL of the bold TTF
    """

    def __init__(
        self,
        font_dir: Optional[str] = None,
        regular_url: Optional[str] = None,
        bold_url: Optional[str] = None,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
        search_system_paths: bool = True,
    ):
        self.font_dir = font_dir
        self.regular_url = regular_url
        self.bold_url = bold_url
        self.http_timeout = http_timeout
        self.session = session or requests.Session()
        self.search_system_paths = search_system_paths

    def get_fonts(self) -> FontSet:
        """
        Resolve (or fetch from cache) the regular and bold fonts.

        Returns:
            FontSet with regular and bold handles

        Raises:
            FontFetchError: If a configured font URL cannot be fetched
            FontError: If font bytes cannot be registered with ReportLab
        """
        regular = self._resolve(self.regular_url, self._candidate_paths(bold=False))
        if regular is None:
            logger.warning(
                "No TrueType font found; falling back to Helvetica "
                "(check marks and non-Latin text will not render)"
            )
            return FontSet(
                regular=_cached(f"std:{STANDARD_REGULAR}", lambda: FontHandle(STANDARD_REGULAR, unicode=False)),
                bold=_cached(f"std:{STANDARD_BOLD}", lambda: FontHandle(STANDARD_BOLD, unicode=False)),
            )

        if self.regular_url and not self.bold_url:
            # A remote regular font is never paired with a local bold from another family
            return FontSet(regular=regular, bold=regular)

        bold = self._resolve(self.bold_url, self._candidate_paths(bold=True))
        if bold is None:
            logger.warning("Bold font not found, using regular font for bold text")
            bold = regular
        return FontSet(regular=regular, bold=bold)

    def _candidate_paths(self, bold: bool) -> List[str]:
        filename = 'DejaVuSans-Bold.ttf' if bold else 'DejaVuSans.ttf'
        paths = []
        if self.font_dir:
            paths.append(os.path.join(self.font_dir, filename))
        paths.append(os.path.join(BUNDLED_FONT_DIR, filename))
        if self.search_system_paths:
            paths.extend(SYSTEM_BOLD_FONT_PATHS if bold else SYSTEM_FONT_PATHS)
        return paths

    def _resolve(self, url: Optional[str], paths: List[str]) -> Optional[FontHandle]:
        if url:
            return _cached(f"url:{url}", lambda: self._load_from_url(url))

        for path in paths:
            if os.path.exists(path):
                full_path = os.path.abspath(path)
                logger.debug("Using font file %s", full_path)
                return _cached(f"file:{full_path}", lambda: self._load_from_file(full_path))
        return None

    def _load_from_url(self, url: str) -> FontHandle:
        logger.info("Fetching font from %s", url)
        try:
            response = self.session.get(url, timeout=self.http_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FontFetchError(url, str(e)) from e

        stem = os.path.splitext(os.path.basename(url.split('?', 1)[0]))[0] or 'RemoteFont'
        digest = hashlib.sha1(url.encode('utf-8')).hexdigest()[:8]
        return self._register(f"{stem}-{digest}", io.BytesIO(response.content), url)

    def _load_from_file(self, path: str) -> FontHandle:
        name = os.path.splitext(os.path.basename(path))[0]
        return self._register(name, path, path)

    @staticmethod
    def _register(name: str, source, label: str) -> FontHandle:
        try:
            pdfmetrics.registerFont(TTFont(name, source))
        except Exception as e:
            raise FontError(f"Failed to register font '{label}': {e}") from e
        logger.debug("Registered font %s from %s", name, label)
        return FontHandle(name, unicode=True)
