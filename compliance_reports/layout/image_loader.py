"""Image Loader Module

Fetches and decodes the company logo shown in report headers.

A logo source can be:
- an http(s) URL (fetched with requests)
- a data URI (data:image/png;base64,...)
- a local file path
"""
import base64
import io
import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests
from PIL import Image as PILImage
from PIL import UnidentifiedImageError
from reportlab.lib.utils import ImageReader

from ..config import DEFAULT_HTTP_TIMEOUT
from ..exceptions import LogoFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogoImage:
    """Decoded logo ready to be drawn.

    Attributes:
        reader: ReportLab ImageReader wrapping the decoded image
        width: Pixel width
        height: Pixel height
    """

    reader: ImageReader
    width: int
    height: int

    @property
    def aspect(self) -> float:
        """Height / width ratio."""
        return self.height / self.width if self.width else 1.0

    def scaled_height(self, target_width: float) -> float:
        return self.aspect * target_width


def _read_source(source: str, session: requests.Session, timeout: float) -> bytes:
    if source.startswith('data:'):
        try:
            _, data = source.split(',', 1)
            return base64.b64decode(data)
        except ValueError as e:
            raise LogoFetchError(source[:40] + '...', f"invalid data URI: {e}") from e

    if source.startswith(('http://', 'https://')):
        try:
            response = session.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LogoFetchError(source, str(e)) from e
        return response.content

    if not os.path.exists(source):
        raise LogoFetchError(source, "file not found")
    with open(source, 'rb') as f:
        return f.read()


def load_logo(source: Optional[str], session: Optional[requests.Session] = None,
              timeout: float = DEFAULT_HTTP_TIMEOUT) -> Optional[LogoImage]:
    """
    Load a company logo.

    Args:
        source: URL, data URI or file path; None/empty means no logo
        session: Optional requests session (defaults to a new one)
        timeout: HTTP timeout in seconds

    Returns:
        LogoImage, or None when no source is given

    Raises:
        LogoFetchError: If the bytes cannot be fetched or decoded as an image
    """
    if not source:
        return None

    raw = _read_source(source, session or requests.Session(), timeout)

    try:
        with PILImage.open(io.BytesIO(raw)) as img:
            img.load()
            # Palette and CMYK images are normalised; alpha is kept for mask='auto'
            if img.mode not in ('RGB', 'RGBA', 'L'):
                img = img.convert('RGBA')
            width, height = img.size
            decoded = img.copy()
    except (UnidentifiedImageError, OSError) as e:
        raise LogoFetchError(source if len(source) < 80 else source[:77] + '...', f"not a decodable image: {e}") from e

    logger.debug("Loaded logo %dx%d", width, height)
    return LogoImage(reader=ImageReader(decoded), width=width, height=height)
