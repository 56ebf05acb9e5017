"""Configuration Constants

Page geometry, colour palette, report wording and environment settings for
compliance report generation.
"""
import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv
from reportlab.lib.pagesizes import A4

# Load environment variables (.env in the working directory, if any)
load_dotenv()

# Page Geometry (points)
PAGE_SIZE = A4
PAGE_WIDTH, PAGE_HEIGHT = PAGE_SIZE

DEFAULT_MARGIN_X = 48
DEFAULT_MARGIN_TOP = 64
DEFAULT_MARGIN_BOTTOM = 56

# Typography
DEFAULT_FONT_SIZE = 11
DEFAULT_LINE_HEIGHT = 16
SECTION_TITLE_HEIGHT = 24
SECTION_TITLE_SIZE = 12
SECTION_GAP = 6
BOX_PADDING = 12
BOX_GAP = 12
COLUMN_GUTTER = 18
TABLE_MIN_ROW_HEIGHT = 22
TABLE_CELL_PADDING = 6

# Colour palette (RGB floats, 0.0-1.0)
COLORS = {
    "text": (0.0, 0.0, 0.0),
    "subtle": (0.6, 0.6, 0.6),
    "divider": (0.85, 0.85, 0.85),
    "accent": (0.2, 0.55, 0.95),
    "section_bg": (0.96, 0.97, 0.99),
    "header_bg": (0.98, 0.98, 0.985),
    "box_bg": (0.985, 0.985, 0.99),
    "row_alt": (0.98, 0.98, 0.99),
    "row_rule": (0.92, 0.92, 0.92),
    "white": (1.0, 1.0, 1.0),
    "success": (0.2, 0.6, 0.3),
    "success_bg": (0.9, 0.98, 0.92),
    "warning": (0.85, 0.5, 0.1),
    "danger": (0.75, 0.2, 0.2),
    "danger_bg": (0.99, 0.92, 0.92),
    "stripe": (0.5, 0.5, 0.5),
}

# Report kinds (registry key → filename prefix)
REPORT_KINDS = {
    "job_application": "Job_Application",
    "supervision": "Supervision",
    "annual_appraisal": "Annual_Appraisal",
    "spot_check": "Spot_Check",
    "questionnaire": "Questionnaire",
}

# Annual appraisal rating colours (rating letter → COLORS key)
RATING_COLORS = {
    "A": "success",
    "B": "success",
    "C": "text",
    "D": "warning",
    "E": "danger",
}

# Progress Steps (for UI progress tracking)
PROGRESS_STEPS = {
    "VALIDATE": 0.05,
    "LOAD_ASSETS": 0.2,
    "RENDER": 0.4,
    "SAVE": 0.85,
    "COMPLETE": 1.0,
}

# Remote asset fetch timeout (seconds)
DEFAULT_HTTP_TIMEOUT = 30

# Bundled font directory (optional, DejaVu TTFs)
BUNDLED_FONT_DIR = os.path.join(os.path.dirname(__file__), "..", "fonts")


@dataclass
class Settings:
    """Environment-driven settings for the exporter and the web app.

    Attributes:
        output_dir: Directory where exported PDFs are written
        company_name: Default company name shown in report headers
        company_logo: Default logo (URL, data URI or file path)
        font_dir: Extra directory searched for DejaVu TTF files
        font_regular_url: Remote regular TTF (takes priority over local fonts)
        font_bold_url: Remote bold TTF
        http_timeout: Timeout in seconds for remote asset fetches
        log_level: Logging level name used by the app
    """

    output_dir: str = "exports"
    company_name: str = "Company"
    company_logo: Optional[str] = None
    font_dir: Optional[str] = None
    font_regular_url: Optional[str] = None
    font_bold_url: Optional[str] = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Settings":
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ
        timeout = env.get("REPORTS_HTTP_TIMEOUT")
        return cls(
            output_dir=env.get("REPORTS_OUTPUT_DIR", "exports"),
            company_name=env.get("REPORTS_COMPANY_NAME", "Company"),
            company_logo=env.get("REPORTS_COMPANY_LOGO") or None,
            font_dir=env.get("REPORTS_FONT_DIR") or None,
            font_regular_url=env.get("REPORTS_FONT_REGULAR_URL") or None,
            font_bold_url=env.get("REPORTS_FONT_BOLD_URL") or None,
            http_timeout=float(timeout) if timeout else DEFAULT_HTTP_TIMEOUT,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
