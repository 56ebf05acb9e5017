# Tests configuration for compliance_reports
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from compliance_reports.layout.document import Document
from compliance_reports.layout.font_manager import FontManager, FontSet, clear_font_cache
from compliance_reports.layout.page_cursor import PageCursor
from compliance_reports.layout.page_geometry import LayoutStyle, PageGeometry
from compliance_reports.layout.section_renderer import SectionRenderer


@dataclass(frozen=True)
class FakeFont:
    """Fixed-width font: every character is half the font size wide."""

    name: str = "Helvetica"
    unicode: bool = True
    char_width: float = 0.5

    def width_of_text_at_size(self, text, size):
        return len(text) * size * self.char_width


@pytest.fixture
def fake_font():
    return FakeFont()


@pytest.fixture
def fake_fonts():
    return FontSet(regular=FakeFont("Helvetica"), bold=FakeFont("Helvetica-Bold"))


@pytest.fixture
def style(fake_fonts):
    """Layout style with fixed-width fonts (11pt text → 5.5pt per character)."""
    return LayoutStyle(fonts=fake_fonts)


@pytest.fixture
def small_geometry():
    """Small page: content area from y=360 down to y=40 (320pt capacity)."""
    return PageGeometry(width=300, height=400, margin_x=20, margin_top=40, margin_bottom=40)


@pytest.fixture
def document(fake_fonts, small_geometry):
    return Document(fake_fonts, page_size=(small_geometry.width, small_geometry.height))


@pytest.fixture
def cursor(document, small_geometry):
    return PageCursor(document, small_geometry)


@pytest.fixture
def renderer(cursor, style):
    return SectionRenderer(cursor, style)


@pytest.fixture
def generated_at():
    """Fixed generation time so filenames and bytes are reproducible."""
    return datetime(2024, 3, 15, 10, 30)


@pytest.fixture
def helvetica_manager(monkeypatch, tmp_path):
    """Font manager that always resolves to the standard Helvetica fonts."""
    empty_dir = tmp_path / "no-fonts"
    empty_dir.mkdir()
    monkeypatch.setattr("compliance_reports.layout.font_manager.BUNDLED_FONT_DIR", str(empty_dir))
    clear_font_cache()
    yield FontManager(search_system_paths=False)
    clear_font_cache()


@pytest.fixture
def sample_supervision():
    """Supervision record with three service users; only Bob has bruises."""
    return {
        "dateOfSupervision": "2024-05-14",
        "signatureEmployee": "John Smith",
        "howAreYou": "Doing well, settling into the new rota.",
        "staffIssues": "",
        "annualLeaveTaken": "5 days",
        "serviceUsersCount": 3,
        "serviceUserNames": ["Alice", "Bob", "Carol"],
        "perServiceUser": [
            {"serviceUserName": "Alice", "concerns": {"value": "no"}, "bruises": {"value": "no"},
             "bruisesCauses": "Should not be shown"},
            {"serviceUserName": "Bob", "concerns": {"value": "yes", "reason": "Low mood"},
             "bruises": {"value": "yes"}, "bruisesCauses": "Fell in garden"},
            {"serviceUserName": "Carol", "bruises": {"value": "no"}},
        ],
        "office": {
            "employeeName": "John Smith",
            "supervisor": "Alex Lee",
            "date": "2024-05-15",
            "actions": [
                {"issue": "Rota gaps", "action": "Review weekend cover", "byWhom": "Alex",
                 "dateCompleted": "2024-06-01"},
                {},
            ],
        },
    }


@pytest.fixture
def sample_appraisal_all_e():
    return {
        "employee_name": "Sam Taylor",
        "job_title": "Carer",
        "appraisal_date": "2024-06-01",
        "ratings": {
            "clientCare": "E",
            "careStandards": "E",
            "safetyHealth": "E",
            "medicationManagement": "E",
            "communication": "E",
            "responsiveness": "E",
            "professionalDevelopment": "E",
            "attendance": "E",
        },
        "comments_manager": "",
        "comments_employee": "",
        "signature_manager": "Alex Lee",
        "signature_employee": "Sam Taylor",
    }
