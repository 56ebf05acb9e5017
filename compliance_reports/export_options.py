"""Export Options Dataclass

Per-export configuration for the report exporter.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from .config import REPORT_KINDS, Settings
from .exceptions import InvalidConfigurationError, UnknownReportKindError


@dataclass
class ExportOptions:
    """Options for exporting one report.

    Attributes:
        report_kind: Registry key ("job_application", "supervision",
                     "annual_appraisal", "spot_check", "questionnaire")
        data: Form record (mapping or report_data record)

        # Branding
        company_name: Company name shown in the header
        company_logo: Logo URL, data URI or file path

        # Output
        output_dir: Directory the PDF is written to
        generated_at: Generation time; fixed values give reproducible output

        # Report specific
        employee_name: Employee name for annual appraisals
        supervision_questions: Question configuration (mapping or JSON text)
    """

    # Required
    report_kind: str
    data: Any = None

    # Branding
    company_name: Optional[str] = None
    company_logo: Optional[str] = None

    # Output
    output_dir: str = "exports"
    generated_at: Optional[datetime] = None

    # Report specific
    employee_name: Optional[str] = None
    supervision_questions: Any = None

    def __post_init__(self):
        """Validate options after initialization."""
        if self.report_kind not in REPORT_KINDS:
            raise UnknownReportKindError(self.report_kind, sorted(REPORT_KINDS))

        if not self.output_dir or not str(self.output_dir).strip():
            raise InvalidConfigurationError("output_dir must not be empty")

        if self.generated_at is not None and not isinstance(self.generated_at, datetime):
            raise InvalidConfigurationError(
                f"generated_at must be a datetime, got {type(self.generated_at).__name__}"
            )

    @property
    def company(self) -> dict:
        return {"name": self.company_name, "logo": self.company_logo}

    @classmethod
    def from_settings(cls, settings: Settings, report_kind: str, data: Any = None, **overrides) -> "ExportOptions":
        """Build options using environment settings as defaults."""
        values = {
            "company_name": settings.company_name,
            "company_logo": settings.company_logo,
            "output_dir": settings.output_dir,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(report_kind=report_kind, data=data, **values)
