"""Compliance Reports

PDF report generation for HR compliance records (job applications,
supervisions, annual appraisals, spot checks and questionnaires).
"""

from .export_options import ExportOptions
from .export_result import ExportResult
from .exporter import ReportExporter
from .reports import (
    REPORT_BUILDERS,
    RenderedReport,
    generate_annual_appraisal_pdf,
    generate_job_application_pdf,
    generate_questionnaire_pdf,
    generate_spot_check_pdf,
    generate_supervision_pdf,
    get_builder,
)

__version__ = "0.1.0"

__all__ = [
    'ExportOptions',
    'ExportResult',
    'ReportExporter',
    'REPORT_BUILDERS',
    'RenderedReport',
    'get_builder',
    'generate_job_application_pdf',
    'generate_supervision_pdf',
    'generate_annual_appraisal_pdf',
    'generate_spot_check_pdf',
    'generate_questionnaire_pdf',
]
