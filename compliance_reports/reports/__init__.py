"""Report Builders Package

One builder per report kind, all sharing the render pipeline in base.py.

Helper Functions:
- get_builder: Look up a builder class by report kind
- generate_*_pdf: Render one report with default fonts
"""
from dataclasses import replace
from datetime import datetime
from typing import Any, Optional

from ..exceptions import UnknownReportKindError
from .annual_appraisal import AnnualAppraisalReport
from .base import RenderedReport, ReportBuilder
from .job_application import JobApplicationReport
from .questionnaire import QuestionnaireReport
from .spot_check import SpotCheckReport
from .supervision import SupervisionReport

REPORT_BUILDERS = {
    builder.kind: builder
    for builder in (
        JobApplicationReport,
        SupervisionReport,
        AnnualAppraisalReport,
        SpotCheckReport,
        QuestionnaireReport,
    )
}


def get_builder(report_kind: str) -> type:
    """
    Return the builder class for a report kind.

    Raises:
        UnknownReportKindError: If the kind is not registered
    """
    try:
        return REPORT_BUILDERS[report_kind]
    except KeyError:
        raise UnknownReportKindError(report_kind, sorted(REPORT_BUILDERS)) from None


def generate_job_application_pdf(data: Any, company: Any = None,
                                 generated_at: Optional[datetime] = None, **kwargs) -> RenderedReport:
    return JobApplicationReport(**kwargs).render(data, company, generated_at)


def generate_supervision_pdf(data: Any, company: Any = None, generated_at: Optional[datetime] = None,
                             questions=None, **kwargs) -> RenderedReport:
    return SupervisionReport(questions=questions, **kwargs).render(data, company, generated_at)


def generate_annual_appraisal_pdf(data: Any, employee_name: str = "", company: Any = None,
                                  generated_at: Optional[datetime] = None, **kwargs) -> RenderedReport:
    """Render an annual appraisal; employee_name fills in a record without one."""
    builder = AnnualAppraisalReport(**kwargs)
    record = builder.coerce(data)
    if employee_name and not record.employee_name:
        record = replace(record, employee_name=employee_name)
    return builder.render(record, company, generated_at)


def generate_spot_check_pdf(data: Any, company: Any = None,
                            generated_at: Optional[datetime] = None, **kwargs) -> RenderedReport:
    return SpotCheckReport(**kwargs).render(data, company, generated_at)


def generate_questionnaire_pdf(data: Any, company: Any = None,
                               generated_at: Optional[datetime] = None, **kwargs) -> RenderedReport:
    return QuestionnaireReport(**kwargs).render(data, company, generated_at)


__all__ = [
    'REPORT_BUILDERS',
    'get_builder',
    'ReportBuilder',
    'RenderedReport',
    'JobApplicationReport',
    'SupervisionReport',
    'AnnualAppraisalReport',
    'SpotCheckReport',
    'QuestionnaireReport',
    'generate_job_application_pdf',
    'generate_supervision_pdf',
    'generate_annual_appraisal_pdf',
    'generate_spot_check_pdf',
    'generate_questionnaire_pdf',
]
