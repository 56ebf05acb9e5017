"""Supervision Report

Supervision meeting record: personal discussion boxes, one bordered panel
per service user with the configured yes/no questions, and an office-use
section on its own page.
"""
from typing import List, Optional

from ..layout import CenteredHeader
from ..layout.content_items import BoxChoice, BoxRow, BoxText
from ..report_data import ServiceUserReview, SupervisionFormData, SupervisionQuestionsConfig
from ..utils import format_date, parse_date, text_or_blank
from .base import ReportBuilder

DATE_FORMAT = "%d/%m/%Y"

PERSONAL_QUESTIONS = [
    ("How are you", "how_are_you"),
    ("Guidelines & Policy discussions", "procedural_guidelines"),
    ("Staff Issues", "staff_issues"),
    ("Training & Development", "training_and_development"),
    ("Key Areas of Responsibility", "key_areas_of_responsibility"),
    ("Other issues", "other_issues"),
]

ACTION_HEADERS = ["Issue", "Action", "By Whom", "Date Completed"]
ACTION_COLUMNS = [0.32, 0.38, 0.16, 0.14]


def quarter_label(data: SupervisionFormData, generated_at) -> str:
    """Return "Qn YYYY" of the supervision date (generation date if absent)."""
    when = parse_date(data.date_of_supervision) or generated_at
    return f"Q{(when.month - 1) // 3 + 1} {when.year}"


class SupervisionReport(ReportBuilder):
    """Supervision report builder.

    Attributes:
        questions: Per-service-user question set (defaults to the eight
                   built-in questions)
    """

    kind = "supervision"
    title = "Supervision Report"
    default_name = "Report"
    data_class = SupervisionFormData

    def __init__(self, questions: Optional[SupervisionQuestionsConfig] = None, **kwargs):
        super().__init__(**kwargs)
        self.questions = questions or SupervisionQuestionsConfig.default()

    def person_name(self, record):
        return record.signature_employee

    def build_header(self, record, company, style, logo, generated_at):
        return CenteredHeader(style, self.geometry, company.name or "Company", self.title,
                              subtitle=quarter_label(record, generated_at), logo=logo)

    def write(self, r, data, generated_at):
        r.section_title("Report Details")
        r.key_value("Date of Supervision", format_date(data.date_of_supervision, DATE_FORMAT))
        r.key_value("Employee (Signature)", data.signature_employee)
        r.divider()

        r.section_title("Personal")
        for label, attr in PERSONAL_QUESTIONS:
            r.question_box(label, getattr(data, attr))
        annual_leave = text_or_blank(data.annual_leave_taken).strip() or text_or_blank(data.annual_leave_booked).strip()
        r.question_box("Annual Leave (Taken/Booked)", annual_leave)

        r.divider()
        r.section_title("Service Users")
        r.key_value("Count", text_or_blank(data.service_users_count or 0))
        names = [text_or_blank(name) for name in data.service_user_names if name]
        r.paragraph("Names", ", ".join(names))
        for index, review in enumerate(data.per_service_user, start=1):
            r.box(self.service_user_rows(index, review))

        r.divider()
        r.page_break()
        self._write_office_use(r, data)

    def service_user_rows(self, index: int, review: ServiceUserReview) -> List[BoxRow]:
        """Rows of the bordered panel for one service user."""
        rows: List[BoxRow] = [
            BoxText(f"Service User #{index}: {text_or_blank(review.service_user_name)}".rstrip(), bold=True),
        ]
        for question in self.questions.enabled_questions():
            answer = review.answer(question.id)
            rows.append(BoxText(question.display_label, bold=True))
            rows.append(BoxChoice(text_or_blank(answer.value)))
            if answer.reason:
                rows.append(BoxText(f"Reason: {text_or_blank(answer.reason)}"))
            if question.id == "bruises" and answer.is_yes and review.bruises_causes:
                rows.append(BoxText(f"Bruises causes: {text_or_blank(review.bruises_causes)}"))
        return rows

    @staticmethod
    def _write_office_use(r, data):
        office = data.office
        r.section_title("For Office Use Only")
        r.key_value("Name of employee", office.employee_name)
        r.key_value("Project", office.project)
        r.key_value("Supervisor", office.supervisor)
        r.key_value("Date", format_date(office.date, DATE_FORMAT))

        actions = [a for a in office.actions if not a.is_blank]
        if not actions:
            return
        r.spacer(4)
        r.table(
            ACTION_HEADERS,
            [[a.issue, a.action, a.by_whom, format_date(a.date_completed, DATE_FORMAT)] for a in actions],
            ACTION_COLUMNS,
        )
