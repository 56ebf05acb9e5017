"""Questionnaire Report

A completed compliance questionnaire: numbered questions with the
employee's answers.
"""
from ..layout import PageFooter
from ..layout.content_items import Label
from ..report_data import QuestionnaireData, QuestionnaireResponse
from ..utils import clean_person_name, format_date, text_or_blank
from .base import ReportBuilder

NO_RESPONSE = "No response provided"
ANSWER_INDENT = 20


def response_text(response: QuestionnaireResponse, symbols: bool = True) -> str:
    """
    Display text for one answer.

    yes_no answers become "✓ Yes" / "✗ No" (plain "Yes"/"No" when the font
    has no symbols); blank answers become "No response provided".

    Examples:
        >>> response_text(QuestionnaireResponse(question_type="yes_no", response_value="yes"))
        '✓ Yes'
    """
    value = text_or_blank(response.response_value).strip()
    if response.question_type == "yes_no":
        if value.lower() == "yes":
            return "✓ Yes" if symbols else "Yes"
        if value.lower() == "no":
            return "✗ No" if symbols else "No"
        return NO_RESPONSE
    return value or NO_RESPONSE


class QuestionnaireReport(ReportBuilder):
    kind = "questionnaire"
    title = "Questionnaire"
    default_name = "Employee"
    data_class = QuestionnaireData

    def filename_prefix(self, record):
        return clean_person_name(record.questionnaire_name, "Questionnaire")

    def person_name(self, record):
        return record.employee_name

    def build_header(self, record, company, style, logo, generated_at):
        header = super().build_header(record, company, style, logo, generated_at)
        header.title = text_or_blank(record.questionnaire_name) or self.title
        return header

    def build_footer(self, record, style, generated_at):
        stamp = format_date(generated_at, "%d/%m/%Y %H:%M")
        return PageFooter(style, self.geometry, page_format=f"Generated on {stamp} - Page {{number}} of {{total}}",
                          align="center")

    def write(self, r, data, generated_at):
        r.key_value("Employee", data.employee_name)
        r.key_value("Completed", format_date(data.completion_date, "%d/%m/%Y"))
        r.divider()
        r.spacer(6)

        symbols = r.style.fonts.regular.unicode
        for number, response in enumerate(data.responses, start=1):
            r.text(f"{number}. {text_or_blank(response.question_text)}", bold=True)
            r.place(Label(response_text(response, symbols), indent=ANSWER_INDENT, keep_breaks=True,
                          color="text" if response.response_value not in (None, "") else "subtle",
                          space_after=8))
