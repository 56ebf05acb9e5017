"""Annual Appraisal Report

Employee information, eight rated assessment areas (each showing the full
wording of the chosen rating in its rating colour), comments, action plans
and signatures.
"""
from ..config import RATING_COLORS
from ..report_data import AnnualAppraisalFormData
from ..utils import format_date, text_or_blank
from .base import ReportBuilder

CONFIDENTIAL_NOTE = "This document is confidential and should be stored securely."

_CLIENT_CARE_OPTIONS = {
    "A": "A: Provides exceptional care, exceeding client expectations",
    "B": "B: Provides good quality care, meeting most client needs",
    "C": "C: Provides satisfactory care, meeting basic client needs",
    "D": "D: Inconsistent in providing adequate care",
    "E": "E: Unsatisfactory care, immediate action required",
}

# (rating field, heading, rating letter → full option label)
PERFORMANCE_QUESTIONS = [
    ("client_care", "Client Care", _CLIENT_CARE_OPTIONS),
    ("care_standards", "Knowledge of Care Standards", {
        "A": "A: Demonstrates excellent understanding and adherence",
        "B": "B: Generally follows care standards with minor lapses",
        "C": "C: Adequate understanding of care standards, some areas unclear",
        "D": "D: Limited understanding, further training required",
        "E": "E: Poor adherence to care standards, immediate improvement needed",
    }),
    ("safety_health", "Safety and Health Compliance", {
        "A": "A: Always follows guidelines, ensuring client and personal safety",
        "B": "B: Generally safe practices with minor lapses",
        "C": "C: Adequate safety practices, occasional reminders needed",
        "D": "D: Frequently neglects safety and health guidelines",
        "E": "E: Disregards safety and health guidelines, immediate action required",
    }),
    ("medication_management", "Medication Management", {
        "A": "A: Flawless in medication management and administration",
        "B": "B: Good medication management with minor errors",
        "C": "C: Adequate medication management, some errors",
        "D": "D: Frequent errors in medication management, further training required",
        "E": "E: Consistent errors in medication management, immediate action required",
    }),
    ("communication", "Communication with Clients & Team", {
        "A": "A: Consistently clear and respectful communication",
        "B": "B: Generally good communication with minor misunderstandings",
        "C": "C: Adequate communication skills",
        "D": "D: Poor communication skills, leading to misunderstandings and issues",
        "E": "E: Ineffective communication, immediate improvement needed",
    }),
    ("responsiveness", "Responsiveness and Adaptability", {
        "A": "A: Quickly and effectively adapts",
        "B": "B: Adequately responsive with minor delays",
        "C": "C: Satisfactory responsiveness but slow to adapt",
        "D": "D: Struggles with responsiveness and adaptability",
        "E": "E: Unable to adapt to changing situations, immediate action required",
    }),
    ("professional_development", "Professional Development", {
        "A": "A: Actively seeks and engages in opportunities",
        "B": "B: Participates in professional development",
        "C": "C: Occasionally engages in professional development",
        "D": "D: Rarely engages in professional development opportunities",
        "E": "E: Does not engage in professional development",
    }),
    ("attendance", "Attendance & Punctuality", {
        "A": "A: Always punctual, rarely absent",
        "B": "B: Generally punctual with acceptable attendance",
        "C": "C: Occasional lateness or absence",
        "D": "D: Frequent lateness or absences, attention required",
        "E": "E: Consistently late and/or absent, immediate action required",
    }),
]

ACTION_PLAN_PROMPTS = [
    ("action_training",
     "Actions plans agreed to develop employee and/or the job include any Training or counselling requirements:"),
    ("action_career", "Career development - possible steps in career development:"),
    ("action_plan", "Agreed action plan, job & development objectives, and time scale:"),
]


def rating_label(options, rating) -> str:
    """Full option label for a rating letter; unknown values are shown as given."""
    letter = text_or_blank(rating).strip().upper()
    return options.get(letter, text_or_blank(rating))


class AnnualAppraisalReport(ReportBuilder):
    kind = "annual_appraisal"
    title = "Annual Appraisal Form"
    default_name = "Employee"
    data_class = AnnualAppraisalFormData
    footer_note = CONFIDENTIAL_NOTE

    def person_name(self, record):
        return record.employee_name

    def write(self, r, data, generated_at):
        r.section_title("Employee Information")
        r.key_value("Employee Name", data.employee_name)
        r.key_value("Job Title", data.job_title)
        r.key_value("Date of Appraisal", format_date(data.appraisal_date))

        r.section_title("Performance Assessment")
        for field_name, heading, options in PERFORMANCE_QUESTIONS:
            rating = getattr(data.ratings, field_name)
            color = RATING_COLORS.get(text_or_blank(rating).strip().upper(), "text")
            r.text(heading, bold=True)
            r.text(rating_label(options, rating), color=color, indent=12, space_after=4)

        if data.comments_manager or data.comments_employee:
            r.section_title("Comments")
            r.paragraph("Manager Comments:", data.comments_manager)
            r.paragraph("Employee Comments:", data.comments_employee)

        r.section_title("Action Plans")
        for field_name, prompt in ACTION_PLAN_PROMPTS:
            r.paragraph(prompt, getattr(data, field_name))

        r.section_title("Signatures")
        r.key_value("Supervisor/Manager", data.signature_manager)
        r.key_value("Employee", data.signature_employee)
        r.key_value("Date", format_date(generated_at))
