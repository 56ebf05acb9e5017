"""Compliance Reports - Main Application

Gradio application for generating compliance report PDFs from form JSON.
"""
import json
import logging
import os
import sys

# Add current directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import gradio as gr
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from compliance_reports.config import REPORT_KINDS, Settings
from compliance_reports.exceptions import ValidationError
from compliance_reports.export_options import ExportOptions
from compliance_reports.exporter import ReportExporter

settings = Settings.from_env()
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

REPORT_LABELS = {
    "Job Application": "job_application",
    "Supervision": "supervision",
    "Annual Appraisal": "annual_appraisal",
    "Spot Check": "spot_check",
    "Questionnaire": "questionnaire",
}

SAMPLE_DATA = {
    "job_application": {
        "personalInfo": {"fullName": "Jane Doe", "positionAppliedFor": "Care Assistant", "email": "jane@example.com"},
        "availability": {"hoursPerWeek": "30", "hasRightToWork": "yes"},
        "employmentHistory": {"previouslyEmployed": "no"},
        "termsPolicy": {"consentToTerms": True, "signature": "Jane Doe"},
    },
    "supervision": {
        "dateOfSupervision": "2024-05-14",
        "signatureEmployee": "John Smith",
        "howAreYou": "Doing well.",
        "serviceUsersCount": 1,
        "serviceUserNames": ["Mary"],
        "perServiceUser": [{"serviceUserName": "Mary", "concerns": {"value": "no"}, "bruises": {"value": "no"}}],
        "office": {"employeeName": "John Smith", "supervisor": "Alex Lee"},
    },
    "annual_appraisal": {
        "employee_name": "Sam Taylor",
        "job_title": "Senior Carer",
        "appraisal_date": "2024-06-01",
        "ratings": {"clientCare": "A", "careStandards": "B", "safetyHealth": "A", "medicationManagement": "B",
                    "communication": "C", "responsiveness": "B", "professionalDevelopment": "A", "attendance": "A"},
        "signature_manager": "Alex Lee",
        "signature_employee": "Sam Taylor",
    },
    "spot_check": {
        "serviceUserName": "Mary Jones",
        "careWorker1": "John Smith",
        "date": "2024-05-20",
        "timeFrom": "09:00",
        "timeTo": "10:00",
        "carriedBy": "Alex Lee",
        "observations": [],
    },
    "questionnaire": {
        "questionnaire_name": "Medication Competency",
        "employee_name": "Sam Taylor",
        "completion_date": "2024-06-03",
        "responses": [
            {"question_text": "Have you completed medication training?", "question_type": "yes_no",
             "response_value": "yes"},
            {"question_text": "Describe how you record a refused dose.", "question_type": "text",
             "response_value": ""},
        ],
    },
}


def generate_report(
    report_label: str,
    data_json: str,
    company_name: str,
    logo_file,
    logo_url: str,
    employee_name: str,
    questions_json: str,
    progress=gr.Progress()
) -> tuple:
    """
    Generate one report PDF.

    Args:
        report_label: Report kind as shown in the dropdown
        data_json: Form record as JSON
        company_name: Company name for the header
        logo_file: Uploaded logo image (optional)
        logo_url: Logo URL or data URI (optional, used if no file uploaded)
        employee_name: Employee name (annual appraisal only)
        questions_json: Supervision question configuration JSON (optional)
        progress: Gradio progress tracker

    Returns:
        Tuple of (PDF path, layout summary table, status message)
    """
    report_kind = REPORT_LABELS.get(report_label)
    if report_kind is None:
        raise gr.Error("Please choose a report type")

    try:
        data = json.loads(data_json) if data_json and data_json.strip() else {}
    except json.JSONDecodeError as e:
        raise gr.Error(f"Report data is not valid JSON: {e}")

    logo = logo_file.name if hasattr(logo_file, "name") else logo_file
    try:
        options = ExportOptions.from_settings(
            settings,
            report_kind,
            data,
            company_name=company_name or None,
            company_logo=logo or logo_url or None,
            employee_name=employee_name or None,
            supervision_questions=questions_json or None,
        )
    except ValidationError as e:
        raise gr.Error(str(e))

    exporter = ReportExporter(settings=settings, progress_callback=lambda p, d: progress(p, desc=d))
    result = exporter.export(options)
    if result.is_failed:
        raise gr.Error(result.status_message)
    return result.to_gradio_outputs()


def on_report_change(report_label: str) -> tuple:
    """Load sample data and show the fields relevant to the chosen report."""
    report_kind = REPORT_LABELS.get(report_label, "job_application")
    return (
        json.dumps(SAMPLE_DATA[report_kind], indent=2),
        gr.update(visible=report_kind == "annual_appraisal"),
        gr.update(visible=report_kind == "supervision"),
    )


# Create Gradio interface
with gr.Blocks(title="Compliance Reports") as app:
    gr.Markdown("# 📄 Compliance Reports")
    gr.Markdown("Generate PDF reports from compliance form records.")

    with gr.Row():
        with gr.Column():
            gr.Markdown("## Report")
            report_type = gr.Dropdown(
                choices=list(REPORT_LABELS),
                value="Job Application",
                label="Report type",
            )
            data_input = gr.Code(
                value=json.dumps(SAMPLE_DATA["job_application"], indent=2),
                language="json",
                label="Form data (JSON)",
            )
            employee_name = gr.Textbox(label="Employee name", visible=False)
            questions_input = gr.Code(
                language="json",
                label="Supervision questions (JSON, optional)",
                visible=False,
            )

            gr.Markdown("---")
            gr.Markdown("### Branding")
            company_name = gr.Textbox(label="Company name", value=settings.company_name)
            logo_file = gr.File(label="Logo image", file_types=["image"])
            logo_url = gr.Textbox(label="Logo URL", value=settings.company_logo or "")

        with gr.Column():
            gr.Markdown("## Output")
            generate_btn = gr.Button("📄 Generate PDF", variant="primary")
            main_status = gr.Textbox(label="Status", interactive=False)
            output_file = gr.File(label="📥 Download PDF", type="filepath")
            layout_table = gr.DataFrame(
                headers=["Page", "Text runs", "Rectangles", "Images", "First text"],
                label="Pages",
                visible=False,
            )

    report_type.change(
        fn=on_report_change,
        inputs=[report_type],
        outputs=[data_input, employee_name, questions_input],
    )

    generate_btn.click(
        fn=generate_report,
        inputs=[report_type, data_input, company_name, logo_file, logo_url, employee_name, questions_input],
        outputs=[output_file, layout_table, main_status],
    )


if __name__ == "__main__":
    logger.info("Report kinds: %s", ", ".join(REPORT_KINDS))
    app.launch()
