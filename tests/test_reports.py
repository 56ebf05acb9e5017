"""
End-to-end tests for the report builders.

Reports are rendered with the standard Helvetica fonts so the layout does
not depend on fonts installed on the machine.
"""
import base64
import io
from datetime import datetime

import pytest
from PIL import Image

from compliance_reports.config import COLORS
from compliance_reports.exceptions import InvalidReportDataError, LogoFetchError, UnknownReportKindError
from compliance_reports.layout.document import ImageDraw
from compliance_reports.report_data import SupervisionQuestionsConfig
from compliance_reports.reports import (
    REPORT_BUILDERS,
    AnnualAppraisalReport,
    JobApplicationReport,
    QuestionnaireReport,
    SpotCheckReport,
    SupervisionReport,
    generate_annual_appraisal_pdf,
    generate_questionnaire_pdf,
    generate_spot_check_pdf,
    get_builder,
)
from compliance_reports.reports.annual_appraisal import CONFIDENTIAL_NOTE, PERFORMANCE_QUESTIONS
from compliance_reports.reports.questionnaire import NO_RESPONSE, response_text
from compliance_reports.report_data import QuestionnaireResponse

COMPANY = {"name": "Acme Care"}


def logo_data_uri():
    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), color=(200, 30, 30)).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def bordered_boxes(page):
    """Texts inside each bordered box on a page, top to bottom."""
    runs = page.text_runs()
    boxes = []
    for rect in page.rects():
        if rect.fill is not None or rect.stroke != COLORS["divider"]:
            continue
        inside = [run.text for run in runs
                  if rect.y <= run.y <= rect.y + rect.height and rect.x <= run.x <= rect.x + rect.width]
        boxes.append(inside)
    return boxes


def page_of(document, text):
    for page in document.pages:
        if text in page.texts():
            return page.number
    return None


@pytest.fixture
def job_application():
    return {
        "personalInfo": {"fullName": "Jane Doe", "positionAppliedFor": "Care Assistant",
                         "email": "jane@example.com", "dateOfBirth": "1990-04-01"},
        "availability": {"hoursPerWeek": "30", "hasRightToWork": "yes",
                         "timeSlots": {"morning": ["Mon", "Tue"]}},
        "employmentHistory": {"previouslyEmployed": "no",
                              "recentEmployer": {"company": "Should not be shown"}},
        "references": {"reference1": {"name": "Tom Reed", "company": "Acme"}, "reference2": {}},
        "termsPolicy": {"consentToTerms": True, "signature": "Jane Doe"},
    }


class TestJobApplication:
    def test_filename_and_sections(self, helvetica_manager, generated_at, job_application):
        report = JobApplicationReport(font_manager=helvetica_manager).render(job_application, COMPANY, generated_at)
        texts = report.document.all_text()

        assert report.filename == "Job_Application_Jane_Doe_15-03-2024.pdf"
        assert report.pdf_bytes.startswith(b"%PDF")
        titles = ["1. Personal Information", "2. Availability", "3. Emergency Contact",
                  "4. Employment History", "5. References", "6. Skills & Experience",
                  "7. Declaration", "8. Terms & Policy"]
        positions = [texts.index(title) for title in titles]
        assert positions == sorted(positions)
        assert "Generated: 15-03-2024" in texts
        assert "Selected Time Slots:" in texts

    def test_conditional_content(self, helvetica_manager, generated_at, job_application):
        report = JobApplicationReport(font_manager=helvetica_manager).render(job_application, COMPANY, generated_at)
        texts = report.document.all_text()

        assert "Most Recent Employer" not in texts
        assert "Should not be shown" not in texts
        assert "Reference #1" in texts
        assert "Reference #2" not in texts
        assert "No specific skills listed" in texts

    def test_blank_name_uses_default(self, helvetica_manager, generated_at):
        report = JobApplicationReport(font_manager=helvetica_manager).render({}, None, generated_at)
        assert report.filename == "Job_Application_Applicant_15-03-2024.pdf"
        assert report.document.pages[0].texts()[0] == "Company"

    def test_logo_on_every_page(self, helvetica_manager, generated_at, job_application):
        job_application["employmentHistory"] = {
            "previouslyEmployed": "yes",
            "previousEmployers": [
                {"company": "Employer %d" % i, "keyTasks": "Personal care, medication rounds " * 4,
                 "reasonForLeaving": "Relocation"}
                for i in range(8)
            ],
        }
        company = {"name": "Acme Care", "logo": logo_data_uri()}
        report = JobApplicationReport(font_manager=helvetica_manager).render(job_application, company, generated_at)

        assert report.page_count > 1
        for page in report.document.pages:
            assert any(isinstance(c, ImageDraw) for c in page.commands)
            assert page.decorations == {"header", "footer"}

    def test_missing_logo_aborts(self, helvetica_manager, generated_at, job_application):
        company = {"name": "Acme", "logo": "/nonexistent/logo.png"}
        with pytest.raises(LogoFetchError):
            JobApplicationReport(font_manager=helvetica_manager).render(job_application, company, generated_at)

    def test_output_is_reproducible(self, helvetica_manager, generated_at, job_application):
        builder = JobApplicationReport(font_manager=helvetica_manager)
        first = builder.render(job_application, COMPANY, generated_at)
        second = builder.render(job_application, COMPANY, generated_at)
        assert first.pdf_bytes == second.pdf_bytes


class TestSupervision:
    def test_one_box_per_service_user(self, helvetica_manager, generated_at, sample_supervision):
        report = SupervisionReport(font_manager=helvetica_manager).render(sample_supervision, COMPANY, generated_at)
        boxes = [box for page in report.document.pages for box in bordered_boxes(page)]
        user_boxes = [box for box in boxes if box and box[0].startswith("Service User #")]

        assert [box[0] for box in user_boxes] == [
            "Service User #1: Alice", "Service User #2: Bob", "Service User #3: Carol",
        ]
        causes = [box for box in user_boxes if "Bruises causes: Fell in garden" in box]
        assert causes == [user_boxes[1]]
        assert "Reason: Low mood" in user_boxes[1]
        assert report.document.all_text().count("Bruises causes: Fell in garden") == 1
        assert "Bruises causes: Should not be shown" not in report.document.all_text()

    def test_personal_boxes(self, helvetica_manager, generated_at, sample_supervision):
        report = SupervisionReport(font_manager=helvetica_manager).render(sample_supervision, COMPANY, generated_at)
        boxes = [box for page in report.document.pages for box in bordered_boxes(page)]
        labels = [box[0] for box in boxes if box]

        assert labels[:7] == ["How are you", "Guidelines & Policy discussions", "Staff Issues",
                              "Training & Development", "Key Areas of Responsibility", "Other issues",
                              "Annual Leave (Taken/Booked)"]
        assert ["Annual Leave (Taken/Booked)", "5 days"] in boxes

    def test_header_and_filename(self, helvetica_manager, generated_at, sample_supervision):
        report = SupervisionReport(font_manager=helvetica_manager).render(sample_supervision, COMPANY, generated_at)

        assert report.filename == "Supervision_John_Smith_15-03-2024.pdf"
        for page in report.document.pages:
            assert page.texts()[:3] == ["Acme Care", "Supervision Report", "Q2 2024"]
        assert "14/05/2024" in report.document.all_text()

    def test_office_use_starts_new_page(self, helvetica_manager, generated_at, sample_supervision):
        report = SupervisionReport(font_manager=helvetica_manager).render(sample_supervision, COMPANY, generated_at)
        document = report.document
        office_page = page_of(document, "For Office Use Only")

        assert office_page > page_of(document, "Service User #3: Carol")
        assert document.pages[office_page - 1].texts()[3] == "For Office Use Only"
        office_texts = document.pages[office_page - 1].texts()
        assert "Rota gaps" in office_texts
        assert "By Whom" in office_texts

    def test_disabled_question_is_omitted(self, helvetica_manager, generated_at, sample_supervision):
        config = SupervisionQuestionsConfig.default()
        for question in config.defaults:
            if question.id == "bruises":
                question.enabled = False
        report = SupervisionReport(questions=config, font_manager=helvetica_manager).render(
            sample_supervision, COMPANY, generated_at)
        texts = report.document.all_text()

        assert "Bruises" not in texts
        assert not any(t.startswith("Bruises causes") for t in texts)
        assert "Pressure sores" in texts

    def test_many_service_users_stay_inside_margins(self, helvetica_manager, generated_at, sample_supervision):
        sample_supervision["perServiceUser"] = [
            {"serviceUserName": "User %d" % i, "concerns": {"value": "yes", "reason": "Reason text " * 10}}
            for i in range(12)
        ]
        builder = SupervisionReport(font_manager=helvetica_manager)
        report = builder.render(sample_supervision, COMPANY, generated_at)
        geometry = builder.geometry

        assert report.page_count > 3
        for page in report.document.pages:
            for rect in page.rects():
                if rect.fill is None and rect.stroke == COLORS["divider"]:
                    assert rect.y >= geometry.margin_bottom - 1e-6
                    assert rect.y + rect.height <= geometry.height - 114 + 1e-6


class TestAnnualAppraisal:
    def test_all_e_ratings(self, helvetica_manager, generated_at, sample_appraisal_all_e):
        report = AnnualAppraisalReport(font_manager=helvetica_manager).render(
            sample_appraisal_all_e, COMPANY, generated_at)
        runs = [run for page in report.document.pages for run in page.text_runs()]

        assert report.filename == "Annual_Appraisal_Sam_Taylor_15-03-2024.pdf"
        for _, heading, options in PERFORMANCE_QUESTIONS:
            matching = [run for run in runs if run.text == options["E"]]
            assert len(matching) == 1, heading
            assert matching[0].color == COLORS["danger"]
        assert "Comments" not in [run.text for run in runs]

    def test_confidential_note_on_every_page(self, helvetica_manager, generated_at, sample_appraisal_all_e):
        report = AnnualAppraisalReport(font_manager=helvetica_manager).render(
            sample_appraisal_all_e, COMPANY, generated_at)
        texts = report.document.all_text()
        assert texts.count(CONFIDENTIAL_NOTE) == report.page_count

    def test_comments_and_rating_colours(self, helvetica_manager, generated_at, sample_appraisal_all_e):
        sample_appraisal_all_e["ratings"]["clientCare"] = "a"
        sample_appraisal_all_e["comments_manager"] = "Great year"
        report = AnnualAppraisalReport(font_manager=helvetica_manager).render(
            sample_appraisal_all_e, COMPANY, generated_at)
        runs = [run for page in report.document.pages for run in page.text_runs()]
        texts = [run.text for run in runs]

        client_care = [run for run in runs if run.text == PERFORMANCE_QUESTIONS[0][2]["A"]][0]
        assert client_care.color == COLORS["success"]
        assert "Comments" in texts
        assert "Manager Comments:" in texts
        assert "Employee Comments:" not in texts

    def test_employee_name_argument(self, helvetica_manager, generated_at, sample_appraisal_all_e):
        del sample_appraisal_all_e["employee_name"]
        report = generate_annual_appraisal_pdf(sample_appraisal_all_e, employee_name="Sam Taylor",
                                               generated_at=generated_at, font_manager=helvetica_manager)
        assert report.filename == "Annual_Appraisal_Sam_Taylor_15-03-2024.pdf"
        assert "employee_name" not in sample_appraisal_all_e


class TestSpotCheck:
    def test_ticks_in_answer_columns(self, helvetica_manager, generated_at):
        data = {
            "serviceUserName": "Mary Jones",
            "careWorker1": "John Smith",
            "observations": [
                {"label": "Wears ID badge", "value": "yes"},
                {"label": "On time", "value": "no", "comments": "Ten minutes late"},
            ],
        }
        builder = SpotCheckReport(font_manager=helvetica_manager)
        report = builder.render(data, COMPANY, generated_at)
        page = report.document.pages[0]
        left = builder.geometry.content_left
        width = builder.geometry.content_width
        ticks = [run for run in page.text_runs() if run.text == "X"]

        assert report.filename == "Spot_Check_Mary_Jones_15-03-2024.pdf"
        assert len(ticks) == 2
        assert left + 0.46 * width < ticks[0].x < left + 0.56 * width
        assert left + 0.56 * width < ticks[1].x < left + 0.66 * width
        assert not any(text.startswith("Care Worker 2") for text in page.texts())
        assert "End of Report" in report.document.all_text()

    def test_default_checklist(self, helvetica_manager, generated_at):
        report = SpotCheckReport(font_manager=helvetica_manager).render(
            {"serviceUserName": "Mary Jones"}, COMPANY, generated_at)
        body_rows = [rect for page in report.document.pages for rect in page.rects()
                     if rect.height > 1 and rect.fill in (COLORS["row_alt"], COLORS["white"])]
        assert len(body_rows) == 13

    def test_header_shows_generation_time(self, helvetica_manager):
        report = generate_spot_check_pdf({"serviceUserName": "Mary Jones"}, COMPANY,
                                         generated_at=datetime(2024, 3, 15, 10, 30), font_manager=helvetica_manager)
        assert "Generated: 15-03-2024 10:30" in report.document.pages[0].texts()
        assert report.filename == "Spot_Check_Mary_Jones_15-03-2024.pdf"


class TestQuestionnaire:
    def test_render(self, helvetica_manager, generated_at):
        data = {
            "questionnaire_name": "Medication Competency",
            "employee_name": "Sam Taylor",
            "completion_date": "2024-06-03",
            "responses": [
                {"question_text": "Completed training?", "question_type": "yes_no", "response_value": "yes"},
                {"question_text": "Describe a refusal.", "question_type": "text", "response_value": ""},
            ],
        }
        report = QuestionnaireReport(font_manager=helvetica_manager).render(data, COMPANY, generated_at)
        texts = report.document.all_text()

        assert report.filename == "Medication_Competency_Sam_Taylor_15-03-2024.pdf"
        assert texts[1] == "Medication Competency"
        assert "03/06/2024" in texts
        assert texts.index("1. Completed training?") < texts.index("Yes") < texts.index("2. Describe a refusal.")
        assert texts[texts.index("2. Describe a refusal.") + 1] == NO_RESPONSE

    def test_generation_stamp_and_page_total_on_every_page(self, helvetica_manager):
        data = {
            "questionnaire_name": "Induction Review",
            "employee_name": "Sam Taylor",
            "responses": [
                {"question_text": f"Question {n}?", "question_type": "text", "response_value": "An answer " * 12}
                for n in range(40)
            ],
        }
        report = generate_questionnaire_pdf(data, COMPANY, generated_at=datetime(2024, 6, 3, 14, 30),
                                            font_manager=helvetica_manager)
        pages = report.document.pages

        assert report.page_count > 1
        assert report.pdf_bytes.startswith(b"%PDF")
        for page in pages:
            footer = f"Generated on 03/06/2024 14:30 - Page {page.number} of {report.page_count}"
            assert footer in page.texts()
            assert "Page {number}" not in " ".join(page.texts())

    @pytest.mark.parametrize("qtype,value,symbols,expected", [
        ("yes_no", "yes", True, "✓ Yes"),
        ("yes_no", "No", True, "✗ No"),
        ("yes_no", "no", False, "No"),
        ("yes_no", "", True, NO_RESPONSE),
        ("text", "  ", True, NO_RESPONSE),
        ("number", 3, True, "3"),
        ("multiple_choice", "Weekly", False, "Weekly"),
    ])
    def test_response_text(self, qtype, value, symbols, expected):
        response = QuestionnaireResponse(question_type=qtype, response_value=value)
        assert response_text(response, symbols) == expected


class TestRegistry:
    def test_all_kinds_registered(self):
        assert sorted(REPORT_BUILDERS) == [
            "annual_appraisal", "job_application", "questionnaire", "spot_check", "supervision",
        ]
        assert get_builder("supervision") is SupervisionReport

    def test_unknown_kind(self):
        with pytest.raises(UnknownReportKindError, match="payroll"):
            get_builder("payroll")

    @pytest.mark.parametrize("data", [[1, 2], "text", 42])
    def test_non_mapping_input_rejected(self, helvetica_manager, data):
        with pytest.raises(InvalidReportDataError):
            JobApplicationReport(font_manager=helvetica_manager).render(data)
