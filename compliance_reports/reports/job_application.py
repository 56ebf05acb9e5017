"""Job Application Report

Summary of a submitted job application in eight numbered sections.
"""
from ..report_data import Employer, JobApplicationData
from ..utils import format_date, text_or_blank
from .base import ReportBuilder

CLOSING_NOTE = "This is a system-generated document based on the submitted application."

# (label, declaration answer field, details field)
DECLARATION_QUESTIONS = [
    ("Social Service Enquiry", "social_service_enquiry", "social_service_details"),
    ("Convicted of Offence", "convicted_of_offence", "convicted_details"),
    ("Safeguarding Investigation", "safeguarding_investigation", "safeguarding_details"),
    ("Criminal Convictions", "criminal_convictions", "criminal_details"),
    ("Health Conditions", "health_conditions", "health_details"),
    ("Cautions / Reprimands", "cautions_reprimands", "cautions_details"),
]


def _employer_pairs(employer: Employer):
    return [
        ("Company", employer.company),
        ("Name", employer.name),
        ("Email", employer.email),
        ("Position", employer.position),
        ("Address 1", employer.address),
        ("Address 2", employer.address2),
        ("Town", employer.town),
        ("Postcode", employer.postcode),
        ("Telephone", employer.telephone),
        ("From", format_date(employer.from_date)),
        ("To", format_date(employer.to_date)),
        ("Leaving Date", format_date(employer.leaving_date)),
    ]


class JobApplicationReport(ReportBuilder):
    kind = "job_application"
    title = "Job Application Summary"
    default_name = "Applicant"
    data_class = JobApplicationData

    def person_name(self, record):
        return record.personal_info.full_name

    def write(self, r, data, generated_at):
        info = data.personal_info

        r.key_value("Applicant", info.full_name)
        r.key_value("Position Applied For", info.position_applied_for)
        r.spacer(10)

        r.section_title("1. Personal Information")
        r.two_column_rows([
            ("Title", info.title),
            ("Full Name", info.full_name),
            ("Email", info.email),
            ("Telephone", info.telephone),
            ("Date of Birth", format_date(info.date_of_birth)),
            ("Postcode", info.postcode),
            ("Address Line 1", info.street_address),
            ("Address Line 2", info.street_address2),
            ("Town/City", info.town),
            ("Borough", info.borough),
            ("English Proficiency", info.english_proficiency),
            ("Other Languages", text_or_blank(info.other_languages)),
            ("Personal Care Willingness", info.personal_care_willingness),
            ("DBS", info.has_dbs),
            ("Car & Driving License", info.has_car_and_license),
            ("National Insurance Number", info.national_insurance_number),
        ])

        r.section_title("2. Availability")
        r.key_value("Hours per Week", data.availability.hours_per_week)
        r.key_value("Right to Work in UK", data.availability.has_right_to_work)
        if data.availability.time_slots:
            r.text("Selected Time Slots:", bold=True)
            for slot, days in data.availability.time_slots.items():
                r.key_value(f"- {slot}", text_or_blank(days))

        contact = data.emergency_contact
        r.section_title("3. Emergency Contact")
        r.key_value("Full Name", contact.full_name)
        r.key_value("Relationship", contact.relationship)
        r.key_value("Contact Number", contact.contact_number)
        r.key_value("How Did You Hear About Us", contact.how_did_you_hear)

        self._write_employment(r, data)

        r.section_title("5. References")
        references = [ref for ref in data.references if ref.is_provided]
        for index, ref in enumerate(references, start=1):
            r.text(f"Reference #{index}", bold=True)
            r.two_column_rows([
                ("Name", ref.name),
                ("Company", ref.company),
                ("Job Title", ref.job_title),
                ("Email", ref.email),
                ("Contact Number", ref.contact_number),
                ("Address 1", ref.address),
                ("Address 2", ref.address2),
                ("Town", ref.town),
                ("Postcode", ref.postcode),
            ])
            r.spacer(6)

        r.section_title("6. Skills & Experience")
        skills = data.skills_experience.skills
        if skills:
            for skill, level in skills.items():
                r.key_value(skill, level)
        else:
            r.text("No specific skills listed")

        r.section_title("7. Declaration")
        declaration = data.declaration
        for label, answer_field, details_field in DECLARATION_QUESTIONS:
            r.key_value(label, getattr(declaration, answer_field))
            details = getattr(declaration, details_field)
            if details:
                r.key_value("Details", details)

        terms = data.terms_policy
        r.section_title("8. Terms & Policy")
        r.key_value("Consent to Terms", "Yes" if terms.consent_to_terms else "No")
        r.key_value("Signature (name)", terms.signature)
        r.key_value("Full Name", terms.full_name)
        r.key_value("Date", format_date(terms.date))

        r.spacer(10)
        r.text(CLOSING_NOTE, size=10, color="subtle")

    def _write_employment(self, r, data):
        history = data.employment_history
        r.section_title("4. Employment History")
        r.key_value("Previously Employed", history.previously_employed)
        if text_or_blank(history.previously_employed).strip().lower() != "yes":
            return

        if history.recent_employer is not None:
            r.text("Most Recent Employer", bold=True)
            self._write_employer(r, history.recent_employer)

        if history.previous_employers:
            r.text("Previous Employers", bold=True)
            for index, employer in enumerate(history.previous_employers, start=1):
                r.text(f"#{index}", bold=True)
                self._write_employer(r, employer)
                r.spacer(6)

    @staticmethod
    def _write_employer(r, employer):
        r.two_column_rows(_employer_pairs(employer))
        r.key_value("Key Tasks", employer.key_tasks)
        r.key_value("Reason For Leaving", employer.reason_for_leaving)
