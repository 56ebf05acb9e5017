"""Spot Check Report

Record of an unannounced care-worker visit: visit details and a checklist
of observations answered yes/no with comments.
"""
from ..layout.content_items import TableCell
from ..report_data import SpotCheckFormData, SpotCheckObservation
from ..utils import format_date, text_or_blank
from .base import ReportBuilder

# Checklist used when a record carries no observations
DEFAULT_OBSERVATIONS = [
    ("arrives_on_time", "Care Worker arrives at the Service User's home on time"),
    ("keys_or_alerts", "Care Worker has keys for entry/Alerts the Service User upon arrival / key safe number"),
    ("id_badge", "Care Worker is wearing a valid and current ID badge"),
    ("safe_hygiene_ppe", "Care Worker practices safe hygiene (use of PPE clothing, gloves/aprons etc.)"),
    ("checks_care_plan", "Care Worker checks Service User's care plan upon arrival"),
    ("equipment_used_properly", "Equipment (hoists etc) used properly"),
    ("food_safety", "Care Worker practices proper food safety and hygiene principles"),
    ("vigilant_hazards", "Care Worker is vigilant for hazards in the Service User's home"),
    ("communicates_user",
     "Care Worker communicates with the Service User (tasks to be done, maintaining confidentiality)"),
    ("asks_satisfaction", "Care Worker asks Service User if he/she is satisfied with the service"),
    ("daily_report_forms", "Care Worker completes Daily Report forms satisfactorily"),
    ("snacks_stored_properly", "Snacks left for the Service User are covered and stored properly"),
    ("leaves_premises_locked", "Care Worker leaves premises, locking doors behind him/her"),
]

OBSERVATION_HEADERS = ["Item", "Yes", "No", "Observation/comments (required for all no responses)"]
OBSERVATION_COLUMNS = [0.46, 0.1, 0.1, 0.34]
OBSERVATION_ALIGN = ["left", "center", "center", "left"]


class SpotCheckReport(ReportBuilder):
    kind = "spot_check"
    title = "Spot Check Report"
    default_name = "Report"
    data_class = SpotCheckFormData
    header_date_format = "%d-%m-%Y %H:%M"

    def person_name(self, record):
        return record.service_user_name

    def write(self, r, data, generated_at):
        r.section_title("A. Details")
        r.key_value("Service User's Name", data.service_user_name)
        r.key_value("Care Worker 1", data.care_worker1)
        if data.care_worker2:
            r.key_value("Care Worker 2", data.care_worker2)
        r.key_value("Date of Spot Check", format_date(data.date))
        r.key_value("Time From", data.time_from)
        r.key_value("Time To", data.time_to)
        r.key_value("Carried Out By", data.carried_by)
        r.spacer(10)

        r.section_title("B. Observations")
        tick = "✔" if r.style.fonts.regular.unicode else "X"
        observations = data.observations or [
            SpotCheckObservation(id=obs_id, label=label) for obs_id, label in DEFAULT_OBSERVATIONS
        ]
        rows = []
        for obs in observations:
            answer = text_or_blank(obs.value).strip().lower()
            rows.append([
                obs.label,
                TableCell(tick if answer == "yes" else "", align="center"),
                TableCell(tick if answer == "no" else "", align="center"),
                obs.comments,
            ])
        r.table(OBSERVATION_HEADERS, rows, OBSERVATION_COLUMNS, min_row_height=24, striped=True,
                align=OBSERVATION_ALIGN)

        r.spacer(12)
        r.text("End of Report", size=10)
