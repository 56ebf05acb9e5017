"""
Tests for input records and the supervision question configuration.
"""
import json

import pytest

from compliance_reports.report_data import (
    DEFAULT_SUPERVISION_QUESTIONS,
    EmploymentHistory,
    JobApplicationData,
    ServiceUserReview,
    SpotCheckFormData,
    SupervisionFormData,
    SupervisionQuestionsConfig,
    YesNoAnswer,
    snake_case,
)


@pytest.mark.parametrize("key,expected", [
    ("dateOfSupervision", "date_of_supervision"),
    ("hasDBS", "has_dbs"),
    ("streetAddress2", "street_address2"),
    ("careWorker1", "care_worker1"),
    ("already_snake", "already_snake"),
])
def test_snake_case(key, expected):
    assert snake_case(key) == expected


class TestJobApplicationData:
    def test_camel_case_nested_records(self):
        data = JobApplicationData.from_dict({
            "personalInfo": {"fullName": "Jane Doe", "otherLanguages": ["French"], "hasDBS": "yes"},
            "employmentHistory": {
                "previouslyEmployed": "yes",
                "recentEmployer": {"company": "Acme", "from": "2020-01-01", "to": "2023-01-01"},
            },
        })

        assert data.personal_info.full_name == "Jane Doe"
        assert data.personal_info.other_languages == ["French"]
        assert data.personal_info.has_dbs == "yes"
        assert data.employment_history.recent_employer.company == "Acme"
        assert data.employment_history.recent_employer.from_date == "2020-01-01"
        assert data.employment_history.recent_employer.to_date == "2023-01-01"

    def test_references_as_dict_or_list(self):
        as_dict = JobApplicationData.from_dict({"references": {"reference1": {"name": "A"}, "reference2": {}}})
        as_list = JobApplicationData.from_dict({"references": [{"name": "A"}, {}]})

        assert [r.name for r in as_dict.references] == ["A", None]
        assert [r.is_provided for r in as_list.references] == [True, False]

    def test_missing_sections_are_empty(self):
        data = JobApplicationData.from_dict({})
        assert data.personal_info.full_name is None
        assert data.employment_history.recent_employer is None
        assert data.references == []
        assert data.skills_experience.skills == {}

    def test_wrongly_shaped_values_are_tolerated(self):
        data = JobApplicationData.from_dict({
            "personalInfo": "not a mapping",
            "references": 42,
            "availability": {"timeSlots": ["monday"]},
            "unknownKey": 1,
        })
        assert data.personal_info.full_name is None
        assert data.references == []
        assert data.availability.time_slots == {}

    def test_single_language_becomes_list(self):
        data = JobApplicationData.from_dict({"personalInfo": {"otherLanguages": "Polish"}})
        assert data.personal_info.other_languages == ["Polish"]

    def test_employment_history_defaults(self):
        history = EmploymentHistory.from_dict({"previousEmployers": [{"company": "A"}, None]})
        assert [e.company for e in history.previous_employers] == ["A"]


class TestSupervisionData:
    def test_answers_from_objects_or_strings(self):
        review = ServiceUserReview.from_dict({
            "concerns": {"value": "yes", "reason": "Low mood"},
            "bruises": "no",
            "custom": {"custom_1": {"value": "Yes"}},
        })

        assert review.concerns.is_yes
        assert review.concerns.reason == "Low mood"
        assert review.bruises == YesNoAnswer(value="no")
        assert review.answer("custom_1").is_yes
        assert review.answer("commentsAboutService") == YesNoAnswer()
        assert review.answer("nonexistent") == YesNoAnswer()

    def test_form(self, sample_supervision):
        form = SupervisionFormData.from_dict(sample_supervision)

        assert form.signature_employee == "John Smith"
        assert [r.service_user_name for r in form.per_service_user] == ["Alice", "Bob", "Carol"]
        assert form.per_service_user[1].bruises_causes == "Fell in garden"
        assert form.office.supervisor == "Alex Lee"
        assert [a.is_blank for a in form.office.actions] == [False, True]


class TestSupervisionQuestionsConfig:
    def test_default_has_eight_enabled_questions(self):
        config = SupervisionQuestionsConfig.default()
        questions = config.enabled_questions()

        assert [q.id for q in questions] == [qid for qid, _, _ in DEFAULT_SUPERVISION_QUESTIONS]
        assert questions[0].display_label == "Concerns"
        assert all(q.is_default for q in questions)

    def test_disabled_and_custom_questions(self):
        defaults = [{"id": qid, "label": label, "enabled": qid != "comfortable", "isDefault": True}
                    for qid, label, _ in DEFAULT_SUPERVISION_QUESTIONS]
        text = json.dumps({
            "version": 1,
            "defaults": defaults,
            "custom": [{"id": "custom_1", "label": "Any medication changes?", "enabled": True}],
        })
        config = SupervisionQuestionsConfig.from_json(text)
        ids = [q.id for q in config.enabled_questions()]

        assert "comfortable" not in ids
        assert ids[-1] == "custom_1"
        assert len(ids) == 8
        # Short labels are filled in for saved default questions
        assert config.defaults[0].short_label == "Concerns"
        assert config.custom[0].display_label == "Any medication changes?"

    def test_missing_defaults_are_filled_in(self):
        config = SupervisionQuestionsConfig.from_dict({"custom": [{"id": "c", "label": "C?"}]})
        assert len(config.enabled_questions()) == 9

    @pytest.mark.parametrize("text", [None, "", "   ", "{not json", json.dumps({"version": 2, "defaults": []})])
    def test_unusable_config_gives_defaults(self, text):
        config = SupervisionQuestionsConfig.from_json(text)
        assert len(config.enabled_questions()) == 8


def test_spot_check_numbered_keys():
    form = SpotCheckFormData.from_dict({"careWorker1": "John", "careWorker2": "Ann",
                                        "observations": [{"id": "id_badge", "value": "yes"}]})
    assert form.care_worker1 == "John"
    assert form.care_worker2 == "Ann"
    assert form.observations[0].value == "yes"
