"""Report Data Records

Typed input records for every report kind.

Every field is optional. from_dict() accepts the camelCase keys used by the
web forms as well as snake_case keys, ignores unknown keys and never raises
on wrongly shaped values: a nested record that is not a mapping becomes an
empty record, and scalar values are kept as given (builders coerce them to
text when drawing).
"""
import json
import re
from collections.abc import Mapping
from dataclasses import MISSING, dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional

_CAMEL_BOUNDARY = re.compile(r'([a-z0-9])([A-Z])')


def snake_case(name: str) -> str:
    """
    Convert a camelCase key to snake_case.

    Examples:
        >>> snake_case("dateOfSupervision")
        'date_of_supervision'
        >>> snake_case("hasDBS")
        'has_dbs'
    """
    return _CAMEL_BOUNDARY.sub(r'\1_\2', str(name)).lower()


def _record(cls, optional: bool = False):
    if optional:
        return field(default=None, metadata={"record": cls})
    return field(default_factory=cls, metadata={"record": cls})


def _records(cls):
    return field(default_factory=list, metadata={"records": cls})


def _record_map(cls):
    return field(default_factory=dict, metadata={"record_map": cls})


def _list():
    return field(default_factory=list, metadata={"list": True})


def _mapping():
    return field(default_factory=dict, metadata={"mapping": True})


def _convert(f, value):
    meta = f.metadata
    if "record" in meta:
        if value is None:
            return f.default_factory() if f.default_factory is not MISSING else None
        return meta["record"].from_dict(value)
    if "records" in meta:
        if isinstance(value, Mapping):
            value = list(value.values())
        if not isinstance(value, (list, tuple)):
            return []
        return [meta["records"].from_dict(item) for item in value if item is not None]
    if "record_map" in meta:
        if not isinstance(value, Mapping):
            return {}
        return {str(key): meta["record_map"].from_dict(item) for key, item in value.items()}
    if "list" in meta:
        if value is None:
            return []
        return list(value) if isinstance(value, (list, tuple)) else [value]
    if "mapping" in meta:
        return dict(value) if isinstance(value, Mapping) else {}
    return value


class Record:
    """Mixin giving dataclass records a tolerant from_dict()."""

    # Source keys that cannot be used as Python field names
    KEY_ALIASES: ClassVar[Dict[str, str]] = {}

    @classmethod
    def from_dict(cls, data: Any):
        """
        Build a record from form JSON.

        Args:
            data: Mapping with camelCase or snake_case keys (anything else
                  yields an empty record)

        Returns:
            Record instance
        """
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            return cls()

        names = {f.name: f for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = cls.KEY_ALIASES.get(key) or snake_case(key)
            if name in names:
                kwargs[name] = _convert(names[name], value)
        return cls(**kwargs)


@dataclass
class CompanyInfo(Record):
    """Company branding shown in report headers (logo: URL, data URI or path)."""

    name: Optional[str] = None
    logo: Optional[str] = None


# Job application

@dataclass
class PersonalInfo(Record):
    title: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    telephone: Optional[str] = None
    date_of_birth: Optional[str] = None
    street_address: Optional[str] = None
    street_address2: Optional[str] = None
    town: Optional[str] = None
    borough: Optional[str] = None
    postcode: Optional[str] = None
    english_proficiency: Optional[str] = None
    other_languages: List[str] = _list()
    position_applied_for: Optional[str] = None
    personal_care_willingness: Optional[str] = None
    has_dbs: Optional[str] = None
    has_car_and_license: Optional[str] = None
    national_insurance_number: Optional[str] = None


@dataclass
class Availability(Record):
    hours_per_week: Optional[str] = None
    has_right_to_work: Optional[str] = None
    # Slot id → selected days
    time_slots: Dict[str, Any] = _mapping()


@dataclass
class EmergencyContact(Record):
    full_name: Optional[str] = None
    relationship: Optional[str] = None
    contact_number: Optional[str] = None
    how_did_you_hear: Optional[str] = None


@dataclass
class Employer(Record):
    KEY_ALIASES: ClassVar[Dict[str, str]] = {"from": "from_date", "to": "to_date"}

    company: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    position: Optional[str] = None
    address: Optional[str] = None
    address2: Optional[str] = None
    town: Optional[str] = None
    postcode: Optional[str] = None
    telephone: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    leaving_date: Optional[str] = None
    key_tasks: Optional[str] = None
    reason_for_leaving: Optional[str] = None


@dataclass
class EmploymentHistory(Record):
    previously_employed: Optional[str] = None
    recent_employer: Optional[Employer] = _record(Employer, optional=True)
    previous_employers: List[Employer] = _records(Employer)


@dataclass
class Reference(Record):
    name: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    email: Optional[str] = None
    contact_number: Optional[str] = None
    address: Optional[str] = None
    address2: Optional[str] = None
    town: Optional[str] = None
    postcode: Optional[str] = None

    @property
    def is_provided(self) -> bool:
        """True if the reference has a name, company or email."""
        return bool(self.name or self.company or self.email)


@dataclass
class SkillsExperience(Record):
    # Skill name → level
    skills: Dict[str, Any] = _mapping()


@dataclass
class Declaration(Record):
    social_service_enquiry: Optional[str] = None
    social_service_details: Optional[str] = None
    convicted_of_offence: Optional[str] = None
    convicted_details: Optional[str] = None
    safeguarding_investigation: Optional[str] = None
    safeguarding_details: Optional[str] = None
    criminal_convictions: Optional[str] = None
    criminal_details: Optional[str] = None
    health_conditions: Optional[str] = None
    health_details: Optional[str] = None
    cautions_reprimands: Optional[str] = None
    cautions_details: Optional[str] = None


@dataclass
class TermsPolicy(Record):
    consent_to_terms: Any = None
    signature: Optional[str] = None
    full_name: Optional[str] = None
    date: Optional[str] = None


@dataclass
class JobApplicationData(Record):
    """A submitted job application (references may arrive as a dict or list)."""

    personal_info: PersonalInfo = _record(PersonalInfo)
    availability: Availability = _record(Availability)
    emergency_contact: EmergencyContact = _record(EmergencyContact)
    employment_history: EmploymentHistory = _record(EmploymentHistory)
    references: List[Reference] = _records(Reference)
    skills_experience: SkillsExperience = _record(SkillsExperience)
    declaration: Declaration = _record(Declaration)
    terms_policy: TermsPolicy = _record(TermsPolicy)


# Supervision

@dataclass
class YesNoAnswer(Record):
    """Answer to a yes/no question, with an optional reason."""

    value: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any):
        if isinstance(data, str):
            return cls(value=data)
        return super().from_dict(data)

    @property
    def is_yes(self) -> bool:
        return str(self.value or "").strip().lower() == "yes"


@dataclass
class ServiceUserReview(Record):
    """Answers about one service user discussed in a supervision."""

    service_user_name: Optional[str] = None
    concerns: YesNoAnswer = _record(YesNoAnswer)
    comfortable: YesNoAnswer = _record(YesNoAnswer)
    comments_about_service: YesNoAnswer = _record(YesNoAnswer)
    complaints_by_service_user: YesNoAnswer = _record(YesNoAnswer)
    safeguarding_issues: YesNoAnswer = _record(YesNoAnswer)
    other_discussion: YesNoAnswer = _record(YesNoAnswer)
    bruises: YesNoAnswer = _record(YesNoAnswer)
    bruises_causes: Optional[str] = None
    pressure_sores: YesNoAnswer = _record(YesNoAnswer)
    # Custom question id → answer
    custom: Dict[str, YesNoAnswer] = _record_map(YesNoAnswer)

    def answer(self, question_id: str) -> YesNoAnswer:
        """Answer for a default question id (camelCase or snake_case) or a custom id."""
        if question_id in self.custom:
            return self.custom[question_id]
        value = getattr(self, snake_case(question_id), None)
        return value if isinstance(value, YesNoAnswer) else YesNoAnswer()


@dataclass
class OfficeAction(Record):
    issue: Optional[str] = None
    action: Optional[str] = None
    by_whom: Optional[str] = None
    date_completed: Optional[str] = None

    @property
    def is_blank(self) -> bool:
        return not (self.issue or self.action or self.by_whom or self.date_completed)


@dataclass
class OfficeUse(Record):
    employee_name: Optional[str] = None
    project: Optional[str] = None
    supervisor: Optional[str] = None
    date: Optional[str] = None
    actions: List[OfficeAction] = _records(OfficeAction)


@dataclass
class SupervisionFormData(Record):
    """A completed supervision form."""

    date_of_supervision: Optional[str] = None
    signature_employee: Optional[str] = None
    how_are_you: Optional[str] = None
    procedural_guidelines: Optional[str] = None
    staff_issues: Optional[str] = None
    training_and_development: Optional[str] = None
    key_areas_of_responsibility: Optional[str] = None
    other_issues: Optional[str] = None
    annual_leave_taken: Optional[str] = None
    annual_leave_booked: Optional[str] = None
    service_users_count: Any = None
    service_user_names: List[str] = _list()
    per_service_user: List[ServiceUserReview] = _records(ServiceUserReview)
    office: OfficeUse = _record(OfficeUse)


@dataclass
class SupervisionQuestion(Record):
    """A yes/no question asked for every service user.

    Attributes:
        id: Stable id; default questions map to ServiceUserReview fields
        label: Full question text
        enabled: Disabled questions are left out of reports
        is_default: True for built-in questions
        short_label: Heading used in the PDF (falls back to label)
    """

    id: str = ""
    label: str = ""
    enabled: bool = True
    is_default: bool = False
    short_label: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.short_label or self.label or self.id


DEFAULT_SUPERVISION_QUESTIONS = [
    ("concerns", "Are there any concerns you have regarding this service user?", "Concerns"),
    ("comfortable", "Are you comfortable working with this service user?", "Comfortable working"),
    ("commentsAboutService",
     "Any comments the service user made regarding the service by you, other carers or the agency?",
     "Comments about service"),
    ("complaintsByServiceUser",
     "Any complaint the service user made regarding the service by you, other carers or the agency?",
     "Complaints made"),
    ("safeguardingIssues", "Have you noticed any safeguarding issues with this client?", "Safeguarding issues"),
    ("otherDiscussion", "Is there anything else you want to discuss?", "Other discussion"),
    ("bruises", "Are there any bruises with service user?", "Bruises"),
    ("pressureSores", "Are there any pressure sores with service user?", "Pressure sores"),
]


@dataclass
class SupervisionQuestionsConfig(Record):
    """Which per-service-user questions a supervision report asks.

    Unknown versions fall back to the default question set.
    """

    SUPPORTED_VERSION: ClassVar[int] = 1

    version: int = 1
    defaults: List[SupervisionQuestion] = _records(SupervisionQuestion)
    custom: List[SupervisionQuestion] = _records(SupervisionQuestion)

    @classmethod
    def default(cls) -> "SupervisionQuestionsConfig":
        return cls(defaults=[
            SupervisionQuestion(id=qid, label=label, short_label=short, is_default=True)
            for qid, label, short in DEFAULT_SUPERVISION_QUESTIONS
        ])

    @classmethod
    def from_dict(cls, data: Any):
        if isinstance(data, Mapping) and data.get("version", cls.SUPPORTED_VERSION) != cls.SUPPORTED_VERSION:
            return cls.default()
        config = super().from_dict(data)
        if not isinstance(data, Mapping) or "defaults" not in data:
            config.defaults = cls.default().defaults
        short_labels = {qid: short for qid, _, short in DEFAULT_SUPERVISION_QUESTIONS}
        for question in config.defaults:
            if question.short_label is None and question.id in short_labels:
                question.short_label = short_labels[question.id]
        return config

    @classmethod
    def from_json(cls, text: Optional[str]) -> "SupervisionQuestionsConfig":
        """Parse a saved configuration; blank or invalid JSON gives the defaults."""
        if not text or not text.strip():
            return cls.default()
        try:
            return cls.from_dict(json.loads(text))
        except json.JSONDecodeError:
            return cls.default()

    def enabled_questions(self) -> List[SupervisionQuestion]:
        """Enabled default questions followed by enabled custom questions."""
        return [q for q in list(self.defaults) + list(self.custom) if q.enabled]


# Annual appraisal

@dataclass
class AppraisalRatings(Record):
    """Rating letter (A best ... E worst) per assessment area."""

    client_care: Optional[str] = None
    care_standards: Optional[str] = None
    safety_health: Optional[str] = None
    medication_management: Optional[str] = None
    communication: Optional[str] = None
    responsiveness: Optional[str] = None
    professional_development: Optional[str] = None
    attendance: Optional[str] = None


@dataclass
class AnnualAppraisalFormData(Record):
    job_title: Optional[str] = None
    appraisal_date: Optional[str] = None
    employee_name: Optional[str] = None
    ratings: AppraisalRatings = _record(AppraisalRatings)
    comments_manager: Optional[str] = None
    comments_employee: Optional[str] = None
    signature_manager: Optional[str] = None
    signature_employee: Optional[str] = None
    action_training: Optional[str] = None
    action_career: Optional[str] = None
    action_plan: Optional[str] = None


# Spot check

@dataclass
class SpotCheckObservation(Record):
    id: Optional[str] = None
    label: Optional[str] = None
    value: Optional[str] = None
    comments: Optional[str] = None


@dataclass
class SpotCheckFormData(Record):
    service_user_name: Optional[str] = None
    care_worker1: Optional[str] = None
    care_worker2: Optional[str] = None
    date: Optional[str] = None
    time_from: Optional[str] = None
    time_to: Optional[str] = None
    carried_by: Optional[str] = None
    observations: List[SpotCheckObservation] = _records(SpotCheckObservation)


# Questionnaire

@dataclass
class QuestionnaireResponse(Record):
    id: Optional[str] = None
    question_text: Optional[str] = None
    # "yes_no", "text", "multiple_choice" or "number"
    question_type: Optional[str] = None
    response_value: Any = None


@dataclass
class QuestionnaireData(Record):
    questionnaire_name: Optional[str] = None
    employee_name: Optional[str] = None
    completion_date: Optional[str] = None
    responses: List[QuestionnaireResponse] = _records(QuestionnaireResponse)
