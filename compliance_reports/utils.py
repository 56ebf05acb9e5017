"""Utilities Module

Helper functions for report generation: date formatting, filename building
and tolerant text coercion for optional form fields.
"""
import re
from datetime import date, datetime
from typing import Any, Optional

# Characters that are not allowed in downloaded filenames
_ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def text_or_blank(value: Any) -> str:
    """
    Coerce an optional form value to display text.

    Args:
        value: Any value from a form record

    Returns:
        Empty string for None/False/empty values, otherwise str(value)
    """
    if value is None or value is False:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(text_or_blank(v) for v in value if text_or_blank(v))
    return str(value)


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a date/datetime value from form data.

    Accepts datetime/date objects, ISO strings (YYYY-MM-DD, full ISO with
    optional trailing Z) and DD/MM/YYYY or DD-MM-YYYY strings.

    Args:
        value: Raw date value

    Returns:
        Parsed datetime, or None if it cannot be parsed
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    for fmt in ("%d/%m/%Y", "%d-%m-%Y"):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_date(value: Any, fmt: str = "%d-%m-%Y") -> str:
    """
    Format a form date for display.

    Unparseable values are returned unchanged; empty values become "".

    Examples:
        >>> format_date("2024-03-05")
        '05-03-2024'
        >>> format_date("2024-03-05", "%d/%m/%Y")
        '05/03/2024'
        >>> format_date("next week")
        'next week'
    """
    if not value:
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return parsed.strftime(fmt)


def clean_person_name(name: Any, default: str) -> str:
    """
    Turn a person name into a filename-safe token.

    Whitespace runs become underscores; characters that are illegal in
    filenames are dropped.

    Examples:
        >>> clean_person_name("Jane  Doe", "Applicant")
        'Jane_Doe'
        >>> clean_person_name("", "Applicant")
        'Applicant'
    """
    text = text_or_blank(name).strip()
    text = _ILLEGAL_FILENAME_CHARS.sub("", text)
    text = re.sub(r"\s+", "_", text)
    return text or default


def build_report_filename(report_kind: str, person_name: Any, generated_at: datetime, default_name: str) -> str:
    """
    Build the download filename for a generated report.

    Pattern: ``<ReportKind>_<PersonName>_<DD-MM-YYYY>.pdf`` where the date is
    the generation date, not any date from the input record.

    Args:
        report_kind: Filename prefix, e.g. "Job_Application"
        person_name: Name of the person the report is about
        generated_at: Generation timestamp
        default_name: Name used when person_name is blank

    Returns:
        Filename string
    """
    name = clean_person_name(person_name, default_name)
    return f"{report_kind}_{name}_{generated_at.strftime('%d-%m-%Y')}.pdf"


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "45.3 KB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
