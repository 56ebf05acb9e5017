"""Custom Exception Hierarchy

Exception hierarchy for compliance report generation, separating bad input,
asset loading failures, layout bugs and export orchestration errors.
"""


class ComplianceReportsError(Exception):
    """Base exception for all compliance report errors.

    Catching this exception will catch every custom exception raised by
    the package.
    """
    pass


# Validation Errors
class ValidationError(ComplianceReportsError):
    """Raised when input validation fails."""
    pass


class InvalidReportDataError(ValidationError):
    """Raised when report input is not a mapping of form fields."""

    def __init__(self, report_kind: str, received_type: str):
        self.report_kind = report_kind
        self.received_type = received_type
        super().__init__(
            f"Report data for '{report_kind}' must be an object, got {received_type}"
        )


class UnknownReportKindError(ValidationError):
    """Raised when an export is requested for an unregistered report kind."""

    def __init__(self, report_kind: str, known_kinds: list):
        self.report_kind = report_kind
        self.known_kinds = known_kinds
        super().__init__(
            f"Unknown report kind '{report_kind}'. "
            f"Expected one of: {', '.join(known_kinds)}"
        )


class InvalidConfigurationError(ValidationError):
    """Raised when configuration parameters are invalid."""
    pass


# Asset Errors (fatal: abort the whole export)
class AssetError(ComplianceReportsError):
    """Base class for font and image asset failures."""
    pass


class FontError(AssetError):
    """Raised when font setup or registration fails."""
    pass


class FontFetchError(FontError):
    """Raised when font bytes cannot be fetched from their source."""

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"Failed to fetch font from '{source}': {reason}")


class LogoFetchError(AssetError):
    """Raised when the company logo cannot be fetched or decoded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"Failed to load logo '{source}': {reason}")


# Rendering Errors
class RenderingError(ComplianceReportsError):
    """Base class for PDF rendering errors."""
    pass


class LayoutOverflowError(RenderingError):
    """Raised when a write would move the cursor below the bottom margin."""

    def __init__(self, requested: float, remaining: float):
        self.requested = requested
        self.remaining = remaining
        super().__init__(
            f"Cannot advance {requested:.1f}pt with only {remaining:.1f}pt left on the page"
        )


# Export Errors
class ExportError(ComplianceReportsError):
    """Base class for export orchestration errors."""
    pass


class ExportStepError(ExportError):
    """Raised when a specific export step fails.

    This wraps the underlying exception while preserving the step context.
    """

    def __init__(self, step_name: str, original_exception: Exception):
        self.step_name = step_name
        self.original_exception = original_exception
        super().__init__(
            f"Export step '{step_name}' failed: {str(original_exception)}"
        )
