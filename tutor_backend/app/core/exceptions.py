"""Domain errors raised by the invoice and record services.

Each error carries the HTTP status the API layer answers with.
"""


class TutorBackendError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    default_detail = "Request could not be processed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class StudentNotFoundError(TutorBackendError):
    status_code = 404
    default_detail = "Student not found"


class SessionRecordNotFoundError(TutorBackendError):
    status_code = 404
    default_detail = "Session record not found"


class EmptySelectionError(TutorBackendError):
    """Raised when no session records match the invoice selection."""

    status_code = 422
    default_detail = "No sessions found for invoice"


class MalformedInputError(TutorBackendError):
    """Raised for unparseable month keys and incomplete invoice requests."""

    status_code = 400
    default_detail = "Malformed input"


class InvoiceRenderError(TutorBackendError):
    status_code = 500
    default_detail = "Could not render invoice PDF"
