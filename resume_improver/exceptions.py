"""Exceptions shared across contexts. Every one maps to a display string."""

from typing import Optional


class ResumeImproverError(Exception):
    """Base class for errors the pipeline recovers from and reports to the user."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnsupportedFormatError(ResumeImproverError):
    """
    Raised when a resume file is neither PDF nor DOCX.

    Attributes:
        message: Error description
        filename: Name of the rejected file (if known)
        content_type: Declared MIME type of the rejected file (if known)
    """

    def __init__(
        self,
        message: str = "Only PDF or DOCX supported.",
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ):
        self.filename = filename
        self.content_type = content_type
        super().__init__(message)


class ExtractionError(ResumeImproverError):
    """
    Raised when PDF/DOCX bytes cannot be decoded into text.

    Attributes:
        message: Error description
        original_error: The decoder's own exception
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        if original_error:
            message = f"{message}: {original_error}"
        super().__init__(message)


class TransportError(ResumeImproverError):
    """Raised when no response could be obtained from the analysis endpoint."""

    def __init__(self, message: str = "Error contacting backend", original_error=None):
        self.original_error = original_error
        super().__init__(message)


class IncompleteSubmissionError(ResumeImproverError, ValueError):
    """Raised when a request is built without resume content or job description."""

    pass


class InvalidTransitionError(ResumeImproverError):
    """Raised by the session transition function for an event the current state rejects."""

    pass


class ConfigurationError(ResumeImproverError, ValueError):
    """Raised when settings are missing or malformed."""

    pass
