"""
Request strategies for the analysis endpoint.

Two deployments exist and each uses exactly one strategy:
- MULTIPART: the server extracts text, so the original file is uploaded
- JSON: the client already extracted text and sends it as JSON

Both share the same precondition check. The strategy is picked from
configuration with get_request_builder(), never from the input itself.
"""

from abc import ABC, abstractmethod
from typing import Union

from resume_improver.contexts.analysis.models import (
    AnalysisRequest,
    JsonRequest,
    MultipartRequest,
    RequestStrategy,
)
from resume_improver.contexts.intake.documents import BinaryFile, RawText, SourceDocument
from resume_improver.contexts.intake.extractor import ensure_supported
from resume_improver.exceptions import (
    ConfigurationError,
    IncompleteSubmissionError,
    UnsupportedFormatError,
)


def has_content(value: Union[str, SourceDocument, None]) -> bool:
    """True when a resume or job description is present and not blank."""
    if value is None:
        return False
    if isinstance(value, BinaryFile):
        return len(value.data) > 0
    if isinstance(value, RawText):
        value = value.content
    return bool(value.strip())


class RequestBuilder(ABC):
    """
    Abstract base for request strategies.

    Subclasses must:
    - Set strategy class attribute
    - Implement _build() for the strategy's request shape
    """

    strategy: RequestStrategy

    def __init__(self, endpoint: str):
        self.endpoint = endpoint

    def accepts(self, resume: Union[str, SourceDocument, None]) -> bool:
        """Whether this strategy can carry the given resume input at all."""
        return has_content(resume)

    def build(self, resume: Union[str, SourceDocument], job_description: str) -> AnalysisRequest:
        """
        Build a ready-to-send POST request.

        Args:
            resume: Resume input in the form the strategy carries
            job_description: Job description text

        Raises:
            IncompleteSubmissionError: Resume or job description is blank
            UnsupportedFormatError: Resume input cannot be carried by this strategy
        """
        if not has_content(resume):
            raise IncompleteSubmissionError("Resume content is required")
        if not has_content(job_description):
            raise IncompleteSubmissionError("Job description is required")
        return self._build(resume, job_description)

    @abstractmethod
    def _build(self, resume: Union[str, SourceDocument], job_description: str) -> AnalysisRequest:
        """Build the strategy-specific request. Inputs are already validated."""
        pass


class MultipartRequestBuilder(RequestBuilder):
    """Upload the original PDF/DOCX file; the server extracts its text."""

    strategy = RequestStrategy.MULTIPART

    def accepts(self, resume) -> bool:
        return (
            isinstance(resume, BinaryFile) and resume.mime_hint.is_supported and has_content(resume)
        )

    def _build(self, resume, job_description: str) -> MultipartRequest:
        if not isinstance(resume, BinaryFile):
            raise UnsupportedFormatError("Please upload your resume as a PDF or DOCX file.")
        ensure_supported(resume)
        return MultipartRequest(url=self.endpoint, resume_file=resume, job_description=job_description)


class JsonRequestBuilder(RequestBuilder):
    """Send text the client already extracted."""

    strategy = RequestStrategy.JSON

    def accepts(self, resume) -> bool:
        return isinstance(resume, (str, RawText)) and has_content(resume)

    def _build(self, resume, job_description: str) -> JsonRequest:
        if isinstance(resume, RawText):
            resume = resume.content
        if not isinstance(resume, str):
            raise UnsupportedFormatError("Resume files must be extracted before a JSON submission.")
        return JsonRequest(url=self.endpoint, resume_text=resume, job_description=job_description)


# --- Builder Factory ---

_BUILDERS = {
    RequestStrategy.MULTIPART: MultipartRequestBuilder,
    RequestStrategy.JSON: JsonRequestBuilder,
}


def get_request_builder(strategy: Union[RequestStrategy, str], endpoint: str) -> RequestBuilder:
    """
    Get the request builder for a deployment.

    Args:
        strategy: "multipart" or "json" (or the RequestStrategy member)
        endpoint: Analysis endpoint URL

    Returns:
        RequestBuilder instance

    Raises:
        ConfigurationError: Strategy is neither multipart nor json
    """
    try:
        strategy = RequestStrategy(strategy.lower() if isinstance(strategy, str) else strategy)
    except ValueError as e:
        raise ConfigurationError(f"Unknown strategy: {strategy}. Use 'multipart' or 'json'") from e
    return _BUILDERS[strategy](endpoint)
