"""
Data structures for the analysis context.

Request variants, raw responses and the normalized result handed to the
presentation layer. All are immutable once created.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

from resume_improver.contexts.intake.documents import BinaryFile

JSON_CONTENT_TYPE = "application/json"


class RequestStrategy(str, Enum):
    """How the resume travels to the endpoint. Chosen once per deployment."""

    MULTIPART = "multipart"  # server extracts
    JSON = "json"  # client extracts


@dataclass(frozen=True)
class MultipartRequest:
    """
    multipart/form-data request carrying the original resume file.

    Attributes:
        url: Analysis endpoint
        resume_file: Original upload; filename and content type are preserved
        job_description: Job description text, sent untouched
    """

    url: str
    resume_file: BinaryFile
    job_description: str
    method: str = "POST"

    @property
    def strategy(self) -> RequestStrategy:
        return RequestStrategy.MULTIPART

    def httpx_kwargs(self) -> dict:
        """Keyword arguments for httpx.AsyncClient.request()."""
        resume = self.resume_file
        return {
            "files": {
                "resume": (resume.filename, resume.data, resume.content_type or resume.mime_hint.mime_type)
            },
            "data": {"jobDescription": self.job_description},
        }


@dataclass(frozen=True)
class JsonRequest:
    """application/json request carrying client-extracted resume text."""

    url: str
    resume_text: str
    job_description: str
    method: str = "POST"
    headers: Dict[str, str] = field(
        default_factory=lambda: {"Content-Type": JSON_CONTENT_TYPE}, compare=False
    )

    @property
    def strategy(self) -> RequestStrategy:
        return RequestStrategy.JSON

    def payload(self) -> dict:
        return {"resumeText": self.resume_text, "jobDescription": self.job_description}

    def httpx_kwargs(self) -> dict:
        return {"json": self.payload(), "headers": dict(self.headers)}


AnalysisRequest = Union[MultipartRequest, JsonRequest]


@dataclass(frozen=True)
class AnalysisResponse:
    """Raw transport result: status code plus the body decoded as text."""

    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class NormalizedResult:
    """
    Single success/error outcome shown to the user.

    Attributes:
        ok: True for a 2xx response with usable content
        text: Markdown content on success, display message on failure
    """

    ok: bool
    text: str

    @classmethod
    def success(cls, text: str) -> "NormalizedResult":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, message: str) -> "NormalizedResult":
        return cls(ok=False, text=message)

    @property
    def message(self) -> Optional[str]:
        """Error message, or None for a successful result."""
        return None if self.ok else self.text
