"""
Analysis Context

Responsibilities:
- Builds the outbound request (multipart upload or JSON text)
- Calls the analysis endpoint
- Normalizes plain-text, JSON and chat-completion responses
- Drives the session state machine shown to the user

Owns: Request strategies, response normalization, session state
Never: Decodes documents (intake) or renders the result
"""

from resume_improver.contexts.analysis.client import AnalysisClient
from resume_improver.contexts.analysis.models import (
    AnalysisRequest,
    AnalysisResponse,
    JsonRequest,
    MultipartRequest,
    NormalizedResult,
    RequestStrategy,
)
from resume_improver.contexts.analysis.request_builder import (
    JsonRequestBuilder,
    MultipartRequestBuilder,
    RequestBuilder,
    get_request_builder,
)
from resume_improver.contexts.analysis.response_normalizer import normalize, normalize_response
from resume_improver.contexts.analysis.session import (
    AnalysisSession,
    SessionState,
    SessionStatus,
    transition,
)

__all__ = [
    "AnalysisClient",
    "AnalysisRequest",
    "AnalysisResponse",
    "AnalysisSession",
    "JsonRequest",
    "JsonRequestBuilder",
    "MultipartRequest",
    "MultipartRequestBuilder",
    "NormalizedResult",
    "RequestBuilder",
    "RequestStrategy",
    "SessionState",
    "SessionStatus",
    "get_request_builder",
    "normalize",
    "normalize_response",
    "transition",
]
