"""
Response normalization.

The endpoint may answer with plain text or with JSON, and the JSON may be a
chat-completion envelope ({"choices": [{"message": {"content": "..."}}]}).
normalize_response() reduces all of these to one NormalizedResult with an
ordered attempt chain:

    parse JSON -> probe choices[0].message.content -> raw body

and then applies the HTTP status. It never raises.
"""

import json
from typing import Any, Optional, Tuple

from resume_improver.contexts.analysis.logger import _log_debug
from resume_improver.contexts.analysis.models import AnalysisResponse, NormalizedResult

_NOT_PARSED = object()


def _parse_json(body: str) -> Any:
    """Parsed JSON document, or _NOT_PARSED when body is not JSON."""
    try:
        return json.loads(body)
    except (ValueError, RecursionError):
        return _NOT_PARSED


def _probe_envelope_content(document: Any) -> Optional[str]:
    """choices[0].message.content if document is a chat-completion envelope, else None."""
    if not isinstance(document, dict):
        return None
    choices = document.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


def _as_utf8(text: str) -> str:
    """Replace lone surrogates (legal in JSON escapes) so the text encodes as UTF-8."""
    return text.encode("utf-8", errors="replace").decode("utf-8")


def extract_content(body: str) -> Tuple[str, str]:
    """
    Best-effort display content for a response body.

    Returns:
        Tuple of (content, source) where source is "envelope", "json" or "text"
    """
    document = _parse_json(body)
    if document is _NOT_PARSED:
        return body, "text"

    content = _probe_envelope_content(document)
    if content is None:
        return body, "json"

    return content, "envelope"


def normalize_response(body: str, status_code: int) -> NormalizedResult:
    """
    Reduce a raw response to a success or error result.

    Args:
        body: Response body decoded as text
        status_code: HTTP status code (2xx counts as success)

    Returns:
        NormalizedResult.success(content) for 2xx, otherwise
        NormalizedResult.failure("Error: <status> - <content>")

    Example:
        >>> normalize_response('{"choices":[{"message":{"content":"Hello"}}]}', 200)
        NormalizedResult(ok=True, text='Hello')
        >>> normalize_response("oops", 500)
        NormalizedResult(ok=False, text='Error: 500 - oops')
    """
    body = body if isinstance(body, str) else ""
    content, source = extract_content(body)
    content = _as_utf8(content)
    _log_debug(f"Response {status_code}: content taken from {source} ({len(content)} chars)")

    if 200 <= status_code < 300:
        return NormalizedResult.success(content)
    return NormalizedResult.failure(f"Error: {status_code} - {content}")


def normalize(response: AnalysisResponse) -> NormalizedResult:
    """normalize_response() for an AnalysisResponse."""
    return normalize_response(response.body, response.status_code)
