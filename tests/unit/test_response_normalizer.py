"""Unit tests for response normalization."""

import json

import pytest

from resume_improver.contexts.analysis.models import AnalysisResponse, NormalizedResult
from resume_improver.contexts.analysis.response_normalizer import (
    extract_content,
    normalize,
    normalize_response,
)


def envelope(content) -> str:
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})


@pytest.mark.unit
def test_chat_completion_envelope_unwrapped():
    body = '{"choices":[{"message":{"content":"Hello"}}]}'
    assert normalize_response(body, 200) == NormalizedResult(ok=True, text="Hello")


@pytest.mark.unit
def test_plain_text_passes_through():
    assert normalize_response("plain answer", 200) == NormalizedResult(ok=True, text="plain answer")


@pytest.mark.unit
def test_error_status_with_plain_body():
    result = normalize_response("oops", 500)
    assert result == NormalizedResult(ok=False, text="Error: 500 - oops")
    assert result.message == "Error: 500 - oops"


@pytest.mark.unit
def test_error_status_with_envelope_uses_content():
    result = normalize_response(envelope("Rate limited"), 429)
    assert result.message == "Error: 429 - Rate limited"


@pytest.mark.unit
def test_markdown_content_preserved_exactly():
    markdown = "## Missing Skills\n\n| Category | Items |\n|---|---|\n| **Cloud** | AWS |\n"
    assert normalize_response(envelope(markdown), 200).text == markdown


@pytest.mark.unit
@pytest.mark.parametrize(
    "body",
    [
        '{"result": "fine"}',
        '{"choices": []}',
        '{"choices": "nope"}',
        '{"choices": [{"text": "legacy completion"}]}',
        '{"choices": [{"message": {"content": null}}]}',
        '{"choices": [{"message": {"content": 42}}]}',
        '["a", "b"]',
        '"just a json string"',
        "123",
        "null",
    ],
)
def test_json_without_envelope_falls_back_to_raw_body(body):
    assert normalize_response(body, 200) == NormalizedResult(ok=True, text=body)


@pytest.mark.unit
@pytest.mark.parametrize("body", ["", "{", "{'single': 'quotes'}", "[" * 100_000])
def test_malformed_bodies_never_raise(body):
    result = normalize_response(body, 200)
    assert result == NormalizedResult(ok=True, text=body)


@pytest.mark.unit
def test_empty_envelope_content_is_kept():
    assert normalize_response(envelope(""), 200) == NormalizedResult(ok=True, text="")


@pytest.mark.unit
@pytest.mark.parametrize("status, ok", [(200, True), (201, True), (204, True), (299, True), (199, False), (300, False), (404, False)])
def test_status_classification(status, ok):
    assert normalize_response("body", status).ok is ok


@pytest.mark.unit
def test_lone_surrogate_replaced():
    """JSON may escape a lone surrogate; output must still encode as UTF-8."""
    result = normalize_response('{"choices":[{"message":{"content":"bad \\ud800 char"}}]}', 200)
    result.text.encode("utf-8")
    assert result.text == "bad ? char"


@pytest.mark.unit
def test_normalization_is_idempotent():
    body = envelope("Hello")
    assert normalize_response(body, 200) == normalize_response(body, 200)
    assert normalize_response("oops", 502) == normalize_response("oops", 502)


@pytest.mark.unit
def test_extract_content_reports_source():
    assert extract_content(envelope("Hi")) == ("Hi", "envelope")
    assert extract_content('{"a": 1}') == ('{"a": 1}', "json")
    assert extract_content("hi") == ("hi", "text")


@pytest.mark.unit
def test_normalize_analysis_response():
    assert normalize(AnalysisResponse(status_code=400, body="Failed")).message == "Error: 400 - Failed"
