"""Shared fixtures: in-memory resume documents and a fake analysis endpoint."""

import io
from typing import Callable, List

import docx
import httpx
import pytest

from resume_improver.utils.settings import ENV_VARS


def _escape_pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: List[str]) -> bytes:
    """
    Build a minimal PDF with one line of Helvetica text per page.

    Object layout: 1 catalog, 2 page tree, 3 font, then a (page, content)
    pair per page. Offsets in the xref table are computed exactly.
    """
    page_ids = [4 + 2 * i for i in range(len(pages))]
    objects = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        2: (
            "<< /Type /Pages /Kids [{}] /Count {} >>".format(
                " ".join(f"{pid} 0 R" for pid in page_ids), len(pages)
            )
        ).encode(),
        3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    for pid, text in zip(page_ids, pages):
        stream = f"BT /F1 12 Tf 72 720 Td ({_escape_pdf_text(text)}) Tj ET".encode("latin-1")
        objects[pid] = (
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {pid + 1} 0 R >>"
        ).encode()
        objects[pid + 1] = (
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = {}
    for object_id in sorted(objects):
        offsets[object_id] = len(out)
        out += f"{object_id} 0 obj\n".encode() + objects[object_id] + b"\nendobj\n"

    xref_position = len(out)
    size = max(objects) + 1
    out += f"xref\n0 {size}\n".encode()
    out += b"0000000000 65535 f \n"
    for object_id in range(1, size):
        out += f"{offsets[object_id]:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_position}\n%%EOF\n".encode()
    return bytes(out)


def build_docx(paragraphs: List[str]) -> bytes:
    """Build a DOCX with the given paragraphs followed by one partly bold paragraph."""
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    styled = document.add_paragraph()
    styled.add_run("Bold").bold = True
    styled.add_run(" skills")

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def two_page_pdf() -> bytes:
    return build_pdf(["Jane Doe Senior Engineer", "Python Docker Kubernetes"])


@pytest.fixture
def resume_docx() -> bytes:
    return build_docx(["Jane Doe", "Senior Engineer"])


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Keep a developer's .env or shell from leaking into settings tests."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


class FakeEndpoint:
    """Records requests and answers with a fixed response (or raises)."""

    def __init__(self, response: Callable[[httpx.Request], httpx.Response]):
        self._respond = response
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def endpoint_replying():
    """Factory: endpoint_replying(status, body) -> FakeEndpoint."""

    def factory(status: int = 200, body: str = "") -> FakeEndpoint:
        return FakeEndpoint(lambda request: httpx.Response(status, text=body))

    return factory


@pytest.fixture
def unreachable_endpoint() -> FakeEndpoint:
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    return FakeEndpoint(refuse)


@pytest.fixture
def pdf_builder():
    return build_pdf
