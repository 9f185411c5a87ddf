"""
Resume text extraction.

Converts a SourceDocument into plain text:
- RawText is returned unchanged
- PDF: page items joined by spaces, pages joined by newlines (pdfplumber)
- DOCX: paragraph text only, styling and images dropped (python-docx)

Unsupported formats are rejected before any bytes are decoded.
"""

import asyncio
import io
import time

import docx

from resume_improver.contexts.intake.documents import BinaryFile, MimeHint, RawText, SourceDocument
from resume_improver.contexts.intake.logger import (
    _log_debug,
    _log_error,
    log_extraction_result,
    log_extraction_start,
)
from resume_improver.exceptions import ExtractionError, UnsupportedFormatError
from resume_improver.utils.pdf_processing import iter_page_items, join_page_items, page_count


def ensure_supported(document: SourceDocument) -> None:
    """
    Fail fast on files that are neither PDF nor DOCX.

    Raises:
        UnsupportedFormatError: If document is a BinaryFile of unknown format
    """
    if isinstance(document, BinaryFile) and not document.mime_hint.is_supported:
        _log_error(
            f"Rejected {document.filename or '<unnamed>'} "
            f"(content type: {document.content_type or 'none'})"
        )
        raise UnsupportedFormatError(
            filename=document.filename, content_type=document.content_type
        )


def extract_pdf_text(data: bytes) -> str:
    """Extract text from PDF bytes, one line per page."""
    _log_debug(f"PDF reports {page_count(data)} pages")
    return join_page_items(iter_page_items(data))


def extract_docx_text(data: bytes) -> str:
    """Extract raw paragraph text from DOCX bytes."""
    document = docx.Document(io.BytesIO(data))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


_EXTRACTORS = {
    MimeHint.PDF: extract_pdf_text,
    MimeHint.DOCX: extract_docx_text,
}


def extract_text_sync(document: SourceDocument) -> str:
    """
    Blocking extraction. Prefer extract_text() inside an event loop.

    Args:
        document: Pasted text or uploaded file

    Returns:
        Extracted plain text (may be empty for image-only documents)

    Raises:
        UnsupportedFormatError: File is neither PDF nor DOCX
        ExtractionError: File bytes could not be decoded
    """
    if isinstance(document, RawText):
        return document.content

    ensure_supported(document)
    hint = document.mime_hint
    log_extraction_start(document.filename, hint.value, len(document.data))

    start_time = time.time()
    try:
        text = _EXTRACTORS[hint](document.data)
    except Exception as e:
        # pdfminer and python-docx raise a wide range of types for corrupt input
        _log_error(f"Failed to decode {document.filename or '<unnamed>'}: {e}")
        raise ExtractionError(f"Failed to extract text from {hint.value.upper()} file", e) from e

    log_extraction_result(document.filename, text, time.time() - start_time)
    return text


async def extract_text(document: SourceDocument) -> str:
    """
    Extract text without blocking the event loop.

    Decoding runs in a worker thread; the format check still happens up front
    so unsupported files never cost a thread hop.
    """
    if isinstance(document, RawText):
        return document.content

    ensure_supported(document)
    return await asyncio.to_thread(extract_text_sync, document)
