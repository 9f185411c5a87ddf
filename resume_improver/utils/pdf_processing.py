"""
PDF processing utilities for text extraction from in-memory uploads.

Helper functions:
    page_count: Quick page count without full extraction.
    iter_page_items: Text items of each page, in page order.
    join_page_items: Flatten page items into plain text.
"""

import io
from typing import Iterable, Iterator, List, Optional

import pdfplumber
from PyPDF2 import PdfReader
from PyPDF2.errors import PyPdfError


def page_count(data: bytes) -> Optional[int]:
    """Get page count from PDF bytes, or None if unreadable."""
    try:
        reader = PdfReader(io.BytesIO(data))
        return len(reader.pages)
    except (PyPdfError, ValueError, OSError):
        return None


def iter_page_items(data: bytes) -> Iterator[List[str]]:
    """
    Yield the text items of each page, first page first.

    Items are pdfplumber words in reading order within the page. No attempt is
    made to rebuild columns or tables, so multi-column layouts may interleave.

    Args:
        data: Raw PDF bytes

    Yields:
        List of item strings for one page (empty list for a page with no text)
    """
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for page in pdf.pages:
            words = page.extract_words()
            yield [word["text"] for word in words]


def join_page_items(pages: Iterable[List[str]]) -> str:
    """Join items with single spaces and pages with newlines."""
    return "\n".join(" ".join(items) for items in pages)
