"""
Intake Context

Responsibilities:
- Captures resumes as pasted text or uploaded files
- Detects PDF/DOCX uploads and rejects everything else up front
- Extracts plain text from PDF and DOCX bytes

Owns: Source documents and text extraction
Never: Builds requests or talks to the analysis endpoint
"""

from resume_improver.contexts.intake.documents import (
    BinaryFile,
    MimeHint,
    RawText,
    SourceDocument,
    detect_mime_hint,
)
from resume_improver.contexts.intake.extractor import (
    ensure_supported,
    extract_text,
    extract_text_sync,
)

__all__ = [
    "BinaryFile",
    "MimeHint",
    "RawText",
    "SourceDocument",
    "detect_mime_hint",
    "ensure_supported",
    "extract_text",
    "extract_text_sync",
]
