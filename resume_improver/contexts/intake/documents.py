"""
Source document types and format detection.

A resume enters the system either as pasted text or as an uploaded file.
Both are captured once from user input and never mutated afterwards.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath
from typing import Optional, Union

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class MimeHint(str, Enum):
    """Format of an uploaded resume file."""

    PDF = "pdf"
    DOCX = "docx"
    UNKNOWN = "unknown"

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES.get(self, "application/octet-stream")

    @property
    def is_supported(self) -> bool:
        return self is not MimeHint.UNKNOWN


_MIME_TYPES = {MimeHint.PDF: PDF_MIME_TYPE, MimeHint.DOCX: DOCX_MIME_TYPE}

_EXTENSION_HINTS = {".pdf": MimeHint.PDF, ".docx": MimeHint.DOCX}
_CONTENT_TYPE_HINTS = {PDF_MIME_TYPE: MimeHint.PDF, DOCX_MIME_TYPE: MimeHint.DOCX}


def detect_mime_hint(filename: Optional[str], content_type: Optional[str] = None) -> MimeHint:
    """
    Classify an upload as PDF, DOCX or unknown.

    The file extension wins when present: a recognised extension decides the
    format, and an unrecognised one (".txt", ".doc", ...) is UNKNOWN no matter
    what content type was declared. Only an extension-less name falls back to
    the declared content type.

    Args:
        filename: Original upload name (may be empty)
        content_type: Declared MIME type, parameters allowed ("application/pdf; x=y")

    Returns:
        MimeHint for the upload
    """
    suffix = PurePath(filename).suffix.lower() if filename else ""
    if suffix:
        return _EXTENSION_HINTS.get(suffix, MimeHint.UNKNOWN)

    if content_type:
        base_type = content_type.split(";")[0].strip().lower()
        return _CONTENT_TYPE_HINTS.get(base_type, MimeHint.UNKNOWN)

    return MimeHint.UNKNOWN


@dataclass(frozen=True)
class RawText:
    """Resume pasted as plain text. Extraction is the identity."""

    content: str


@dataclass(frozen=True)
class BinaryFile:
    """
    Resume uploaded as a file.

    Attributes:
        data: Raw file bytes (read-only)
        filename: Original upload name, kept for multipart uploads
        content_type: Declared MIME type, if the file input supplied one
    """

    data: bytes
    filename: str = ""
    content_type: Optional[str] = None

    @property
    def mime_hint(self) -> MimeHint:
        return detect_mime_hint(self.filename, self.content_type)

    @classmethod
    def from_path(cls, path: Union[str, Path], content_type: Optional[str] = None) -> "BinaryFile":
        """Read a file from disk, keeping its name for later uploads."""
        path = Path(path) if isinstance(path, str) else path
        return cls(data=path.read_bytes(), filename=path.name, content_type=content_type)

    def __repr__(self) -> str:
        return (
            f"BinaryFile(filename={self.filename!r}, content_type={self.content_type!r}, "
            f"size={len(self.data)})"
        )


SourceDocument = Union[RawText, BinaryFile]
