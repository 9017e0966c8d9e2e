"""Client-side file selection helpers.

Only three document types are accepted by the upload affordance:

* PDF -> ``pdf``
* Word (Office Open XML) -> ``docx``
* Plain text -> ``txt``

The type is inferred from the file extension first and the MIME type second.
Anything else is rejected before it reaches the upload workflow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

DocumentType = Literal["pdf", "docx", "txt"]

SUFFIX_TYPES: dict[str, DocumentType] = {
    ".pdf": "pdf",
    ".docx": "docx",
    ".txt": "txt",
}

MEDIA_TYPES: dict[DocumentType, str] = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain",
}

ACCEPTED_SUFFIXES: tuple[str, ...] = tuple(SUFFIX_TYPES)


class UnsupportedFileTypeError(ValueError):
    """Raised when a file is neither a PDF, a DOCX nor a plain-text document."""


def _normalise_media_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def infer_document_type(filename: str, content_type: str | None = None) -> DocumentType:
    suffix = Path(filename).suffix.lower()
    if suffix in SUFFIX_TYPES:
        return SUFFIX_TYPES[suffix]

    media_type = _normalise_media_type(content_type)
    for document_type, known in MEDIA_TYPES.items():
        if media_type == known:
            return document_type

    raise UnsupportedFileTypeError(
        f"{filename!r} is not a supported document; expected one of {', '.join(ACCEPTED_SUFFIXES)}"
    )


@dataclass(frozen=True, slots=True)
class SelectedFile:
    """A document picked by the user, held only for the duration of one request."""

    name: str
    content: bytes = field(repr=False)
    declared_type: DocumentType

    @property
    def media_type(self) -> str:
        return MEDIA_TYPES[self.declared_type]

    @classmethod
    def from_upload(cls, name: str, content: bytes, content_type: str | None = None) -> "SelectedFile":
        safe_name = Path(name).name
        return cls(name=safe_name, content=content, declared_type=infer_document_type(safe_name, content_type))

    @classmethod
    def from_path(cls, path: Path) -> "SelectedFile":
        declared_type = infer_document_type(path.name)
        return cls(name=path.name, content=path.read_bytes(), declared_type=declared_type)
