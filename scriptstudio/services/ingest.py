from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from docx import Document

from scriptstudio.errors import AttachmentExtractionError
from scriptstudio.types import Attachment, ExtractedText, InlineBinary, SourceFile


WORD_EXTENSION = ".docx"
IMAGE_MIME_PREFIX = "image/"
PDF_MIME_TYPE = "application/pdf"


@dataclass
class IngestResult:
    """Files split into text merged into the prompt and binary parts sent alongside it."""

    extra_text: str = ""
    attachments: List[Attachment] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def binaries(self) -> List[InlineBinary]:
        return [a for a in self.attachments if isinstance(a, InlineBinary)]


def is_word_document(file: SourceFile) -> bool:
    return file.name.lower().endswith(WORD_EXTENSION)


def is_inline_binary(file: SourceFile) -> bool:
    mime = file.mime_type or ""
    return mime.startswith(IMAGE_MIME_PREFIX) or mime == PDF_MIME_TYPE


def extract_docx_text(data: bytes) -> str:
    """Return the raw text of a .docx document.

    Paragraphs are separated by blank lines; table cells follow the body text.
    """
    document = Document(io.BytesIO(data))
    chunks = [p.text for p in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            for cell in row.cells:
                if cell.text:
                    chunks.append(cell.text)
    return "\n\n".join(chunks)


def document_header(file_name: str) -> str:
    return f"\n\n--- Content of file {file_name} ---\n"


def ingest_files(
    files: Iterable[SourceFile],
    on_log: Optional[Callable[[str], None]] = None,
) -> IngestResult:
    """Route each file to extracted text or an inline binary part, in order.

    Files that are neither a Word document nor an image/PDF are skipped
    without error. A Word document that cannot be read aborts the whole
    ingest with AttachmentExtractionError.
    """
    result = IngestResult()
    for file in files:
        if is_word_document(file):
            try:
                text = extract_docx_text(file.data)
            except Exception as e:  # noqa: BLE001
                raise AttachmentExtractionError(file.name, str(e)) from e
            result.attachments.append(ExtractedText(source_file_name=file.name, text=text))
            result.extra_text += document_header(file.name) + text
            if on_log:
                on_log(f"Ingest: extracted {len(text)} characters from {file.name}")
        elif is_inline_binary(file):
            result.attachments.append(InlineBinary(mime_type=file.mime_type, data=file.data))
            if on_log:
                on_log(f"Ingest: attached {file.name} ({file.mime_type}, {len(file.data):,} bytes)")
        else:
            result.skipped.append(file.name)
            if on_log:
                on_log(f"Ingest: skipped unsupported file {file.name}")
    return result
