"""Plain-text extraction from uploaded PDF / DOCX / TXT documents."""

from __future__ import annotations

import io
import logging
import os

import fitz  # PyMuPDF
from docx import Document

from app.core.errors import ValidationFailedError

logger = logging.getLogger("ai.documents")

UNSUPPORTED_MESSAGE = "Please upload a PDF, DOCX, or TXT file"

PDF_MIMES = ("application/pdf",)
DOCX_MIMES = ("application/vnd.openxmlformats-officedocument.wordprocessingml.document",)
TEXT_MIMES = ("text/plain",)


def detect_kind(filename: str, mime: str | None) -> str | None:
    ext = os.path.splitext(filename or "")[1].lower()
    mime = (mime or "").lower()
    if ext == ".pdf" or mime in PDF_MIMES:
        return "pdf"
    if ext == ".docx" or mime in DOCX_MIMES:
        return "docx"
    if ext == ".txt" or mime in TEXT_MIMES:
        return "txt"
    return None


def parse_pdf_content(file_content: bytes) -> str:
    """Page text in natural reading order."""
    with fitz.open(stream=file_content, filetype="pdf") as doc:
        return "\n".join(page.get_text("text", sort=True) for page in doc)


def parse_docx_content(file_content: bytes) -> str:
    """Paragraphs followed by table cell text, row by row."""
    doc = Document(io.BytesIO(file_content))
    lines = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)


def extract_document_text(filename: str, mime: str | None, data: bytes) -> str:
    kind = detect_kind(filename, mime)
    if kind is None:
        raise ValidationFailedError(UNSUPPORTED_MESSAGE)

    try:
        if kind == "pdf":
            text = parse_pdf_content(data)
        elif kind == "docx":
            text = parse_docx_content(data)
        else:
            text = data.decode("utf-8", errors="replace")
    except Exception as e:
        logger.error("Failed to read %s document '%s': %s", kind, filename, e)
        raise ValidationFailedError(f"Could not read the uploaded {kind.upper()} file") from e

    logger.info("Extracted %d chars from %s (%s)", len(text), filename, kind)
    return text.strip()
