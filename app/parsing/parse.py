from __future__ import annotations

import logging
from io import BytesIO
from zipfile import ZipFile

import defusedxml.ElementTree as ET
from docx import Document
from pypdf import PdfReader

from app.core.errors import ExtractionError, UnsupportedFormatError

from .models import ParsedDoc

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MIN_EXTRACTED_CHARS = 30

_UNREADABLE_MESSAGES = {
    "pdf": (
        "This PDF appears to be scanned (image-based). "
        "Please upload a text-based PDF or DOCX from Google Docs/Word."
    ),
    "docx": "DOCX file appears to be empty or unreadable.",
}


def detect_source_type(file_name: str, content_type: str | None) -> str:
    declared = (content_type or "").split(";")[0].strip().lower()
    lowered_name = (file_name or "").lower()
    if declared == PDF_MIME or lowered_name.endswith(".pdf"):
        return "pdf"
    if declared == DOCX_MIME or lowered_name.endswith(".docx"):
        return "docx"
    raise UnsupportedFormatError("Unsupported file type. Please upload PDF or DOCX only.")


def _parse_pdf(content: bytes) -> tuple[str, list[str]]:
    warnings: list[str] = []
    reader = PdfReader(BytesIO(content))
    text_parts: list[str] = []
    for page in reader.pages:
        page_text = (page.extract_text() or "").strip()
        if page_text:
            text_parts.append(page_text)
    if not text_parts:
        warnings.append("No extractable text found in PDF.")
    return "\n".join(text_parts), warnings


def _extract_docx_text_fallback(content: bytes) -> list[str]:
    with ZipFile(BytesIO(content)) as archive:
        raw = archive.read("word/document.xml")
    root = ET.fromstring(raw)
    paragraphs: list[str] = []
    for paragraph in root.iter():
        if not paragraph.tag.endswith("}p"):
            continue
        texts = [
            node.text.strip()
            for node in paragraph.iter()
            if node.tag.endswith("}t") and node.text and node.text.strip()
        ]
        if texts:
            paragraphs.append(" ".join(texts))
    return paragraphs


def _parse_docx(content: bytes) -> tuple[str, list[str]]:
    warnings: list[str] = []
    try:
        document = Document(BytesIO(content))
        paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    except Exception as exc:
        logger.info("docx_parser_fallback reason=%s", exc)
        warnings.append("python-docx could not open the file; used raw XML extraction.")
        paragraphs = _extract_docx_text_fallback(content)

    if not paragraphs:
        warnings.append("No extractable text found in DOCX.")
    return "\n".join(paragraphs), warnings


def extract_resume_text(file_name: str, content_type: str | None, content: bytes) -> ParsedDoc:
    """Extract plain text from an uploaded PDF or DOCX resume.

    Raises UnsupportedFormatError before touching the payload when the type is
    neither PDF nor DOCX, and ExtractionError when parsing fails or yields
    fewer than MIN_EXTRACTED_CHARS characters.
    """
    source_type = detect_source_type(file_name, content_type)
    parser = _parse_pdf if source_type == "pdf" else _parse_docx

    try:
        text, warnings = parser(content)
        if not text or len(text.strip()) < MIN_EXTRACTED_CHARS:
            raise ValueError(_UNREADABLE_MESSAGES[source_type])
    except Exception as exc:
        logger.warning("resume_extraction_failed file=%s type=%s error=%s", file_name, source_type, exc)
        raise ExtractionError(f"Failed to read file: {exc}") from exc

    return ParsedDoc(
        file_name=file_name,
        source_type=source_type,
        byte_size=len(content),
        text=text,
        parsing_warnings=warnings,
    )
