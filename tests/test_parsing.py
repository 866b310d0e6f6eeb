import os
import sys
import tempfile
import unittest
from io import BytesIO
from pathlib import Path
from zipfile import ZipFile

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

_TEST_DATA_DIR = Path(tempfile.gettempdir()) / "resume-analyzer-tests"
os.environ.setdefault("AUTH_MODE", "tokens")
os.environ.setdefault("AUTH_TOKENS", "token-alice:user-alice,token-bob:user-bob")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("SIMILARITY_PROVIDER", "hashing")
os.environ.setdefault("RESUME_DB_PATH", str(_TEST_DATA_DIR / "resumes.db"))
os.environ.setdefault("ANALYTICS_DB_PATH", str(_TEST_DATA_DIR / "analytics.db"))

import docx  # noqa: E402
from pypdf import PdfWriter  # noqa: E402

from app.core.errors import ExtractionError, UnsupportedFormatError  # noqa: E402
from app.parsing.parse import DOCX_MIME, PDF_MIME, detect_source_type, extract_resume_text  # noqa: E402


def _docx_bytes(*paragraphs: str) -> bytes:
    """Bare word/document.xml archive; python-docx rejects it and the XML fallback reads it."""
    body = "".join(f"<w:p><w:r><w:t>{text}</w:t></w:r></w:p>" for text in paragraphs)
    buffer = BytesIO()
    with ZipFile(buffer, "w") as archive:
        archive.writestr(
            "word/document.xml",
            (
                '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
                '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
                f"<w:body>{body}</w:body></w:document>"
            ),
        )
    return buffer.getvalue()


def _word_docx_bytes(*paragraphs: str) -> bytes:
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _text_pdf_bytes(*lines: str) -> bytes:
    """Single-page PDF drawing each line in Helvetica."""
    operations = ["BT", "/F1 12 Tf", "72 720 Td", "14 TL"]
    for line in lines:
        escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        operations.append(f"({escaped}) Tj T*")
    operations.append("ET")
    stream = "\n".join(operations).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        (
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            b"/Resources << /Font << /F1 4 0 R >> >> /Contents 5 0 R >>"
        ),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
    ]
    buffer = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(buffer))
        buffer += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_offset = len(buffer)
    buffer += b"xref\n0 %d\n" % (len(objects) + 1)
    buffer += b"0000000000 65535 f \n"
    for offset in offsets:
        buffer += b"%010d 00000 n \n" % offset
    buffer += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(buffer)


def _blank_pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class SourceTypeTests(unittest.TestCase):
    def test_declared_content_type_wins(self):
        self.assertEqual(detect_source_type("resume.bin", PDF_MIME), "pdf")
        self.assertEqual(detect_source_type("resume", f"{DOCX_MIME}; charset=binary"), "docx")

    def test_extension_is_used_for_generic_content_types(self):
        self.assertEqual(detect_source_type("Resume.PDF", "application/octet-stream"), "pdf")
        self.assertEqual(detect_source_type("cv.docx", None), "docx")

    def test_other_formats_are_rejected(self):
        for file_name, content_type in (
            ("resume.txt", "text/plain"),
            ("resume.doc", "application/msword"),
            ("photo.png", "image/png"),
        ):
            with self.assertRaises(UnsupportedFormatError) as ctx:
                detect_source_type(file_name, content_type)
            self.assertEqual(str(ctx.exception), "Unsupported file type. Please upload PDF or DOCX only.")
            self.assertEqual(ctx.exception.status_code, 400)


class ExtractResumeTextTests(unittest.TestCase):
    def test_docx_paragraphs_are_extracted_in_order(self):
        content = _docx_bytes(
            "Jane Roe - Software Engineer",
            "Experience: Built billing APIs for 200 clients",
        )
        parsed = extract_resume_text("resume.docx", DOCX_MIME, content)
        self.assertEqual(parsed.source_type, "docx")
        self.assertEqual(parsed.file_name, "resume.docx")
        self.assertEqual(
            parsed.text,
            "Jane Roe - Software Engineer\nExperience: Built billing APIs for 200 clients",
        )
        self.assertEqual(parsed.byte_size, len(content))
        self.assertIn("python-docx could not open the file; used raw XML extraction.", parsed.parsing_warnings)

    def test_word_docx_is_read_by_python_docx(self):
        content = _word_docx_bytes(
            "Jane Roe - Backend Engineer",
            "",
            "Skills: Python, PostgreSQL, Kubernetes, Terraform",
        )
        parsed = extract_resume_text("resume.docx", DOCX_MIME, content)
        self.assertEqual(
            parsed.text,
            "Jane Roe - Backend Engineer\nSkills: Python, PostgreSQL, Kubernetes, Terraform",
        )
        self.assertEqual(parsed.parsing_warnings, [])

    def test_text_pdf_is_extracted(self):
        content = _text_pdf_bytes(
            "Jane Roe - Data Engineer",
            "Experience: Reduced pipeline latency by 40% at Acme",
        )
        parsed = extract_resume_text("resume.pdf", PDF_MIME, content)
        self.assertEqual(parsed.source_type, "pdf")
        self.assertIn("Jane Roe", parsed.text)
        self.assertIn("Reduced pipeline latency", parsed.text)
        self.assertEqual(parsed.parsing_warnings, [])

    def test_pdf_without_text_layer_is_reported_as_scanned(self):
        with self.assertRaises(ExtractionError) as ctx:
            extract_resume_text("scan.pdf", PDF_MIME, _blank_pdf_bytes())
        self.assertEqual(ctx.exception.status_code, 422)
        self.assertEqual(
            str(ctx.exception),
            "Failed to read file: This PDF appears to be scanned (image-based). "
            "Please upload a text-based PDF or DOCX from Google Docs/Word.",
        )

    def test_nearly_empty_docx_is_unreadable(self):
        with self.assertRaises(ExtractionError) as ctx:
            extract_resume_text("resume.docx", DOCX_MIME, _docx_bytes("Jane Roe"))
        self.assertEqual(ctx.exception.status_code, 422)
        self.assertEqual(
            str(ctx.exception),
            "Failed to read file: DOCX file appears to be empty or unreadable.",
        )

    def test_corrupt_pdf_is_wrapped_as_extraction_error(self):
        with self.assertRaises(ExtractionError) as ctx:
            extract_resume_text("resume.pdf", PDF_MIME, b"%PDF-1.4 definitely not a real pdf")
        self.assertTrue(str(ctx.exception).startswith("Failed to read file: "))

    def test_non_zip_docx_is_wrapped_as_extraction_error(self):
        with self.assertRaises(ExtractionError):
            extract_resume_text("resume.docx", DOCX_MIME, b"plain bytes pretending to be a docx")

    def test_unsupported_type_is_rejected_before_parsing(self):
        with self.assertRaises(UnsupportedFormatError):
            extract_resume_text("resume.txt", "text/plain", b"Experience and skills")


if __name__ == "__main__":
    unittest.main()
