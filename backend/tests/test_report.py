"""Tests for the PDF report generator."""

import io
from unittest.mock import patch

import pdfplumber
import pytest

from translatrix.core.errors import ReportGenerationError
from translatrix.core.report import ReportGenerator, markdown_inline

SAMPLE = """# Annual Report
## Summary
**Key figures**
Sales grew by **12%** this *year* & costs < budget.

| Year | Sales |
|------|-------|
| 2023 | 100 |
| 2024 | 112 |

### Notes
Plain closing line.
"""


@pytest.fixture
def generator():
    # Helvetica keeps text extraction predictable
    with patch.object(ReportGenerator, "_register_fonts", return_value=None):
        yield ReportGenerator()


def page_texts(pdf_bytes):
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


class TestMarkdownInline:
    """Tests for inline markup conversion"""

    def test_bold_and_italic(self):
        assert markdown_inline("a **b** *c*") == "a <b>b</b> <i>c</i>"

    def test_escapes_markup(self):
        assert markdown_inline("x < y & z") == "x &lt; y &amp; z"

    def test_multiplication_is_not_italic(self):
        assert markdown_inline("2 * 3 * 4") == "2 * 3 * 4"


class TestReportGenerator:
    """Tests for PDF output"""

    def test_generates_pdf(self, generator):
        pdf = generator.generate(SAMPLE, "informe.docx", "spanish", "english", {"model": "Claude Sonnet"})

        assert pdf.startswith(b"%PDF")
        text = page_texts(pdf)[0]
        assert "TRANSLATION REPORT" in text
        assert "informe.docx" in text
        assert "SPANISH to ENGLISH" in text
        assert "Claude Sonnet" in text
        assert "Translated Document" in text
        assert "Annual Report" in text
        assert "2024" in text
        assert "Page 1 of 1" in text

    def test_footer_counts_all_pages(self, generator):
        text = "\n".join(f"Line {i} of a long translated document." for i in range(300))
        pages = page_texts(generator.generate(text))

        assert len(pages) > 1
        assert f"Page 1 of {len(pages)}" in pages[0]
        assert f"Page {len(pages)} of {len(pages)}" in pages[-1]
        assert "Translatrix Pro - AI Document Translation" in pages[-1]

    def test_word_count_defaults_to_text(self, generator):
        text = page_texts(generator.generate("one two three four"))[0]
        assert "Word Count: 4" in text

    def test_failure_raises_report_error(self, generator):
        with patch.object(ReportGenerator, "_build", side_effect=RuntimeError("layout exploded")):
            with pytest.raises(ReportGenerationError) as exc_info:
                generator.generate("text")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "PDF generation failed"
        assert exc_info.value.details == "layout exploded"
