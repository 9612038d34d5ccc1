"""PDF report generator for translated documents.

Renders translated text into an A4 report using ReportLab. The text is read
line by line with a small markdown-like convention: '#' headings, '**bold**'
lines, '|'-delimited table rows and inline bold/italic.
"""

import logging
import os
import re
from datetime import datetime
from io import BytesIO
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.colors import Color, black, white
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    BaseDocTemplate, Frame, HRFlowable, PageTemplate, Paragraph, Spacer, Table, TableStyle
)

from translatrix.core.errors import ReportGenerationError
from translatrix.utils.text import count_words

logger = logging.getLogger(__name__)

MARGIN = 50
FOOTER_TEXT = "Translatrix Pro - AI Document Translation"

_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"(?<!\*)\*(?!\s)(.+?)(?<!\s)\*(?!\*)")
_TABLE_SEPARATOR = re.compile(r"^\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?$")


def markdown_inline(text: str) -> str:
    """Escape text for a ReportLab Paragraph and convert **bold** and *italic*."""
    text = escape(text)
    text = _BOLD.sub(r"<b>\1</b>", text)
    return _ITALIC.sub(r"<i>\1</i>", text)


def _split_row(line: str) -> List[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


class NumberedCanvas(canvas.Canvas):
    """Canvas that defers page output so the footer can show the page total."""

    def __init__(self, *args, **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(page_count)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def _draw_footer(self, page_count: int):
        self.saveState()
        self.setFont("Helvetica", 8)
        self.setFillColor(Color(0.4, 0.4, 0.4))
        text = f"Page {self.getPageNumber()} of {page_count} | {FOOTER_TEXT}"
        self.drawCentredString(self._pagesize[0] / 2, MARGIN / 2, text)
        self.restoreState()


class ReportGenerator:
    """Generate translation reports as PDF bytes."""

    # Class-level font registration
    _fonts_registered = False
    _font_name: Optional[str] = None
    _bold_font_name: Optional[str] = None

    @classmethod
    def _register_fonts(cls) -> Optional[str]:
        """Register a Unicode TTF font family if one exists on this system.

        Returns:
            Registered family name, or None to fall back to Helvetica
        """
        if cls._fonts_registered:
            return cls._font_name

        # (regular, bold) pairs
        candidates = [
            ("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
             "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"),
            ("/usr/share/fonts/dejavu/DejaVuSans.ttf",
             "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf"),
            ("/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
             "/usr/share/fonts/truetype/noto/NotoSans-Bold.ttf"),
            ("/Library/Fonts/Arial Unicode.ttf", None),
            ("/System/Library/Fonts/Supplemental/Arial Unicode.ttf", None),
            ("C:/Windows/Fonts/arialuni.ttf", None),
            ("C:/Windows/Fonts/arial.ttf", "C:/Windows/Fonts/arialbd.ttf"),
        ]

        for regular, bold in candidates:
            if not os.path.exists(regular):
                continue
            try:
                pdfmetrics.registerFont(TTFont("ReportFont", regular))
                bold_name = "ReportFont"
                if bold and os.path.exists(bold):
                    pdfmetrics.registerFont(TTFont("ReportFont-Bold", bold))
                    bold_name = "ReportFont-Bold"
                pdfmetrics.registerFontFamily(
                    "ReportFont",
                    normal="ReportFont",
                    bold=bold_name,
                    italic="ReportFont",
                    boldItalic=bold_name,
                )
                cls._font_name = "ReportFont"
                cls._bold_font_name = bold_name
                logger.info(f"Registered TTF font: {regular}")
                break
            except Exception as e:
                logger.debug(f"Failed to register {regular}: {e}")
                continue
        else:
            logger.warning("No Unicode font available, non-Latin text may not render correctly")

        cls._fonts_registered = True
        return cls._font_name

    def _create_styles(self, font: Optional[str] = None) -> Dict[str, ParagraphStyle]:
        """Create paragraph styles for the report."""
        base = getSampleStyleSheet()
        main_font = font or "Helvetica"
        bold_font = self._bold_font_name if font else "Helvetica-Bold"
        accent = Color(0.15, 0.25, 0.45)

        return {
            "title": ParagraphStyle(
                "ReportTitle", parent=base["Title"], fontName=bold_font,
                fontSize=20, textColor=accent, spaceAfter=6,
            ),
            "subtitle": ParagraphStyle(
                "ReportSubtitle", parent=base["Normal"], fontName=main_font,
                fontSize=9, alignment=1, textColor=Color(0.4, 0.4, 0.4), spaceAfter=18,
            ),
            "section": ParagraphStyle(
                "ReportSection", parent=base["Heading2"], fontName=bold_font,
                fontSize=13, textColor=accent, spaceBefore=10, spaceAfter=6,
            ),
            "info": ParagraphStyle(
                "ReportInfo", parent=base["Normal"], fontName=main_font,
                fontSize=10, leading=14,
            ),
            "h1": ParagraphStyle(
                "ContentH1", parent=base["Heading1"], fontName=bold_font,
                fontSize=16, spaceBefore=12, spaceAfter=6,
            ),
            "h2": ParagraphStyle(
                "ContentH2", parent=base["Heading2"], fontName=bold_font,
                fontSize=14, spaceBefore=10, spaceAfter=5,
            ),
            "h3": ParagraphStyle(
                "ContentH3", parent=base["Heading3"], fontName=bold_font,
                fontSize=12, spaceBefore=8, spaceAfter=4,
            ),
            "bold": ParagraphStyle(
                "ContentBold", parent=base["Normal"], fontName=bold_font,
                fontSize=10.5, leading=15, spaceBefore=4, spaceAfter=4,
            ),
            "body": ParagraphStyle(
                "ContentBody", parent=base["Normal"], fontName=main_font,
                fontSize=10.5, leading=15, spaceAfter=4,
            ),
            "cell": ParagraphStyle(
                "TableCell", parent=base["Normal"], fontName=main_font,
                fontSize=9, leading=12,
            ),
            "header_cell": ParagraphStyle(
                "TableHeaderCell", parent=base["Normal"], fontName=bold_font,
                fontSize=9, leading=12, textColor=white,
            ),
        }

    def _table(self, rows: List[List[str]], styles, width: float) -> Table:
        columns = max(len(row) for row in rows)
        data = []
        for index, row in enumerate(rows):
            style = styles["header_cell"] if index == 0 else styles["cell"]
            padded = row + [""] * (columns - len(row))
            data.append([Paragraph(markdown_inline(cell), style) for cell in padded])

        table = Table(data, colWidths=[width / columns] * columns, repeatRows=1)
        table.setStyle(TableStyle([
            ("GRID", (0, 0), (-1, -1), 0.5, Color(0.7, 0.7, 0.7)),
            ("BACKGROUND", (0, 0), (-1, 0), Color(0.15, 0.25, 0.45)),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]))
        return table

    def _render_content(self, text: str, styles, width: float) -> list:
        """Convert translated text into flowables."""
        story = []
        table_rows: List[List[str]] = []

        def flush_table():
            if table_rows:
                story.append(self._table(table_rows, styles, width))
                story.append(Spacer(1, 8))
                table_rows.clear()

        for raw_line in text.replace("\r\n", "\n").split("\n"):
            line = raw_line.strip()

            if line.startswith("|"):
                if not _TABLE_SEPARATOR.match(line):
                    table_rows.append(_split_row(line))
                continue
            flush_table()

            if not line:
                story.append(Spacer(1, 6))
            elif line.startswith("### "):
                story.append(Paragraph(markdown_inline(line[4:]), styles["h3"]))
            elif line.startswith("## "):
                story.append(Paragraph(markdown_inline(line[3:]), styles["h2"]))
            elif line.startswith("# "):
                story.append(Paragraph(markdown_inline(line[2:]), styles["h1"]))
            elif line.startswith("**") and line.endswith("**") and len(line) > 4:
                story.append(Paragraph(escape(line[2:-2]), styles["bold"]))
            else:
                story.append(Paragraph(markdown_inline(line), styles["body"]))

        flush_table()
        return story

    def generate(
        self,
        translated_text: str,
        file_name: str = "document",
        source_language: str = "spanish",
        target_language: str = "english",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        """Generate a PDF report.

        Args:
            translated_text: Text to render
            file_name: Original document name
            source_language: Source language name
            target_language: Target language name
            metadata: Optional response metadata (model, wordCount)

        Returns:
            PDF file as bytes

        Raises:
            ReportGenerationError: If rendering fails
        """
        metadata = metadata or {}
        try:
            return self._build(translated_text, file_name, source_language, target_language, metadata)
        except Exception as e:
            logger.error(f"PDF generation failed for {file_name}: {e}")
            raise ReportGenerationError(str(e)) from e

    def _build(self, translated_text, file_name, source_language, target_language, metadata) -> bytes:
        font = self._register_fonts()
        styles = self._create_styles(font)

        output = BytesIO()
        doc = BaseDocTemplate(
            output,
            pagesize=A4,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
            title=f"Translation Report - {file_name}",
            creator="Translatrix Pro",
        )
        frame = Frame(doc.leftMargin, doc.bottomMargin, doc.width, doc.height, id="normal")
        doc.addPageTemplates([PageTemplate(id="main", frames=frame)])

        arrow = "→" if font else "to"
        word_count = metadata.get("wordCount") or count_words(translated_text)
        info = [
            ("Original File", file_name),
            ("Language Pair", f"{source_language.upper()} {arrow} {target_language.upper()}"),
            ("Model", metadata.get("model") or "AI Translation"),
            ("Word Count", str(word_count)),
        ]

        story = [
            Paragraph("TRANSLATION REPORT", styles["title"]),
            Paragraph(f"Generated: {datetime.now():%Y-%m-%d %H:%M:%S}", styles["subtitle"]),
            Paragraph("Document Information", styles["section"]),
        ]
        for label, value in info:
            story.append(Paragraph(f"<b>{label}:</b> {escape(str(value))}", styles["info"]))
        story.append(Spacer(1, 10))
        story.append(HRFlowable(width="100%", thickness=1, color=black, spaceBefore=4, spaceAfter=10))
        story.append(Paragraph("Translated Document", styles["section"]))
        story.extend(self._render_content(translated_text, styles, doc.width))

        doc.build(story, canvasmaker=NumberedCanvas)
        pdf = output.getvalue()
        logger.info(f"Generated PDF report for {file_name}: {len(pdf)} bytes")
        return pdf
