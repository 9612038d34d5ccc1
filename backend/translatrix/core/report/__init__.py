"""PDF report rendering."""

from .pdf_generator import ReportGenerator, markdown_inline

__all__ = ["ReportGenerator", "markdown_inline"]
