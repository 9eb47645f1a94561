# ABOUTME: PDF rendering of the report model using PyMuPDF's Story layout engine
# ABOUTME: Landscape pages, header block repeated on each page, one table per comparison section

import html
import io
from pathlib import Path
from typing import Protocol

import fitz  # PyMuPDF

from langrank.extraction.base import RankingError
from langrank.report.model import HeaderOptions, ReportModel, ReportSection
from langrank.utils.logging import get_logger

PAGE_FORMAT = "a4-l"
# left, top, right, bottom
PAGE_MARGINS = (40, 110, 40, 60)
HEADER_TOP = 20

REPORT_CSS = """
* { font-family: sans-serif; }
h1 { font-size: 22px; font-weight: bold; text-align: center; margin: 0; }
h2 { font-size: 18px; font-weight: bold; margin-top: 20px; margin-bottom: 10px; }
p.subtitle { font-size: 16px; font-weight: bold; text-align: center; margin: 2px 0 0 0; }
p.date { font-size: 12px; text-align: right; }
p.empty { font-size: 12px; font-style: italic; }
table.header { width: 100%; }
table.ranking { width: 100%; border-collapse: collapse; }
table.ranking th { font-size: 13px; font-weight: bold; text-align: left; border-bottom: 1px solid black; }
table.ranking td { font-size: 12px; border-bottom: 0.5px solid #bbbbbb; padding: 3px; }
"""


class RenderFailure(RankingError):
    """The renderer could not produce a document; the run has no artifact."""


class ReportRenderer(Protocol):
    def render(self, model: ReportModel) -> bytes: ...


class PdfReportRenderer:
    """Render a ReportModel to PDF bytes."""

    def __init__(self, logo_path: Path | None = None):
        self.logo_path = logo_path
        self.logger = get_logger(__name__)

    def render(self, model: ReportModel) -> bytes:
        try:
            pdf_bytes = self._render(model)
        except Exception as e:
            self.logger.error("PDF rendering failed", error=str(e), error_type=type(e).__name__)
            raise RenderFailure(f"PDF rendering failed: {e}") from e

        self.logger.info("PDF rendered", sections=len(model.sections), size_bytes=len(pdf_bytes))
        return pdf_bytes

    def _render(self, model: ReportModel) -> bytes:
        logo = self._usable_logo(model.header)
        archive = fitz.Archive(str(logo.parent)) if logo else None
        header_html = self.header_html(model.header, logo.name if logo else None)
        body_story = fitz.Story(html=self.body_html(model), user_css=REPORT_CSS, archive=archive)

        mediabox = fitz.paper_rect(PAGE_FORMAT)
        left, top, right, bottom = PAGE_MARGINS
        header_rect = fitz.Rect(left, HEADER_TOP, mediabox.width - right, top - 5)
        body_rect = fitz.Rect(left, top, mediabox.width - right, mediabox.height - bottom)

        buffer = io.BytesIO()
        writer = fitz.DocumentWriter(buffer)
        more = True
        while more:
            device = writer.begin_page(mediabox)
            header_story = fitz.Story(html=header_html, user_css=REPORT_CSS, archive=archive)
            header_story.place(header_rect)
            header_story.draw(device)
            more, _ = body_story.place(body_rect)
            body_story.draw(device)
            writer.end_page()
        writer.close()
        return buffer.getvalue()

    def _usable_logo(self, header: HeaderOptions) -> Path | None:
        if not header.show_logo or self.logo_path is None:
            return None
        if not self.logo_path.is_file():
            self.logger.warning("Logo not found, rendering header without it", logo_path=str(self.logo_path))
            return None
        return self.logo_path

    @staticmethod
    def header_html(header: HeaderOptions, logo_name: str | None = None) -> str:
        logo_cell = f'<img src="{html.escape(logo_name)}" width="220" height="80"/>' if logo_name else ""
        date_cell = (
            f'<p class="date">{header.generated_on.strftime("%d/%m/%Y")}</p>' if header.show_date else ""
        )
        return (
            '<table class="header"><tr>'
            f'<td width="25%">{logo_cell}</td>'
            f'<td width="50%"><h1>{html.escape(header.title)}</h1>'
            f'<p class="subtitle">{html.escape(header.subtitle)}</p></td>'
            f'<td width="25%">{date_cell}</td>'
            "</tr></table>"
        )

    @classmethod
    def body_html(cls, model: ReportModel) -> str:
        return "".join(cls.section_html(section) for section in model.sections)

    @staticmethod
    def section_html(section: ReportSection) -> str:
        parts = [f"<h2>{html.escape(section.heading)}</h2>"]
        if not section.rows:
            parts.append('<p class="empty">No entries available.</p>')
            return "".join(parts)

        label_a, label_b = section.column_labels
        parts.append(
            '<table class="ranking"><tr>'
            f'<th width="12%">Position</th><th>{html.escape(label_a)}</th><th>{html.escape(label_b)}</th>'
            "</tr>"
        )
        for row in section.rows:
            parts.append(
                f"<tr><td>{row.position}</td>"
                f"<td>{html.escape(row.column_a)}</td>"
                f"<td>{html.escape(row.column_b)}</td></tr>"
            )
        parts.append("</table>")
        return "".join(parts)
