# ABOUTME: Report layer: rendering-independent document model and the PDF renderer
# ABOUTME: Pipeline Stage 3: merged tables → ReportModel → PDF bytes

from .model import (
    DEFAULT_SUBTITLE,
    DEFAULT_TITLE,
    AssemblyFailure,
    HeaderOptions,
    ReportModel,
    ReportSection,
    assemble,
    build_header,
)

# Import the renderer on demand so the model stays usable without PyMuPDF loaded:
# from langrank.report.renderer import PdfReportRenderer

__all__ = [
    "DEFAULT_SUBTITLE",
    "DEFAULT_TITLE",
    "AssemblyFailure",
    "HeaderOptions",
    "ReportModel",
    "ReportSection",
    "assemble",
    "build_header",
]
