"""
Rendering Context

Responsibilities:
- Exports self-contained HTML to PDF through headless Chromium
- Guarantees the browser instance is closed on every exit path
- Bounds concurrent exports
- Validates produced PDFs

Owns: Rendering engine lifecycle, PDF generation, output validation
Never: Modifies HTML content
"""

from atsresume.contexts.rendering.exceptions import ExportFailedError
from atsresume.contexts.rendering.exporter import (
    DocumentExporter,
    ExportStage,
    export_pdf,
    get_default_exporter,
)
from atsresume.contexts.rendering.validator import PdfValidationResult, validate_pdf

__all__ = [
    "DocumentExporter",
    "ExportStage",
    "export_pdf",
    "get_default_exporter",
    "ExportFailedError",
    "PdfValidationResult",
    "validate_pdf",
]
