"""
PDF output validation.

Checks that exported bytes are a readable PDF: signature, page count, and
optionally that expected text (e.g., the candidate's name) was rendered.
"""

from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional

import pdfplumber
from PyPDF2 import PdfReader

from atsresume.contexts.rendering.exporter import PDF_SIGNATURE
from atsresume.contexts.rendering.logger import _log_info, _log_warning


@dataclass
class PdfValidationResult:
    """
    Result of PDF validation.

    Attributes:
        is_valid: Whether all checks passed
        page_count: Number of pages (None if unreadable)
        issues: Human-readable descriptions of failed checks
    """

    is_valid: bool
    page_count: Optional[int] = None
    issues: List[str] = field(default_factory=list)


def page_count(pdf_bytes: bytes) -> Optional[int]:
    """Get page count from PDF bytes, or None if unreadable."""
    try:
        reader = PdfReader(BytesIO(pdf_bytes))
        return len(reader.pages)
    except Exception:
        return None


def extract_text(pdf_bytes: bytes) -> str:
    """Extract the text of every page, joined by newlines."""
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        return "\n".join(page.extract_text() or "" for page in pdf.pages)


def validate_pdf(pdf_bytes: bytes, expected_text: Optional[str] = None) -> PdfValidationResult:
    """
    Validate exported PDF bytes.

    Args:
        pdf_bytes: Output of the exporter
        expected_text: Text that must appear somewhere in the document

    Returns:
        PdfValidationResult
    """
    issues = []

    if not pdf_bytes.startswith(PDF_SIGNATURE):
        issues.append("Missing %PDF- signature")
        return PdfValidationResult(is_valid=False, issues=issues)

    pages = page_count(pdf_bytes)
    if pages is None:
        issues.append("PDF could not be parsed")
    elif pages == 0:
        issues.append("PDF has no pages")

    if expected_text and pages:
        text = extract_text(pdf_bytes)
        if expected_text not in text:
            issues.append(f"Expected text not found: {expected_text!r}")

    result = PdfValidationResult(is_valid=not issues, page_count=pages, issues=issues)
    if result.is_valid:
        _log_info(f"PDF valid: {pages} page(s)")
    else:
        for issue in issues:
            _log_warning(f"PDF validation issue: {issue}")
    return result
