"""Unit tests for PDF validation."""

from io import BytesIO

import pytest
from PyPDF2 import PdfWriter

from atsresume.contexts.rendering import validate_pdf
from atsresume.contexts.rendering.validator import page_count


def blank_pdf(pages: int = 1) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=595, height=842)
    buf = BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.mark.unit
def test_valid_pdf():
    result = validate_pdf(blank_pdf(2))

    assert result.is_valid
    assert result.page_count == 2
    assert result.issues == []


@pytest.mark.unit
def test_missing_signature():
    result = validate_pdf(b"<html>not a pdf</html>")

    assert not result.is_valid
    assert result.page_count is None
    assert result.issues == ["Missing %PDF- signature"]


@pytest.mark.unit
def test_truncated_pdf():
    assert page_count(b"%PDF-1.7\n") is None

    result = validate_pdf(b"%PDF-1.7\n")
    assert not result.is_valid
    assert "PDF could not be parsed" in result.issues


@pytest.mark.unit
def test_expected_text_missing():
    result = validate_pdf(blank_pdf(), expected_text="Ada Lovelace")

    assert not result.is_valid
    assert result.page_count == 1
    assert result.issues == ["Expected text not found: 'Ada Lovelace'"]
