import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

CBA_STATEMENT_LINES = [
    "Commonwealth Bank of Australia",
    "Account Name: SMITH, JOHN SAVINGS",
    "BSB: 062-000 Account Number: 1234 5678",
    "Statement Period: 01/01/2024 to 31/01/2024",
    "Date Description Debit Credit Balance",
    "Opening Balance 1,000.00 CR",
    "02 Jan EFTPOS WOOLWORTHS 1234 45.50 954.50",
    "05 Jan SALARY ACME PTY LTD 2,500.00 3,454.50",
    "10 Jan TRANSFER TO SAVINGS 500.00 2,954.50",
    "15 Jan COFFEE CLUB 5.50 2,949.00",
    "Closing Balance 2,949.00 CR",
]


def _render(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for index, lines in enumerate(pages):
        if index:
            c.showPage()
        y = 740
        for line in lines:
            c.drawString(50, y, line)
            y -= 18
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _render([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _render([["Page one content"], ["Page two content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def cba_statement_text() -> str:
    return "\n".join(CBA_STATEMENT_LINES)


@pytest.fixture()
def cba_statement_pdf_bytes() -> bytes:
    """A one-page Commonwealth Bank statement with four transactions."""
    return _render([CBA_STATEMENT_LINES])
