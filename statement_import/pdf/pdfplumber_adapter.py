import io
from typing import Any

import pdfplumber

from statement_import.pdf.base import BasePdfExtractor
from statement_import.pdf.models import TextFragment


class PdfPlumberAdapter(BasePdfExtractor):
    """Reads positioned words from PDF pages using pdfplumber."""

    engine_name = "pdfplumber"

    def _open(self, pdf_bytes: bytes) -> Any:
        return pdfplumber.open(io.BytesIO(pdf_bytes))

    def _page_count(self, document: Any) -> int:
        return len(document.pages)

    def _page_fragments(self, document: Any, index: int) -> list[TextFragment]:
        words = document.pages[index].extract_words()
        return [
            TextFragment(text=word["text"], x=float(word["x0"]), y=float(word["top"]))
            for word in words
        ]

    def _raw_metadata(self, document: Any) -> dict[str, Any] | None:
        return document.metadata

    def _close(self, document: Any) -> None:
        document.close()
