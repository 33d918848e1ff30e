from typing import Any

import pymupdf

from statement_import.pdf.base import BasePdfExtractor
from statement_import.pdf.models import TextFragment


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads positioned words from PDF pages using PyMuPDF."""

    engine_name = "pymupdf"

    def _open(self, pdf_bytes: bytes) -> Any:
        return pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]

    def _page_count(self, document: Any) -> int:
        return int(document.page_count)

    def _page_fragments(self, document: Any, index: int) -> list[TextFragment]:
        # (x0, y0, x1, y1, word, block_no, line_no, word_no)
        words = document[index].get_text("words")
        return [
            TextFragment(text=word[4], x=float(word[0]), y=float(word[1]))
            for word in words
        ]

    def _raw_metadata(self, document: Any) -> dict[str, Any] | None:
        return document.metadata

    def _close(self, document: Any) -> None:
        document.close()
