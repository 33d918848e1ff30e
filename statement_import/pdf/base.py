import re
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date
from typing import Any

from statement_import.logging.logger import Log
from statement_import.pdf.exceptions import ExtractionCancelledError, PdfExtractionError
from statement_import.pdf.models import (
    DocumentMetadata,
    ExtractedContent,
    PageContent,
    TextFragment,
)

ProgressCallback = Callable[[int, str], None]

_PDF_DATE_RE = re.compile(r"D:(\d{4})(\d{2})(\d{2})")


def group_fragments_into_lines(
    fragments: list[TextFragment],
    tolerance: float = 3.0,
) -> list[str]:
    """Join positioned fragments into text lines.

    A new line starts whenever the vertical distance to the previous fragment
    exceeds *tolerance*. Fragments on the same line are separated by a single
    space unless one side already carries whitespace.
    """
    lines: list[str] = []
    current = ""
    last_y: float | None = None

    for fragment in fragments:
        if not fragment.text:
            continue
        if last_y is not None and abs(fragment.y - last_y) > tolerance:
            if current.strip():
                lines.append(current.strip())
            current = fragment.text
        else:
            if current and not current[-1].isspace() and not fragment.text[0].isspace():
                current += " "
            current += fragment.text
        last_y = fragment.y

    if current.strip():
        lines.append(current.strip())
    return lines


def parse_pdf_date(raw: object) -> date | None:
    """Parse the date part of a PDF date string (``D:YYYYMMDDHHmmSS...``)."""
    if not isinstance(raw, str):
        return None
    match = _PDF_DATE_RE.search(raw)
    if match is None:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def _ignore_progress(percent: int, message: str) -> None:
    _ = percent, message


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Adapters only open a document and list each page's positioned fragments.
    Line reconstruction, progress reporting and cancellation are shared here
    so every engine behaves the same way.
    """

    engine_name = "pdf"

    LOADING_PERCENT = 5
    PAGES_PERCENT = 90

    def __init__(self, line_tolerance: float = 3.0) -> None:
        self._line_tolerance = line_tolerance

    def extract(
        self,
        pdf_bytes: bytes,
        progress: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ExtractedContent:
        """Extract page-structured text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.
            progress: Called with ``(percent, message)`` once on load and once
                per page.
            cancel_event: Checked before each page; never mid-page.

        Returns:
            ExtractedContent with one PageContent per page.

        Raises:
            PdfExtractionError: if the document cannot be opened at all.
            ExtractionCancelledError: if *cancel_event* was set.
        """
        notify = progress or _ignore_progress
        notify(self.LOADING_PERCENT, "Loading PDF...")

        try:
            document = self._open(pdf_bytes)
        except Exception as exc:
            raise PdfExtractionError(f"{self.engine_name} extraction failed: {exc}") from exc

        try:
            try:
                page_count = self._page_count(document)
            except Exception as exc:
                raise PdfExtractionError(
                    f"{self.engine_name} extraction failed: {exc}"
                ) from exc
            pages: list[PageContent] = []
            for index in range(page_count):
                if cancel_event is not None and cancel_event.is_set():
                    raise ExtractionCancelledError(
                        f"Extraction cancelled before page {index + 1} of {page_count}"
                    )
                page_number = index + 1
                percent = max(
                    self.LOADING_PERCENT,
                    round(page_number / page_count * self.PAGES_PERCENT),
                )
                notify(percent, f"Processing page {page_number} of {page_count}")
                pages.append(self._extract_page(document, index))
            metadata = self._extract_metadata(document)
        finally:
            self._close(document)

        Log.debug(f"{self.engine_name} extracted {len(pages)} pages")
        return ExtractedContent(pages=pages, metadata=metadata)

    def _extract_page(self, document: Any, index: int) -> PageContent:
        page_number = index + 1
        try:
            fragments = self._page_fragments(document, index)
        except Exception as exc:
            Log.warning(f"Could not read page {page_number}: {exc}", engine=self.engine_name)
            return PageContent(page_number=page_number, lines=[], error=str(exc))
        lines = group_fragments_into_lines(fragments, self._line_tolerance)
        return PageContent(page_number=page_number, lines=lines)

    def _extract_metadata(self, document: Any) -> DocumentMetadata | None:
        try:
            raw = self._raw_metadata(document)
        except Exception as exc:
            Log.debug(f"Metadata unavailable: {exc}")
            return None
        if not raw:
            return None
        fields = {str(key).lower(): value for key, value in raw.items()}
        return DocumentMetadata(
            title=fields.get("title") or None,
            author=fields.get("author") or None,
            creator=fields.get("creator") or None,
            creation_date=parse_pdf_date(fields.get("creationdate")),
        )

    @abstractmethod
    def _open(self, pdf_bytes: bytes) -> Any:
        """Open the document; any exception is treated as fatal."""

    @abstractmethod
    def _page_count(self, document: Any) -> int: ...

    @abstractmethod
    def _page_fragments(self, document: Any, index: int) -> list[TextFragment]:
        """Return the page's fragments in the engine's reading order."""

    @abstractmethod
    def _raw_metadata(self, document: Any) -> dict[str, Any] | None: ...

    @abstractmethod
    def _close(self, document: Any) -> None: ...
