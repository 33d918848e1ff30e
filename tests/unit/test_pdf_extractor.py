import threading
from datetime import date
from typing import Any

import pytest

from statement_import.pdf.base import BasePdfExtractor, group_fragments_into_lines, parse_pdf_date
from statement_import.pdf.exceptions import ExtractionCancelledError, PdfExtractionError
from statement_import.pdf.models import TextFragment


class FakeExtractor(BasePdfExtractor):
    """In-memory engine: a document is a list of pages of fragments."""

    engine_name = "fake"

    def __init__(
        self,
        pages: list[list[TextFragment] | Exception],
        metadata: dict[str, Any] | None = None,
        open_error: Exception | None = None,
    ) -> None:
        super().__init__()
        self._pages = pages
        self._metadata = metadata
        self._open_error = open_error
        self.closed = False

    def _open(self, pdf_bytes: bytes) -> Any:
        if self._open_error is not None:
            raise self._open_error
        return self._pages

    def _page_count(self, document: Any) -> int:
        return len(document)

    def _page_fragments(self, document: Any, index: int) -> list[TextFragment]:
        page = document[index]
        if isinstance(page, Exception):
            raise page
        return page

    def _raw_metadata(self, document: Any) -> dict[str, Any] | None:
        return self._metadata

    def _close(self, document: Any) -> None:
        self.closed = True


def _line(y: float, *words: str) -> list[TextFragment]:
    return [TextFragment(text=word, x=10.0 * i, y=y) for i, word in enumerate(words)]


class TestGroupFragmentsIntoLines:
    def test_same_y_joined_with_space(self) -> None:
        lines = group_fragments_into_lines(_line(100, "15/01/2024", "COFFEE", "5.50"))
        assert lines == ["15/01/2024 COFFEE 5.50"]

    def test_new_line_beyond_tolerance(self) -> None:
        fragments = _line(100, "first") + _line(110, "second")
        assert group_fragments_into_lines(fragments) == ["first", "second"]

    def test_small_drift_stays_on_line(self) -> None:
        fragments = _line(100, "a") + _line(102.5, "b")
        assert group_fragments_into_lines(fragments, tolerance=3.0) == ["a b"]

    def test_existing_whitespace_not_doubled(self) -> None:
        fragments = [TextFragment("a ", 0, 100), TextFragment("b", 5, 100)]
        assert group_fragments_into_lines(fragments) == ["a b"]

    def test_blank_fragments_dropped(self) -> None:
        fragments = [TextFragment("", 0, 100), TextFragment("   ", 0, 120), TextFragment("x", 0, 140)]
        assert group_fragments_into_lines(fragments) == ["x"]


class TestParsePdfDate:
    def test_parses_pdf_date_string(self) -> None:
        assert parse_pdf_date("D:20240131120000+10'00'") == date(2024, 1, 31)

    def test_rejects_non_string(self) -> None:
        assert parse_pdf_date(None) is None

    def test_rejects_invalid_date(self) -> None:
        assert parse_pdf_date("D:20241341") is None


class TestExtract:
    def test_returns_one_page_content_per_page(self) -> None:
        extractor = FakeExtractor([_line(100, "Page", "one"), _line(100, "Page", "two")])
        content = extractor.extract(b"%PDF")
        assert [page.page_number for page in content.pages] == [1, 2]
        assert content.full_text == "Page one\n\nPage two"

    def test_progress_is_monotonic(self) -> None:
        extractor = FakeExtractor([_line(100, "x")] * 7)
        seen: list[int] = []
        extractor.extract(b"%PDF", progress=lambda percent, _msg: seen.append(percent))
        assert seen[0] == 5
        assert seen == sorted(seen)
        assert seen[-1] == 90

    def test_progress_messages_name_pages(self) -> None:
        extractor = FakeExtractor([_line(100, "x"), _line(100, "y")])
        messages: list[str] = []
        extractor.extract(b"%PDF", progress=lambda _p, msg: messages.append(msg))
        assert messages == ["Loading PDF...", "Processing page 1 of 2", "Processing page 2 of 2"]

    def test_open_failure_raises_extraction_error(self) -> None:
        extractor = FakeExtractor([], open_error=RuntimeError("broken xref"))
        with pytest.raises(PdfExtractionError, match="broken xref"):
            extractor.extract(b"junk")

    def test_unreadable_page_recorded_and_skipped(self) -> None:
        extractor = FakeExtractor([_line(100, "ok"), ValueError("bad font")])
        content = extractor.extract(b"%PDF")
        assert content.pages[0].lines == ["ok"]
        assert content.pages[1].lines == []
        assert content.page_errors == ["Page 2: bad font"]

    def test_cancel_before_first_page(self) -> None:
        extractor = FakeExtractor([_line(100, "x")])
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(ExtractionCancelledError):
            extractor.extract(b"%PDF", cancel_event=cancel)
        assert extractor.closed

    def test_cancel_observed_at_page_boundary(self) -> None:
        extractor = FakeExtractor([_line(100, "x"), _line(100, "y"), _line(100, "z")])
        cancel = threading.Event()

        def progress(percent: int, message: str) -> None:
            if message == "Processing page 2 of 3":
                cancel.set()

        with pytest.raises(ExtractionCancelledError, match="page 3 of 3"):
            extractor.extract(b"%PDF", progress=progress, cancel_event=cancel)

    def test_document_closed_after_success(self) -> None:
        extractor = FakeExtractor([_line(100, "x")])
        extractor.extract(b"%PDF")
        assert extractor.closed

    def test_metadata_read_with_lowercased_keys(self) -> None:
        extractor = FakeExtractor(
            [_line(100, "x")],
            metadata={"Title": "January statement", "CreationDate": "D:20240201"},
        )
        content = extractor.extract(b"%PDF")
        assert content.metadata is not None
        assert content.metadata.title == "January statement"
        assert content.metadata.creation_date == date(2024, 2, 1)

    def test_missing_metadata_is_none(self) -> None:
        content = FakeExtractor([_line(100, "x")]).extract(b"%PDF")
        assert content.metadata is None
