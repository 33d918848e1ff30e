import queue
import threading
from unittest.mock import MagicMock

from statement_import.pdf.exceptions import ExtractionCancelledError, PdfExtractionError
from statement_import.pdf.models import ExtractedContent, PageContent, RawDocument
from statement_import.worker.job_runner import JobRunner
from statement_import.worker.messages import (
    CancelledMessage,
    ContentMessage,
    ErrorMessage,
    ProgressMessage,
    is_terminal,
)

CONTENT = ExtractedContent(pages=[PageContent(page_number=1, lines=["Commonwealth Bank"])])
DOCUMENT = RawDocument(content=b"%PDF-1.4", file_name="statement.pdf")


def _make_runner() -> tuple[JobRunner, MagicMock]:
    """Create a JobRunner with a mocked extractor."""
    mock_extractor = MagicMock()
    return JobRunner(mock_extractor), mock_extractor


def _run(runner: JobRunner, cancel_event: threading.Event | None = None) -> list:
    channel: queue.Queue = queue.Queue()
    runner.run("job-1", DOCUMENT, channel, cancel_event or threading.Event())
    messages = []
    while not channel.empty():
        messages.append(channel.get_nowait())
    return messages


def _extract_pages(pdf_bytes, progress, cancel_event):  # type: ignore[no-untyped-def]
    progress(5, "Loading PDF...")
    progress(45, "Processing page 1 of 2")
    progress(90, "Processing page 2 of 2")
    return CONTENT


class TestSuccessfulExtraction:
    def test_passes_document_bytes(self) -> None:
        runner, mock_extractor = _make_runner()
        mock_extractor.extract.return_value = CONTENT
        cancel_event = threading.Event()

        _run(runner, cancel_event)

        args = mock_extractor.extract.call_args.args
        assert args[0] == b"%PDF-1.4"
        assert args[2] is cancel_event

    def test_ends_with_content(self) -> None:
        runner, mock_extractor = _make_runner()
        mock_extractor.extract.return_value = CONTENT

        messages = _run(runner)

        assert messages[-1] == ContentMessage(job_id="job-1", content=CONTENT)

    def test_progress_monotonic_and_complete(self) -> None:
        runner, mock_extractor = _make_runner()
        mock_extractor.extract.side_effect = _extract_pages

        messages = _run(runner)

        percents = [m.percent for m in messages if isinstance(m, ProgressMessage)]
        assert percents == [5, 45, 90, 100]
        assert percents == sorted(percents)
        assert messages[-2] == ProgressMessage(job_id="job-1", percent=100, message="Complete")

    def test_page_errors_still_deliver_content(self) -> None:
        runner, mock_extractor = _make_runner()
        content = ExtractedContent(pages=[PageContent(page_number=1, error="bad font")])
        mock_extractor.extract.return_value = content

        messages = _run(runner)

        assert messages[-1] == ContentMessage(job_id="job-1", content=content)


class TestFailures:
    def test_extraction_error_becomes_error_message(self) -> None:
        runner, mock_extractor = _make_runner()
        mock_extractor.extract.side_effect = PdfExtractionError("pdfplumber extraction failed: bad")

        messages = _run(runner)

        assert messages == [ErrorMessage(job_id="job-1", error="pdfplumber extraction failed: bad")]

    def test_unexpected_error_does_not_escape(self) -> None:
        runner, mock_extractor = _make_runner()
        mock_extractor.extract.side_effect = RuntimeError("boom")

        messages = _run(runner)

        assert messages == [ErrorMessage(job_id="job-1", error="boom")]


class TestCancellation:
    def test_cancelled_during_extraction(self) -> None:
        runner, mock_extractor = _make_runner()
        mock_extractor.extract.side_effect = ExtractionCancelledError("stop")

        messages = _run(runner)

        assert messages == [CancelledMessage(job_id="job-1")]

    def test_cancelled_after_last_page(self) -> None:
        runner, mock_extractor = _make_runner()
        mock_extractor.extract.return_value = CONTENT
        cancel_event = threading.Event()
        cancel_event.set()

        messages = _run(runner, cancel_event)

        assert messages == [CancelledMessage(job_id="job-1")]


def test_exactly_one_terminal_message() -> None:
    for side_effect in (None, RuntimeError("boom"), ExtractionCancelledError("stop")):
        runner, mock_extractor = _make_runner()
        mock_extractor.extract.return_value = CONTENT
        mock_extractor.extract.side_effect = side_effect

        messages = _run(runner)

        assert sum(is_terminal(m) for m in messages) == 1
        assert is_terminal(messages[-1])
