import threading
from unittest.mock import MagicMock

import pytest

from statement_import.pdf.exceptions import ExtractionCancelledError
from statement_import.pdf.models import ExtractedContent, PageContent, RawDocument
from statement_import.worker.messages import (
    CancelledMessage,
    ContentMessage,
    ErrorMessage,
    ProgressMessage,
)
from statement_import.worker.worker import ExtractionJob, ExtractionWorker

CONTENT = ExtractedContent(pages=[PageContent(page_number=1, lines=["hello"])])
DOCUMENT = RawDocument(content=b"%PDF-1.4", file_name="statement.pdf")


def _make_worker() -> tuple[ExtractionWorker, MagicMock]:
    """Create a worker with a mocked extractor and a short poll timeout."""
    mock_extractor = MagicMock()
    settings = MagicMock(worker_poll_timeout_seconds=0.01)
    return ExtractionWorker(extractor=mock_extractor, settings=settings), mock_extractor


class TestSubmit:
    def test_delivers_content(self) -> None:
        worker, mock_extractor = _make_worker()
        mock_extractor.extract.return_value = CONTENT

        job = worker.submit(DOCUMENT)

        assert job.wait(timeout=5) == ContentMessage(job_id=job.id, content=CONTENT)
        assert job.done
        assert job.file_name == "statement.pdf"

    def test_jobs_get_distinct_ids(self) -> None:
        worker, mock_extractor = _make_worker()
        mock_extractor.extract.return_value = CONTENT

        first = worker.submit(DOCUMENT)
        second = worker.submit(DOCUMENT)
        first.wait(timeout=5)
        second.wait(timeout=5)

        assert first.id != second.id

    def test_messages_end_with_terminal(self) -> None:
        worker, mock_extractor = _make_worker()
        mock_extractor.extract.return_value = CONTENT

        messages = list(worker.submit(DOCUMENT).messages(timeout=5))

        assert isinstance(messages[-1], ContentMessage)
        assert all(isinstance(m, ProgressMessage) for m in messages[:-1])

    def test_messages_empty_once_finished(self) -> None:
        worker, mock_extractor = _make_worker()
        mock_extractor.extract.return_value = CONTENT
        job = worker.submit(DOCUMENT)
        job.wait(timeout=5)

        assert list(job.messages()) == []
        assert isinstance(job.wait(), ContentMessage)

    def test_failure_reported(self) -> None:
        worker, mock_extractor = _make_worker()
        mock_extractor.extract.side_effect = RuntimeError("boom")

        terminal = worker.submit(DOCUMENT).wait(timeout=5)

        assert isinstance(terminal, ErrorMessage)
        assert terminal.error == "boom"


class TestCancel:
    def test_cancel_running_job(self) -> None:
        worker, mock_extractor = _make_worker()
        started = threading.Event()

        def extract(pdf_bytes, progress, cancel_event):  # type: ignore[no-untyped-def]
            started.set()
            cancel_event.wait(5)
            raise ExtractionCancelledError("Extraction cancelled before page 2 of 3")

        mock_extractor.extract.side_effect = extract
        job = worker.submit(DOCUMENT)
        assert started.wait(5)

        job.cancel()

        assert job.wait(timeout=5) == CancelledMessage(job_id=job.id)
        assert job.cancel_event.is_set()


class TestExtractionJob:
    def test_timeout_without_messages(self) -> None:
        job = ExtractionJob("job-1", "statement.pdf", poll_timeout=0.01)

        with pytest.raises(TimeoutError):
            job.wait(timeout=0.05)

    def test_dead_thread_without_result(self) -> None:
        job = ExtractionJob("job-1", "statement.pdf", poll_timeout=0.01)
        thread = threading.Thread(target=lambda: None)
        job.start_on(thread)
        thread.join()

        with pytest.raises(RuntimeError, match="stopped without a result"):
            job.wait(timeout=5)

    def test_not_done_initially(self) -> None:
        assert not ExtractionJob("job-1", "statement.pdf").done
