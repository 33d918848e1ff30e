import json
import threading
from pathlib import Path
from queue import Queue

import pytest

from statement_import.config.settings import Settings
from statement_import.importer.pipeline import ImportPipeline
from statement_import.main import EXIT_EXTRACTION_FAILED, EXIT_OK, EXIT_UNSUPPORTED, main
from statement_import.parsers.models import TransactionKind
from statement_import.pdf.factory import PdfExtractorFactory
from statement_import.pdf.models import RawDocument
from statement_import.worker.job_runner import JobRunner
from statement_import.worker.messages import CancelledMessage, ErrorMessage, ProgressMessage
from statement_import.worker.worker import ExtractionWorker

ENGINES = ["pdfplumber", "pymupdf"]


@pytest.mark.integration
@pytest.mark.parametrize("engine", ENGINES)
class TestStatementImport:
    def test_worker_to_review(self, engine: str, cba_statement_pdf_bytes: bytes) -> None:
        settings = Settings(pdf_engine=engine, worker_poll_timeout_seconds=0.05)
        job = ExtractionWorker(settings=settings).submit(
            RawDocument(content=cba_statement_pdf_bytes, file_name="cba.pdf")
        )

        review = ImportPipeline(settings=settings).review_job(job, account_id="acc-1", timeout=30)

        result = review.parse_result
        assert result.success
        assert result.institution_code == "cba"
        assert result.account_number == "5678"
        assert [tx.amount for tx in review.unique] == [-4550, 250000, -50000, -550]
        assert review.unique[2].kind == TransactionKind.TRANSFER
        assert review.summary.total_count == 4

    def test_progress_reaches_complete(self, engine: str, cba_statement_pdf_bytes: bytes) -> None:
        settings = Settings(pdf_engine=engine, worker_poll_timeout_seconds=0.05)
        job = ExtractionWorker(settings=settings).submit(
            RawDocument(content=cba_statement_pdf_bytes, file_name="cba.pdf")
        )

        percents = [
            message.percent
            for message in job.messages(timeout=30)
            if isinstance(message, ProgressMessage)
        ]

        assert percents == sorted(percents)
        assert percents[-1] == 100

    def test_cancel_before_first_page(self, engine: str, cba_statement_pdf_bytes: bytes) -> None:
        runner = JobRunner(PdfExtractorFactory.create(Settings(pdf_engine=engine)))
        channel: Queue = Queue()
        cancel_event = threading.Event()
        cancel_event.set()

        runner.run("job-1", RawDocument(cba_statement_pdf_bytes, "cba.pdf"), channel, cancel_event)

        messages = []
        while not channel.empty():
            messages.append(channel.get_nowait())
        assert messages[-1] == CancelledMessage(job_id="job-1")

    def test_corrupt_pdf_reports_error(self, engine: str) -> None:
        settings = Settings(pdf_engine=engine, worker_poll_timeout_seconds=0.05)
        job = ExtractionWorker(settings=settings).submit(
            RawDocument(content=b"not a pdf at all", file_name="broken.pdf")
        )

        terminal = job.wait(timeout=30)

        assert isinstance(terminal, ErrorMessage)
        assert engine in terminal.error


@pytest.mark.integration
class TestCommandLine:
    @pytest.mark.parametrize("engine", ENGINES)
    def test_prints_review(
        self,
        engine: str,
        tmp_path: Path,
        cba_statement_pdf_bytes: bytes,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        pdf_path = tmp_path / "cba.pdf"
        pdf_path.write_bytes(cba_statement_pdf_bytes)

        code = main([str(pdf_path), "--engine", engine, "--account-id", "acc-1"])

        payload = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert payload["institution"] == "cba"
        assert len(payload["transactions"]) == 4

    def test_unsupported_statement(
        self,
        tmp_path: Path,
        sample_pdf_bytes: bytes,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        pdf_path = tmp_path / "hello.pdf"
        pdf_path.write_bytes(sample_pdf_bytes)

        code = main([str(pdf_path)])

        payload = json.loads(capsys.readouterr().out)
        assert code == EXIT_UNSUPPORTED
        assert payload["errors"][0].startswith("Unable to detect bank format")

    def test_corrupt_file(self, tmp_path: Path) -> None:
        pdf_path = tmp_path / "broken.pdf"
        pdf_path.write_bytes(b"garbage")

        assert main([str(pdf_path)]) == EXIT_EXTRACTION_FAILED
