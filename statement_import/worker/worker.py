import queue
import threading
import uuid
from collections.abc import Iterator

from statement_import.config.settings import Settings
from statement_import.logging.logger import Log
from statement_import.pdf.base import BasePdfExtractor
from statement_import.pdf.factory import PdfExtractorFactory
from statement_import.pdf.models import RawDocument
from statement_import.worker.job_runner import JobRunner
from statement_import.worker.messages import WorkerMessage, is_terminal


class ExtractionJob:
    """Handle to one background extraction.

    The caller reads progress and the single terminal message from the job's
    channel and may request cancellation at any time; the worker honours it
    at the next page boundary.
    """

    def __init__(
        self,
        job_id: str,
        file_name: str,
        poll_timeout: float = 0.5,
    ) -> None:
        self.id = job_id
        self.file_name = file_name
        self.channel: queue.Queue[WorkerMessage] = queue.Queue()
        self.cancel_event = threading.Event()
        self._poll_timeout = poll_timeout
        self._thread: threading.Thread | None = None
        self._terminal: WorkerMessage | None = None

    def cancel(self) -> None:
        Log.info(f"Cancellation requested for job {self.id}")
        self.cancel_event.set()

    @property
    def done(self) -> bool:
        return self._terminal is not None

    def messages(self, timeout: float | None = None) -> Iterator[WorkerMessage]:
        """Yield messages in order, ending with the terminal one.

        Raises:
            TimeoutError: if no message arrives within *timeout* seconds.
        """
        if self._terminal is not None:
            return
        while True:
            message = self._next(timeout)
            yield message
            if is_terminal(message):
                self._terminal = message
                return

    def wait(self, timeout: float | None = None) -> WorkerMessage:
        """Drain the channel and return the terminal message."""
        for _message in self.messages(timeout):
            pass
        if self._terminal is None:
            raise RuntimeError(f"Extraction job {self.id} has no terminal message")
        return self._terminal

    def _next(self, timeout: float | None) -> WorkerMessage:
        waited = 0.0
        while True:
            try:
                return self.channel.get(timeout=self._poll_timeout)
            except queue.Empty:
                waited += self._poll_timeout
                if self._thread is not None and not self._thread.is_alive() and self.channel.empty():
                    raise RuntimeError(f"Extraction job {self.id} stopped without a result")
                if timeout is not None and waited >= timeout:
                    raise TimeoutError(f"No message from job {self.id} within {timeout}s")

    def start_on(self, thread: threading.Thread) -> None:
        self._thread = thread
        thread.start()


class ExtractionWorker:
    """Runs each submitted document on its own daemon thread."""

    def __init__(
        self,
        extractor: BasePdfExtractor | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._job_runner = JobRunner(extractor or PdfExtractorFactory.create(self._settings))

    def submit(self, document: RawDocument) -> ExtractionJob:
        job = ExtractionJob(
            job_id=uuid.uuid4().hex,
            file_name=document.file_name,
            poll_timeout=self._settings.worker_poll_timeout_seconds,
        )
        thread = threading.Thread(
            target=self._job_runner.run,
            args=(job.id, document, job.channel, job.cancel_event),
            name=f"extraction-{job.id[:8]}",
            daemon=True,
        )
        Log.info(f"Submitted extraction job {job.id}", file=document.file_name)
        job.start_on(thread)
        return job
