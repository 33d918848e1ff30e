import queue
import threading

from statement_import.logging.logger import Log
from statement_import.pdf.base import BasePdfExtractor
from statement_import.pdf.exceptions import ExtractionCancelledError
from statement_import.pdf.models import RawDocument
from statement_import.worker.messages import (
    CancelledMessage,
    ContentMessage,
    ErrorMessage,
    ProgressMessage,
    WorkerMessage,
)

COMPLETE_PERCENT = 100


class JobRunner:
    """Run one extraction job and report it over the job's channel.

    Every run puts exactly one terminal message on the channel: content,
    error or cancelled. Exceptions never escape ``run``.
    """

    def __init__(self, extractor: BasePdfExtractor) -> None:
        self._extractor = extractor

    def run(
        self,
        job_id: str,
        document: RawDocument,
        channel: "queue.Queue[WorkerMessage]",
        cancel_event: threading.Event,
    ) -> None:
        Log.info(f"Running extraction job {job_id}", file=document.file_name)

        def report(percent: int, message: str) -> None:
            channel.put(ProgressMessage(job_id=job_id, percent=percent, message=message))

        try:
            content = self._extractor.extract(document.content, report, cancel_event)
        except ExtractionCancelledError as exc:
            Log.info(f"Job {job_id} cancelled: {exc}")
            channel.put(CancelledMessage(job_id=job_id))
            return
        except Exception as exc:
            self._handle_failure(job_id, channel, exc)
            return

        if cancel_event.is_set():
            Log.info(f"Job {job_id} cancelled after extraction")
            channel.put(CancelledMessage(job_id=job_id))
            return

        for page_error in content.page_errors:
            Log.warning(f"Job {job_id} {page_error}")
        report(COMPLETE_PERCENT, "Complete")
        channel.put(ContentMessage(job_id=job_id, content=content))
        Log.info(f"Job {job_id} completed successfully", pages=len(content.pages))

    def _handle_failure(
        self,
        job_id: str,
        channel: "queue.Queue[WorkerMessage]",
        exc: Exception,
    ) -> None:
        Log.error(f"Job {job_id} failed: {exc}")
        channel.put(ErrorMessage(job_id=job_id, error=str(exc)))
