from collections.abc import Iterable, Sequence
from dataclasses import replace

from statement_import.config.settings import Settings
from statement_import.importer.aggregator import ImportAggregator
from statement_import.importer.exceptions import ExtractionCancelled, ExtractionFailedError
from statement_import.importer.models import ImportReview
from statement_import.matching.models import Account, Member
from statement_import.parsers.models import ParseResult
from statement_import.parsers.registry import ParserRegistry, build_default_registry
from statement_import.pdf.models import ExtractedContent
from statement_import.worker.messages import CancelledMessage, ContentMessage, ErrorMessage
from statement_import.worker.worker import ExtractionJob


def content_from_job(job: ExtractionJob, timeout: float | None = None) -> ExtractedContent:
    """Wait for *job* and return its content.

    Raises:
        ExtractionFailedError: if the job ended with an error.
        ExtractionCancelled: if the job was cancelled.
    """
    terminal = job.wait(timeout)
    if isinstance(terminal, ContentMessage):
        return terminal.content
    if isinstance(terminal, ErrorMessage):
        raise ExtractionFailedError(terminal.error)
    if isinstance(terminal, CancelledMessage):
        raise ExtractionCancelled(f"Extraction of {job.file_name} was cancelled")
    raise ExtractionFailedError(f"Unexpected terminal message: {terminal!r}")


class ImportPipeline:
    """Parse extracted statement text and build an import review."""

    def __init__(
        self,
        registry: ParserRegistry | None = None,
        aggregator: ImportAggregator | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._registry = registry or build_default_registry(self._settings)
        self._aggregator = aggregator or ImportAggregator()

    def parse_text(self, text: str, preferred_institution: str | None = None) -> ParseResult:
        preferred = preferred_institution or self._settings.default_institution or None
        return self._registry.detect_and_parse(text, preferred)

    def review_text(
        self,
        text: str,
        account_id: str,
        existing_keys: Iterable[str] = frozenset(),
        members: Sequence[Member] = (),
        accounts: Sequence[Account] = (),
        preferred_institution: str | None = None,
    ) -> ImportReview:
        parse_result = self.parse_text(text, preferred_institution)
        return self._aggregator.build_review(
            parse_result, account_id, existing_keys, members, accounts
        )

    def review_content(
        self,
        content: ExtractedContent,
        account_id: str,
        existing_keys: Iterable[str] = frozenset(),
        members: Sequence[Member] = (),
        accounts: Sequence[Account] = (),
        preferred_institution: str | None = None,
    ) -> ImportReview:
        """Review extracted content; unreadable pages become parse warnings."""
        parse_result = self.parse_text(content.full_text, preferred_institution)
        if content.page_errors:
            parse_result = replace(
                parse_result,
                warnings=(*content.page_errors, *parse_result.warnings),
            )
        return self._aggregator.build_review(
            parse_result, account_id, existing_keys, members, accounts
        )

    def review_job(
        self,
        job: ExtractionJob,
        account_id: str,
        existing_keys: Iterable[str] = frozenset(),
        members: Sequence[Member] = (),
        accounts: Sequence[Account] = (),
        preferred_institution: str | None = None,
        timeout: float | None = None,
    ) -> ImportReview:
        content = content_from_job(job, timeout)
        return self.review_content(
            content, account_id, existing_keys, members, accounts, preferred_institution
        )
