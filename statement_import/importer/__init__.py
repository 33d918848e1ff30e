from statement_import.importer.aggregator import ImportAggregator, match_account
from statement_import.importer.exceptions import (
    ExtractionCancelled,
    ExtractionFailedError,
    InvalidSelectionError,
    StatementImportError,
)
from statement_import.importer.models import ImportReview, ImportSummary
from statement_import.importer.pipeline import ImportPipeline, content_from_job

__all__ = [
    "ExtractionCancelled",
    "ExtractionFailedError",
    "ImportAggregator",
    "ImportPipeline",
    "ImportReview",
    "ImportSummary",
    "InvalidSelectionError",
    "StatementImportError",
    "content_from_job",
    "match_account",
]
