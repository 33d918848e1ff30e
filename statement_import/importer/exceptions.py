class StatementImportError(Exception):
    """Base exception for the import pipeline."""


class ExtractionFailedError(StatementImportError):
    """The background extraction ended with an error message."""


class ExtractionCancelled(StatementImportError):
    """The background extraction was cancelled before producing content."""


class InvalidSelectionError(StatementImportError):
    """A selection referred to transactions that are not in the review."""
