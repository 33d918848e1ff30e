class PdfExtractionError(Exception):
    """Raised when a PDF document cannot be opened or decoded at all."""


class ExtractionCancelledError(Exception):
    """Raised at a page boundary once cancellation has been requested."""


class UnknownPdfEngineError(ValueError):
    """Raised when the configured PDF engine has no adapter."""
