from statement_import.config.settings import Settings
from statement_import.logging.logger import Log
from statement_import.pdf.base import BasePdfExtractor
from statement_import.pdf.exceptions import UnknownPdfEngineError
from statement_import.pdf.pdfplumber_adapter import PdfPlumberAdapter
from statement_import.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Builds the statement text extractor for a PDF engine.

    The engine comes from ``settings.pdf_engine`` unless one is named
    explicitly; both adapters share the configured line tolerance.
    """

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        adapter.engine_name: adapter for adapter in (PdfPlumberAdapter, PyMuPdfAdapter)
    }

    @classmethod
    def engines(cls) -> list[str]:
        return sorted(cls.ADAPTERS)

    @classmethod
    def create(cls, settings: Settings, engine: str | None = None) -> BasePdfExtractor:
        name = (engine or settings.pdf_engine).strip().lower()
        adapter_cls = cls.ADAPTERS.get(name)
        if adapter_cls is None:
            raise UnknownPdfEngineError(
                f"Unknown PDF engine '{name}'. Choose from: {', '.join(cls.engines())}"
            )
        Log.debug(
            f"Extracting statement text with {name}",
            line_tolerance=settings.pdf_line_tolerance,
        )
        return adapter_cls(line_tolerance=settings.pdf_line_tolerance)
