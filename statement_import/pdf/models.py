from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class RawDocument:
    """A statement file as handed over by the caller."""

    content: bytes
    file_name: str


@dataclass(frozen=True)
class TextFragment:
    """A positioned run of text reported by a PDF engine."""

    text: str
    x: float
    y: float


@dataclass(frozen=True)
class PageContent:
    """Lines reconstructed from one page, top to bottom."""

    page_number: int
    lines: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class DocumentMetadata:
    title: str | None = None
    author: str | None = None
    creator: str | None = None
    creation_date: date | None = None


@dataclass(frozen=True)
class ExtractedContent:
    """Output of the extractor; consumed by the parser registry, never stored."""

    pages: list[PageContent] = field(default_factory=list)
    metadata: DocumentMetadata | None = None

    @property
    def full_text(self) -> str:
        return "\n\n".join(page.text for page in self.pages)

    @property
    def page_errors(self) -> list[str]:
        return [
            f"Page {page.page_number}: {page.error}"
            for page in self.pages
            if page.error is not None
        ]
