from statement_import.config.settings import Settings
from statement_import.logging.logger import Log
from statement_import.parsers.bank import (
    AnzParser,
    BendigoParser,
    CbaParser,
    IngParser,
    MacquarieParser,
    NabParser,
    RaizParser,
    SwyftxParser,
    UpParser,
    WestpacParser,
)
from statement_import.parsers.base import BankParser
from statement_import.parsers.exceptions import UnknownInstitutionError
from statement_import.parsers.models import ParseResult
from statement_import.parsers.super import AustralianSuperParser, UniSuperParser

UNSUPPORTED_FORMAT_ERROR = (
    "Unable to detect bank format. Supported institutions: {names}. "
    "Please check that the PDF is a bank statement from a supported institution."
)


class ParserRegistry:
    """Ordered collection of institution parsers.

    Detection is first-match-wins over registration order, so parsers with
    the most specific identifiers must be registered first.
    """

    def __init__(self) -> None:
        self._parsers: list[BankParser] = []

    def register(self, parser: BankParser) -> None:
        if any(p.institution_code == parser.institution_code for p in self._parsers):
            Log.debug(f"Parser already registered: {parser.institution_code}")
            return
        self._parsers.append(parser)

    def all(self) -> list[BankParser]:
        return list(self._parsers)

    def get(self, institution_code: str) -> BankParser:
        for parser in self._parsers:
            if parser.institution_code == institution_code:
                return parser
        raise UnknownInstitutionError(f"No parser registered for institution: {institution_code}")

    def find_parser(self, text: str) -> BankParser | None:
        for parser in self._parsers:
            if parser.can_parse(text):
                return parser
        return None

    def detect_and_parse(self, text: str, preferred_institution: str | None = None) -> ParseResult:
        """Parse *text* with the first parser that claims it.

        A *preferred_institution* is tried first, but only if that parser
        also recognises the text. Unclaimed text yields a failed ParseResult.
        """
        parser = None
        if preferred_institution:
            candidate = next(
                (p for p in self._parsers if p.institution_code == preferred_institution),
                None,
            )
            if candidate is not None and candidate.can_parse(text):
                parser = candidate
            else:
                Log.debug(f"Preferred institution not applicable: {preferred_institution}")

        if parser is None:
            parser = self.find_parser(text)

        if parser is None:
            names = ", ".join(p.name for p in self._parsers)
            Log.info("No parser recognised the statement")
            return ParseResult.failure(UNSUPPORTED_FORMAT_ERROR.format(names=names))

        Log.info(f"Detected statement format: {parser.name}", institution=parser.institution_code)
        return parser.parse(text)


def build_default_registry(settings: Settings | None = None) -> ParserRegistry:
    """Registry with every built-in parser in detection priority order."""
    description_max_length = settings.description_max_length if settings else 200
    continuation_max_lines = settings.continuation_max_lines if settings else 2
    line_options = {
        "description_max_length": description_max_length,
        "continuation_max_lines": continuation_max_lines,
    }

    registry = ParserRegistry()
    for parser in (
        SwyftxParser(**line_options),
        RaizParser(**line_options),
        UpParser(**line_options),
        UniSuperParser(description_max_length=description_max_length),
        AustralianSuperParser(description_max_length=description_max_length),
        BendigoParser(**line_options),
        MacquarieParser(**line_options),
        IngParser(**line_options),
        WestpacParser(**line_options),
        NabParser(**line_options),
        AnzParser(**line_options),
        CbaParser(**line_options),
    ):
        registry.register(parser)
    return registry
