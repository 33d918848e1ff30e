class ParserError(Exception):
    """Base exception for parser registry misuse.

    Unsupported statements and malformed rows are reported through
    ParseResult, never raised.
    """


class UnknownInstitutionError(ParserError):
    """Raised when asking the registry for an institution it does not know."""
