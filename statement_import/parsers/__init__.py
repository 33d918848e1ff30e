from statement_import.parsers.base import BankParser, BaseStatementParser
from statement_import.parsers.exceptions import ParserError, UnknownInstitutionError
from statement_import.parsers.models import (
    AccountInfo,
    ParsedTransaction,
    ParseResult,
    StatementPeriod,
    TransactionKind,
)
from statement_import.parsers.registry import ParserRegistry, build_default_registry

__all__ = [
    "AccountInfo",
    "BankParser",
    "BaseStatementParser",
    "ParsedTransaction",
    "ParseResult",
    "ParserError",
    "ParserRegistry",
    "StatementPeriod",
    "TransactionKind",
    "UnknownInstitutionError",
    "build_default_registry",
]
