from dataclasses import dataclass
from datetime import date

from statement_import.parsers.models import ParsedTransaction


@dataclass(frozen=True)
class LedgerTransaction:
    """A transaction already stored in the ledger, keyed by its own account."""

    account_id: str
    date: date
    amount: int
    description: str | None = None


@dataclass(frozen=True)
class DedupResult:
    """Incoming transactions split into new ones and repeats, in input order."""

    unique: tuple[ParsedTransaction, ...] = ()
    duplicates: tuple[ParsedTransaction, ...] = ()
