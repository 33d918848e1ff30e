from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from statement_import.dedup.models import DedupResult
from statement_import.importer.exceptions import InvalidSelectionError
from statement_import.matching.models import Account, NameParseResult
from statement_import.parsers.models import ParsedTransaction, ParseResult


@dataclass(frozen=True)
class ImportSummary:
    """Counts and cent totals shown before an import is confirmed.

    Credit and debit figures cover the unique transactions; debit totals are
    negative. The ``selected_*`` totals cover only the selected subset.
    """

    total_count: int = 0
    selected_count: int = 0
    credit_count: int = 0
    credit_total: int = 0
    debit_count: int = 0
    debit_total: int = 0
    selected_credit_total: int = 0
    selected_debit_total: int = 0

    @property
    def net_total(self) -> int:
        return self.credit_total + self.debit_total

    @property
    def selected_net_total(self) -> int:
        return self.selected_credit_total + self.selected_debit_total


def summarize(
    transactions: tuple[ParsedTransaction, ...],
    selected: frozenset[int],
    total_count: int,
) -> ImportSummary:
    credits = [tx.amount for tx in transactions if tx.amount > 0]
    debits = [tx.amount for tx in transactions if tx.amount < 0]
    chosen = [transactions[index].amount for index in sorted(selected)]
    return ImportSummary(
        total_count=total_count,
        selected_count=len(chosen),
        credit_count=len(credits),
        credit_total=sum(credits),
        debit_count=len(debits),
        debit_total=sum(debits),
        selected_credit_total=sum(amount for amount in chosen if amount > 0),
        selected_debit_total=sum(amount for amount in chosen if amount < 0),
    )


def validate_selection(indices: Iterable[int], size: int) -> frozenset[int]:
    chosen = frozenset(indices)
    out_of_range = sorted(index for index in chosen if not 0 <= index < size)
    if out_of_range:
        raise InvalidSelectionError(
            f"Selection refers to unknown transactions: {out_of_range} (have {size})"
        )
    return chosen


@dataclass(frozen=True)
class ImportReview:
    """Everything a user confirms before a statement is committed.

    ``selected`` holds indices into ``unique``.
    """

    parse_result: ParseResult
    account_id: str
    dedup: DedupResult
    owner: NameParseResult
    matched_account: Account | None = None
    selected: frozenset[int] = frozenset()
    summary: ImportSummary = field(default_factory=ImportSummary)

    @property
    def unique(self) -> tuple[ParsedTransaction, ...]:
        return self.dedup.unique

    @property
    def duplicates(self) -> tuple[ParsedTransaction, ...]:
        return self.dedup.duplicates

    @property
    def selected_transactions(self) -> tuple[ParsedTransaction, ...]:
        return tuple(self.dedup.unique[index] for index in sorted(self.selected))

    def with_selection(self, indices: Iterable[int]) -> "ImportReview":
        """Return a copy with a new selection and recomputed totals."""
        chosen = validate_selection(indices, len(self.dedup.unique))
        return replace(
            self,
            selected=chosen,
            summary=summarize(self.dedup.unique, chosen, self.summary.total_count),
        )
