from dataclasses import dataclass
from datetime import date
from enum import Enum


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class ParsedTransaction:
    """A sign-corrected statement line.

    ``amount`` and ``balance`` are integer cents; credits are positive and
    debits negative.
    """

    date: date
    description: str
    amount: int
    kind: TransactionKind = TransactionKind.EXPENSE
    balance: int | None = None
    reference: str | None = None
    raw_text: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise ValueError(f"amount must be integer cents, got {self.amount!r}")
        if self.amount == 0:
            raise ValueError("amount must be non-zero")

    @property
    def is_credit(self) -> bool:
        return self.amount > 0


@dataclass(frozen=True)
class StatementPeriod:
    start: date
    end: date


@dataclass(frozen=True)
class AccountInfo:
    """Account details found in a statement header."""

    name: str | None = None
    number: str | None = None


@dataclass(frozen=True)
class ParseResult:
    """Output of one parser run over a statement's text."""

    success: bool
    transactions: tuple[ParsedTransaction, ...] = ()
    account_name: str | None = None
    account_number: str | None = None
    statement_period: StatementPeriod | None = None
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    institution_code: str | None = None
    parser_name: str | None = None

    def __post_init__(self) -> None:
        if not self.success and self.transactions:
            raise ValueError("a failed ParseResult cannot carry transactions")
        if self.account_number is not None and len(self.account_number) > 4:
            raise ValueError("account_number must hold at most the last 4 digits")

    @classmethod
    def failure(cls, error: str, **kwargs: object) -> "ParseResult":
        return cls(success=False, errors=(error,), **kwargs)  # type: ignore[arg-type]
