import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import date

from statement_import.logging.logger import Log
from statement_import.parsers.models import (
    AccountInfo,
    ParsedTransaction,
    ParseResult,
    StatementPeriod,
    TransactionKind,
)
from statement_import.parsers.utils import (
    DateMatch,
    ExtractedAmount,
    align_to_statement_period,
    analyze_transaction,
    clean_description,
    extract_amounts,
    extract_date_from_line,
    extract_opening_balance,
    extract_statement_period,
    kind_for_direction,
    last_four,
    looks_like_transaction,
    should_skip_line,
    statement_header,
    to_cents,
)

ACCOUNT_NAME_RE = re.compile(
    r"^Account\s+Name[:\s]+([A-Za-z][A-Za-z ,.'&-]*?)\s*(?:BSB\b|Account\b|$)",
    re.IGNORECASE | re.MULTILINE,
)

DEFAULT_ACCOUNT_NUMBER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"Account\s+(?:Number|No\.?)[:\s]+[\d -]*(\d{4})\b", re.IGNORECASE),
    re.compile(r"Account[:\s]+[*xX]{4,}\s?(\d{4})\b", re.IGNORECASE),
    re.compile(r"BSB[:\s]+\d{3}[\s-]?\d{3}[\s,]+(?:Account|Acc)[:\s]+\d*(\d{4})\b", re.IGNORECASE),
)

CONTINUATION_MAX_LENGTH = 60


def word_pattern(phrase: str) -> re.Pattern[str]:
    """Pattern matching *phrase* only as whole words.

    All-caps codes such as ``ING`` or ``NAB`` are matched case-sensitively;
    everything else ignores case.
    """
    flags = 0 if phrase.isupper() else re.IGNORECASE
    return re.compile(rf"(?<![A-Za-z0-9]){re.escape(phrase)}(?![A-Za-z0-9])", flags)


class BankParser(ABC):
    """Contract every institution parser fulfils.

    ``can_parse`` must be cheap and side-effect free; ``parse`` must never
    raise for unrecognised or malformed content and reports problems through
    the returned ParseResult instead.
    """

    name: str = ""
    institution_code: str = ""

    @abstractmethod
    def can_parse(self, text: str) -> bool: ...

    @abstractmethod
    def parse(self, text: str) -> ParseResult: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(institution_code={self.institution_code!r})"


class _RowRejected(Exception):
    pass


@dataclass
class _LineState:
    """Mutable cursor threaded through one parse run."""

    default_year: int
    period: StatementPeriod | None
    transactions: list[ParsedTransaction] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    previous_balance: int | None = None
    pending: DateMatch | None = None
    pending_raw: str = ""
    pending_extra_lines: int = 0
    continuation_budget: int = 0


class BaseStatementParser(BankParser):
    """Line-oriented parser shared by the bank and investment statement formats.

    Subclasses describe their statements declaratively (identifiers, skip
    patterns, account patterns) and override the hooks below only where their
    layout differs:

    * ``split_amounts`` picks the transaction amount and the running balance.
    * ``resolve_amount`` turns an unsigned amount into signed cents and a kind.
    * ``clean_description`` and ``extract_reference`` shape the text fields.
    """

    identifiers: tuple[re.Pattern[str], ...] = ()
    skip_patterns: tuple[re.Pattern[str], ...] = ()
    account_name_patterns: tuple[re.Pattern[str], ...] = (ACCOUNT_NAME_RE,)
    account_number_patterns: tuple[re.Pattern[str], ...] = DEFAULT_ACCOUNT_NUMBER_PATTERNS

    # Statements that print debits with a leading "-" and credits unsigned.
    unsigned_credits: bool = False

    def __init__(
        self,
        description_max_length: int = 200,
        continuation_max_lines: int = 2,
    ) -> None:
        self._description_max_length = description_max_length
        self._continuation_max_lines = continuation_max_lines

    def can_parse(self, text: str) -> bool:
        header = statement_header(text)
        return any(pattern.search(header) for pattern in self.identifiers)

    def parse(self, text: str) -> ParseResult:
        period = self.extract_statement_period(text)
        account = self.extract_account_info(text)
        state = _LineState(
            default_year=period.end.year if period else date.today().year,
            period=period,
        )

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if line:
                self._consume_line(line, state)
            else:
                # Blank lines separate pages and sections; rows never span them.
                self._close_pending(state)
                self._reset_cursor(state)

        self._close_pending(state)

        transactions = sorted(state.transactions, key=lambda tx: tx.date)
        warnings = state.warnings + self.result_warnings(transactions)
        common = {
            "account_name": account.name,
            "account_number": account.number,
            "statement_period": period,
            "warnings": tuple(warnings),
            "institution_code": self.institution_code,
            "parser_name": self.name,
        }

        if not transactions:
            return ParseResult.failure(
                f"No transactions found in the document. "
                f"Please ensure this is a valid {self.name} statement.",
                **common,
            )

        Log.debug(
            f"{self.name} parsed {len(transactions)} transactions",
            warnings=len(warnings),
        )
        return ParseResult(success=True, transactions=tuple(transactions), **common)

    def _consume_line(self, line: str, state: _LineState) -> None:
        opening = extract_opening_balance(line)
        if opening is not None:
            state.previous_balance = opening
            self._reset_cursor(state)
            return

        if should_skip_line(line) or any(p.search(line) for p in self.skip_patterns):
            self._reset_cursor(state)
            return

        dated = extract_date_from_line(line, state.default_year)
        if dated is not None:
            self._close_pending(state)
            self._reset_cursor(state)
            amounts = extract_amounts(dated.remaining_text)
            if amounts:
                self._emit(dated, dated.remaining_text, amounts, line, state)
            else:
                state.pending = dated
                state.pending_raw = line
            return

        amounts = extract_amounts(line)
        if state.pending is not None:
            held = state.pending
            if amounts:
                body = f"{held.remaining_text} {line}"
                raw = f"{state.pending_raw} {line}"
                self._reset_cursor(state)
                self._emit(held, body, amounts, raw, state)
            elif (
                len(line) <= CONTINUATION_MAX_LENGTH
                and state.pending_extra_lines < self._continuation_max_lines
                and not self.is_statement_furniture(line)
            ):
                state.pending = replace(held, remaining_text=f"{held.remaining_text} {line}")
                state.pending_raw = f"{state.pending_raw} {line}"
                state.pending_extra_lines += 1
            else:
                self._close_pending(state)
                self._reset_cursor(state)
            return

        if (
            not amounts
            and state.continuation_budget > 0
            and len(line) <= CONTINUATION_MAX_LENGTH
            and state.transactions
            and not self.is_statement_furniture(line)
        ):
            self._append_continuation(line, state)
            return

        if looks_like_transaction(line):
            state.warnings.append(f"Could not parse transaction line: {line}")
        state.continuation_budget = 0

    @staticmethod
    def _close_pending(state: _LineState) -> None:
        if state.pending is not None:
            state.warnings.append(f"Transaction line without an amount: {state.pending_raw}")

    @staticmethod
    def _reset_cursor(state: _LineState) -> None:
        state.pending = None
        state.pending_raw = ""
        state.pending_extra_lines = 0
        state.continuation_budget = 0

    def _append_continuation(self, line: str, state: _LineState) -> None:
        last = state.transactions[-1]
        description = self.clean_description(f"{last.description} {line}")
        state.transactions[-1] = replace(
            last,
            description=description,
            raw_text=f"{last.raw_text} {line}" if last.raw_text else line,
        )
        state.continuation_budget -= 1

    def _emit(
        self,
        dated: DateMatch,
        body: str,
        amounts: list[ExtractedAmount],
        raw: str,
        state: _LineState,
    ) -> None:
        try:
            transaction = self._build_transaction(dated, body, amounts, raw, state)
        except _RowRejected as exc:
            state.warnings.append(f"{exc}: {raw}")
            return
        state.transactions.append(transaction)
        if transaction.balance is not None:
            state.previous_balance = transaction.balance
        state.continuation_budget = self._continuation_max_lines

    def _build_transaction(
        self,
        dated: DateMatch,
        body: str,
        amounts: list[ExtractedAmount],
        raw: str,
        state: _LineState,
    ) -> ParsedTransaction:
        amount, balance = self.split_amounts(body, amounts)
        description = self.clean_description(body)
        if not description:
            raise _RowRejected("Transaction line without a description")

        cents, kind, confident = self.resolve_amount(
            description, amount, balance, state.previous_balance
        )
        if cents == 0:
            raise _RowRejected("Zero amount transaction skipped")
        if not confident:
            state.warnings.append(
                f"Could not determine direction, assumed debit: {description}"
            )

        transaction_date = dated.date
        if not dated.has_year:
            transaction_date = align_to_statement_period(transaction_date, state.period)

        return ParsedTransaction(
            date=transaction_date,
            description=description,
            amount=cents,
            kind=kind,
            balance=balance,
            reference=self.extract_reference(body),
            raw_text=raw,
        )

    def split_amounts(
        self,
        body: str,
        amounts: list[ExtractedAmount],
    ) -> tuple[ExtractedAmount, int | None]:
        """Return the transaction amount and the running balance in cents.

        With two or more amounts the last one is the balance; a DR balance is
        an overdrawn (negative) balance. Of the amounts before it, the first
        non-zero one is the transaction, so an empty ``0.00`` column is
        passed over and an all-zero row stays zero.
        """
        if len(amounts) < 2:
            return amounts[0], None
        balance_amount = amounts[-1]
        balance = to_cents(balance_amount.value)
        if balance_amount.is_debit:
            balance = -balance
        columns = amounts[:-1]
        amount = next((a for a in columns if to_cents(a.value) != 0), columns[0])
        return amount, balance

    def resolve_amount(
        self,
        description: str,
        amount: ExtractedAmount,
        balance: int | None,
        previous_balance: int | None,
    ) -> tuple[int, TransactionKind, bool]:
        """Return ``(signed_cents, kind, confident)`` for one row."""
        cents = to_cents(amount.value)
        if amount.is_debit:
            return -cents, kind_for_direction(description, False), True
        if amount.is_credit or self.unsigned_credits:
            return cents, kind_for_direction(description, True), True

        if balance is not None and previous_balance is not None:
            delta = balance - previous_balance
            if delta != 0 and abs(delta) == cents:
                return delta, kind_for_direction(description, delta > 0), True

        analysis = analyze_transaction(description, amount.value)
        return to_cents(analysis.signed_amount), analysis.kind, analysis.confident

    def is_statement_furniture(self, line: str) -> bool:
        """True for a bank name or account header line, which never continues a row."""
        return any(
            pattern.search(line)
            for pattern in (
                *self.identifiers,
                *self.account_name_patterns,
                *self.account_number_patterns,
            )
        )

    def clean_description(self, text: str) -> str:
        return clean_description(text, self._description_max_length)

    def extract_reference(self, body: str) -> str | None:
        return None

    def result_warnings(self, transactions: list[ParsedTransaction]) -> list[str]:
        return []

    def extract_statement_period(self, text: str) -> StatementPeriod | None:
        return extract_statement_period(text)

    def extract_account_info(self, text: str) -> AccountInfo:
        name = None
        for pattern in self.account_name_patterns:
            match = pattern.search(text)
            if match:
                name = match.group(1).strip() or None
                break

        number = None
        for pattern in self.account_number_patterns:
            match = pattern.search(text)
            if match:
                number = last_four(match.group(1))
                break

        return AccountInfo(name=name, number=number)
