import re
from dataclasses import dataclass
from datetime import date

from statement_import.logging.logger import Log
from statement_import.parsers.base import BankParser
from statement_import.parsers.models import (
    AccountInfo,
    ParsedTransaction,
    ParseResult,
    StatementPeriod,
    TransactionKind,
)
from statement_import.parsers.utils import (
    MONTH_NAME_PATTERN,
    extract_statement_period,
    last_four,
    parse_amount,
    parse_statement_date,
    statement_header,
    to_cents,
)

_AMOUNT = r"[:\s]+\$?([\d,]+(?:\.\d{2})?)"

AS_AT_RE = re.compile(r"as\s+at\s+(\d{1,2}\s+[A-Za-z]+\s+\d{4}|\d{1,2}/\d{1,2}/\d{4})", re.IGNORECASE)
YEAR_ENDED_RE = re.compile(
    r"for\s+the\s+(?:financial\s+)?year\s+ended?\s+(\d{1,2}\s+[A-Za-z]+\s+\d{4})",
    re.IGNORECASE,
)
TABLE_DATE_RE = re.compile(
    rf"^(\d{{1,2}}/\d{{1,2}}/\d{{2,4}}|\d{{1,2}}\s+(?:{MONTH_NAME_PATTERN})\b\s+\d{{2,4}}"
    r"|\d{1,2}-\d{1,2}-\d{2,4})",
    re.IGNORECASE,
)
TABLE_AMOUNT_RE = re.compile(r"\$?([\d,]+\.\d{2})")
TABLE_HEADER_RE = re.compile(r"^(?:Date|Description|Type|Amount|Transaction)\b", re.IGNORECASE)
TABLE_SKIP_RE = re.compile(r"\b(?:opening|closing|total)\b|\bbalance\b", re.IGNORECASE)

# Summary rows reported within this many cents of a table row are the same movement.
SUMMARY_TOLERANCE_CENTS = 100


@dataclass(frozen=True)
class SuperCategory:
    code: str
    label: str
    is_credit: bool
    kind: TransactionKind


EMPLOYER_SG = SuperCategory("employer-sg", "Employer Super Guarantee", True, TransactionKind.INCOME)
EMPLOYER_ADDITIONAL = SuperCategory(
    "employer-additional", "Employer Voluntary Contribution", True, TransactionKind.INCOME
)
SALARY_SACRIFICE = SuperCategory(
    "salary-sacrifice", "Salary Sacrifice Contribution", True, TransactionKind.INCOME
)
PERSONAL_CONCESSIONAL = SuperCategory(
    "personal-concessional", "Personal Deductible Contribution", True, TransactionKind.INCOME
)
PERSONAL_NON_CONCESSIONAL = SuperCategory(
    "personal-non-concessional", "Personal After-Tax Contribution", True, TransactionKind.INCOME
)
GOVERNMENT = SuperCategory(
    "government-co-contribution", "Government Co-Contribution", True, TransactionKind.INCOME
)
SPOUSE = SuperCategory("spouse-contribution", "Spouse Contribution", True, TransactionKind.INCOME)
EARNINGS = SuperCategory("earnings", "Investment Earnings", True, TransactionKind.INCOME)
FEES = SuperCategory("fees", "Administration Fee", False, TransactionKind.EXPENSE)
INSURANCE = SuperCategory("insurance", "Insurance Premium", False, TransactionKind.EXPENSE)
WITHDRAWAL = SuperCategory("withdrawal", "Withdrawal", False, TransactionKind.TRANSFER)
ROLLOVER_IN = SuperCategory("rollover-in", "Rollover In", True, TransactionKind.TRANSFER)
ROLLOVER_OUT = SuperCategory("rollover-out", "Rollover Out", False, TransactionKind.TRANSFER)

# Keyword classification for dated table rows, checked in order.
TABLE_RULES: tuple[tuple[re.Pattern[str], SuperCategory], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), category)
    for pattern, category in (
        (r"rollover.*\bin\b|transfer.*\bfrom\b", ROLLOVER_IN),
        (r"rollover.*\bout\b|transfer.*\bto\b", ROLLOVER_OUT),
        (r"voluntary\s*employer", EMPLOYER_ADDITIONAL),
        (r"employer|\bsg\b|super\s*guarantee|compulsory", EMPLOYER_SG),
        (r"salary\s*sacrifice|before[- ]?tax|pre[- ]?tax", SALARY_SACRIFICE),
        (r"non[- ]?concessional|after[- ]?tax", PERSONAL_NON_CONCESSIONAL),
        (r"concessional|deductible", PERSONAL_CONCESSIONAL),
        (r"government|co[- ]?contribution|low\s*income", GOVERNMENT),
        (r"spouse", SPOUSE),
        (r"personal|member\s+contribution", PERSONAL_NON_CONCESSIONAL),
        (r"earning|return|investment.*growth", EARNINGS),
        (r"insurance|premium|\blife\b|\btpd\b|income\s*protection", INSURANCE),
        (r"admin|management|fee|indirect|tax", FEES),
        (r"withdrawal|pension|lump\s*sum|benefit", WITHDRAWAL),
    )
)


def summary_rule(label: str, category: SuperCategory) -> tuple[re.Pattern[str], SuperCategory]:
    return re.compile(label + _AMOUNT, re.IGNORECASE), category


class SuperannuationParser(BankParser):
    """Shared parsing for superannuation member statements.

    Super statements rarely list every movement. Amounts are taken from the
    summary lines (contributions, earnings, fees, insurance) and dated at the
    statement end date, then any dated table rows are added unless a summary
    line already reports the same movement.
    """

    identifiers: tuple[re.Pattern[str], ...] = ()
    summary_rules: tuple[tuple[re.Pattern[str], SuperCategory], ...] = ()
    account_type_patterns: tuple[re.Pattern[str], ...] = ()
    member_number_patterns: tuple[re.Pattern[str], ...] = (
        re.compile(r"Member\s+(?:Number|No\.?)[:\s]+(\d{6,12})", re.IGNORECASE),
        re.compile(r"Member\s+ID[:\s]+(\d{6,12})", re.IGNORECASE),
        re.compile(r"Your\s+member\s+number[:\s]+(\d{6,12})", re.IGNORECASE),
        re.compile(r"Account\s+Number[:\s]+(\d{6,12})", re.IGNORECASE),
    )

    def __init__(self, description_max_length: int = 200) -> None:
        self._description_max_length = description_max_length

    def can_parse(self, text: str) -> bool:
        header = statement_header(text)
        return any(pattern.search(header) for pattern in self.identifiers)

    def parse(self, text: str) -> ParseResult:
        period = self.extract_statement_period(text)
        account = self.extract_account_info(text)
        statement_date = period.end if period else date.today()
        warnings: list[str] = []
        if period is None:
            warnings.append("Statement date not found; summary amounts dated today")

        summary = self._summary_transactions(text, statement_date)
        transactions = summary + [
            row
            for row in self._table_transactions(text, statement_date)
            if not self._reported_in_summary(row, summary)
        ]
        transactions.sort(key=lambda tx: tx.date)

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
                "No transactions found in the document. "
                f"Please ensure this is a valid {self.name} statement.",
                **common,
            )
        Log.debug(f"{self.name} parsed {len(transactions)} super movements")
        return ParseResult(success=True, transactions=tuple(transactions), **common)

    def extract_statement_period(self, text: str) -> StatementPeriod | None:
        period = extract_statement_period(text)
        if period is not None:
            return period
        for pattern in (AS_AT_RE, YEAR_ENDED_RE):
            match = pattern.search(text)
            if match:
                end = parse_statement_date(match.group(1))
                if end is not None:
                    # A single "as at" date covers the financial year ending on it.
                    return StatementPeriod(start=date(end.year - 1, 7, 1), end=end)
        return None

    def extract_account_info(self, text: str) -> AccountInfo:
        name = None
        for pattern in self.account_type_patterns:
            match = pattern.search(text)
            if match:
                name = match.group(1).strip()
                break
        number = None
        for pattern in self.member_number_patterns:
            match = pattern.search(text)
            if match:
                number = last_four(match.group(1))
                break
        return AccountInfo(name=name, number=number)

    def _summary_transactions(self, text: str, statement_date: date) -> list[ParsedTransaction]:
        transactions = []
        for pattern, category in self.summary_rules:
            match = pattern.search(text)
            if match is None:
                continue
            cents = self._cents(match.group(1))
            if cents:
                transactions.append(
                    ParsedTransaction(
                        date=statement_date,
                        description=category.label,
                        amount=cents if category.is_credit else -cents,
                        kind=category.kind,
                        raw_text=match.group(0).strip(),
                    )
                )
        return transactions

    def _table_transactions(self, text: str, statement_date: date) -> list[ParsedTransaction]:
        transactions = []
        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line or TABLE_HEADER_RE.match(line) or TABLE_SKIP_RE.search(line):
                continue
            date_match = TABLE_DATE_RE.match(line)
            if date_match is None:
                continue
            rest = line[date_match.end():]
            amount_match = TABLE_AMOUNT_RE.search(rest)
            if amount_match is None:
                continue
            cents = self._cents(amount_match.group(1))
            if not cents:
                continue
            category = self._classify(rest)
            description = (rest[: amount_match.start()] + rest[amount_match.end():]).strip()
            transactions.append(
                ParsedTransaction(
                    date=parse_statement_date(date_match.group(1)) or statement_date,
                    description=(description or category.label)[: self._description_max_length],
                    amount=cents if category.is_credit else -cents,
                    kind=category.kind,
                    raw_text=line,
                )
            )
        return transactions

    @staticmethod
    def _classify(text: str) -> SuperCategory:
        for pattern, category in TABLE_RULES:
            if pattern.search(text):
                return category
        return EMPLOYER_SG

    @staticmethod
    def _reported_in_summary(row: ParsedTransaction, summary: list[ParsedTransaction]) -> bool:
        return any(
            existing.kind == row.kind
            and (existing.amount > 0) == (row.amount > 0)
            and abs(existing.amount - row.amount) < SUMMARY_TOLERANCE_CENTS
            for existing in summary
        )

    @staticmethod
    def _cents(raw: str) -> int:
        value = parse_amount(raw)
        return to_cents(value) if value is not None else 0
