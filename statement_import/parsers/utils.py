"""Shared parsing helpers for Australian bank statement lines.

All money handling goes through ``Decimal`` and is quantized to two places
before conversion to integer cents, so no binary floating point ever reaches
a stored amount.
"""

import re
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from statement_import.parsers.models import StatementPeriod, TransactionKind

_CENT = Decimal("0.01")

MONTHS: dict[str, int] = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Full or three-letter month names; "Sept" is common on Australian statements.
MONTH_NAME_PATTERN = (
    r"Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?"
)

# ISO first: the dash pattern would otherwise read "2024-01-15" as 24/01/15.
ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
SLASH_DATE_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})(?!\d)")
MONTH_NAME_DATE_RE = re.compile(
    rf"(\d{{1,2}})\s+({MONTH_NAME_PATTERN})\b\.?(?:\s+(\d{{4}}|\d{{2}})(?![\d.,]))?",
    re.IGNORECASE,
)
DASH_DATE_RE = re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4}|\d{2})(?!\d)")

# A date-shaped token at the start of a line; used to tell "looks like a
# transaction" rows apart from prose when a row fails to parse.
DATE_PREFIX_RE = re.compile(
    rf"^\s*(?:\d{{4}}-\d{{1,2}}-\d{{1,2}}|\d{{1,2}}[/-]\d{{1,2}}(?:[/-]\d{{2,4}})?"
    rf"|\d{{1,2}}\s+(?:{MONTH_NAME_PATTERN})\b)",
    re.IGNORECASE,
)

AMOUNT_RE = re.compile(
    r"(?<![\w.])([+-]?\$?\s*\d[\d,]*\.\d{2})(?![\d%])(?:\s*(DR|CR|D|C)\b)?",
    re.IGNORECASE,
)

MAX_DATE_OFFSET = 20

DEBIT_KEYWORDS: list[re.Pattern[str]] = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\bwithdrawal\b", r"\bwithdrew\b", r"\bpurchase\b", r"\bbought\b",
        r"\bpayment\s+to\b", r"\bpaid\s+to\b", r"\bdebit\b", r"\btransfer\s+out\b",
        r"\btransfer\s+to\b", r"\bsent\s+to\b", r"\beftpos\b", r"\batm\b",
        r"\bfees?\b", r"\bcharges?\b", r"\bdirect\s+debit\b", r"\bbpay\b",
        r"\bbill\s+payment\b", r"\bpay\s+anyone\b", r"\bosko\s+payment\b",
        r"\bosko\s+to\b", r"\bnpp\s+payment\b", r"\bpaypal\s+payment\b",
        r"\bsubscription\b", r"\bloan\s+repayment\b", r"\bmortgage\b",
        r"\brent\s+payment\b", r"\butility\b", r"\belectricity\b",
        r"\bgas\s+bill\b", r"\bwater\s+bill\b", r"\bphone\s+bill\b",
        r"\binternet\s+bill\b", r"\binsurance\b",
    )
]

CREDIT_KEYWORDS: list[re.Pattern[str]] = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\bdeposit(?:ed)?\b", r"\bcredit(?:ed)?\b", r"\btransfer\s+in\b",
        r"\btransfer\s+from\b", r"\breceived\s+from\b", r"\bsalary\b",
        r"\bwages?\b", r"\bpay\s*(?:roll|slip)?\b", r"\bincome\b",
        r"\binterest\s+(?:paid|credit|earned)\b", r"\bbonus\s+interest\b",
        r"\brefund\b", r"\brebate\b", r"\bcash\s?back\b", r"\bdividend\b",
        r"\bdistribution\b", r"\bclaim\s+paid\b", r"\breimbursement\b",
        r"\bpension\b", r"\bcentrelink\b", r"\bgovernment\s+payment\b",
        r"\ballowance\b", r"\bincoming\s+transfer\b", r"\bosko\s+from\b",
        r"\bnpp\s+from\b", r"\bpaypal\s+received\b", r"\bsold\b",
        r"\bsale\s+proceeds\b", r"\breversal\b",
    )
]

TRANSFER_KEYWORDS: list[re.Pattern[str]] = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\btransfer\s+(?:to|from)\s+(?:my|own|self|savings?|cheque|transaction)\b",
        r"\btfr\s+(?:to|from)\s+(?:my|own|savings?|cheque)\b",
        r"\binternal\s+transfer\b", r"\baccount\s+transfer\b",
        r"\bbetween\s+accounts?\b", r"\bsweep\b", r"\bround[\s-]?up\b",
        r"\bsavings\s+transfer\b", r"\bgoal\s+transfer\b",
        r"\bpocket\s+transfer\b", r"\bsaver\s+transfer\b",
        r"\blink(?:ed)?\s+account\b",
    )
]

_TRANSFER_OUT_RE = re.compile(r"\bto\s+(?:my|own|savings?|saver)\b|\btransfer\s+out\b", re.I)
_TRANSFER_IN_RE = re.compile(r"\bfrom\s+(?:my|own|savings?|saver)\b|\btransfer\s+in\b", re.I)

SKIP_PATTERNS: list[re.Pattern[str]] = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"^Date\s+(?:Description|Transaction|Details)",
        r"^Transaction\s+Date",
        r"^Opening\s+Balance",
        r"^Closing\s+Balance",
        r"^Balance\s+(?:Carried|Brought)\s+Forward",
        r"^Statement\s+Period",
        r"^Page\s+\d+",
        r"^BSB\s*:",
        r"^Account\s+(?:Number|No\.?)\s*:",
        r"^Credit\s+Limit",
        r"^Available\s+(?:Balance|Credit|Funds)",
        r"^Pending\s+Transactions?",
        r"^Total\s+(?:Debits?|Credits?)",
        r"^Interest\s+Rate",
        r"^Statement\s+Number",
        r"^ABN\s*:",
        r"^\s*Debit\s+Credit\s+Balance",
        r"^\s*Date\s+Debit\s+Credit",
        r"^Thank\s+you\s+for\s+banking",
        r"^Continued\s+(?:on\s+)?(?:next\s+page|overleaf)",
        r"^(?:Enquiries|Contact\s+us|Call\s+us)\b",
        r"^Important\s+information",
    )
]

OPENING_BALANCE_RE = re.compile(
    r"^Opening\s+Balance\b.*?(\$?\s*[\d,]+\.\d{2})(?:\s*(DR|CR)\b)?",
    re.IGNORECASE,
)

_PERIOD_PATTERNS: list[re.Pattern[str]] = [
    re.compile(
        r"Statement\s+Period[:\s]+(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})\s*(?:to|-)\s*"
        r"(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})",
        re.IGNORECASE,
    ),
    re.compile(
        rf"(\d{{1,2}}\s+(?:{MONTH_NAME_PATTERN})\b\s+\d{{4}})\s*(?:to|-)\s*"
        rf"(\d{{1,2}}\s+(?:{MONTH_NAME_PATTERN})\b\s+\d{{4}})",
        re.IGNORECASE,
    ),
    re.compile(
        r"Period[:\s]+(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})\s*(?:to|-)\s*"
        r"(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})",
        re.IGNORECASE,
    ),
    re.compile(
        r"From\s+(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})\s+To\s+(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})",
        re.IGNORECASE,
    ),
]


@dataclass(frozen=True)
class ExtractedAmount:
    """A money token found in a line, with its debit/credit marker."""

    value: Decimal
    is_debit: bool
    is_credit: bool
    position: int

    @property
    def has_indicator(self) -> bool:
        return self.is_debit or self.is_credit


@dataclass(frozen=True)
class DateMatch:
    date: date
    remaining_text: str
    has_year: bool


@dataclass(frozen=True)
class SignAnalysis:
    kind: TransactionKind
    signed_amount: Decimal
    confident: bool


def _expand_year(year: int) -> int:
    if year < 100:
        return year + (1900 if year > 50 else 2000)
    return year


def _safe_date(year: int, month: int, day: int) -> date | None:
    if not 1900 <= year <= 2100:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _date_from_match(match: re.Match[str], pattern: re.Pattern[str], default_year: int) -> date | None:
    if pattern is ISO_DATE_RE:
        return _safe_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    if pattern is MONTH_NAME_DATE_RE:
        month = MONTHS[match.group(2)[:3].lower()]
        year = _expand_year(int(match.group(3))) if match.group(3) else default_year
        return _safe_date(year, month, int(match.group(1)))
    return _safe_date(
        _expand_year(int(match.group(3))), int(match.group(2)), int(match.group(1))
    )


_DATE_PATTERNS = (ISO_DATE_RE, SLASH_DATE_RE, MONTH_NAME_DATE_RE, DASH_DATE_RE)


def parse_statement_date(text: str, default_year: int | None = None) -> date | None:
    """Parse the first recognisable date in *text*.

    Supports ``YYYY-MM-DD``, ``DD/MM/YYYY``, ``DD/MM/YY``, ``DD Mon [YYYY]``
    and ``DD-MM-YYYY``. Day-month dates without a year use *default_year*.
    """
    year = default_year if default_year is not None else date.today().year
    for pattern in _DATE_PATTERNS:
        match = pattern.search(text)
        if match:
            parsed = _date_from_match(match, pattern, year)
            if parsed is not None:
                return parsed
    return None


def extract_date_from_line(line: str, default_year: int | None = None) -> DateMatch | None:
    """Find a date near the start of *line* and return it with the rest of the line."""
    year = default_year if default_year is not None else date.today().year
    for pattern in _DATE_PATTERNS:
        match = pattern.search(line)
        if match is None or match.start() >= MAX_DATE_OFFSET:
            continue
        parsed = _date_from_match(match, pattern, year)
        if parsed is None:
            continue
        has_year = pattern is not MONTH_NAME_DATE_RE or match.group(3) is not None
        return DateMatch(
            date=parsed,
            remaining_text=line[match.end():].strip(),
            has_year=has_year,
        )
    return None


def looks_like_transaction(line: str) -> bool:
    """True for a line that starts with a date-shaped token and carries money."""
    return bool(DATE_PREFIX_RE.match(line)) and AMOUNT_RE.search(line) is not None


def statement_header(text: str) -> str:
    """The lines of *text* that come before its first transaction row.

    Institution names in transaction descriptions (a direct debit to another
    bank, a round-up to an investing app) say nothing about who issued the
    statement, so detection only looks here.
    """
    header: list[str] = []
    for line in text.splitlines():
        if looks_like_transaction(line.strip()):
            break
        header.append(line)
    return "\n".join(header)


def parse_amount(text: str) -> Decimal | None:
    """Parse ``$1,234.56`` / ``-50.00`` style text into a Decimal, or None."""
    cleaned = re.sub(r"[$,\s]", "", text)
    if not cleaned:
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def to_cents(amount: Decimal) -> int:
    """Round to exactly two places (half up) and convert to integer cents."""
    return int(amount.quantize(_CENT, rounding=ROUND_HALF_UP) * 100)


def extract_amounts(text: str) -> list[ExtractedAmount]:
    """Return every money token in *text*, in order.

    Zero tokens are kept: on column layouts an empty debit or credit column
    printed as ``0.00`` still holds its place ahead of the balance.
    """
    amounts: list[ExtractedAmount] = []
    for match in AMOUNT_RE.finditer(text):
        token = match.group(1)
        value = parse_amount(token.replace("+", ""))
        if value is None:
            continue
        indicator = (match.group(2) or "").upper()
        stripped = token.replace(" ", "")
        negative = stripped.startswith("-")
        positive = stripped.startswith("+")
        amounts.append(
            ExtractedAmount(
                value=abs(value),
                is_debit=negative or indicator in ("DR", "D"),
                is_credit=positive or indicator in ("CR", "C"),
                position=match.start(),
            )
        )
    return amounts


def extract_opening_balance(line: str) -> int | None:
    """Return the opening balance in cents if *line* states one."""
    match = OPENING_BALANCE_RE.match(line)
    if match is None:
        return None
    value = parse_amount(match.group(1))
    if value is None:
        return None
    cents = to_cents(value)
    return -cents if (match.group(2) or "").upper() == "DR" else cents


def analyze_transaction(
    text: str,
    amount: Decimal,
    explicitly_debit: bool = False,
    explicitly_credit: bool = False,
) -> SignAnalysis:
    """Decide kind and sign for an unsigned *amount* from markers and wording.

    Falls back to a debit with ``confident=False`` when nothing in the line
    indicates a direction.
    """
    magnitude = abs(amount)
    if explicitly_debit:
        return SignAnalysis(TransactionKind.EXPENSE, -magnitude, True)
    if explicitly_credit:
        return SignAnalysis(TransactionKind.INCOME, magnitude, True)

    if any(pattern.search(text) for pattern in TRANSFER_KEYWORDS):
        outgoing = _TRANSFER_OUT_RE.search(text) is not None
        incoming = _TRANSFER_IN_RE.search(text) is not None
        if incoming and not outgoing:
            return SignAnalysis(TransactionKind.TRANSFER, magnitude, True)
        return SignAnalysis(TransactionKind.TRANSFER, -magnitude, outgoing)

    if any(pattern.search(text) for pattern in DEBIT_KEYWORDS):
        return SignAnalysis(TransactionKind.EXPENSE, -magnitude, True)
    if any(pattern.search(text) for pattern in CREDIT_KEYWORDS):
        return SignAnalysis(TransactionKind.INCOME, magnitude, True)

    return SignAnalysis(TransactionKind.EXPENSE, -magnitude, False)


def kind_for_direction(text: str, is_credit: bool) -> TransactionKind:
    if any(pattern.search(text) for pattern in TRANSFER_KEYWORDS):
        return TransactionKind.TRANSFER
    return TransactionKind.INCOME if is_credit else TransactionKind.EXPENSE


def clean_description(text: str, max_length: int = 200) -> str:
    """Strip amounts and DR/CR markers, collapse whitespace and truncate."""
    description = AMOUNT_RE.sub("", text)
    description = re.sub(r"\s+", " ", description).strip(" -|")
    if len(description) > max_length:
        description = description[: max_length - 3] + "..."
    return description


def should_skip_line(line: str) -> bool:
    return any(pattern.search(line) for pattern in SKIP_PATTERNS)


def extract_statement_period(text: str) -> StatementPeriod | None:
    for pattern in _PERIOD_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        start = parse_statement_date(match.group(1))
        end = parse_statement_date(match.group(2))
        if start is not None and end is not None:
            return StatementPeriod(start=start, end=end)
    return None


def align_to_statement_period(value: date, period: StatementPeriod | None) -> date:
    """Move a year-less date into (or nearest to) the statement period.

    Only the year is adjusted, by at most one in either direction, which
    covers statements that run across New Year.
    """
    if period is None:
        return value
    candidates: list[date] = []
    for offset in (-1, 0, 1):
        shifted = _safe_date(value.year + offset, value.month, value.day)
        if shifted is not None:
            candidates.append(shifted)
    if not candidates:
        return value

    for candidate in candidates:
        if period.start <= candidate <= period.end:
            return candidate

    def distance(candidate: date) -> int:
        if candidate < period.start:
            return (period.start - candidate).days
        return (candidate - period.end).days

    return min(candidates, key=distance)


def last_four(digits: str | None) -> str | None:
    """Keep only the trailing four digits of an account identifier."""
    if not digits:
        return None
    only_digits = re.sub(r"\D", "", digits)
    return only_digits[-4:] if only_digits else None


@dataclass(frozen=True)
class KeywordRule:
    """Direction and kind assigned to any row whose text matches a pattern."""

    patterns: tuple[re.Pattern[str], ...]
    is_credit: bool
    kind: TransactionKind

    def matches(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.patterns)


def keyword_rule(is_credit: bool, kind: TransactionKind, *patterns: str) -> KeywordRule:
    return KeywordRule(
        patterns=tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns),
        is_credit=is_credit,
        kind=kind,
    )
