import re

from statement_import.parsers.base import (
    ACCOUNT_NAME_RE,
    DEFAULT_ACCOUNT_NUMBER_PATTERNS,
    BaseStatementParser,
    word_pattern,
)


class UpParser(BaseStatementParser):
    """Up Bank statements.

    Up prints money out as ``-$4.50`` and money in unsigned, and merchant
    names may carry emoji, which are kept in descriptions.
    """

    name = "Up Bank"
    institution_code = "up"
    unsigned_credits = True

    identifiers = tuple(
        word_pattern(phrase)
        for phrase in ("Up Bank", "up.com.au", "Up Banking", "Up Saver", "Up Everyday")
    )
    skip_patterns = (
        re.compile(r"^Instant\s+Transfer\s+Summary", re.IGNORECASE),
        re.compile(r"^Cover\s+from", re.IGNORECASE),
    )
    account_name_patterns = (
        ACCOUNT_NAME_RE,
        re.compile(r"\b(Up Saver|Up Everyday|Spending|Savers)\b", re.IGNORECASE),
    )
    account_number_patterns = DEFAULT_ACCOUNT_NUMBER_PATTERNS + (
        re.compile(r"BSB[:\s]+633[\s-]?123[\s,]+(?:Account|Acc)[:\s]+\d*(\d{4})\b", re.IGNORECASE),
    )
