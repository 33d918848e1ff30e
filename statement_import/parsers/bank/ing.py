import re

from statement_import.parsers.base import (
    ACCOUNT_NAME_RE,
    DEFAULT_ACCOUNT_NUMBER_PATTERNS,
    BaseStatementParser,
    word_pattern,
)


class IngParser(BaseStatementParser):
    """ING Australia (Orange Everyday, Savings Maximiser). BSB is always 923-100."""

    name = "ING"
    institution_code = "ing"

    identifiers = tuple(
        word_pattern(phrase)
        for phrase in (
            "ING",
            "ING Direct",
            "ING Australia",
            "ing.com.au",
            "Orange Everyday",
            "Savings Maximiser",
            "Orange One",
        )
    )
    skip_patterns = (
        re.compile(r"^Transaction\s+List", re.IGNORECASE),
        re.compile(r"^Bonus\s+Interest\s+(?:Rate|Conditions)", re.IGNORECASE),
        re.compile(r"^Interest\s+Earned\s+(?:this|to\s+date)", re.IGNORECASE),
    )
    account_name_patterns = (
        ACCOUNT_NAME_RE,
        re.compile(r"\b(Orange Everyday|Savings Maximiser|Orange One)\b", re.IGNORECASE),
    )
    account_number_patterns = DEFAULT_ACCOUNT_NUMBER_PATTERNS + (
        re.compile(r"BSB[:\s]+923[\s-]?100[\s,]+(?:Account|Acc)[:\s]+\d*(\d{4})\b", re.IGNORECASE),
    )
