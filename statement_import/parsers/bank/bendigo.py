import re

from statement_import.parsers.base import (
    ACCOUNT_NAME_RE,
    DEFAULT_ACCOUNT_NUMBER_PATTERNS,
    BaseStatementParser,
    word_pattern,
)

REFERENCE_RE = re.compile(r"(?:CHQ|REF|Reference)[:\s#]+(\d+)", re.IGNORECASE)


class BendigoParser(BaseStatementParser):
    """Bendigo and Adelaide Bank statements; cheque and reference numbers are kept."""

    name = "Bendigo Bank"
    institution_code = "bendigo"

    identifiers = tuple(
        word_pattern(phrase)
        for phrase in (
            "Bendigo Bank",
            "Bendigo and Adelaide",
            "bendigobank.com.au",
            "Bendigo e-Banking",
            "Bendigo Complete",
            "Bendigo Easy",
            "Rural Bank",
        )
    )
    skip_patterns = (
        re.compile(r"^Transaction\s+Details", re.IGNORECASE),
        re.compile(r"^Reference\s+Number", re.IGNORECASE),
        re.compile(r"^Cheque\s+Number", re.IGNORECASE),
    )
    account_name_patterns = (
        ACCOUNT_NAME_RE,
        re.compile(r"\bBendigo\s+(Complete|Easy|Pink|Business)\b", re.IGNORECASE),
    )
    account_number_patterns = DEFAULT_ACCOUNT_NUMBER_PATTERNS + (
        re.compile(r"BSB[:\s]+633[\s-]?\d{3}[\s,]+(?:Account|Acc)[:\s]+\d*(\d{4})\b", re.IGNORECASE),
    )

    def extract_reference(self, body: str) -> str | None:
        match = REFERENCE_RE.search(body)
        return match.group(1) if match else None
