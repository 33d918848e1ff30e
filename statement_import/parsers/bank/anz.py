import re

from statement_import.parsers.base import ACCOUNT_NAME_RE, BaseStatementParser, word_pattern


class AnzParser(BaseStatementParser):
    name = "ANZ"
    institution_code = "anz"

    identifiers = tuple(
        word_pattern(phrase)
        for phrase in (
            "ANZ",
            "Australia and New Zealand Banking",
            "anz.com.au",
            "ANZ Access Advantage",
            "ANZ Online Saver",
            "ANZ Plus",
        )
    )
    skip_patterns = (
        re.compile(r"^Transaction\s+Details", re.IGNORECASE),
        re.compile(r"^Account\s+Summary", re.IGNORECASE),
    )
    account_name_patterns = (
        ACCOUNT_NAME_RE,
        re.compile(r"\bANZ\s+(Access Advantage|Online Saver|Plus|Save|Everyday|Smart Choice)\b", re.IGNORECASE),
    )
