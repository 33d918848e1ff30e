import re

from statement_import.parsers.base import ACCOUNT_NAME_RE, BaseStatementParser, word_pattern


class MacquarieParser(BaseStatementParser):
    name = "Macquarie Bank"
    institution_code = "macquarie"

    identifiers = tuple(
        word_pattern(phrase)
        for phrase in (
            "Macquarie Bank",
            "macquarie.com.au",
            "Macquarie Transaction Account",
            "Macquarie Savings Account",
        )
    )
    skip_patterns = (re.compile(r"^Account\s+Summary", re.IGNORECASE),)
    account_name_patterns = (
        ACCOUNT_NAME_RE,
        re.compile(r"\bMacquarie\s+(Transaction Account|Savings Account)\b", re.IGNORECASE),
    )
