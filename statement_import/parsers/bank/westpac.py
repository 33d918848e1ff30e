import re

from statement_import.parsers.base import ACCOUNT_NAME_RE, BaseStatementParser, word_pattern


class WestpacParser(BaseStatementParser):
    """Westpac statements print separate Debit and Credit columns plus a balance."""

    name = "Westpac"
    institution_code = "westpac"

    identifiers = tuple(
        word_pattern(phrase)
        for phrase in (
            "Westpac",
            "Westpac Banking Corporation",
            "westpac.com.au",
            "Westpac Choice",
            "Westpac eSaver",
            "Westpac Life",
        )
    )
    skip_patterns = (
        re.compile(r"^Transaction\s+Listing", re.IGNORECASE),
        re.compile(r"^Account\s+Summary", re.IGNORECASE),
    )
    account_name_patterns = (
        ACCOUNT_NAME_RE,
        re.compile(r"\bWestpac\s+(Choice|eSaver|Life|Reward Saver)\b", re.IGNORECASE),
    )
