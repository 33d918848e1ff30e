import re

from statement_import.parsers.base import ACCOUNT_NAME_RE, BaseStatementParser, word_pattern


class NabParser(BaseStatementParser):
    name = "National Australia Bank"
    institution_code = "nab"

    identifiers = tuple(
        word_pattern(phrase)
        for phrase in (
            "National Australia Bank",
            "NAB",
            "nab.com.au",
            "NAB Classic Banking",
            "NAB iSaver",
            "NAB Reward Saver",
        )
    )
    skip_patterns = (
        re.compile(r"^Transaction\s+Details", re.IGNORECASE),
        re.compile(r"^Account\s+Summary", re.IGNORECASE),
        re.compile(r"^Brought\s+forward", re.IGNORECASE),
        re.compile(r"^Carried\s+forward", re.IGNORECASE),
    )
    account_name_patterns = (
        ACCOUNT_NAME_RE,
        re.compile(r"\bNAB\s+(Classic Banking|iSaver|Reward Saver)\b", re.IGNORECASE),
    )
