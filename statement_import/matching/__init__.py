from statement_import.matching.account_name import (
    calculate_similarity,
    extract_name,
    find_matching_member,
    suggest,
)
from statement_import.matching.models import (
    Account,
    Member,
    MemberMatch,
    NameCandidate,
    NameParseResult,
)

__all__ = [
    "Account",
    "Member",
    "MemberMatch",
    "NameCandidate",
    "NameParseResult",
    "calculate_similarity",
    "extract_name",
    "find_matching_member",
    "suggest",
]
