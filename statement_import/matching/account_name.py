"""Account-owner detection from bank account names.

The confidence and similarity thresholds below are calibration constants
tuned against real account names; changing them changes which members get
suggested.
"""

import re
from collections.abc import Sequence

from rapidfuzz.distance import Levenshtein

from statement_import.logging.logger import Log
from statement_import.matching.models import Member, MemberMatch, NameCandidate, NameParseResult

REVERSED_NAME_CONFIDENCE = 0.9
FULL_NAME_CONFIDENCE = 0.85
SINGLE_NAME_CONFIDENCE = 0.6
FALLBACK_FULL_NAME_CONFIDENCE = 0.5
FALLBACK_SINGLE_NAME_CONFIDENCE = 0.3
MINIMUM_EXTRACTION_CONFIDENCE = 0.3

CONTAINMENT_SIMILARITY = 0.9
FIRST_NAME_SIMILARITY = 0.8
MATCH_THRESHOLD = 0.6

BANK_TOKENS_RE = re.compile(
    r"\b(?:anz|cba|westpac|nab|ing|macquarie|up|bendigo|commbank|commonwealth)\b",
    re.IGNORECASE,
)
ACCOUNT_TYPE_TOKENS_RE = (
    re.compile(
        r"\b(?:savings?|saver|transaction|everyday|complete|access|smart|netbank|"
        r"streamline|cash|cheque|offset|loan|credit|card)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:account|acc|acct)\b|\ba/c\b", re.IGNORECASE),
    re.compile(r"\b(?:personal|joint|individual|business)\b", re.IGNORECASE),
)

_WORD = r"[A-Z][A-Za-z'-]+"
REVERSED_NAME_RE = re.compile(rf"^({_WORD}),\s*({_WORD}(?:\s+{_WORD})?)")
LEADING_NAME_RE = re.compile(rf"^({_WORD}(?:\s+{_WORD}){{1,2}})")
NAME_BEFORE_DASH_RE = re.compile(rf"^({_WORD}(?:\s+{_WORD})?)\s*[-–—]\s*")
NAME_AFTER_DASH_RE = re.compile(rf"[-–—]\s*({_WORD}(?:\s+{_WORD})?)\s*$")
NAME_SHAPED_RE = re.compile(r"^[A-Z][a-z]+")

_DASHES = "-–— "


def _normalize(name: str) -> str:
    return " ".join(name.lower().split())


def _capitalize(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in text.lower().split(" "))


def _strip_tokens(account_name: str) -> str:
    cleaned = BANK_TOKENS_RE.sub(" ", account_name.strip())
    for pattern in ACCOUNT_TYPE_TOKENS_RE:
        cleaned = pattern.sub(" ", cleaned)
    return " ".join(cleaned.split()).strip(_DASHES)


def extract_name(account_name: str | None) -> NameCandidate:
    """Pull a person's name out of an account name.

    ``"SMITH, JOHN SAVINGS"`` gives ``"John Smith"`` with 0.9 confidence;
    nothing recognisable gives ``NameCandidate(None, 0.0)``.
    """
    if not account_name or not account_name.strip():
        return NameCandidate(None, 0.0)

    cleaned = _strip_tokens(account_name)
    if not cleaned:
        return NameCandidate(None, 0.0)

    reversed_match = REVERSED_NAME_RE.match(cleaned)
    if reversed_match:
        last_name, first_name = reversed_match.groups()
        return NameCandidate(f"{_capitalize(first_name)} {_capitalize(last_name)}", REVERSED_NAME_CONFIDENCE)

    for pattern in (LEADING_NAME_RE, NAME_BEFORE_DASH_RE, NAME_AFTER_DASH_RE):
        match = pattern.search(cleaned)
        if match:
            name = _capitalize(match.group(1).strip())
            multi_word = len(name.split(" ")) >= 2
            return NameCandidate(name, FULL_NAME_CONFIDENCE if multi_word else SINGLE_NAME_CONFIDENCE)

    words = [word for word in cleaned.split(" ") if len(word) > 1]
    if 1 <= len(words) <= 3:
        potential = " ".join(_capitalize(word) for word in words)
        if NAME_SHAPED_RE.match(potential) and len(potential) >= 3:
            confidence = (
                FALLBACK_FULL_NAME_CONFIDENCE if len(words) >= 2 else FALLBACK_SINGLE_NAME_CONFIDENCE
            )
            return NameCandidate(potential, confidence)

    return NameCandidate(None, 0.0)


def calculate_similarity(first: str, second: str) -> float:
    """Similarity of two person names between 0 and 1.

    Exact match scores 1.0, containment 0.9 and a shared first name 0.8;
    anything else is the normalised Levenshtein similarity.
    """
    a = _normalize(first)
    b = _normalize(second)
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    if a in b or b in a:
        return CONTAINMENT_SIMILARITY
    if a.split(" ")[0] == b.split(" ")[0]:
        return FIRST_NAME_SIMILARITY
    return Levenshtein.normalized_similarity(a, b)


def find_matching_member(name: str | None, members: Sequence[Member]) -> MemberMatch:
    """Best active member for *name*, or no member below the match threshold."""
    if not name or not members:
        return MemberMatch(None, 0.0)

    best: Member | None = None
    best_similarity = 0.0
    for member in members:
        if not member.is_active:
            continue
        similarity = calculate_similarity(name, member.name)
        if similarity > best_similarity:
            best, best_similarity = member, similarity

    if best is not None and best_similarity >= MATCH_THRESHOLD:
        return MemberMatch(best, best_similarity)
    return MemberMatch(None, 0.0)


def suggest(account_name: str | None, members: Sequence[Member]) -> NameParseResult:
    """Suggest an existing member, or a new one, as the owner of *account_name*."""
    candidate = extract_name(account_name)
    if candidate.name is None or candidate.confidence < MINIMUM_EXTRACTION_CONFIDENCE:
        return NameParseResult()

    match = find_matching_member(candidate.name, members)
    if match.member is not None:
        Log.debug(
            "Account owner matched",
            member=match.member.id,
            similarity=round(match.similarity, 2),
        )
        return NameParseResult(
            detected_name=candidate.name,
            confidence=candidate.confidence * match.similarity,
            suggested_member_id=match.member.id,
            suggested_member_name=match.member.name,
        )

    return NameParseResult(
        detected_name=candidate.name,
        confidence=candidate.confidence,
        suggested_member_name=candidate.name,
        is_new_member=True,
    )
