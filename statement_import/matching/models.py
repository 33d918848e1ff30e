from dataclasses import dataclass


@dataclass(frozen=True)
class Member:
    """A household member that accounts can be assigned to."""

    id: str
    name: str
    is_active: bool = True


@dataclass(frozen=True)
class Account:
    id: str
    name: str
    account_number: str | None = None


@dataclass(frozen=True)
class NameCandidate:
    name: str | None
    confidence: float


@dataclass(frozen=True)
class MemberMatch:
    member: Member | None
    similarity: float


@dataclass(frozen=True)
class NameParseResult:
    """Owner suggestion for an imported account.

    Either an existing member is suggested (``suggested_member_id`` set), a
    new member is proposed (``is_new_member``), or nothing was detected.
    """

    detected_name: str | None = None
    confidence: float = 0.0
    suggested_member_id: str | None = None
    suggested_member_name: str | None = None
    is_new_member: bool = False
