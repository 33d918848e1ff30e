from statement_import.dedup.engine import filter_duplicates
from statement_import.dedup.keys import build_key_set, generate_key, normalize_description
from statement_import.dedup.models import DedupResult, LedgerTransaction

__all__ = [
    "DedupResult",
    "LedgerTransaction",
    "build_key_set",
    "filter_duplicates",
    "generate_key",
    "normalize_description",
]
