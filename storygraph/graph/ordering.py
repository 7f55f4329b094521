"""
Deterministic ordering of node ids.

Registry iteration order must never leak into listings, so every
enumeration goes through ``sort_key``.
"""

from typing import Iterable, List, Optional, Tuple

# Largest value representable by a signed 64-bit integer. Ids whose
# numeric value exceeds it, and all non-numeric ids, sort at this value.
MAX_NUMERIC_KEY = 2 ** 63 - 1

_DIGITS = frozenset("0123456789")


def is_numeric_id(node_id: str) -> bool:
    """True for a non-empty id made only of ASCII decimal digits."""
    return bool(node_id) and all(ch in _DIGITS for ch in node_id)


def parse_bounded(digits: str, limit: int) -> Optional[int]:
    """
    Value of an ASCII digit string, or None when it exceeds ``limit``.

    The length check runs before ``int`` so arbitrarily long inputs
    never reach the interpreter's digit-count limit.
    """
    significant = digits.lstrip("0") or "0"
    bound = str(limit)
    if len(significant) > len(bound):
        return None
    if len(significant) == len(bound) and significant > bound:
        return None
    return int(significant)


def sort_key(node_id: str) -> Tuple[int, str]:
    if not is_numeric_id(node_id):
        return MAX_NUMERIC_KEY, node_id

    value = parse_bounded(node_id, MAX_NUMERIC_KEY)
    if value is None:
        return MAX_NUMERIC_KEY, node_id

    return value, node_id


def ordered_ids(node_ids: Iterable[str]) -> List[str]:
    return sorted(node_ids, key=sort_key)
