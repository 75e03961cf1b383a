"""Helper utilities shared by the trust scoring rules"""
import math
from datetime import datetime, timezone
from typing import Any, List, Set


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up

    Examples:
        53.5 -> 54
        12.5 -> 13 (built-in round() would give 12)
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp value into [low, high]"""
    return max(low, min(high, value))


def parse_timestamp(value: Any) -> datetime:
    """
    Convert a stored timestamp to an aware UTC datetime

    Accepts datetime objects and ISO-8601 strings (as written by sqlite3),
    including a trailing 'Z'. Naive values are taken to be UTC, so naive and
    aware timestamps can be compared with each other.
    Raises ValueError for anything else.
    """
    if isinstance(value, str):
        if value.endswith(('Z', 'z')):
            value = value[:-1] + '+00:00'
        value = datetime.fromisoformat(value)
    elif not isinstance(value, datetime):
        raise ValueError(f"Unsupported timestamp value: {value!r}")

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def word_bigrams(text: str) -> Set[str]:
    """
    Set of consecutive word pairs in lower-cased text

    Examples:
        "Great Food here" -> {"great food", "food here"}
        "single" -> set()
    """
    words = text.lower().split()
    return {f"{words[i]} {words[i + 1]}" for i in range(len(words) - 1)}


def jaccard_similarity(a: Set[str], b: Set[str]) -> float:
    """Intersection over union of two sets, 0.0 when both are empty"""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def mean(values: List[float]) -> float:
    """Arithmetic mean (caller guarantees a non-empty list)"""
    return sum(values) / len(values)
