"""Input validators and coercion helpers for question answers."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

_TRUE_WORDS = frozenset({"y", "yes", "true", "1"})
_FALSE_WORDS = frozenset({"n", "no", "false", "0"})


def parse_number(raw: Any) -> float | None:
    """Parse *raw* as a finite number, or return ``None``."""
    if isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def valid_cpu_count(raw: Any) -> bool:
    """CPU count must be a number in ``[1, 5)``."""
    value = parse_number(raw)
    return value is not None and 1 <= value < 5


def valid_php_memory_limit(raw: Any) -> bool:
    """PHP memory limit (MB) must be a number of at least 128."""
    value = parse_number(raw)
    return value is not None and value >= 128


def coerce_bool(raw: Any) -> bool | None:
    """Interpret yes/no style input. Returns ``None`` when unrecognised."""
    if isinstance(raw, bool):
        return raw
    word = str(raw).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return None


def split_selection(raw: Any) -> frozenset[str]:
    """Turn ``"a, b"`` or an iterable of names into a set of names."""
    if isinstance(raw, str):
        parts: Iterable[Any] = raw.split(",")
    else:
        parts = raw
    names = (str(part).strip() for part in parts)
    return frozenset(name for name in names if name and name != "-")
