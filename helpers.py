"""General-purpose helper utilities shared across the application."""

from __future__ import annotations

import math
import numbers
from typing import Any, Iterable, Mapping

import pandas as pd


__all__ = [
    "_coerce_count",
    "_coerce_hours",
    "_dedupe_preserve_order",
    "_normalize_text",
    "_parse_iterable",
    "has_text_value",
    "parse_timestamp",
]


def has_text_value(value: Any) -> bool:
    """Return ``True`` when ``value`` contains non-empty text."""

    if value is None:
        return False
    if isinstance(value, str):
        text = value.strip()
    else:
        try:
            if pd.isna(value):
                return False
        except (TypeError, ValueError):
            pass
        text = str(value).strip()
    if not text:
        return False
    if text.lower() == "nan":
        return False
    return True


def _normalize_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()


def _coerce_count(value: Any) -> int:
    """Return ``value`` as a non-negative integer, ``0`` when unusable."""

    if value is None or isinstance(value, bool):
        return int(bool(value))
    try:
        numeric = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(numeric) or numeric < 0:
        return 0
    return int(math.floor(numeric))


def _coerce_hours(value: Any) -> float | None:
    """Return a non-negative playtime in hours or ``None`` when absent."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        numeric = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(numeric) or numeric < 0:
        return None
    return numeric


def _dedupe_preserve_order(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        text = str(value).strip()
        if not text:
            continue
        if text in seen:
            continue
        seen.add(text)
        result.append(text)
    return result


def _parse_iterable(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(',') if v.strip()]
    if isinstance(value, numbers.Number):
        return [str(value)]
    if isinstance(value, Mapping):
        return []
    try:
        iterator = iter(value)
    except TypeError:
        return [str(value)]
    items: list[str] = []
    for element in iterator:
        if element is None or isinstance(element, Mapping):
            continue
        items.append(str(element).strip())
    return [item for item in items if item]


def parse_timestamp(value: Any) -> pd.Timestamp | None:
    """Parse a date string into a UTC timestamp, ``None`` when unparsable."""

    if not has_text_value(value):
        return None
    try:
        parsed = pd.to_datetime(str(value).strip(), utc=True, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    return parsed
