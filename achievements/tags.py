"""Tag universe helpers for the tag filter UI."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .models import NormalizedGame


def extract_tags(games: Iterable[NormalizedGame]) -> list[str]:
    """Return every distinct tag across ``games`` in lexical order."""

    tags: set[str] = set()
    for game in games:
        tags.update(game.tags)
    return sorted(tags)


def tag_frequency(games: Iterable[NormalizedGame]) -> list[tuple[str, int]]:
    """Return ``(tag, count)`` pairs, most frequent first."""

    counts: Counter[str] = Counter()
    for game in games:
        counts.update(set(game.tags))
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


__all__ = ["extract_tags", "tag_frequency"]
