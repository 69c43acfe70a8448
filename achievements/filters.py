"""Filter criteria and the filter/sort engine for the games grid."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Final, Iterable, Mapping, Sequence

from helpers import _dedupe_preserve_order, _normalize_text, parse_timestamp

from .errors import InvalidCriteria
from .models import PLATFORMS, NormalizedGame

ALL_PLATFORMS: Final[str] = "all"

SORT_RECENT: Final[str] = "recent"
SORT_NAME: Final[str] = "name"
SORT_COMPLETION: Final[str] = "completion"
SORT_PLAYTIME: Final[str] = "playtime"
SORT_KEYS: Final[tuple[str, ...]] = (SORT_RECENT, SORT_NAME, SORT_COMPLETION, SORT_PLAYTIME)
DEFAULT_SORT: Final[str] = SORT_RECENT


@dataclass(frozen=True)
class FilterCriteria:
    """Immutable filter/sort selection; replaced wholesale on every change."""

    platform: str = ALL_PLATFORMS
    included_tags: frozenset[str] = field(default_factory=frozenset)
    excluded_tags: frozenset[str] = field(default_factory=frozenset)
    search_query: str = ""
    sort_key: str = DEFAULT_SORT

    def with_platform(self, platform: str) -> FilterCriteria:
        return replace(self, platform=_validate_platform(platform))

    def with_search(self, query: str | None) -> FilterCriteria:
        return replace(self, search_query=query or "")

    def with_sort(self, sort_key: str) -> FilterCriteria:
        return replace(self, sort_key=_validate_sort_key(sort_key))

    def toggle_included(self, tag: str) -> FilterCriteria:
        """Toggle ``tag`` in the include set, dropping it from the exclude set."""

        if tag in self.included_tags:
            return replace(self, included_tags=self.included_tags - {tag})
        return replace(
            self,
            included_tags=self.included_tags | {tag},
            excluded_tags=self.excluded_tags - {tag},
        )

    def toggle_excluded(self, tag: str) -> FilterCriteria:
        """Toggle ``tag`` in the exclude set, dropping it from the include set."""

        if tag in self.excluded_tags:
            return replace(self, excluded_tags=self.excluded_tags - {tag})
        return replace(
            self,
            excluded_tags=self.excluded_tags | {tag},
            included_tags=self.included_tags - {tag},
        )

    def clear_tags(self) -> FilterCriteria:
        return replace(self, included_tags=frozenset(), excluded_tags=frozenset())

    def tag_filter_label(self) -> str:
        if not self.included_tags and not self.excluded_tags:
            return "All Tags"
        parts = []
        if self.included_tags:
            parts.append(f"+{len(self.included_tags)}")
        if self.excluded_tags:
            parts.append(f"-{len(self.excluded_tags)}")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform,
            "include": sorted(self.included_tags),
            "exclude": sorted(self.excluded_tags),
            "q": self.search_query,
            "sort": self.sort_key,
            "tagLabel": self.tag_filter_label(),
        }

    @classmethod
    def from_mapping(cls, args: Any) -> FilterCriteria:
        """Build criteria from request-style arguments.

        ``args`` may be a werkzeug ``MultiDict`` (repeated ``include`` and
        ``exclude`` keys) or a plain mapping whose tag values are lists or
        comma-separated strings.
        """

        platform = _normalize_text(args.get("platform")) or ALL_PLATFORMS
        sort_key = _normalize_text(args.get("sort")) or DEFAULT_SORT
        return cls(
            platform=_validate_platform(platform),
            included_tags=frozenset(_collect_tags(args, "include")),
            excluded_tags=frozenset(_collect_tags(args, "exclude")),
            search_query=str(args.get("q") or ""),
            sort_key=_validate_sort_key(sort_key),
        )


def _validate_platform(platform: str) -> str:
    if platform != ALL_PLATFORMS and platform not in PLATFORMS:
        raise InvalidCriteria("platform", platform)
    return platform


def _validate_sort_key(sort_key: str) -> str:
    if sort_key not in SORT_KEYS:
        raise InvalidCriteria("sort", sort_key)
    return sort_key


def _collect_tags(args: Any, key: str) -> list[str]:
    getlist = getattr(args, "getlist", None)
    if callable(getlist):
        raw_values: Iterable[Any] = getlist(key)
    else:
        value = args.get(key) if isinstance(args, Mapping) else None
        if value is None:
            raw_values = []
        elif isinstance(value, str):
            raw_values = value.split(',')
        else:
            raw_values = value
    # Repeated query values are whole tags; tag names may contain commas.
    return _dedupe_preserve_order(raw_values)


def matches(game: NormalizedGame, criteria: FilterCriteria) -> bool:
    """Return ``True`` when ``game`` passes every active constraint."""

    if criteria.platform != ALL_PLATFORMS and game.platform != criteria.platform:
        return False

    # Include and exclude are checked independently of each other.
    if criteria.included_tags and criteria.included_tags.isdisjoint(game.tags):
        return False
    if criteria.excluded_tags and not criteria.excluded_tags.isdisjoint(game.tags):
        return False

    if criteria.search_query:
        if criteria.search_query.casefold() not in game.name.casefold():
            return False

    return True


def _name_key(game: NormalizedGame) -> tuple[str, str]:
    return (game.name.casefold(), game.name)


def _recent_key(game: NormalizedGame) -> tuple[Any, ...]:
    # Dated records first, newest first; equal dates keep their input order.
    if game.last_achievement:
        parsed = parse_timestamp(game.last_achievement)
        stamp = parsed.value if parsed is not None else None
        if stamp is None:
            # Unparsable dates sort after every readable date.
            return (0, 1, 0)
        return (0, 0, -stamp)
    return (1, _name_key(game))


def _completion_key(game: NormalizedGame) -> float:
    return -game.completion_ratio


def _playtime_key(game: NormalizedGame) -> float:
    return -game.played_hours


SORT_FUNCTIONS: Final[dict[str, Callable[[NormalizedGame], Any]]] = {
    SORT_RECENT: _recent_key,
    SORT_NAME: _name_key,
    SORT_COMPLETION: _completion_key,
    SORT_PLAYTIME: _playtime_key,
}


def sort_games(games: Iterable[NormalizedGame], sort_key: str = DEFAULT_SORT) -> list[NormalizedGame]:
    """Return ``games`` in a new list, stably sorted by ``sort_key``."""

    key_func = SORT_FUNCTIONS.get(sort_key, _recent_key)
    return sorted(games, key=key_func)


def filter_games(games: Iterable[NormalizedGame], criteria: FilterCriteria) -> list[NormalizedGame]:
    return [game for game in games if matches(game, criteria)]


def apply(games: Sequence[NormalizedGame], criteria: FilterCriteria) -> list[NormalizedGame]:
    """Filter ``games`` by ``criteria`` and sort the surviving subset."""

    return sort_games(filter_games(games, criteria), criteria.sort_key)


__all__ = [
    "ALL_PLATFORMS",
    "DEFAULT_SORT",
    "FilterCriteria",
    "SORT_COMPLETION",
    "SORT_KEYS",
    "SORT_NAME",
    "SORT_PLAYTIME",
    "SORT_RECENT",
    "apply",
    "filter_games",
    "matches",
    "sort_games",
]
