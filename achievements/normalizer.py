"""Normalize raw per-platform game lists into flat ``NormalizedGame`` records."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping

from helpers import (
    _coerce_count,
    _coerce_hours,
    _dedupe_preserve_order,
    _normalize_text,
    _parse_iterable,
    has_text_value,
)

from .filters import SORT_RECENT, sort_games
from .models import BASE_SUBSET_KEY, PLATFORMS, RETROACHIEVEMENTS, NormalizedGame

logger = logging.getLogger(__name__)

COVERS_BASE_PATH = "assets/covers"

# Older data files recorded the completion date under a different key.
LEGACY_FIELD_ALIASES: dict[str, str] = {
    "dateCompleted": "lastAchievement",
}


def default_cover_path(platform: str, identifier: str) -> str:
    return f"{COVERS_BASE_PATH}/{platform}/{identifier}.jpg"


def unknown_game_name(identifier: str) -> str:
    return f"Unknown Game ({identifier})"


def upgrade_legacy_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``record`` using the current field names."""

    upgraded = dict(record)
    for legacy_key, current_key in LEGACY_FIELD_ALIASES.items():
        if legacy_key not in upgraded:
            continue
        legacy_value = upgraded.pop(legacy_key)
        if upgraded.get(current_key) is None:
            upgraded[current_key] = legacy_value
    return upgraded


def _optional_text(value: Any) -> str | None:
    return _normalize_text(value) if has_text_value(value) else None


def _record_id(record: Mapping[str, Any]) -> str | None:
    return _optional_text(record.get("platformId"))


def _parse_tags(value: Any) -> tuple[str, ...]:
    return tuple(_dedupe_preserve_order(_parse_iterable(value)))


def _build_game(
    platform: str,
    identifier: str,
    *,
    name: str | None,
    cover_image: Any,
    total: Any,
    unlocked: Any,
    last_achievement: Any,
    played_time: Any,
    tags: tuple[str, ...],
    console: Any,
    parent_id: str | None = None,
    is_subset: bool = False,
) -> NormalizedGame:
    total_count = _coerce_count(total)
    unlocked_count = _coerce_count(unlocked)
    if unlocked_count > total_count:
        logger.warning(
            "Game %s/%s reports %s unlocked of %s achievements; capping progress",
            platform,
            identifier,
            unlocked_count,
            total_count,
        )
    return NormalizedGame(
        platform=platform,
        effective_id=identifier,
        name=name or unknown_game_name(identifier),
        cover_image=_optional_text(cover_image) or default_cover_path(platform, identifier),
        total_achievements=total_count,
        unlocked_achievements=unlocked_count,
        last_achievement=_optional_text(last_achievement),
        played_time=_coerce_hours(played_time),
        tags=tags,
        console=_optional_text(console),
        parent_id=parent_id,
        is_subset=is_subset,
    )


def _expand_subsets(
    record: Mapping[str, Any], parent_id: str, subsets: Mapping[Any, Any]
) -> Iterator[NormalizedGame]:
    parent_name = _optional_text(record.get("name"))
    tags = _parse_tags(record.get("tags"))
    for raw_key, raw_subset in subsets.items():
        key = _normalize_text(raw_key)
        if not key:
            logger.warning("Skipping subset with empty key on game %s", parent_id)
            continue
        if not isinstance(raw_subset, Mapping):
            logger.warning("Skipping malformed subset %s on game %s", key, parent_id)
            continue
        subset = upgrade_legacy_record(raw_subset)

        is_base = key == BASE_SUBSET_KEY
        if is_base:
            identifier = parent_id
            name = parent_name
        else:
            identifier = key
            subset_name = _optional_text(subset.get("name"))
            if parent_name and subset_name:
                name = f"{parent_name}: {subset_name}"
            else:
                name = subset_name or parent_name

        last_achievement = subset.get("lastAchievement")
        if not has_text_value(last_achievement):
            last_achievement = record.get("lastAchievement")
        played_time = subset.get("playedTime")
        if not played_time:
            played_time = record.get("playedTime")

        yield _build_game(
            RETROACHIEVEMENTS,
            identifier,
            name=name,
            cover_image=subset.get("coverImage"),
            total=subset.get("totalAchievements"),
            unlocked=subset.get("unlockedAchievements"),
            last_achievement=last_achievement,
            played_time=played_time,
            tags=tags,
            console=record.get("console"),
            parent_id=None if is_base else parent_id,
            is_subset=not is_base,
        )


def normalize_record(platform: str, raw_record: Any) -> list[NormalizedGame]:
    """Normalize one raw record into zero or more games.

    Malformed input yields an empty list and a logged warning.
    """

    if not isinstance(raw_record, Mapping):
        logger.warning("Skipping malformed %s record of type %s", platform, type(raw_record).__name__)
        return []
    record = upgrade_legacy_record(raw_record)
    identifier = _record_id(record)
    if identifier is None:
        logger.warning(
            "Skipping %s record without platformId (name=%r)", platform, record.get("name")
        )
        return []

    subsets = record.get("subsets")
    if platform == RETROACHIEVEMENTS and isinstance(subsets, Mapping):
        return list(_expand_subsets(record, identifier, subsets))

    return [
        _build_game(
            platform,
            identifier,
            name=_optional_text(record.get("name")),
            cover_image=record.get("coverImage"),
            total=record.get("totalAchievements"),
            unlocked=record.get("unlockedAchievements"),
            last_achievement=record.get("lastAchievement"),
            played_time=record.get("playedTime"),
            tags=_parse_tags(record.get("tags")),
            console=record.get("console"),
        )
    ]


def normalize(raw_by_platform: Mapping[str, Iterable[Any] | None]) -> tuple[NormalizedGame, ...]:
    """Flatten every platform's raw records into one ordered, immutable list."""

    for platform in raw_by_platform:
        if platform not in PLATFORMS:
            logger.warning("Ignoring records for unknown platform %r", platform)

    games: list[NormalizedGame] = []
    for platform in PLATFORMS:
        records = raw_by_platform.get(platform) or []
        count_before = len(games)
        for raw_record in records:
            games.extend(normalize_record(platform, raw_record))
        logger.debug("Normalized %s %s games", len(games) - count_before, platform)

    return tuple(sort_games(games, SORT_RECENT))


__all__ = [
    "COVERS_BASE_PATH",
    "LEGACY_FIELD_ALIASES",
    "default_cover_path",
    "normalize",
    "normalize_record",
    "unknown_game_name",
    "upgrade_legacy_record",
]
