"""Data types shared by the achievement engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final, Literal

from .progress import ProgressDescriptor, calculate

Platform = Literal["steam", "gog", "retroachievements"]

STEAM: Final[str] = "steam"
GOG: Final[str] = "gog"
RETROACHIEVEMENTS: Final[str] = "retroachievements"

# Declared load order; it only affects tie-break stability when sorting.
PLATFORMS: Final[tuple[str, ...]] = (STEAM, GOG, RETROACHIEVEMENTS)

PLATFORM_LABELS: Final[dict[str, str]] = {
    STEAM: "Steam",
    GOG: "GOG",
    RETROACHIEVEMENTS: "RetroAchievements",
}

BASE_SUBSET_KEY: Final[str] = "Base"


@dataclass(frozen=True)
class NormalizedGame:
    """One flattened, cross-platform game entry."""

    platform: Platform
    effective_id: str
    name: str
    cover_image: str | None = None
    total_achievements: int = 0
    unlocked_achievements: int = 0
    last_achievement: str | None = None
    played_time: float | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    console: str | None = None
    parent_id: str | None = None
    is_subset: bool = False

    @property
    def earned(self) -> int:
        """Unlocked achievements capped at the total."""

        return min(self.unlocked_achievements, self.total_achievements)

    @property
    def subset_id(self) -> str | None:
        return self.effective_id if self.is_subset else None

    @property
    def completion_ratio(self) -> float:
        if self.total_achievements <= 0:
            return 0.0
        return self.earned / self.total_achievements

    @property
    def played_hours(self) -> float:
        return self.played_time or 0.0

    @property
    def is_complete(self) -> bool:
        return self.total_achievements > 0 and self.earned == self.total_achievements

    def progress(self) -> ProgressDescriptor:
        return calculate(self.total_achievements, self.unlocked_achievements)

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform,
            "platformId": self.effective_id,
            "parentId": self.parent_id,
            "isSubset": self.is_subset,
            "subsetId": self.subset_id,
            "name": self.name,
            "coverImage": self.cover_image,
            "totalAchievements": self.total_achievements,
            "unlockedAchievements": self.unlocked_achievements,
            "lastAchievement": self.last_achievement,
            "playedTime": self.played_time,
            "tags": list(self.tags),
            "console": self.console,
        }


__all__ = [
    "BASE_SUBSET_KEY",
    "GOG",
    "NormalizedGame",
    "PLATFORMS",
    "PLATFORM_LABELS",
    "Platform",
    "RETROACHIEVEMENTS",
    "STEAM",
]
