"""Summary counters and chart breakdowns over game lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import pandas as pd

from .models import PLATFORM_LABELS, PLATFORMS, RETROACHIEVEMENTS, NormalizedGame
from .tags import tag_frequency

PC_CONSOLE_LABEL = "PC"


@dataclass(frozen=True)
class Stats:
    game_count: int
    total_unlocked: int
    fully_completed_count: int

    def to_dict(self) -> dict[str, int]:
        return {
            "gameCount": self.game_count,
            "totalUnlocked": self.total_unlocked,
            "fullyCompletedCount": self.fully_completed_count,
        }


def games_dataframe(games: Iterable[NormalizedGame]) -> pd.DataFrame:
    """Return one row per game with the columns the aggregations need."""

    rows = [
        {
            "platform": game.platform,
            "earned": game.earned,
            "total": game.total_achievements,
            "console": (
                game.console
                if game.platform == RETROACHIEVEMENTS and game.console
                else PC_CONSOLE_LABEL
            ),
        }
        for game in games
    ]
    return pd.DataFrame(rows, columns=["platform", "earned", "total", "console"])


def summarize(games: Sequence[NormalizedGame]) -> Stats:
    """Compute the dashboard counters for the currently visible games."""

    df = games_dataframe(games)
    if df.empty:
        return Stats(game_count=0, total_unlocked=0, fully_completed_count=0)
    completed = (df["total"] > 0) & (df["earned"] == df["total"])
    return Stats(
        game_count=len(df),
        total_unlocked=int(df["earned"].sum()),
        fully_completed_count=int(completed.sum()),
    )


def platform_breakdown(games: Iterable[NormalizedGame]) -> list[dict[str, Any]]:
    """Games and unlocked achievements per platform, in declared order."""

    df = games_dataframe(games)
    if df.empty:
        return [
            {"platform": platform, "label": PLATFORM_LABELS[platform], "games": 0, "achievements": 0}
            for platform in PLATFORMS
        ]
    grouped = df.groupby("platform").agg(games=("earned", "size"), achievements=("earned", "sum"))
    grouped = grouped.reindex(list(PLATFORMS), fill_value=0)
    return [
        {
            "platform": platform,
            "label": PLATFORM_LABELS[platform],
            "games": int(row["games"]),
            "achievements": int(row["achievements"]),
        }
        for platform, row in grouped.iterrows()
    ]


def console_breakdown(games: Iterable[NormalizedGame]) -> list[dict[str, Any]]:
    """Game counts per console, most common first; Steam and GOG count as PC."""

    df = games_dataframe(games)
    if df.empty:
        return []
    counts = df["console"].value_counts(sort=False)
    ordered = sorted(counts.items(), key=lambda item: (-int(item[1]), str(item[0])))
    return [{"console": str(console), "games": int(count)} for console, count in ordered]


def chart_data(games: Sequence[NormalizedGame]) -> dict[str, Any]:
    return {
        "platforms": platform_breakdown(games),
        "tags": [{"tag": tag, "games": count} for tag, count in tag_frequency(games)],
        "consoles": console_breakdown(games),
    }


__all__ = [
    "PC_CONSOLE_LABEL",
    "Stats",
    "chart_data",
    "console_breakdown",
    "games_dataframe",
    "platform_breakdown",
    "summarize",
]
