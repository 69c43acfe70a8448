"""Small demo dataset used when no platform file can be loaded."""

from __future__ import annotations

from typing import Any

SAMPLE_RAW_DATA: dict[str, list[dict[str, Any]]] = {
    "steam": [
        {
            "platformId": "620",
            "name": "Portal 2",
            "totalAchievements": 51,
            "unlockedAchievements": 51,
            "lastAchievement": "2024-03-02",
            "playedTime": 31.5,
            "tags": ["Puzzle", "Co-op"],
        },
        {
            "platformId": "367520",
            "name": "Hollow Knight",
            "totalAchievements": 63,
            "unlockedAchievements": 40,
            "lastAchievement": "2024-05-18",
            "playedTime": 58,
            "tags": ["Metroidvania"],
        },
    ],
    "gog": [
        {
            "platformId": "the_witcher_3_wild_hunt",
            "name": "The Witcher 3: Wild Hunt",
            "totalAchievements": 78,
            "unlockedAchievements": 12,
            "lastAchievement": None,
            "playedTime": 0.5,
            "tags": ["RPG"],
        },
    ],
    "retroachievements": [
        {
            "platformId": "1",
            "name": "Sonic the Hedgehog",
            "console": "Genesis/Mega Drive",
            "tags": ["Platformer"],
            "subsets": {
                "Base": {
                    "totalAchievements": 23,
                    "unlockedAchievements": 23,
                    "lastAchievement": "2023-11-11",
                },
                "28093": {
                    "name": "Bonus",
                    "totalAchievements": 10,
                    "unlockedAchievements": 3,
                },
            },
        },
    ],
}


def sample_raw_data() -> dict[str, list[dict[str, Any]]]:
    return {platform: [dict(record) for record in records] for platform, records in SAMPLE_RAW_DATA.items()}


__all__ = ["SAMPLE_RAW_DATA", "sample_raw_data"]
