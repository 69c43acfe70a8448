"""Pytest fixtures shared across the test suite."""

import os

import pytest


@pytest.fixture(autouse=True)
def restore_working_directory():
    """Tests that load the app ``chdir`` into ``tmp_path``; undo it afterwards."""

    cwd = os.getcwd()
    yield
    os.chdir(cwd)


@pytest.fixture
def raw_platform_data():
    return {
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
                "platformId": "400",
                "name": "Portal",
                "totalAchievements": 15,
                "unlockedAchievements": 3,
                "lastAchievement": None,
                "playedTime": 4,
                "tags": ["Puzzle"],
            },
        ],
        "gog": [
            {
                "platformId": "disco_elysium",
                "name": "Disco Elysium",
                "totalAchievements": 44,
                "unlockedAchievements": 20,
                "dateCompleted": "2024-06-10",
                "tags": ["RPG"],
            },
        ],
        "retroachievements": [
            {
                "platformId": "1",
                "name": "Sonic the Hedgehog",
                "console": "Genesis/Mega Drive",
                "lastAchievement": "2023-01-01",
                "playedTime": 12,
                "tags": ["Platformer"],
                "subsets": {
                    "Base": {
                        "totalAchievements": 23,
                        "unlockedAchievements": 23,
                        "lastAchievement": "2023-11-11",
                    },
                    "1234": {
                        "name": "Bonus",
                        "coverImage": "covers/bonus.png",
                        "totalAchievements": 10,
                        "unlockedAchievements": 3,
                    },
                },
            },
            {
                "platformId": "2",
                "name": "Super Mario World",
                "console": "SNES",
                "totalAchievements": 0,
                "unlockedAchievements": 0,
            },
        ],
    }
