"""Card payloads for the dashboard front end."""

from __future__ import annotations

import re
from typing import Any

from helpers import parse_timestamp

from .links import game_link
from .models import GOG, RETROACHIEVEMENTS, STEAM, NormalizedGame

PLATFORM_ICONS = {
    STEAM: "assets/icons/steam.svg",
    GOG: "assets/icons/gog.svg",
    RETROACHIEVEMENTS: "assets/icons/ra-icon.webp",
}
RIBBON_ICON = "assets/icons/ribbon.png"
CONSOLE_ICON_DIR = "assets/icons/consoles"

_SLUG_RE = re.compile(r"[^a-z0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")


def game_slug(name: str) -> str:
    return _SLUG_RE.sub("-", name.lower()).strip("-")


def format_date(value: str | None) -> str | None:
    """Format a date string as ``dd/mm/yyyy``; unreadable input gives ``None``."""

    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.strftime("%d/%m/%Y")


def format_played_time(hours: float | None) -> str:
    if not hours:
        return ""
    if hours < 1:
        return "< 1h"
    return f"{int(hours + 0.5)}h"


def completion_label(game: NormalizedGame) -> str:
    return "Mastered" if game.platform == RETROACHIEVEMENTS else "100% Complete"


def console_icon(game: NormalizedGame) -> str | None:
    if game.platform != RETROACHIEVEMENTS or not game.console:
        return None
    slug = _WHITESPACE_RE.sub("-", game.console.lower())
    return f"{CONSOLE_ICON_DIR}/{slug}.png"


def tooltip_lines(game: NormalizedGame) -> list[str]:
    progress = game.progress()
    lines = [
        game.name,
        f"{progress.percentage}% • {progress.earned}/{progress.total} achievements",
    ]
    last = format_date(game.last_achievement)
    if last:
        lines.append(f"Last achievement: {last}")
    if game.played_time:
        lines.append(f"Total hours: {format_played_time(game.played_time)}")
    if game.console:
        lines.append(f"Console: {game.console}")
    if game.tags:
        lines.append(f"Tags: {', '.join(game.tags)}")
    return lines


def build_game_payload(game: NormalizedGame) -> dict[str, Any]:
    progress = game.progress()
    payload = game.to_dict()
    payload.update(
        {
            "slug": game_slug(game.name),
            "link": game_link(game),
            "progress": progress.to_dict(),
            "tooltip": tooltip_lines(game),
            "completionLabel": completion_label(game),
            "platformIcon": PLATFORM_ICONS.get(game.platform),
            "consoleIcon": console_icon(game),
            "ribbonIcon": RIBBON_ICON if game.platform != RETROACHIEVEMENTS else None,
        }
    )
    return payload


__all__ = [
    "build_game_payload",
    "completion_label",
    "console_icon",
    "format_date",
    "format_played_time",
    "game_slug",
    "tooltip_lines",
]
