"""Canonical platform URLs for game records."""

from __future__ import annotations

from urllib.parse import quote, urlencode

from .models import GOG, RETROACHIEVEMENTS, STEAM, NormalizedGame

STEAM_ACHIEVEMENTS_URL = "https://steamcommunity.com/stats/{id}/achievements"
GOG_GAME_URL = "https://www.gog.com/game/{id}"
RETROACHIEVEMENTS_GAME_URL = "https://retroachievements.org/game/{id}"


def game_link(game: NormalizedGame) -> str | None:
    """Return the platform page for ``game`` or ``None`` when it has no id."""

    if not game.effective_id:
        return None

    if game.platform == RETROACHIEVEMENTS:
        url = RETROACHIEVEMENTS_GAME_URL.format(id=quote(game.parent_id or game.effective_id))
        if game.is_subset and game.subset_id:
            url = f"{url}?{urlencode({'set': game.subset_id})}"
        return url

    if game.platform == STEAM:
        return STEAM_ACHIEVEMENTS_URL.format(id=quote(game.effective_id))
    if game.platform == GOG:
        return GOG_GAME_URL.format(id=quote(game.effective_id))
    return None


__all__ = ["game_link"]
