"""Catalog state for the loaded games and their derived indexes."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Iterable

from . import filters, stats, tags
from .models import PLATFORMS, RETROACHIEVEMENTS, NormalizedGame


@dataclass
class CatalogState:
    """Own the immutable base game list and everything derived from it."""

    logger: logging.Logger | None = None

    games: tuple[NormalizedGame, ...] = field(default_factory=tuple)
    total_games: int = 0
    tags_list: list[str] = field(default_factory=list)
    platforms_list: list[str] = field(default_factory=list)
    consoles_list: list[str] = field(default_factory=list)
    load_error: str | None = None
    _index: dict[tuple[str, str], NormalizedGame] = field(default_factory=dict)

    @property
    def is_loaded(self) -> bool:
        return self.total_games > 0

    def set_games(
        self,
        games: Iterable[NormalizedGame] | None,
        *,
        rebuild_metadata: bool = True,
    ) -> None:
        """Replace the base game list and refresh derived state."""

        self.games = tuple(games or ())
        self.total_games = len(self.games)
        self.load_error = None
        self._index = {}
        for game in self.games:
            key = (game.platform, game.effective_id)
            if key in self._index and self.logger:
                self.logger.warning(
                    "Duplicate game id %s on %s; keeping the first entry",
                    game.effective_id,
                    game.platform,
                )
            self._index.setdefault(key, game)

        if rebuild_metadata:
            self._rebuild_metadata(self.games)

        if self.logger:
            self.logger.info(
                "Catalog loaded with %s games and %s tags",
                self.total_games,
                len(self.tags_list),
            )

    def mark_unavailable(self, reason: str) -> None:
        self.set_games((), rebuild_metadata=True)
        self.load_error = reason

    def find(self, platform: str, effective_id: str) -> NormalizedGame | None:
        return self._index.get((platform, effective_id))

    def view(self, criteria: filters.FilterCriteria) -> list[NormalizedGame]:
        return filters.apply(self.games, criteria)

    def summarize(self, criteria: filters.FilterCriteria | None = None) -> stats.Stats:
        visible = self.games if criteria is None else self.view(criteria)
        return stats.summarize(visible)

    def charts(self) -> dict[str, Any]:
        return stats.chart_data(self.games)

    def get_tags(self) -> list[str]:
        return list(self.tags_list)

    def get_platforms(self) -> list[str]:
        return list(self.platforms_list)

    def get_consoles(self) -> list[str]:
        return list(self.consoles_list)

    def _rebuild_metadata(self, games: tuple[NormalizedGame, ...]) -> None:
        self.tags_list = tags.extract_tags(games)

        present = {game.platform for game in games}
        self.platforms_list = [platform for platform in PLATFORMS if platform in present]

        console_values: set[str] = set()
        for game in games:
            if game.platform == RETROACHIEVEMENTS and game.console:
                console_values.add(game.console)
        self.consoles_list = sorted(console_values, key=str.casefold)


__all__ = ["CatalogState"]
