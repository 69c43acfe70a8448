"""Application startup orchestration helpers."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from achievements.errors import NoDataAvailable
from achievements.models import NormalizedGame
from achievements.normalizer import normalize

logger = logging.getLogger(__name__)


def initialize_app(
    *,
    check_data_source: Callable[[], None],
    load_games: Callable[[], Iterable[NormalizedGame]],
    set_games: Callable[..., None],
    mark_unavailable: Callable[[str], None],
    fallback_data: Callable[[], Mapping[str, Any]] | None = None,
) -> int:
    """Load the game catalog and return the number of games available.

    ``load_games`` raises :class:`NoDataAvailable` when every platform came
    back empty. What happens next is the caller's policy: with
    ``fallback_data`` the bundled sample records are normalized and used,
    otherwise the catalog is marked unavailable and the error is logged.
    """

    check_data_source()

    try:
        games = tuple(load_games())
    except NoDataAvailable as exc:
        if fallback_data is None:
            logger.error("No achievement data available: %s", exc)
            mark_unavailable(str(exc))
            return 0
        logger.warning("No achievement data available (%s); using sample data", exc)
        games = normalize(fallback_data())

    try:
        set_games(games, rebuild_metadata=True)
    except Exception:
        logger.exception("Failed to configure catalog state during startup")
        raise

    return len(games)


__all__ = ["initialize_app"]
