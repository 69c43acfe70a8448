"""Load the per-platform JSON game lists from disk or over HTTP."""

from __future__ import annotations

import http.client
import json
import logging
import os
from typing import Any, Callable

from urllib.request import Request, urlopen

from config import DATA_FETCH_TIMEOUT_SECONDS, USER_AGENT, is_remote_source

from .errors import NoDataAvailable
from .models import PLATFORMS, NormalizedGame
from .normalizer import normalize

logger = logging.getLogger(__name__)


def platform_resource(source: str, platform: str) -> str:
    """Return the path or URL of ``platform``'s JSON file under ``source``."""

    if is_remote_source(source):
        return f"{source.rstrip('/')}/{platform}.json"
    return os.path.join(source, f"{platform}.json")


def _read_local(path: str) -> Any:
    with open(path, encoding="utf-8") as handle:
        return json.load(handle)


def _read_remote(url: str, *, timeout: float = DATA_FETCH_TIMEOUT_SECONDS) -> Any:
    request = Request(url, headers={"User-Agent": USER_AGENT, "Accept": "application/json"})
    with urlopen(request, timeout=timeout) as response:
        return json.loads(response.read().decode("utf-8"))


def load_platform_records(
    source: str,
    platform: str,
    *,
    fetch: Callable[[str], Any] | None = None,
) -> list[Any]:
    """Return the raw records for one platform.

    Any failure (missing file, HTTP error, bad JSON, non-list payload) is
    logged and yields an empty list so the other platforms still load.
    """

    resource = platform_resource(source, platform)
    if fetch is None:
        fetch = _read_remote if is_remote_source(source) else _read_local
    try:
        payload = fetch(resource)
    except FileNotFoundError:
        logger.warning("Could not load %s.json: %s not found", platform, resource)
        return []
    except (OSError, ValueError, RecursionError, http.client.HTTPException) as exc:
        logger.warning("Error loading %s.json from %s: %s", platform, resource, exc)
        return []

    if not isinstance(payload, list):
        logger.warning(
            "Ignoring %s.json: expected a list of games, got %s",
            platform,
            type(payload).__name__,
        )
        return []

    logger.info("Loaded %s raw %s records from %s", len(payload), platform, resource)
    return payload


def load_platform_data(
    source: str,
    *,
    fetch: Callable[[str], Any] | None = None,
) -> dict[str, list[Any]]:
    return {
        platform: load_platform_records(source, platform, fetch=fetch)
        for platform in PLATFORMS
    }


def load_games(
    source: str,
    *,
    fetch: Callable[[str], Any] | None = None,
) -> tuple[NormalizedGame, ...]:
    """Load and normalize every platform; raise when nothing usable remains."""

    raw_by_platform = load_platform_data(source, fetch=fetch)
    games = normalize(raw_by_platform)
    if not games:
        raise NoDataAvailable(
            f"No games data found in {source}",
            sources=[platform_resource(source, platform) for platform in PLATFORMS],
        )
    return games


__all__ = [
    "load_games",
    "load_platform_data",
    "load_platform_records",
    "platform_resource",
]
