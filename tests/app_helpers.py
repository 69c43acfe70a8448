"""Shared testing helpers for loading the Flask app against temporary data."""

from __future__ import annotations

import importlib.util
import json
import os
import uuid
from pathlib import Path
from typing import Any, Mapping

from achievements.models import NormalizedGame

APP_PATH = Path(__file__).resolve().parents[1] / "app.py"


def write_platform_files(data_dir: Path, data: Mapping[str, Any]) -> Path:
    """Write one ``<platform>.json`` file per entry of ``data``."""

    data_dir.mkdir(parents=True, exist_ok=True)
    for platform, payload in data.items():
        target = data_dir / f"{platform}.json"
        if isinstance(payload, str):
            target.write_text(payload, encoding="utf-8")
        else:
            target.write_text(json.dumps(payload), encoding="utf-8")
    return data_dir


def load_app(
    tmp_path: Path,
    data: Mapping[str, Any] | None = None,
    *,
    sample_fallback: bool = False,
) -> object:
    """Import a fresh application module reading its data from ``tmp_path``."""

    os.chdir(tmp_path)
    data_dir = write_platform_files(tmp_path / "data", data or {})

    module_name = f"app_{uuid.uuid4().hex}"
    spec = importlib.util.spec_from_file_location(module_name, APP_PATH)
    if spec is None or spec.loader is None:
        raise RuntimeError("Unable to load app module specification")
    module = importlib.util.module_from_spec(spec)

    env_vars = {
        key: os.environ.get(key)
        for key in ("DATA_SOURCE", "SAMPLE_DATA_FALLBACK")
    }
    os.environ["DATA_SOURCE"] = os.fspath(data_dir)
    os.environ["SAMPLE_DATA_FALLBACK"] = "1" if sample_fallback else "0"

    try:
        spec.loader.exec_module(module)
    finally:
        for key, value in env_vars.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value

    module.app.config['TESTING'] = True
    module.app.testing = True
    return module


def make_game(name: str = "Game", **overrides: Any) -> NormalizedGame:
    """Build a ``NormalizedGame`` with sensible defaults for unit tests."""

    values: dict[str, Any] = {
        "platform": "steam",
        "effective_id": name.lower().replace(" ", "-"),
        "name": name,
        "total_achievements": 10,
        "unlocked_achievements": 0,
    }
    values.update(overrides)
    if "tags" in values:
        values["tags"] = tuple(values["tags"])
    return NormalizedGame(**values)
