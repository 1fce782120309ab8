"""File-based cache for the filtered OWID dataset.

Cache layout (relative to the working directory):
    pkg/data/owid-covid-data.json   filtered dataset, refreshed after 24h
    pkg/charts/deaths.html          rendered chart, overwritten every run
"""

from __future__ import annotations

import json
import os
from datetime import UTC, datetime
from pathlib import Path

from pandemia.errors import CacheInspectionError, DecodeError, PersistenceError
from pandemia.models import Dataset, Settings, dump_dataset, parse_dataset


def _stat(path: Path) -> os.stat_result | None:
    """Return the file's stat result, or None if it does not exist."""
    try:
        return path.stat()
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise CacheInspectionError(f"error getting info for data file {path}: {exc}") from exc


def _modified_at(stat: os.stat_result) -> datetime:
    return datetime.fromtimestamp(stat.st_mtime, tz=UTC)


def read_dataset(path: Path) -> Dataset:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CacheInspectionError(f"error reading data file {path}: {exc}") from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"error decoding data from JSON file {path}: {exc}") from exc
    try:
        return parse_dataset(raw)
    except DecodeError as exc:
        raise DecodeError(f"error decoding data from JSON file {path}: {exc}") from exc


def write_dataset(path: Path, dataset: Dataset) -> None:
    try:
        text = json.dumps(dump_dataset(dataset), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise PersistenceError(f"error encoding filtered data to JSON: {exc}") from exc
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(f"error writing downloaded data to file {path}: {exc}") from exc


def refresh_reason(settings: Settings) -> str | None:
    """Decide whether the cached dataset must be downloaded again.

    Returns "missing", "stale" or "incomplete", or None when the cache
    can be used as-is.
    """
    stat = _stat(settings.data_file)
    if stat is None:
        return "missing"

    if datetime.now(UTC) - _modified_at(stat) > settings.max_age:
        return "stale"

    cached = read_dataset(settings.data_file)
    if not settings.codes.issubset(cached):
        return "incomplete"
    return None


# --- Cache management ---

def cache_status(settings: Settings) -> list[dict]:
    """Return info about the data and chart files for --cache-status."""
    now = datetime.now(UTC)
    results = []
    for label, path in (("data", settings.data_file), ("chart", settings.chart_file)):
        stat = _stat(path)
        if stat is None:
            results.append({"file": label, "path": str(path), "exists": False})
            continue
        modified = _modified_at(stat)
        age = now - modified
        results.append({
            "file": label,
            "path": str(path),
            "exists": True,
            "size_bytes": stat.st_size,
            "modified": modified.isoformat(),
            "age_hours": round(age.total_seconds() / 3600, 1),
            "fresh": age <= settings.max_age,
        })
    return results


def clear_cache(settings: Settings) -> bool:
    """Delete the cached dataset. Returns whether a file was removed."""
    path = settings.data_file
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise CacheInspectionError(f"error removing data file {path}: {exc}") from exc
    return True
