"""OWID COVID-19 dataset client.

Data flow per run:
    1. Check cache (skip download if present, fresh and complete)
    2. Download the full dataset and keep only configured countries
    3. Save the filtered subset to the cache file
    4. Read the cache back and select/trim the configured series
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from pandemia import cache, series
from pandemia.errors import DecodeError, FetchError, IncompleteDataError
from pandemia.models import Dataset, Settings, parse_dataset


def filter_countries(
    all_data: Mapping[str, Any],
    codes: Iterable[str],
) -> dict[str, Any]:
    """Keep only the wanted country entries.

    The scan stops as soon as every wanted code has been seen.
    Raises IncompleteDataError listing the codes that were never found.
    """
    wanted = set(codes)
    filtered: dict[str, Any] = {}
    for code, entry in all_data.items():
        if code in wanted:
            filtered[code] = entry
        if len(filtered) == len(wanted):
            break

    missing = sorted(wanted - filtered.keys())
    if missing:
        raise IncompleteDataError(
            "downloaded data does not contain all the requested countries; "
            f"missing: [{', '.join(missing)}]",
            missing=missing,
        )
    return filtered


def download_dataset(client: httpx.Client, settings: Settings) -> Dataset:
    """Download the full dataset, filter it and overwrite the cache file."""
    url = settings.data_url
    try:
        resp = client.get(url)
    except httpx.HTTPError as exc:
        raise FetchError(f"error downloading data from URL {url}: {exc}") from exc

    if resp.status_code != httpx.codes.OK:
        raise FetchError(
            f"error downloading data from URL {url}: expected status 200 OK, "
            f"got {resp.status_code} {resp.reason_phrase} with body {resp.text}"
        )

    try:
        all_data = resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"error decoding downloaded data from URL {url}: {exc}") from exc
    if not isinstance(all_data, Mapping):
        raise DecodeError(
            f"error decoding downloaded data from URL {url}: "
            f"expected an object keyed by country code, got {type(all_data).__name__}"
        )

    dataset = parse_dataset(filter_countries(all_data, settings.codes))
    cache.write_dataset(settings.data_file, dataset)
    return dataset


def load_owid_data(
    client: httpx.Client,
    settings: Settings,
    force_refresh: bool = False,
) -> tuple[Dataset, list[str]]:
    """Return the configured countries' series, downloading when needed.

    Returns (dataset, notes_list).
    """
    notes: list[str] = []

    reason = "forced" if force_refresh else cache.refresh_reason(settings)
    if reason is not None:
        download_dataset(client, settings)
        notes.append(
            f"Downloaded data from URL {settings.data_url} "
            f"to file {settings.data_file} (cache {reason})."
        )

    data = cache.read_dataset(settings.data_file)
    data = series.select_countries(data, settings.codes)
    if settings.only_last > 0:
        data = series.trim_last(data, settings.only_last)
    return data, notes
