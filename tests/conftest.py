"""Shared fixtures: small OWID-shaped payloads and tmp-dir settings."""

from __future__ import annotations

from typing import Any

import pytest

from pandemia.models import CountryInfo, Settings

DATA_URL = "https://owid.example.test/data/owid-covid-data.json"


def make_payload(
    days_by_code: dict[str, list[tuple[str, float | None]]],
    extra_fields: bool = False,
) -> dict[str, Any]:
    """Build a provider-style payload: {code: {"data": [{date, new_deaths_per_million}]}}."""
    payload: dict[str, Any] = {}
    for code, days in days_by_code.items():
        records = []
        for day, value in days:
            record: dict[str, Any] = {"date": day, "new_deaths_per_million": value}
            if extra_fields:
                record["new_cases"] = 123.0
            records.append(record)
        entry: dict[str, Any] = {"data": records}
        if extra_fields:
            entry["location"] = code.title()
            entry["population"] = 1_000_000
        payload[code] = entry
    return payload


@pytest.fixture
def settings(tmp_path) -> Settings:  # type: ignore[no-untyped-def]
    return Settings(
        countries=(CountryInfo("ROU", "România"), CountryInfo("DEU", "Germania")),
        data_url=DATA_URL,
        data_file=tmp_path / "data" / "owid-covid-data.json",
        chart_file=tmp_path / "charts" / "deaths.html",
    )


@pytest.fixture
def full_payload() -> dict[str, Any]:
    return make_payload(
        {
            "ROU": [("2021-01-01", 1.5), ("2021-01-02", 2.0), ("2021-01-03", None)],
            "DEU": [("2021-01-01", 3.0), ("2021-01-02", 4.25), ("2021-01-03", 5.0)],
            "ITA": [("2021-01-01", 6.0)],
            "FRA": [("2021-01-01", 7.0)],
        },
        extra_fields=True,
    )
