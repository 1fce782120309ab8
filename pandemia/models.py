"""Data models for the OWID dataset, aligned chart data and run settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any

from pandemia.errors import DecodeError


@dataclass(frozen=True, slots=True)
class CountryInfo:
    code: str
    name: str


@dataclass(slots=True)
class DayData:
    date: str
    new_deaths_per_million: float = 0.0


@dataclass(slots=True)
class CountrySeries:
    data: list[DayData] = field(default_factory=list)


Dataset = dict[str, CountrySeries]


@dataclass(slots=True)
class AlignedData:
    days: list[str]
    values: dict[str, list[float]] = field(default_factory=dict)  # code -> one value per day


# --- Country registry ---

def _build_country_registry() -> tuple[CountryInfo, ...]:
    return (
        CountryInfo("ROU", "România"),
        CountryInfo("DEU", "Germania"),
        CountryInfo("ITA", "Italia"),
        CountryInfo("DNK", "Danemarca"),
    )


DEFAULT_COUNTRIES = _build_country_registry()

DATA_URL = "https://covid.ourworldindata.org/data/owid-covid-data.json"
DATA_FILE = Path("pkg") / "data" / "owid-covid-data.json"
CHART_FILE = Path("pkg") / "charts" / "deaths.html"


@dataclass(frozen=True, slots=True)
class Settings:
    countries: tuple[CountryInfo, ...] = DEFAULT_COUNTRIES
    data_url: str = DATA_URL
    data_file: Path = DATA_FILE
    chart_file: Path = CHART_FILE
    max_age: timedelta = timedelta(hours=24)
    timeout: float = 15.0
    only_last: int = 0

    @property
    def codes(self) -> frozenset[str]:
        return frozenset(c.code for c in self.countries)

    def name_for(self, code: str) -> str:
        for country in self.countries:
            if country.code == code:
                return country.name
        return code


# --- JSON shape ---
# {"ROU": {"data": [{"date": "2020-03-22", "new_deaths_per_million": 0.052}, ...]}, ...}

def _parse_day(raw: Any) -> DayData:
    day = raw["date"]
    if not isinstance(day, str):
        raise DecodeError(f"expected a date string, got {day!r}")
    value = raw.get("new_deaths_per_million")
    return DayData(
        date=day,
        new_deaths_per_million=float(value) if value is not None else 0.0,
    )


def parse_series(raw: Any) -> CountrySeries:
    """Decode one country entry, ignoring every field except the daily records."""
    if not isinstance(raw, Mapping):
        raise DecodeError(f"expected an object for country data, got {type(raw).__name__}")
    try:
        days = [_parse_day(d) for d in raw.get("data") or []]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise DecodeError(f"malformed daily record: {exc!r}") from exc
    return CountrySeries(data=days)


def parse_dataset(raw: Any) -> Dataset:
    if not isinstance(raw, Mapping):
        raise DecodeError(f"expected an object keyed by country code, got {type(raw).__name__}")
    return {str(code): parse_series(entry) for code, entry in raw.items()}


def dump_dataset(dataset: Mapping[str, CountrySeries]) -> dict[str, Any]:
    return {
        code: {
            "data": [
                {"date": d.date, "new_deaths_per_million": d.new_deaths_per_million}
                for d in series.data
            ]
        }
        for code, series in dataset.items()
    }
