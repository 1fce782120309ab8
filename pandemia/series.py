"""Pure functions for selecting, trimming and aligning country series."""

from __future__ import annotations

from collections.abc import Iterable

from pandemia.models import AlignedData, CountrySeries, Dataset


def select_countries(dataset: Dataset, codes: Iterable[str]) -> Dataset:
    """Keep only the given country codes; extra cached countries are dropped."""
    wanted = set(codes)
    return {code: s for code, s in dataset.items() if code in wanted}


def trim_last(dataset: Dataset, n: int) -> Dataset:
    """Keep the final n observations of each series.

    n <= 0 keeps everything; n longer than a series keeps the whole series.
    """
    if n <= 0:
        return dataset
    return {code: CountrySeries(data=s.data[-n:]) for code, s in dataset.items()}


def common_days(dataset: Dataset) -> list[str]:
    """Dates present in every series, in ascending ISO (string) order."""
    day_sets = [{d.date for d in s.data} for s in dataset.values()]
    if not day_sets:
        return []
    return sorted(set.intersection(*day_sets))


def align(dataset: Dataset) -> AlignedData:
    """Build a shared x-axis and one value per axis day for each country.

    Countries are ordered by code so the chart legend is reproducible.
    """
    days = common_days(dataset)
    values: dict[str, list[float]] = {}
    for code in sorted(dataset):
        by_day: dict[str, float] = {}
        for d in dataset[code].data:
            # First record wins if a provider repeats a date
            by_day.setdefault(d.date, d.new_deaths_per_million)
        values[code] = [by_day[day] for day in days]
    return AlignedData(days=days, values=values)
