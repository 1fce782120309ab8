"""CLI entry point for pandemia."""

from __future__ import annotations

import dataclasses
import sys

import click
import httpx

from pandemia import cache, chart, formatters, owid, series
from pandemia.errors import PandemiaError
from pandemia.models import AlignedData, Settings

DEFAULT_SETTINGS = Settings()


def _run(settings: Settings, force_refresh: bool) -> AlignedData:
    with httpx.Client(timeout=settings.timeout) as client:
        dataset, notes = owid.load_owid_data(client, settings, force_refresh)
    for note in notes:
        click.echo(note)

    aligned = series.align(dataset)
    click.echo("rendering daily deaths per million chart ...")
    path = chart.render_chart(aligned, settings)
    click.echo(f"Chart written to {path}")
    return aligned


def _show_cache_status(settings: Settings) -> None:
    click.echo("Cache files:")
    for e in cache.cache_status(settings):
        name = e["file"]
        if not e["exists"]:
            click.echo(f"  {name:6s}  missing   {e['path']}")
            continue
        state = "fresh" if e.get("fresh") else "stale"
        click.echo(
            f"  {name:6s}  {e['size_bytes']:>10d} bytes  modified {e['modified']}"
            f"  ({e['age_hours']}h, {state})  {e['path']}"
        )


@click.command()
@click.option(
    "--only-last",
    type=click.IntRange(min=0),
    default=0,
    help="Chart only the last N days of each country (default: full history)",
)
@click.option("--refresh-cache", is_flag=True, help="Download the dataset even if the cache is fresh")
@click.option(
    "--cache-status",
    "show_cache_status",
    is_flag=True,
    help="Show cache file locations and freshness",
)
@click.option("--clear-cache", is_flag=True, help="Delete the cached dataset and exit")
@click.option("--quiet", is_flag=True, help="Do not print the summary table")
def main(
    only_last: int,
    refresh_cache: bool,
    show_cache_status: bool,
    clear_cache: bool,
    quiet: bool,
) -> None:
    """Pandemic daily deaths per million, compared across countries.

    Downloads the Our World in Data COVID-19 dataset (cached for 24 hours)
    and renders a line chart for the configured countries.
    """
    settings = dataclasses.replace(DEFAULT_SETTINGS, only_last=only_last)

    # Handle cache-only commands
    if show_cache_status:
        try:
            _show_cache_status(settings)
        except PandemiaError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)
        return

    if clear_cache:
        try:
            removed = cache.clear_cache(settings)
        except PandemiaError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)
        if removed:
            click.echo(f"Removed {settings.data_file}.")
        else:
            click.echo("No cache file found.")
        return

    try:
        aligned = _run(settings, refresh_cache)
    except PandemiaError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if not quiet:
        click.echo(formatters.format_summary(aligned, settings), nl=False)


if __name__ == "__main__":
    main()
