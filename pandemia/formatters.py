"""Console summary of the aligned chart data."""

from __future__ import annotations

import io

from rich import box
from rich.console import Console
from rich.table import Table

from pandemia.models import AlignedData, Settings


def _fmt_value(val: float) -> str:
    return f"{val:.2f}"


def format_summary(aligned: AlignedData, settings: Settings) -> str:
    """Format per-country statistics over the aligned window as a Rich table."""
    buf = io.StringIO()
    rich_console = Console(file=buf, width=120, no_color=True)

    if aligned.days:
        window = f"{aligned.days[0]} → {aligned.days[-1]} ({len(aligned.days)} days)"
    else:
        window = "no days common to all countries"
    header = (
        f"Daily deaths per million\n"
        f"========================\n"
        f"Window: {window}\n"
    )

    table = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    table.add_column("Country", style="bold")
    table.add_column("Code")
    table.add_column("Average", justify="right")
    table.add_column("Peak", justify="right")
    table.add_column("Peak Date")
    table.add_column("Latest", justify="right")

    for code, values in aligned.values.items():
        name = settings.name_for(code)
        if not values:
            table.add_row(name, code, "—", "—", "—", "—")
            continue
        peak = max(range(len(values)), key=values.__getitem__)
        table.add_row(
            name,
            code,
            _fmt_value(sum(values) / len(values)),
            _fmt_value(values[peak]),
            aligned.days[peak],
            _fmt_value(values[-1]),
        )

    rich_console.print(header, end="")
    rich_console.print(table)
    rich_console.print("\nData source: Our World in Data (covid.ourworldindata.org)")

    return buf.getvalue()
