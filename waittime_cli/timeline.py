from __future__ import annotations

from typing import List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import BusyInterval


def render_busy_listing(busy: List[BusyInterval]) -> str:
    """
    Plain-text list of busy periods, one per line.
    """
    lines = ["Busy periods:"]
    for b in sorted(busy, key=lambda b: b.start_time):
        lines.append(f"  {b.start_time} - {b.stop_time}")
    return "\n".join(lines)


def build_busy_timeline(busy: List[BusyInterval], width: int = 60) -> tuple[Panel, str]:
    """
    Build a Rich Panel showing busy periods scaled to ``width`` columns, and a
    string with the first and last time marks.

    Job logs usually carry epoch timestamps, so the chart starts at the first
    busy period rather than at zero.
    """
    if not busy:
        panel = Panel("No busy periods", title="Busy timeline")
        return panel, ""

    periods = sorted(busy, key=lambda b: (b.start_time, b.stop_time))
    origin = periods[0].start_time
    end = max(b.stop_time for b in periods)
    span = max(1, end - origin)
    scale = width / span

    colors = ["green", "cyan"]
    bar = Text()
    labels = Text()
    column = 0

    for idx, b in enumerate(periods):
        first = int((b.start_time - origin) * scale)
        last = max(first + 1, int(round((b.stop_time - origin) * scale)))
        first = max(first, column)
        last = max(last, first + 1)

        idle_gap = first - column
        if idle_gap > 0:
            bar.append(" " * idle_gap)
            labels.append(" " * idle_gap)

        cells = last - first
        bar.append(" " * cells, style=f"on {colors[idx % len(colors)]}")
        labels.append(str(idx + 1)[:cells].ljust(cells), style="bold")
        column = last

    table = Table.grid(padding=(0, 0))
    table.add_row(bar)
    table.add_row(labels)

    panel = Panel.fit(table, title="Busy timeline")
    time_marks = f"{origin}{' ' * max(1, column - len(str(origin)) - len(str(end)))}{end}"
    return panel, time_marks
