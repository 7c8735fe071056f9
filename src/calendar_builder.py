"""
Calendar grid for the commit activity heatmap.

Lays out one column per week and one row per weekday, labels the columns
where a new month begins, and renders the grid, legend and summary as
rich Text lines.
"""

from dataclasses import dataclass
from datetime import date, timedelta, tzinfo
from typing import Iterable

from rich.text import Text

from src.activity_summary import ActivitySummary, summarize
from src.commit_source import CommitRecord
from src.date_bucketizer import DEFAULT_WEEKS, SUNDAY, CalendarWindow, bucketize, build_window
from src.intensity import classify, max_count

MONTH_ABBRS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Indexed by datetime.weekday()
DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

CELL_WIDTH = 2  # glyph + space
ROW_LABEL_WIDTH = 5


@dataclass(frozen=True)
class GridCell:
    """One day in the calendar grid."""

    date: date
    count: int
    level: int
    future: bool = False


@dataclass(frozen=True)
class Palette:
    """Glyphs and styles for each intensity level (index = level)."""

    glyphs: tuple[str, ...]
    styles: tuple[str | None, ...]
    label_style: str | None = None
    total_style: str | None = None
    days_style: str | None = None


PLAIN_PALETTE = Palette(
    glyphs=("·", "░", "▒", "▓", "█"),
    styles=(None, None, None, None, None),
)

# Gray, then yellow -> orange -> light green -> green
COLOR_PALETTE = Palette(
    glyphs=("█",) * 5,
    styles=(
        "rgb(40,40,40)",
        "rgb(250,204,21)",
        "rgb(251,146,60)",
        "rgb(134,239,172)",
        "rgb(34,197,94)",
    ),
    label_style="dim",
    total_style="bold green",
    days_style="cyan",
)


@dataclass(frozen=True)
class CalendarGrid:
    """Week columns of day cells plus the month label for each column."""

    window: CalendarWindow
    columns: list[list[GridCell]]
    month_labels: list[str | None]
    summary: ActivitySummary

    @property
    def weekday_names(self) -> list[str]:
        """Row names, top to bottom."""
        return [DAY_NAMES[(self.window.first_weekday + i) % 7] for i in range(7)]

    def rows(self) -> list[list[GridCell]]:
        """Cells grouped by weekday, oldest week first."""
        return [[column[day] for column in self.columns] for day in range(7)]


def week_count(window: CalendarWindow) -> int:
    """Number of week columns from window_start through the week holding today."""
    return (window.today - window.window_start).days // 7 + 1


def month_labels(window: CalendarWindow) -> list[str | None]:
    """
    Month label for each week column.

    A column gets its first day's month abbreviation only when that month
    differs from the previous column's; every other column gets None.
    """
    labels: list[str | None] = []
    previous = None
    for week in range(week_count(window)):
        month = (window.window_start + timedelta(days=week * 7)).month
        labels.append(MONTH_ABBRS[month - 1] if month != previous else None)
        previous = month
    return labels


def build_grid(buckets: dict[date, int], window: CalendarWindow) -> CalendarGrid:
    """
    Build the calendar grid for a window.

    Cell (week, day) is window_start + week * 7 + day. Cells after today are
    marked future and counts outside the window are ignored, so they never
    reach the levels or the summary.

    Args:
        buckets: Mapping of date -> commit count
        window: Calendar window

    Returns:
        CalendarGrid
    """
    in_window = {day: count for day, count in buckets.items() if window.contains(day)}
    top = max_count(in_window)

    columns = []
    for week in range(week_count(window)):
        column = []
        for day in range(7):
            cell_date = window.window_start + timedelta(days=week * 7 + day)
            if cell_date > window.today:
                column.append(GridCell(date=cell_date, count=0, level=0, future=True))
                continue
            count = in_window.get(cell_date, 0)
            column.append(GridCell(date=cell_date, count=count, level=classify(count, top)))
        columns.append(column)

    return CalendarGrid(
        window=window,
        columns=columns,
        month_labels=month_labels(window),
        summary=summarize(in_window),
    )


def activity_calendar(
    commits: Iterable[CommitRecord],
    today: date,
    tz: tzinfo,
    first_weekday: int = SUNDAY,
    weeks: int = DEFAULT_WEEKS,
) -> CalendarGrid:
    """Bucket commits into the trailing window ending today and build its grid."""
    window = build_window(today, weeks=weeks, first_weekday=first_weekday)
    return build_grid(bucketize(commits, window, tz), window)


def render_month_header(grid: CalendarGrid) -> str:
    """
    Month label line, left-aligned on the column where each month starts.

    A label that would run into the next one is cut short, leaving one
    space before it, so every month change stays visible.
    """
    width = len(grid.columns) * CELL_WIDTH
    chars = [" "] * (width + 1)
    placed = [(week, label) for week, label in enumerate(grid.month_labels) if label]

    for i, (week, label) in enumerate(placed):
        start = week * CELL_WIDTH
        limit = placed[i + 1][0] * CELL_WIDTH if i + 1 < len(placed) else len(chars)
        if start + len(label) > limit:
            label = label[:max(limit - start - 1, 1)]
        chars[start:start + len(label)] = label

    return (" " * ROW_LABEL_WIDTH + "".join(chars)).rstrip()


def _row_label(index: int, name: str) -> str:
    # Every other weekday is named
    if index % 2 == 1:
        return f" {name} "
    return " " * ROW_LABEL_WIDTH


def render_calendar(grid: CalendarGrid, palette: Palette = PLAIN_PALETTE) -> list[Text]:
    """
    Render the calendar block.

    Lines: month header, seven weekday rows, blank, legend, blank, summary.

    Args:
        grid: Calendar grid from build_grid()
        palette: Glyphs and styles per intensity level

    Returns:
        List of rich Text lines
    """
    lines = [Text(render_month_header(grid))]

    for index, (name, row) in enumerate(zip(grid.weekday_names, grid.rows())):
        line = Text()
        line.append(_row_label(index, name), style=palette.label_style or "")
        for cell in row:
            if cell.future:
                line.append(" " * CELL_WIDTH)
                continue
            line.append(palette.glyphs[cell.level], style=palette.styles[cell.level] or "")
            line.append(" ")
        line.rstrip()
        lines.append(line)

    legend = Text(" " * ROW_LABEL_WIDTH + "Less ")
    for glyph, style in zip(palette.glyphs, palette.styles):
        legend.append(glyph, style=style or "")
        legend.append(" ")
    legend.append("More")

    summary = Text.assemble(
        " " * ROW_LABEL_WIDTH,
        (str(grid.summary.total_commits), palette.total_style or ""),
        " commits in the last year across ",
        (str(grid.summary.active_days), palette.days_style or ""),
        " days",
    )

    lines.extend([Text(""), legend, Text(""), summary])
    return lines


def calendar_text(grid: CalendarGrid) -> str:
    """Plain-text rendering of the calendar block."""
    return "\n".join(line.plain for line in render_calendar(grid, PLAIN_PALETTE))
