"""
CLI display functions for repo-pulse.
"""

from dataclasses import dataclass, field

from rich.console import Console
from rich.text import Text

from src.calendar_builder import COLOR_PALETTE, PLAIN_PALETTE, CalendarGrid, render_calendar
from src.code_stats import LanguageStats, format_number, format_size

TOP_AUTHORS = 3
TOP_LANGUAGES = 5

LANGUAGE_COLORS = {
    "Rust": (222, 165, 132),
    "Python": (55, 118, 171),
    "JavaScript": (241, 224, 90),
    "TypeScript": (49, 120, 198),
    "Go": (0, 173, 216),
    "C": (85, 85, 85),
    "C++": (243, 75, 125),
    "Java": (176, 114, 25),
    "Ruby": (204, 52, 45),
    "PHP": (119, 123, 180),
    "Swift": (240, 81, 56),
    "Kotlin": (169, 123, 255),
    "Scala": (220, 50, 47),
    "Haskell": (94, 80, 134),
    "OCaml": (238, 122, 0),
    "Elixir": (110, 74, 126),
    "Erlang": (184, 57, 80),
    "Clojure": (91, 184, 0),
    "Lua": (0, 0, 128),
    "Shell": (137, 224, 81),
    "Zig": (236, 145, 92),
    "Nim": (255, 233, 83),
    "Crystal": (0, 0, 0),
    "Vue": (65, 184, 131),
    "Svelte": (255, 62, 0),
    "React": (97, 218, 251),
    "CSS": (86, 61, 124),
    "HTML": (227, 76, 38),
}


@dataclass
class RepoInfo:
    """Header facts about a repository. None means "not available"."""

    name: str
    branch: str
    commit_count: int | None = None
    size: int | None = None
    contributors: list[tuple[str, int]] = field(default_factory=list)
    languages: list[LanguageStats] = field(default_factory=list)


def make_console(color: bool = True, **kwargs) -> Console:
    """Console for terminal output; color=False strips all styling."""
    if not color:
        kwargs["color_system"] = None
    return Console(highlight=False, **kwargs)


def _print(console: Console, line: Text) -> None:
    # Calendar rows are wider than most terminals; never wrap them
    console.print(line, no_wrap=True, overflow="ignore", crop=False)


def language_style(language: str) -> str:
    """Truecolor style for a language name (white when unknown)."""
    rgb = LANGUAGE_COLORS.get(language)
    if rgb is None:
        return "white"
    return f"rgb({rgb[0]},{rgb[1]},{rgb[2]})"


def format_contributors(contributors: list[tuple[str, int]], limit: int = TOP_AUTHORS) -> str:
    """
    Format the top contributors for display.

    Args:
        contributors: (author, count) pairs from rank_contributors()
        limit: How many authors to show

    Returns:
        String like "alice (12), bob (3)"
    """
    return ", ".join(f"{name} ({count})" for name, count in contributors[:limit])


def display_repo_info(info: RepoInfo, console: Console) -> None:
    """
    Display the repository header.

    Args:
        info: Repository facts; fields that are None or empty are skipped
        console: Output console
    """
    _print(console, Text(f"  {info.name}", style="bold cyan"))
    _print(console, Text("─" * 40, style="dim"))

    def field_line(label: str, value: Text | str, style: str = "") -> None:
        line = Text("  ")
        line.append(label, style="bold white")
        line.append("  ")
        line.append(value if isinstance(value, Text) else Text(value, style=style))
        _print(console, line)

    field_line("Branch:", info.branch, "yellow")
    if info.commit_count is not None:
        field_line("Commits:", str(info.commit_count), "green")
    if info.size is not None:
        field_line("Size:", format_size(info.size))

    if info.contributors:
        field_line("Authors:", format_contributors(info.contributors))

    if info.languages:
        langs = Text()
        for i, lang in enumerate(info.languages[:TOP_LANGUAGES]):
            if i:
                langs.append(", ")
            langs.append(lang.name, style=language_style(lang.name))
            langs.append(f" ({format_number(lang.lines)})")
        field_line("LOC:", langs)


def display_calendar(grid: CalendarGrid, console: Console, color: bool = True) -> None:
    """
    Display the commit activity calendar, legend and summary.

    Args:
        grid: Calendar grid from build_grid()
        console: Output console
        color: Use the truecolor palette instead of plain glyphs
    """
    palette = COLOR_PALETTE if color else PLAIN_PALETTE
    for line in render_calendar(grid, palette):
        _print(console, line)
