"""
Language, line-count and size scanner for a work tree.

Walks the tree with an explicit queue and classifies files by extension.
"""

import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

LANGUAGES_BY_EXTENSION = {
    "rs": "Rust",
    "py": "Python",
    "js": "JavaScript",
    "ts": "TypeScript",
    "go": "Go",
    "c": "C",
    "h": "C",
    "cpp": "C++",
    "cc": "C++",
    "cxx": "C++",
    "hpp": "C++",
    "java": "Java",
    "rb": "Ruby",
    "php": "PHP",
    "swift": "Swift",
    "kt": "Kotlin",
    "scala": "Scala",
    "hs": "Haskell",
    "ml": "OCaml",
    "mli": "OCaml",
    "ex": "Elixir",
    "exs": "Elixir",
    "erl": "Erlang",
    "clj": "Clojure",
    "lua": "Lua",
    "sh": "Shell",
    "bash": "Shell",
    "zig": "Zig",
    "nim": "Nim",
    "cr": "Crystal",
    "vue": "Vue",
    "svelte": "Svelte",
    "jsx": "React",
    "tsx": "React",
    "css": "CSS",
    "html": "HTML",
}

# Directories skipped by the language scan (hidden entries are skipped too)
EXCLUDED_SOURCE_DIRS = {"target", "node_modules", "vendor"}

# Entries skipped when summing on-disk size
EXCLUDED_SIZE_DIRS = {".git", "target", "node_modules"}


@dataclass
class LanguageStats:
    """Files and lines counted for one language."""

    name: str
    files: int = 0
    lines: int = 0


def _count_lines(path: Path) -> int:
    # Only "\n" ends a line; form feeds and other separators do not
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError):
        return 0
    return text.count("\n") + (1 if text and not text.endswith("\n") else 0)


def detect_languages(root: Path) -> list[LanguageStats]:
    """
    Count files and lines per language under root.

    Args:
        root: Directory to scan

    Returns:
        LanguageStats sorted by line count, largest first
    """
    stats: dict[str, LanguageStats] = {}
    queue = deque([root])

    while queue:
        directory = queue.popleft()
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.debug("Cannot read %s: %s", directory, e)
            continue

        for entry in entries:
            name = entry.name
            if name.startswith(".") or name in EXCLUDED_SOURCE_DIRS:
                continue

            if entry.is_dir():
                # Symlinked directories can loop back up the tree
                if not entry.is_symlink():
                    queue.append(entry)
                continue

            language = LANGUAGES_BY_EXTENSION.get(entry.suffix.lstrip("."))
            if language is None:
                continue

            lang_stats = stats.setdefault(language, LanguageStats(name=language))
            lang_stats.files += 1
            lang_stats.lines += _count_lines(entry)

    return sorted(stats.values(), key=lambda s: (-s.lines, s.name))


def repo_size(root: Path) -> int:
    """Total size in bytes of files under root, skipping build and VCS dirs."""
    total = 0
    queue = deque([root])

    while queue:
        directory = queue.popleft()
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.debug("Cannot read %s: %s", directory, e)
            continue

        for entry in entries:
            if entry.name in EXCLUDED_SIZE_DIRS:
                continue
            if entry.is_dir():
                # Symlinked directories can loop back up the tree
                if not entry.is_symlink():
                    queue.append(entry)
                continue
            try:
                total += entry.stat().st_size
            except OSError:
                pass

    return total


def format_size(size: int) -> str:
    """Human readable size: 512 B, 1.5 KB, 2.0 MB, 1.1 GB."""
    kb = 1024
    mb = kb * 1024
    gb = mb * 1024

    if size >= gb:
        return f"{size / gb:.1f} GB"
    elif size >= mb:
        return f"{size / mb:.1f} MB"
    elif size >= kb:
        return f"{size / kb:.1f} KB"
    return f"{size} B"


def format_number(n: int) -> str:
    """Compact count: 999, 1.5K, 2.0M."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    elif n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)
