"""Report formatting for search results.

Turns SearchResult and SearchStats into terminal lines. Color is
plain ANSI escapes, applied only when the caller asks for it.
"""
from __future__ import annotations

from allmatch_lite.engine.patterns import Pattern
from allmatch_lite.search.runner import SearchResult, SearchStats

_BOLD_GREEN = "\033[1;32m"
_CYAN = "\033[36m"
_RESET = "\033[0m"


def _paint(text: str, code: str, color: bool) -> str:
    return f"{code}{text}{_RESET}" if color else text


def _pattern_text(pattern: Pattern) -> str:
    if isinstance(pattern, bytes):
        return pattern.decode("utf-8", errors="backslashreplace")
    return pattern


def format_result(result: SearchResult, color: bool = False) -> str:
    """Format one matching document, with per-pattern counts if present."""
    lines = [
        f"Found all patterns in {_paint(result.identifier, _BOLD_GREEN, color)}"
    ]
    if result.counts is not None:
        for pattern, count in result.counts:
            lines.append(
                f"  {_pattern_text(pattern)}: {_paint(str(count), _CYAN, color)}"
            )
    return "\n".join(lines)


def format_stats(stats: SearchStats) -> str:
    """Format a SearchStats summary block."""
    lines = [
        "=== Search ===",
        f"Documents scanned: {stats.documents_scanned:,}",
        f"Documents matched: {stats.documents_matched:,}",
        f"Documents skipped: {stats.documents_skipped:,}",
        f"Bytes scanned:     {stats.bytes_scanned:,}",
        f"Total time:        {stats.elapsed_ms:.1f} ms",
    ]
    return "\n".join(lines)
