"""Document source, search pipeline and report formatting."""

from allmatch_lite.search.report import format_result, format_stats
from allmatch_lite.search.runner import SearchResult, SearchStats, TreeSearch
from allmatch_lite.search.sources import (
    Document,
    DocumentWalker,
    SkippedDocument,
    walk_documents,
)

__all__ = [
    "Document",
    "DocumentWalker",
    "SearchResult",
    "SearchStats",
    "SkippedDocument",
    "TreeSearch",
    "format_result",
    "format_stats",
    "walk_documents",
]
