"""Per-document search pipeline.

For each document from a source:
    1. Scan its content with the shared automaton
    2. Fold the matches into a fresh aggregator
    3. Emit a SearchResult if every pattern was present

The automaton is immutable, so with max_workers > 1 documents are
scanned concurrently on a ThreadPoolExecutor. Each scan gets its own
aggregator and nothing else is shared. Results are still yielded in
source order. Under the GIL the pool mostly overlaps file reads with
scanning rather than running scans in parallel.
"""
from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

from allmatch_lite.engine.aggregator import (
    AggregationPolicy,
    CountAggregator,
    aggregate,
)
from allmatch_lite.engine.aho_corasick import AhoCorasick
from allmatch_lite.engine.patterns import Pattern
from allmatch_lite.search.sources import Document, DocumentWalker

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A document in which every pattern occurs.

    counts holds (pattern, count) pairs in pattern order under the
    COUNT policy and is None under PRESENCE.
    """
    identifier: str
    counts: tuple[tuple[Pattern, int], ...] | None = None


@dataclass(slots=True)
class SearchStats:
    documents_scanned: int = 0
    documents_matched: int = 0
    documents_skipped: int = 0
    bytes_scanned: int = 0
    elapsed_ms: float = 0.0


class TreeSearch:
    """Run one automaton over a stream of documents.

    Args:
        automaton: built once, shared by every scan
        policy: PRESENCE for a yes/no answer, COUNT for per-pattern counts
        max_workers: 1 scans inline; more uses a thread pool
    """

    def __init__(
        self,
        automaton: AhoCorasick,
        policy: AggregationPolicy = AggregationPolicy.PRESENCE,
        max_workers: int = 1,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._automaton = automaton
        self._policy = policy
        self._max_workers = max_workers
        self._stats = SearchStats()

    @property
    def stats(self) -> SearchStats:
        return self._stats

    def scan_document(self, doc: Document) -> SearchResult | None:
        """Scan one document. Returns None unless every pattern is present."""
        agg = aggregate(self._automaton, doc.content, self._policy)
        if not agg.complete:
            return None
        if isinstance(agg, CountAggregator):
            return SearchResult(doc.identifier, agg.result())
        return SearchResult(doc.identifier)

    def run(self, documents: Iterable[Document]) -> Iterator[SearchResult]:
        """Yield a SearchResult for each matching document, in source order.

        Stats are reset at the start of each run and final once the
        returned iterator is exhausted.
        """
        self._stats = SearchStats()
        start = time.perf_counter()

        if self._max_workers == 1:
            outcomes = self._run_inline(documents)
        else:
            outcomes = self._run_pooled(documents)

        for doc, result in outcomes:
            self._stats.documents_scanned += 1
            self._stats.bytes_scanned += len(doc.content)
            if result is not None:
                self._stats.documents_matched += 1
                yield result

        if isinstance(documents, DocumentWalker):
            self._stats.documents_skipped = len(documents.skipped)
        self._stats.elapsed_ms = (time.perf_counter() - start) * 1000
        log.debug(
            "Scanned %d documents (%d matched, %d skipped) in %.1f ms",
            self._stats.documents_scanned,
            self._stats.documents_matched,
            self._stats.documents_skipped,
            self._stats.elapsed_ms,
        )

    def _run_inline(
        self, documents: Iterable[Document]
    ) -> Iterator[tuple[Document, SearchResult | None]]:
        for doc in documents:
            yield doc, self.scan_document(doc)

    def _run_pooled(
        self, documents: Iterable[Document]
    ) -> Iterator[tuple[Document, SearchResult | None]]:
        """Keep a bounded window of scans in flight, drain oldest first.

        The window caps how many documents sit in memory at once.
        """
        window = self._max_workers * 2
        pending: deque[tuple[Document, Future[SearchResult | None]]] = deque()
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            for doc in documents:
                pending.append((doc, pool.submit(self.scan_document, doc)))
                if len(pending) >= window:
                    oldest, fut = pending.popleft()
                    yield oldest, fut.result()
            while pending:
                oldest, fut = pending.popleft()
                yield oldest, fut.result()
