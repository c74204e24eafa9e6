"""Tests for the TreeSearch pipeline."""
from __future__ import annotations

import os

import pytest

from allmatch_lite.engine.aggregator import AggregationPolicy
from allmatch_lite.engine.aho_corasick import AhoCorasick
from allmatch_lite.search.runner import SearchResult, TreeSearch
from allmatch_lite.search.sources import Document, DocumentWalker


def _docs(*contents: bytes) -> list[Document]:
    return [Document(f"doc{i}", c) for i, c in enumerate(contents)]


@pytest.fixture
def alpha_beta() -> AhoCorasick:
    return AhoCorasick.build([b"alpha", b"beta"])


class TestTreeSearch:

    def test_presence_yields_only_complete_documents(self, alpha_beta):
        search = TreeSearch(alpha_beta)
        results = list(search.run(_docs(b"alpha beta", b"alpha", b"", b"betalpha")))
        assert results == [SearchResult("doc0"), SearchResult("doc3")]

    def test_count_policy_attaches_counts(self, alpha_beta):
        search = TreeSearch(alpha_beta, AggregationPolicy.COUNT)
        results = list(search.run(_docs(b"beta alpha beta", b"beta")))
        assert results == [
            SearchResult("doc0", ((b"alpha", 1), (b"beta", 2))),
        ]

    def test_scan_document(self, alpha_beta):
        search = TreeSearch(alpha_beta)
        assert search.scan_document(Document("x", b"alphabeta")) == SearchResult("x")
        assert search.scan_document(Document("y", b"nothing")) is None

    def test_stats(self, alpha_beta):
        search = TreeSearch(alpha_beta)
        list(search.run(_docs(b"alpha beta", b"alpha", b"beta")))
        assert search.stats.documents_scanned == 3
        assert search.stats.documents_matched == 1
        assert search.stats.bytes_scanned == 10 + 5 + 4
        assert search.stats.elapsed_ms >= 0

    def test_stats_reset_between_runs(self, alpha_beta):
        search = TreeSearch(alpha_beta)
        list(search.run(_docs(b"alpha beta")))
        list(search.run(_docs(b"x", b"y")))
        assert search.stats.documents_scanned == 2
        assert search.stats.documents_matched == 0

    def test_rejects_zero_workers(self, alpha_beta):
        with pytest.raises(ValueError, match="max_workers"):
            TreeSearch(alpha_beta, max_workers=0)

    def test_walker_skips_counted(self, tree, alpha_beta):
        search = TreeSearch(alpha_beta)
        walker = DocumentWalker(tree)
        results = list(search.run(walker))
        assert [os.path.relpath(r.identifier, tree) for r in results] == [
            "a.txt",
            os.path.join("sub", "c.txt"),
        ]
        assert search.stats.documents_skipped == 1
        assert search.stats.documents_scanned == 4

    def test_binary_documents_scanned_when_allowed(self, tree, alpha_beta):
        search = TreeSearch(alpha_beta)
        results = list(search.run(DocumentWalker(tree, require_text=False)))
        names = [os.path.basename(r.identifier) for r in results]
        assert names == ["a.txt", "bin.dat", "c.txt"]


class TestPooledSearch:
    """Thread-pool scanning shares one automaton across documents."""

    @pytest.mark.parametrize("workers", [2, 4, 16])
    def test_same_results_and_order_as_inline(self, workers):
        ac = AhoCorasick.build([b"ab", b"b"])
        docs = _docs(*[(b"ab" if i % 3 == 0 else b"a") * (i + 1) for i in range(100)])

        inline = list(TreeSearch(ac, AggregationPolicy.COUNT).run(docs))
        pooled_search = TreeSearch(ac, AggregationPolicy.COUNT, max_workers=workers)
        pooled = list(pooled_search.run(docs))

        assert pooled == inline
        assert len(pooled) == 34
        assert pooled_search.stats.documents_scanned == 100
        assert pooled_search.stats.documents_matched == 34

    def test_accepts_generator_source(self, alpha_beta):
        docs = (Document(str(i), b"alpha beta") for i in range(10))
        results = list(TreeSearch(alpha_beta, max_workers=3).run(docs))
        assert [r.identifier for r in results] == [str(i) for i in range(10)]
