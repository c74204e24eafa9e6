"""Reduce one document's match stream to a per-document answer.

Two policies consume the same stream of Match events:

    PRESENCE  -- did every pattern occur at least once? (bool)
    COUNT     -- how many times did each pattern occur? (ordered counts)

Both start with an explicit slot for every pattern index, so a pattern
that never matched reports False / 0 rather than being absent.

An aggregator holds per-document state only. Create a fresh one per
document (aggregate() does) and discard it once its result is read.
Aggregators are not thread-safe; the automaton they are fed from is.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import TYPE_CHECKING

from allmatch_lite.engine.patterns import Pattern, PatternSet

if TYPE_CHECKING:
    from allmatch_lite.engine.aho_corasick import AhoCorasick, Text


class AggregationPolicy(Enum):
    PRESENCE = auto()
    COUNT = auto()


class Aggregator(ABC):
    """Interface both reduction policies implement."""

    @abstractmethod
    def record(self, pattern_index: int) -> None:
        """Account for one match of pattern `pattern_index`."""
        ...

    @property
    @abstractmethod
    def complete(self) -> bool:
        """True once every pattern has been seen at least once."""
        ...

    @property
    def saturated(self) -> bool:
        """True when further matches cannot change the result.

        Lets the caller stop scanning early.
        """
        return False

    @abstractmethod
    def result(self) -> object:
        ...


class PresenceAggregator(Aggregator):
    """Boolean per pattern; the result is the AND across all of them."""

    def __init__(self, pattern_count: int) -> None:
        self._seen = [False] * pattern_count
        self._missing = pattern_count

    def record(self, pattern_index: int) -> None:
        if not self._seen[pattern_index]:
            self._seen[pattern_index] = True
            self._missing -= 1

    @property
    def seen(self) -> tuple[bool, ...]:
        return tuple(self._seen)

    @property
    def complete(self) -> bool:
        return self._missing == 0

    @property
    def saturated(self) -> bool:
        return self._missing == 0

    def result(self) -> bool:
        return all(self._seen)


class CountAggregator(Aggregator):
    """Occurrence count per pattern, reported in pattern-set order."""

    def __init__(self, patterns: PatternSet) -> None:
        self._patterns = patterns
        self._counts = [0] * len(patterns)

    def record(self, pattern_index: int) -> None:
        self._counts[pattern_index] += 1

    @property
    def counts(self) -> tuple[int, ...]:
        return tuple(self._counts)

    @property
    def complete(self) -> bool:
        return all(self._counts)

    def result(self) -> tuple[tuple[Pattern, int], ...]:
        """(pattern, count) pairs aligned to the input pattern order."""
        return tuple(zip(self._patterns, self._counts))


def new_aggregator(policy: AggregationPolicy, patterns: PatternSet) -> Aggregator:
    if policy is AggregationPolicy.PRESENCE:
        return PresenceAggregator(len(patterns))
    if policy is AggregationPolicy.COUNT:
        return CountAggregator(patterns)
    raise ValueError(f"Unknown aggregation policy: {policy!r}")


def aggregate(
    automaton: AhoCorasick,
    text: Text,
    policy: AggregationPolicy = AggregationPolicy.PRESENCE,
) -> Aggregator:
    """Scan `text` once and fold the matches into a fresh aggregator.

    Stops pulling matches as soon as the aggregator is saturated, so a
    presence check on a large document can finish early.
    """
    agg = new_aggregator(policy, automaton.patterns)
    for match in automaton.scan(text):
        agg.record(match.pattern_index)
        if agg.saturated:
            break
    return agg
