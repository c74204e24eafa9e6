"""Multi-pattern matching engine: pattern set, automaton, aggregation."""

from allmatch_lite.engine.aggregator import (
    AggregationPolicy,
    Aggregator,
    CountAggregator,
    PresenceAggregator,
    aggregate,
    new_aggregator,
)
from allmatch_lite.engine.aho_corasick import AhoCorasick, Match
from allmatch_lite.engine.patterns import InvalidPatternError, PatternSet

__all__ = [
    "AggregationPolicy",
    "Aggregator",
    "AhoCorasick",
    "CountAggregator",
    "InvalidPatternError",
    "Match",
    "PatternSet",
    "PresenceAggregator",
    "aggregate",
    "new_aggregator",
]
