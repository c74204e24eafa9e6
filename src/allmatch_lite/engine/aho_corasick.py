"""Aho-Corasick automaton for single-pass multi-pattern matching.

The classic Aho-Corasick algorithm (1975) builds a finite automaton
from a set of patterns and then scans an input string in a single
pass, reporting every occurrence of every pattern. Construction has
three phases:

    1. Build the goto trie: insert each pattern symbol by symbol.
    2. Compute failure links (BFS from root): the failure link of a
       state points to the state for the longest proper suffix of its
       path that is also a prefix of some pattern.
    3. Complete the transition function and the output sets: a state
       with no child for a symbol inherits its failure target's
       transition, and each state's output is its own patterns plus
       the failure target's output.

After phase 3 the automaton is a DFA. Scanning costs one dict lookup
per symbol plus one step per reported match, no matter how many
patterns overlap, because nothing is chased at scan time.

States live in flat per-state lists indexed by int (root = 0)
instead of a graph of node objects. Failure links and fallback
transitions then only ever point at lower-depth states or at the
root, and the root's self-loop is just "missing key means 0".

A symbol is one character for str patterns and one byte (an int) for
bytes patterns. Rows only store transitions that lead somewhere other
than the root, so δ(state, symbol) is row.get(symbol, 0) and is
defined for every symbol, including ones no pattern uses.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Union

from allmatch_lite.engine.patterns import Pattern, PatternSet

Symbol = Union[str, int]
Text = Union[str, bytes, bytearray, memoryview]

ROOT = 0


@dataclass(frozen=True, slots=True)
class Match:
    """One occurrence of a pattern in a scanned text.

    `end` is the offset of the last matched symbol (inclusive), so
    pattern "ab" in text "ab" has start=0, end=1.
    """
    pattern_index: int
    start: int
    end: int

    @property
    def span(self) -> tuple[int, int]:
        """Half-open (start, stop) bounds, usable as text[start:stop]."""
        return self.start, self.end + 1


class AhoCorasick:
    """Immutable Aho-Corasick automaton over a fixed pattern set.

    Usage:
        ac = AhoCorasick.build(["ab", "b"])
        list(ac.scan("ab"))
        # [Match(pattern_index=0, start=0, end=1),
        #  Match(pattern_index=1, start=1, end=1)]

    Construction validates the whole pattern set before creating any
    state, so an InvalidPatternError never leaves a partial automaton
    behind. After construction nothing is mutated: one instance can be
    scanned any number of times, from any number of threads.
    """

    __slots__ = ("_patterns", "_lengths", "_delta", "_fail", "_outputs", "_depth")

    def __init__(self, patterns: PatternSet | Iterable[Pattern]) -> None:
        if not isinstance(patterns, PatternSet):
            patterns = PatternSet(patterns)
        self._patterns = patterns
        self._lengths = tuple(len(p) for p in patterns)

        goto, terminals, depth = self._build_trie(patterns)
        self._depth: tuple[int, ...] = tuple(depth)
        self._delta, self._fail, self._outputs = self._link(goto, terminals)

    @classmethod
    def build(cls, patterns: PatternSet | Iterable[Pattern]) -> AhoCorasick:
        return cls(patterns)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def _build_trie(
        patterns: PatternSet,
    ) -> tuple[list[dict[Symbol, int]], list[list[int]], list[int]]:
        """Phase 1: insert every pattern into the goto trie.

        States are numbered in creation order, which only depends on
        the order of the patterns.
        """
        goto: list[dict[Symbol, int]] = [{}]
        terminals: list[list[int]] = [[]]
        depth: list[int] = [0]

        for index, pattern in enumerate(patterns):
            state = ROOT
            for sym in pattern:
                nxt = goto[state].get(sym)
                if nxt is None:
                    nxt = len(goto)
                    goto[state][sym] = nxt
                    goto.append({})
                    terminals.append([])
                    depth.append(depth[state] + 1)
                state = nxt
            terminals[state].append(index)

        return goto, terminals, depth

    @staticmethod
    def _link(
        goto: list[dict[Symbol, int]],
        terminals: list[list[int]],
    ) -> tuple[
        tuple[dict[Symbol, int], ...],
        tuple[int, ...],
        tuple[tuple[int, ...], ...],
    ]:
        """Phases 2 and 3: failure links, completed rows, output sets.

        BFS guarantees a state's failure target (always shallower) has
        its row and output set finished before the state is visited.
        """
        n = len(goto)
        fail = [ROOT] * n
        delta: list[dict[Symbol, int]] = [{} for _ in range(n)]
        outputs: list[tuple[int, ...]] = [()] * n

        delta[ROOT] = dict(goto[ROOT])
        queue: deque[int] = deque(goto[ROOT].values())

        while queue:
            state = queue.popleft()
            fallback = delta[fail[state]]

            own = terminals[state]
            inherited = outputs[fail[state]]
            if own and inherited:
                outputs[state] = tuple(sorted(set(own).union(inherited)))
            else:
                outputs[state] = tuple(own) if own else inherited

            # Start from the failure target's completed row, then let
            # explicit trie edges override it.
            row = dict(fallback)
            for sym, child in goto[state].items():
                fail[child] = fallback.get(sym, ROOT)
                row[sym] = child
                queue.append(child)
            delta[state] = row

        return tuple(delta), tuple(fail), tuple(outputs)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def patterns(self) -> PatternSet:
        return self._patterns

    @property
    def pattern_count(self) -> int:
        return len(self._patterns)

    @property
    def state_count(self) -> int:
        return len(self._delta)

    def delta(self, state: int, symbol: Symbol) -> int:
        """Transition function. Total: unknown symbols lead to the root."""
        return self._delta[state].get(symbol, ROOT)

    def failure(self, state: int) -> int:
        return self._fail[state]

    def depth(self, state: int) -> int:
        return self._depth[state]

    def outputs(self, state: int) -> tuple[int, ...]:
        """Pattern indices ending at `state`, ascending."""
        return self._outputs[state]

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def scan(self, text: Text) -> Iterator[Match]:
        """Lazily yield every match in `text`.

        Each call starts from the root. Matches come out ordered by end
        offset, and by pattern index for matches sharing an end offset.
        An empty text yields nothing.
        """
        self._check_kind(text)
        return self._scan(text)

    def find_all(self, text: Text) -> list[Match]:
        return list(self.scan(text))

    def is_match(self, text: Text) -> bool:
        """True if any pattern occurs in `text`. Stops at the first hit."""
        for _ in self.scan(text):
            return True
        return False

    def _scan(self, text: Text) -> Iterator[Match]:
        delta = self._delta
        outputs = self._outputs
        lengths = self._lengths
        state = ROOT
        for pos, sym in enumerate(text):
            state = delta[state].get(sym, ROOT)
            for index in outputs[state]:
                yield Match(index, pos - lengths[index] + 1, pos)

    def _check_kind(self, text: Text) -> None:
        if self._patterns.kind is str:
            if not isinstance(text, str):
                raise TypeError(
                    f"automaton built from str patterns cannot scan "
                    f"{type(text).__name__}"
                )
        elif not isinstance(text, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"automaton built from bytes patterns cannot scan "
                f"{type(text).__name__}"
            )

    def __repr__(self) -> str:
        return (
            f"AhoCorasick(patterns={self.pattern_count}, "
            f"states={self.state_count})"
        )
