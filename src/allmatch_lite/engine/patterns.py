"""The fixed, ordered set of patterns an automaton is built from.

A PatternSet is created once from user input and never mutated. Each
pattern is identified by its position: index i always refers to the
i-th pattern supplied, for the lifetime of every automaton built from
the set.

Patterns are either all str (matched codepoint by codepoint) or all
bytes (matched byte by byte). Duplicates are allowed and keep their
own indices, so a repeated pattern is counted once per copy.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Union, overload

Pattern = Union[str, bytes]


class InvalidPatternError(ValueError):
    """Raised when a pattern set cannot be used to build an automaton.

    `index` is the position of the offending pattern, or None when the
    set itself is empty.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class PatternSet(Sequence[Pattern]):
    """Immutable, ordered collection of non-empty patterns.

    Usage:
        ps = PatternSet(["needle", "haystack"])
        ps[1]          # "haystack"
        ps.kind        # str
        ps.encoded()   # PatternSet([b"needle", b"haystack"])
    """

    __slots__ = ("_patterns", "_kind")

    def __init__(self, patterns: Iterable[Pattern]) -> None:
        items = tuple(patterns)
        if not items:
            raise InvalidPatternError("pattern set must not be empty")

        kind = str if isinstance(items[0], str) else bytes
        for i, pattern in enumerate(items):
            if not isinstance(pattern, (str, bytes)):
                raise InvalidPatternError(
                    f"pattern {i} must be str or bytes, "
                    f"got {type(pattern).__name__}",
                    index=i,
                )
            if not isinstance(pattern, kind):
                raise InvalidPatternError(
                    f"pattern {i} mixes str and bytes patterns", index=i
                )
            if not pattern:
                raise InvalidPatternError(
                    f"pattern {i} is empty; empty patterns match everywhere",
                    index=i,
                )

        self._patterns: tuple[Pattern, ...] = items
        self._kind: type = kind

    @property
    def kind(self) -> type:
        """str or bytes, the alphabet every pattern in the set uses."""
        return self._kind

    @property
    def total_length(self) -> int:
        return sum(len(p) for p in self._patterns)

    @overload
    def __getitem__(self, index: int) -> Pattern: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Pattern, ...]: ...

    def __getitem__(self, index):
        return self._patterns[index]

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatternSet):
            return NotImplemented
        return self._patterns == other._patterns

    def __hash__(self) -> int:
        return hash(self._patterns)

    def __repr__(self) -> str:
        return f"PatternSet({list(self._patterns)!r})"

    def encoded(self, encoding: str = "utf-8", errors: str = "strict") -> PatternSet:
        """Return a bytes PatternSet, encoding str patterns with `encoding`.

        `errors` is passed to str.encode; "surrogateescape" turns the
        lone surrogates Python uses for undecodable argv bytes back into
        the original bytes. A bytes set is returned unchanged.
        """
        if self._kind is bytes:
            return self
        return PatternSet(p.encode(encoding, errors) for p in self._patterns)
