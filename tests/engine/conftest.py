"""Shared fixtures and helpers for engine tests."""

from __future__ import annotations

import random

import pytest

from allmatch_lite.engine.aho_corasick import AhoCorasick

SEED = 42

CLASSIC_PATTERNS = ["he", "she", "his", "hers"]


def brute_force_matches(patterns, text) -> list[tuple[int, int, int]]:
    """Every (end, pattern_index, start) found by direct slice comparison."""
    found = []
    for end in range(len(text)):
        for idx, pattern in enumerate(patterns):
            start = end - len(pattern) + 1
            if start >= 0 and text[start:end + 1] == pattern:
                found.append((end, idx, start))
    return found


def as_tuples(matches) -> list[tuple[int, int, int]]:
    return [(m.end, m.pattern_index, m.start) for m in matches]


def random_patterns(rng: random.Random, alphabet: str, count: int, max_len: int) -> list[str]:
    return [
        "".join(rng.choice(alphabet) for _ in range(rng.randint(1, max_len)))
        for _ in range(count)
    ]


def random_text(rng: random.Random, alphabet: str, length: int) -> str:
    return "".join(rng.choice(alphabet) for _ in range(length))


@pytest.fixture
def classic() -> AhoCorasick:
    return AhoCorasick.build(CLASSIC_PATTERNS)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(SEED)
