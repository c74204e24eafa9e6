"""Search configuration, folded from command-line options."""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import TextIO

from allmatch_lite.engine.aggregator import AggregationPolicy


@dataclass(frozen=True, slots=True)
class SearchConfig:
    patterns: tuple[str, ...]
    root: str = "."
    policy: AggregationPolicy = AggregationPolicy.PRESENCE
    require_text: bool = True
    follow_symlinks: bool = False
    max_workers: int = 1
    color: bool = False
    show_stats: bool = False
    verbose: bool = False

    @classmethod
    def from_args(
        cls, args: argparse.Namespace, stream: TextIO | None = None
    ) -> SearchConfig:
        """Build a config from parsed CLI args.

        `stream` is where results will be written; "--color auto"
        enables color only if it is a terminal.
        """
        stream = stream if stream is not None else sys.stdout
        if args.color == "always":
            color = True
        elif args.color == "never":
            color = False
        else:
            color = stream.isatty()

        return cls(
            patterns=tuple(args.patterns),
            root=args.root,
            policy=AggregationPolicy.COUNT if args.count else AggregationPolicy.PRESENCE,
            require_text=not args.binary,
            follow_symlinks=args.follow_symlinks,
            max_workers=args.workers,
            color=color,
            show_stats=args.stats,
            verbose=args.verbose,
        )
