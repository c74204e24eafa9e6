"""allmatch-lite CLI entry point.

Usage: allmatch-lite [options] PATTERN [PATTERN ...]

Walks a directory tree and prints every file that contains all of the
given patterns.
"""
from __future__ import annotations

import argparse
import logging
import sys

from allmatch_lite.config import SearchConfig
from allmatch_lite.engine.aho_corasick import AhoCorasick
from allmatch_lite.engine.patterns import InvalidPatternError, PatternSet
from allmatch_lite.search.report import format_result, format_stats
from allmatch_lite.search.runner import TreeSearch
from allmatch_lite.search.sources import DocumentWalker

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="allmatch-lite",
        description="Find files that contain every one of the given strings.",
    )
    parser.add_argument(
        "patterns", nargs="*", metavar="PATTERN",
        help="Literal string that must occur in a file (repeat for more).",
    )
    parser.add_argument(
        "--root", default=".",
        help="Directory (or single file) to search (default: .)",
    )
    parser.add_argument(
        "--count", action="store_true",
        help="Print how many times each pattern occurs in matching files.",
    )
    parser.add_argument(
        "--binary", action="store_true",
        help="Also scan files that are not valid UTF-8.",
    )
    parser.add_argument(
        "--follow-symlinks", action="store_true",
        help="Descend into symlinked directories.",
    )
    parser.add_argument(
        "--workers", type=int, default=1,
        help="Number of scanner threads (default: 1)",
    )
    parser.add_argument(
        "--color", choices=("auto", "always", "never"), default="auto",
        help="Colorize output (default: auto)",
    )
    parser.add_argument(
        "--stats", action="store_true",
        help="Print a summary after the search.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log skipped files and timing to stderr.",
    )
    return parser


def configure_logging(config: SearchConfig) -> None:
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def run(config: SearchConfig) -> int:
    """Execute a search described by `config`, printing to stdout."""
    # File contents are scanned as raw bytes, so the automaton is built
    # over the UTF-8 encoding of the patterns. Arguments that were not
    # valid UTF-8 on the command line keep their original bytes.
    patterns = PatternSet(config.patterns).encoded(errors="surrogateescape")
    automaton = AhoCorasick.build(patterns)
    log.debug(
        "Built automaton: %d patterns, %d states",
        automaton.pattern_count, automaton.state_count,
    )

    walker = DocumentWalker(
        config.root,
        follow_symlinks=config.follow_symlinks,
        require_text=config.require_text,
    )
    search = TreeSearch(automaton, config.policy, max_workers=config.max_workers)
    for result in search.run(walker):
        print(format_result(result, color=config.color))

    if config.show_stats:
        print()
        print(format_stats(search.stats))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.patterns:
        parser.print_usage(sys.stderr)
        return 1
    if args.workers < 1:
        parser.error("--workers must be at least 1")

    config = SearchConfig.from_args(args)
    configure_logging(config)
    try:
        return run(config)
    except InvalidPatternError as err:
        print(f"{parser.prog}: error: {err}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
