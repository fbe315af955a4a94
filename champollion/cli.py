"""Command-line interface."""

import argparse
import sys

from champollion.base import (
    ChampollionError, CONTAINMENT_MODES, IndexUnavailable, InvalidConfiguration, TranslationRequest
)
from champollion.closed_class import ClosedClassFilter
from champollion.config import AppConfig
from champollion.inverted_index import SqliteCorpusIndex, build_index
from champollion.logging_config import setup_logging, get_logger
from champollion.translator import translate_collocation

logger = get_logger('cli')


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="champollion",
        description="Translate a collocation using a sentence-aligned bilingual corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build the index once, then translate
  %(prog)s --source en.txt --target de.txt --index --co "member states"

  # Reuse an existing index with stricter thresholds
  %(prog)s --co "member states" --tf 10 --td 0.2

  # Another target language with its own function-word list
  %(prog)s --co "member states" --closed-class fr_closed_class.txt
        """,
    )

    # Corpus and index
    parser.add_argument("--source", type=str, help="Source-language corpus, a file or a directory")
    parser.add_argument("--target", type=str, help="Target-language corpus, a file or a directory")
    parser.add_argument(
        "--index",
        action="store_true",
        help="Rebuild the index from --source and --target before translating",
    )
    parser.add_argument("--index-dir", type=str, help="Directory holding the sentence indexes")

    # Translation
    parser.add_argument("--co", type=str, help="The collocation to translate (quote multi-word input)")
    parser.add_argument("--td", type=float, help="Dice threshold (default: 0.1)")
    parser.add_argument("--tf", type=int, help="Frequency threshold (default: 5)")
    parser.add_argument(
        "--closed-class",
        type=str,
        help="File of target-language function words to exclude (one per line or JSON list)",
    )
    parser.add_argument(
        "--containment",
        choices=CONTAINMENT_MODES,
        help="How expansion detects a word already in a phrase (default: substring)",
    )

    # Flags
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "-j", "--jobs", type=int, help="Threads used to score candidates in parallel (default: 1)"
    )

    return parser


def main(argv=None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        config = AppConfig.load()
    except InvalidConfiguration as e:
        parser.error(str(e))

    if args.index_dir:
        config.index.index_dir = args.index_dir
    if args.source:
        config.index.source_path = args.source
    if args.target:
        config.index.target_path = args.target
    if args.closed_class:
        config.closed_class.words_file = args.closed_class
    if args.jobs is not None:
        if args.jobs < 1:
            parser.error("--jobs must be at least 1")
        config.performance.max_workers = args.jobs

    if not args.index and not args.co:
        parser.error("nothing to do: give --co to translate and/or --index to rebuild")

    settings = config.get_translation_settings(
        {'tf': args.tf, 'td': args.td, 'containment': args.containment}
    )
    logger.debug(f"Translation settings: {settings}")

    # Validate everything before touching the index
    request = None
    closed_class = None
    try:
        if args.co is not None:
            request = TranslationRequest(
                collocation=args.co, tf=settings['tf'], td=settings['td'],
                containment=settings['containment']
            ).validate()
            closed_class = ClosedClassFilter.from_config(config.closed_class)
    except InvalidConfiguration as e:
        parser.error(str(e))

    try:
        if args.index:
            if not config.index.source_path or not config.index.target_path:
                parser.error("--index needs both --source and --target")
            build_index(config.index.source_path, config.index.target_path, config.index.index_dir)

        if request is None:
            return 0

        with SqliteCorpusIndex(config.index.index_dir, config.performance.max_cache_size) as index:
            result = translate_collocation(
                request.collocation, index, tf=request.tf, td=request.td, config=config,
                closed_class=closed_class, containment=request.containment
            )
    except InvalidConfiguration as e:
        parser.error(str(e))
    except IndexUnavailable as e:
        print(f"Index unavailable: {e}", file=sys.stderr)
        return 1
    except ChampollionError as e:
        print(f"Translation failed: {e}", file=sys.stderr)
        return 1

    print(f"Finding translation for \"{result.collocation}\".  "
          f"Found {result.source_count} times in source corpus.")
    if result.found:
        print(result.translation)
    else:
        print("No translation found.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
