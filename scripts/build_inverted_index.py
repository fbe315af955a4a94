#!/usr/bin/env python3
"""
Build the sentence indexes for a line-aligned bilingual corpus.
Maps term → sentence numbers on each side for fast containment queries.
"""
import os
import sys
import argparse

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from champollion.base import ChampollionError
from champollion.config import IndexConfig
from champollion.inverted_index import build_index
from champollion.logging_config import setup_logging

def main():
    defaults = IndexConfig.from_env()
    parser = argparse.ArgumentParser(description='Build sentence indexes for a Champollion corpus')
    parser.add_argument('--source', '-s', default=defaults.source_path,
                        help='Source-language corpus file or directory')
    parser.add_argument('--target', '-t', default=defaults.target_path,
                        help='Target-language corpus file or directory')
    parser.add_argument('--index-dir', '-o', default=defaults.index_dir,
                        help=f'Output directory (default: {defaults.index_dir})')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress output')
    args = parser.parse_args()

    if not args.source or not args.target:
        parser.error('both --source and --target are required')

    setup_logging(verbose=False)

    try:
        stats = build_index(args.source, args.target, args.index_dir)
    except ChampollionError as e:
        print(f"Index build failed: {e}", file=sys.stderr)
        sys.exit(1)

    if not args.quiet:
        for side, side_stats in stats.items():
            print(f"  {side}: {side_stats['sentences']} sentences, {side_stats['postings']} postings")
            print(f"  Saved to: {side_stats['path']}")
        print("Done!")

if __name__ == '__main__':
    main()
