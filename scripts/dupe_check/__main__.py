#!/usr/bin/env python3
"""
Entry point for dupe_check module.

Usage:
    python -m dupe_check Sources/A.swift Sources/B.swift -o build/dupes.stamp
    python -m dupe_check Sources/ --report dupes.md --verbose

Warnings are advisory: the exit status is 0 whether or not any are found.
"""

import argparse
import sys
from pathlib import Path

from . import DuplicateChecker
from .config import ConfigError, DetectorConfig, load_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dupe_check',
        description='Detect duplicated Swift function logic'
    )
    parser.add_argument('paths', nargs='*', help='Swift files or directories to analyze')
    parser.add_argument('-o', '--output', type=str, help='Stamp file to create when done')
    parser.add_argument('--config', type=str, help='YAML file with threshold and weights')
    parser.add_argument('--threshold', type=float, help='Similarity threshold (0-1)')
    parser.add_argument('--report', type=str, help='Write a markdown report to this file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    return parser


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        return 0

    args = build_parser().parse_intermixed_args(argv)

    try:
        config = load_config(Path(args.config)) if args.config else DetectorConfig()
        config = config.with_threshold(args.threshold)
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    checker = DuplicateChecker(args.paths, config=config, verbose=args.verbose)
    checker.run()
    checker.emit()

    if args.report:
        Path(args.report).write_text(checker.get_report(), encoding='utf-8')
        checker.log(f"Report written to: {args.report}")

    if args.output:
        checker.write_stamp(Path(args.output))

    return 0


if __name__ == '__main__':
    sys.exit(main())
