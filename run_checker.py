#!/usr/bin/env python3
# run_checker.py
# This file is part of Orcheck - OR-Set Partition History Verification
#
# Command-line interface for OR-Set history checking with configurable logging levels

import sys
import json
import argparse
from pathlib import Path
from typing import List, Optional

from logic.checker import ORSetChecker, build_checker
from logic.config import DEFAULT_VARIANT, PRESETS, DeletePolicy, ReadSelectionPolicy
from model.operation import HistoryFormatError
from model.verdict import Verdict
from parser.exceptions import HistoryParseError
from utils.history_reader import read_history, validate_history_file
from utils.logger import LogLevel, get_logger, set_log_level

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_HISTORY_ERROR = 2
EXIT_PARSE_ERROR = 3
EXIT_INTERRUPTED = 4
EXIT_UNEXPECTED = 5


def configure_logging_for_checker(debug: bool = False, quiet: bool = False) -> None:
    """Configure logging levels for the checker.

    Args:
        debug: Enable DEBUG level logging
        quiet: Only warnings and errors, on stderr (stdout carries the JSON verdict)
    """
    get_logger().set_stream(sys.stderr if quiet else sys.stdout)

    if debug:
        set_log_level(LogLevel.DEBUG)
    elif quiet:
        set_log_level(LogLevel.WARNING)
    else:
        set_log_level(LogLevel.INFO)


def print_final_analysis(verdict: Verdict, detailed: bool = False) -> None:
    """Print a breakdown of the verdict.

    Args:
        verdict: Completed checker verdict
        detailed: Also list every final read and every rejected delete
    """
    logger = get_logger()

    def mark(ok: bool) -> str:
        return "✅" if ok else "❌"

    logger.info(f"\n📋 Verdict breakdown ({verdict.variant}):")
    logger.info(f"  {mark(verdict.reads_consistent)} reads consistent")
    logger.info(f"  {mark(verdict.correct_values)} correct values")
    logger.info(f"  {mark(not verdict.has_duplicates)} no duplicates")

    logger.info(f"\n📊 Reads: {verdict.settled_read_count} settled, {verdict.partitioned_read_count} during partition")
    spans = ", ".join(str(span) for span in verdict.partition_intervals) or "none"
    logger.info(f"🔌 Partition windows: {spans}")
    logger.info(f"🎯 Expected values: {_fmt(verdict.expected_values)}")

    if detailed:
        for process, values in sorted(verdict.final_reads.items(), key=lambda kv: str(kv[0])):
            logger.info(f"  final read p{process}: {_fmt(values)}")
    for process, missing in verdict.missing_values.items():
        logger.info(f"  p{process} is missing {_fmt(missing)}")
    for process, extra in verdict.unexpected_values.items():
        logger.info(f"  p{process} has unexpected {_fmt(extra)}")
    for process, dups in verdict.duplicate_values.items():
        logger.info(f"  p{process} reported duplicates {list(dups)}")

    invalid = verdict.tracking.invalid_deletes
    if invalid:
        logger.info(f"\n⚠️  {len(invalid)} delete(s) did not match a live add tag")
        if detailed:
            for attempt in invalid:
                logger.info(
                    f"  p{attempt.process} delete({attempt.value!r}) tag={attempt.event_id!r} @ t={attempt.time}"
                )


def _fmt(values) -> str:
    return "{" + ", ".join(sorted(repr(v) for v in values)) + "}"


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Orcheck OR-Set partition history verifier",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_checker.py -H history.edn
  python run_checker.py -H history.edn --variant eventual -v
  python run_checker.py -H history.csv --read-policy last-overall --json
  python run_checker.py -H history.edn --validate-only

Exit codes:
  0 valid, 1 invalid, 2 history file error, 3 EDN syntax error,
  4 interrupted, 5 unexpected error
        """,
    )

    parser.add_argument(
        "-H", "--history", required=True, type=Path, help="Path to the history file (.edn or .csv)"
    )

    parser.add_argument(
        "--variant",
        choices=sorted(PRESETS),
        default=DEFAULT_VARIANT,
        help=f"Checker preset (default: {DEFAULT_VARIANT})",
    )

    parser.add_argument(
        "--read-policy",
        choices=[p.value for p in ReadSelectionPolicy],
        help="Override how each process's final read is selected",
    )

    parser.add_argument(
        "--delete-policy",
        choices=[p.value for p in DeletePolicy],
        help="Override when a delete counts as removing an add tag",
    )

    parser.add_argument(
        "--no-partition-aware",
        action="store_true",
        help="Treat reads taken during a partition as settled",
    )

    parser.add_argument(
        "--no-duplicate-check", action="store_true", help="Skip duplicate detection in final reads"
    )

    parser.add_argument("--json", action="store_true", help="Print the verdict as JSON")

    parser.add_argument("-v", "--verbose", action="store_true", help="List every final read and rejected delete")

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (implies --verbose)"
    )

    parser.add_argument(
        "--validate-only", action="store_true", help="Only validate the history file"
    )

    return parser


def checker_from_args(args: argparse.Namespace) -> ORSetChecker:
    """Build the checker selected by the command-line arguments."""
    return build_checker(
        args.variant,
        read_selection_policy=ReadSelectionPolicy(args.read_policy) if args.read_policy else None,
        delete_policy=DeletePolicy(args.delete_policy) if args.delete_policy else None,
        partition_aware=False if args.no_partition_aware else None,
        check_duplicates=False if args.no_duplicate_check else None,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for history checking.

    Returns:
        Exit code (0 for a valid history, non-zero otherwise)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging_for_checker(debug=args.debug, quiet=args.json)
        logger = get_logger()

        if args.validate_only:
            logger.info(f"🔍 Validating history file: {args.history}")
            op_count = validate_history_file(str(args.history))
            logger.info(f"✅ History validation successful ({op_count} operations). Exiting.")
            return EXIT_VALID

        history = read_history(str(args.history))
        checker = checker_from_args(args)
        verdict = checker.evaluate(history)

        if args.json:
            print(json.dumps(verdict.to_dict(), indent=2, default=str))
        else:
            print_final_analysis(verdict, detailed=args.verbose or args.debug)

        return EXIT_VALID if verdict.valid else EXIT_INVALID

    except HistoryFormatError as e:
        get_logger().error(f"History file error: {e}")
        return EXIT_HISTORY_ERROR

    except HistoryParseError as e:
        get_logger().error(f"History parsing error: {e}")
        return EXIT_PARSE_ERROR

    except KeyboardInterrupt:
        get_logger().error("Checking interrupted by user")
        return EXIT_INTERRUPTED

    except Exception as e:
        get_logger().error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    sys.exit(main())
