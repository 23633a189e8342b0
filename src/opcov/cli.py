"""
Command line front ends for the coverage scanner and differ.
"""
import argparse
import logging
import os
import sys

from .differ import diff_files
from .scanner import DEFAULT_TRACE_PATH, InvalidTraceError, scan_file

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_USAGE = 2  # argparse
EXIT_INVALID_TRACE = 3


def configure_logging(debug=False):
    """Log to stderr; stdout is reserved for report output."""
    if debug or os.getenv('OPCOV_DEBUG'):
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')


def build_scanner_parser():
    parser = argparse.ArgumentParser(
        prog='opcov-scanner',
        description='List opcodes (including CB-prefixed ones) never executed in a trace log')
    parser.add_argument('output', help='Path of the missing-opcode report (overwritten)')
    parser.add_argument('--trace', default=os.getenv('OPCOV_TRACE', DEFAULT_TRACE_PATH),
                        help=f'Raw opcode trace to scan (default: $OPCOV_TRACE or {DEFAULT_TRACE_PATH})')
    parser.add_argument('--ignore-dangling-prefix', action='store_true',
                        help='Ignore a CB prefix at the very end of the trace instead of failing')
    parser.add_argument('--summary', action='store_true', help='Log coverage statistics')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser


def build_differ_parser():
    parser = argparse.ArgumentParser(
        prog='opcov-differ',
        description='Print lines of FILE2 that do not appear in FILE1')
    parser.add_argument('file1', help='Reference report')
    parser.add_argument('file2', help='Report to check against FILE1')
    parser.add_argument('--reverse', action='store_true',
                        help='Print lines of FILE1 that do not appear in FILE2 instead')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser


def log_summary(coverage):
    stats = coverage.coverage_stats()
    total = stats['total']
    logging.info("=== OPCODE COVERAGE ===")
    logging.info(f"Regular opcodes: {stats['seen']}/{total} ({stats['coverage']:.1f}%)")
    logging.info(f"CB opcodes: {stats['seen_cb']}/{total} ({stats['cb_coverage']:.1f}%)")
    logging.info(f"Total coverage: {stats['seen'] + stats['seen_cb']}/{total * 2} "
                 f"({stats['total_coverage']:.1f}%)")


def run_scanner(args):
    try:
        coverage = scan_file(args.trace, args.output, strict=not args.ignore_dangling_prefix)
    except InvalidTraceError as e:
        logging.error(f"Error: invalid trace '{args.trace}': {e}")
        return EXIT_INVALID_TRACE
    except OSError as e:
        logging.error(f"Error: {e}")
        return EXIT_IO_ERROR

    if args.summary:
        log_summary(coverage)
    return EXIT_OK


def run_differ(args):
    try:
        lines = diff_files(args.file1, args.file2, reverse=args.reverse)
    except OSError as e:
        logging.error(f"Error: {e}")
        return EXIT_IO_ERROR

    try:
        for line in lines:
            print(line)
        sys.stdout.flush()
    except BrokenPipeError:
        # reader went away (e.g. piped into head)
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        os.close(devnull)
    return EXIT_OK


def scanner_main(argv=None):
    args = build_scanner_parser().parse_args(argv)
    configure_logging(args.debug)
    return run_scanner(args)


def differ_main(argv=None):
    args = build_differ_parser().parse_args(argv)
    configure_logging(args.debug)
    return run_differ(args)

