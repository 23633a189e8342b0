"""
Coverage Report Differ
Compares two line-based coverage reports (e.g. scanner output from two runs).
"""
import logging
import os

logger = logging.getLogger(__name__)


def read_lines(path):
    """Read a text file as a list of lines without their terminators.

    ``\\n``, ``\\r\\n`` and ``\\r`` all end a line; a final terminator does not
    add an empty line. No other whitespace is stripped. Undecodable bytes become U+FFFD.
    """
    with open(path, 'r', encoding='utf-8-sig', errors='replace') as f:
        text = f.read()
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    logger.debug(f"Read {len(lines)} lines from {os.fspath(path)}")
    return lines


def uncovered_lines(first, second):
    """Yield lines of ``second`` that never appear in ``first``.

    Order and duplicates of ``second`` are kept.
    """
    covered = set(first)
    for line in second:
        if line not in covered:
            yield line


def diff_files(first_path, second_path, reverse=False):
    """Return an iterator over the uncovered lines of two report files.

    By default this reports lines of the second file missing from the first.
    ``reverse=True`` swaps the files: lines the first file uses that the
    second doesn't.

    Both files are read before anything is yielded.
    """
    first = read_lines(first_path)
    second = read_lines(second_path)
    if reverse:
        first, second = second, first
    return uncovered_lines(first, second)
