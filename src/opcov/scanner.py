"""
Opcode Coverage Scanner
Scans a raw execution trace (one byte per executed opcode, CB-prefixed
opcodes as two bytes) and lists every opcode that never executed.

Cython最適化: scan_trace()のバイト走査ループ
"""
import logging
import os

import cython
import numpy

logger = logging.getLogger(__name__)

# CB prefix: 次のバイトはCB拡張命令テーブルを選択する
CB_PREFIX = 0xCB
OPCODE_SPACE = 0x100

DEFAULT_TRACE_PATH = "log.txt"


class InvalidTraceError(ValueError):
    """Raised when a trace ends with a CB prefix that has no operand byte."""

    def __init__(self, offset):
        self.offset = offset
        super().__init__(f"dangling CB prefix at offset 0x{offset:X} (end of trace)")


class OpcodeCoverage:
    """Seen tables for the regular and CB-prefixed opcode spaces."""

    def __init__(self, opcodes, cb_opcodes, trace_length=0):
        self.opcodes = opcodes          # numpy bool[256]
        self.cb_opcodes = cb_opcodes    # numpy bool[256]
        self.trace_length = trace_length

    def seen_opcodes(self):
        return set(numpy.flatnonzero(self.opcodes).tolist())

    def seen_cb_opcodes(self):
        return set(numpy.flatnonzero(self.cb_opcodes).tolist())

    def missing_count(self):
        """Number of records missing_opcodes() will emit."""
        seen = int(numpy.count_nonzero(self.opcodes))
        seen_cb = int(numpy.count_nonzero(self.cb_opcodes))
        return (OPCODE_SPACE - seen) + (OPCODE_SPACE - seen_cb)

    def coverage_stats(self):
        seen = int(numpy.count_nonzero(self.opcodes))
        seen_cb = int(numpy.count_nonzero(self.cb_opcodes))
        total = OPCODE_SPACE * 2
        return {
            'seen': seen,
            'seen_cb': seen_cb,
            'total': OPCODE_SPACE,
            'coverage': seen / OPCODE_SPACE * 100,
            'cb_coverage': seen_cb / OPCODE_SPACE * 100,
            'total_coverage': (seen + seen_cb) / total * 100,
        }


def scan_trace(data, strict: cython.bint = True):
    """Classify trace bytes into the regular and CB opcode spaces.

    A 0xCB byte is consumed together with the byte after it, so ``CB CB``
    records CB opcode 0xCB and neither byte lands in the regular table.

    Args:
        data: the raw trace (bytes-like).
        strict: if True, a trailing CB prefix raises InvalidTraceError;
            otherwise it is logged and ignored.

    Returns:
        OpcodeCoverage
    """
    seen = numpy.zeros(OPCODE_SPACE, dtype=numpy.bool_)
    seen_cb = numpy.zeros(OPCODE_SPACE, dtype=numpy.bool_)
    length: cython.Py_ssize_t = len(data)
    i: cython.Py_ssize_t = 0
    opcode: cython.int

    while i < length:
        opcode = data[i]
        if opcode == CB_PREFIX:
            i += 1
            if i >= length:
                if strict:
                    raise InvalidTraceError(i - 1)
                logger.warning(f"Ignoring dangling CB prefix at offset 0x{i - 1:X}")
                break
            seen_cb[data[i]] = True
        else:
            seen[opcode] = True
        i += 1

    coverage = OpcodeCoverage(seen, seen_cb, trace_length=length)
    logger.debug(f"Scanned {length} bytes: {len(coverage.seen_opcodes())} opcodes, "
                 f"{len(coverage.seen_cb_opcodes())} CB opcodes seen")
    return coverage


def format_opcode(opcode):
    return f"0x{opcode:02X}"


def format_cb_opcode(opcode):
    return f"CB 0x{opcode:02X}"


def missing_opcodes(coverage):
    """List unseen opcodes, regular then CB for each value in ascending order.

    The two spaces are interleaved per value (0x00, CB 0x00, 0x01, ...),
    not grouped.
    """
    lines = []
    for opcode in range(OPCODE_SPACE):
        if not coverage.opcodes[opcode]:
            lines.append(format_opcode(opcode))
        if not coverage.cb_opcodes[opcode]:
            lines.append(format_cb_opcode(opcode))
    return lines


def load_trace(path):
    with open(path, 'rb') as f:
        return f.read()


def write_report(path, lines):
    """Write one record per line, overwriting any existing file."""
    with open(path, 'w', encoding='utf-8', newline='\n') as f:
        for line in lines:
            f.write(line + '\n')


def scan_file(trace_path, output_path, strict: cython.bint = True):
    """Scan ``trace_path`` and write the missing-opcode report to ``output_path``.

    The report is fully built before the output file is opened; a failed scan
    leaves any existing output untouched.
    """
    logger.debug(f"Reading trace {os.fspath(trace_path)}")
    coverage = scan_trace(load_trace(trace_path), strict=strict)
    lines = missing_opcodes(coverage)
    write_report(output_path, lines)
    logger.debug(f"Wrote {len(lines)} missing opcodes to {os.fspath(output_path)}")
    return coverage
