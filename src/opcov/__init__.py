"""
Opcode coverage tools for Game Boy (LR35902) execution traces.
"""
from .differ import diff_files, read_lines, uncovered_lines
from .scanner import (CB_PREFIX, InvalidTraceError, OpcodeCoverage, format_cb_opcode, format_opcode,
                      missing_opcodes, scan_file, scan_trace)

__version__ = "0.1.0"
