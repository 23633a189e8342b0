#!/usr/bin/env python3
"""
Opcode Coverage Tools
Finds opcodes a Game Boy execution trace never hit, and compares coverage reports.

  python main.py scan [--trace log.txt] missing.txt
  python main.py diff missing_a.txt missing_b.txt
"""

import sys
sys.path.append('src')

from opcov.cli import differ_main, scanner_main

COMMANDS = {
    'scan': scanner_main,
    'diff': differ_main,
}


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(f"usage: {sys.argv[0]} {{{','.join(COMMANDS)}}} ...", file=sys.stderr)
        return 2
    return COMMANDS[sys.argv[1]](sys.argv[2:])


if __name__ == "__main__":
    sys.exit(main())
