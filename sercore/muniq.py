"""Collapse immediately repeated blocks of lines in a file."""

from __future__ import annotations

import getopt
import sys

USAGE = "Usage: {prog} [-n min-repeat-num] [-m max-repeat-num] <-o output-file> input-name"


def find_repeat(data: bytes, start: int, max_repeat: int, min_repeat: int):
    """Look for a block of lines at ``start`` that is repeated right after it.

    Blocks of ``max_repeat`` lines down to ``min_repeat`` lines are tried,
    largest first. Returns the index of the newline ending the first block,
    or ``None`` when no repetition is found.
    """
    end = len(data)
    if start >= end:
        return None

    marks = []
    pos = start
    for _ in range(2 * max_repeat + 1):
        nl = data.find(b"\n", pos, end)
        if nl < 0:
            break
        marks.append(nl)
        pos = nl + 1

    for lines in range(max_repeat, 0, -1):
        if lines < min_repeat:
            return None
        if lines - 1 >= len(marks):
            continue
        first_end = marks[lines - 1]
        second_end = marks[2 * lines - 1] if 2 * lines - 1 < len(marks) else end
        if first_end == start:
            return None
        width = first_end - start
        if second_end - first_end != width + 1:
            continue
        if data[start:first_end] != data[first_end + 1:first_end + 1 + width]:
            continue
        return first_end
    return None


def dedupe(data: bytes, max_repeat: int = 10, min_repeat: int = 1) -> bytes:
    """Return ``data`` with each directly repeated block of lines kept once."""
    out = bytearray()
    pos = 0
    end = len(data)
    while pos < end:
        block_end = find_repeat(data, pos, max_repeat, min_repeat)
        if block_end is None:
            nl = data.find(b"\n", pos)
            stop = end if nl < 0 else nl + 1
            out += data[pos:stop]
            pos = stop
        else:
            size = block_end - pos + 1
            out += data[pos:pos + size]
            pos += 2 * size
    return bytes(out)


def main(argv=None) -> int:
    """Command entry point; returns 1 if lines were removed, 0 if not, -1 on error."""
    prog = "muniq"
    args = sys.argv[1:] if argv is None else list(argv)
    usage = USAGE.format(prog=prog)

    min_repeat = 1
    max_repeat = 10
    output = None
    try:
        opts, rest = getopt.gnu_getopt(args, "n:m:o:")
        for opt, val in opts:
            if opt == "-n":
                min_repeat = int(val)
            elif opt == "-m":
                max_repeat = int(val)
            elif opt == "-o":
                output = val
    except (getopt.GetoptError, ValueError):
        print(usage, file=sys.stderr)
        return -1

    if not rest:
        print("Expected argument after options", file=sys.stderr)
        print(usage, file=sys.stderr)
        return -1
    if output is None:
        print(usage, file=sys.stderr)
        return -1

    try:
        with open(rest[0], "rb") as fh:
            data = fh.read()
    except OSError as err:
        print(f"open input_filename : {err}", file=sys.stderr)
        return -1

    result = dedupe(data, max_repeat, min_repeat)

    try:
        with open(output, "wb") as fh:
            fh.write(result)
    except OSError as err:
        print(f"open output_filename: {err}", file=sys.stderr)
        return -1

    return 1 if len(result) < len(data) else 0


if __name__ == "__main__":
    sys.exit(main())