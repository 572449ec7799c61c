"""Count lines, words and characters."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO

__all__ = ["Counts", "count", "wc", "main"]

_WHITESPACE = frozenset(" \r\t\n\v")


@dataclass(frozen=True)
class Counts:
    """Line, word and character totals."""

    lines: int = 0
    words: int = 0
    chars: int = 0


def count(data: str | bytes) -> Counts:
    """Count lines, words and characters (bytes, for bytes input)."""
    text = data.decode("latin-1") if isinstance(data, (bytes, bytearray)) else data
    lines = words = 0
    in_word = False
    for ch in text:
        if ch == "\n":
            lines += 1
        if ch in _WHITESPACE:
            in_word = False
        elif not in_word:
            words += 1
            in_word = True
    return Counts(lines, words, len(text))


def wc(stream: IO, name: str, out: IO[str]) -> Counts:
    """Count everything in ``stream`` and print the totals followed by ``name``."""
    counts = count(stream.read())
    out.write(f"{counts.lines} {counts.words} {counts.chars} {name}\n")
    return counts


def main(argv: list[str] | None = None) -> int:
    """Run wc on the named files or on standard input."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        wc(getattr(sys.stdin, "buffer", sys.stdin), "", sys.stdout)
        return 0
    for name in args:
        try:
            handle = open(name, "rb")
        except OSError:
            sys.stdout.write(f"wc: cannot open {name}\n")
            return 1
        with handle:
            try:
                wc(handle, name, sys.stdout)
            except OSError:
                sys.stdout.write("wc: read error\n")
                return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())