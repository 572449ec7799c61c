"""A small grep that understands only the ``^ . * $`` operators."""

from __future__ import annotations

import sys
from typing import TextIO

__all__ = ["match", "grep", "main"]


def _match_here(pattern: str, pi: int, text: str, ti: int) -> bool:
    """Look for ``pattern[pi:]`` at the start of ``text[ti:]``."""
    while True:
        if pi == len(pattern):
            return True
        if pi + 1 < len(pattern) and pattern[pi + 1] == "*":
            return _match_star(pattern[pi], pattern, pi + 2, text, ti)
        if pattern[pi] == "$" and pi + 1 == len(pattern):
            return ti == len(text)
        if ti < len(text) and pattern[pi] in (".", text[ti]):
            pi += 1
            ti += 1
            continue
        return False


def _match_star(c: str, pattern: str, pi: int, text: str, ti: int) -> bool:
    """Look for ``c*`` followed by ``pattern[pi:]`` at ``text[ti:]``."""
    while True:
        if _match_here(pattern, pi, text, ti):
            return True
        if ti < len(text) and (text[ti] == c or c == "."):
            ti += 1
        else:
            return False


def match(pattern: str, text: str) -> bool:
    """Return True if ``pattern`` matches anywhere in ``text``."""
    if pattern.startswith("^"):
        return _match_here(pattern, 1, text, 0)
    return any(_match_here(pattern, 0, text, start) for start in range(len(text) + 1))


def grep(pattern: str, stream: TextIO, out: TextIO) -> None:
    """Write every newline-terminated line of ``stream`` that matches ``pattern``.

    A final line without a terminating newline is never printed.
    """
    *lines, _rest = stream.read().split("\n")
    for line in lines:
        if match(pattern, line):
            out.write(line + "\n")


def main(argv: list[str] | None = None) -> int:
    """Run grep on the named files or on standard input."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        sys.stderr.write("usage: grep pattern [file ...]\n")
        return 1
    pattern, files = args[0], args[1:]
    if not files:
        grep(pattern, sys.stdin, sys.stdout)
        return 0
    for name in files:
        try:
            handle = open(name, encoding="utf-8", errors="replace", newline="")
        except OSError:
            sys.stdout.write(f"grep: cannot open {name}\n")
            return 1
        with handle:
            grep(pattern, handle, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())