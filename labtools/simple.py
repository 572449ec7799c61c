"""The cat and echo utilities."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import IO

__all__ = ["cat", "cat_main", "echo", "echo_main"]

_CHUNK = 512


def cat(streams: Iterable[IO], out: IO) -> None:
    """Copy every stream in order to ``out``.

    Raises OSError with a "cat: read error" or "cat: write error" message.
    """
    for stream in streams:
        while True:
            try:
                chunk = stream.read(_CHUNK)
            except OSError as exc:
                raise OSError("cat: read error") from exc
            if not chunk:
                break
            try:
                out.write(chunk)
            except OSError as exc:
                raise OSError("cat: write error") from exc
    out.flush()


def cat_main(argv: list[str] | None = None) -> int:
    """Concatenate the named files, or standard input, to standard output."""
    args = sys.argv[1:] if argv is None else list(argv)
    sys.stdout.flush()
    out = getattr(sys.stdout, "buffer", sys.stdout)
    try:
        if not args:
            cat([getattr(sys.stdin, "buffer", sys.stdin)], out)
            return 0
        for name in args:
            try:
                handle = open(name, "rb")
            except OSError:
                sys.stderr.write(f"cat: cannot open {name}\n")
                return 1
            with handle:
                cat([handle], out)
    except OSError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    return 0


def echo(args: Iterable[str]) -> str:
    """Join ``args`` with spaces and end with a newline; nothing for no args."""
    words = list(args)
    return " ".join(words) + "\n" if words else ""


def echo_main(argv: list[str] | None = None) -> int:
    """Print the arguments."""
    args = sys.argv[1:] if argv is None else list(argv)
    sys.stdout.write(echo(args))
    return 0