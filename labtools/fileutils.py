"""The ln, mkdir, rm and kill utilities."""

from __future__ import annotations

import os
import signal
import sys

from labtools.fmt import atoi

__all__ = ["ln_main", "mkdir_main", "rm_main", "kill_main"]

_KILL = getattr(signal, "SIGKILL", signal.SIGTERM)


def _args(argv: list[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def ln_main(argv: list[str] | None = None) -> int:
    """Create a hard link: ``ln old new``."""
    args = _args(argv)
    if len(args) != 2:
        sys.stderr.write("Usage: ln old new\n")
        return 1
    old, new = args
    try:
        os.link(old, new)
    except OSError:
        sys.stderr.write(f"link {old} {new}: failed\n")
    return 0


def mkdir_main(argv: list[str] | None = None) -> int:
    """Create directories, stopping at the first failure."""
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: mkdir files...\n")
        return 1
    for name in args:
        try:
            os.mkdir(name)
        except OSError:
            sys.stderr.write(f"mkdir: {name} failed to create\n")
            break
    return 0


def _unlink(name: str) -> None:
    if os.path.isdir(name) and not os.path.islink(name):
        os.rmdir(name)
    else:
        os.unlink(name)


def rm_main(argv: list[str] | None = None) -> int:
    """Remove files or empty directories, stopping at the first failure."""
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: rm files...\n")
        return 1
    for name in args:
        try:
            _unlink(name)
        except OSError:
            sys.stderr.write(f"rm: {name} failed to delete\n")
            break
    return 0


def kill_main(argv: list[str] | None = None) -> int:
    """Kill each listed process id; failures are ignored."""
    args = _args(argv)
    if not args:
        sys.stderr.write("usage: kill pid...\n")
        return 1
    for arg in args:
        pid = atoi(arg)
        if pid <= 0:
            continue
        try:
            os.kill(pid, _KILL)
        except (OSError, OverflowError):
            pass
    return 0