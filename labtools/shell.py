"""Command-line parser for a small shell: words, ``< > >>``, ``|``, ``;``, ``&`` and ``( )``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

__all__ = [
    "ParseError",
    "ExecCommand",
    "RedirCommand",
    "PipeCommand",
    "ListCommand",
    "BackCommand",
    "tokenize",
    "parse_command",
]

_WHITESPACE = " \t\r\n\v"
_SYMBOLS = "<|>&;()"
_MAXARGS = 10


class ParseError(Exception):
    """Raised when a command line cannot be parsed."""


@dataclass
class ExecCommand:
    """Run a program with its arguments."""

    argv: list[str] = field(default_factory=list)


@dataclass
class RedirCommand:
    """Run ``command`` with file descriptor ``fd`` redirected to ``file``.

    ``mode`` is ``"<"``, ``">"`` or ``">>"``.
    """

    command: Command
    file: str
    mode: str
    fd: int


@dataclass
class PipeCommand:
    """Connect the output of ``left`` to the input of ``right``."""

    left: Command
    right: Command


@dataclass
class ListCommand:
    """Run ``left`` to completion, then ``right``."""

    left: Command
    right: Command


@dataclass
class BackCommand:
    """Run ``command`` in the background."""

    command: Command


Command = Union[ExecCommand, RedirCommand, PipeCommand, ListCommand, BackCommand]

_REDIRECTS = {"<": 0, ">": 1, ">>": 1}


def tokenize(line: str) -> list[str]:
    """Split ``line`` into words and the symbols ``| ( ) ; & < > >>``."""
    line = line.split("\0", 1)[0]
    tokens: list[str] = []
    i, n = 0, len(line)
    while True:
        while i < n and line[i] in _WHITESPACE:
            i += 1
        if i >= n:
            return tokens
        ch = line[i]
        if ch == ">":
            if line.startswith(">>", i):
                tokens.append(">>")
                i += 2
            else:
                tokens.append(">")
                i += 1
        elif ch in _SYMBOLS:
            tokens.append(ch)
            i += 1
        else:
            start = i
            while i < n and line[i] not in _WHITESPACE and line[i] not in _SYMBOLS:
                i += 1
            tokens.append(line[start:i])


def _is_word(token: str) -> bool:
    return token[0] not in _SYMBOLS


class _Parser:
    def __init__(self, tokens: list[str]) -> None:
        self.tokens = tokens
        self.pos = 0

    def peek(self, chars: str) -> bool:
        return self.pos < len(self.tokens) and self.tokens[self.pos][0] in chars

    def take(self) -> str | None:
        if self.pos >= len(self.tokens):
            return None
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def rest(self) -> list[str]:
        return self.tokens[self.pos:]

    def line(self) -> Command:
        cmd = self.pipe()
        while self.peek("&"):
            self.take()
            cmd = BackCommand(cmd)
        if self.peek(";"):
            self.take()
            cmd = ListCommand(cmd, self.line())
        return cmd

    def pipe(self) -> Command:
        cmd = self.exec()
        if self.peek("|"):
            self.take()
            cmd = PipeCommand(cmd, self.pipe())
        return cmd

    def redirs(self, cmd: Command) -> Command:
        while self.peek("<>"):
            mode = self.take()
            target = self.take()
            if target is None or not _is_word(target):
                raise ParseError("missing file for redirection")
            cmd = RedirCommand(cmd, target, mode, _REDIRECTS[mode])
        return cmd

    def block(self) -> Command:
        if not self.peek("("):
            raise ParseError("parseblock")
        self.take()
        cmd = self.line()
        if not self.peek(")"):
            raise ParseError("syntax - missing )")
        self.take()
        return self.redirs(cmd)

    def exec(self) -> Command:
        if self.peek("("):
            return self.block()
        exec_cmd = ExecCommand()
        ret = self.redirs(exec_cmd)
        while not self.peek("|)&;"):
            token = self.take()
            if token is None:
                break
            if not _is_word(token):
                raise ParseError("syntax")
            exec_cmd.argv.append(token)
            if len(exec_cmd.argv) >= _MAXARGS:
                raise ParseError("too many args")
            ret = self.redirs(ret)
        return ret


def parse_command(line: str) -> Command:
    """Parse a whole command line into a command tree."""
    parser = _Parser(tokenize(line))
    cmd = parser.line()
    leftovers = parser.rest()
    if leftovers:
        raise ParseError(f"syntax (leftovers: {' '.join(leftovers)})")
    return cmd