"""Rock-paper-scissors player that talks to the referee over TCP or UDP."""

from __future__ import annotations

import argparse
import socket
import sys
from collections.abc import Callable
from typing import TextIO

from labtools.basic import _BUFFER_SIZE, _decode, _encode

__all__ = ["play_tcp", "play_udp", "main"]

_DEFAULT_HOST = "127.0.0.1"
_TCP_PORTS = {"a": 12345, "b": 54321}
_UDP_PORTS = {"a": 12346, "b": 54321}

_TCP_START_PROMPT = "Let us start the game[yes/no] : "
_UDP_START_PROMPT = "Let start the game[yes/no] : "
_CHOICE_PROMPT = "What do you choose[rock/paper/scissor] : "
_TCP_REPLY = "message from server:{}\n"
_UDP_REPLY = "message from server: {}\n"
_TCP_RULE = "-" * 33 + "\n"
_UDP_RULE = "-" * 36 + "\n"
_END = "end"


def _play(
    exchange: Callable[[str], str],
    stdin: TextIO,
    stdout: TextIO,
    start_prompt: str,
    reply_format: str,
    rule: str,
) -> list[str]:
    """Run the question-and-answer loop; return the server's verdict for each round."""
    results: list[str] = []
    while True:
        stdout.write(start_prompt)
        stdout.flush()
        if exchange(stdin.readline()) == _END:
            break
        stdout.write(_CHOICE_PROMPT)
        stdout.flush()
        reply = exchange(stdin.readline())
        stdout.write(reply_format.format(reply))
        stdout.write(rule)
        results.append(reply)
    return results


def _read_frame(sock: socket.socket) -> str:
    """Read one whole frame; raise ConnectionError if the server has gone away."""
    buf = bytearray()
    while len(buf) < _BUFFER_SIZE:
        chunk = sock.recv(_BUFFER_SIZE - len(buf))
        if not chunk:
            raise ConnectionError("server closed the connection")
        buf += chunk
    return _decode(bytes(buf))


def play_tcp(host: str, port: int, stdin: TextIO, stdout: TextIO) -> list[str]:
    """Play rounds against a TCP referee until it answers "end"."""
    with socket.create_connection((host, port)) as sock:

        def exchange(text: str) -> str:
            sock.sendall(_encode(text))
            return _read_frame(sock)

        return _play(exchange, stdin, stdout, _TCP_START_PROMPT, _TCP_REPLY, _TCP_RULE)


def play_udp(host: str, port: int, stdin: TextIO, stdout: TextIO) -> list[str]:
    """Play rounds against a UDP referee until it answers "end"."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:

        def exchange(text: str) -> str:
            sock.sendto(_encode(text), (host, port))
            data, _ = sock.recvfrom(_BUFFER_SIZE)
            return _decode(data)

        return _play(exchange, stdin, stdout, _UDP_START_PROMPT, _UDP_REPLY, _UDP_RULE)


def main(argv: list[str] | None = None) -> int:
    """Play as player a or b over TCP or UDP."""
    parser = argparse.ArgumentParser(prog="rps-client", description=__doc__)
    parser.add_argument("protocol", choices=["tcp", "udp"])
    parser.add_argument("player", choices=["a", "b"])
    parser.add_argument("--host", default=_DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)
    tcp = args.protocol == "tcp"
    defaults = _TCP_PORTS if tcp else _UDP_PORTS
    port = defaults[args.player] if args.port is None else args.port
    try:
        if tcp:
            play_tcp(args.host, port, sys.stdin, sys.stdout)
        else:
            play_udp(args.host, port, sys.stdin, sys.stdout)
    except OSError as exc:
        sys.stderr.write(f"rps-client: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())