"""Rock-paper-scissors referee for two players over TCP or UDP."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import TextIO

from labtools.basic import _BUFFER_SIZE, _decode, _encode, _recv_frame

__all__ = ["judge", "serve_tcp", "serve_udp", "main"]

_DEFAULT_HOST = "127.0.0.1"
_WIN, _LOSE, _DRAW = "Win", "Lose", "Draw"
_START, _END, _YES = "start", "end", "yes\n"

_OUTCOMES = {
    ("rock", "paper"): (_LOSE, _WIN),
    ("rock", "scissor"): (_WIN, _LOSE),
    ("paper", "scissor"): (_LOSE, _WIN),
    ("paper", "rock"): (_WIN, _LOSE),
    ("scissor", "rock"): (_LOSE, _WIN),
    ("scissor", "paper"): (_WIN, _LOSE),
}


def judge(first: str, second: str) -> tuple[str, str] | None:
    """Return the results for both players, or None if a move is not understood.

    Identical moves always draw.
    """
    a, b = first.removesuffix("\n"), second.removesuffix("\n")
    if a == b:
        return (_DRAW, _DRAW)
    return _OUTCOMES.get((a, b))


def serve_tcp(host: str, port_a: int, port_b: int, log: TextIO) -> list[tuple[str, str]]:
    """Referee games between one TCP client on each port until one declines.

    Returns the results of every decided round.
    """
    results: list[tuple[str, str]] = []
    with socket.create_server((host, port_a), backlog=5) as server_a, \
            socket.create_server((host, port_b), backlog=5) as server_b:
        conn_a, _ = server_a.accept()
        conn_b, _ = server_b.accept()
        with conn_a, conn_b:
            while True:
                answer_a = _recv_frame(conn_a)
                log.write(f"message from clienta: {answer_a}")
                answer_b = _recv_frame(conn_b)
                log.write(f"message from clientb: {answer_b}")
                if answer_a == _YES and answer_b == _YES:
                    conn_a.sendall(_encode(_START))
                    conn_b.sendall(_encode(_START))
                    outcome = judge(_recv_frame(conn_a), _recv_frame(conn_b))
                    if outcome is not None:
                        conn_a.sendall(_encode(outcome[0]))
                        conn_b.sendall(_encode(outcome[1]))
                        results.append(outcome)
                else:
                    for conn in (conn_a, conn_b):
                        try:
                            conn.sendall(_encode(_END))
                        except OSError:
                            pass
                    break
    return results


def serve_udp(host: str, port_a: int, port_b: int, log: TextIO) -> list[tuple[str, str]]:
    """Referee games between the UDP players on each port until one declines.

    Returns the results of every decided round.
    """
    results: list[tuple[str, str]] = []
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock_a, \
            socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock_b:
        sock_a.bind((host, port_a))
        sock_b.bind((host, port_b))
        while True:
            data_a, addr_a = sock_a.recvfrom(_BUFFER_SIZE)
            answer_a = _decode(data_a)
            log.write(f"message from clienta : {answer_a}")
            data_b, addr_b = sock_b.recvfrom(_BUFFER_SIZE)
            answer_b = _decode(data_b)
            log.write(f"message from clientb : {answer_b}")
            if answer_a == _YES and answer_b == _YES:
                sock_a.sendto(_encode(_START), addr_a)
                sock_b.sendto(_encode(_START), addr_b)
                choice_a, addr_a = sock_a.recvfrom(_BUFFER_SIZE)
                choice_b, addr_b = sock_b.recvfrom(_BUFFER_SIZE)
                outcome = judge(_decode(choice_a), _decode(choice_b))
                if outcome is not None:
                    sock_a.sendto(_encode(outcome[0]), addr_a)
                    sock_b.sendto(_encode(outcome[1]), addr_b)
                    results.append(outcome)
            else:
                sock_a.sendto(_encode(_END), addr_a)
                sock_b.sendto(_encode(_END), addr_b)
                break
    return results


def main(argv: list[str] | None = None) -> int:
    """Run the referee over TCP or UDP."""
    parser = argparse.ArgumentParser(prog="rps", description=__doc__)
    parser.add_argument("protocol", choices=["tcp", "udp"])
    parser.add_argument("--host", default=_DEFAULT_HOST)
    parser.add_argument("--port-a", type=int, default=None)
    parser.add_argument("--port-b", type=int, default=54321)
    args = parser.parse_args(argv)
    try:
        if args.protocol == "tcp":
            port_a = 12345 if args.port_a is None else args.port_a
            serve_tcp(args.host, port_a, args.port_b, sys.stdout)
        else:
            port_a = 12346 if args.port_a is None else args.port_a
            serve_udp(args.host, port_a, args.port_b, sys.stdout)
    except OSError as exc:
        sys.stderr.write(f"rps: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())