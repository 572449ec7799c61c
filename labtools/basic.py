"""One-shot echo servers and clients over TCP and UDP.

Messages travel as fixed 1024-byte frames holding NUL-terminated text.
"""

from __future__ import annotations

import argparse
import socket
import sys
from typing import TextIO

__all__ = ["tcp_echo_server", "tcp_client", "udp_echo_server", "udp_client", "main"]

_BUFFER_SIZE = 1024
_DEFAULT_HOST = "127.0.0.1"
_TCP_PORT = 54321
_UDP_PORT = 12346


def _encode(text: str) -> bytes:
    """Pack ``text`` into one NUL-padded frame, truncating it to fit."""
    data = text.encode("utf-8")[: _BUFFER_SIZE - 1]
    return data.ljust(_BUFFER_SIZE, b"\0")


def _decode(data: bytes) -> str:
    """Return the text of a frame up to its first NUL."""
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _recv_frame(sock: socket.socket) -> str:
    """Read one whole frame from a stream socket; a closed peer yields ''."""
    buf = bytearray()
    while len(buf) < _BUFFER_SIZE:
        chunk = sock.recv(_BUFFER_SIZE - len(buf))
        if not chunk:
            break
        buf += chunk
    return _decode(bytes(buf))


def tcp_echo_server(host: str, port: int, out: TextIO) -> str:
    """Accept one TCP client, log its message to ``out`` and echo it back."""
    with socket.create_server((host, port), backlog=5) as server:
        conn, _ = server.accept()
        with conn:
            message = _recv_frame(conn)
            out.write(f"message from client: {message}")
            conn.sendall(_encode(message))
    return message


def tcp_client(message: str, host: str, port: int) -> str:
    """Send ``message`` to a TCP server and return its reply."""
    with socket.create_connection((host, port)) as sock:
        sock.sendall(_encode(message))
        return _recv_frame(sock)


def udp_echo_server(host: str, port: int) -> str:
    """Receive one UDP datagram, echo it to its sender and return its text."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind((host, port))
        data, addr = sock.recvfrom(_BUFFER_SIZE)
        message = _decode(data)
        if data:
            sock.sendto(_encode(message), addr)
    return message


def udp_client(message: str, host: str, port: int) -> str:
    """Send ``message`` to a UDP server and return its reply."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(_encode(message), (host, port))
        data, _ = sock.recvfrom(_BUFFER_SIZE)
    return _decode(data)


def main(argv: list[str] | None = None) -> int:
    """Run one of the echo servers or clients."""
    parser = argparse.ArgumentParser(prog="basic", description=__doc__)
    parser.add_argument("role", choices=["tcp-server", "tcp-client", "udp-server", "udp-client"])
    parser.add_argument("--host", default=_DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)
    tcp = args.role.startswith("tcp")
    port = args.port if args.port is not None else (_TCP_PORT if tcp else _UDP_PORT)
    try:
        if args.role == "tcp-server":
            tcp_echo_server(args.host, port, sys.stdout)
        elif args.role == "udp-server":
            udp_echo_server(args.host, port)
        elif args.role == "tcp-client":
            reply = tcp_client(sys.stdin.readline(), args.host, port)
            sys.stdout.write(f"message from server:{reply}")
        else:
            reply = udp_client(sys.stdin.readline(), args.host, port)
            sys.stdout.write(f"message from server: {reply}")
    except OSError as exc:
        sys.stderr.write(f"{args.role}: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())