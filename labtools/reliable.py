"""Reliable message transfer over UDP in numbered, acknowledged chunks.

The client announces how many chunks follow and sends them. The server
acknowledges them and sends the whole message back the same way. A sender
resends every chunk not acknowledged within the waiting window. On its
first pass a receiver holds back the acknowledgement of every third chunk,
so the resend path is always exercised.
"""

from __future__ import annotations

import argparse
import dataclasses
import socket
import sys
import time
from collections.abc import Iterable
from typing import TextIO

from labtools.basic import _BUFFER_SIZE, _decode, _encode
from labtools.chunks import Ack, DataChunk, decode_ack, decode_chunk, now_ms, split_message
from labtools.fmt import atoi

__all__ = [
    "send_chunks",
    "receive_chunks",
    "run_client",
    "run_server",
    "client_main",
    "server_main",
]

_DEFAULT_HOST = "127.0.0.1"
_DEFAULT_PORT = 12345
_LOOP_TIME = 2.0
_ACK_WINDOW_MS = 100
_RECV_SIZE = 1024
_NO_DATA = (BlockingIOError, TimeoutError, ConnectionRefusedError)


def send_chunks(
    sock: socket.socket,
    addr: tuple[str, int],
    chunks: Iterable[DataChunk],
    log: TextIO,
) -> int:
    """Send ``chunks`` to ``addr`` until every one is acknowledged.

    An acknowledgement counts only if it was stamped less than 100 ms after
    the chunk it answers was sent. Returns the number of transmissions.
    """
    pending = list(chunks)
    acked = [False] * len(pending)
    sent_at = [0] * len(pending)
    sends = 0
    original_timeout = sock.gettimeout()

    def transmit(index: int) -> None:
        nonlocal sends
        stamp = now_ms()
        sent_at[index] = stamp
        sock.sendto(dataclasses.replace(pending[index], time=stamp).pack(), addr)
        sends += 1

    def poll(timeout: float) -> None:
        sock.settimeout(timeout)
        try:
            data, _ = sock.recvfrom(_RECV_SIZE)
        except _NO_DATA:
            return
        try:
            ack = decode_ack(data)
        except ValueError:
            return
        number = ack.number
        if 0 <= number < len(pending) and ack.time - sent_at[number] < _ACK_WINDOW_MS:
            acked[number] = True
            log.write(f"Received ackchunk with ack number: {number}\n")

    def wait_window() -> None:
        deadline = time.monotonic() + _LOOP_TIME
        while not all(acked):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            poll(remaining)

    try:
        for index, _chunk in enumerate(pending):
            transmit(index)
            poll(0.0)
        wait_window()
        while not all(acked):
            for index, done in enumerate(acked):
                if not done:
                    transmit(index)
                poll(0.0)
            wait_window()
    finally:
        sock.settimeout(original_timeout)
    return sends


def receive_chunks(sock: socket.socket, count: int, log: TextIO) -> list[DataChunk]:
    """Receive ``count`` chunks, acknowledging them to their sender.

    Returns the chunks ordered by number. Datagrams that are not chunks, or
    carry a number out of range, are ignored.
    """
    if count < 0:
        raise ValueError("chunk count must not be negative")
    received: list[DataChunk | None] = [None] * count
    done = [False] * count

    def take() -> tuple[DataChunk, tuple[str, int]]:
        while True:
            data, addr = sock.recvfrom(_RECV_SIZE)
            try:
                chunk = decode_chunk(data)
            except ValueError:
                continue
            if 0 <= chunk.number < count:
                return chunk, addr

    def record(chunk: DataChunk, addr: tuple[str, int], acknowledge: bool) -> None:
        log.write(f"Received chunk with seq number: {chunk.number}\n")
        log.write(f"Message from client with seq number {chunk.number} is {chunk.data}\n")
        received[chunk.number] = chunk
        if acknowledge:
            ack = Ack(chunk.number, now_ms())
            sock.sendto(ack.pack(), addr)
            if ack.time - chunk.time < _ACK_WINDOW_MS:
                done[chunk.number] = True

    for position in range(count):
        chunk, addr = take()
        record(chunk, addr, position == 0 or position % 3 != 0)
    while not all(done):
        chunk, addr = take()
        record(chunk, addr, True)
    return [chunk for chunk in received if chunk is not None]


def _join(chunks: Iterable[DataChunk]) -> str:
    return "".join(chunk.data for chunk in chunks)


def run_client(message: str, host: str, port: int, log: TextIO) -> str:
    """Send ``message`` to the server and return the message it sends back."""
    chunks = split_message(message)
    addr = (host, port)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(_encode(str(len(chunks))), addr)
        send_chunks(sock, addr, chunks, log)
        log.write("-" * 79 + "\n")
        reply = _join(receive_chunks(sock, len(chunks), log))
    log.write(f"Final message to server is:-  {reply}\n")
    return reply


def run_server(host: str, port: int, log: TextIO) -> str:
    """Receive one message from a client, send it back and return it."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind((host, port))
        data, client = sock.recvfrom(_BUFFER_SIZE)
        count = atoi(_decode(data))
        received = receive_chunks(sock, count, log)
        message = _join(received)
        log.write(f"Final message to server is:-  {message}\n")
        log.write("-" * 99 + "\n")
        send_chunks(sock, client, received, log)
    return message


def _parser(prog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=__doc__)
    parser.add_argument("--host", default=_DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=_DEFAULT_PORT)
    return parser


def client_main(argv: list[str] | None = None) -> int:
    """Read one line from standard input and send it to the server."""
    args = _parser("reliable-client").parse_args(argv)
    message = sys.stdin.readline().removesuffix("\n")
    try:
        run_client(message, args.host, args.port, sys.stdout)
    except (OSError, ValueError) as exc:
        sys.stderr.write(f"reliable-client: {exc}\n")
        return 1
    return 0


def server_main(argv: list[str] | None = None) -> int:
    """Serve one client."""
    args = _parser("reliable-server").parse_args(argv)
    try:
        run_server(args.host, args.port, sys.stdout)
    except (OSError, ValueError) as exc:
        sys.stderr.write(f"reliable-server: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(server_main())