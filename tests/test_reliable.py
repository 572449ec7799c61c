import io
import socket
import sys
import threading
import time

import pytest

from labtools.chunks import DataChunk, decode_ack, now_ms, split_message
from labtools.reliable import (
    client_main,
    receive_chunks,
    run_client,
    run_server,
    send_chunks,
)

HOST = "127.0.0.1"


def _udp_socket():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind((HOST, 0))
    return sock


def _free_port():
    with _udp_socket() as sock:
        return sock.getsockname()[1]


def _start(target, *args):
    result = {}

    def runner():
        try:
            result["value"] = target(*args)
        except Exception as exc:  # noqa: BLE001
            result["error"] = exc

    thread = threading.Thread(target=runner, daemon=True)
    thread.start()
    return thread, result


def _transfer(message):
    sender_log, receiver_log = io.StringIO(), io.StringIO()
    chunks = split_message(message)
    with _udp_socket() as receiver, _udp_socket() as sender:
        receiver.settimeout(15)
        thread, result = _start(
            send_chunks, sender, receiver.getsockname(), chunks, sender_log
        )
        received = receive_chunks(receiver, len(chunks), receiver_log)
        thread.join(15)
    return chunks, received, result, sender_log.getvalue(), receiver_log.getvalue()


def test_short_transfer_arrives_in_order():
    message = "hello world, again"
    chunks, received, result, _, _ = _transfer(message)
    assert "".join(c.data for c in received) == message
    assert [c.number for c in received] == [c.number for c in chunks]
    assert result["value"] >= len(chunks)


def test_withheld_ack_is_resent():
    message = "the quick brown fox jumps over it!!"
    chunks, received, result, sender_log, receiver_log = _transfer(message)
    assert len(chunks) == 4
    assert "".join(c.data for c in received) == message
    assert result["value"] > len(chunks)
    assert "Received ackchunk with ack number: 3\n" in sender_log
    assert receiver_log.count("Received chunk with seq number: 3\n") >= 2


def test_receive_ignores_garbage_and_acks():
    log = io.StringIO()
    with _udp_socket() as receiver, _udp_socket() as sender:
        receiver.settimeout(5)
        sender.settimeout(5)
        target = receiver.getsockname()
        sender.sendto(b"xx", target)
        sender.sendto(DataChunk("abc", 0, now_ms()).pack(), target)
        received = receive_chunks(receiver, 1, log)
        ack = decode_ack(sender.recvfrom(1024)[0])
    assert [c.data for c in received] == ["abc"]
    assert ack.number == 0
    assert "Message from client with seq number 0 is abc\n" in log.getvalue()


def test_receive_ignores_out_of_range_number():
    with _udp_socket() as receiver, _udp_socket() as sender:
        receiver.settimeout(5)
        target = receiver.getsockname()
        sender.sendto(DataChunk("bad", 7, now_ms()).pack(), target)
        sender.sendto(DataChunk("ok", 0, now_ms()).pack(), target)
        received = receive_chunks(receiver, 1, io.StringIO())
    assert [(c.number, c.data) for c in received] == [(0, "ok")]


def test_receive_negative_count():
    with _udp_socket() as receiver:
        with pytest.raises(ValueError):
            receive_chunks(receiver, -1, io.StringIO())


def test_receive_zero_count():
    with _udp_socket() as receiver:
        assert receive_chunks(receiver, 0, io.StringIO()) == []


def test_send_restores_timeout():
    with _udp_socket() as receiver, _udp_socket() as sender:
        receiver.settimeout(10)
        sender.settimeout(7.5)
        chunks = split_message("abc")
        thread, _ = _start(receive_chunks, receiver, len(chunks), io.StringIO())
        send_chunks(sender, receiver.getsockname(), chunks, io.StringIO())
        thread.join(10)
        assert sender.gettimeout() == 7.5


def _upper_server(sock):
    data, client = sock.recvfrom(1024)
    count = int(data.split(b"\0", 1)[0])
    received = receive_chunks(sock, count, io.StringIO())
    reply = [DataChunk(c.data.upper(), c.number) for c in received]
    send_chunks(sock, client, reply, io.StringIO())
    return "".join(c.data for c in received)


def test_run_client_returns_server_reply():
    log = io.StringIO()
    with _udp_socket() as server:
        server.settimeout(15)
        thread, result = _start(_upper_server, server)
        reply = run_client("hello there", HOST, server.getsockname()[1], log)
        thread.join(15)
    assert reply == "HELLO THERE"
    assert result["value"] == "hello there"
    assert "Final message to server is:-  HELLO THERE\n" in log.getvalue()


def test_run_server_round_trip():
    port = _free_port()
    server_log, client_log = io.StringIO(), io.StringIO()
    thread, result = _start(run_server, HOST, port, server_log)
    time.sleep(0.3)
    reply = run_client("round trip", HOST, port, client_log)
    thread.join(15)
    assert reply == "round trip"
    assert result["value"] == "round trip"
    assert "Final message to server is:-  round trip\n" in server_log.getvalue()


def test_client_main(monkeypatch, capsys):
    port = _free_port()
    thread, result = _start(run_server, HOST, port, io.StringIO())
    time.sleep(0.3)
    monkeypatch.setattr(sys, "stdin", io.StringIO("hi\n"))
    code = client_main(["--port", str(port)])
    thread.join(15)
    assert code == 0
    assert result["value"] == "hi"
    assert "Final message to server is:-  hi\n" in capsys.readouterr().out