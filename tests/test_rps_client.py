import io
import socket
import sys
import threading

import pytest

from labtools.rps_client import main, play_tcp, play_udp

FRAME = 1024


def _frame(text):
    return text.encode().ljust(FRAME, b"\0")


def _read(conn):
    buf = b""
    while len(buf) < FRAME:
        chunk = conn.recv(FRAME - len(buf))
        if not chunk:
            break
        buf += chunk
    return buf.split(b"\0", 1)[0].decode()


def _tcp_server(replies, received):
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    listener.settimeout(5)
    port = listener.getsockname()[1]

    def run():
        with listener:
            conn, _ = listener.accept()
            with conn:
                conn.settimeout(5)
                for reply in replies:
                    received.append(_read(conn))
                    conn.sendall(_frame(reply))
                if not replies:
                    received.append(_read(conn))

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return port, thread


def _udp_server(replies, received):
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5)
    port = sock.getsockname()[1]

    def run():
        with sock:
            for reply in replies:
                data, addr = sock.recvfrom(FRAME)
                received.append(data.split(b"\0", 1)[0].decode())
                sock.sendto(_frame(reply), addr)

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return port, thread


def test_tcp_plays_one_round():
    received = []
    port, thread = _tcp_server(["start", "Win", "end"], received)
    out = io.StringIO()
    results = play_tcp("127.0.0.1", port, io.StringIO("yes\nrock\nno\n"), out)
    thread.join(5)
    assert results == ["Win"]
    assert received == ["yes\n", "rock\n", "no\n"]
    assert "message from server:Win\n" in out.getvalue()
    assert out.getvalue().count("Let us start the game[yes/no] : ") == 2


def test_tcp_immediate_end():
    received = []
    port, thread = _tcp_server(["end"], received)
    out = io.StringIO()
    results = play_tcp("127.0.0.1", port, io.StringIO("no\n"), out)
    thread.join(5)
    assert results == []
    assert received == ["no\n"]
    assert "What do you choose" not in out.getvalue()


def test_tcp_server_closing_raises():
    received = []
    port, thread = _tcp_server([], received)
    with pytest.raises(ConnectionError):
        play_tcp("127.0.0.1", port, io.StringIO("yes\n"), io.StringIO())
    thread.join(5)
    assert received == ["yes\n"]


def test_udp_plays_two_rounds():
    received = []
    port, thread = _udp_server(["start", "Lose", "start", "Draw", "end"], received)
    out = io.StringIO()
    stdin = io.StringIO("yes\npaper\nyes\nrock\nno\n")
    results = play_udp("127.0.0.1", port, stdin, out)
    thread.join(5)
    assert results == ["Lose", "Draw"]
    assert received == ["yes\n", "paper\n", "yes\n", "rock\n", "no\n"]
    assert "message from server: Lose\n" in out.getvalue()
    assert "Let start the game[yes/no] : " in out.getvalue()


def test_main_tcp_with_fake_server(monkeypatch, capsys):
    received = []
    port, thread = _tcp_server(["start", "Draw", "end"], received)
    monkeypatch.setattr(sys, "stdin", io.StringIO("yes\nscissor\nno\n"))
    assert main(["tcp", "b", "--port", str(port)]) == 0
    thread.join(5)
    assert "message from server:Draw" in capsys.readouterr().out
    assert received[1] == "scissor\n"


def test_main_reports_refused_connection(capsys):
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    assert main(["tcp", "a", "--port", str(port)]) == 1
    assert "rps-client:" in capsys.readouterr().err