# labtools

A collection of small command-line tools and socket exercises:

- Unix-style text utilities: a tiny `grep` (supporting only `^`, `.`, `*`
  and `$`), `wc`, `cat` and `echo`.
- File utilities: `ln`, `mkdir`, `rm` and `kill`.
- A parser for a minimal shell grammar with pipes (`|`), lists (`;`),
  background jobs (`&`), redirections (`<`, `>`, `>>`) and parenthesised
  blocks.
- Networking exercises over the loopback interface: TCP and UDP echo
  servers and clients, a two-player rock-paper-scissors referee with
  matching players, and a chunked message transfer over UDP with
  acknowledgements and retransmission.

The package needs nothing beyond the Python standard library and supports
Python 3.10 and later.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Text and file tools

```
lab-grep pattern [file ...]
lab-wc [file ...]
lab-cat [file ...]
lab-echo words to print
lab-ln old new
lab-mkdir dir ...
lab-rm file ...
lab-kill pid ...
```

`lab-grep`, `lab-wc` and `lab-cat` read standard input when no file is
given. `lab-grep` prints only lines that end in a newline. `lab-wc` prints
lines, words and bytes followed by the file name. `lab-mkdir` and `lab-rm`
stop at the first name they cannot handle; `lab-rm` removes files and empty
directories. `lab-kill` sends SIGKILL to each process id.

## Networking exercises

Start the server side first, then the client side in another terminal.
All commands take `--host` (default `127.0.0.1`).

- `lab-basic {tcp-server,tcp-client,udp-server,udp-client} [--port N]`
  runs a one-shot echo server or client. The client sends one line read
  from standard input and prints the reply. Default ports: 54321 for TCP,
  12346 for UDP.
- `lab-rps-server {tcp,udp} [--port-a N] [--port-b N]` referees
  rock-paper-scissors between two players, one on each port (player a on
  12345 for TCP or 12346 for UDP, player b on 54321).
- `lab-rps-client {tcp,udp} {a,b} [--port N]` is a player. Each round
  both players answer `yes` to start, then choose `rock`, `paper` or
  `scissor`, and each is told `Win`, `Lose` or `Draw`. Any answer other
  than `yes` ends the game.
- `lab-chunk-server [--port N]` and `lab-chunk-client [--port N]`
  (default port 12345) exchange one line of text split into 10-character
  chunks over UDP. Each chunk is acknowledged; chunks whose
  acknowledgement does not arrive within the waiting window are sent
  again. On its first pass the receiver withholds the acknowledgement of
  every third chunk, so retransmission always happens. Once the server has
  the whole message it sends it back the same way.

## Library use

```python
from labtools.grep import match
from labtools.fmt import format_message, atoi
from labtools.shell import parse_command, PipeCommand

match("^ab*c$", "abbbc")                   # True
match("x.z", "the xyz")                    # True
format_message("%d items: %s", 3, "done")  # "3 items: done"
atoi("42abc")                              # 42

cmd = parse_command("cat notes | lab-wc")
isinstance(cmd, PipeCommand)               # True
```

Other entry points:

- `labtools.wc.count` returns a `Counts` of lines, words and characters.
- `labtools.simple.cat` and `labtools.simple.echo`.
- `labtools.shell.tokenize`, the command classes `ExecCommand`,
  `RedirCommand`, `PipeCommand`, `ListCommand`, `BackCommand`, and
  `ParseError` for malformed lines.
- `labtools.basic.tcp_echo_server`, `tcp_client`, `udp_echo_server`,
  `udp_client`.
- `labtools.rps.judge`, `serve_tcp`, `serve_udp`;
  `labtools.rps_client.play_tcp`, `play_udp`.
- `labtools.chunks.split_message`, `now_ms`, the `DataChunk` and `Ack`
  packet types with their `pack` methods, and `decode_chunk` /
  `decode_ack`.
- `labtools.reliable.send_chunks`, `receive_chunks`, `run_client`,
  `run_server`.

## What it does not do

The shell module only parses command lines into a tree of commands; the
package has no interactive shell and does not run the commands it parses.
The servers handle a single client session and then exit.