# stillstand

A small in-memory database of production machines, failure types and
machine downtimes. A TCP server holds the data and answers text
requests. An interactive menu client sends those requests.

## Installation

```
pip install .
```

## Running

Start the server:

```
stillstand-server [--host HOST] [--port PORT] [--directory DIR]
```

By default it listens on `0.0.0.0` port `50000` and keeps its data files
in the current directory. It serves any number of clients at once.

In another terminal, start the client:

```
stillstand-client [--host HOST] [--port PORT]
```

By default it connects to `127.0.0.1:50000`. The client shows a menu.
Type the number of an action, for example `1.2` to add a machine, and
answer the prompts. The server's reply is printed after each request.
Choosing `4` sends `ENDE`, which stops the server, and ends the client.

| Area      | Load | Add | Delete | Save | Delete all | Show |
|-----------|------|-----|--------|------|------------|------|
| Machines  | 1.1  | 1.2 | 1.3    | 1.4  | 1.5        | 1.6  |
| Failures  | 2.1  | 2.2 | 2.3    | 2.4  | 2.5        | 2.6  |
| Downtimes | 3.1  | 3.2 | 3.3    | 3.4  | 3.5        | 3.6  |

For a downtime the client asks for the start and end time as numbers and
sends them with two decimals.

## Data rules and files

- Every list is kept newest first; new entries go to the front.
- Names are cut to 99 characters, descriptions to 199, times to 19.
- A downtime is only added when both its machine and its failure exist.
- A machine or failure is not deleted while a downtime refers to it.
- Deleting removes only the newest entry with the given code.

Data lives in memory and is only written or read on request, as three
semicolon-separated UTF-8 text files, each with a header line:
`001 maschinen.txt`, `002 fehler.txt` and `003 stillstand.txt`.
Loading a missing file leaves the data as it is; loading downtimes skips
those whose machine or failure is not loaded.

## Wire protocol

Each request is one text message and gets one text reply. `ENDE` is
answered with `Server beendet.` and then stops the server.

```
ADD_MACHINE;<code>;<name>          DELETE_MACHINE;<code>
ADD_FAILURE;<code>;<description>   DELETE_FAILURE;<code>
NEU;<machine>;<failure>;<start>;<end>
DELETE;<machine>
LOAD_MACHINES  SAVE_MACHINES  DELETE_ALL_MACHINES  LIST_MACHINES
LOAD_FAILURES  SAVE_FAILURES  DELETE_ALL_FAILURES  LIST_FAILURES
LOAD           SAVE           DELETE_ALL           LISTE
ENDE
```

A request is matched by the first command it starts with, in the order
the server checks them; unknown requests get `Unbekannter Befehl.`. A
name or description sent over the wire ends at its first backslash or
lowercase `n`. Apart from a malformed `NEU`, requests are acknowledged
with the same text whether or not they changed anything.

## Using the library

```python
from stillstand.store import Database
from stillstand.protocol import handle_message

db = Database(".")
db.add_machine(1, "Press")
db.add_failure(7, "Hydraulic leak")
db.add_downtime(1, 7, "10.50", "12.30")
print(db.downtimes_text(4096))

reply = handle_message(db, "LIST_MACHINES")
print(reply.text, reply.stop)
```

`Database` also has `find_machine`, `find_failure`, the `delete_*`,
`clear_*`, `save_*` and `load_*` methods for each list, and
`machines_text` / `failures_text` / `downtimes_text`, which leave out
lines that would not fit in the given length. `stillstand.server.serve`
runs the server in-process; `stillstand.client.build_request` and
`exchange` build and send single requests.

## What it does not do

There is no automatic saving, no authentication and no encryption: data
not saved with a save request is lost when the server stops, and anyone
who can reach the port can change or stop the server.

## Tests

```
pip install .[test]
pytest
```