"""TCP server that keeps the downtime database and answers client requests."""

from __future__ import annotations

import argparse
import selectors
import socket
from typing import Callable, Optional, Sequence

from .protocol import handle_message
from .store import MESSAGE_LENGTH, Database

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 50000


def _decode(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def serve(
    database: Database,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    ready: Optional[Callable[[tuple], object]] = None,
) -> None:
    """Answer requests from any number of clients until one of them sends ENDE.

    ``ready`` is called with the bound address once the server listens.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener, \
            selectors.DefaultSelector() as selector:
        listener.bind((host, port))
        listener.listen()
        selector.register(listener, selectors.EVENT_READ)
        if ready is not None:
            ready(listener.getsockname())
        running = True
        try:
            while running:
                for key, _ in selector.select():
                    conn = key.fileobj
                    if conn is listener:
                        client, _ = listener.accept()
                        selector.register(client, selectors.EVENT_READ)
                        continue
                    try:
                        data = conn.recv(MESSAGE_LENGTH)
                    except OSError:
                        data = b""
                    if not data:
                        selector.unregister(conn)
                        conn.close()
                        continue
                    reply = handle_message(database, _decode(data))
                    if reply.stop:
                        running = False
                    try:
                        conn.sendall(reply.text.encode("utf-8"))
                    except OSError:
                        pass
        finally:
            for key in list(selector.get_map().values()):
                selector.unregister(key.fileobj)
                if key.fileobj is not listener:
                    key.fileobj.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Downtime database server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--directory", default=".", help="where the data files are kept")
    args = parser.parse_args(argv)

    database = Database(args.directory)
    try:
        serve(
            database,
            args.host,
            args.port,
            lambda address: print("Server gestartet - Server steht bereit ...", flush=True),
        )
    except OSError as exc:
        print(f"Server konnte nicht gestartet werden: {exc}")
        return 1
    return 0