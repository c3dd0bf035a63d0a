"""Interactive menu client for the downtime database server."""

from __future__ import annotations

import argparse
import math
import re
import socket
import struct
from typing import Callable, Optional, Sequence

from .store import DESCRIPTION_LIMIT, MESSAGE_LENGTH, NAME_LIMIT

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 50000

_FIXED_REQUESTS = {
    "1.1": "LOAD_MACHINES",
    "1.4": "SAVE_MACHINES",
    "1.5": "DELETE_ALL_MACHINES",
    "1.6": "LIST_MACHINES",
    "2.1": "LOAD_FAILURES",
    "2.4": "SAVE_FAILURES",
    "2.5": "DELETE_ALL_FAILURES",
    "2.6": "LIST_FAILURES",
    "3.1": "LOAD",
    "3.4": "SAVE",
    "3.5": "DELETE_ALL",
    "3.6": "LISTE",
}

_INT = re.compile(r"\s*([+-]?[0-9]+)")
_FLOAT = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_SPECIAL_FLOAT = re.compile(r"\s*([+-]?(?:infinity|inf|nan))", re.IGNORECASE)


def menu_text() -> str:
    """Return the main menu, ending with the prompt for a choice."""
    return (
        "\n========= Please Load the files first to try all funtionalities=========\n"
        + "-" * 81
        + "\n========= Failures Data Base =========\n"
        "\n[1] Maschinen-Katalog    [2] Fehler-Katalog      [3] Stillstand-Verwaltung\n"
        " 1.1 Laden               2.1 Laden               3.1 Laden\n"
        " 1.2 Eingeben            2.2 Eingeben            3.2 Eingeben\n"
        " 1.3 Loeschen            2.3 Loeschen            3.3 Loeschen\n"
        " 1.4 Speichern           2.4 Speichern           3.4 Speichern\n"
        " 1.5 Alle loeschen       2.5 Alle loeschen       3.5 Alle loeschen\n"
        " 1.6 Anzeigen            2.6 Anzeigen            3.6 Anzeigen\n"
        "\n[4] Programm beenden\n"
        "Bitte geben Sie Ihre Auswahl ein (z.B. 1.2): "
    )


def _read_int(text: str) -> int:
    match = _INT.match(text)
    if match is None:
        raise ValueError(f"keine ganze Zahl: {text!r}")
    return int(match[1])


def _read_float(text: str) -> float:
    match = _FLOAT.match(text) or _SPECIAL_FLOAT.match(text)
    if match is None:
        raise ValueError(f"keine Zahl: {text!r}")
    value = float(match[1])
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def build_request(choice: str, ask: Callable[[str], str] = input) -> Optional[str]:
    """Turn a menu choice into a request, asking for any values it needs.

    Returns None for an unknown choice; raises ValueError for a malformed number.
    """
    key = choice[:3]
    if key in _FIXED_REQUESTS:
        return _FIXED_REQUESTS[key]
    if key == "1.2":
        code = _read_int(ask("Maschinencode: "))
        name = ask("Name: ")[:NAME_LIMIT]
        return f"ADD_MACHINE;{code};{name}"
    if key == "1.3":
        code = _read_int(ask("Maschinencode zum Loeschen: "))
        return f"DELETE_MACHINE;{code}"
    if key == "2.2":
        code = _read_int(ask("Fehlercode: "))
        description = ask("Beschreibung: ")[:DESCRIPTION_LIMIT]
        return f"ADD_FAILURE;{code};{description}"
    if key == "2.3":
        code = _read_int(ask("Fehlercode zum Loeschen: "))
        return f"DELETE_FAILURE;{code}"
    if key == "3.2":
        machine = _read_int(ask("MaschinenCode: "))
        failure = _read_int(ask("FehlerCode: "))
        start = _read_float(ask("Startzeit (z.B. 10.5): "))
        end = _read_float(ask("Endzeit (z.B. 12.3): "))
        return f"NEU;{machine};{failure};{start:.2f};{end:.2f}"
    if key == "3.3":
        machine = _read_int(ask("MaschinenCode zum Loeschen: "))
        return f"DELETE;{machine}"
    if choice.startswith("4"):
        return "ENDE"
    return None


def exchange(sock: socket.socket, message: str) -> str:
    """Send one request and return the server's reply."""
    sock.sendall(message.encode("utf-8"))
    data = sock.recv(MESSAGE_LENGTH)
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Menu client for the downtime database.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    try:
        sock = socket.create_connection((args.host, args.port))
    except OSError:
        print("Verbindungsaufbau Connect zum TCP Server hat nicht funktioniert")
        return 1
    print("Verbindungsaufbau Connect mit TCP Server erfolgreich")

    with sock:
        while True:
            print(menu_text(), end="", flush=True)
            try:
                choice = input()
                request = build_request(choice, input)
            except EOFError:
                break
            except ValueError:
                print("Ungueltige Auswahl!")
                continue
            if request is None:
                print("Ungueltige Auswahl!")
                continue
            if request == "ENDE":
                try:
                    sock.sendall(request.encode("utf-8"))
                except OSError:
                    pass
                break
            try:
                answer = exchange(sock, request)
            except OSError:
                print("Verbindung geschlossen")
                break
            print(f"Antwort vom Server: {answer}")
            try:
                input("Press enter to continue with other requirement...")
            except EOFError:
                break

    print("!!!!! Client sagt tschüss")
    return 0