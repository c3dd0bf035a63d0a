"""Interpretation of the semicolon-separated requests the database server accepts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Match, Optional, Pattern

from .store import DESCRIPTION_LIMIT, MESSAGE_LENGTH, NAME_LIMIT, TIME_LIMIT, Database

_INT = r"\s*([+-]?[0-9]+)"

# Names and descriptions end at the first backslash or lowercase "n",
# as the wire format's field pattern has always excluded both characters.
_ADD_MACHINE = re.compile(r"ADD_MACHINE;%s;([^\\n]{1,%d})" % (_INT, NAME_LIMIT))
_DELETE_MACHINE = re.compile(r"DELETE_MACHINE;" + _INT)
_ADD_FAILURE = re.compile(r"ADD_FAILURE;%s;([^\\n]{1,%d})" % (_INT, DESCRIPTION_LIMIT))
_DELETE_FAILURE = re.compile(r"DELETE_FAILURE;" + _INT)
_NEW_DOWNTIME = re.compile(
    r"NEU;%s;%s;([^;]{1,%d});([^\n]{1,%d})" % (_INT, _INT, TIME_LIMIT, TIME_LIMIT)
)
_DELETE_DOWNTIME = re.compile(r"DELETE;" + _INT)


@dataclass(frozen=True)
class Reply:
    """The text sent back for a request, and whether the server should stop."""

    text: str
    stop: bool = False


_Handler = Callable[[Database, str], Reply]


def _parsed(pattern: Pattern[str], message: str) -> Optional[Match[str]]:
    return pattern.match(message)


def _simple(action: Callable[[Database], object], text: str) -> _Handler:
    def handler(database: Database, message: str) -> Reply:
        action(database)
        return Reply(text)

    return handler


def _listing(render: Callable[[Database, int], str]) -> _Handler:
    def handler(database: Database, message: str) -> Reply:
        return Reply(render(database, MESSAGE_LENGTH))

    return handler


def _add_machine(database: Database, message: str) -> Reply:
    match = _parsed(_ADD_MACHINE, message)
    if match:
        database.add_machine(int(match[1]), match[2])
    return Reply("Maschine hinzugefuegt.")


def _delete_machine(database: Database, message: str) -> Reply:
    match = _parsed(_DELETE_MACHINE, message)
    if match:
        database.delete_machine(int(match[1]))
    return Reply("Maschine geloescht.")


def _add_failure(database: Database, message: str) -> Reply:
    match = _parsed(_ADD_FAILURE, message)
    if match:
        database.add_failure(int(match[1]), match[2])
    return Reply("Fehler hinzugefuegt.")


def _delete_failure(database: Database, message: str) -> Reply:
    match = _parsed(_DELETE_FAILURE, message)
    if match:
        database.delete_failure(int(match[1]))
    return Reply("Fehler geloescht.")


def _new_downtime(database: Database, message: str) -> Reply:
    match = _parsed(_NEW_DOWNTIME, message)
    if match is None:
        return Reply("FEHLER: Ungültiges Format für Stillstand.")
    database.add_downtime(int(match[1]), int(match[2]), match[3], match[4])
    return Reply("Stillstand gespeichert.")


def _delete_downtime(database: Database, message: str) -> Reply:
    match = _parsed(_DELETE_DOWNTIME, message)
    if match:
        database.delete_downtime(int(match[1]))
    return Reply("Eintrag geloescht.")


def _end(database: Database, message: str) -> Reply:
    return Reply("Server beendet.", stop=True)


# Checked in this order; the first command the message starts with wins.
_COMMANDS: list[tuple[str, _Handler]] = [
    ("ADD_MACHINE", _add_machine),
    ("DELETE_MACHINE", _delete_machine),
    ("DELETE_ALL_MACHINES", _simple(Database.clear_machines, "Alle Maschinen gehen weg, asu casa.")),
    ("SAVE_MACHINES", _simple(Database.save_machines, "Maschinen gespeichert.")),
    ("LOAD_MACHINES", _simple(Database.load_machines, "Maschinen geladen.")),
    ("ADD_FAILURE", _add_failure),
    ("DELETE_FAILURE", _delete_failure),
    ("DELETE_ALL_FAILURES", _simple(Database.clear_failures, "Alle Fehler geloescht.")),
    ("SAVE_FAILURES", _simple(Database.save_failures, "Fehler gespeichert.")),
    ("LOAD_FAILURES", _simple(Database.load_failures, "Fehler geladen.")),
    ("NEU", _new_downtime),
    ("DELETE_ALL", _simple(Database.clear_downtimes, "Alle Stillstaende geloescht.")),
    ("DELETE", _delete_downtime),
    ("SAVE", _simple(Database.save_downtimes, "Gespeichert.")),
    ("LOAD", _simple(Database.load_downtimes, "Geladen.")),
    ("ENDE", _end),
    ("LIST_MACHINES", _listing(Database.machines_text)),
    ("LIST_FAILURES", _listing(Database.failures_text)),
    ("LISTE", _listing(Database.downtimes_text)),
]


def handle_message(database: Database, message: str) -> Reply:
    """Apply one request to the database and return the reply for the client."""
    for prefix, handler in _COMMANDS:
        if message.startswith(prefix):
            return handler(database, message)
    return Reply("Unbekannter Befehl.")