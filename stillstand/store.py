"""In-memory catalogue of machines, failures and downtimes with text-file persistence."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Pattern, Tuple, Union

MESSAGE_LENGTH = 4096

MACHINES_FILE = "001 maschinen.txt"
FAILURES_FILE = "002 fehler.txt"
DOWNTIMES_FILE = "003 stillstand.txt"

MACHINES_HEADER = "# Maschinencode;Name\n"
FAILURES_HEADER = "# Fehlercode;Beschreibung\n"
DOWNTIMES_HEADER = "# MaschinenCode;FehlerCode;Startzeit;Endzeit\n"

NAME_LIMIT = 99
DESCRIPTION_LIMIT = 199
TIME_LIMIT = 19

_HEADER_LIMIT = 255

_MACHINE_RECORD = re.compile(r"\s*([+-]?\d+);([^\n]{1,%d})\s*" % NAME_LIMIT)
_FAILURE_RECORD = re.compile(r"\s*([+-]?\d+);([^\n]{1,%d})\s*" % DESCRIPTION_LIMIT)
_DOWNTIME_RECORD = re.compile(
    r"\s*([+-]?\d+);\s*([+-]?\d+);([^;]{1,%d});([^\n]{1,%d})\s*" % (TIME_LIMIT, TIME_LIMIT)
)


@dataclass
class Machine:
    """A machine in the machine catalogue."""

    code: int
    name: str


@dataclass
class Failure:
    """A failure type in the failure catalogue."""

    code: int
    description: str


@dataclass
class Downtime:
    """A recorded standstill of a machine caused by a failure."""

    machine_code: int
    failure_code: int
    start: str
    end: str
    machine: Optional[Machine] = None
    failure: Optional[Failure] = None


def _records(path: Path, pattern: Pattern[str]) -> Iterator[Tuple[str, ...]]:
    """Yield records after the header line until the first one that does not match."""
    text = path.read_text(encoding="utf-8")
    newline = text.find("\n", 0, _HEADER_LIMIT)
    pos = newline + 1 if newline != -1 else min(len(text), _HEADER_LIMIT)
    while (match := pattern.match(text, pos)) is not None:
        yield match.groups()
        pos = match.end()


def _listing(title: str, lines: Iterator[str], line_size: int, empty: str, max_length: int) -> str:
    text = title
    has_entries = False
    for line in lines:
        has_entries = True
        line = line[: line_size - 1]
        if len(text) + len(line) < max_length - 1:
            text += line
    if not has_entries:
        text += empty
    return text


class Database:
    """Machines, failures and downtimes, each kept newest first."""

    def __init__(self, directory: Union[str, Path] = ".") -> None:
        self.directory = Path(directory)
        self.machines: list[Machine] = []
        self.failures: list[Failure] = []
        self.downtimes: list[Downtime] = []

    @property
    def machines_path(self) -> Path:
        return self.directory / MACHINES_FILE

    @property
    def failures_path(self) -> Path:
        return self.directory / FAILURES_FILE

    @property
    def downtimes_path(self) -> Path:
        return self.directory / DOWNTIMES_FILE

    # ----- lookups -----

    def find_machine(self, code: int) -> Optional[Machine]:
        """Return the newest machine with this code, or None."""
        return next((m for m in self.machines if m.code == code), None)

    def find_failure(self, code: int) -> Optional[Failure]:
        """Return the newest failure with this code, or None."""
        return next((f for f in self.failures if f.code == code), None)

    # ----- machines -----

    def add_machine(self, code: int, name: str) -> Machine:
        """Add a machine at the front; the name is cut to 99 characters."""
        machine = Machine(code, name[:NAME_LIMIT])
        self.machines.insert(0, machine)
        return machine

    def delete_machine(self, code: int) -> bool:
        """Remove the newest machine with this code unless a downtime refers to it."""
        if any(d.machine_code == code for d in self.downtimes):
            return False
        machine = self.find_machine(code)
        if machine is None:
            return False
        self.machines.remove(machine)
        return True

    def clear_machines(self) -> None:
        self.machines.clear()

    def save_machines(self) -> None:
        with self.machines_path.open("w", encoding="utf-8") as handle:
            handle.write(MACHINES_HEADER)
            for machine in self.machines:
                handle.write(f"{machine.code};{machine.name}\n")

    def load_machines(self) -> int:
        """Replace the machines with those in the file; a missing file changes nothing."""
        try:
            records = list(_records(self.machines_path, _MACHINE_RECORD))
        except OSError:
            return 0
        self.clear_machines()
        for code, name in records:
            self.add_machine(int(code), name)
        return len(records)

    def machines_text(self, max_length: int = MESSAGE_LENGTH) -> str:
        return _listing(
            "--- Maschinen ---\n\n",
            (f"Code: {m.code} | Name: {m.name}\n" for m in self.machines),
            150,
            "(Keine Maschinen vorhanden)\n",
            max_length,
        )

    # ----- failures -----

    def add_failure(self, code: int, description: str) -> Failure:
        """Add a failure at the front; the description is cut to 199 characters."""
        failure = Failure(code, description[:DESCRIPTION_LIMIT])
        self.failures.insert(0, failure)
        return failure

    def delete_failure(self, code: int) -> bool:
        """Remove the newest failure with this code unless a downtime refers to it."""
        if any(d.failure_code == code for d in self.downtimes):
            return False
        failure = self.find_failure(code)
        if failure is None:
            return False
        self.failures.remove(failure)
        return True

    def clear_failures(self) -> None:
        self.failures.clear()

    def save_failures(self) -> None:
        with self.failures_path.open("w", encoding="utf-8") as handle:
            handle.write(FAILURES_HEADER)
            for failure in self.failures:
                handle.write(f"{failure.code};{failure.description}\n")

    def load_failures(self) -> int:
        """Replace the failures with those in the file; a missing file changes nothing."""
        try:
            records = list(_records(self.failures_path, _FAILURE_RECORD))
        except OSError:
            return 0
        self.clear_failures()
        for code, description in records:
            self.add_failure(int(code), description)
        return len(records)

    def failures_text(self, max_length: int = MESSAGE_LENGTH) -> str:
        return _listing(
            "--- Fehler ---\n\n",
            (f"Code: {f.code} | Beschreibung: {f.description}\n" for f in self.failures),
            200,
            "(Keine Fehler vorhanden)\n",
            max_length,
        )

    # ----- downtimes -----

    def add_downtime(
        self, machine_code: int, failure_code: int, start: str, end: str
    ) -> Optional[Downtime]:
        """Record a downtime if both the machine and the failure exist."""
        machine = self.find_machine(machine_code)
        failure = self.find_failure(failure_code)
        if machine is None or failure is None:
            return None
        downtime = Downtime(
            machine_code, failure_code, start[:TIME_LIMIT], end[:TIME_LIMIT], machine, failure
        )
        self.downtimes.insert(0, downtime)
        return downtime

    def delete_downtime(self, machine_code: int) -> bool:
        """Remove the newest downtime of this machine."""
        downtime = next((d for d in self.downtimes if d.machine_code == machine_code), None)
        if downtime is None:
            return False
        self.downtimes.remove(downtime)
        return True

    def clear_downtimes(self) -> None:
        self.downtimes.clear()

    def save_downtimes(self) -> None:
        with self.downtimes_path.open("w", encoding="utf-8") as handle:
            handle.write(DOWNTIMES_HEADER)
            for d in self.downtimes:
                handle.write(f"{d.machine_code};{d.failure_code};{d.start};{d.end}\n")

    def load_downtimes(self) -> int:
        """Replace the downtimes with those in the file whose machine and failure exist."""
        try:
            records = list(_records(self.downtimes_path, _DOWNTIME_RECORD))
        except OSError:
            return 0
        self.clear_downtimes()
        added = 0
        for machine_code, failure_code, start, end in records:
            if self.add_downtime(int(machine_code), int(failure_code), start, end) is not None:
                added += 1
        return added

    def downtimes_text(self, max_length: int = MESSAGE_LENGTH) -> str:
        return _listing(
            "--- Stillstände ---\n\n",
            (
                f"Maschine: {d.machine_code} ({d.machine.name if d.machine else '?'}) | "
                f"Fehler: {d.failure_code} ({d.failure.description if d.failure else '?'}) | "
                f"Start: {d.start} | Ende: {d.end}\n"
                for d in self.downtimes
            ),
            300,
            "(Keine Stillstände vorhanden)\n",
            max_length,
        )