import pytest

from stillstand.store import (
    DOWNTIMES_FILE,
    FAILURES_FILE,
    MACHINES_FILE,
    Database,
)


@pytest.fixture
def db(tmp_path):
    return Database(tmp_path)


@pytest.fixture
def populated(db):
    db.add_machine(1, "Press")
    db.add_machine(2, "Lathe")
    db.add_failure(10, "Overheat")
    db.add_failure(20, "Jam")
    return db


def test_machines_are_kept_newest_first(db):
    db.add_machine(1, "Press")
    db.add_machine(2, "Lathe")
    assert [m.code for m in db.machines] == [2, 1]


def test_find_machine_returns_newest_duplicate(db):
    db.add_machine(5, "Old")
    db.add_machine(5, "New")
    assert db.find_machine(5).name == "New"
    assert db.find_machine(99) is None


def test_names_are_truncated(db):
    machine = db.add_machine(1, "x" * 150)
    failure = db.add_failure(1, "y" * 300)
    assert len(machine.name) == 99
    assert len(failure.description) == 199


def test_delete_machine(db):
    db.add_machine(1, "Press")
    assert db.delete_machine(1) is True
    assert db.find_machine(1) is None
    assert db.delete_machine(1) is False


def test_delete_machine_blocked_by_downtime(populated):
    populated.add_downtime(1, 10, "8.00", "9.00")
    assert populated.delete_machine(1) is False
    assert populated.find_machine(1).name == "Press"


def test_delete_failure_blocked_by_downtime(populated):
    populated.add_downtime(1, 10, "8.00", "9.00")
    assert populated.delete_failure(10) is False
    assert populated.delete_failure(20) is True
    assert populated.find_failure(20) is None


def test_add_downtime_requires_existing_references(populated):
    assert populated.add_downtime(3, 10, "1", "2") is None
    assert populated.add_downtime(1, 30, "1", "2") is None
    assert populated.downtimes == []
    downtime = populated.add_downtime(2, 20, "10.50", "12.30")
    assert downtime.machine.name == "Lathe"
    assert downtime.failure.description == "Jam"
    assert populated.downtimes == [downtime]


def test_delete_downtime_removes_newest_of_machine(populated):
    populated.add_downtime(1, 10, "a", "b")
    populated.add_downtime(1, 20, "c", "d")
    assert populated.delete_downtime(1) is True
    assert [d.failure_code for d in populated.downtimes] == [10]
    assert populated.delete_downtime(2) is False


def test_clear_all(populated):
    populated.add_downtime(1, 10, "a", "b")
    populated.clear_downtimes()
    populated.clear_machines()
    populated.clear_failures()
    assert (populated.machines, populated.failures, populated.downtimes) == ([], [], [])


def test_save_machines_file_format(populated, tmp_path):
    populated.save_machines()
    text = (tmp_path / MACHINES_FILE).read_text(encoding="utf-8")
    assert text == "# Maschinencode;Name\n2;Lathe\n1;Press\n"
    reloaded = Database(tmp_path)
    assert reloaded.load_machines() == 2
    assert reloaded.find_machine(2).name == "Lathe"


def test_save_and_load_machines_reverses_order(populated, tmp_path):
    populated.save_machines()
    other = Database(tmp_path)
    assert other.load_machines() == 2
    assert [(m.code, m.name) for m in other.machines] == [(1, "Press"), (2, "Lathe")]


def test_load_missing_file_keeps_data(db):
    db.add_machine(1, "Press")
    db.add_failure(2, "Jam")
    assert db.load_machines() == 0
    assert db.load_failures() == 0
    assert db.load_downtimes() == 0
    assert db.find_machine(1).name == "Press"
    assert db.find_failure(2).description == "Jam"


def test_load_failures_round_trip(populated, tmp_path):
    populated.save_failures()
    other = Database(tmp_path)
    other.add_failure(99, "gone")
    other.load_failures()
    assert [(f.code, f.description) for f in other.failures] == [(10, "Overheat"), (20, "Jam")]


def test_load_stops_at_malformed_line(tmp_path):
    (tmp_path / MACHINES_FILE).write_text(
        "# header\n1;Press\n\nbroken\n3;Drill\n", encoding="utf-8"
    )
    db = Database(tmp_path)
    assert db.load_machines() == 1
    assert [m.code for m in db.machines] == [1]


def test_downtime_round_trip(populated, tmp_path):
    populated.add_downtime(1, 10, "10.50", "12.30")
    populated.save_downtimes()
    text = (tmp_path / DOWNTIMES_FILE).read_text(encoding="utf-8")
    assert text == "# MaschinenCode;FehlerCode;Startzeit;Endzeit\n1;10;10.50;12.30\n"
    populated.clear_downtimes()
    assert populated.load_downtimes() == 1
    restored = populated.downtimes[0]
    assert (restored.machine_code, restored.failure_code, restored.start, restored.end) == (
        1,
        10,
        "10.50",
        "12.30",
    )


def test_load_downtimes_drops_unknown_references(tmp_path):
    (tmp_path / DOWNTIMES_FILE).write_text(
        "# header\n1;10;a;b\n7;10;c;d\n", encoding="utf-8"
    )
    db = Database(tmp_path)
    db.add_machine(1, "Press")
    db.add_failure(10, "Overheat")
    assert db.load_downtimes() == 1
    assert [d.machine_code for d in db.downtimes] == [1]


def test_failures_file_header(populated, tmp_path):
    populated.save_failures()
    lines = (tmp_path / FAILURES_FILE).read_text(encoding="utf-8").splitlines()
    assert lines[0] == "# Fehlercode;Beschreibung"
    assert len(lines) == 3
    reloaded = Database(tmp_path)
    assert reloaded.load_failures() == 2
    assert reloaded.find_failure(10).description == "Overheat"


def test_empty_listings(db):
    assert db.machines_text() == "--- Maschinen ---\n\n(Keine Maschinen vorhanden)\n"
    assert db.failures_text() == "--- Fehler ---\n\n(Keine Fehler vorhanden)\n"
    assert db.downtimes_text() == "--- Stillstände ---\n\n(Keine Stillstände vorhanden)\n"


def test_machines_text_lists_entries(populated):
    text = populated.machines_text()
    assert text.startswith("--- Maschinen ---\n\n")
    assert text.index("Code: 2 | Name: Lathe\n") < text.index("Code: 1 | Name: Press\n")


def test_failures_text_lists_entries(populated):
    assert "Code: 10 | Beschreibung: Overheat\n" in populated.failures_text()


def test_downtimes_text_shows_names(populated):
    populated.add_downtime(1, 20, "8", "9")
    text = populated.downtimes_text()
    assert "Maschine: 1 (Press) | Fehler: 20 (Jam) | Start: 8 | Ende: 9\n" in text


def test_listing_respects_max_length(db):
    for code in range(50):
        db.add_machine(code, "m" * 50)
    text = db.machines_text(200)
    assert len(text) < 200
    assert text.startswith("--- Maschinen ---\n\n")
    assert "Keine" not in text