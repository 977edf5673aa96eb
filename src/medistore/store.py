"""SQLite-backed key-value store for record collections.

RecordStore keeps each collection as one JSON array under a well-known key:
- Schema initialization from schema.sql
- Whole-collection save/load (no partial updates, no cache)
- Typed helpers per collection returning model instances
- Idempotent demonstration-data seeding
"""

from __future__ import annotations

import json
import sqlite3
from datetime import date, datetime, timezone
from pathlib import Path

from medistore.models import (
    Appointment,
    HospitalBill,
    MedicineBill,
    Patient,
    Prescription,
    Report,
    User,
)

PATIENTS = "patients"
PRESCRIPTIONS = "prescriptions"
REPORTS = "reports"
MEDICINE_BILLS = "medicine_bills"
HOSPITAL_BILLS = "hospital_bills"
APPOINTMENTS = "appointments"
USER = "user"

# Collection key -> record type. The first five are seeded by initialize();
# appointments are seeded separately by the dashboard.
COLLECTIONS: dict[str, type] = {
    PATIENTS: Patient,
    PRESCRIPTIONS: Prescription,
    REPORTS: Report,
    MEDICINE_BILLS: MedicineBill,
    HOSPITAL_BILLS: HospitalBill,
    APPOINTMENTS: Appointment,
}

SEEDED_BY_INITIALIZE = (PATIENTS, PRESCRIPTIONS, REPORTS, MEDICINE_BILLS, HOSPITAL_BILLS)


class StorageError(Exception):
    """A collection could not be written, or its stored value could not be read."""

    def __init__(self, key: str, message: str):
        super().__init__(f"{key}: {message}")
        self.key = key


def _get_schema_sql() -> str:
    """Read the schema.sql file bundled with the package."""
    schema_path = Path(__file__).parent / "schema.sql"
    return schema_path.read_text()


def _to_plain(record):
    """Records may be model instances or already-plain dicts."""
    if isinstance(record, dict):
        return record
    return record.to_dict()


class RecordStore:
    """Local persistent store of typed record collections."""

    def __init__(self, db_path: str = "medistore.db"):
        self.db_path = db_path
        self.conn = sqlite3.connect(db_path)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")

    def init_schema(self) -> None:
        """Create the kv table (IF NOT EXISTS)."""
        self.conn.executescript(_get_schema_sql())

    # --- Raw values ---

    def _write(self, key: str, payload) -> None:
        try:
            text = json.dumps(payload)
        except (TypeError, ValueError) as e:
            raise StorageError(key, f"cannot serialize value: {e}") from e

        now = datetime.now(timezone.utc).isoformat()
        try:
            with self.conn:
                self.conn.execute(
                    "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                    "updated_at = excluded.updated_at",
                    (key, text, now),
                )
        except sqlite3.Error as e:
            raise StorageError(key, f"write rejected: {e}") from e

    def _read(self, key: str):
        """Return the decoded value at key, or None when the key is absent."""
        try:
            row = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise StorageError(key, f"read failed: {e}") from e
        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise StorageError(key, f"corrupt JSON: {e}") from e

    def save(self, key: str, records: list) -> None:
        """Serialize the whole collection and overwrite the value at key."""
        self._write(key, [_to_plain(r) for r in records])

    def load(self, key: str) -> list[dict]:
        """Load the collection at key as plain dicts. Absent key -> []."""
        value = self._read(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise StorageError(key, f"expected a JSON array, found {type(value).__name__}")
        return value

    def save_object(self, key: str, obj) -> None:
        self._write(key, _to_plain(obj))

    def load_object(self, key: str) -> dict | None:
        value = self._read(key)
        if value is not None and not isinstance(value, dict):
            raise StorageError(key, f"expected a JSON object, found {type(value).__name__}")
        return value

    def delete(self, key: str) -> bool:
        """Remove the value at key. Returns True if a row was deleted."""
        with self.conn:
            cursor = self.conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        return cursor.rowcount > 0

    def keys(self) -> list[str]:
        rows = self.conn.execute("SELECT key FROM kv ORDER BY key").fetchall()
        return [r["key"] for r in rows]

    # --- Typed collections ---

    def load_records(self, key: str) -> list:
        """Load a known collection as model instances."""
        record_type = COLLECTIONS[key]
        return [record_type.from_dict(item) for item in self.load(key)]

    def save_patients(self, patients: list[Patient]) -> None:
        self.save(PATIENTS, patients)

    def load_patients(self) -> list[Patient]:
        return self.load_records(PATIENTS)

    def save_prescriptions(self, prescriptions: list[Prescription]) -> None:
        self.save(PRESCRIPTIONS, prescriptions)

    def load_prescriptions(self) -> list[Prescription]:
        return self.load_records(PRESCRIPTIONS)

    def save_reports(self, reports: list[Report]) -> None:
        self.save(REPORTS, reports)

    def load_reports(self) -> list[Report]:
        return self.load_records(REPORTS)

    def save_medicine_bills(self, bills: list[MedicineBill]) -> None:
        self.save(MEDICINE_BILLS, bills)

    def load_medicine_bills(self) -> list[MedicineBill]:
        return self.load_records(MEDICINE_BILLS)

    def save_hospital_bills(self, bills: list[HospitalBill]) -> None:
        self.save(HOSPITAL_BILLS, bills)

    def load_hospital_bills(self) -> list[HospitalBill]:
        return self.load_records(HOSPITAL_BILLS)

    def save_appointments(self, appointments: list[Appointment]) -> None:
        self.save(APPOINTMENTS, appointments)

    def load_appointments(self) -> list[Appointment]:
        return self.load_records(APPOINTMENTS)

    def save_user(self, user: User) -> None:
        self.save_object(USER, user)

    def load_user(self) -> User | None:
        data = self.load_object(USER)
        return User.from_dict(data) if data is not None else None

    # --- Record lifecycle (read, change, write the whole collection) ---

    def add_record(self, key: str, record) -> None:
        """Append one record to the collection at key."""
        records = self.load(key)
        records.append(_to_plain(record))
        self.save(key, records)

    def replace_record(self, key: str, record) -> None:
        """Replace the record with the same id. Raises KeyError if it is absent."""
        new = _to_plain(record)
        records = self.load(key)
        found = False
        updated = []
        for existing in records:
            if existing.get("id") == new["id"]:
                updated.append(new)
                found = True
            else:
                updated.append(existing)
        if not found:
            raise KeyError(f"{key}: no record with id {new['id']!r}")
        self.save(key, updated)

    def remove_record(self, key: str, record_id: str) -> bool:
        """Filter the record out of its collection. Returns True if one was removed."""
        records = self.load(key)
        kept = [r for r in records if r.get("id") != record_id]
        if len(kept) == len(records):
            return False
        self.save(key, kept)
        return True

    def get_record(self, key: str, record_id: str):
        """Return the model instance with record_id, or None."""
        for record in self.load_records(key):
            if record.id == record_id:
                return record
        return None

    # --- Seeding ---

    def initialize(self, today: date | None = None) -> dict[str, int]:
        """Seed demonstration data into each empty record collection.

        A collection is seeded only when its stored length is exactly zero,
        so repeated calls never duplicate data. Returns records seeded per key.
        """
        from medistore.seed import load_seed_data

        seed = load_seed_data(today)
        seeded = {}
        for key in SEEDED_BY_INITIALIZE:
            if self.load(key):
                seeded[key] = 0
                continue
            self.save(key, seed[key])
            seeded[key] = len(seed[key])
        return seeded

    def summary(self) -> dict[str, int]:
        """Return record counts for every known collection."""
        return {key: len(self.load(key)) for key in COLLECTIONS}

    def close(self) -> None:
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
