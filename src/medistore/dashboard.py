"""Dashboard statistics derived from the stored collections.

Aggregation never mutates the collections it reads. Read failures are
reported on stderr and produce a zeroed snapshot or an empty activity
list, so the dashboard can always render. Bad arguments still raise.
"""

from __future__ import annotations

import sys
from datetime import date

from medistore.models import Appointment, DashboardStats, Patient, Report, User
from medistore.store import APPOINTMENTS, RecordStore, StorageError

REGISTRATION_FIELDS = ("lastVisit", "createdAt")


def today_iso(today: date | None = None) -> str:
    """Current local calendar date as YYYY-MM-DD."""
    return (today or date.today()).isoformat()


def initialize_appointments(store: RecordStore, today: date | None = None) -> int:
    """Seed demonstration appointments if the collection is empty.

    Returns the number of appointments written (0 when already populated).
    """
    from medistore.seed import load_seed_data

    if store.load(APPOINTMENTS):
        return 0
    appointments = load_seed_data(today)[APPOINTMENTS]
    store.save_appointments(appointments)
    return len(appointments)


def count_today_appointments(appointments: list[Appointment], today: str) -> int:
    return sum(1 for a in appointments if a.date == today and a.status != "Cancelled")


def count_pending_reports(reports: list[Report]) -> int:
    return sum(1 for r in reports if (r.status or "").lower() == "pending")


def _check_registration_field(registration_field: str) -> None:
    if registration_field not in REGISTRATION_FIELDS:
        raise ValueError(
            f"registration_field must be one of {REGISTRATION_FIELDS}, got {registration_field!r}"
        )


def count_new_registrations(
    patients: list[Patient], today: str, registration_field: str = "lastVisit"
) -> int:
    """Count patients whose registration date field equals today.

    registration_field is the stored key to compare: "lastVisit" (the
    dashboard's historical proxy) or "createdAt".
    """
    _check_registration_field(registration_field)
    attr = "last_visit" if registration_field == "lastVisit" else "created_at"
    return sum(1 for p in patients if getattr(p, attr) == today)


def compute_stats(
    store: RecordStore,
    today: date | None = None,
    registration_field: str = "lastVisit",
) -> DashboardStats:
    """Compute the dashboard snapshot.

    Returns:
        DashboardStats with total_patients, today_appointments,
        pending_reports and new_registrations. All zero if any read fails.

    Raises:
        ValueError: registration_field is not one of REGISTRATION_FIELDS.
    """
    _check_registration_field(registration_field)
    day = today_iso(today)
    try:
        patients = store.load_patients()
        reports = store.load_reports()
        appointments = store.load_appointments()
        return DashboardStats(
            total_patients=len(patients),
            today_appointments=count_today_appointments(appointments, day),
            pending_reports=count_pending_reports(reports),
            new_registrations=count_new_registrations(patients, day, registration_field),
        )
    except (StorageError, TypeError, AttributeError) as e:
        print(f"Warning: could not calculate dashboard stats: {e}", file=sys.stderr)
        return DashboardStats()


def recent_activity(store: RecordStore, user: User | None = None, limit: int = 5) -> list[Appointment]:
    """Most recent appointments visible to user, newest first.

    Empty if the appointments collection cannot be read.
    """
    from medistore.session import visible_records

    try:
        appointments = store.load_appointments()
    except (StorageError, TypeError, AttributeError) as e:
        print(f"Warning: could not load recent activity: {e}", file=sys.stderr)
        return []
    if user is not None:
        appointments = visible_records(appointments, user)
    appointments.sort(key=lambda a: (a.date or "", a.created_at or "", a.id or ""), reverse=True)
    return appointments[:limit]
