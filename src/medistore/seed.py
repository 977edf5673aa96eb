"""Demonstration data for empty collections.

The records live in seed_data.yaml next to this module. Date fields may
hold the placeholders "today" or "tomorrow", resolved against the date
passed to load_seed_data() so seeded appointments and registrations line
up with the dashboard's notion of today.
"""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

try:
    import yaml
except ImportError as e:
    raise ImportError(
        "PyYAML is required for demonstration data. Install with: pip install pyyaml"
    ) from e

from medistore.models import (
    Appointment,
    HospitalBill,
    MedicineBill,
    Patient,
    Prescription,
    Report,
)

SEED_PATH = Path(__file__).parent / "seed_data.yaml"

_SEED_TYPES: dict[str, type] = {
    "patients": Patient,
    "prescriptions": Prescription,
    "reports": Report,
    "medicine_bills": MedicineBill,
    "hospital_bills": HospitalBill,
    "appointments": Appointment,
}


def _resolve_dates(value, placeholders: dict[str, str]):
    if isinstance(value, dict):
        return {k: _resolve_dates(v, placeholders) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_dates(v, placeholders) for v in value]
    if isinstance(value, str) and value in placeholders:
        return placeholders[value]
    return value


def load_seed_data(today: date | None = None, path: str | Path = SEED_PATH) -> dict[str, list]:
    """Parse the seed file into model instances keyed by collection name."""
    today = today or date.today()
    placeholders = {
        "today": today.isoformat(),
        "tomorrow": (today + timedelta(days=1)).isoformat(),
    }

    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    raw = _resolve_dates(raw, placeholders)

    return {
        key: [record_type.from_dict(item) for item in raw.get(key, [])]
        for key, record_type in _SEED_TYPES.items()
    }
