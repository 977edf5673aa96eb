"""Signed-in user and role-based visibility.

Authentication is a mock: any non-empty email and password succeed for a
valid role. The user is persisted under the "user" key and passed
explicitly to whatever needs role-based filtering.
"""

from __future__ import annotations

import secrets

from medistore.models import ROLES, User
from medistore.store import USER, RecordStore

# Demonstration identity per role
_ROLE_PROFILES = {
    "receptionist": {
        "name": "Priya Sharma",
        "phone": "+91 98765 43210",
        "address": "Mumbai, Maharashtra",
        "avatar": "https://images.pexels.com/photos/3823488/pexels-photo-3823488.jpeg?auto=compress&cs=tinysrgb&w=150&h=150&dpr=2",
    },
    "doctor": {
        "name": "Dr. Rajesh Kumar",
        "phone": "+91 87654 32109",
        "address": "Delhi, India",
        "avatar": "https://images.pexels.com/photos/5327921/pexels-photo-5327921.jpeg?auto=compress&cs=tinysrgb&w=150&h=150&dpr=2",
    },
    "patient": {
        "name": "Amit Patel",
        "phone": "+91 76543 21098",
        "address": "Pune, Maharashtra",
        "avatar": "https://images.pexels.com/photos/1239291/pexels-photo-1239291.jpeg?auto=compress&cs=tinysrgb&w=150&h=150&dpr=2",
    },
}


def login(store: RecordStore, email: str, password: str, role: str) -> User | None:
    """Sign in as the demonstration user for role. Returns None on empty credentials."""
    if role not in ROLES:
        raise ValueError(f"role must be one of {ROLES}, got {role!r}")
    if not email or not password:
        return None
    user = User(id=secrets.token_hex(5)[:9], email=email, role=role, **_ROLE_PROFILES[role])
    store.save_user(user)
    return user


def current_user(store: RecordStore) -> User | None:
    return store.load_user()


def update_user(store: RecordStore, **changes) -> User | None:
    """Merge changes into the stored user. No-op when nobody is signed in."""
    user = store.load_user()
    if user is None:
        return None
    for name, value in changes.items():
        if not hasattr(user, name):
            raise AttributeError(f"User has no field {name!r}")
        setattr(user, name, value)
    store.save_user(user)
    return user


def logout(store: RecordStore) -> None:
    store.delete(USER)


def _owner_name(record) -> str:
    owner = getattr(record, "patient_name", None)
    if owner is None:
        owner = getattr(record, "name", "")
    return owner


def visible_records(records: list, user: User) -> list:
    """Records the user may see: patients see their own, staff see everything."""
    if user.role == "patient":
        return [r for r in records if _owner_name(r) == user.name]
    return list(records)


def search_records(records: list, query: str, attrs: tuple[str, ...] = ("patient_name",)) -> list:
    """Case-insensitive substring match of query against any of attrs."""
    if not query:
        return list(records)
    q = query.lower()
    return [
        r for r in records
        if any(q in str(getattr(r, a, "") or "").lower() for a in attrs)
    ]


def can_view_patients(user: User) -> bool:
    return user.role in ("doctor", "receptionist")


def can_edit_patients(user: User) -> bool:
    return user.role == "receptionist"


def can_create_prescriptions(user: User) -> bool:
    return user.role == "doctor"


def can_upload_reports(user: User) -> bool:
    return user.role == "receptionist"


def can_edit_reports(user: User) -> bool:
    return user.role in ("receptionist", "doctor")


def can_create_bills(user: User) -> bool:
    return user.role in ("receptionist", "doctor")
