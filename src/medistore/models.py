"""Record types for the hospital data layer.

Each dataclass maps 1:1 to an element of one stored JSON collection.
Attributes are snake_case; the stored JSON uses the camelCase keys the
front-end screens read, so every type carries to_dict()/from_dict().
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields

ROLES = ("receptionist", "doctor", "patient")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _money(value: float) -> float:
    return round(float(value), 2)


class _Record:
    """Shared camelCase (de)serialization for the dataclasses below.

    Optional fields left as None are omitted from the output. Nested
    record lists are declared in _NESTED as attr -> element type.
    """

    _NESTED: dict[str, type] = {}

    def to_dict(self) -> dict:
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name in self._NESTED:
                value = [item.to_dict() for item in value]
            elif isinstance(value, list):
                value = list(value)
            out[_camel(f.name)] = value
        return out

    @classmethod
    def from_dict(cls, data: dict):
        kwargs = {}
        for f in fields(cls):
            key = _camel(f.name)
            if key not in data:
                continue
            value = data[key]
            nested = cls._NESTED.get(f.name)
            if nested is not None and value is not None:
                value = [nested.from_dict(item) for item in value]
            kwargs[f.name] = value
        return cls(**kwargs)


@dataclass
class Patient(_Record):
    """Patient demographics and clinical summary."""

    id: str
    name: str = ""
    age: int = 0
    gender: str = "Male"  # Male, Female, Other
    phone: str = ""
    email: str = ""
    address: str = ""
    condition: str = ""
    last_visit: str = ""  # ISO YYYY-MM-DD
    avatar: str = ""
    blood_group: str | None = None
    emergency_contact: str | None = None
    allergies: list[str] = field(default_factory=list)
    created_at: str | None = None  # ISO YYYY-MM-DD

    def __post_init__(self):
        # Older data stored allergies as one comma-joined string
        if self.allergies is None:
            self.allergies = []
        elif isinstance(self.allergies, str):
            self.allergies = [a.strip() for a in self.allergies.split(",") if a.strip()]


@dataclass
class Medication(_Record):
    """One line of a prescription."""

    name: str = ""
    dosage: str = ""
    frequency: str = ""
    duration: str = ""


@dataclass
class Prescription(_Record):
    id: str
    patient_name: str = ""
    doctor_name: str = ""
    date: str = ""
    medications: list[Medication] = field(default_factory=list)
    notes: str = ""
    status: str = "Active"  # Active, Completed, Expired

    _NESTED = {"medications": Medication}


@dataclass
class Report(_Record):
    """Metadata for an uploaded lab or imaging report. File contents are never read."""

    id: str
    patient_name: str = ""
    report_type: str = ""
    file_name: str = ""
    upload_date: str = ""
    uploaded_by: str = ""
    file_size: str = ""  # human-readable, e.g. "2.3 MB"
    status: str = "Pending"
    file_uri: str | None = None


@dataclass
class MedicineItem(_Record):
    name: str = ""
    quantity: int = 0
    unit_price: float = 0.0
    total: float = 0.0


@dataclass
class MedicineBill(_Record):
    id: str
    patient_name: str = ""
    medicines: list[MedicineItem] = field(default_factory=list)
    total_amount: float = 0.0
    date: str = ""
    status: str = "Pending"
    pharmacy_name: str = ""

    _NESTED = {"medicines": MedicineItem}

    def recompute(self) -> MedicineBill:
        """Recompute line totals and total_amount from quantity * unit_price."""
        for item in self.medicines:
            item.total = _money(item.quantity * item.unit_price)
        self.total_amount = _money(sum(item.total for item in self.medicines))
        return self


@dataclass
class BillService(_Record):
    type: str = "Other"  # Consultation, Radiology, Laboratory, Surgery, Room Charges, Other
    description: str = ""
    amount: float = 0.0


@dataclass
class HospitalBill(_Record):
    id: str
    patient_name: str = ""
    services: list[BillService] = field(default_factory=list)
    doctor_fees: float = 0.0
    total_amount: float = 0.0
    date: str = ""
    status: str = "Pending"
    admission_date: str | None = None
    discharge_date: str | None = None

    _NESTED = {"services": BillService}

    def recompute(self) -> HospitalBill:
        """Set total_amount to the sum of service amounts plus doctor fees."""
        self.total_amount = _money(sum(s.amount for s in self.services) + self.doctor_fees)
        return self


@dataclass
class Appointment(_Record):
    id: str
    patient_id: str = ""  # not checked against the patients collection
    patient_name: str = ""
    doctor_name: str = ""
    date: str = ""  # ISO YYYY-MM-DD
    time: str = ""  # display time, e.g. "10:00 AM"
    type: str = "Consultation"  # Consultation, Follow-up, Emergency
    status: str = "Scheduled"  # Scheduled, Completed, Cancelled
    created_at: str = ""


@dataclass
class User(_Record):
    """The signed-in user, as written by the session layer."""

    id: str
    name: str = ""
    email: str = ""
    role: str = "patient"
    avatar: str | None = None
    phone: str | None = None
    address: str | None = None


@dataclass
class DashboardStats:
    total_patients: int = 0
    today_appointments: int = 0
    pending_reports: int = 0
    new_registrations: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalPatients": self.total_patients,
            "todayAppointments": self.today_appointments,
            "pendingReports": self.pending_reports,
            "newRegistrations": self.new_registrations,
        }
