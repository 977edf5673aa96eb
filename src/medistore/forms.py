"""Helpers for building records from screen form input.

Everything here runs at the UI boundary: presence checks, id and date
stamping, comma-separated text fields, and total recomputation. The
store itself performs no validation.
"""

from __future__ import annotations

import time
from datetime import date

from medistore.models import (
    Appointment,
    BillService,
    HospitalBill,
    Medication,
    MedicineBill,
    MedicineItem,
    Patient,
    Prescription,
    Report,
)
from medistore.store import HOSPITAL_BILLS, MEDICINE_BILLS, RecordStore


class ValidationError(ValueError):
    """Required form fields were left empty."""

    def __init__(self, missing: list[str]):
        super().__init__(f"Please fill in all required fields: {', '.join(missing)}")
        self.missing = missing


def new_id(now: float | None = None) -> str:
    """Record id from the creation timestamp in milliseconds."""
    if now is None:
        now = time.time()
    return str(int(now * 1000))


def require_fields(data: dict, names: list[str]) -> None:
    missing = []
    for name in names:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    if missing:
        raise ValidationError(missing)


def parse_allergies(text: str | None) -> list[str]:
    """Split a comma-separated text field into allergy names."""
    if not text:
        return []
    return [a.strip() for a in text.split(",") if a.strip()]


def format_allergies(allergies: list[str] | None) -> str:
    return ", ".join(allergies or [])


def format_file_size(size_bytes: int) -> str:
    """Human-readable size in megabytes, one decimal: 2411724 -> "2.3 MB"."""
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def build_patient(data: dict, today: date | None = None) -> Patient:
    """New patient from form fields; allergies arrive as comma-separated text."""
    require_fields(data, ["name", "age", "phone"])
    day = (today or date.today()).isoformat()
    return Patient(
        id=data.get("id") or new_id(),
        name=data["name"].strip(),
        age=int(data["age"]),
        gender=data.get("gender") or "Male",
        phone=data["phone"].strip(),
        email=data.get("email", ""),
        address=data.get("address", ""),
        condition=data.get("condition", ""),
        last_visit=day,
        avatar=data.get("avatar", ""),
        blood_group=data.get("blood_group") or None,
        emergency_contact=data.get("emergency_contact") or None,
        allergies=parse_allergies(data.get("allergies")),
        created_at=day,
    )


def build_prescription(data: dict, doctor_name: str, today: date | None = None) -> Prescription:
    require_fields(data, ["patient_name"])
    medications = [
        Medication(**m) for m in data.get("medications", []) if m.get("name")
    ]
    if not medications:
        raise ValidationError(["medications"])
    return Prescription(
        id=new_id(),
        patient_name=data["patient_name"],
        doctor_name=doctor_name,
        date=(today or date.today()).isoformat(),
        medications=medications,
        notes=data.get("notes", ""),
        status="Active",
    )


def build_report(
    data: dict, picked_file: dict, uploaded_by: str, today: date | None = None
) -> Report:
    """Report metadata from form fields and a picked file {name, size, uri}."""
    require_fields(data, ["patient_name", "report_type"])
    if not picked_file:
        raise ValidationError(["file"])
    return Report(
        id=new_id(),
        patient_name=data["patient_name"],
        report_type=data["report_type"],
        file_name=picked_file["name"],
        upload_date=(today or date.today()).isoformat(),
        uploaded_by=uploaded_by,
        file_size=format_file_size(picked_file.get("size") or 0),
        status="Pending",
        file_uri=picked_file.get("uri"),
    )


def build_medicine_bill(data: dict, today: date | None = None) -> MedicineBill:
    require_fields(data, ["patient_name", "pharmacy_name"])
    items = [
        MedicineItem(
            name=m["name"],
            quantity=int(m.get("quantity", 0)),
            unit_price=float(m.get("unit_price", 0)),
        )
        for m in data.get("medicines", [])
        if m.get("name")
    ]
    if not items:
        raise ValidationError(["medicines"])
    bill = MedicineBill(
        id=new_id(),
        patient_name=data["patient_name"],
        medicines=items,
        date=(today or date.today()).isoformat(),
        status=data.get("status") or "Pending",
        pharmacy_name=data["pharmacy_name"],
    )
    return bill.recompute()


def build_hospital_bill(data: dict, today: date | None = None) -> HospitalBill:
    require_fields(data, ["patient_name"])
    services = [
        BillService(
            type=s.get("type") or "Other",
            description=s.get("description", ""),
            amount=float(s.get("amount", 0)),
        )
        for s in data.get("services", [])
        if s.get("description")
    ]
    if not services:
        raise ValidationError(["services"])
    bill = HospitalBill(
        id=new_id(),
        patient_name=data["patient_name"],
        services=services,
        doctor_fees=float(data.get("doctor_fees", 0)),
        date=(today or date.today()).isoformat(),
        status=data.get("status") or "Pending",
        admission_date=data.get("admission_date") or None,
        discharge_date=data.get("discharge_date") or None,
    )
    return bill.recompute()


def build_appointment(data: dict, today: date | None = None) -> Appointment:
    require_fields(data, ["patient_id", "patient_name", "doctor_name", "date", "time"])
    return Appointment(
        id=new_id(),
        patient_id=data["patient_id"],
        patient_name=data["patient_name"],
        doctor_name=data["doctor_name"],
        date=data["date"],
        time=data["time"],
        type=data.get("type") or "Consultation",
        status="Scheduled",
        created_at=(today or date.today()).isoformat(),
    )


def update_medicine_bill(store: RecordStore, bill: MedicineBill) -> MedicineBill:
    """Recompute totals and write the edited bill back to its collection."""
    bill.recompute()
    store.replace_record(MEDICINE_BILLS, bill)
    return bill


def update_hospital_bill(store: RecordStore, bill: HospitalBill) -> HospitalBill:
    bill.recompute()
    store.replace_record(HOSPITAL_BILLS, bill)
    return bill
