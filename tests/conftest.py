"""Shared test fixtures for medistore tests."""

from datetime import date

import pytest

from medistore.models import (
    Appointment,
    MedicineBill,
    MedicineItem,
    Patient,
    Report,
)
from medistore.store import RecordStore

TODAY = date(2025, 3, 14)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def tmp_store(tmp_path):
    """Create a temporary SQLite store with schema initialized."""
    store = RecordStore(str(tmp_path / "test.db"))
    store.init_schema()
    yield store
    store.close()


@pytest.fixture
def seeded_store(tmp_store):
    """Store with demonstration data seeded as of TODAY."""
    from medistore.dashboard import initialize_appointments

    tmp_store.initialize(today=TODAY)
    initialize_appointments(tmp_store, today=TODAY)
    return tmp_store


@pytest.fixture
def sample_patients():
    return [
        Patient(
            id="100",
            name="Meera Iyer",
            age=51,
            gender="Female",
            phone="+91 99887 76655",
            condition="Arthritis",
            last_visit="2025-03-14",
            allergies=["Sulfa"],
            created_at="2025-02-01",
        ),
        Patient(
            id="101",
            name="Vikram Singh",
            age=39,
            gender="Male",
            phone="+91 91234 56789",
            condition="Migraine",
            last_visit="2025-03-01",
            created_at="2025-03-14",
        ),
    ]


@pytest.fixture
def sample_reports():
    return [
        Report(id="1", patient_name="Meera Iyer", report_type="MRI", status="Pending"),
        Report(id="2", patient_name="Meera Iyer", report_type="CBC", status="pending"),
        Report(id="3", patient_name="Vikram Singh", report_type="ECG", status="Reviewed"),
        Report(id="4", patient_name="Vikram Singh", report_type="X-Ray", status="Archived"),
    ]


@pytest.fixture
def sample_appointments():
    return [
        Appointment(id="1", patient_id="100", patient_name="Meera Iyer",
                    doctor_name="Dr. Rao", date="2025-03-14", time="10:00 AM",
                    status="Scheduled", created_at="2025-03-10"),
        Appointment(id="2", patient_id="101", patient_name="Vikram Singh",
                    doctor_name="Dr. Rao", date="2025-03-14", time="11:00 AM",
                    status="Cancelled", created_at="2025-03-11"),
        Appointment(id="3", patient_id="101", patient_name="Vikram Singh",
                    doctor_name="Dr. Rao", date="2025-03-14", time="02:00 PM",
                    status="Completed", created_at="2025-03-12"),
        Appointment(id="4", patient_id="100", patient_name="Meera Iyer",
                    doctor_name="Dr. Rao", date="2025-03-15", time="09:00 AM",
                    status="Scheduled", created_at="2025-03-13"),
    ]


@pytest.fixture
def sample_medicine_bill():
    return MedicineBill(
        id="mb1",
        patient_name="Meera Iyer",
        medicines=[MedicineItem(name="A", quantity=2, unit_price=50)],
        date="2025-03-14",
        pharmacy_name="City Pharmacy",
    ).recompute()
