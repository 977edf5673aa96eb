"""Tests for medistore.mcp.server tools.

Tests the tool functions directly (not via MCP protocol).
"""

import pytest

from medistore.dashboard import initialize_appointments
from medistore.store import RecordStore


@pytest.fixture
def mcp_store(tmp_path, monkeypatch):
    """Set up a seeded store and point the MCP server at it."""
    db_path = str(tmp_path / "mcp_test.db")
    monkeypatch.setenv("MEDISTORE_DB", db_path)

    store = RecordStore(db_path)
    store.init_schema()
    store.initialize()
    initialize_appointments(store)
    store.close()

    import medistore.mcp.server as srv

    monkeypatch.setattr(srv, "DB_PATH", db_path)
    yield srv


class TestDashboardTool:
    def test_stats(self, mcp_store):
        stats = mcp_store.get_dashboard_stats()
        assert stats == {
            "totalPatients": 3,
            "todayAppointments": 2,
            "pendingReports": 2,
            "newRegistrations": 1,
        }

    def test_stats_by_created_at(self, mcp_store):
        assert mcp_store.get_dashboard_stats(registration_field="createdAt")["newRegistrations"] == 1


class TestRecordTools:
    def test_list_records(self, mcp_store):
        rows = mcp_store.list_records("prescriptions")
        assert [r["id"] for r in rows] == ["1", "2"]
        assert rows[0]["patientName"] == "Rajesh Kumar"

    def test_list_records_filtered(self, mcp_store):
        rows = mcp_store.list_records("patients", patient_name="priya")
        assert [r["name"] for r in rows] == ["Priya Sharma"]

    def test_list_unknown_collection(self, mcp_store):
        result = mcp_store.list_records("invoices")
        assert isinstance(result, str)
        assert result.startswith("Error")

    def test_get_record(self, mcp_store):
        bill = mcp_store.get_record("medicine_bills", "1")
        assert bill["totalAmount"] == 7500.0

    def test_get_missing_record(self, mcp_store):
        assert "No reports record" in mcp_store.get_record("reports", "99")

    def test_summary(self, mcp_store):
        summary = mcp_store.get_store_summary()
        assert summary["patients"] == 3
        assert summary["appointments"] == 3


class TestToolErrors:
    @pytest.fixture
    def corrupt_reports(self, mcp_store):
        store = RecordStore(mcp_store.DB_PATH)
        store.conn.execute("UPDATE kv SET value = '[{broken' WHERE key = 'reports'")
        store.conn.commit()
        store.close()
        return mcp_store

    def test_stats_unknown_registration_field(self, mcp_store):
        result = mcp_store.get_dashboard_stats(registration_field="bogus")
        assert isinstance(result, str)
        assert result.startswith("Error")

    def test_list_corrupt_collection(self, corrupt_reports):
        result = corrupt_reports.list_records("reports")
        assert result.startswith("Error: reports")

    def test_get_record_corrupt_collection(self, corrupt_reports):
        assert corrupt_reports.get_record("reports", "1").startswith("Error: reports")

    def test_summary_corrupt_collection(self, corrupt_reports):
        assert corrupt_reports.get_store_summary().startswith("Error: reports")
