"""MCP server for medistore: read tools over the hospital record store.

Run with: python -m medistore.mcp.server
Configure env: MEDISTORE_DB=/path/to/medistore.db
"""

from __future__ import annotations

import os

from mcp.server.fastmcp import FastMCP

from medistore.dashboard import compute_stats
from medistore.session import search_records
from medistore.store import COLLECTIONS, RecordStore, StorageError

DB_PATH = os.environ.get("MEDISTORE_DB", "medistore.db")

mcp = FastMCP(
    "medistore",
    instructions=(
        "Hospital front-end record store holding patients, prescriptions, lab and "
        "imaging reports, medicine bills, hospital bills and appointments.\n\n"
        "Key capabilities:\n"
        "- get_dashboard_stats: Total patients, today's appointments, pending reports, "
        "new registrations\n"
        "- list_records: All records of one collection, optionally filtered by patient name\n"
        "- get_record: One record by collection and id\n"
        "- get_store_summary: Record counts per collection\n\n"
        "Start with get_store_summary to see which collections hold data."
    ),
)


def _get_store() -> RecordStore:
    store = RecordStore(DB_PATH)
    store.init_schema()
    return store


def _check_collection(collection: str) -> str | None:
    if collection not in COLLECTIONS:
        return f"Error: unknown collection {collection!r}. Choose from: {', '.join(COLLECTIONS)}"
    return None


@mcp.tool()
def get_dashboard_stats(registration_field: str = "lastVisit") -> dict | str:
    """Dashboard counts for today.

    Args:
        registration_field: Patient field compared with today for new
            registrations: "lastVisit" or "createdAt".
    """
    store = _get_store()
    try:
        return compute_stats(store, registration_field=registration_field).to_dict()
    except ValueError as e:
        return f"Error: {e}"
    finally:
        store.close()


@mcp.tool()
def list_records(collection: str, patient_name: str = "") -> list[dict] | str:
    """List records in a collection.

    Args:
        collection: One of patients, prescriptions, reports, medicine_bills,
            hospital_bills, appointments.
        patient_name: Case-insensitive partial match on the patient's name.
    """
    error = _check_collection(collection)
    if error:
        return error
    store = _get_store()
    try:
        records = store.load_records(collection)
    except StorageError as e:
        return f"Error: {e}"
    finally:
        store.close()
    attr = "name" if collection == "patients" else "patient_name"
    return [r.to_dict() for r in search_records(records, patient_name, (attr,))]


@mcp.tool()
def get_record(collection: str, record_id: str) -> dict | str:
    """Get one record by id from a collection."""
    error = _check_collection(collection)
    if error:
        return error
    store = _get_store()
    try:
        record = store.get_record(collection, record_id)
    except StorageError as e:
        return f"Error: {e}"
    finally:
        store.close()
    if record is None:
        return f"No {collection} record with id {record_id!r}."
    return record.to_dict()


@mcp.tool()
def get_store_summary() -> dict[str, int] | str:
    """Record counts for every collection."""
    store = _get_store()
    try:
        return store.summary()
    except StorageError as e:
        return f"Error: {e}"
    finally:
        store.close()


if __name__ == "__main__":
    mcp.run()
