"""medistore: local record store and dashboard statistics for a hospital front-end.

Collections of patients, prescriptions, reports, bills and appointments are
kept as JSON arrays in a SQLite key-value table.
"""

__version__ = "0.1.0"
