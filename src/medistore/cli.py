#!/usr/bin/env python3
"""CLI entry point for medistore package.

Usage:
    python -m medistore init [--db medistore.db] [--config medistore.toml]
    python -m medistore stats [--db medistore.db]
    python -m medistore list <collection> [--search text] [--limit N]
    python -m medistore show <collection> <id>
    python -m medistore delete <collection> <id>
    python -m medistore summary
    python -m medistore login <email> <password> <role>
    python -m medistore logout | whoami
    python -m medistore init-config [--output medistore.toml]
    python -m medistore serve-mcp
"""

import argparse
import json
import sys

from medistore.models import ROLES
from medistore.store import COLLECTIONS, StorageError

# Attributes shown as columns by `list`, per collection
_LIST_COLUMNS = {
    "patients": ["id", "name", "age", "gender", "condition", "last_visit"],
    "prescriptions": ["id", "patient_name", "doctor_name", "date", "status"],
    "reports": ["id", "patient_name", "report_type", "file_name", "file_size", "status"],
    "medicine_bills": ["id", "patient_name", "pharmacy_name", "total_amount", "date", "status"],
    "hospital_bills": ["id", "patient_name", "doctor_fees", "total_amount", "date", "status"],
    "appointments": ["id", "patient_name", "doctor_name", "date", "time", "type", "status"],
}

_SEARCH_ATTRS = {
    "patients": ("name", "condition", "phone"),
}


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="medistore",
        description="Local record store and dashboard statistics for a hospital front-end.",
    )
    sub = parser.add_subparsers(dest="command")

    def add_store_args(p):
        p.add_argument("--db", default=None, help="SQLite store path (overrides config)")
        p.add_argument("--config", default="", help="Path to medistore.toml config file")

    init_parser = sub.add_parser("init", help="Create the store and seed demonstration data")
    add_store_args(init_parser)

    stats_parser = sub.add_parser("stats", help="Show dashboard statistics")
    add_store_args(stats_parser)

    list_parser = sub.add_parser("list", help="List records in a collection")
    list_parser.add_argument("collection", choices=sorted(COLLECTIONS))
    list_parser.add_argument("--search", default="", help="Case-insensitive name search")
    list_parser.add_argument("--limit", type=int, default=50, help="Max records to show")
    add_store_args(list_parser)

    show_parser = sub.add_parser("show", help="Show one record as JSON")
    show_parser.add_argument("collection", choices=sorted(COLLECTIONS))
    show_parser.add_argument("id", help="Record ID")
    add_store_args(show_parser)

    delete_parser = sub.add_parser("delete", help="Delete one record")
    delete_parser.add_argument("collection", choices=sorted(COLLECTIONS))
    delete_parser.add_argument("id", help="Record ID")
    add_store_args(delete_parser)

    summary_parser = sub.add_parser("summary", help="Show record counts per collection")
    add_store_args(summary_parser)

    login_parser = sub.add_parser("login", help="Sign in as a demonstration user")
    login_parser.add_argument("email")
    login_parser.add_argument("password")
    login_parser.add_argument("role", choices=ROLES)
    add_store_args(login_parser)

    logout_parser = sub.add_parser("logout", help="Sign out")
    add_store_args(logout_parser)

    whoami_parser = sub.add_parser("whoami", help="Show the signed-in user")
    add_store_args(whoami_parser)

    config_parser = sub.add_parser("init-config", help="Generate medistore.toml")
    config_parser.add_argument("--output", default="medistore.toml", help="Config file output path")

    mcp_parser = sub.add_parser("serve-mcp", help="Start MCP server over the store")
    add_store_args(mcp_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    handlers = {
        "init": _handle_init,
        "stats": _handle_stats,
        "list": _handle_list,
        "show": _handle_show,
        "delete": _handle_delete,
        "summary": _handle_summary,
        "login": _handle_login,
        "logout": _handle_logout,
        "whoami": _handle_whoami,
        "init-config": _handle_init_config,
        "serve-mcp": _handle_serve_mcp,
    }

    try:
        handlers[args.command](args)
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _resolve_config(args):
    from medistore.config import StoreConfig, load_config

    config = load_config(args.config) if args.config else StoreConfig()
    if args.db:
        config.db_path = args.db
    return config


def _open_store(config):
    from medistore.store import RecordStore

    store = RecordStore(config.db_path)
    store.init_schema()
    return store


def _handle_init(args):
    from medistore.dashboard import initialize_appointments

    config = _resolve_config(args)
    with _open_store(config) as store:
        if config.seed_enabled:
            seeded = store.initialize()
            seeded["appointments"] = initialize_appointments(store)
            for key, count in seeded.items():
                if count:
                    print(f"  seeded {key:<20} {count:>4}")
        _print_summary(store)


def _handle_stats(args):
    from medistore.dashboard import compute_stats, recent_activity

    config = _resolve_config(args)
    with _open_store(config) as store:
        stats = compute_stats(store, registration_field=config.registration_field)
        try:
            user = store.load_user()
        except StorageError as e:
            print(f"Warning: could not read signed-in user: {e}", file=sys.stderr)
            user = None
        recent = recent_activity(store, user, limit=config.recent_activity_limit)

    print(f"\n{'='*40}")
    print("Dashboard")
    print(f"{'='*40}")
    print(f"  {'Total patients':<25} {stats.total_patients:>6}")
    print(f"  {'Today appointments':<25} {stats.today_appointments:>6}")
    print(f"  {'Pending reports':<25} {stats.pending_reports:>6}")
    print(f"  {'New registrations':<25} {stats.new_registrations:>6}")

    if recent:
        print("\nRecent Activity:")
        for a in recent:
            print(f"  {a.date}  {a.time:<9} {a.patient_name:<20} {a.doctor_name:<20} {a.status}")


def _handle_list(args):
    from medistore.session import search_records

    config = _resolve_config(args)
    with _open_store(config) as store:
        records = store.load_records(args.collection)

    attrs = _SEARCH_ATTRS.get(args.collection, ("patient_name",))
    records = search_records(records, args.search, attrs)
    if not records:
        print("(no records)")
        return

    headers = _LIST_COLUMNS[args.collection]
    rows = [[str(getattr(r, h, "") or "")[:40] for h in headers] for r in records[: args.limit]]
    col_widths = [max(len(h), max((len(row[i]) for row in rows), default=0)) for i, h in enumerate(headers)]

    fmt = " | ".join(f"{{:<{w}}}" for w in col_widths)
    print(fmt.format(*headers))
    print("-+-".join("-" * w for w in col_widths))
    for row in rows:
        print(fmt.format(*row))

    print(f"\n({len(records)} records)")


def _handle_show(args):
    config = _resolve_config(args)
    with _open_store(config) as store:
        record = store.get_record(args.collection, args.id)
    if record is None:
        print(f"No {args.collection} record with id {args.id}.")
        sys.exit(1)
    print(json.dumps(record.to_dict(), indent=2))


def _handle_delete(args):
    config = _resolve_config(args)
    with _open_store(config) as store:
        removed = store.remove_record(args.collection, args.id)
    if not removed:
        print(f"No {args.collection} record with id {args.id}.")
        sys.exit(1)
    print(f"Deleted {args.collection} #{args.id}")


def _handle_summary(args):
    config = _resolve_config(args)
    with _open_store(config) as store:
        _print_summary(store)


def _print_summary(store):
    counts = store.summary()

    print(f"\n{'='*40}")
    print("Store Summary")
    print(f"{'='*40}")
    for key, count in counts.items():
        print(f"  {key:<25} {count:>6}")
    print(f"{'='*40}")


def _handle_login(args):
    from medistore.session import login

    config = _resolve_config(args)
    with _open_store(config) as store:
        user = login(store, args.email, args.password, args.role)
    if user is None:
        print("Login failed: email and password are required.", file=sys.stderr)
        sys.exit(1)
    print(f"Signed in as {user.name} ({user.role})")


def _handle_logout(args):
    from medistore.session import logout

    config = _resolve_config(args)
    with _open_store(config) as store:
        logout(store)
    print("Signed out.")


def _handle_whoami(args):
    from medistore.session import current_user

    config = _resolve_config(args)
    with _open_store(config) as store:
        user = current_user(store)
    if user is None:
        print("Not signed in.")
        return
    print(f"{user.name} <{user.email}> ({user.role})")


def _handle_init_config(args):
    from medistore.config import generate_config

    path = generate_config(config_path=args.output)
    print(f"Config generated at {path}")


def _handle_serve_mcp(args):
    import os

    config = _resolve_config(args)
    os.environ["MEDISTORE_DB"] = config.db_path

    from medistore.mcp.server import mcp

    mcp.run()


if __name__ == "__main__":
    main()
