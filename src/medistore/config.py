"""Configuration management for medistore.

Handles loading and generating the TOML config file that selects the
store location, whether demonstration data is seeded, and how the
dashboard counts new registrations.
"""

from __future__ import annotations

import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path

from medistore.dashboard import REGISTRATION_FIELDS

DEFAULT_CONFIG_PATH = "medistore.toml"

DEFAULT_CONFIG_TEMPLATE = """\
# medistore configuration
# Edit freely.

[storage]
# SQLite file holding the record collections
path = "{db_path}"

[seed]
# Write demonstration records into empty collections on `medistore init`
enabled = {seed_enabled}

[dashboard]
# Patient field compared with today for "new registrations":
#   "lastVisit" (default) or "createdAt"
registration_field = "{registration_field}"
# Appointments shown under recent activity
recent_activity_limit = {recent_activity_limit}
"""


@dataclass
class StoreConfig:
    """Settings read from medistore.toml."""

    db_path: str = "medistore.db"
    seed_enabled: bool = True
    registration_field: str = "lastVisit"
    recent_activity_limit: int = 5


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> StoreConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if the config file doesn't exist. Unknown keys
    are ignored; an invalid registration_field raises ValueError.
    """
    path = Path(config_path)
    if not path.exists():
        print(
            f"Warning: Config file '{config_path}' not found, using defaults. "
            f"Run 'python -m medistore init-config' to generate one.",
            file=sys.stderr,
        )
        return StoreConfig()

    with open(path, "rb") as f:
        raw = tomllib.load(f)

    config = StoreConfig()
    storage = raw.get("storage", {})
    if "path" in storage:
        config.db_path = storage["path"]

    seed = raw.get("seed", {})
    if "enabled" in seed:
        config.seed_enabled = bool(seed["enabled"])

    dashboard = raw.get("dashboard", {})
    if "registration_field" in dashboard:
        field = dashboard["registration_field"]
        if field not in REGISTRATION_FIELDS:
            raise ValueError(
                f"{config_path}: dashboard.registration_field must be one of "
                f"{REGISTRATION_FIELDS}, got {field!r}"
            )
        config.registration_field = field
    if "recent_activity_limit" in dashboard:
        config.recent_activity_limit = int(dashboard["recent_activity_limit"])

    return config


def generate_config(
    config_path: str = DEFAULT_CONFIG_PATH, config: StoreConfig | None = None
) -> str:
    """Write a commented config file from config (or the defaults).

    Returns the path of the written config file.
    """
    config = config or StoreConfig()
    content = DEFAULT_CONFIG_TEMPLATE.format(
        db_path=config.db_path,
        seed_enabled="true" if config.seed_enabled else "false",
        registration_field=config.registration_field,
        recent_activity_limit=config.recent_activity_limit,
    )
    Path(config_path).write_text(content)
    return config_path
