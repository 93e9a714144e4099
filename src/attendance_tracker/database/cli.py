from __future__ import annotations

import argparse
import importlib
import logging

from dotenv import load_dotenv

from ..config import get_settings_module
from .bootstrap import apply_schema, ensure_demo_users, list_tables
from .connection import DBConfig, DatabaseConnection


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the attendance tracker tables.")
    parser.add_argument("--seed", action="store_true", help="also create the demo manager and employee")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=getattr(settings, "LOG_FORMAT"))

    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    apply_schema(conn)
    if args.seed:
        ensure_demo_users(conn)
    print(f"OK: applied schema.sql -> {conn.config.describe()} (tables={len(list_tables(conn))})")


if __name__ == "__main__":
    main()
