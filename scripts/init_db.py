from __future__ import annotations

import argparse
import sys
from pathlib import Path


def main() -> int:
    # Ensure project root (containing 'tipscore') is importable
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

    from tipscore.config.settings import load_settings
    from tipscore.repositories.sqlite import connect, ensure_schema

    parser = argparse.ArgumentParser(description="Initialize SQLite database schema")
    parser.add_argument(
        "--db",
        default=None,
        help="Path to SQLite DB file (default: TIPSCORE_DB_PATH or data/tipscore.sqlite3)",
    )
    args = parser.parse_args()

    settings = load_settings(db_path=args.db)
    db_path = settings.database_path.resolve()

    conn = connect(db_path)
    try:
        ensure_schema(conn)
    finally:
        conn.close()

    print(f"Initialized schema at: {db_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
