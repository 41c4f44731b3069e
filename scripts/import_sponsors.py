"""
Load the UK sponsor register CSV into the companies table.

Usage:
  python scripts/import_sponsors.py path/to/UKVI.csv [--batch-size 500] [--force]

Guardrails:
- Skips the run if the directory already has register rows, unless --force
- Never inserts a duplicate (name, town, route)
- Records the outcome in import_logs either way
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys


# Allow `import sponsor_tracker.*` from backend/ without installing.
REPO_ROOT = Path(__file__).resolve().parents[1]
BACKEND_DIR = REPO_ROOT / "backend"
sys.path.insert(0, str(BACKEND_DIR))


from sponsor_tracker.core.config import settings  # noqa: E402
from sponsor_tracker.core.database import Database  # noqa: E402
from sponsor_tracker.core.log import configure_logging  # noqa: E402
from sponsor_tracker.services.company_import import import_companies  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Import the sponsor register CSV.")
    parser.add_argument("csv_path", help="Path to the register CSV export.")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=settings.IMPORT_BATCH_SIZE,
        help=f"Rows per insert batch (default {settings.IMPORT_BATCH_SIZE}).",
    )
    parser.add_argument("--force", action="store_true", help="Import even if companies already exist.")
    args = parser.parse_args()

    configure_logging()

    csv_path = Path(args.csv_path)
    if not csv_path.is_file():
        print(f"No such file: {csv_path}")
        return 2

    database = Database(settings.database_url)
    try:
        if settings.DB_CREATE_TABLES:
            database.create_all()
        with database.session() as db:
            summary = import_companies(db, csv_path, batch_size=args.batch_size, force=args.force)
    finally:
        database.close()

    if summary.skipped:
        print("Skipped: directory already populated (use --force to import anyway).")
    else:
        print(f"Done. inserted={summary.inserted} duplicates_skipped={summary.duplicates}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
