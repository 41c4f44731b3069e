# sponsor_tracker/services/company_import.py
"""
Sponsor register import.

Reads the UK "Register of licensed sponsors" CSV export and loads it into
`companies` in batches. Rows already present (same name/town/route) are
skipped, as are repeats within the file. Each run leaves one ImportLog row.
"""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy.orm import Session

from sponsor_tracker.models.company import Company
from sponsor_tracker.models.import_log import IMPORT_FAILED, IMPORT_SUCCESS, ImportLog

logger = logging.getLogger(__name__)

COL_NAME = "Organisation Name"
COL_TOWN = "Town/City"
COL_COUNTY = "County"
COL_TYPE_RATING = "Type & Rating"
COL_ROUTE = "Route"

CompanyKey = tuple[str, Optional[str], Optional[str]]


@dataclass(frozen=True)
class ImportSummary:
    inserted: int
    duplicates: int
    skipped: bool = False


def extract_rating(full_rating: Optional[str]) -> Optional[str]:
    """
    "Worker (A rating)" -> "A", "Worker (B rating)" -> "B".
    Anything else is kept verbatim.
    """
    if not full_rating:
        return None
    if "(A rating)" in full_rating:
        return "A"
    if "(B rating)" in full_rating:
        return "B"
    return full_rating


def _cell(row: dict, column: str) -> Optional[str]:
    value = row.get(column)
    if value is None:
        return None
    value = value.strip()
    return value or None


def iter_sponsor_rows(path: Path) -> Iterator[dict]:
    # utf-8-sig: the gov.uk export ships with a BOM.
    with path.open("r", encoding="utf-8-sig", newline="") as fp:
        for row in csv.DictReader(fp):
            name = _cell(row, COL_NAME)
            if not name:
                continue
            full_rating = _cell(row, COL_TYPE_RATING)
            yield {
                "name": name,
                "town": _cell(row, COL_TOWN),
                "county": _cell(row, COL_COUNTY),
                "route": _cell(row, COL_ROUTE),
                "full_rating": full_rating,
                "rating": extract_rating(full_rating),
            }


def _key(row: dict) -> CompanyKey:
    return (row["name"], row["town"], row["route"])


def _existing_keys(db: Session, batch: list[dict]) -> set[CompanyKey]:
    names = sorted({r["name"] for r in batch})
    rows = (
        db.query(Company.name, Company.town, Company.route)
        .filter(Company.name.in_(names))
        .all()
    )
    return {(name, town, route) for name, town, route in rows}


def _flush_batch(db: Session, batch: list[dict], seen: set[CompanyKey]) -> tuple[int, int]:
    existing = _existing_keys(db, batch)
    fresh: list[Company] = []
    duplicates = 0
    for row in batch:
        key = _key(row)
        if key in existing or key in seen:
            duplicates += 1
            continue
        seen.add(key)
        fresh.append(Company(**row))

    if fresh:
        db.add_all(fresh)
    db.commit()
    return len(fresh), duplicates


def _write_log(db: Session, filename: str, *, status: str, count: int | None = None, error: str | None = None) -> None:
    db.add(ImportLog(filename=filename, status=status, count=count, error=error))
    db.commit()


def import_companies(
    db: Session,
    path: str | Path,
    *,
    batch_size: int = 500,
    force: bool = False,
) -> ImportSummary:
    """
    Load the register at `path`.

    When the directory already holds register rows the run is skipped unless
    `force` is set; forced runs still never insert a duplicate.
    """
    path = Path(path)
    filename = path.name
    batch_size = max(1, int(batch_size))

    if not force:
        existing = db.query(Company).filter(Company.is_external.is_(False)).count()
        if existing > 0:
            logger.info("Directory already has %d companies; skipping import of %s", existing, filename)
            return ImportSummary(inserted=0, duplicates=0, skipped=True)

    logger.info("Starting sponsor import from %s (batch_size=%d)", path, batch_size)

    inserted = 0
    duplicates = 0
    seen: set[CompanyKey] = set()
    batch: list[dict] = []

    try:
        for row in iter_sponsor_rows(path):
            batch.append(row)
            if len(batch) >= batch_size:
                added, dupes = _flush_batch(db, batch, seen)
                inserted += added
                duplicates += dupes
                batch = []
                logger.info("Processed %d rows (%d inserted)", inserted + duplicates, inserted)

        if batch:
            added, dupes = _flush_batch(db, batch, seen)
            inserted += added
            duplicates += dupes

        _write_log(db, filename, status=IMPORT_SUCCESS, count=inserted)
    except Exception as exc:
        db.rollback()
        logger.exception("Sponsor import from %s failed", path)
        try:
            _write_log(db, filename, status=IMPORT_FAILED, error=str(exc))
        except Exception:
            db.rollback()
            logger.exception("Could not write failed import log for %s", filename)
        raise

    logger.info("Sponsor import complete: %d inserted, %d duplicates skipped", inserted, duplicates)
    return ImportSummary(inserted=inserted, duplicates=duplicates)
