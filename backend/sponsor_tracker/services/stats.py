from __future__ import annotations

from typing import Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from sponsor_tracker.models.application import Application
from sponsor_tracker.models.application_status import PROGRESSED_STATUSES, ApplicationStatus
from sponsor_tracker.models.import_log import IMPORT_SUCCESS, ImportLog

UNKNOWN_REGION = "Unknown"
TOP_REGIONS = 5


def dashboard_stats(db: Session, user_id: int) -> dict:
    """
    Headline numbers for the caller's dashboard.

    Rates are whole percentages. "Interviewed" uses the same progressed set as
    the outcome predictor.
    """
    applications = (
        db.query(Application)
        .filter(Application.user_id == user_id)
        .order_by(desc(Application.created_at), desc(Application.id))
        .all()
    )
    total = len(applications)

    status_counts = {s.value: 0 for s in ApplicationStatus}
    regions: dict[str, dict[str, int]] = {}
    interviewed = 0
    offered = 0

    for a in applications:
        status_counts[a.status.value] += 1
        if a.status in PROGRESSED_STATUSES:
            interviewed += 1
        is_offer = a.status == ApplicationStatus.OFFER
        if is_offer:
            offered += 1

        town = (a.company.town if a.company else None) or UNKNOWN_REGION
        bucket = regions.setdefault(town, {"count": 0, "offers": 0})
        bucket["count"] += 1
        if is_offer:
            bucket["offers"] += 1

    if total == 0:
        return {
            "total": 0,
            "interview_rate": 0,
            "offer_rate": 0,
            "top_region": "N/A",
            "status_counts": status_counts,
            "regions": [],
        }

    # Stable sorts keep first-seen order on ties.
    top_region = sorted(regions.items(), key=lambda kv: kv[1]["offers"], reverse=True)[0][0]
    busiest = sorted(regions.items(), key=lambda kv: kv[1]["count"], reverse=True)[:TOP_REGIONS]

    return {
        "total": total,
        "interview_rate": _percent(interviewed, total),
        "offer_rate": _percent(offered, total),
        "top_region": top_region,
        "status_counts": status_counts,
        "regions": [{"town": town, **counts} for town, counts in busiest],
    }


def _percent(part: int, total: int) -> int:
    # Round half up, like the dashboard always has.
    return int(part * 100 / total + 0.5)


def last_successful_import(db: Session) -> Optional[ImportLog]:
    return (
        db.query(ImportLog)
        .filter(ImportLog.status == IMPORT_SUCCESS)
        .order_by(desc(ImportLog.created_at), desc(ImportLog.id))
        .first()
    )
