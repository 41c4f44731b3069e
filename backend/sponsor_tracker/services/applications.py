# sponsor_tracker/services/applications.py
"""
Application lifecycle and its timeline.

The timeline (ApplicationUpdate rows) is append-only. Every accepted status
change appends exactly one entry, in the same transaction as the change, so a
reader never sees one without the other. Ownership is checked before anything
is touched; a missing or foreign application fails the whole operation.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from fastapi import HTTPException
from sqlalchemy import desc
from sqlalchemy.orm import Session

from sponsor_tracker.models.application import Application
from sponsor_tracker.models.application_status import ApplicationStatus
from sponsor_tracker.models.application_update import ApplicationUpdate
from sponsor_tracker.schemas.application import (
    ApplicationPatch,
    TrackExistingCompany,
    TrackExternalCompany,
)
from sponsor_tracker.services.companies import create_external_company, get_company

logger = logging.getLogger(__name__)

INITIAL_NOTE_PREFIX = "Initial note: "

# Columns that are NOT NULL; an explicit null in a patch means "leave as is".
_NON_NULLABLE_FIELDS = ("role", "status", "follow_up_completed")
_TRIMMED_FIELDS = ("role", "salary", "external_website", "cv_version")


def _today_utc() -> date:
    return datetime.now(timezone.utc).date()


def status_change_note(status: ApplicationStatus) -> str:
    return f"Status changed to {status.value}"


def initial_note(note: str) -> str:
    return f"{INITIAL_NOTE_PREFIX}{note}"


def get_application_for_user(db: Session, application_id: int, user_id: int) -> Application:
    application = (
        db.query(Application)
        .filter(Application.id == application_id, Application.user_id == user_id)
        .first()
    )
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return application


def list_applications(
    db: Session,
    user_id: int,
    *,
    statuses: Optional[Iterable[ApplicationStatus]] = None,
    follow_up_due: bool = False,
    today: Optional[date] = None,
) -> list[Application]:
    qry = db.query(Application).filter(Application.user_id == user_id)

    wanted = list(statuses or [])
    if wanted:
        qry = qry.filter(Application.status.in_(wanted))

    if follow_up_due:
        qry = qry.filter(
            Application.follow_up_date.isnot(None),
            Application.follow_up_date <= (today or _today_utc()),
            Application.follow_up_completed.is_(False),
        )

    return qry.order_by(desc(Application.created_at), desc(Application.id)).all()


def create_application(
    db: Session,
    user_id: int,
    payload: TrackExistingCompany | TrackExternalCompany,
) -> Application:
    try:
        if isinstance(payload, TrackExternalCompany):
            company = create_external_company(db, payload.company, user_id)
        else:
            company = get_company(db, payload.company_id)

        data = payload.model_dump(exclude={"company_source", "company_id", "company"})
        if data.get("applied_date") is None:
            data["applied_date"] = _today_utc()

        application = Application(**data)
        application.user_id = user_id
        application.company_id = company.id

        notes = data.get("notes")
        if notes and notes.strip():
            application.updates.append(ApplicationUpdate(note=initial_note(notes)))

        db.add(application)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(application)
    logger.info(
        "Application %s created for user %s (company=%s status=%s)",
        application.id,
        user_id,
        company.id,
        application.status.value,
    )
    return application


def update_application(
    db: Session,
    application_id: int,
    user_id: int,
    payload: ApplicationPatch,
) -> Application:
    application = get_application_for_user(db, application_id, user_id)

    data = payload.model_dump(exclude_unset=True)
    for key in _NON_NULLABLE_FIELDS:
        if key in data and data[key] is None:
            data.pop(key)
    if not data:
        return application

    for key in _TRIMMED_FIELDS:
        if isinstance(data.get(key), str):
            data[key] = data[key].strip() or None
    if "role" in data and not data["role"]:
        raise HTTPException(status_code=400, detail="Role cannot be blank")

    try:
        if "status" in data:
            next_status = ApplicationStatus(data.pop("status"))
            prev_status = application.status
            if next_status != prev_status:
                application.status = next_status
                application.updates.append(ApplicationUpdate(note=status_change_note(next_status)))
                logger.info(
                    "Application %s status %s -> %s",
                    application.id,
                    prev_status.value if prev_status else None,
                    next_status.value,
                )

        for key, value in data.items():
            setattr(application, key, value)

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(application)
    return application


def add_timeline_note(db: Session, application_id: int, user_id: int, note: str) -> ApplicationUpdate:
    application = get_application_for_user(db, application_id, user_id)

    entry = ApplicationUpdate(application_id=application.id, note=note)
    try:
        db.add(entry)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(entry)
    return entry


def delete_application(db: Session, application_id: int, user_id: int) -> None:
    application = get_application_for_user(db, application_id, user_id)

    try:
        # ORM cascade removes the timeline with it.
        db.delete(application)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Application %s deleted by user %s", application_id, user_id)
