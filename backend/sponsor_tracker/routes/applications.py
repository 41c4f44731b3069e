from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from sponsor_tracker.core.database import get_db
from sponsor_tracker.dependencies.auth import get_current_user
from sponsor_tracker.models.application_status import ApplicationStatus
from sponsor_tracker.models.user import User
from sponsor_tracker.schemas.application import (
    ApplicationCreate,
    ApplicationDetailOut,
    ApplicationOut,
    ApplicationPatch,
)
from sponsor_tracker.schemas.application_update import ApplicationUpdateOut, TimelineNoteCreate
from sponsor_tracker.services import applications as service

router = APIRouter(prefix="/applications", tags=["applications"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=list[ApplicationOut])
def list_applications(
    status_filter: list[ApplicationStatus] | None = Query(default=None, alias="status"),
    follow_up_due: bool = False,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return service.list_applications(db, user.id, statuses=status_filter, follow_up_due=follow_up_due)


@router.post("", response_model=ApplicationDetailOut, status_code=status.HTTP_201_CREATED)
def create_application(
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return service.create_application(db, user.id, payload.root)


@router.get("/{application_id}", response_model=ApplicationDetailOut)
def get_application(
    application_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return service.get_application_for_user(db, application_id, user.id)


@router.put("/{application_id}", response_model=ApplicationDetailOut)
def update_application(
    application_id: int,
    payload: ApplicationPatch,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return service.update_application(db, application_id, user.id, payload)


@router.delete("/{application_id}")
def delete_application(
    application_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    service.delete_application(db, application_id, user.id)
    return {"deleted": True}


@router.post(
    "/{application_id}/updates",
    response_model=ApplicationUpdateOut,
    status_code=status.HTTP_201_CREATED,
)
def add_update(
    application_id: int,
    payload: TimelineNoteCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return service.add_timeline_note(db, application_id, user.id, payload.note)
