from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sponsor_tracker.core.database import get_db
from sponsor_tracker.dependencies.auth import get_current_user
from sponsor_tracker.models.user import User
from sponsor_tracker.schemas.stats import DashboardStatsOut, ImportLogOut
from sponsor_tracker.services.stats import dashboard_stats, last_successful_import

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/dashboard", response_model=DashboardStatsOut)
def read_dashboard(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return dashboard_stats(db, user.id)


@router.get("/last-import", response_model=Optional[ImportLogOut])
def read_last_import(db: Session = Depends(get_db)):
    return last_successful_import(db)
