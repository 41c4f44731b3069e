from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sponsor_tracker.core.config import settings
from sponsor_tracker.core.database import get_db
from sponsor_tracker.schemas.company import CompanyMapPoint, CompanyOut, CompanyPage
from sponsor_tracker.services.companies import get_company, list_companies, list_map_points

# Directory reads are public; nothing here is user-scoped.
router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=CompanyPage)
def browse_companies(
    q: str | None = None,
    town: str | None = None,
    route: str | None = None,
    rating: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1),
    db: Session = Depends(get_db),
):
    limit2 = min(limit, settings.COMPANIES_MAX_PAGE_SIZE)
    rows, pagination = list_companies(
        db, q=q, town=town, route=route, rating=rating, page=page, limit=limit2
    )
    return {"companies": rows, "pagination": pagination}


@router.get("/map", response_model=list[CompanyMapPoint])
def company_map(
    town: str | None = None,
    rating: str | None = None,
    db: Session = Depends(get_db),
):
    return list_map_points(db, town=town, rating=rating, max_points=settings.MAP_MAX_POINTS)


@router.get("/{company_id}", response_model=CompanyOut)
def read_company(company_id: int, db: Session = Depends(get_db)):
    return get_company(db, company_id)
