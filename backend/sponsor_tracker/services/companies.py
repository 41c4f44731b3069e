from __future__ import annotations

import math
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from sponsor_tracker.models.company import Company
from sponsor_tracker.schemas.company import ExternalCompanyIn


def get_company(db: Session, company_id: int) -> Company:
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def list_companies(
    db: Session,
    *,
    q: Optional[str] = None,
    town: Optional[str] = None,
    route: Optional[str] = None,
    rating: Optional[str] = None,
    page: int = 1,
    limit: int = 50,
) -> tuple[list[Company], dict]:
    qry = db.query(Company)

    q = _clean(q)
    if q:
        qry = qry.filter(Company.name.ilike(f"%{q}%"))
    town = _clean(town)
    if town:
        qry = qry.filter(Company.town.ilike(f"%{town}%"))
    route = _clean(route)
    if route:
        qry = qry.filter(Company.route.ilike(f"%{route}%"))
    rating = _clean(rating)
    if rating:
        qry = qry.filter(Company.rating == rating)

    total = qry.count()
    rows = (
        qry.order_by(Company.name.asc(), Company.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    pagination = {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }
    return rows, pagination


def list_map_points(
    db: Session,
    *,
    town: Optional[str] = None,
    rating: Optional[str] = None,
    max_points: int,
) -> list[Company]:
    """Companies that already carry coordinates, capped at `max_points`."""
    qry = db.query(Company).filter(Company.latitude.isnot(None), Company.longitude.isnot(None))

    town = _clean(town)
    if town:
        qry = qry.filter(Company.town.ilike(f"%{town}%"))
    rating = _clean(rating)
    if rating:
        qry = qry.filter(Company.rating == rating)

    return qry.order_by(Company.id.asc()).limit(max_points).all()


def create_external_company(db: Session, data: ExternalCompanyIn, user_id: int) -> Company:
    company = Company(
        name=data.name,
        town=_clean(data.town),
        industry=_clean(data.industry),
        website=_clean(data.website),
        logo_url=_clean(data.logo_url),
        is_external=True,
        created_by=user_id,
    )
    db.add(company)
    # Caller owns the commit; flush so `company.id` is usable.
    db.flush()
    return company
