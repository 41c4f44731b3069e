from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sponsor_tracker.core.database import get_db
from sponsor_tracker.dependencies.auth import get_current_user
from sponsor_tracker.models.user import User
from sponsor_tracker.schemas.prediction import PredictionOut
from sponsor_tracker.services.prediction import predict_for_company

router = APIRouter(prefix="/predict", tags=["predict"], dependencies=[Depends(get_current_user)])


@router.get("/{company_id}", response_model=PredictionOut)
def predict(
    company_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    result = predict_for_company(db, company_id, user.id)
    return PredictionOut(
        interview_probability=result.interview_probability,
        offer_probability=result.offer_probability,
        sample_size=result.sample_size,
    )
