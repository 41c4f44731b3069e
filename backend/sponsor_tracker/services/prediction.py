# sponsor_tracker/services/prediction.py
"""
Outcome prediction for a prospective application.

This is a heuristic, not a statistical estimate: the caller's own hit rates
(or fixed base rates when there is no history) are scaled by a weight for the
company's sponsor rating, clamped and rounded. There are no confidence
intervals and no smoothing beyond the fixed multipliers and the clamp.

Every constant below is part of the output contract; changing any of them
changes what clients see.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from sponsor_tracker.models.application import Application
from sponsor_tracker.models.application_status import PROGRESSED_STATUSES, ApplicationStatus
from sponsor_tracker.services.companies import get_company

BASE_INTERVIEW_RATE = 0.15
BASE_OFFER_RATE = 0.05

# rating -> (interview multiplier, offer multiplier); other ratings are unweighted
RATING_WEIGHTS: dict[str, tuple[float, float]] = {
    "A": (1.2, 1.1),
    "B": (0.8, 0.7),
}

MIN_PROBABILITY = 0.01
MAX_PROBABILITY = 0.99


@dataclass(frozen=True)
class OutcomePrediction:
    interview_probability: float
    offer_probability: float
    sample_size: int


def _clamp(value: float) -> float:
    return min(max(value, MIN_PROBABILITY), MAX_PROBABILITY)


def _round2(value: float) -> float:
    # Half-up on the exact binary value, so 0.055000000000000007 -> 0.06
    # and 0.034999999999999996 -> 0.03.
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def predict_outcome(
    company_rating: Optional[str],
    statuses: Iterable[ApplicationStatus],
) -> OutcomePrediction:
    history = list(statuses)
    sample_size = len(history)

    if sample_size == 0:
        interview = BASE_INTERVIEW_RATE
        offer = BASE_OFFER_RATE
    else:
        progressed = sum(1 for s in history if s in PROGRESSED_STATUSES)
        offered = sum(1 for s in history if s == ApplicationStatus.OFFER)
        interview = progressed / sample_size
        offer = offered / sample_size

    interview_weight, offer_weight = RATING_WEIGHTS.get(company_rating or "", (1.0, 1.0))
    interview *= interview_weight
    offer *= offer_weight

    return OutcomePrediction(
        interview_probability=_round2(_clamp(interview)),
        offer_probability=_round2(_clamp(offer)),
        sample_size=sample_size,
    )


def predict_for_company(db: Session, company_id: int, user_id: int) -> OutcomePrediction:
    """Predict against `company_id` using only `user_id`'s own applications."""
    company = get_company(db, company_id)

    rows = db.query(Application.status).filter(Application.user_id == user_id).all()
    return predict_outcome(company.rating, [status for (status,) in rows])
