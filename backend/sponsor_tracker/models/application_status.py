# sponsor_tracker/models/application_status.py
"""
The one status vocabulary for applications.

Request validation, the timeline rule, the outcome predictor and the
dashboard stats all read from here.
"""
from __future__ import annotations

from enum import Enum


class ApplicationStatus(str, Enum):
    APPLIED = "APPLIED"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    REJECTED = "REJECTED"
    NO_RESPONSE = "NO_RESPONSE"
    WITHDRAWN = "WITHDRAWN"


DEFAULT_STATUS = ApplicationStatus.APPLIED

# Anything that moved past "applied", including rejections that may never have
# reached an interview. Kept as-is; the predictor and dashboard both count these.
PROGRESSED_STATUSES = frozenset(
    {
        ApplicationStatus.INTERVIEW,
        ApplicationStatus.OFFER,
        ApplicationStatus.REJECTED,
    }
)
