from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class RegionCount(BaseModel):
    town: str
    count: int
    offers: int


class DashboardStatsOut(BaseModel):
    total: int
    # Whole percentages (0-100).
    interview_rate: int
    offer_rate: int
    top_region: str
    status_counts: Dict[str, int]
    regions: List[RegionCount]


class ImportLogOut(BaseModel):
    id: int
    filename: str
    status: str
    count: Optional[int] = None
    error: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
