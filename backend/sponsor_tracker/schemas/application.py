from datetime import date, datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

from sponsor_tracker.models.application_status import DEFAULT_STATUS, ApplicationStatus
from sponsor_tracker.schemas.application_update import ApplicationUpdateOut
from sponsor_tracker.schemas.company import CompanyOut, ExternalCompanyIn


class _ApplicationFields(BaseModel):
    role: str
    status: ApplicationStatus = DEFAULT_STATUS
    applied_date: Optional[date] = None
    follow_up_date: Optional[date] = None
    salary: Optional[str] = None
    external_website: Optional[str] = None
    cv_version: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("role")
    @classmethod
    def role_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Role is required")
        return v


class TrackExistingCompany(_ApplicationFields):
    company_source: Literal["existing"]
    company_id: int


class TrackExternalCompany(_ApplicationFields):
    company_source: Literal["external"]
    company: ExternalCompanyIn


class ApplicationCreate(RootModel):
    """Either track a register company or add an ad-hoc one, keyed by `company_source`."""

    root: Annotated[
        Union[TrackExistingCompany, TrackExternalCompany],
        Field(discriminator="company_source"),
    ]


class ApplicationPatch(BaseModel):
    role: Optional[str] = None
    status: Optional[ApplicationStatus] = None
    notes: Optional[str] = None
    salary: Optional[str] = None
    external_website: Optional[str] = None
    cv_version: Optional[str] = None
    follow_up_date: Optional[date] = None
    follow_up_completed: Optional[bool] = None


class ApplicationOut(BaseModel):
    id: int
    company_id: int
    company: CompanyOut
    role: str
    status: ApplicationStatus
    applied_date: date
    follow_up_date: Optional[date] = None
    follow_up_completed: bool
    salary: Optional[str] = None
    external_website: Optional[str] = None
    cv_version: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApplicationDetailOut(ApplicationOut):
    updates: List[ApplicationUpdateOut] = []
