from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class CompanyOut(BaseModel):
    id: int
    name: str
    town: Optional[str] = None
    county: Optional[str] = None
    route: Optional[str] = None
    rating: Optional[str] = None
    full_rating: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    is_external: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class CompanyMapPoint(BaseModel):
    id: int
    name: str
    town: Optional[str] = None
    rating: Optional[str] = None
    latitude: float
    longitude: float

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class CompanyPage(BaseModel):
    companies: List[CompanyOut]
    pagination: Pagination


class ExternalCompanyIn(BaseModel):
    """A company that is not on the sponsor register, added by the user."""

    name: str
    town: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Company name is required")
        return v
