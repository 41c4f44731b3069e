# sponsor_tracker/models/company.py
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sponsor_tracker.core.base import Base


class Company(Base):
    __tablename__ = "companies"
    __table_args__ = (
        UniqueConstraint("name", "town", "route", name="uq_companies_name_town_route"),
    )

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False, index=True)
    town = Column(String(255), nullable=True, index=True)
    county = Column(String(255), nullable=True)
    route = Column(String(255), nullable=True)

    # "A", "B", or whatever free text an older register carried.
    rating = Column(String(255), nullable=True, index=True)
    # Raw "Type & Rating" column from the register.
    full_rating = Column(String(255), nullable=True)

    industry = Column(String(255), nullable=True)
    website = Column(String(500), nullable=True)
    logo_url = Column(String(500), nullable=True)

    # Ad-hoc companies a user added that are not on the register.
    is_external = Column(Boolean, nullable=False, default=False, server_default="false")
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    applications = relationship("Application", back_populates="company")
