# sponsor_tracker/models/application.py
from sqlalchemy import Boolean, Column, Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sponsor_tracker.core.base import Base
from sponsor_tracker.models.application_status import DEFAULT_STATUS, ApplicationStatus


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)

    # ownership
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    role = Column(String(255), nullable=False)
    status = Column(
        Enum(ApplicationStatus, name="application_status"),
        nullable=False,
        default=DEFAULT_STATUS,
    )
    applied_date = Column(Date, nullable=False)

    follow_up_date = Column(Date, nullable=True, index=True)
    follow_up_completed = Column(Boolean, nullable=False, default=False, server_default="false")

    salary = Column(String(100), nullable=True)
    external_website = Column(String(500), nullable=True)
    cv_version = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user = relationship("User", back_populates="applications")
    company = relationship("Company", back_populates="applications", lazy="joined")

    # Timeline, newest first. Rows are append-only so id order is creation order.
    updates = relationship(
        "ApplicationUpdate",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="desc(ApplicationUpdate.id)",
    )
