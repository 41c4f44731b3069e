# sponsor_tracker/models/import_log.py
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from sponsor_tracker.core.base import Base

IMPORT_SUCCESS = "SUCCESS"
IMPORT_FAILED = "FAILED"


class ImportLog(Base):
    __tablename__ = "import_logs"

    id = Column(Integer, primary_key=True, index=True)

    filename = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, index=True)
    count = Column(Integer, nullable=True)
    error = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
