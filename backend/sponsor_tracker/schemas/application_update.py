from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class TimelineNoteCreate(BaseModel):
    note: str

    @field_validator("note")
    @classmethod
    def note_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Note is required")
        return v


class ApplicationUpdateOut(BaseModel):
    id: int
    application_id: int
    note: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
