from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator


class AppointmentRead(BaseModel):
    """Immutable snapshot of a stored appointment row."""

    id: int
    professional_id: int
    client_id: int
    date: date
    start_time: str
    end_time: str
    title: str
    description: str | None = None
    color: str
    cancelled: bool = False
    cancelled_at: datetime | None = None
    user_id: int | None = None

    class Config:
        from_attributes = True
        frozen = True


class AppointmentCreate(BaseModel):
    professional_id: int = Field(gt=0)
    client_id: int = Field(gt=0)
    date: date
    start_time: str
    end_time: str
    title: str
    description: str | None = None
    color: str | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Title is required.')
        return normalized

    @field_validator('start_time', 'end_time')
    @classmethod
    def strip_time(cls, value: str) -> str:
        return value.strip()


class AppointmentEdit(BaseModel):
    """Fields that may change after creation. Date, times and professional are fixed."""

    title: str
    description: str | None = None
    color: str

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Title is required.')
        return normalized
