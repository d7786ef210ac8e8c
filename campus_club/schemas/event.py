from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EventCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    event_date: datetime = Field(alias="eventDate")
    venue: str | None = Field(default=None, max_length=200)


class EventUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    event_date: datetime | None = Field(default=None, alias="eventDate")
    venue: str | None = Field(default=None, max_length=200)


class EventOut(BaseModel):
    id: int
    club_id: int
    title: str
    description: str | None = None
    event_date: datetime
    venue: str | None = None
    created_by: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
