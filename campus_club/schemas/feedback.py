from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FeedbackCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_id: int = Field(alias="eventId", ge=1)
    rating: int = Field(ge=1, le=5)
    comments: str | None = Field(default=None, max_length=1000)


class FeedbackUpdateRequest(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comments: str | None = Field(default=None, max_length=1000)


class FeedbackOut(BaseModel):
    id: int
    event_id: int
    user_id: int
    rating: int
    comments: str | None = None
    submitted_at: datetime

    model_config = ConfigDict(from_attributes=True)
