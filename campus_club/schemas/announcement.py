from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from campus_club.models.announcement import AnnouncementStatus


class ReviewRequest(BaseModel):
    """승인 / 거절 시 관리자가 남기는 의견 (선택)"""

    feedback: str | None = Field(default=None, max_length=1000)


class AnnouncementOut(BaseModel):
    id: int
    club_id: int
    title: str
    description: str | None = None
    announcement_date: datetime | None = None
    poster_url: str | None = None
    status: AnnouncementStatus
    approved_by: int | None = None
    feedback: str | None = None
    created_by: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
