from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClubCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=150)
    description: str | None = None
    contact: str | None = Field(default=None, max_length=255)
    image_url: str | None = Field(default=None, alias="imageUrl", max_length=255)


class ClubUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str | None = None
    contact: str | None = Field(default=None, max_length=255)
    image_url: str | None = Field(default=None, alias="imageUrl", max_length=255)


class AssignHeadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId", ge=1)


class ClubOut(BaseModel):
    id: int
    title: str
    description: str | None = None
    contact: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
