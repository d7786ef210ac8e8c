from pydantic import BaseModel, ConfigDict, Field


class EditProfileRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: str | None = Field(default=None, alias="fullName", min_length=1, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    year: int | None = Field(default=None, ge=1, le=10)
    contact_number: str | None = Field(default=None, alias="contactNumber", max_length=30)
