from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from campus_club.models.user import Role


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str = Field(min_length=8, max_length=64)
    full_name: str = Field(alias="fullName", min_length=1, max_length=100)
    # 관리자 계정은 공개 가입으로 만들 수 없음 (scripts/create_admin.py 사용)
    role: Literal["student", "clubhead"]

    register_number: str | None = Field(default=None, alias="registerNumber", max_length=30)
    staff_id: str | None = Field(default=None, alias="staffId", max_length=30)
    department: str | None = Field(default=None, max_length=100)
    year: int | None = Field(default=None, ge=1, le=10)
    contact_number: str | None = Field(default=None, alias="contactNumber", max_length=30)

    @field_validator("register_number", "staff_id", "department", "contact_number", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        # 빈 문자열은 미입력으로 취급 (register_number unique 제약)
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("fullName must not be blank")
        return v


class LoginRequest(BaseModel):
    # 이메일 또는 학번(register_number)
    identifier: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: int
    email: str
    role: Role
    full_name: str
    register_number: str | None = None
    staff_id: str | None = None
    department: str | None = None
    year: int | None = None
    contact_number: str | None = None
    club_id: int | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
