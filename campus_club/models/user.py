"""
user.py

사용자(User) 및 권한(Role) 모델 정의 파일.

모든 인증, 권한, 동아리 관리, 공지 승인 기능의 기준이 되는 핵심 모델이다.

"""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_club.db.base import Base


"""
사용자 권한(Role) 정의

- STUDENT   : 일반 학생 (동아리 가입, 행사 신청, 피드백 작성)
- CLUBHEAD  : 동아리 회장 (자기 동아리의 공지 / 행사 관리)
- ADMIN     : 관리자 (공지 승인 / 거절, 동아리 생성)

role 은 가입 시 고정되며 이후 변경 API는 제공하지 않는다.

"""

class Role(str, Enum):
    STUDENT = "student"
    CLUBHEAD = "clubhead"
    ADMIN = "admin"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


"""
사용자(User) 모델

- email 은 고유 식별자, register_number(학번)도 로그인 식별자로 사용 가능
- club_id 는 CLUBHEAD 가 담당하는 동아리 (관리자가 지정)

"""

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.STUDENT,
    )

    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    register_number: Mapped[str | None] = mapped_column(String(30), unique=True, index=True, nullable=True)
    staff_id: Mapped[str | None] = mapped_column(String(30), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    contact_number: Mapped[str | None] = mapped_column(String(30), nullable=True)

    club_id: Mapped[int | None] = mapped_column(ForeignKey("clubs.id", ondelete="SET NULL"), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
