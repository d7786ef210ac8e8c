"""
announcement.py

동아리 공지(Announcement) 모델 및 승인 상태 정의.

승인 워크플로우:
- PENDING  : 생성 직후 초기 상태
- APPROVED : 관리자 승인 (종료 상태)
- REJECTED : 관리자 거절 (종료 상태)

전이는 PENDING -> APPROVED | REJECTED 만 허용되며
전이 시 approved_by(처리한 관리자), feedback, updated_at 이 함께 기록된다.
approved_by 는 status != PENDING 일 때만 값이 있다.

"""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from campus_club.db.base import Base
from campus_club.models.user import utcnow


class AnnouncementStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Announcement(Base):
    __tablename__ = "announcements"
    __table_args__ = (
        Index("ix_announcements_club_id", "club_id"),
        Index("ix_announcements_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    club_id: Mapped[int] = mapped_column(ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    announcement_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    poster_url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    status: Mapped[AnnouncementStatus] = mapped_column(
        SAEnum(AnnouncementStatus, name="announcement_status", values_callable=lambda e: [m.value for m in e]),
        default=AnnouncementStatus.PENDING,
        nullable=False,
    )
    approved_by: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
