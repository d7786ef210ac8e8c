from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from campus_club.db.base import Base
from campus_club.models.user import utcnow


class Feedback(Base):
    """행사 피드백.

    - (user_id, event_id) 당 하나
    - rating 1~5
    - 제출 후 FEEDBACK_EDIT_WINDOW_HOURS 이내에만 수정 가능 (라우터에서 검사)
    """

    __tablename__ = "feedback"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_feedback_user_event"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    event_id: Mapped[int] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
