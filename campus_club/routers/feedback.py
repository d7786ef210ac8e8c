"""
feedback.py

행사 피드백(Feedback) API 모음.

- 피드백 작성: 학생 + 해당 행사에 참가 신청(registered)한 경우만
- 행사별 피드백 목록 + 평점 요약
- 내 피드백 목록
- 피드백 수정: 작성자 본인, 제출 후 FEEDBACK_EDIT_WINDOW_HOURS 이내

중복 작성은 (user_id, event_id) unique 제약 + 단일 INSERT 로 차단한다.

"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_club.core.config import settings
from campus_club.core.deps import get_db, get_current_user, get_current_student
from campus_club.core.errors import AuthorizationError, ConflictError, InternalError, NotFoundError, ValidationError
from campus_club.models.club import Club
from campus_club.models.event import Event, EventRegistration, RegistrationStatus
from campus_club.models.feedback import Feedback
from campus_club.models.user import User
from campus_club.schemas.feedback import FeedbackCreateRequest, FeedbackOut, FeedbackUpdateRequest
from campus_club.services.feedback import summarize_ratings, within_edit_window

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_feedback(
    data: FeedbackCreateRequest,
    db: Session = Depends(get_db),
    student: User = Depends(get_current_student),
):
    event = db.get(Event, data.event_id)
    if not event:
        raise NotFoundError("Event not found")

    registered = db.scalar(
        select(EventRegistration.id).where(
            EventRegistration.user_id == student.id,
            EventRegistration.event_id == data.event_id,
            EventRegistration.status == RegistrationStatus.REGISTERED,
        )
    )
    if not registered:
        raise AuthorizationError("You must be registered for this event to submit feedback")

    feedback = Feedback(
        event_id=data.event_id,
        user_id=student.id,
        rating=data.rating,
        comments=data.comments,
    )
    try:
        db.add(feedback)
        db.commit()
        db.refresh(feedback)
    except IntegrityError:
        db.rollback()
        raise ConflictError("You have already submitted feedback for this event")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Submit feedback failed for event %s", data.event_id)
        raise InternalError("Failed to submit feedback")

    return {
        "success": True,
        "message": "Feedback submitted successfully",
        "feedback": FeedbackOut.model_validate(feedback).model_dump(mode="json"),
    }


@router.get("/event/{event_id}")
def list_event_feedback(event_id: int, db: Session = Depends(get_db)):
    rows = db.execute(
        select(Feedback, User.full_name)
        .join(User, User.id == Feedback.user_id)
        .where(Feedback.event_id == event_id)
        .order_by(Feedback.submitted_at.desc(), Feedback.id.desc())
    ).all()

    items = []
    for f, user_name in rows:
        item = FeedbackOut.model_validate(f).model_dump(mode="json")
        item["user_name"] = user_name
        items.append(item)

    return {
        "success": True,
        "feedback": items,
        "summary": summarize_ratings([f.rating for f, _ in rows]),
    }


@router.get("/my")
def my_feedback(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = db.execute(
        select(Feedback, Event.title, Event.event_date, Club.title)
        .join(Event, Event.id == Feedback.event_id)
        .join(Club, Club.id == Event.club_id)
        .where(Feedback.user_id == current_user.id)
        .order_by(Feedback.submitted_at.desc(), Feedback.id.desc())
    ).all()

    items = []
    for f, event_title, event_date, club_title in rows:
        item = FeedbackOut.model_validate(f).model_dump(mode="json")
        item["event_title"] = event_title
        item["event_date"] = event_date.isoformat()
        item["club_title"] = club_title
        items.append(item)

    return {"success": True, "feedback": items}


"""
피드백 수정 API

- 본인 피드백만 (다른 사람 것은 404 로 응답)
- 제출 후 FEEDBACK_EDIT_WINDOW_HOURS 시간이 지나면 403

"""

@router.put("/{feedback_id}")
def update_feedback(
    feedback_id: int,
    data: FeedbackUpdateRequest,
    db: Session = Depends(get_db),
    student: User = Depends(get_current_student),
):
    feedback = db.scalar(
        select(Feedback).where(Feedback.id == feedback_id, Feedback.user_id == student.id)
    )
    if not feedback:
        raise NotFoundError("Feedback not found")

    if not within_edit_window(feedback.submitted_at, hours=settings.FEEDBACK_EDIT_WINDOW_HOURS):
        raise AuthorizationError(
            f"Feedback can only be edited within {settings.FEEDBACK_EDIT_WINDOW_HOURS} hours of submission"
        )

    changes = data.model_dump(exclude_none=True)
    if not changes:
        raise ValidationError("No changes provided")
    for field, value in changes.items():
        setattr(feedback, field, value)

    try:
        db.commit()
        db.refresh(feedback)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Update feedback %s failed", feedback_id)
        raise InternalError("Failed to update feedback")

    return {
        "success": True,
        "message": "Feedback updated successfully",
        "feedback": FeedbackOut.model_validate(feedback).model_dump(mode="json"),
    }
