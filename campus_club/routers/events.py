"""
events.py

행사(Event) 조회 / 수정 / 참가 신청 API 모음.

- 행사 생성은 동아리 범위 작업이라 clubs 라우터(/api/clubs/{club_id}/events)에 있음
- 수정 / 삭제는 행사를 만든 회장 본인만 가능
- 참가 신청 / 취소는 학생만 가능하며, 피드백 작성 자격의 기준이 된다

"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_club.core.deps import get_db, get_current_clubhead, get_current_student
from campus_club.core.errors import ConflictError, InternalError, NotFoundError, ValidationError
from campus_club.models.event import Event, EventRegistration, RegistrationStatus
from campus_club.models.user import User
from campus_club.schemas.event import EventOut, EventUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


def get_event_or_404(db: Session, event_id: int) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event not found")
    return event


@router.get("")
def list_events(club_id: int | None = None, db: Session = Depends(get_db)):
    stmt = select(Event).order_by(Event.event_date)
    if club_id is not None:
        stmt = stmt.where(Event.club_id == club_id)

    events = db.scalars(stmt).all()
    return {
        "success": True,
        "events": [EventOut.model_validate(e).model_dump(mode="json") for e in events],
    }


@router.get("/{event_id}")
def get_event(event_id: int, db: Session = Depends(get_db)):
    event = get_event_or_404(db, event_id)
    return {"success": True, "event": EventOut.model_validate(event).model_dump(mode="json")}


@router.put("/{event_id}")
def update_event(
    event_id: int,
    data: EventUpdateRequest,
    db: Session = Depends(get_db),
    head: User = Depends(get_current_clubhead),
):
    event = db.scalar(select(Event).where(Event.id == event_id, Event.created_by == head.id))
    if not event:
        raise NotFoundError("Event not found or not authorized")

    changes = data.model_dump(exclude_none=True)
    if not changes:
        raise ValidationError("No changes provided")
    for field, value in changes.items():
        setattr(event, field, value)

    try:
        db.commit()
        db.refresh(event)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Update event %s failed", event_id)
        raise InternalError("Failed to update event")

    return {
        "success": True,
        "message": "Event updated successfully",
        "event": EventOut.model_validate(event).model_dump(mode="json"),
    }


@router.delete("/{event_id}")
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    head: User = Depends(get_current_clubhead),
):
    try:
        result = db.execute(
            delete(Event).where(Event.id == event_id, Event.created_by == head.id)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Delete event %s failed", event_id)
        raise InternalError("Failed to delete event")

    if result.rowcount == 0:
        raise NotFoundError("Event not found or not authorized")

    return {"success": True, "message": "Event deleted successfully"}


"""
행사 참가 신청 API (학생 전용)

- 취소했던 신청이 있으면 다시 registered 로 되돌림
- 그 외에는 단일 INSERT, unique 제약 위반 시 409

"""

@router.post("/{event_id}/register", status_code=status.HTTP_201_CREATED)
def register_for_event(
    event_id: int,
    db: Session = Depends(get_db),
    student: User = Depends(get_current_student),
):
    get_event_or_404(db, event_id)

    try:
        reactivated = db.execute(
            update(EventRegistration)
            .where(
                EventRegistration.event_id == event_id,
                EventRegistration.user_id == student.id,
                EventRegistration.status == RegistrationStatus.CANCELLED,
            )
            .values(status=RegistrationStatus.REGISTERED)
        )
        if reactivated.rowcount == 0:
            db.add(EventRegistration(event_id=event_id, user_id=student.id))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Already registered for this event")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Register for event %s failed", event_id)
        raise InternalError("Failed to register for event")

    return {"success": True, "message": "Successfully registered for the event"}


@router.post("/{event_id}/cancel")
def cancel_registration(
    event_id: int,
    db: Session = Depends(get_db),
    student: User = Depends(get_current_student),
):
    try:
        result = db.execute(
            update(EventRegistration)
            .where(
                EventRegistration.event_id == event_id,
                EventRegistration.user_id == student.id,
                EventRegistration.status == RegistrationStatus.REGISTERED,
            )
            .values(status=RegistrationStatus.CANCELLED)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Cancel registration for event %s failed", event_id)
        raise InternalError("Failed to cancel registration")

    if result.rowcount == 0:
        raise NotFoundError("Not registered for this event")

    return {"success": True, "message": "Registration cancelled"}
