"""
clubs.py

동아리(Club) 및 동아리 가입(Membership) API 모음.

주요 기능:
- 동아리 목록 / 상세(소속 행사 포함) 조회
- 동아리 생성 및 회장 지정 (관리자)
- 동아리 정보 수정, 회원 목록 조회, 행사 생성 (해당 동아리 회장)
- 동아리 가입 / 탈퇴, 내 가입 목록 조회 (로그인 사용자)

설계 원칙:
- 중복 가입은 (user_id, club_id) unique 제약 + 단일 INSERT 로 차단
  -> "이미 가입했는지 조회 후 INSERT" 사이의 경쟁 상태 없음
- 동아리 범위 쓰기 작업은 require_club_ownership 으로 보호

관련 파일:
- campus_club.models.club      : Club / ClubMembership
- campus_club.core.deps        : require_club_ownership / get_current_admin

"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_club.core.deps import get_db, get_current_user, get_current_admin, require_club_ownership
from campus_club.core.errors import ConflictError, InternalError, NotFoundError, ValidationError
from campus_club.models.admin_log import AdminAction
from campus_club.models.club import Club, ClubMembership
from campus_club.models.event import Event
from campus_club.models.user import User, Role
from campus_club.schemas.club import AssignHeadRequest, ClubCreateRequest, ClubOut, ClubUpdateRequest
from campus_club.schemas.event import EventCreateRequest, EventOut
from campus_club.services.admin_log import write_admin_log

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clubs", tags=["clubs"])


def get_club_or_404(db: Session, club_id: int) -> Club:
    club = db.get(Club, club_id)
    if not club:
        raise NotFoundError("Club not found")
    return club


@router.get("")
def list_clubs(db: Session = Depends(get_db)):
    clubs = db.scalars(select(Club).order_by(Club.title)).all()
    return {
        "success": True,
        "clubs": [ClubOut.model_validate(c).model_dump(mode="json") for c in clubs],
    }


"""
내 동아리 가입 목록 조회 API

- status=active 인 가입만
- 최근 가입 순

"""

@router.get("/my/memberships")
def my_memberships(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = db.execute(
        select(ClubMembership, Club)
        .join(Club, Club.id == ClubMembership.club_id)
        .where(ClubMembership.user_id == current_user.id, ClubMembership.status == "active")
        .order_by(ClubMembership.joined_at.desc())
    ).all()

    return {
        "success": True,
        "memberships": [
            {
                "id": m.id,
                "club_id": c.id,
                "status": m.status,
                "joined_at": m.joined_at.isoformat(),
                "title": c.title,
                "description": c.description,
                "image_url": c.image_url,
            }
            for m, c in rows
        ],
    }


@router.get("/{club_id}")
def get_club(club_id: int, db: Session = Depends(get_db)):
    club = get_club_or_404(db, club_id)
    events = db.scalars(select(Event).where(Event.club_id == club_id).order_by(Event.event_date)).all()

    data = ClubOut.model_validate(club).model_dump(mode="json")
    data["events"] = [EventOut.model_validate(e).model_dump(mode="json") for e in events]
    return {"success": True, "club": data}


# 동아리 생성 (관리자 전용)
@router.post("", status_code=status.HTTP_201_CREATED)
def create_club(
    data: ClubCreateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    club = Club(
        title=data.title.strip(),
        description=data.description,
        contact=data.contact,
        image_url=data.image_url,
    )
    try:
        db.add(club)
        db.flush()
        write_admin_log(
            db,
            actor_id=admin.id,
            action=AdminAction.CREATE_CLUB,
            target_type="club",
            target_id=club.id,
        )
        db.commit()
        db.refresh(club)
    except IntegrityError:
        db.rollback()
        raise ConflictError("Club with this title already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Create club failed")
        raise InternalError("Failed to create club")

    return {
        "success": True,
        "message": "Club created successfully",
        "club": ClubOut.model_validate(club).model_dump(mode="json"),
    }


# 동아리 정보 수정 (해당 동아리 회장 전용)
@router.put("/{club_id}")
def update_club(
    club_id: int,
    data: ClubUpdateRequest,
    db: Session = Depends(get_db),
    head: User = Depends(require_club_ownership),
):
    club = get_club_or_404(db, club_id)

    changes = data.model_dump(exclude_none=True)
    if not changes:
        raise ValidationError("No changes provided")
    for field, value in changes.items():
        setattr(club, field, value)

    try:
        db.commit()
        db.refresh(club)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Update club %s failed", club_id)
        raise InternalError("Failed to update club")

    return {
        "success": True,
        "message": "Club updated successfully",
        "club": ClubOut.model_validate(club).model_dump(mode="json"),
    }


"""
동아리 회장 지정 API (관리자 전용)

- 대상 사용자는 가입 시 role=clubhead 여야 함
- 이미 다른 동아리 담당이면 담당 동아리가 교체됨

"""

@router.put("/{club_id}/head")
def assign_head(
    club_id: int,
    data: AssignHeadRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    get_club_or_404(db, club_id)

    user = db.get(User, data.user_id)
    if not user:
        raise NotFoundError("User not found")
    if user.role != Role.CLUBHEAD:
        raise ValidationError("User is not a club head")

    before = user.club_id
    try:
        user.club_id = club_id
        write_admin_log(
            db,
            actor_id=admin.id,
            action=AdminAction.ASSIGN_CLUB_HEAD,
            target_type="user",
            target_id=user.id,
            before_state=str(before) if before is not None else None,
            after_state=str(club_id),
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Assign head for club %s failed", club_id)
        raise InternalError("Failed to assign club head")

    return {
        "success": True,
        "message": "Club head assigned",
        "data": {"club_id": club_id, "user_id": user.id},
    }


@router.post("/{club_id}/join")
def join_club(
    club_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_club_or_404(db, club_id)

    try:
        db.add(ClubMembership(user_id=current_user.id, club_id=club_id))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Already a member of this club")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Join club %s failed", club_id)
        raise InternalError("Failed to join club")

    return {"success": True, "message": "Successfully joined the club"}


@router.post("/{club_id}/leave")
def leave_club(
    club_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        result = db.execute(
            delete(ClubMembership).where(
                ClubMembership.user_id == current_user.id,
                ClubMembership.club_id == club_id,
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Leave club %s failed", club_id)
        raise InternalError("Failed to leave club")

    if result.rowcount == 0:
        raise NotFoundError("Not a member of this club")

    return {"success": True, "message": "Successfully left the club"}


# 동아리 회원 목록 (해당 동아리 회장 전용)
@router.get("/{club_id}/members")
def list_members(
    club_id: int,
    db: Session = Depends(get_db),
    head: User = Depends(require_club_ownership),
):
    rows = db.execute(
        select(ClubMembership, User)
        .join(User, User.id == ClubMembership.user_id)
        .where(ClubMembership.club_id == club_id)
        .order_by(ClubMembership.joined_at)
    ).all()

    return {
        "success": True,
        "members": [
            {
                "user_id": u.id,
                "full_name": u.full_name,
                "email": u.email,
                "register_number": u.register_number,
                "status": m.status,
                "joined_at": m.joined_at.isoformat(),
            }
            for m, u in rows
        ],
    }


# 행사 생성 (해당 동아리 회장 전용)
@router.post("/{club_id}/events", status_code=status.HTTP_201_CREATED)
def create_event(
    club_id: int,
    data: EventCreateRequest,
    db: Session = Depends(get_db),
    head: User = Depends(require_club_ownership),
):
    get_club_or_404(db, club_id)

    event = Event(
        club_id=club_id,
        title=data.title,
        description=data.description,
        event_date=data.event_date,
        venue=data.venue,
        created_by=head.id,
    )
    try:
        db.add(event)
        db.commit()
        db.refresh(event)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Create event for club %s failed", club_id)
        raise InternalError("Failed to create event")

    return {
        "success": True,
        "message": "Event created successfully",
        "event": EventOut.model_validate(event).model_dump(mode="json"),
    }
