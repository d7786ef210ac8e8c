"""
announcements.py

동아리 공지(Announcement) API 모음.

주요 기능:
- 공지 목록 / 상세 / 동아리별 조회 (동아리명, 작성자 이름 포함)
- 공지 작성 / 수정 / 삭제 (작성한 동아리 회장 본인)
- 공지 승인 / 거절 (관리자)

승인 워크플로우:
- 작성 직후 status=pending, approved_by=None
- 관리자만 pending -> approved | rejected 전이 가능
- 이미 처리된 공지를 다시 승인/거절하면 409

설계 원칙:
- 작성 요청은 multipart/form-data (포스터 이미지 선택)
- 커밋 실패 / 포스터 교체 / 공지 삭제 시 쓰지 않는 포스터 파일 삭제
- 공지 내용 수정은 승인 상태를 바꾸지 않음
- 상태 전이 로직은 campus_club.services.announcements 에 위임

관련 파일:
- campus_club.services.announcements : 승인 / 거절 전이
- campus_club.services.uploads       : 포스터 저장

"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from campus_club.core.config import settings
from campus_club.core.deps import get_db, get_current_admin, get_current_clubhead, ensure_club_owner
from campus_club.core.errors import ConflictError, InternalError, NotFoundError, ValidationError
from campus_club.models.announcement import Announcement, AnnouncementStatus
from campus_club.models.club import Club
from campus_club.models.user import User
from campus_club.schemas.announcement import AnnouncementOut, ReviewRequest
from campus_club.services.announcements import AnnouncementNotFound, InvalidTransition, review_announcement
from campus_club.services.uploads import UploadRejected, discard_poster, save_poster

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/announcements", tags=["announcements"])


def _with_names(stmt):
    Creator = aliased(User)
    return (
        stmt.add_columns(Club.title, Creator.full_name)
        .join(Club, Club.id == Announcement.club_id)
        .join(Creator, Creator.id == Announcement.created_by)
    )


def _serialize(announcement: Announcement, club_title: str | None = None, creator_name: str | None = None) -> dict:
    data = AnnouncementOut.model_validate(announcement).model_dump(mode="json")
    if club_title is not None:
        data["club_title"] = club_title
    if creator_name is not None:
        data["creator_name"] = creator_name
    return data


def _store_poster(poster: UploadFile | None) -> str | None:
    if poster is None or not poster.filename:
        return None
    try:
        return save_poster(poster, upload_dir=settings.UPLOAD_DIR, max_size=settings.MAX_FILE_SIZE)
    except UploadRejected as e:
        raise ValidationError(str(e))


def _drop_poster(poster_url: str | None) -> None:
    discard_poster(poster_url, upload_dir=settings.UPLOAD_DIR)


@router.get("")
def list_announcements(status: AnnouncementStatus | None = None, db: Session = Depends(get_db)):
    stmt = _with_names(select(Announcement)).order_by(Announcement.created_at.desc(), Announcement.id.desc())
    if status is not None:
        stmt = stmt.where(Announcement.status == status)

    rows = db.execute(stmt).all()
    return {
        "success": True,
        "announcements": [_serialize(a, club_title, creator) for a, club_title, creator in rows],
    }


@router.get("/club/{club_id}")
def list_club_announcements(club_id: int, db: Session = Depends(get_db)):
    rows = db.execute(
        _with_names(select(Announcement))
        .where(Announcement.club_id == club_id)
        .order_by(Announcement.created_at.desc(), Announcement.id.desc())
    ).all()
    return {
        "success": True,
        "announcements": [_serialize(a, club_title, creator) for a, club_title, creator in rows],
    }


@router.get("/{announcement_id}")
def get_announcement(announcement_id: int, db: Session = Depends(get_db)):
    row = db.execute(
        _with_names(select(Announcement)).where(Announcement.id == announcement_id)
    ).first()
    if row is None:
        raise NotFoundError("Announcement not found")

    announcement, club_title, creator = row
    return {"success": True, "announcement": _serialize(announcement, club_title, creator)}


"""
공지 작성 API (동아리 회장 전용)

- clubId 는 본인이 담당하는 동아리여야 함
- poster 이미지는 선택, 저장 후 /uploads/... URL 로 기록
- 초기 상태는 pending

"""

@router.post("", status_code=status.HTTP_201_CREATED)
def create_announcement(
    title: str = Form(..., min_length=1, max_length=200),
    description: str | None = Form(None),
    date: datetime | None = Form(None),
    club_id: int = Form(..., alias="clubId"),
    poster: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    head: User = Depends(get_current_clubhead),
):
    ensure_club_owner(head, club_id, detail="Not authorized to create announcements for this club")

    poster_url = _store_poster(poster)

    announcement = Announcement(
        title=title,
        description=description,
        announcement_date=date,
        club_id=club_id,
        poster_url=poster_url,
        created_by=head.id,
        status=AnnouncementStatus.PENDING,
    )
    try:
        db.add(announcement)
        db.commit()
        db.refresh(announcement)
    except SQLAlchemyError:
        db.rollback()
        _drop_poster(poster_url)
        logger.exception("Create announcement failed for club %s", club_id)
        raise InternalError("Failed to create announcement")

    return {
        "success": True,
        "message": "Announcement created successfully",
        "announcement": _serialize(announcement),
    }


# 공지 수정 (작성자 본인) - 새 포스터가 없으면 기존 포스터 유지
@router.put("/{announcement_id}")
def update_announcement(
    announcement_id: int,
    title: str | None = Form(None, min_length=1, max_length=200),
    description: str | None = Form(None),
    date: datetime | None = Form(None),
    poster: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    head: User = Depends(get_current_clubhead),
):
    announcement = db.scalar(
        select(Announcement).where(
            Announcement.id == announcement_id,
            Announcement.created_by == head.id,
        )
    )
    if not announcement:
        raise NotFoundError("Announcement not found or not authorized")

    poster_url = _store_poster(poster)
    old_poster_url = announcement.poster_url

    if title is not None:
        announcement.title = title
    if description is not None:
        announcement.description = description
    if date is not None:
        announcement.announcement_date = date
    if poster_url is not None:
        announcement.poster_url = poster_url

    try:
        db.commit()
        db.refresh(announcement)
    except SQLAlchemyError:
        db.rollback()
        _drop_poster(poster_url)
        logger.exception("Update announcement %s failed", announcement_id)
        raise InternalError("Failed to update announcement")

    # 새 포스터로 교체된 경우 이전 파일 정리
    if poster_url is not None:
        _drop_poster(old_poster_url)

    return {
        "success": True,
        "message": "Announcement updated successfully",
        "announcement": _serialize(announcement),
    }


@router.delete("/{announcement_id}")
def delete_announcement(
    announcement_id: int,
    db: Session = Depends(get_db),
    head: User = Depends(get_current_clubhead),
):
    owned = (
        Announcement.id == announcement_id,
        Announcement.created_by == head.id,
    )
    poster_url = db.scalar(select(Announcement.poster_url).where(*owned))

    try:
        result = db.execute(delete(Announcement).where(*owned))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Delete announcement %s failed", announcement_id)
        raise InternalError("Failed to delete announcement")

    if result.rowcount == 0:
        raise NotFoundError("Announcement not found or not authorized")

    _drop_poster(poster_url)

    return {"success": True, "message": "Announcement deleted successfully"}


def _review(
    db: Session,
    *,
    announcement_id: int,
    admin: User,
    decision: AnnouncementStatus,
    data: ReviewRequest | None,
) -> Announcement:
    try:
        announcement = review_announcement(
            db,
            announcement_id=announcement_id,
            admin_id=admin.id,
            decision=decision,
            feedback=data.feedback if data else None,
        )
        db.commit()
    except AnnouncementNotFound:
        db.rollback()
        raise NotFoundError("Announcement not found")
    except InvalidTransition as e:
        db.rollback()
        raise ConflictError(str(e))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Review announcement %s failed", announcement_id)
        raise InternalError("Failed to review announcement")

    db.refresh(announcement)
    return announcement


@router.put("/{announcement_id}/approve")
def approve_announcement(
    announcement_id: int,
    data: ReviewRequest | None = None,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    announcement = _review(
        db, announcement_id=announcement_id, admin=admin, decision=AnnouncementStatus.APPROVED, data=data
    )
    return {
        "success": True,
        "message": "Announcement approved successfully",
        "announcement": _serialize(announcement),
    }


@router.put("/{announcement_id}/reject")
def reject_announcement(
    announcement_id: int,
    data: ReviewRequest | None = None,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    announcement = _review(
        db, announcement_id=announcement_id, admin=admin, decision=AnnouncementStatus.REJECTED, data=data
    )
    return {
        "success": True,
        "message": "Announcement rejected",
        "announcement": _serialize(announcement),
    }
