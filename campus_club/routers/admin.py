"""
admin.py

관리자 전용 조회 API 모음.

주요 기능:
- 승인 대기 공지 목록 (오래된 순, 동아리명 포함)
- 관리자 활동 로그 조회 (최신 순, limit 1~200)

설계 원칙:
- 상태를 바꾸는 관리자 작업(공지 승인/거절, 동아리 생성, 회장 지정)은
  각 리소스 라우터에 있고, 여기서는 조회만 한다

관련 파일:
- campus_club.routers.announcements : 공지 승인 / 거절
- campus_club.services.admin_log    : 관리자 로그 기록

"""

from fastapi import APIRouter, Depends
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from campus_club.core.deps import get_db, get_current_admin
from campus_club.models.admin_log import AdminActionLog
from campus_club.models.announcement import Announcement, AnnouncementStatus
from campus_club.models.club import Club
from campus_club.models.user import User
from campus_club.schemas.announcement import AnnouncementOut

router = APIRouter(prefix="/api/admin", tags=["admin"])


# 승인 대기 중인 공지 목록 (오래된 순)
@router.get("/announcements/pending")
def list_pending_announcements(
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    rows = db.execute(
        select(Announcement, Club.title)
        .join(Club, Club.id == Announcement.club_id)
        .where(Announcement.status == AnnouncementStatus.PENDING)
        .order_by(Announcement.created_at, Announcement.id)
    ).all()

    data = []
    for a, club_title in rows:
        item = AnnouncementOut.model_validate(a).model_dump(mode="json")
        item["club_title"] = club_title
        data.append(item)

    return {"success": True, "data": data}


# 관리자 활동 로그 조회
@router.get("/logs")
def list_admin_logs(
    limit: int = 50,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    limit = max(1, min(limit, 200))

    rows = db.execute(
        select(AdminActionLog, User)
        .join(User, User.id == AdminActionLog.actor_id)
        .order_by(desc(AdminActionLog.created_at), desc(AdminActionLog.id))
        .limit(limit)
    ).all()

    result = []
    for log, actor in rows:
        result.append(
            {
                "id": log.id,
                "created_at": log.created_at.isoformat(),
                "action": log.action.value,
                "target_type": log.target_type,
                "target_id": log.target_id,
                "before_state": log.before_state,
                "after_state": log.after_state,
                "actor": {
                    "id": actor.id,
                    "email": actor.email,
                    "full_name": actor.full_name,
                },
            }
        )
    return {
        "success": True,
        "data": result,
        "meta": {
            "limit": limit,
            "count": len(result),
        },
    }
