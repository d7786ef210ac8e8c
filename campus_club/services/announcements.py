"""
services/announcements.py

공지(Announcement) 승인 워크플로우.

상태 전이:
  pending -> approved
  pending -> rejected
approved / rejected 는 종료 상태이며 다시 전이할 수 없다.

설계 원칙:
- HTTP / FastAPI 의존성 없음 (실패는 도메인 예외로 표현)
- 전이는 "WHERE status = 'pending'" 조건부 UPDATE 한 번으로 수행
  -> 동시에 두 관리자가 처리해도 한 명만 성공
- 트랜잭션 커밋은 라우터에서 수행

관련 파일:
- campus_club.models.announcement : Announcement / AnnouncementStatus
- campus_club.routers.announcements : 승인 / 거절 API

"""

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from campus_club.models.announcement import Announcement, AnnouncementStatus
from campus_club.models.admin_log import AdminAction
from campus_club.models.user import utcnow
from campus_club.services.admin_log import write_admin_log

logger = logging.getLogger(__name__)


class AnnouncementNotFound(LookupError):
    pass


class InvalidTransition(ValueError):
    def __init__(self, current: AnnouncementStatus):
        self.current = current
        super().__init__(f"Announcement already {current.value}")


_ACTIONS = {
    AnnouncementStatus.APPROVED: AdminAction.APPROVE_ANNOUNCEMENT,
    AnnouncementStatus.REJECTED: AdminAction.REJECT_ANNOUNCEMENT,
}


def review_announcement(
    db: Session,
    *,
    announcement_id: int,
    admin_id: int,
    decision: AnnouncementStatus,
    feedback: str | None = None,
) -> Announcement:
    if decision not in _ACTIONS:
        raise ValueError(f"cannot transition to {decision.value}")

    result = db.execute(
        update(Announcement)
        .where(
            Announcement.id == announcement_id,
            Announcement.status == AnnouncementStatus.PENDING,
        )
        .values(
            status=decision,
            approved_by=admin_id,
            feedback=feedback,
            updated_at=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )

    if result.rowcount == 0:
        # 없는 공지인지, 이미 처리된 공지인지 구분
        current = db.scalar(select(Announcement.status).where(Announcement.id == announcement_id))
        if current is None:
            raise AnnouncementNotFound(announcement_id)
        raise InvalidTransition(current)

    write_admin_log(
        db,
        actor_id=admin_id,
        action=_ACTIONS[decision],
        target_type="announcement",
        target_id=announcement_id,
        before_state=AnnouncementStatus.PENDING.value,
        after_state=decision.value,
    )
    db.flush()

    announcement = db.get(Announcement, announcement_id, populate_existing=True)
    logger.info("Announcement %s %s by admin %s", announcement_id, decision.value, admin_id)
    return announcement
