"""
services/admin_log.py

관리자 행위 로그 기록 서비스.

관리자(Admin)가 수행한 주요 행위를
AdminActionLog 테이블에 기록하는 역할을 담당한다.

NOTE:
- db.commit()은 호출 측(라우터/서비스)에서 수행
  -> 실제 변경과 로그가 같은 트랜잭션으로 커밋된다

"""

from sqlalchemy.orm import Session

from campus_club.models.admin_log import AdminActionLog, AdminAction


def write_admin_log(
    db: Session,
    *,
    actor_id: int,
    action: AdminAction,
    target_type: str,
    target_id: int | None = None,
    before_state: str | None = None,
    after_state: str | None = None,
) -> AdminActionLog:
    log = AdminActionLog(
        actor_id=actor_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        before_state=before_state,
        after_state=after_state,
    )
    db.add(log)
    return log
