"""

admin_log.py

관리자(Admin) 행위 기록(Audit Log) 모델 정의 파일.

관리자가 수행한 주요 행위
(공지 승인 / 거절, 동아리 생성, 동아리 회장 지정)를
DB에 영구적으로 기록하기 위한 로그 테이블을 정의한다.

설계 원칙:
- 실제 데이터 변경과 로그 기록을 같은 트랜잭션에서 커밋
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계
- actor(행위자)와 target(대상 리소스 종류 + id)을 명확히 구분

"""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_club.db.base import Base
from campus_club.models.user import utcnow


class AdminAction(str, Enum):
    APPROVE_ANNOUNCEMENT = "APPROVE_ANNOUNCEMENT"
    REJECT_ANNOUNCEMENT = "REJECT_ANNOUNCEMENT"
    CREATE_CLUB = "CREATE_CLUB"
    ASSIGN_CLUB_HEAD = "ASSIGN_CLUB_HEAD"


"""
관리자 행위 로그 모델

- actor_id      : 행위를 수행한 관리자 ID
- action        : 수행된 관리자 행위 유형
- target_type   : 대상 리소스 종류 (announcement / club / user)
- target_id     : 대상 리소스 ID
- before_state  : 변경 전 상태 (예: pending)
- after_state   : 변경 후 상태 (예: approved)
- created_at    : 행위 발생 시각 (UTC)

"""

class AdminActionLog(Base):
    __tablename__ = "admin_action_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    actor_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    action: Mapped[AdminAction] = mapped_column(SAEnum(AdminAction, name="admin_action"), nullable=False)

    target_type: Mapped[str] = mapped_column(String(30), nullable=False)
    target_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    before_state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    after_state: Mapped[str | None] = mapped_column(String(50), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
