"""
services/feedback.py

피드백 관련 순수 계산 로직.

- 수정 가능 시간(제출 후 N시간) 판단
- 행사별 평점 요약 (개수 / 평균, 소수 첫째 자리 반올림, .5 는 올림)

"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP


def _as_utc(value: datetime) -> datetime:
    # SQLite 등 timezone 정보를 보존하지 않는 DB 대비
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def within_edit_window(submitted_at: datetime, *, hours: int, now: datetime | None = None) -> bool:
    now = now or datetime.now(timezone.utc)
    return _as_utc(now) - _as_utc(submitted_at) <= timedelta(hours=hours)


def summarize_ratings(ratings: list[int]) -> dict:
    total = len(ratings)
    average = sum(ratings) / total if total else 0
    return {
        "totalFeedback": total,
        "averageRating": float(Decimal(str(average)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)),
    }
