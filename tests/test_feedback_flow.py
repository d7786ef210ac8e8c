"""
피드백 플로우 통합 테스트.
- 참가 신청하지 않은 행사 → 403, row 생성 안 됨
- 중복 작성 409, 평점 범위 400
- 수정 가능 시간(24h) 검사
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from campus_club.models.feedback import Feedback
from campus_club.models.user import Role
from campus_club.services.feedback import summarize_ratings, within_edit_window

from tests.helpers import (
    auth_header,
    create_event_in_db,
    create_user_in_db,
    fetch,
    login,
    register_student_for_event,
    setup_club_world,
)


def _submit(client, token, event_id, rating=4, comments="좋았어요"):
    return client.post(
        "/api/feedback",
        json={"eventId": event_id, "rating": rating, "comments": comments},
        headers=auth_header(token),
    )


def test_feedback_requires_registration(client, db):
    w = setup_club_world(client, db)
    event = create_event_in_db(db, club=w["club"], creator=w["head"])

    r = _submit(client, w["student_token"], event.id)
    assert r.status_code == 403
    assert r.json()["message"] == "You must be registered for this event to submit feedback"
    assert db.scalar(select(func.count()).select_from(Feedback)) == 0


def test_submit_then_duplicate_is_conflict(client, db):
    w = setup_club_world(client, db)
    event = create_event_in_db(db, club=w["club"], creator=w["head"])
    register_student_for_event(db, event=event, student=w["student"])

    r = _submit(client, w["student_token"], event.id, rating=5)
    assert r.status_code == 201, r.text
    assert r.json()["feedback"]["rating"] == 5

    again = _submit(client, w["student_token"], event.id, rating=1)
    assert again.status_code == 409
    assert again.json()["message"] == "You have already submitted feedback for this event"


def test_feedback_validation_and_unknown_event(client, db):
    w = setup_club_world(client, db)
    event = create_event_in_db(db, club=w["club"], creator=w["head"])
    register_student_for_event(db, event=event, student=w["student"])

    assert _submit(client, w["student_token"], event.id, rating=6).status_code == 400
    assert _submit(client, w["student_token"], event.id, rating=0).status_code == 400
    assert _submit(client, w["student_token"], event.id, comments="x" * 1001).status_code == 400

    r = _submit(client, w["student_token"], 987654)
    assert r.status_code == 404
    assert r.json()["message"] == "Event not found"


def test_clubhead_cannot_submit_feedback(client, db):
    w = setup_club_world(client, db)
    event = create_event_in_db(db, club=w["club"], creator=w["head"])

    r = _submit(client, w["head_token"], event.id)
    assert r.status_code == 403


def test_event_feedback_list_with_summary(client, db):
    w = setup_club_world(client, db)
    event = create_event_in_db(db, club=w["club"], creator=w["head"])

    other = create_user_in_db(db, role=Role.STUDENT, full_name="다른학생")
    register_student_for_event(db, event=event, student=w["student"])
    register_student_for_event(db, event=event, student=other)

    assert _submit(client, w["student_token"], event.id, rating=5).status_code == 201
    assert _submit(client, login(client, other.email), event.id, rating=4).status_code == 201

    r = client.get(f"/api/feedback/event/{event.id}")
    assert r.status_code == 200
    body = r.json()
    assert body["summary"] == {"totalFeedback": 2, "averageRating": 4.5}
    assert {f["user_name"] for f in body["feedback"]} == {"학생", "다른학생"}

    mine = client.get("/api/feedback/my", headers=auth_header(w["student_token"]))
    assert mine.status_code == 200
    items = mine.json()["feedback"]
    assert len(items) == 1
    assert items[0]["event_title"] == event.title
    assert items[0]["club_title"] == w["club"].title


def test_update_feedback_within_window(client, db):
    w = setup_club_world(client, db)
    event = create_event_in_db(db, club=w["club"], creator=w["head"])
    register_student_for_event(db, event=event, student=w["student"])
    feedback_id = _submit(client, w["student_token"], event.id, rating=2).json()["feedback"]["id"]

    r = client.put(
        f"/api/feedback/{feedback_id}",
        json={"rating": 3, "comments": "다시 생각해보니 괜찮음"},
        headers=auth_header(w["student_token"]),
    )
    assert r.status_code == 200, r.text
    assert fetch(db, Feedback, feedback_id).rating == 3

    # 다른 학생은 본인 피드백이 아니므로 404
    other = create_user_in_db(db, role=Role.STUDENT)
    r = client.put(
        f"/api/feedback/{feedback_id}",
        json={"rating": 1},
        headers=auth_header(login(client, other.email)),
    )
    assert r.status_code == 404


def test_update_feedback_after_window_is_forbidden(client, db):
    w = setup_club_world(client, db)
    event = create_event_in_db(db, club=w["club"], creator=w["head"])
    register_student_for_event(db, event=event, student=w["student"])
    feedback_id = _submit(client, w["student_token"], event.id).json()["feedback"]["id"]

    feedback = fetch(db, Feedback, feedback_id)
    feedback.submitted_at = datetime.now(timezone.utc) - timedelta(hours=25)
    db.commit()

    r = client.put(f"/api/feedback/{feedback_id}", json={"rating": 1}, headers=auth_header(w["student_token"]))
    assert r.status_code == 403
    assert r.json()["message"] == "Feedback can only be edited within 24 hours of submission"
    assert fetch(db, Feedback, feedback_id).rating == 4


def test_edit_window_and_summary_helpers():
    now = datetime(2030, 1, 2, 12, 0, tzinfo=timezone.utc)
    assert within_edit_window(now - timedelta(hours=23), hours=24, now=now)
    assert not within_edit_window(now - timedelta(hours=24, seconds=1), hours=24, now=now)
    # naive 값은 UTC 로 간주
    assert within_edit_window(datetime(2030, 1, 2, 1, 0), hours=24, now=now)

    assert summarize_ratings([]) == {"totalFeedback": 0, "averageRating": 0}
    assert summarize_ratings([4, 4, 5]) == {"totalFeedback": 3, "averageRating": 4.3}
    # 4.25 -> 4.3 (half-up)
    assert summarize_ratings([4, 4, 4, 5]) == {"totalFeedback": 4, "averageRating": 4.3}
    assert summarize_ratings([1, 2, 2, 2]) == {"totalFeedback": 4, "averageRating": 1.8}
