"""
동아리 / 가입 플로우 통합 테스트.
- 목록 / 상세(행사 포함)
- 가입 두 번 → 409, 탈퇴, 미가입 탈퇴 → 404
- 관리자 동아리 생성 / 회장 지정, 회장 소유권 가드
"""

from sqlalchemy import func, select

from campus_club.models.club import ClubMembership
from campus_club.models.user import User, Role

from tests.helpers import (
    auth_header,
    create_club_in_db,
    create_event_in_db,
    create_user_in_db,
    fetch,
    login,
    setup_club_world,
)


def test_list_and_get_club_with_events(client, db):
    w = setup_club_world(client, db)
    create_club_in_db(db, title="AAA First")
    event = create_event_in_db(db, club=w["club"], creator=w["head"])

    r = client.get("/api/clubs")
    assert r.status_code == 200
    titles = [c["title"] for c in r.json()["clubs"]]
    assert titles == sorted(titles)

    r = client.get(f"/api/clubs/{w['club'].id}")
    assert r.status_code == 200, r.text
    club = r.json()["club"]
    assert club["id"] == w["club"].id
    assert [e["id"] for e in club["events"]] == [event.id]

    r = client.get("/api/clubs/999999")
    assert r.status_code == 404
    assert r.json()["message"] == "Club not found"


def test_join_twice_is_conflict_and_leave(client, db):
    w = setup_club_world(client, db)
    club_id = w["club"].id
    headers = auth_header(w["student_token"])

    first = client.post(f"/api/clubs/{club_id}/join", headers=headers)
    assert first.status_code == 200, first.text

    second = client.post(f"/api/clubs/{club_id}/join", headers=headers)
    assert second.status_code == 409
    assert second.json()["message"] == "Already a member of this club"

    count = db.scalar(
        select(func.count()).select_from(ClubMembership).where(
            ClubMembership.user_id == w["student"].id, ClubMembership.club_id == club_id
        )
    )
    assert count == 1

    mine = client.get("/api/clubs/my/memberships", headers=headers)
    assert mine.status_code == 200
    assert [m["club_id"] for m in mine.json()["memberships"]] == [club_id]

    leave = client.post(f"/api/clubs/{club_id}/leave", headers=headers)
    assert leave.status_code == 200

    again = client.post(f"/api/clubs/{club_id}/leave", headers=headers)
    assert again.status_code == 404
    assert again.json()["message"] == "Not a member of this club"


def test_join_requires_authentication_and_existing_club(client, db):
    w = setup_club_world(client, db)

    r = client.post(f"/api/clubs/{w['club'].id}/join")
    assert r.status_code == 401

    r = client.post("/api/clubs/999999/join", headers=auth_header(w["student_token"]))
    assert r.status_code == 404


def test_admin_creates_club_and_assigns_head(client, db):
    w = setup_club_world(client, db)
    admin_headers = auth_header(w["admin_token"])

    r = client.post("/api/clubs", json={"title": "Robotics", "description": "로봇"}, headers=admin_headers)
    assert r.status_code == 201, r.text
    club_id = r.json()["club"]["id"]

    dup = client.post("/api/clubs", json={"title": "Robotics"}, headers=admin_headers)
    assert dup.status_code == 409

    forbidden = client.post("/api/clubs", json={"title": "Chess"}, headers=auth_header(w["student_token"]))
    assert forbidden.status_code == 403

    new_head = create_user_in_db(db, role=Role.CLUBHEAD)
    r = client.put(f"/api/clubs/{club_id}/head", json={"userId": new_head.id}, headers=admin_headers)
    assert r.status_code == 200, r.text
    assert fetch(db, User, new_head.id).club_id == club_id

    # student 는 회장으로 지정 불가
    r = client.put(f"/api/clubs/{club_id}/head", json={"userId": w["student"].id}, headers=admin_headers)
    assert r.status_code == 400

    logs = client.get("/api/admin/logs", headers=admin_headers)
    assert logs.status_code == 200
    actions = [log["action"] for log in logs.json()["data"]]
    assert "CREATE_CLUB" in actions
    assert "ASSIGN_CLUB_HEAD" in actions


def test_club_ownership_guard(client, db):
    w = setup_club_world(client, db)
    club_id = w["club"].id
    body = {"description": "새 소개"}

    # 담당 회장
    ok = client.put(f"/api/clubs/{club_id}", json=body, headers=auth_header(w["head_token"]))
    assert ok.status_code == 200, ok.text
    assert ok.json()["club"]["description"] == "새 소개"

    # 다른 동아리 회장
    other_club = create_club_in_db(db)
    other_head = create_user_in_db(db, role=Role.CLUBHEAD, club_id=other_club.id)
    r = client.put(f"/api/clubs/{club_id}", json=body, headers=auth_header(login(client, other_head.email)))
    assert r.status_code == 403
    assert r.json()["message"] == "Not authorized for this club"

    # 학생
    r = client.put(f"/api/clubs/{club_id}", json=body, headers=auth_header(w["student_token"]))
    assert r.status_code == 403
    assert r.json()["message"] == "Club head access required"


def test_head_lists_members_and_creates_event(client, db):
    w = setup_club_world(client, db)
    club_id = w["club"].id
    head_headers = auth_header(w["head_token"])

    client.post(f"/api/clubs/{club_id}/join", headers=auth_header(w["student_token"]))

    members = client.get(f"/api/clubs/{club_id}/members", headers=head_headers)
    assert members.status_code == 200, members.text
    assert [m["user_id"] for m in members.json()["members"]] == [w["student"].id]

    r = client.post(
        f"/api/clubs/{club_id}/events",
        json={"title": "Spring Fair", "eventDate": "2030-04-01T10:00:00+00:00", "venue": "Quad"},
        headers=head_headers,
    )
    assert r.status_code == 201, r.text
    event = r.json()["event"]
    assert event["club_id"] == club_id
    assert event["created_by"] == w["head"].id

    r = client.post(
        f"/api/clubs/{club_id}/events",
        json={"title": "Nope", "eventDate": "2030-04-01T10:00:00+00:00"},
        headers=auth_header(w["student_token"]),
    )
    assert r.status_code == 403
