from campus_club.models.user import User, Role

from tests.helpers import auth_header, create_user_in_db, fetch, login, setup_club_world


def test_edit_my_profile(client, db):
    user = create_user_in_db(db)
    headers = auth_header(login(client, user.email))

    r = client.patch("/api/users/me", json={"fullName": "새 이름", "year": 3}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["data"]["full_name"] == "새 이름"

    stored = fetch(db, User, user.id)
    assert stored.year == 3
    assert stored.role == Role.STUDENT

    r = client.patch("/api/users/me", json={}, headers=headers)
    assert r.status_code == 400
    assert r.json()["message"] == "No changes provided"


def test_admin_lists_users_by_role(client, db):
    w = setup_club_world(client, db)

    r = client.get("/api/users", params={"role": "clubhead"}, headers=auth_header(w["admin_token"]))
    assert r.status_code == 200
    assert [u["id"] for u in r.json()["data"]] == [w["head"].id]

    r = client.get("/api/users", headers=auth_header(w["student_token"]))
    assert r.status_code == 403


def test_get_user_self_or_admin_only(client, db):
    w = setup_club_world(client, db)
    student_id = w["student"].id

    assert client.get(f"/api/users/{student_id}", headers=auth_header(w["student_token"])).status_code == 200
    assert client.get(f"/api/users/{student_id}", headers=auth_header(w["admin_token"])).status_code == 200

    r = client.get(f"/api/users/{w['admin'].id}", headers=auth_header(w["student_token"]))
    assert r.status_code == 403

    r = client.get("/api/users/999999", headers=auth_header(w["admin_token"]))
    assert r.status_code == 404
