# tests/helpers.py
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from campus_club.core.security import get_password_hash
from campus_club.models.club import Club
from campus_club.models.event import Event, EventRegistration
from campus_club.models.user import User, Role

DEFAULT_PASSWORD = "Passw0rd!123"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}@test.com"


def create_user_in_db(
    db: Session,
    *,
    role: Role = Role.STUDENT,
    email: str | None = None,
    password: str = DEFAULT_PASSWORD,
    full_name: str = "테스트유저",
    club_id: int | None = None,
    register_number: str | None = None,
) -> User:
    user = User(
        email=email or unique_email(role.value),
        password_hash=get_password_hash(password),
        role=role,
        full_name=full_name,
        club_id=club_id,
        register_number=register_number,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_club_in_db(db: Session, *, title: str | None = None) -> Club:
    club = Club(
        title=title or f"Club {uuid.uuid4().hex[:6]}",
        description="테스트 동아리",
        contact="club@test.com",
    )
    db.add(club)
    db.commit()
    db.refresh(club)
    return club


def create_event_in_db(db: Session, *, club: Club, creator: User, days_from_now: int = 7) -> Event:
    event = Event(
        club_id=club.id,
        title=f"Event {uuid.uuid4().hex[:6]}",
        description="테스트 행사",
        event_date=datetime.now(timezone.utc) + timedelta(days=days_from_now),
        venue="Main Hall",
        created_by=creator.id,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def register_student_for_event(db: Session, *, event: Event, student: User) -> EventRegistration:
    reg = EventRegistration(event_id=event.id, user_id=student.id)
    db.add(reg)
    db.commit()
    db.refresh(reg)
    return reg


def login(client, identifier: str, password: str = DEFAULT_PASSWORD) -> str:
    r = client.post("/api/auth/login", json={"identifier": identifier, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def fetch(db: Session, model, pk):
    """API 호출 후 DB 상태를 다시 읽을 때 사용 (identity map 캐시 무시)"""
    db.expire_all()
    return db.get(model, pk)


def setup_club_world(client, db: Session) -> dict:
    """
    동아리 1개 + 담당 회장 + 관리자 + 학생, 각각의 토큰 세팅
    """
    club = create_club_in_db(db)
    head = create_user_in_db(db, role=Role.CLUBHEAD, club_id=club.id, full_name="회장")
    admin = create_user_in_db(db, role=Role.ADMIN, full_name="관리자")
    student = create_user_in_db(db, role=Role.STUDENT, full_name="학생")

    return {
        "club": club,
        "head": head,
        "admin": admin,
        "student": student,
        "head_token": login(client, head.email),
        "admin_token": login(client, admin.email),
        "student_token": login(client, student.email),
    }
