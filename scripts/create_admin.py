"""

ADMIN 초기 계정 생성 스크립트.

- 공개 회원가입으로는 admin 계정을 만들 수 없으므로
  서버 최초 세팅 시 이 스크립트로 관리자 계정을 만든다.
- .env에 정의된 ADMIN_* 환경 변수를 읽어 계정을 생성한다.
- 같은 이메일의 admin 계정이 이미 있으면 생성하지 않고 종료한다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.create_admin

"""

import os
from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select

from campus_club.core.config import settings
from campus_club.core.security import get_password_hash
from campus_club.db.session import Database
from campus_club.models.user import User, Role


def main():
    database = Database(settings.DATABASE_URL).open()
    if settings.AUTO_CREATE_SCHEMA:
        database.create_schema()

    db = database.session()
    try:
        email = os.environ["ADMIN_EMAIL"].strip().lower()
        password = os.environ["ADMIN_PASSWORD"]
        full_name = os.environ.get("ADMIN_NAME", "Administrator")

        existing = db.scalar(select(User).where(User.email == email))
        if existing and existing.role == Role.ADMIN:
            print(f"ADMIN already exists: {email}. Skip creation.")
            return
        if existing:
            raise RuntimeError("Email already exists but is not ADMIN")

        user = User(
            email=email,
            password_hash=get_password_hash(password),
            full_name=full_name,
            role=Role.ADMIN,
        )

        db.add(user)
        db.commit()

        print(f"ADMIN created: {email}")

    finally:
        db.close()
        database.close()


if __name__ == "__main__":
    main()
