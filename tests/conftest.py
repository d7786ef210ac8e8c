import os
import tempfile

# settings 로드 전에 테스트용 기본값 주입 (.env 보다 환경 변수가 우선)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="campus_club_uploads_"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from campus_club.core.config import settings
from campus_club.db.base import Base
from campus_club.db.session import Database
from campus_club.main import create_app

# ✅ 모델 import (Base.metadata에 테이블 등록)
import campus_club.models  # noqa: F401


TEST_DB_URL = settings.TEST_DATABASE_URL or "sqlite://"

if TEST_DB_URL.startswith("sqlite"):
    # in-memory SQLite 는 커넥션 하나를 모든 스레드가 공유해야 같은 DB를 본다
    test_database = Database(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
else:
    test_database = Database(TEST_DB_URL)

test_database.open()
fastapi_app = create_app(test_database)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """테스트 전체 시작/종료 때만 스키마 생성/삭제"""
    Base.metadata.drop_all(bind=test_database.engine)
    Base.metadata.create_all(bind=test_database.engine)
    yield
    Base.metadata.drop_all(bind=test_database.engine)
    test_database.close()


@pytest.fixture(autouse=True)
def clean_tables():
    """각 테스트마다 데이터 초기화 (테이블은 유지, row만 삭제)"""
    with test_database.engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def db():
    """테스트에서 직접 DB 조작할 때 쓰는 세션"""
    session = test_database.session()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def client():
    with TestClient(fastapi_app) as c:
        yield c
